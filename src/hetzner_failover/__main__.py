from hetzner_failover.cli import main

main(prog_name="hetzner-failover")
