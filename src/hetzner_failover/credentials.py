"""Robot webservice credentials.

Loads login and password from a properties file. The per-user file is
tried first, then the system-wide one:

    $HOME/.hetzner.rc
    /etc/hetzner-api.conf

Example file:
    login = "#ws+abcdef"
    password = 'secret'
    failover_ip = 198.51.100.5
    local_ip = 203.0.113.1
"""

import logging
from collections.abc import Iterable
from dataclasses import dataclass, field
from pathlib import Path

from hetzner_failover.errors import CredentialsError

logger = logging.getLogger(__name__)

QUOTE_CHARS = ("'", '"')
COMMENT_PREFIXES = ("#", "!")

# Optional keys accept both spellings
FAILOVER_IP_KEYS = ("failover_ip", "failover-ip")
LOCAL_IP_KEYS = ("local_ip", "local-ip")


@dataclass
class Credentials:
    """Credentials for Robot webservice access."""

    login: str
    password: str = field(repr=False)
    failover_ip: str | None = None
    local_ip: str | None = None


def unquote(value: str) -> str:
    """Strip one pair of matching quotes around a value.

    Only the first and last characters are looked at; there is no escape
    processing. A value with a leading quote but no matching trailing
    quote is returned whole, not with its first and last characters cut.

    Example:
        >>> unquote("'secret'")
        'secret'
        >>> unquote("'")
        "'"
    """
    if len(value) > 1 and value[0] in QUOTE_CHARS and value[-1] == value[0]:
        return value[1:-1]
    return value


def parse_properties(text: str) -> dict[str, str]:
    """Parse ``key = value`` lines into a dict.

    ``:`` is accepted as separator too. Blank lines and lines starting
    with ``#`` or ``!`` are skipped, as are lines without a separator.
    """
    properties: dict[str, str] = {}
    for line in text.splitlines():
        line = line.strip()
        if not line or line.startswith(COMMENT_PREFIXES):
            continue

        positions = [pos for pos in (line.find("="), line.find(":")) if pos > 0]
        if not positions:
            continue
        sep = min(positions)

        key = line[:sep].strip()
        value = line[sep + 1 :].strip()
        properties[key] = unquote(value)
    return properties


def load_properties(path: Path) -> dict[str, str]:
    """Read and parse a properties file.

    Raises:
        OSError: If the file is missing or unreadable
        UnicodeDecodeError: If the file is not valid UTF-8
    """
    with open(path, encoding="utf-8") as f:
        return parse_properties(f.read())


def _first(properties: dict[str, str], keys: tuple[str, ...]) -> str | None:
    for key in keys:
        if properties.get(key):
            return properties[key]
    return None


def load_credentials(paths: Iterable[Path]) -> Credentials:
    """Load credentials from the first usable file.

    A file is skipped when it is missing, unreadable, or lacks
    ``login``/``password``.

    Args:
        paths: Candidate files in lookup order

    Returns:
        Credentials from the first usable file

    Raises:
        CredentialsError: If no file yields credentials
    """
    tried: list[str] = []
    for path in paths:
        path = Path(path)
        tried.append(str(path))
        try:
            properties = load_properties(path)
        except (OSError, UnicodeDecodeError) as e:
            logger.debug("Skipping credentials file %s: %s", path, e)
            continue

        login = properties.get("login")
        password = properties.get("password")
        if not login or not password:
            logger.debug("Skipping credentials file %s: login or password missing", path)
            continue

        logger.debug("Using credentials file %s", path)
        return Credentials(
            login=login,
            password=password,
            failover_ip=_first(properties, FAILOVER_IP_KEYS),
            local_ip=_first(properties, LOCAL_IP_KEYS),
        )

    raise CredentialsError("No credentials found", {"tried": tried})
