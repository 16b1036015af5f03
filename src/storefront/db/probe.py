"""Raw connectivity queries.

Used by the diagnostics routes. Errors from the driver are not caught
here; callers decide how a failed probe is reported.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime

from sqlalchemy import text
from sqlalchemy.orm import Session

SERVER_CLOCK_QUERY = text("SELECT CURRENT_TIMESTAMP AS now")
PING_QUERY = text("SELECT 1")


@dataclass
class ServerClock:
    """Result of the server clock probe."""

    now: str
    dialect: str
    server_version: str | None

    def to_dict(self) -> dict[str, str | None]:
        return {
            "now": self.now,
            "dialect": self.dialect,
            "server_version": self.server_version,
        }


def _format_version(info: tuple | None) -> str | None:
    if not info:
        return None
    return ".".join(str(part) for part in info)


def fetch_server_clock(session: Session) -> ServerClock:
    """Read the database server's current timestamp.

    Args:
        session: Database session.

    Returns:
        ServerClock with the timestamp, dialect name and server version.
    """
    now = session.execute(SERVER_CLOCK_QUERY).scalar_one()
    dialect = session.get_bind().dialect
    return ServerClock(
        now=now.isoformat() if isinstance(now, datetime) else str(now),
        dialect=dialect.name,
        server_version=_format_version(dialect.server_version_info),
    )


def ping(session: Session) -> None:
    """Run a trivial query; raises if the database is unreachable."""
    session.execute(PING_QUERY).scalar_one()
