from __future__ import annotations

import os
from dataclasses import dataclass
from typing import Optional

DEFAULT_TIMEZONE = "Europe/Helsinki"


@dataclass
class Settings:
    """Defaults for the command-line driver.

    The parser itself never reads the environment; the CLI builds a
    ``Settings`` with :meth:`from_env` and passes the values explicitly.
    """

    timezone: str = DEFAULT_TIMEZONE
    locale: str = "fi"
    encoding: str = "utf-8"
    base_url: Optional[str] = None
    log_level: str = "WARNING"

    @classmethod
    def from_env(cls) -> "Settings":
        return cls(
            timezone=os.environ.get("TORI_TIMEZONE") or DEFAULT_TIMEZONE,
            locale=os.environ.get("TORI_LOCALE") or "fi",
            encoding=os.environ.get("TORI_ENCODING") or "utf-8",
            base_url=os.environ.get("TORI_BASE_URL") or None,
            log_level=os.environ.get("TORI_LOG_LEVEL") or "WARNING",
        )
