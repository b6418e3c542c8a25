from __future__ import annotations

import logging
from typing import Optional

from scrapy.utils.log import configure_logging

LOG_FORMAT = "%(asctime)s [%(name)s] %(levelname)s: %(message)s"


def setup_logging(level: str = "INFO", logfile: Optional[str] = None) -> None:
    """Install the root log handler through scrapy's logging helpers.

    Uses the same settings keys as a spider's ``custom_settings`` so output
    looks the same whether the parser runs standalone or inside a crawl.
    """
    settings: dict[str, object] = {
        "LOG_LEVEL": level.upper(),
        "LOG_FORMAT": LOG_FORMAT,
        "LOG_ENABLED": True,
    }
    if logfile:
        settings["LOG_FILE"] = logfile
    configure_logging(settings, install_root_handler=True)
    logging.getLogger("tori_scrape").setLevel(level.upper())
