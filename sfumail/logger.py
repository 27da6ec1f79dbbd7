"""
Logging setup and the timezone options shared with the email timestamps
"""

import logging
import os
from dataclasses import dataclass
from datetime import timezone, tzinfo
from typing import Optional
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from .config import DEFAULT_LOG_TIMEZONE

logger = logging.getLogger(__name__)


def setup_logging(level: str = "INFO") -> None:
    """Configure root logging for a host process (library code never calls this)"""
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.INFO),
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )


@dataclass(frozen=True)
class TzOptions:
    time_zone: str = DEFAULT_LOG_TIMEZONE

    @property
    def tzinfo(self) -> tzinfo:
        try:
            return ZoneInfo(self.time_zone)
        except (ZoneInfoNotFoundError, ValueError):
            logger.warning(f"⚠️ Unknown time zone {self.time_zone!r}, falling back to UTC")
            return timezone.utc


def get_tz_options(time_zone: Optional[str] = None) -> TzOptions:
    return TzOptions(time_zone=time_zone or os.getenv("LOG_TIMEZONE") or DEFAULT_LOG_TIMEZONE)
