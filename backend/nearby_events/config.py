from __future__ import annotations

import logging
import os
from datetime import timedelta

EVENTS_API_URL = os.getenv("NEARBY_EVENTS_API_URL", "https://api.wordpress.org/events/1.0/")
REQUEST_TIMEOUT = float(os.getenv("NEARBY_EVENTS_TIMEOUT", "10"))
DEFAULT_LOCALE = os.getenv("NEARBY_EVENTS_LOCALE", "en_US")
DEFAULT_DISPLAY_TZ = os.getenv("NEARBY_EVENTS_DISPLAY_TZ", "UTC")
LOG_LEVEL = os.getenv("NEARBY_EVENTS_LOG_LEVEL", "INFO")

# More than EVENTS_SHOWN so a few stale meetups can be trimmed without leaving gaps
EVENTS_REQUESTED = 5
EVENTS_SHOWN = 3
MEETUP_STALE_AFTER = timedelta(hours=24)
DEFAULT_CACHE_TTL = int(timedelta(hours=12).total_seconds())
CACHE_KEY_PREFIX = "nearby-events-"

# CLDR format names, resolved per locale by babel
DATE_FORMAT = "full"
TIME_FORMAT = "short"

LOG_FORMAT = "%(asctime)s %(levelname)s [%(name)s] %(message)s"


def configure_logging(level: str | None = None) -> None:
    logging.basicConfig(level=(level or LOG_LEVEL).upper(), format=LOG_FORMAT)
