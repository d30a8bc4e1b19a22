"""
⚙️ SETTINGS
===========
Knobs that change between deployments. Each one can be overridden with an
environment variable, otherwise the default below is used.
"""

import os
from pathlib import Path
from typing import Optional


# Placeholder teacher. Never counted as a double-booking.
SENTINEL_TEACHER = os.environ.get("TIMETABLE_SENTINEL_TEACHER", "未定")

# Exported files are named f"{EXPORT_PREFIX}{YYYY-MM-DD}.json"
EXPORT_PREFIX = os.environ.get("TIMETABLE_EXPORT_PREFIX", "schedule_v3_")

# "lenient" keeps loaded records as they are, "strict" clears teachers
# that are not eligible for the record's subject.
LOAD_MODE = os.environ.get("TIMETABLE_LOAD_MODE", "lenient").strip().lower()

LOG_LEVEL = os.environ.get("TIMETABLE_LOG_LEVEL", "INFO").strip().upper()


def log_file() -> Optional[Path]:
    """Optional log file path. Unset means console only."""
    raw = os.environ.get("TIMETABLE_LOG_FILE", "").strip()
    return Path(raw) if raw else None
