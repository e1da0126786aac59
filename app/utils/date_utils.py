# Copyright (c) 2025 Shiladitya Mallick
# This file is part of the MindTrack - Check-in & CBT Companion project.
# Licensed under the MIT License - see the LICENSE file for details.

import os
from datetime import date, datetime
from typing import Union
from pytz import timezone, utc, UnknownTimeZoneError

# 🕛 Single day boundary for "today", streaks and journal dates
APP_TIMEZONE = os.getenv("APP_TIMEZONE", "UTC")

try:
    app_tz = timezone(APP_TIMEZONE)
except UnknownTimeZoneError as e:
    raise ValueError(f"APP_TIMEZONE '{APP_TIMEZONE}' is not a valid timezone name.") from e


def now_local() -> datetime:
    return datetime.now(app_tz)


def today_local() -> date:
    return now_local().date()


def to_local_date(value: Union[date, datetime, str]) -> date:
    """
    Reduces a stored or submitted value to its calendar date in APP_TIMEZONE.
    Naive datetimes are taken as UTC (that's how the DB stores them).
    """
    if isinstance(value, str):
        if len(value) == 10:
            return date.fromisoformat(value)
        value = datetime.fromisoformat(value.replace("Z", "+00:00"))

    if isinstance(value, datetime):
        if value.tzinfo is None:
            value = utc.localize(value)
        return value.astimezone(app_tz).date()

    if isinstance(value, date):
        return value

    raise ValueError(f"Unsupported date value: {value!r}")
