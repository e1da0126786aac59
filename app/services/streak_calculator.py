# Copyright (c) 2025 Shiladitya Mallick
# This file is part of the MindTrack - Check-in & CBT Companion project.
# Licensed under the MIT License - see the LICENSE file for details.

from datetime import date
from typing import Iterable, NamedTuple


class CheckinStats(NamedTuple):
    total_checkins: int
    current_streak: int


def compute_checkin_stats(dates: Iterable[date], today: date) -> CheckinStats:
    """
    Total check-ins plus the run of consecutive calendar days ending today or
    yesterday. Dates must already be calendar dates in the app timezone.

    Several check-ins on one day count once towards the streak (but every
    record counts towards the total).
    """
    dates = list(dates)
    total = len(dates)
    if total == 0:
        return CheckinStats(0, 0)

    # Newest first; duplicates collapse to one day
    days = sorted(set(dates), reverse=True)

    if (today - days[0]).days > 1:
        # Missed both today and yesterday
        return CheckinStats(total, 0)

    streak = 1
    for prev_day, day in zip(days, days[1:]):
        if (prev_day - day).days != 1:
            break
        streak += 1

    return CheckinStats(total, streak)
