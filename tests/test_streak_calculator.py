"""Tests for the check-in streak calculation."""

from datetime import date, timedelta

from app.services.streak_calculator import CheckinStats, compute_checkin_stats

TODAY = date(2026, 3, 15)


def days_ago(n):
    return TODAY - timedelta(days=n)


class TestCheckinStats:
    def test_no_checkins(self):
        assert compute_checkin_stats([], TODAY) == CheckinStats(0, 0)

    def test_single_checkin_today(self):
        assert compute_checkin_stats([TODAY], TODAY) == CheckinStats(1, 1)

    def test_single_checkin_yesterday_keeps_streak(self):
        assert compute_checkin_stats([days_ago(1)], TODAY) == CheckinStats(1, 1)

    def test_single_checkin_two_days_ago_breaks_streak(self):
        assert compute_checkin_stats([days_ago(2)], TODAY) == CheckinStats(1, 0)

    def test_consecutive_days_ending_today(self):
        history = [days_ago(n) for n in range(7)]
        assert compute_checkin_stats(history, TODAY) == CheckinStats(7, 7)

    def test_gap_stops_the_walk(self):
        history = [TODAY, days_ago(1), days_ago(2), days_ago(5)]
        stats = compute_checkin_stats(history, TODAY)
        assert stats.total_checkins == 4
        assert stats.current_streak == 3

    def test_input_order_does_not_matter(self):
        history = [days_ago(5), days_ago(1), TODAY, days_ago(2)]
        assert compute_checkin_stats(history, TODAY) == CheckinStats(4, 3)

    def test_stale_history_has_zero_streak(self):
        history = [days_ago(n) for n in range(3, 10)]
        stats = compute_checkin_stats(history, TODAY)
        assert stats.total_checkins == 7
        assert stats.current_streak == 0

    def test_same_day_duplicates_do_not_truncate_streak(self):
        history = [TODAY, TODAY, days_ago(1), days_ago(2)]
        stats = compute_checkin_stats(history, TODAY)
        assert stats.total_checkins == 4
        assert stats.current_streak == 3

    def test_streak_from_yesterday_counts_back(self):
        history = [days_ago(1), days_ago(2), days_ago(3)]
        assert compute_checkin_stats(history, TODAY).current_streak == 3

    def test_accepts_generator(self):
        stats = compute_checkin_stats((days_ago(n) for n in range(2)), TODAY)
        assert stats == CheckinStats(2, 2)
