"""Tests for streaks, points and history totals."""

from datetime import datetime, timedelta

import pytest

from circuit_crew.models.people import Person
from circuit_crew.models.session import DEFAULT_SESSION_SETTINGS, Session
from circuit_crew.services.streaks import (
    build_leaderboard,
    calculate_person_stats,
    summarize_history,
)

DAY0 = datetime(2024, 1, 1, 7, 0)


def session_on(day, participants=("p1",), completed=True, meters=10.0, work_kj=1.0):
    return Session(
        id=f"s{day}-{'-'.join(participants)}",
        date=DAY0 + timedelta(days=day),
        participants=tuple(participants),
        participant_names=tuple(participants),
        exercises=(),
        settings=DEFAULT_SESSION_SETTINGS,
        completed=completed,
        total_meters=meters,
        total_work_kj=work_kj,
    )


class TestCalculatePersonStats:
    """Tests for calculate_person_stats."""

    def test_no_sessions(self):
        stats = calculate_person_stats("p1", "Alex", [])
        assert stats.total_sessions == 0
        assert stats.total_points == 0
        assert stats.last_session_date is None

    def test_gap_breaks_streak(self):
        """Test sessions on days 0, 3 and 12 with a seven day gap."""
        sessions = [session_on(0), session_on(3), session_on(12)]
        stats = calculate_person_stats("p1", "Alex", sessions, now=DAY0 + timedelta(days=12))

        assert stats.total_sessions == 3
        assert stats.longest_streak == 2
        assert stats.current_streak == 1
        assert stats.total_points == 10 * 3 + 5
        assert stats.last_session_date == DAY0 + timedelta(days=12)

    def test_order_does_not_matter(self):
        sessions = [session_on(12), session_on(0), session_on(3)]
        stats = calculate_person_stats("p1", "Alex", sessions, now=DAY0 + timedelta(days=12))
        assert stats.longest_streak == 2

    def test_current_streak_lapses(self):
        sessions = [session_on(0), session_on(2)]

        active = calculate_person_stats("p1", "Alex", sessions, now=DAY0 + timedelta(days=9))
        lapsed = calculate_person_stats("p1", "Alex", sessions, now=DAY0 + timedelta(days=10))

        assert active.current_streak == 2
        assert lapsed.current_streak == 0
        assert lapsed.longest_streak == 2

    def test_exactly_max_gap_continues(self):
        sessions = [session_on(0), session_on(7), session_on(14)]
        stats = calculate_person_stats("p1", "Alex", sessions, now=DAY0 + timedelta(days=14))

        assert stats.longest_streak == 3
        assert stats.total_points == 30 + 10

    def test_only_completed_and_participating(self):
        sessions = [
            session_on(0),
            session_on(1, completed=False),
            session_on(2, participants=("p2",)),
        ]
        stats = calculate_person_stats("p1", "Alex", sessions, now=DAY0)
        assert stats.total_sessions == 1


class TestLeaderboard:
    """Tests for build_leaderboard."""

    def test_sorted_by_points(self):
        alex = Person(display_name="Alex", id="p1")
        sam = Person(display_name="Sam", id="p2")
        sessions = [
            session_on(0, ("p1", "p2")),
            session_on(2, ("p2",)),
            session_on(4, ("p2",)),
        ]

        board = build_leaderboard([alex, sam], sessions, now=DAY0 + timedelta(days=4))

        assert [s.display_name for s in board] == ["Sam", "Alex"]
        assert board[0].total_points == 30 + 10
        assert board[1].total_points == 10
        assert board[1].current_streak == 1


class TestSummarizeHistory:
    """Tests for summarize_history."""

    def test_totals_completed_only(self):
        summary = summarize_history(
            [
                session_on(0, meters=10.25, work_kj=1.5),
                session_on(1, meters=5.5, work_kj=0.25),
                session_on(2, completed=False, meters=100, work_kj=100),
            ]
        )

        assert summary.sessions == 2
        assert summary.meters == pytest.approx(15.75)
        assert summary.work_kj == pytest.approx(1.75)
        assert summary.to_dict()["sessions"] == 2
