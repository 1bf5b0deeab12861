"""Streaks and points derived from session history."""

from dataclasses import dataclass
from datetime import datetime, timedelta
from typing import Iterable, Sequence

from ..models.people import Person
from ..models.session import PersonStats, Session
from .physics import round_half_up

STREAK_MAX_GAP_DAYS = 7
POINTS_PER_SESSION = 10
STREAK_BONUS = 5


def calculate_person_stats(
    person_id: str,
    display_name: str,
    sessions: Iterable[Session],
    now: datetime | None = None,
    max_gap_days: int = STREAK_MAX_GAP_DAYS,
) -> PersonStats:
    """Compute streaks and points for one person.

    Only completed sessions the person took part in count. Two sessions in a
    row continue a streak when they are at most ``max_gap_days`` apart; each
    continuation earns a bonus on top of the per-session points. The current
    streak drops to zero once the last session is older than the gap.
    """
    participated = sorted(
        (s for s in sessions if s.completed and person_id in s.participants),
        key=lambda s: s.date,
    )

    if not participated:
        return PersonStats(person_id=person_id, display_name=display_name)

    max_gap = timedelta(days=max_gap_days)
    now = now or datetime.now()

    streak = 1
    longest = 1
    points = POINTS_PER_SESSION
    for previous, session in zip(participated, participated[1:]):
        points += POINTS_PER_SESSION
        if session.date - previous.date <= max_gap:
            streak += 1
            points += STREAK_BONUS
        else:
            streak = 1
        longest = max(longest, streak)

    last_date = participated[-1].date
    current = streak if now - last_date <= max_gap else 0

    return PersonStats(
        person_id=person_id,
        display_name=display_name,
        total_sessions=len(participated),
        current_streak=current,
        longest_streak=longest,
        total_points=points,
        last_session_date=last_date,
    )


def build_leaderboard(
    people: Iterable[Person],
    sessions: Sequence[Session],
    now: datetime | None = None,
) -> list[PersonStats]:
    """Stats for everyone, highest points first."""
    stats = [calculate_person_stats(p.id, p.display_name, sessions, now=now) for p in people]
    stats.sort(key=lambda s: s.total_points, reverse=True)
    return stats


@dataclass(frozen=True)
class HistorySummary:
    sessions: int
    exercises: int
    meters: float
    work_kj: float

    def to_dict(self) -> dict:
        return {
            "sessions": self.sessions,
            "exercises": self.exercises,
            "meters": self.meters,
            "work_kj": self.work_kj,
        }


def summarize_history(sessions: Iterable[Session]) -> HistorySummary:
    """Totals over completed sessions."""
    completed = [s for s in sessions if s.completed]
    return HistorySummary(
        sessions=len(completed),
        exercises=sum(len(s.exercises) for s in completed),
        meters=round_half_up(sum(s.total_meters for s in completed), 2),
        work_kj=round_half_up(sum(s.total_work_kj for s in completed), 3),
    )
