"""Difficulty-scaled countdown for a single practice attempt."""
import logging
import math
import time
from dataclasses import dataclass
from datetime import datetime, timezone

logger = logging.getLogger(__name__)

DIFFICULTY_MINUTES = {"Hard": 30, "Medium": 20, "Easy": 10}

IDLE = "idle"
RUNNING = "running"
EXPIRED = "expired"
STOPPED_EARLY = "stopped_early"
REVIEWED = "reviewed"

READ_SOLUTION = "Read Solution"

EMOJI_SOLVED = "✅"
EMOJI_EXTENDED = "🚨"
EMOJI_DONE_EARLY = "❇️"
EMOJI_READ_SOLUTION = "⭕"


class SessionStateError(Exception):
    """Raised on an action the session's current state does not allow."""


def minutes_for_difficulty(difficulty) -> int:
    return DIFFICULTY_MINUTES.get(difficulty, 0)


def format_time(total_seconds: int) -> str:
    minutes, seconds = divmod(max(0, int(total_seconds)), 60)
    return f"{minutes}:{seconds:02d}"


@dataclass
class AttemptResult:
    solve_status: str
    time_spent: int  # minutes, rounded up
    emoji: str
    date: str

    def to_payload(self, page_id, code=""):
        return {
            "pageId": page_id,
            "solveStatus": self.solve_status,
            "timeSpent": self.time_spent,
            "date": self.date,
            "emoji": self.emoji,
            "code": code,
        }


class PracticeSession:
    """idle -> running -> (expired | stopped_early) -> reviewed.

    ``tick`` is the periodic callback; the caller decides how often it fires.
    ``extend`` restarts an expired countdown while elapsed time keeps adding up.
    """

    def __init__(self, difficulty, on_expire=None):
        self.difficulty = difficulty
        self.state = IDLE
        self.total_seconds = 0
        self.remaining_seconds = 0
        self.elapsed_seconds = 0
        self.extended = False
        self.done_early = False
        self.on_expire = on_expire

    def __repr__(self):
        return (
            f"<PracticeSession {self.difficulty} {self.state} "
            f"{format_time(self.remaining_seconds)} left, {self.elapsed_seconds}s spent>"
        )

    @property
    def display(self) -> str:
        return format_time(self.remaining_seconds)

    @property
    def is_running(self) -> bool:
        return self.state == RUNNING

    def _require(self, *states):
        if self.state not in states:
            raise SessionStateError(
                f"cannot do that while {self.state} (needs {' or '.join(states)})"
            )

    def _countdown(self):
        self.total_seconds = minutes_for_difficulty(self.difficulty) * 60
        self.remaining_seconds = self.total_seconds
        self.state = RUNNING
        if self.total_seconds <= 0:
            self._expire()

    def _expire(self):
        self.remaining_seconds = 0
        self.state = EXPIRED
        logger.info("Time is up after %ds", self.elapsed_seconds)
        if self.on_expire:
            self.on_expire(self)

    def start(self):
        self._require(IDLE)
        self._countdown()
        logger.info("Started %s countdown of %s", self.difficulty, format_time(self.total_seconds))

    def tick(self):
        self._require(RUNNING)
        self.remaining_seconds -= 1
        self.elapsed_seconds += 1
        if self.remaining_seconds <= 0:
            self._expire()

    def stop_early(self):
        self._require(RUNNING)
        self.state = STOPPED_EARLY
        self.done_early = True
        logger.info("Stopped early with %s left, %ds spent", self.display, self.elapsed_seconds)

    def extend(self):
        self._require(EXPIRED)
        self.extended = True
        self._countdown()
        logger.info("Extended by %s", format_time(self.total_seconds))

    @property
    def time_spent_minutes(self) -> int:
        return math.ceil(self.elapsed_seconds / 60)

    def emoji_for(self, solve_status) -> str:
        emoji = EMOJI_SOLVED
        if self.extended:
            emoji = EMOJI_EXTENDED
        if self.done_early:
            emoji = EMOJI_DONE_EARLY
        if solve_status == READ_SOLUTION:
            emoji = EMOJI_READ_SOLUTION
        return emoji

    def review(self, solve_status, now=None) -> AttemptResult:
        self._require(EXPIRED, STOPPED_EARLY)
        now = now or datetime.now(timezone.utc)
        self.state = REVIEWED
        return AttemptResult(
            solve_status=solve_status,
            time_spent=self.time_spent_minutes,
            emoji=self.emoji_for(solve_status),
            date=now.isoformat(),
        )


def run_countdown(session, sleep=time.sleep, on_tick=None, interval=1.0):
    """Drive ``session`` until it stops running, one tick per ``interval``."""
    while session.is_running:
        sleep(interval)
        if not session.is_running:
            break
        session.tick()
        if on_tick is not None:
            on_tick(session)
    return session
