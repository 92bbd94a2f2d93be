# hilo_game.py
# Core library for the Hi-Lo number guessing game (importable, testable)

from __future__ import annotations
from collections import deque
from dataclasses import dataclass, field
from enum import Enum
from typing import Deque, Dict, List, Optional
import logging
import math
import random

from rapidfuzz import fuzz, process

logger = logging.getLogger(__name__)

# Entering this instead of a guess ends the current round
QUIT_SENTINEL = 0
TIME_LIMIT_SECONDS = 60
RECENT_WINDOW = 10
MIN_RECENT_FOR_AVERAGE = 3
FUZZY_THRESHOLD = 70


class GameStateError(RuntimeError):
    """Raised when a finished (or never started) session is driven further."""


class Difficulty(Enum):
    EASY = ("Easy", 1, 50)
    MEDIUM = ("Medium", 1, 100)
    HARD = ("Hard", 1, 1000)
    EXPERT = ("Expert", 1, 10000)

    def __init__(self, title: str, min_value: int, max_value: int):
        self.title = title
        self.min_value = min_value
        self.max_value = max_value

    @property
    def label(self) -> str:
        return f"{self.title} ({self.min_value}-{self.max_value})"

    @property
    def optimal_guesses(self) -> int:
        # Worst case for a binary search over the whole range
        return math.ceil(math.log2(self.max_value - self.min_value + 1))

    @classmethod
    def from_index(cls, index: int) -> "Difficulty":
        """Return the preset at a 1-based menu position."""
        members = list(cls)
        if not 1 <= index <= len(members):
            raise ValueError(f"Difficulty index must be between 1 and {len(members)}, got {index}")
        return members[index - 1]


DEFAULT_DIFFICULTY = Difficulty.MEDIUM


def resolve_difficulty(name: str, threshold: int = FUZZY_THRESHOLD) -> Difficulty:
    """
    Map a free-text difficulty name to a preset.

    Exact (case-insensitive) matches on the member name or title win; otherwise
    RapidFuzz picks the closest title scoring at least `threshold`.

    Raises:
        ValueError: if nothing matches closely enough.
    """
    if not isinstance(name, str) or not name.strip():
        raise ValueError("Difficulty name must be a non-empty string")
    key = name.strip().lower()
    for d in Difficulty:
        if key in (d.name.lower(), d.title.lower()):
            return d

    choices = [d.title.lower() for d in Difficulty]
    match = process.extractOne(key, choices, scorer=fuzz.WRatio, score_cutoff=threshold)
    if match is None:
        raise ValueError(f"Unknown difficulty: {name!r} (choose from {', '.join(choices)})")
    _, score, idx = match
    resolved = list(Difficulty)[idx]
    logger.info("Resolved difficulty %r to %s (score %.0f)", name, resolved.title, score)
    return resolved


class GuessOutcome(Enum):
    TOO_LOW = "too_low"
    TOO_HIGH = "too_high"
    CORRECT = "correct"


class HintIntensity(Enum):
    VERY_FAR = "Very far"
    PRETTY_FAR = "Pretty far"
    GETTING_CLOSE = "Getting close"
    VERY_CLOSE = "Very close"


# Ordered far-to-close; a smaller distance never maps to an earlier band
HINT_BANDS = tuple(HintIntensity)


class EndReason(Enum):
    WON = "won"
    QUIT = "quit"
    TIMEOUT = "timeout"


def evaluate_guess(guess: int, target: int) -> GuessOutcome:
    if guess == target:
        return GuessOutcome.CORRECT
    if guess < target:
        return GuessOutcome.TOO_LOW
    return GuessOutcome.TOO_HIGH


def hint_intensity(guess: int, target: int, min_value: int, max_value: int) -> HintIntensity:
    """Band the distance to the target as a fraction of the range width."""
    span = max_value - min_value
    fraction = abs(guess - target) / span if span > 0 else 0.0
    if fraction > 0.5:
        return HintIntensity.VERY_FAR
    if fraction > 0.25:
        return HintIntensity.PRETTY_FAR
    if fraction > 0.1:
        return HintIntensity.GETTING_CLOSE
    return HintIntensity.VERY_CLOSE


@dataclass
class GameSession:
    """
    One played round: the hidden target plus the attempt counter.

    The random source is injected so tests can script the target; anything with
    a `randint(a, b)` method works.
    """
    difficulty: Difficulty = DEFAULT_DIFFICULTY
    rng: random.Random = field(default_factory=random.Random, repr=False)
    target: int = field(default=0, init=False, repr=False)
    attempts: int = field(default=0, init=False)
    active: bool = field(default=False, init=False)
    end_reason: Optional[EndReason] = field(default=None, init=False)

    @property
    def min_value(self) -> int:
        return self.difficulty.min_value

    @property
    def max_value(self) -> int:
        return self.difficulty.max_value

    @property
    def won(self) -> bool:
        return self.end_reason is EndReason.WON

    def start(self) -> "GameSession":
        self.target = self.rng.randint(self.min_value, self.max_value)
        self.attempts = 0
        self.active = True
        self.end_reason = None
        logger.debug("New %s round, target drawn: %d", self.difficulty.title, self.target)
        return self

    def evaluate(self, guess: int) -> GuessOutcome:
        return evaluate_guess(guess, self.target)

    def hint_intensity(self, guess: int) -> HintIntensity:
        return hint_intensity(guess, self.target, self.min_value, self.max_value)

    def submit(self, guess: int) -> GuessOutcome:
        """Count a guess as an attempt and evaluate it; a correct guess ends the round."""
        self._require_active()
        self.attempts += 1
        outcome = self.evaluate(guess)
        if outcome is GuessOutcome.CORRECT:
            self._finish(EndReason.WON)
        return outcome

    def quit(self) -> None:
        self._require_active()
        self._finish(EndReason.QUIT)

    def timeout(self) -> None:
        self._require_active()
        self._finish(EndReason.TIMEOUT)

    def _require_active(self) -> None:
        if not self.active:
            raise GameStateError("Session is not active; call start() first")

    def _finish(self, reason: EndReason) -> None:
        self.active = False
        self.end_reason = reason
        logger.debug("Round ended (%s) after %d attempts", reason.value, self.attempts)


# ---------- Victory rating ----------

class Verdict(Enum):
    PERFECT = "Perfect! You used the optimal strategy!"
    CLOSE = "Great job! Very close to optimal!"
    NEEDS_STRATEGY = "Tip: Try using binary search strategy for better results!"


@dataclass(frozen=True)
class VictoryRating:
    attempts: int
    optimal: int
    efficiency: float
    verdict: Verdict


def rate_victory(attempts: int, difficulty: Difficulty) -> VictoryRating:
    if attempts < 1:
        raise ValueError("A win takes at least one attempt")
    optimal = difficulty.optimal_guesses
    if attempts <= optimal:
        verdict = Verdict.PERFECT
    elif attempts <= optimal + 2:
        verdict = Verdict.CLOSE
    else:
        verdict = Verdict.NEEDS_STRATEGY
    return VictoryRating(attempts=attempts, optimal=optimal,
                         efficiency=optimal / attempts * 100, verdict=verdict)


def skill_level(average_guesses: float) -> str:
    if average_guesses <= 4:
        return 'expert'
    if average_guesses <= 6:
        return 'advanced'
    if average_guesses <= 8:
        return 'intermediate'
    if average_guesses <= 12:
        return 'beginner'
    return 'novice'


# ---------- Statistics ----------

@dataclass(frozen=True)
class DifficultyBreakdown:
    difficulty: Difficulty
    played: int
    won: int
    win_rate: float


@dataclass(frozen=True)
class StatsSummary:
    total_games: int
    games_won: int
    win_rate: float
    average_guesses: float
    best_score: Optional[int]
    worst_score: Optional[int]
    recent_average: Optional[float]
    recent_count: int
    by_difficulty: List[DifficultyBreakdown]
    skill_level: Optional[str]


@dataclass
class GameStatistics:
    """Running totals for every round played in this process."""
    total_games: int = 0
    games_won: int = 0
    total_guesses: int = 0
    best_score: Optional[int] = None
    worst_score: Optional[int] = None
    recent_scores: Deque[int] = field(default_factory=lambda: deque(maxlen=RECENT_WINDOW))
    played_by_difficulty: Dict[Difficulty, int] = field(default_factory=lambda: {d: 0 for d in Difficulty})
    won_by_difficulty: Dict[Difficulty, int] = field(default_factory=lambda: {d: 0 for d in Difficulty})

    def record_game(self, won: bool, attempts: int, difficulty: Difficulty) -> None:
        if attempts < 0:
            raise ValueError(f"attempts cannot be negative: {attempts}")
        self.total_games += 1
        self.played_by_difficulty[difficulty] += 1

        # Losses only count towards played totals, never guess statistics
        if won:
            self.games_won += 1
            self.won_by_difficulty[difficulty] += 1
            self.total_guesses += attempts
            if self.best_score is None or attempts < self.best_score:
                self.best_score = attempts
            if self.worst_score is None or attempts > self.worst_score:
                self.worst_score = attempts
            self.recent_scores.append(attempts)
        logger.info("Recorded %s %s game in %d attempts (%d played)",
                    'won' if won else 'lost', difficulty.title, attempts, self.total_games)

    def record_session(self, session: GameSession) -> None:
        """Record a finished session."""
        if session.active:
            raise GameStateError("Cannot record a session that is still active")
        self.record_game(session.won, session.attempts, session.difficulty)

    @property
    def win_rate(self) -> float:
        return self.games_won / self.total_games * 100 if self.total_games else 0.0

    @property
    def average_guesses(self) -> float:
        return self.total_guesses / self.games_won if self.games_won else 0.0

    @property
    def recent_average(self) -> Optional[float]:
        if len(self.recent_scores) < MIN_RECENT_FOR_AVERAGE:
            return None
        return sum(self.recent_scores) / len(self.recent_scores)

    def summary(self) -> StatsSummary:
        breakdown = []
        for d in Difficulty:
            played = self.played_by_difficulty[d]
            if played > 0:
                won = self.won_by_difficulty[d]
                breakdown.append(DifficultyBreakdown(d, played, won, won / played * 100))
        return StatsSummary(
            total_games=self.total_games,
            games_won=self.games_won,
            win_rate=self.win_rate,
            average_guesses=self.average_guesses,
            best_score=self.best_score,
            worst_score=self.worst_score,
            recent_average=self.recent_average,
            recent_count=len(self.recent_scores),
            by_difficulty=breakdown,
            skill_level=skill_level(self.average_guesses) if self.games_won else None,
        )
