import random
import pytest
from hilo_game import (
    Difficulty, GameSession, GameStateError, GameStatistics, Verdict,
    rate_victory, skill_level,
)
from helpers import ScriptedRandom


def test_empty_statistics_never_divide_by_zero():
    stats = GameStatistics()
    s = stats.summary()
    assert s.total_games == 0
    assert s.win_rate == 0.0
    assert s.average_guesses == 0.0
    assert s.best_score is None and s.worst_score is None
    assert s.recent_average is None
    assert s.by_difficulty == []
    assert s.skill_level is None


def test_losses_only_touch_play_counters():
    stats = GameStatistics()
    stats.record_game(False, 0, Difficulty.EASY)
    stats.record_game(False, 17, Difficulty.EASY)
    assert stats.total_games == 2
    assert stats.games_won == 0
    assert stats.total_guesses == 0
    assert stats.best_score is None
    assert list(stats.recent_scores) == []
    assert stats.played_by_difficulty[Difficulty.EASY] == 2
    assert stats.won_by_difficulty[Difficulty.EASY] == 0
    assert stats.summary().average_guesses == 0.0


def test_twelve_wins_keep_last_ten():
    stats = GameStatistics()
    attempts = [5, 3, 8, 2, 9, 1, 4, 6, 7, 10, 3, 2]
    for a in attempts:
        stats.record_game(True, a, Difficulty.MEDIUM)
    assert list(stats.recent_scores) == [8, 2, 9, 1, 4, 6, 7, 10, 3, 2]
    assert stats.best_score == 1
    assert stats.worst_score == 10
    assert stats.games_won == 12
    assert stats.total_guesses == sum(attempts)


def test_random_sequences_match_reference_counts():
    rng = random.Random(99)
    stats = GameStatistics()
    wins = []
    played = {d: 0 for d in Difficulty}
    for _ in range(200):
        d = rng.choice(list(Difficulty))
        won = rng.random() < 0.6
        a = rng.randint(1, 20)
        stats.record_game(won, a, d)
        played[d] += 1
        if won:
            wins.append(a)
    assert stats.total_games == 200
    assert stats.games_won == len(wins)
    assert list(stats.recent_scores) == wins[-10:]
    assert stats.best_score == min(wins)
    assert stats.worst_score == max(wins)
    assert stats.played_by_difficulty == played
    assert sum(stats.won_by_difficulty.values()) == len(wins)


def test_summary_rates_and_breakdown():
    stats = GameStatistics()
    stats.record_game(True, 4, Difficulty.EASY)
    stats.record_game(False, 2, Difficulty.EASY)
    stats.record_game(True, 8, Difficulty.HARD)
    s = stats.summary()
    assert s.win_rate == pytest.approx(200 / 3)
    assert s.average_guesses == 6.0
    # fewer than three recent scores
    assert s.recent_average is None
    assert s.skill_level == 'advanced'
    rows = [(r.difficulty, r.played, r.won, r.win_rate) for r in s.by_difficulty]
    assert rows == [(Difficulty.EASY, 2, 1, 50.0), (Difficulty.HARD, 1, 1, 100.0)]

    stats.record_game(True, 3, Difficulty.EASY)
    assert stats.summary().recent_average == pytest.approx(5.0)


def test_record_game_rejects_negative_attempts():
    with pytest.raises(ValueError):
        GameStatistics().record_game(True, -1, Difficulty.EASY)


def test_record_session():
    stats = GameStatistics()
    session = GameSession(Difficulty.EXPERT, ScriptedRandom(7)).start()
    with pytest.raises(GameStateError):
        stats.record_session(session)
    session.submit(7)
    stats.record_session(session)
    assert stats.won_by_difficulty[Difficulty.EXPERT] == 1
    assert stats.best_score == 1


@pytest.mark.parametrize('attempts, verdict', [
    (1, Verdict.PERFECT),
    (7, Verdict.PERFECT),
    (8, Verdict.CLOSE),
    (9, Verdict.CLOSE),
    (10, Verdict.NEEDS_STRATEGY),
])
def test_rate_victory_verdicts(attempts, verdict):
    assert rate_victory(attempts, Difficulty.MEDIUM).verdict is verdict


def test_rate_victory_efficiency():
    rating = rate_victory(10, Difficulty.MEDIUM)
    assert rating.optimal == 7
    assert rating.efficiency == pytest.approx(70.0)
    with pytest.raises(ValueError):
        rate_victory(0, Difficulty.MEDIUM)


@pytest.mark.parametrize('average, level', [
    (1, 'expert'), (4, 'expert'), (4.5, 'advanced'), (6, 'advanced'),
    (8, 'intermediate'), (12, 'beginner'), (12.1, 'novice'),
])
def test_skill_level(average, level):
    assert skill_level(average) == level
