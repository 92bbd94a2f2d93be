# hilo_console.py
# Console front end for the Hi-Lo game: prompts, screens, game modes and the CLI entry point

from typing import Callable, List, Optional
import argparse
import json
import logging
import random
import sys
import time

from hilo_game import (
    DEFAULT_DIFFICULTY, QUIT_SENTINEL, TIME_LIMIT_SECONDS,
    Difficulty, GameSession, GameStatistics, GuessOutcome, HintIntensity,
    rate_victory, resolve_difficulty,
)

logger = logging.getLogger(__name__)

Reader = Callable[[str], str]
Clock = Callable[[], float]

CELEBRATIONS = [
    "🎉 Congratulations!",
    "🎊 Well done!",
    "🏆 Excellent!",
    "🎈 Fantastic!",
    "⭐ Amazing!",
]

HINT_PREFIXES = {
    HintIntensity.VERY_FAR: "🔥",
    HintIntensity.PRETTY_FAR: "🎯",
    HintIntensity.GETTING_CLOSE: "🎪",
    HintIntensity.VERY_CLOSE: "🎊",
}

MENU_PLAY_STANDARD = 1
MENU_PLAY_TIMED = 2
MENU_CHANGE_DIFFICULTY = 3
MENU_STATISTICS = 4
MENU_HELP = 5
MENU_QUIT = 6


# ---------- Input boundary ----------

def get_valid_input(low: int, high: int, prompt: str, reader: Reader = input) -> int:
    """Keep prompting until the player types a whole number in [low, high]."""
    while True:
        raw = reader(prompt).strip()
        try:
            value = int(raw)
        except ValueError:
            print("❌ Please enter a valid number!")
            continue
        if low <= value <= high:
            return value
        print(f"❌ Please enter a number between {low} and {high}")


def ask_yes_no(prompt: str, reader: Reader = input) -> bool:
    return reader(prompt).strip().lower().startswith('y')


# ---------- Output boundary ----------

def format_feedback(outcome: GuessOutcome, intensity: HintIntensity) -> str:
    hint = f"{HINT_PREFIXES[intensity]} {intensity.value}! "
    if outcome is GuessOutcome.TOO_LOW:
        return hint + "📈 Too low! Try higher."
    if outcome is GuessOutcome.TOO_HIGH:
        return hint + "📉 Too high! Try lower."
    return ""


def display_welcome() -> None:
    print("╔════════════════════════════════════════╗")
    print("║          🎯 HI-LO CHALLENGE 🎯         ║")
    print("║                                        ║")
    print("║    A Modern Number Guessing Game       ║")
    print("╚════════════════════════════════════════╝")


def display_menu(difficulty: Difficulty) -> None:
    print(f"\n🎮 GAME MENU (difficulty: {difficulty.label}):")
    print("1. 🎯 Play Standard Game")
    print("2. ⏰ Play Timed Game")
    print("3. 🎚️  Change Difficulty")
    print("4. 📊 View Statistics")
    print("5. ❓ Help")
    print("6. 👋 Quit")


def display_victory(session: GameSession) -> None:
    rating = rate_victory(session.attempts, session.difficulty)
    print("\n" + CELEBRATIONS[session.rng.randint(0, len(CELEBRATIONS) - 1)])
    print(f"🎯 You guessed {session.target} in {session.attempts} attempts!")
    print(rating.verdict.value)
    print(f"📈 Efficiency: {rating.efficiency:.1f}%")


def display_help() -> None:
    print("\n📖 HOW TO PLAY:")
    print("• The computer thinks of a number in the chosen range")
    print("• You try to guess the number")
    print("• After each guess, you'll get a hint:")
    print("  - 'Too high' means guess a lower number")
    print("  - 'Too low' means guess a higher number")
    print(f"• Enter {QUIT_SENTINEL} during gameplay to quit")
    print("\n💡 STRATEGY TIP:")
    print("Use binary search! Always guess the middle of the remaining range.")
    print("This guarantees finding the answer in log₂(n) guesses or less!")
    print("\n🎯 DIFFICULTY LEVELS:")
    for d in Difficulty:
        print(f"• {d.label} (Optimal: {d.optimal_guesses} guesses)")


def display_statistics(stats: GameStatistics) -> None:
    print("\n📊 GAME STATISTICS:")
    print("═══════════════════")
    s = stats.summary()
    if s.total_games == 0:
        print("No games played yet! Start playing to see your stats.")
        return

    print(f"🎮 Games Played: {s.total_games}")
    print(f"🏆 Games Won: {s.games_won}")
    print(f"📈 Win Rate: {s.win_rate:.1f}%")
    if s.games_won == 0:
        return

    print(f"🎯 Average Guesses: {s.average_guesses:.1f}")
    print(f"🥇 Best Score: {s.best_score} guesses")
    print(f"😅 Worst Score: {s.worst_score} guesses")
    if s.recent_average is not None:
        print(f"📊 Recent Average: {s.recent_average:.1f} (last {s.recent_count} games)")
    print(f"🧠 Skill Level: {s.skill_level}")

    print("\n🎚️  Performance by Difficulty:")
    for row in s.by_difficulty:
        print(f"   {row.difficulty.label}: {row.won}/{row.played} ({row.win_rate:.1f}%)")


def display_goodbye(stats: GameStatistics) -> None:
    print("\n🎊 Thanks for playing Hi-Lo Challenge!")
    if stats.total_games > 0:
        print("\n📈 SESSION SUMMARY:")
        print(f"Games this session: {stats.total_games}")
        if stats.games_won > 0:
            print(f"Average performance: {stats.average_guesses:.1f} guesses per win")
    print("👋 See you next time!")


# ---------- Game modes ----------

def _handle_guess(session: GameSession, guess: int) -> None:
    outcome = session.submit(guess)
    if outcome is not GuessOutcome.CORRECT:
        print(format_feedback(outcome, session.hint_intensity(guess)))


def play_standard_game(session: GameSession, stats: GameStatistics, reader: Reader = input) -> GameSession:
    """Play one round with no time limit. Returns the finished session."""
    session.start()
    print("\n🎯 STANDARD GAME MODE")
    print(f"Range: {session.min_value} to {session.max_value}")
    print(f"Optimal guesses: {session.difficulty.optimal_guesses}")
    print(f"Enter {QUIT_SENTINEL} to quit the current game.\n")

    while session.active:
        guess = get_valid_input(QUIT_SENTINEL, session.max_value,
                                f"Attempt #{session.attempts + 1} - Enter your guess: ", reader)
        if guess == QUIT_SENTINEL:
            session.quit()
            print(f"💔 Game quit! The number was {session.target}")
            break
        _handle_guess(session, guess)

    stats.record_session(session)
    if session.won:
        display_victory(session)
    return session


def play_timed_game(session: GameSession, stats: GameStatistics, reader: Reader = input,
                    clock: Clock = time.monotonic, time_limit: float = TIME_LIMIT_SECONDS) -> GameSession:
    """
    Play one round against the clock.

    The remaining time is checked before every prompt, so a round can only time
    out between guesses, never in the middle of one.
    """
    session.start()
    print("\n⏰ TIMED GAME MODE")
    print(f"You have {time_limit:g} seconds to guess the number!")
    print(f"Range: {session.min_value} to {session.max_value}")
    print(f"Enter {QUIT_SENTINEL} to quit.\n")

    start = clock()
    while session.active:
        remaining = int(time_limit - (clock() - start))
        if remaining <= 0:
            session.timeout()
            logger.info("Timed round ran out after %d attempts", session.attempts)
            print(f"\n⏰ Time's up! The number was {session.target}")
            break

        guess = get_valid_input(QUIT_SENTINEL, session.max_value,
                                f"Time left: {remaining}s | Attempt #{session.attempts + 1} - Guess: ", reader)
        if guess == QUIT_SENTINEL:
            session.quit()
            print(f"💔 Game quit! The number was {session.target}")
            break
        _handle_guess(session, guess)

    stats.record_session(session)
    if session.won:
        print(f"🎉 Amazing! You won in {int(clock() - start)} seconds!")
        display_victory(session)
    return session


def change_difficulty(reader: Reader = input) -> Difficulty:
    print("\n🎚️  SELECT DIFFICULTY LEVEL:")
    members = list(Difficulty)
    for i, d in enumerate(members, start=1):
        print(f"{i}. {d.label}")
    choice = get_valid_input(1, len(members), "Select difficulty: ", reader)
    difficulty = Difficulty.from_index(choice)
    logger.info("Difficulty changed to %s", difficulty.title)
    print(f"✅ Difficulty set to: {difficulty.label}")
    return difficulty


def main_menu(stats: GameStatistics, difficulty: Difficulty = DEFAULT_DIFFICULTY,
              rng: Optional[random.Random] = None, reader: Reader = input,
              clock: Clock = time.monotonic, time_limit: float = TIME_LIMIT_SECONDS) -> None:
    """Interactive menu loop; returns when the player quits."""
    rng = rng or random.Random()
    display_welcome()
    try:
        while True:
            display_menu(difficulty)
            choice = get_valid_input(MENU_PLAY_STANDARD, MENU_QUIT, "Enter your choice: ", reader)
            if choice == MENU_PLAY_STANDARD:
                play_standard_game(GameSession(difficulty, rng), stats, reader)
            elif choice == MENU_PLAY_TIMED:
                play_timed_game(GameSession(difficulty, rng), stats, reader, clock, time_limit)
            elif choice == MENU_CHANGE_DIFFICULTY:
                difficulty = change_difficulty(reader)
            elif choice == MENU_STATISTICS:
                display_statistics(stats)
            elif choice == MENU_HELP:
                display_help()
            else:
                break

            if choice in (MENU_PLAY_STANDARD, MENU_PLAY_TIMED):
                if not ask_yes_no("\n🔄 Play another game? (y/n): ", reader):
                    break
    except (KeyboardInterrupt, EOFError):
        print('\nGoodbye!')
        return
    display_goodbye(stats)


# ---------- CLI ----------

def _positive_float(value: str) -> float:
    try:
        f = float(value)
    except ValueError:
        raise argparse.ArgumentTypeError(f"not a number: {value!r}")
    if f <= 0:
        raise argparse.ArgumentTypeError(f"must be greater than 0, got {value}")
    return f


def _difficulty_arg(value: str) -> Difficulty:
    try:
        return resolve_difficulty(value)
    except ValueError as e:
        raise argparse.ArgumentTypeError(str(e))


def _parse_args(argv=None):
    p = argparse.ArgumentParser(description="Hi-Lo Challenge: guess the hidden number")
    p.add_argument('--difficulty', type=_difficulty_arg, default=DEFAULT_DIFFICULTY,
                   help='Starting difficulty: easy, medium, hard or expert (default: medium)')
    p.add_argument('--seed', type=int, default=None, help='Seed the random number generator for a repeatable game')
    p.add_argument('--time-limit', type=_positive_float, default=TIME_LIMIT_SECONDS,
                   help=f'Seconds allowed in timed mode (default: {TIME_LIMIT_SECONDS})')
    p.add_argument('--list-difficulties', action='store_true', help='List difficulty levels as JSON and exit')
    p.add_argument('-v', '--verbose', action='count', default=0, help='Increase log output (-v info, -vv debug)')
    return p.parse_args(argv)


def list_difficulties() -> List[dict]:
    return [{'name': d.title, 'min': d.min_value, 'max': d.max_value, 'optimal_guesses': d.optimal_guesses}
            for d in Difficulty]


def main(argv=None) -> int:
    args = _parse_args(argv)
    level = [logging.WARNING, logging.INFO, logging.DEBUG][min(args.verbose, 2)]
    logging.basicConfig(level=level, format='%(levelname)s %(name)s: %(message)s')

    if args.list_difficulties:
        print(json.dumps(list_difficulties(), indent=2))
        return 0

    if args.seed is not None:
        logger.info("Seeding random source with %d", args.seed)
    main_menu(GameStatistics(), difficulty=args.difficulty, rng=random.Random(args.seed),
              time_limit=args.time_limit)
    return 0


if __name__ == '__main__':
    sys.exit(main())
