#!/usr/bin/env python3
"""CLI entry point for Pixel Penalty.

Usage:
    python main.py play [difficulty]       Launch the Pygame frontend
    python main.py shootout [difficulty]   Play a 5-shot game in text mode and print stats
    python main.py analyze                 Generate outcome charts
    python main.py test                    Run all tests
"""

import logging
import os
import sys

# Add project root to path
sys.path.insert(0, os.path.dirname(os.path.abspath(__file__)))


def _difficulty_arg(default="medium"):
    from penalty.keeper import DIFFICULTY_LEVELS
    if len(sys.argv) > 2 and sys.argv[2] in DIFFICULTY_LEVELS:
        return sys.argv[2]
    return default


def cmd_play():
    """Launch the Pygame frontend."""
    print("Launching Pixel Penalty...")
    print("Controls: arrows=aim/power  A/D=curve  SPACE=shoot  1/2/3=difficulty  Q=quit")
    print("-" * 60)
    from arcade.visualizer import run_visualizer
    run_visualizer(difficulty=_difficulty_arg())


def cmd_shootout():
    """Play a full game with random preset shots and print the result."""
    import random
    from penalty.keeper import DIFFICULTY_LEVELS
    from penalty.session import ShotSession, result_message
    from penalty.shots import get_shot, list_shots, SHOT_PRESETS

    difficulty = _difficulty_arg()
    profile = DIFFICULTY_LEVELS[difficulty]

    print("=" * 60)
    print("  PIXEL PENALTY — SHOOTOUT")
    print("=" * 60)
    print(f"\n  Keeper: {profile.label} (speed:{profile.patrol_speed} "
          f"dive:{profile.dive_chance:.0%} reach:{profile.reach_multiplier:.0%})")
    print()

    # Fake clock so the result hold passes instantly in text mode
    now = [0.0]
    session = ShotSession(difficulty, rng=random.Random(), clock=lambda: now[0])
    picker = random.Random()

    while not session.game_over:
        if session.can_shoot:
            key = picker.choice(list_shots())
            shot = get_shot(key)
            session.take_shot(shot.aim, shot.power, shot.curve)
            outcome = None
            while outcome is None:
                outcome = session.tick()
            record = session.history[-1]
            t = session.tally
            print(f"  Shot {record.number}: {SHOT_PRESETS[key]['label']:28s} "
                  f"-> {outcome.value.upper():5s} ({record.ticks} ticks)  "
                  f"[{t.goals} goals, streak {t.streak}]")
        now[0] += session.result_seconds
        session.tick()

    t = session.tally
    print()
    print(f"  FINAL: {t.goals} / {session.total_shots}")
    print(f"  Goals: {t.goals}  |  Saves: {t.saves}  |  Misses: {t.misses}")
    print(f"  {result_message(t.goals, t.max_streak, session.total_shots)}")
    print()
    print("  Available difficulties: " + ", ".join(DIFFICULTY_LEVELS))
    print("  Usage: python main.py shootout [difficulty]")
    print("=" * 60)


def cmd_analyze():
    """Generate all analysis charts."""
    print("Generating analysis charts...")
    print("-" * 60)
    from arcade.analysis import generate_all_charts
    output_dir = os.path.join(os.path.dirname(__file__), "output")
    paths = generate_all_charts(output_dir=output_dir)
    print(f"\nDone! {len(paths)} charts saved to {output_dir}/")


def cmd_test():
    """Run all tests."""
    import subprocess
    print("Running tests...")
    print("-" * 60)
    result = subprocess.run(
        [sys.executable, "-m", "pytest", "tests/", "-v"],
        cwd=os.path.dirname(os.path.abspath(__file__)),
    )
    sys.exit(result.returncode)


COMMANDS = {
    "play": cmd_play,
    "shootout": cmd_shootout,
    "analyze": cmd_analyze,
    "test": cmd_test,
}


def main():
    logging.basicConfig(
        level=logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    if len(sys.argv) < 2 or sys.argv[1] not in COMMANDS:
        print(__doc__)
        print("Available commands:")
        for name, func in COMMANDS.items():
            print(f"  {name:12s} {func.__doc__}")
        sys.exit(1)

    COMMANDS[sys.argv[1]]()


if __name__ == "__main__":
    main()
