from __future__ import annotations

import argparse
import logging
import random
from collections import Counter
from typing import Optional

from stair_blocks.game import GameConfig, GameSession, PlacementPolicy


def fitting_sizes(session: GameSession, sizes) -> list:
    return [s for s in sizes if any(session.preview(c, s) for c in session.board.columns)]


def random_request(session: GameSession, rng: random.Random):
    """Drop a random tray block on a random slot, like an aimless player."""
    n = session.board.n
    column = rng.randint(1, n)
    row = rng.randrange(column)
    if session.policy == PlacementPolicy.SINGLE:
        return session.placement_request(column, 1, row)
    # once the tray holds nothing that fits, fall back to any size that does
    sizes = fitting_sizes(session, session.tray.available()) or fitting_sizes(session, range(1, n + 1))
    return session.placement_request(column, rng.choice(sizes), row)


def play_game(columns: int = 5, policy: PlacementPolicy | str = PlacementPolicy.CONNECTED,
              seed: Optional[int] = None, max_attempts: int = 10_000) -> dict:
    rng = random.Random(seed)
    config = GameConfig(
        columns=columns,
        policy=PlacementPolicy(policy),
        random_seed=seed,
        column_complete_delay=0.0,
        victory_delay=0.0,
    )
    session = GameSession(config)
    rejections: Counter = Counter()
    attempts = 0
    while not session.complete and attempts < max_attempts:
        attempts += 1
        result = random_request(session, rng)
        if not result.accepted:
            rejections[result.reason.value] += 1
    stats = session.get_game_stats()
    stats["attempts"] = attempts
    stats["rejections"] = dict(rejections)
    return stats


def run_random(games: int = 10, columns: int = 5, policy: str = "connected",
               seed: Optional[int] = None, max_attempts: int = 10_000) -> None:
    won = 0
    total_attempts = 0
    for i in range(games):
        game_seed = None if seed is None else seed + i
        stats = play_game(columns, policy, game_seed, max_attempts)
        won += int(stats["complete"])
        total_attempts += stats["attempts"]
        print(f"game {i}: complete={stats['complete']} attempts={stats['attempts']} "
              f"blocks={stats['blocks_placed']} rejections={stats['rejections']}")
    print(f"Random player finished {won}/{games} boards, "
          f"{total_attempts / max(1, games):.1f} attempts per game")


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser()
    p.add_argument("--games", type=int, default=10)
    p.add_argument("--columns", type=int, default=5)
    p.add_argument("--policy", choices=[policy.value for policy in PlacementPolicy], default="connected")
    p.add_argument("--seed", type=int, default=None)
    p.add_argument("--max-attempts", type=int, default=10_000)
    p.add_argument("--log-level", default="WARNING")
    return p


def main() -> None:
    args = build_parser().parse_args()
    logging.basicConfig(level=args.log_level.upper(), format="%(levelname)s %(name)s: %(message)s")
    run_random(args.games, args.columns, args.policy, args.seed, args.max_attempts)


if __name__ == "__main__":  # pragma: no cover
    main()
