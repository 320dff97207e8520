import os
import json
import time
import random
import logging
import argparse
from typing import Dict, Any, Optional

from dotenv import load_dotenv

from domain.constants import GRID_SIZE, MOVE_INTERVAL_SECONDS, COUNTDOWN_INTERVAL_SECONDS
from domain.game_state import GameState
from players.base import Player
from players.random_player import RandomPlayer
from services.board_renderer import BoardRenderer
from services.high_score_store import HighScoreStore
from services.session import GameSession

load_dotenv()

logger = logging.getLogger(__name__)

# Movement ticks per countdown tick when the clock is simulated
DEFAULT_COUNTDOWN_EVERY = round(COUNTDOWN_INTERVAL_SECONDS / MOVE_INTERVAL_SECONDS)


def _save_frame(renderer: Optional[BoardRenderer], frames_dir: Optional[str], session: GameSession):
    if renderer is None or not frames_dir:
        return
    snapshot = session.snapshot()
    renderer.save_frame(
        snapshot,
        os.path.join(frames_dir, f"frame_{snapshot.moves:05d}.png"),
        high_score=session.high_score
    )


def run_simulation(session: GameSession, player: Player, game_params: argparse.Namespace) -> Dict[str, Any]:
    """
    Plays one game to the end with the given player steering.

    Args:
        session: The session holding the game and high score store.
        player: Picks a direction before every movement tick.
        game_params: An object (like argparse.Namespace) with max_moves,
                     countdown_every, frames_dir and realtime.

    Returns:
        A dictionary summarizing the game (score, death reason, moves, best score).
    """
    renderer = BoardRenderer() if game_params.frames_dir else None
    _save_frame(renderer, game_params.frames_dir, session)

    if game_params.realtime:
        session.start()
        try:
            while not session.snapshot().is_over and session.snapshot().moves < game_params.max_moves:
                move = player.get_move(session.snapshot())
                if move is not None:
                    session.change_direction(move)
                time.sleep(MOVE_INTERVAL_SECONDS / 2)
        finally:
            session.stop()
    else:
        # Simulated clock: one countdown tick every `countdown_every` moves
        ticks = 0
        while not session.snapshot().is_over and ticks < game_params.max_moves:
            move = player.get_move(session.snapshot())
            if move is not None:
                session.change_direction(move)
            session.move()
            ticks += 1
            if ticks % game_params.countdown_every == 0:
                session.countdown()
            _save_frame(renderer, game_params.frames_dir, session)

    snapshot = session.snapshot()
    logger.info("\n%s", snapshot.print_board())

    return {
        "score": snapshot.score,
        "is_over": snapshot.is_over,
        "death_reason": snapshot.death_reason,
        "moves": snapshot.moves,
        "length": len(snapshot.snake),
        "high_score": session.high_score,
    }


def main():
    parser = argparse.ArgumentParser(
        description="Play a game of timed snake with the autopilot player."
    )
    parser.add_argument("--grid-size", type=int, default=GRID_SIZE,
                        help="Board is N x N cells")
    parser.add_argument("--seed", type=int, default=None,
                        help="Seed for food placement and the autopilot")
    parser.add_argument("--max-moves", type=int, default=1000,
                        help="Stop after this many movement ticks")
    parser.add_argument("--countdown-every", type=int, default=DEFAULT_COUNTDOWN_EVERY,
                        help="Movement ticks per countdown tick in simulated mode")
    parser.add_argument("--frames-dir", type=str, default=None,
                        help="Write a PNG per movement tick into this directory")
    parser.add_argument("--high-score-path", type=str, default=None,
                        help="Where the best score is stored (default: $HIGH_SCORE_PATH or high_score.json)")
    parser.add_argument("--realtime", action="store_true",
                        help="Tick on the wall clock instead of simulating it")
    parser.add_argument("--log-level", type=str, default=os.getenv("LOG_LEVEL", "INFO"))

    args = parser.parse_args()

    logging.basicConfig(
        level=args.log_level.upper(),
        format="%(asctime)s [%(levelname)s] %(message)s",
    )

    if args.countdown_every <= 0:
        parser.error("--countdown-every must be positive")

    rng = random.Random(args.seed)
    try:
        game = GameState(grid_size=args.grid_size, rng=rng)
    except ValueError as e:
        parser.error(f"--grid-size: {e}")

    session = GameSession(game=game, store=HighScoreStore(args.high_score_path))
    result = run_simulation(session, RandomPlayer(rng=rng), args)

    print(json.dumps(result, indent=2))


if __name__ == "__main__":
    main()
