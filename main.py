from __future__ import annotations

import argparse
import logging

from civsim import config
from civsim.render_ascii import render_map_ascii
from repl.repl import run_repl
from scenarios.standard import build_game

logger = logging.getLogger(__name__)


def autoplay(game, max_turns: int) -> None:
    """Hand every nation to the AI and play until someone wins or turns run out."""
    for nation in game.nations:
        if nation.name not in game.ai_controllers:
            game.enable_ai(nation)

    while game.turn_number <= max_turns and not game.is_game_over():
        game.run_ai_turn()
        game.advance()

    logger.info(f"Autoplay stopped on turn {game.turn_number} (phase {game.phase.value})")
    for nation in game.nations:
        logger.info(f"{nation.name}: {len(nation.cities)} cities, {len(nation.units)} units, "
                    f"{nation.resources}")


def main():
    parser = argparse.ArgumentParser(description="Hex-grid nation strategy simulation")
    parser.add_argument("--seed", type=int, default=None, help="RNG seed (default: HEXCIV_SEED)")
    parser.add_argument("--width", type=int, default=None, help="Map width in hexes")
    parser.add_argument("--height", type=int, default=None, help="Map height in hexes")
    parser.add_argument("--autoplay", type=int, default=0, metavar="N",
                        help="Run N turns AI-vs-AI instead of the REPL")
    args = parser.parse_args()

    logging.basicConfig(level=config.log_level(),
                        format="%(asctime)s %(levelname)s %(name)s: %(message)s")

    seed = args.seed if args.seed is not None else config.game_seed()
    game = build_game(seed=seed,
                      width=args.width or config.grid_width(),
                      height=args.height or config.grid_height())

    if args.autoplay > 0:
        autoplay(game, args.autoplay)
        print(render_map_ascii(game))
    else:
        run_repl(game)


if __name__ == "__main__":
    main()
