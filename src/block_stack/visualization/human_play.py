from __future__ import annotations

import argparse
import logging
from typing import Dict, Optional, Sequence

import pygame

from block_stack.game import Action, BlockStackGame, GameConfig, GameState, GravityScheduler
from block_stack.storage import JsonHighScoreStore
from .renderer import Renderer


logger = logging.getLogger(__name__)

KEY_TO_ACTION: Dict[int, Action] = {
    pygame.K_LEFT: Action.LEFT,
    pygame.K_RIGHT: Action.RIGHT,
    pygame.K_UP: Action.ROTATE,
    pygame.K_DOWN: Action.SOFT_DROP,
    pygame.K_SPACE: Action.HARD_DROP,
    pygame.K_p: Action.PAUSE,
}

DEFAULT_SCORES_FILE = "~/.block_stack_scores.json"


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(description="Play Block Stack with the keyboard.")
    p.add_argument("--seed", type=int, default=None)
    p.add_argument("--cell-size", type=int, default=30)
    p.add_argument("--fps", type=int, default=60)
    p.add_argument("--scores-file", type=str, default=DEFAULT_SCORES_FILE)
    p.add_argument("--log-level", type=str, default="WARNING",
                   choices=["DEBUG", "INFO", "WARNING", "ERROR"])
    return p


def toggle_high_scores(game: BlockStackGame, renderer: Renderer) -> None:
    if renderer.high_scores is None:
        renderer.high_scores = game.load_high_scores()
    else:
        renderer.high_scores = None
    game.refresh()


def handle_key(game: BlockStackGame, renderer: Renderer, event: pygame.event.Event) -> bool:
    """Apply one key press. Returns False when the player asked to quit."""
    if event.key == pygame.K_ESCAPE:
        return False
    if game.state is GameState.GAME_OVER and game.high_score_pending:
        if event.key == pygame.K_RETURN:
            entries = game.submit_initials(renderer.prompt)
            renderer.prompt = ""
            # Show the updated table right away
            renderer.high_scores = entries
            for rank, entry in enumerate(entries, start=1):
                logger.info("#%d %s %d", rank, entry.initials, entry.score)
        elif event.key == pygame.K_BACKSPACE:
            renderer.prompt = renderer.prompt[:-1]
        elif event.unicode.isalnum() and len(renderer.prompt) < 3:
            renderer.prompt += event.unicode.upper()
        game.refresh()
        return True
    if event.key == pygame.K_h:
        toggle_high_scores(game, renderer)
        return True
    if event.key == pygame.K_RETURN and game.state in (GameState.IDLE, GameState.GAME_OVER):
        game.start()
    elif event.key == pygame.K_r:
        game.reset()
        game.start()
    else:
        action = KEY_TO_ACTION.get(event.key)
        if action is not None:
            game.step(action)
    return True


def run(argv: Optional[Sequence[str]] = None) -> None:
    args = build_parser().parse_args(argv)
    logging.basicConfig(level=getattr(logging, args.log_level), format="%(levelname)s %(name)s: %(message)s")

    config = GameConfig(random_seed=args.seed)
    pygame.init()
    try:
        clock = pygame.time.Clock()
        size = Renderer.window_size(config.width, config.height, cell_size=args.cell_size)
        screen = pygame.display.set_mode(size)
        pygame.display.set_caption("Block Stack")

        renderer = Renderer(screen, cell_size=args.cell_size)
        game = BlockStackGame(config, renderer=renderer, high_scores=JsonHighScoreStore(args.scores_file))
        scheduler = GravityScheduler(game, pygame.time.get_ticks())
        game.refresh()

        running = True
        while running:
            for event in pygame.event.get():
                if event.type == pygame.QUIT:
                    running = False
                elif event.type == pygame.KEYDOWN:
                    running = handle_key(game, renderer, event)

            # Gravity, then redraw
            scheduler.tick(pygame.time.get_ticks())
            clock.tick(args.fps)
    finally:
        pygame.quit()


if __name__ == "__main__":  # pragma: no cover
    run()
