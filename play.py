from __future__ import annotations

import argparse
import logging

import pygame

from snakegrid.game import Button, Game
from snakegrid.render import PygameCanvas

KEYMAP = {
    pygame.K_UP: Button.UP,
    pygame.K_DOWN: Button.DOWN,
    pygame.K_LEFT: Button.LEFT,
    pygame.K_RIGHT: Button.RIGHT,
}


def parse_args() -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Play Snake")
    parser.add_argument("--ups", type=int, default=10, help="Game updates per second")
    parser.add_argument("--fps", type=int, default=60, help="Rendered frames per second")
    parser.add_argument("--window", type=int, nargs=2, default=(200, 200))
    parser.add_argument("--cell-size", type=int, default=20)
    parser.add_argument("--seed", type=int, default=None)
    parser.add_argument(
        "--log-level",
        type=str,
        default="WARNING",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
    )
    return parser.parse_args()


def main() -> None:
    args = parse_args()
    logging.basicConfig(level=args.log_level, format="%(asctime)s %(name)s %(levelname)s %(message)s")

    pygame.init()
    window = pygame.display.set_mode(tuple(args.window))
    pygame.display.set_caption("spinning-square")
    clock = pygame.time.Clock()

    game = Game(seed=args.seed, cell_size=args.cell_size)
    canvas = PygameCanvas(window)

    update_ms = 1000.0 / args.ups
    elapsed = 0.0
    ticks = 0
    running = True

    while running:
        # Input first so a press always affects the next update.
        for event in pygame.event.get():
            if event.type == pygame.QUIT:
                running = False
            elif event.type == pygame.KEYDOWN:
                if event.key == pygame.K_ESCAPE:
                    running = False
                else:
                    game.pressed(KEYMAP.get(event.key, event.key))

        while running and elapsed >= update_ms:
            game.update()
            ticks += 1
            elapsed -= update_ms

        game.render(canvas)
        pygame.display.flip()
        elapsed += clock.tick(args.fps)

    print(f"Exited after {ticks} updates, snake length {len(game.snake)}")
    pygame.quit()


if __name__ == "__main__":
    main()
