"""Interactive game window.

Wires the pieces the run controller treats as collaborators: pygame events
feed an InputLatch, the clock paces frames, the Renderer draws snapshots.
"""

import argparse
import logging
from typing import Optional

import pygame

from .config import GameConfig
from .input import InputLatch
from .render import Renderer
from .run import RunController

logger = logging.getLogger(__name__)

JUMP_KEYS = (pygame.K_SPACE, pygame.K_UP, pygame.K_w)


class RunnerGame:
    """Main game window coordinating input, simulation and rendering.

    Handles:
    - Space / up / W / mouse button as the single jump action
    - R to restart, or pressing the jump action after a run has ended
    - Esc or closing the window to quit
    """

    def __init__(self, config: Optional[GameConfig] = None, seed: Optional[int] = None):
        self.config = config or GameConfig()

        pygame.init()
        self.screen = pygame.display.set_mode(
            (self.config.screen_width, self.config.screen_height)
        )
        pygame.display.set_caption("Neon Runner")
        self.clock = pygame.time.Clock()

        self.controller = RunController(self.config, seed=seed)
        self.renderer = Renderer(self.config, self.screen)
        self.input = InputLatch()
        self.running = False

    def reset(self) -> None:
        self.input.clear()
        self.controller.reset()

    def _on_press(self) -> None:
        if not self.controller.active and not self.input.held:
            # The press that restarts a finished run is not also a jump.
            self.reset()
            self.input.press()
            self.input.sample()
            return
        self.input.press()

    def handle_events(self) -> None:
        """Process pygame events."""
        for event in pygame.event.get():
            if event.type == pygame.QUIT:
                self.running = False
            elif event.type == pygame.KEYDOWN:
                if event.key == pygame.K_ESCAPE:
                    self.running = False
                elif event.key == pygame.K_r:
                    self.reset()
                elif event.key in JUMP_KEYS:
                    self._on_press()
            elif event.type == pygame.KEYUP:
                if event.key in JUMP_KEYS:
                    self.input.release()
            elif event.type == pygame.MOUSEBUTTONDOWN:
                self._on_press()
            elif event.type == pygame.MOUSEBUTTONUP:
                self.input.release()

    def step(self, dt: float) -> None:
        """One frame: simulate then draw."""
        self.controller.tick(dt, self.input.sample())
        self.renderer.draw(self.controller.snapshot())
        pygame.display.flip()

    def run(self) -> None:
        """Main game loop."""
        self.running = True
        self.reset()
        self.clock.tick()

        while self.running:
            self.handle_events()
            dt = self.clock.tick(self.config.fps) / 1000.0
            self.step(dt)

        pygame.quit()


def setup_logging(debug: bool = False) -> None:
    """Configure logging."""
    level = logging.DEBUG if debug else logging.INFO
    logging.basicConfig(
        level=level,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%H:%M:%S",
    )


def main(argv: Optional[list] = None) -> None:
    parser = argparse.ArgumentParser(description="Auto-scrolling one-button platformer")
    parser.add_argument("--seed", type=int, default=None, help="Course seed for a reproducible run")
    parser.add_argument("--fps", type=int, default=60, help="Target frame rate")
    parser.add_argument("--width", type=int, default=1280)
    parser.add_argument("--height", type=int, default=720)
    parser.add_argument("--debug", action="store_true", help="Verbose logging")
    args = parser.parse_args(argv)

    setup_logging(args.debug)
    config = GameConfig(screen_width=args.width, screen_height=args.height, fps=args.fps)
    logger.info("Starting Neon Runner (%dx%d @ %d fps)", args.width, args.height, args.fps)
    RunnerGame(config, seed=args.seed).run()


if __name__ == "__main__":
    main()
