"""
Game loop: start screen, fixed-tick play, pause, game over and replay.

Every collaborator (keyboard, screen, delay) is handed in, so the loop can
be run headless with fakes.
"""

import enum
import logging
import sys

import pygame

from termsnake import settings
from termsnake.controls import Intent, Keyboard, steer
from termsnake.display import (
    Screen,
    Window,
    build_frame,
    game_over_lines,
    pause_lines,
    start_lines,
)
from termsnake.engine import GameSession, tick_interval
from termsnake.highscore import HighScore

logger = logging.getLogger(__name__)


class Phase(enum.Enum):
    START = "start"
    PLAYING = "playing"
    PAUSED = "paused"
    GAME_OVER = "game_over"
    TERMINATED = "terminated"


class Game:
    """Owns the current session and moves between phases until terminated."""

    def __init__(self, keyboard, screen, high_score, delay=pygame.time.wait, session_factory=GameSession):
        self.keyboard = keyboard
        self.screen = screen
        self.high_score = high_score
        self.delay = delay
        self.session_factory = session_factory
        self.session = None
        self.phase = Phase.START
        self.handlers = {
            Phase.START: self.start_screen,
            Phase.PLAYING: self.tick,
            Phase.PAUSED: self.pause_screen,
            Phase.GAME_OVER: self.game_over_screen,
        }

    def run(self):
        """Run phase handlers until one returns TERMINATED."""
        while self.phase is not Phase.TERMINATED:
            self.phase = self.handlers[self.phase]()

    def new_session(self):
        """Start a fresh round and go to PLAYING."""
        self.session = self.session_factory()
        logger.info("New session started: %r", self.session)
        # Let go of the prompt key before the first tick reads the keyboard.
        self.delay(settings.PAUSE_DEBOUNCE_MS)
        return Phase.PLAYING

    def start_screen(self):
        """Show the title and wait for any key."""
        self.screen.show(start_lines(), clear=True)
        if self.keyboard.wait_for_key() is None:
            return Phase.TERMINATED
        return self.new_session()

    def tick(self):
        """Render, read input, move, check collisions, then wait out the interval."""
        session = self.session
        snake = session.snake
        self.screen.show(build_frame(session, self.high_score.value))

        intent = self.keyboard.sample(snake.direction)
        if intent is Intent.PAUSE:
            return Phase.PAUSED
        if intent is Intent.QUIT:
            snake.kill("quit")
            logger.info("Player quit with score %d", snake.score)
            return Phase.GAME_OVER
        if intent is not None:
            steer(snake, intent)

        if session.update():
            self.high_score.record(snake.score)
        if not snake.alive:
            return Phase.GAME_OVER

        snake.speed = tick_interval(snake.score)
        self.delay(snake.speed)
        return Phase.PLAYING

    def pause_screen(self):
        """Hold the round until any key; closing the window quits."""
        self.screen.show(pause_lines(), clear=True)
        if self.keyboard.wait_for_key() is None:
            self.session.snake.kill("quit")
            return Phase.GAME_OVER
        self.delay(settings.PAUSE_DEBOUNCE_MS)
        return Phase.PLAYING

    def game_over_screen(self):
        """Show the result and replay on Y, otherwise terminate."""
        snake = self.session.snake
        logger.info(
            "Game over (%s): score %d, length %d, high score %d",
            snake.death_reason, snake.score, snake.length, self.high_score.value,
        )
        self.screen.show(game_over_lines(self.session, self.high_score.value), clear=True)
        key = self.keyboard.wait_for_key()
        if key in ("y", "Y"):
            return self.new_session()
        return Phase.TERMINATED


def main():
    logging.basicConfig(
        filename=settings.LOG_FILE,
        level=settings.LOG_LEVEL,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    high_score = HighScore()
    high_score.load()

    pygame.init()
    try:
        window = Window(settings.GRID_WIDTH + 2, settings.GRID_HEIGHT + 4)
        game = Game(Keyboard(), Screen(sys.stdout, window), high_score)
        game.run()
    finally:
        pygame.quit()


if __name__ == "__main__":
    main()
