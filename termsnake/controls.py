"""
Keyboard input: held-key polling once per tick plus blocking prompts.

Only one intent is taken per tick. Keys are checked in the fixed order of
KEY_PRIORITY and the first held key wins, so holding two opposite arrows can
never turn the snake back onto its own neck.
"""

import enum
import logging

import pygame

from termsnake.engine import Direction

logger = logging.getLogger(__name__)


class Intent(enum.Enum):
    UP = "up"
    RIGHT = "right"
    DOWN = "down"
    LEFT = "left"
    PAUSE = "pause"
    QUIT = "quit"


INTENT_TO_DIRECTION = {
    Intent.UP: Direction.UP,
    Intent.RIGHT: Direction.RIGHT,
    Intent.DOWN: Direction.DOWN,
    Intent.LEFT: Direction.LEFT,
}

# Checked top to bottom, first held key wins.
KEY_PRIORITY = [
    (Intent.UP, (pygame.K_UP, pygame.K_w)),
    (Intent.RIGHT, (pygame.K_RIGHT, pygame.K_d)),
    (Intent.DOWN, (pygame.K_DOWN, pygame.K_s)),
    (Intent.LEFT, (pygame.K_LEFT, pygame.K_a)),
    (Intent.PAUSE, (pygame.K_p,)),
    (Intent.QUIT, (pygame.K_q, pygame.K_ESCAPE)),
]


def sample_intent(pressed, heading=None):
    """
    Return the highest-priority intent whose key is held, or None.

    With a heading given, a held key that would reverse it does not match and
    the next key in the order is considered instead.
    """
    for intent, keys in KEY_PRIORITY:
        if not any(pressed[key] for key in keys):
            continue
        direction = INTENT_TO_DIRECTION.get(intent)
        if direction is not None and heading is not None and direction == heading.opposite:
            continue
        return intent
    return None


def steer(snake, intent):
    """Turn the snake unless the new direction is straight back."""
    direction = INTENT_TO_DIRECTION.get(intent)
    if direction is None or direction == snake.direction.opposite:
        return False
    snake.direction = direction
    return True


class Keyboard:
    """Reads the keyboard through pygame; requires an initialised display."""

    def __init__(self):
        self.closed = False

    def _drain(self):
        """Empty the event queue, noting a window close."""
        # Pumping the queue keeps get_pressed() current.
        for event in pygame.event.get():
            if event.type == pygame.QUIT:
                logger.info("Window close requested")
                self.closed = True

    def sample(self, heading=None):
        """Non-blocking snapshot of the current intent."""
        self._drain()
        if self.closed:
            return Intent.QUIT
        return sample_intent(pygame.key.get_pressed(), heading)

    def wait_for_key(self):
        """
        Block until a key is pressed and return the character it types.

        Keys without a character (arrows, shift) return an empty string.
        Returns None if the window is closed instead.
        """
        if self.closed:
            return None
        pygame.event.clear(pygame.KEYDOWN)
        while True:
            event = pygame.event.wait()
            if event.type == pygame.QUIT:
                logger.info("Window close requested")
                self.closed = True
                return None
            if event.type == pygame.KEYDOWN:
                return event.unicode
