"""
Character-grid rendering.

build_frame() and the *_lines() helpers turn game state into plain text
lines. Screen writes those lines to the terminal, homing the cursor first so
every tick is a full redraw in place, and mirrors them into the pygame window
that holds keyboard focus.
"""

import logging
import sys

import pygame

from termsnake import settings

logger = logging.getLogger(__name__)

CURSOR_HOME = "\x1b[H"
CLEAR_SCREEN = "\x1b[2J"
ERASE_LINE = "\x1b[K"
ERASE_BELOW = "\x1b[J"

DEATH_MESSAGES = {
    "wall": "You hit the wall.",
    "self": "You ran into yourself.",
    "quit": "You quit.",
}


def build_frame(session, high_score):
    """Draw the bordered play field plus the status and hint lines."""
    width, height = session.width, session.height
    snake, food = session.snake, session.food

    grid = [[settings.EMPTY_GLYPH] * width for _ in range(height)]
    # Tail first so the head wins any shared cell.
    for i in range(snake.length - 1, -1, -1):
        x, y = snake.body[i]
        grid[y][x] = settings.HEAD_GLYPH if i == 0 else settings.BODY_GLYPH
    if food.present:
        fx, fy = food.position
        grid[fy][fx] = settings.FOOD_GLYPH

    left, fill, right = settings.BORDER_TOP
    lines = [left + fill * width + right]
    for row in grid:
        lines.append(settings.BORDER_SIDE + "".join(row) + settings.BORDER_SIDE)
    left, fill, right = settings.BORDER_BOTTOM
    lines.append(left + fill * width + right)

    lines.append(
        f"SCORE: {snake.score}   HIGH SCORE: {high_score}   LENGTH: {snake.length}"
    )
    lines.append(settings.CONTROLS_HINT)
    return lines


def start_lines():
    """Title screen text."""
    return ["====== SNAKE GAME ======", "Press any key to start..."]


def pause_lines():
    """Pause screen text."""
    return ["GAME PAUSED", "Press any key to continue..."]


def game_over_lines(session, high_score):
    """Final score, best score, cause of death and the replay prompt."""
    snake = session.snake
    return [
        "GAME OVER!",
        DEATH_MESSAGES.get(snake.death_reason, ""),
        f"Score: {snake.score}",
        f"High Score: {high_score}",
        "",
        "Play again? (Y/N)",
    ]


def get_mono_font(size):
    """Load a monospaced font so the grid lines up, then fall back to pygame default."""
    preferred = ["Consolas", "DejaVu Sans Mono", "Menlo", "Courier New"]
    for name in preferred:
        path = pygame.font.match_font(name)
        if path:
            return pygame.font.Font(path, size)
    return pygame.font.Font(None, size)


class Window:
    """Pygame window sized to the character grid."""

    def __init__(self, cols, rows):
        pygame.display.set_caption(settings.WINDOW_TITLE)
        self.font = get_mono_font(settings.FONT_SIZE)
        char_w = self.font.size(settings.BORDER_TOP[1])[0]
        self.line_height = self.font.get_linesize()
        pad = settings.WINDOW_PADDING
        self.surface = pygame.display.set_mode(
            (cols * char_w + pad * 2, rows * self.line_height + pad * 2)
        )

    def draw(self, lines):
        """Redraw the whole window with lines, one per text row."""
        pad = settings.WINDOW_PADDING
        self.surface.fill(settings.BG_COLOR)
        y = pad
        for line in lines:
            if line:
                text = self.font.render(line, True, settings.TEXT_COLOR)
                self.surface.blit(text, (pad, y))
            y += self.line_height
        pygame.display.flip()


class Screen:
    """Writes frames to a text stream and, when given one, to a Window."""

    def __init__(self, stream=sys.stdout, window=None):
        self.stream = stream
        self.window = window

    def show(self, lines, clear=False):
        """Write a full frame from the top-left; clear=True wipes the terminal first."""
        prefix = CLEAR_SCREEN + CURSOR_HOME if clear else CURSOR_HOME
        body = "".join(line + ERASE_LINE + "\n" for line in lines)
        self.stream.write(prefix + body + ERASE_BELOW)
        self.stream.flush()

        if self.window is not None:
            try:
                self.window.draw(lines)
            except pygame.error as e:
                logger.error("Window drawing failed, continuing in the terminal only: %s", e)
                self.window = None
