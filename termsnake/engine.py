"""
Game state and per-tick update rules.

Nothing in here touches the terminal, the keyboard or the clock, so the whole
simulation can be driven step by step from tests.
"""

import enum
import logging
import random
from collections import deque

from termsnake import settings

logger = logging.getLogger(__name__)


class Direction(enum.Enum):
    """Movement directions as (dx, dy) grid offsets, y growing downwards."""

    UP = (0, -1)
    RIGHT = (1, 0)
    DOWN = (0, 1)
    LEFT = (-1, 0)

    @property
    def opposite(self):
        """The direction pointing straight back."""
        dx, dy = self.value
        return Direction((-dx, -dy))

    def step(self, pos):
        """Return the cell one step from pos in this direction."""
        dx, dy = self.value
        return pos[0] + dx, pos[1] + dy


class Snake:
    """
    The player's snake.

    Attributes:
        body: deque of (x, y) from the head at index 0 to the tail at the end
        capacity: maximum number of segments the body may hold
        direction: current heading
        score: points collected this session
        speed: current tick interval in milliseconds
        alive: whether the round is still running
        death_reason: 'wall', 'self' or 'quit' once alive is False
    """

    def __init__(self, positions, direction=Direction.RIGHT, capacity=settings.MAX_SNAKE_LENGTH):
        self.body = deque(positions)
        if not self.body:
            raise ValueError("A snake needs at least one segment.")
        if len(self.body) > capacity:
            raise ValueError("Initial snake is longer than its capacity.")
        self.capacity = capacity
        self.direction = direction
        self.score = 0
        self.speed = settings.BASE_INTERVAL
        self.alive = True
        self.death_reason = None

    @property
    def head(self):
        return self.body[0]

    @property
    def length(self):
        return len(self.body)

    @property
    def saturated(self):
        """True once the body has reached its capacity."""
        return len(self.body) >= self.capacity

    def kill(self, reason):
        """End the round, remembering why."""
        self.alive = False
        self.death_reason = reason

    def grow(self):
        """Duplicate the last segment; the copy separates on the next move."""
        if self.saturated:
            return False
        self.body.append(self.body[-1])
        return True

    def __repr__(self):
        return (
            f"<Snake head={self.head} length={self.length} "
            f"direction={self.direction.name} score={self.score} alive={self.alive}>"
        )


class Food:
    """A single food item; position is meaningless while present is False."""

    def __init__(self, position=(0, 0), present=False):
        self.position = position
        self.present = present

    def clear(self):
        self.present = False

    def put(self, position):
        self.position = position
        self.present = True


def in_bounds(pos, width, height):
    """Return True if pos lies inside a width x height grid."""
    return 0 <= pos[0] < width and 0 <= pos[1] < height


def create_initial_snake(length, width, height):
    """Create a horizontal snake with its head at the grid centre, tail to the left."""
    # A single segment's growth copy would land on the head and count as a self hit.
    if length < 2:
        raise ValueError("START_LENGTH must be at least 2.")
    head_x = width // 2
    head_y = height // 2
    if length > head_x + 1:
        raise ValueError("START_LENGTH does not fit within the current grid width.")
    return [(head_x - i, head_y) for i in range(length)]


def tick_interval(score):
    """Milliseconds between ticks: 3 ms faster every 10 points, never under the floor."""
    interval = settings.BASE_INTERVAL - (score // 10) * settings.INTERVAL_STEP
    return max(settings.MIN_INTERVAL, interval)


def random_food_position(occupied, width, height, rng=None, attempts=settings.FOOD_SAMPLE_ATTEMPTS):
    """
    Return a random grid position that is not occupied by the snake.

    Rejection sampling is tried first. Once `attempts` samples have all landed
    on the snake, a free cell is picked uniformly from the complete list of
    free cells. Returns None when the snake covers the whole grid.
    """
    rng = rng if rng is not None else random
    taken = set(occupied)
    for _ in range(attempts):
        pos = (rng.randrange(width), rng.randrange(height))
        if pos not in taken:
            return pos

    free = [(x, y) for y in range(height) for x in range(width) if (x, y) not in taken]
    if not free:
        return None
    return rng.choice(free)


def advance(snake, width, height):
    """
    Move the snake one cell in its current direction.

    Every segment takes the place of the one in front of it and the head moves
    on. A head leaving the grid kills the snake and leaves the body untouched.
    """
    new_head = snake.direction.step(snake.head)
    if not in_bounds(new_head, width, height):
        snake.kill("wall")
        return

    snake.body.appendleft(new_head)
    snake.body.pop()


def hits_itself(snake):
    """Return True if the head shares a cell with any other segment."""
    head = snake.head
    return any(segment == head for segment in list(snake.body)[1:])


class GameSession:
    """One round of play: the snake, the food and the grid they live on."""

    def __init__(
        self,
        width=settings.GRID_WIDTH,
        height=settings.GRID_HEIGHT,
        start_length=settings.START_LENGTH,
        max_length=settings.MAX_SNAKE_LENGTH,
        rng=None,
    ):
        if width < 1 or height < 1:
            raise ValueError("Grid dimensions must be positive.")
        self.width = width
        self.height = height
        self.rng = rng if rng is not None else random.Random()
        self.snake = Snake(
            create_initial_snake(start_length, width, height),
            direction=Direction.RIGHT,
            capacity=max_length,
        )
        self.food = Food()
        self.place_food()

    def place_food(self):
        """Put food on a free cell, or leave it absent if none is left."""
        pos = random_food_position(self.snake.body, self.width, self.height, self.rng)
        if pos is None:
            self.food.clear()
        else:
            self.food.put(pos)

    def update(self):
        """
        Advance the simulation by one tick.

        Returns True when food was eaten this tick so the caller can compare
        the score against the high score.
        """
        snake = self.snake
        if not snake.alive:
            return False

        advance(snake, self.width, self.height)
        if not snake.alive:
            logger.info("Snake hit the wall at %s with score %d", snake.head, snake.score)
            return False

        eaten = self.food.present and snake.head == self.food.position
        if eaten:
            if not snake.grow():
                logger.debug("Snake at capacity %d, food eaten without growth", snake.capacity)
            snake.score += settings.FOOD_REWARD
            self.food.clear()
            self.place_food()

        if hits_itself(snake):
            snake.kill("self")
            logger.info("Snake ran into itself at %s with score %d", snake.head, snake.score)

        return eaten

    def __repr__(self):
        return f"<GameSession {self.width}x{self.height} snake={self.snake!r}>"
