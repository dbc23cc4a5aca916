"""
Tests for the game loop state machine, run headless with fake collaborators.
"""

import random

from termsnake import settings
from termsnake.controls import Intent
from termsnake.engine import GameSession
from termsnake.game import Game, Phase
from termsnake.highscore import HighScore


class FakeKeyboard:
    """Replays scripted tick intents and prompt keys; idle once they run out."""

    def __init__(self, intents=(), keys=()):
        self.intents = list(intents)
        self.keys = list(keys)
        self.headings = []

    def sample(self, heading=None):
        self.headings.append(heading)
        return self.intents.pop(0) if self.intents else None

    def wait_for_key(self):
        return self.keys.pop(0) if self.keys else None


class FakeScreen:
    def __init__(self):
        self.shown = []

    def show(self, lines, clear=False):
        self.shown.append((list(lines), clear))

    def texts(self):
        return ["\n".join(lines) for lines, _ in self.shown]


def small_session(food=None):
    """10x5 grid, snake head at (5, 2) heading right."""
    def factory():
        session = GameSession(width=10, height=5, rng=random.Random(11))
        if food is not None:
            session.food.put(food)
        else:
            session.food.put((0, 0))
        return session
    return factory


def make_game(keyboard, tmp_path, food=None, best=0):
    path = tmp_path / "hs.txt"
    path.write_text(str(best))
    high_score = HighScore(str(path))
    high_score.load()
    delays = []
    game = Game(
        keyboard,
        FakeScreen(),
        high_score,
        delay=delays.append,
        session_factory=small_session(food),
    )
    return game, delays


class TestLifecycle:
    def test_runs_into_wall_then_quits(self, tmp_path):
        """Left alone the snake crosses the grid, dies on the wall, N exits."""
        game, delays = make_game(FakeKeyboard(keys=["x", "n"]), tmp_path)
        game.run()
        assert game.phase is Phase.TERMINATED
        snake = game.session.snake
        assert snake.death_reason == "wall"
        assert snake.head == (9, 2)
        # One debounce after the start key, then one pacing delay per survived tick.
        assert delays == [settings.PAUSE_DEBOUNCE_MS] + [100] * 4

    def test_start_screen_shown_first(self, tmp_path):
        game, _ = make_game(FakeKeyboard(keys=["x", "n"]), tmp_path)
        game.run()
        lines, clear = game.screen.shown[0]
        assert "====== SNAKE GAME ======" in lines
        assert clear is True

    def test_window_closed_on_start_screen(self, tmp_path):
        game, delays = make_game(FakeKeyboard(keys=[]), tmp_path)
        game.run()
        assert game.phase is Phase.TERMINATED
        assert game.session is None
        assert delays == []

    def test_quit_intent(self, tmp_path):
        """Quit ends the round at once without moving the snake."""
        game, _ = make_game(FakeKeyboard(intents=[Intent.QUIT], keys=["x", "n"]), tmp_path)
        game.run()
        snake = game.session.snake
        assert snake.alive is False
        assert snake.death_reason == "quit"
        assert snake.head == (5, 2)
        assert "You quit." in game.screen.texts()[-1]

    def test_replay_with_y(self, tmp_path):
        """Y after game over starts a fresh session; anything else ends the process."""
        keyboard = FakeKeyboard(intents=[Intent.QUIT, Intent.QUIT], keys=["x", "Y", "q"])
        game, _ = make_game(keyboard, tmp_path)
        first = []
        factory = game.session_factory

        def tracking_factory():
            session = factory()
            first.append(session)
            return session

        game.session_factory = tracking_factory
        game.run()
        assert len(first) == 2
        assert first[0] is not first[1]
        assert game.phase is Phase.TERMINATED

    def test_lowercase_y_replays(self, tmp_path):
        keyboard = FakeKeyboard(intents=[Intent.QUIT, Intent.QUIT], keys=["x", "y", ""])
        game, _ = make_game(keyboard, tmp_path)
        game.run()
        game_overs = [t for t in game.screen.texts() if t.startswith("GAME OVER!")]
        assert len(game_overs) == 2


class TestTick:
    def test_input_sampled_with_current_heading(self, tmp_path):
        keyboard = FakeKeyboard(intents=[Intent.UP], keys=["x", "n"])
        game, _ = make_game(keyboard, tmp_path)
        game.run()
        assert keyboard.headings[0] is not None
        assert keyboard.headings[0].name == "RIGHT"
        # Turned up on the first tick, then ran into the top wall.
        assert game.session.snake.death_reason == "wall"
        assert game.session.snake.head == (5, 0)

    def test_each_tick_renders_frame_before_moving(self, tmp_path):
        keyboard = FakeKeyboard(intents=[Intent.QUIT], keys=["x", "n"])
        game, _ = make_game(keyboard, tmp_path)
        game.run()
        frame, clear = game.screen.shown[1]
        assert clear is False
        assert frame[3] == "║   ooO    ║"

    def test_pause_keeps_state(self, tmp_path):
        """Pausing shows the pause screen and resumes exactly where it left off."""
        keyboard = FakeKeyboard(intents=[Intent.PAUSE, Intent.QUIT], keys=["x", "k", "n"])
        game, delays = make_game(keyboard, tmp_path)
        game.run()
        texts = game.screen.texts()
        assert any(t.startswith("GAME PAUSED") for t in texts)
        assert game.session.snake.head == (5, 2)
        assert game.session.snake.death_reason == "quit"
        assert delays == [settings.PAUSE_DEBOUNCE_MS, settings.PAUSE_DEBOUNCE_MS]

    def test_window_closed_while_paused(self, tmp_path):
        keyboard = FakeKeyboard(intents=[Intent.PAUSE], keys=["x"])
        game, _ = make_game(keyboard, tmp_path)
        game.run()
        assert game.phase is Phase.TERMINATED
        assert game.session.snake.death_reason == "quit"


class TestHighScore:
    def test_beating_high_score_persists_it(self, tmp_path):
        """Eating past the stored best writes the new score to disk right away."""
        keyboard = FakeKeyboard(keys=["x", "n"])
        game, _ = make_game(keyboard, tmp_path, food=(6, 2), best=5)
        game.run()
        snake = game.session.snake
        assert snake.score >= 10
        assert game.high_score.value == snake.score
        assert (tmp_path / "hs.txt").read_text() == str(snake.score)
        assert f"High Score: {snake.score}" in game.screen.texts()[-1]

    def test_lower_score_leaves_file_alone(self, tmp_path):
        keyboard = FakeKeyboard(intents=[Intent.QUIT], keys=["x", "n"])
        game, _ = make_game(keyboard, tmp_path, best=500)
        game.run()
        assert (tmp_path / "hs.txt").read_text() == "500"
