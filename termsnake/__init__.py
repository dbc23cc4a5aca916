"""Terminal snake: steer with the arrows or WASD, eat, grow, don't crash."""

__version__ = "1.0.0"
