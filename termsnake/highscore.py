"""Best score across runs, kept in a one-line text file."""

import logging

from termsnake import settings

logger = logging.getLogger(__name__)


class HighScore:
    """
    Process-wide best score.

    Loaded once at startup and written straight back to disk every time it is
    beaten, so a crash never loses a record. File problems are logged and
    otherwise ignored: the in-memory value stays authoritative.
    """

    def __init__(self, path=settings.HIGHSCORE_PATH):
        self.path = path
        self.value = 0

    def load(self):
        """Read the stored best score; a missing or unreadable file leaves it at 0."""
        try:
            with open(self.path, "r", encoding="utf-8") as f:
                text = f.read().strip()
        except FileNotFoundError:
            logger.info("No high score file at %s, starting from 0", self.path)
            return self.value
        except (OSError, UnicodeDecodeError) as e:
            logger.warning("Could not read high score from %s: %s", self.path, e)
            return self.value

        try:
            value = int(text.split()[0]) if text else 0
        except ValueError:
            logger.warning("Ignoring malformed high score file %s: %r", self.path, text)
            return self.value

        self.value = max(0, value)
        return self.value

    def save(self):
        """Overwrite the file with the current value. Returns False if writing failed."""
        try:
            with open(self.path, "w", encoding="utf-8") as f:
                f.write(str(self.value))
        except OSError as e:
            logger.warning("Could not save high score to %s: %s", self.path, e)
            return False
        return True

    def record(self, score):
        """Store score if it beats the current best. Returns True on a new record."""
        if score <= self.value:
            return False
        self.value = score
        logger.info("New high score: %d", score)
        self.save()
        return True
