"""Process-wide blacklist of blocked API keys.

The list is read from a plain text file, one key per line; blank lines and
lines starting with ``#`` are ignored. It is loaded when the application
starts and reloaded on SIGHUP.
"""

import logging
from pathlib import Path
from typing import Iterable, Optional

from .config import settings

logger = logging.getLogger(__name__)


class Blacklist:
    """A reloadable set of blocked API keys."""

    def __init__(self, path: Optional[str] = None, keys: Iterable[str] = ()):
        self.path = path
        self._keys: frozenset[str] = frozenset(keys)

    def __contains__(self, api_key: object) -> bool:
        return api_key in self._keys

    def __len__(self) -> int:
        return len(self._keys)

    def load(self) -> None:
        """Read the blacklist file, replacing the current keys.

        A missing or unset file leaves an empty blacklist. A file that exists
        but cannot be read raises, so a bad reload keeps the previous keys.
        """
        if not self.path:
            self._keys = frozenset()
            return

        file_path = Path(self.path)
        if not file_path.exists():
            logger.warning(f"Blacklist file {file_path} not found, no keys blocked")
            self._keys = frozenset()
            return

        keys = set()
        for line in file_path.read_text(encoding="utf-8").splitlines():
            line = line.strip()
            if line and not line.startswith("#"):
                keys.add(line)
        self._keys = frozenset(keys)
        logger.info(f"Loaded {len(keys)} blacklisted API keys from {file_path}")

    def reload(self) -> None:
        try:
            self.load()
        except OSError as e:
            logger.error(f"Blacklist reload failed, keeping {len(self._keys)} keys: {e}")

    def handle_signal(self, signum, frame) -> None:
        """Signal handler that reloads the blacklist."""
        logger.info(f"Received signal {signum}, reloading blacklist")
        self.reload()


# Global blacklist instance
blacklist = Blacklist(settings.blacklist_path)


def get_blacklist() -> Blacklist:
    """Get blacklist instance for dependency injection."""
    return blacklist
