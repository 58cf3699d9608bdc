"""Manages the Digital Surprise data directory.

Directory layout:
    ~/.local/share/digital-surprise/      (or $SURPRISE_DATA_DIR)
        surprise.db         # SQLite database
        files/              # Uploaded media (local blob backend)
        logs/
            server.log      # Server logs
"""

import os
from pathlib import Path

DATA_DIR_ENV = "SURPRISE_DATA_DIR"


class SurprisePaths:
    """Resolves on-disk locations for the server.

    Supports overriding the data directory for testing.
    """

    def __init__(self, *, data_dir: Path | None = None) -> None:
        """Initialize paths.

        Args:
            data_dir: Override data directory. Defaults to $SURPRISE_DATA_DIR,
                or ~/.local/share/digital-surprise when unset.
        """
        if data_dir is None:
            env_dir = os.environ.get(DATA_DIR_ENV)
            data_dir = (
                Path(env_dir)
                if env_dir
                else Path.home() / ".local" / "share" / "digital-surprise"
            )
        self._data_dir = data_dir

    @property
    def data_dir(self) -> Path:
        """Data directory."""
        return self._data_dir

    @property
    def database_file(self) -> Path:
        """SQLite database file."""
        return self._data_dir / "surprise.db"

    @property
    def files_dir(self) -> Path:
        """Uploaded media directory."""
        return self._data_dir / "files"

    @property
    def logs_dir(self) -> Path:
        return self._data_dir / "logs"

    @property
    def server_log(self) -> Path:
        return self.logs_dir / "server.log"

    def ensure_directories(self) -> None:
        """Create all required directories if they don't exist."""
        self._data_dir.mkdir(parents=True, exist_ok=True)
        self.files_dir.mkdir(parents=True, exist_ok=True)
        self.logs_dir.mkdir(parents=True, exist_ok=True)
