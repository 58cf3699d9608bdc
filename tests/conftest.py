"""Global test fixtures."""

import os
import tempfile

# Point the data directory somewhere disposable before any test module imports Config
# This must happen at module load time, not in a fixture
os.environ.setdefault("SURPRISE_DATA_DIR", tempfile.mkdtemp(prefix="surprise-tests-"))
os.environ.setdefault("LOGFIRE_SEND_TO_LOGFIRE", "false")
