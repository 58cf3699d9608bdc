"""Run the API server in the foreground."""

import cyclopts
import uvicorn

from surprise.cli.console import get_console
from surprise.cli.util import SurprisePaths
from surprise.config import Config
from surprise.infrastructure.persistence.migrate import run_migrations

app = cyclopts.App(name="serve", help="Run the Digital Surprise API server")


@app.default
def serve(host: str = "0.0.0.0", port: int = 8000, reload: bool = False) -> None:
    """Migrate the database if configured, then serve the API.

    Args:
        host: Host to bind to.
        port: Port to listen on.
        reload: Restart on code changes (development).
    """
    console = get_console()
    SurprisePaths().ensure_directories()
    config = Config()  # type: ignore[call-arg]

    if config.database.backend == "sql" and config.database.auto_migrate:
        with console.status("Running database migrations..."):
            run_migrations(config.database.url)
        console.success("Migrations complete")

    console.info(f"Serving on http://{host}:{port} (Ctrl+C to stop)")
    uvicorn.run(
        "surprise.application.api.rest.app:app",
        host=host,
        port=port,
        reload=reload,
        log_level=config.logging.level.lower(),
    )
