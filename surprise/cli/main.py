"""Main CLI application using Cyclopts.

The CLI is a thin HTTP client - it talks to the server via REST API,
except for `serve`, which runs the server itself.
"""

import cyclopts

from surprise.cli.commands import create, serve, view

app = cyclopts.App(
    name="surprise",
    help="Digital Surprise - share a photo or video behind a link and a QR code",
)

app.command(create.app, name="create")
app.command(view.app, name="view")
app.command(serve.app, name="serve")


if __name__ == "__main__":
    app()
