"""Main CLI application using Cyclopts."""

import cyclopts
import uvicorn

app = cyclopts.App(
    name="cutout",
    help="Cutout - background removal and mirroring service",
)


@app.command
def serve(
    host: str = "0.0.0.0",
    port: int = 8000,
    reload: bool = False,
) -> None:
    """Run the HTTP server in the foreground.

    Configuration comes from CUTOUT_* environment variables, .env, or the
    YAML file named by CUTOUT_CONFIG_FILE.

    Args:
        host: Host to bind to.
        port: Port to listen on.
        reload: Restart on source changes (development only).
    """
    uvicorn.run(
        "cutout.application.rest.app:create_app",
        factory=True,
        host=host,
        port=port,
        reload=reload,
    )


def main() -> None:
    app()
