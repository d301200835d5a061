"""PlantKey web application with dependency injection."""

import logging

import click
import uvicorn

from plantkey.config import ConfigManager
from plantkey.system.structlog_configurator import configure_structlog
from plantkey.web.core.factory import create_app

# Configure logging before anything else imports and creates loggers
config_manager = ConfigManager()
config = config_manager.load()
configure_structlog(config)

# Disable uvicorn access logger since we have our own structured logging middleware
uvicorn_access_logger = logging.getLogger("uvicorn.access")
uvicorn_access_logger.disabled = True

app = create_app()


@click.command()
@click.option("--host", default="127.0.0.1", show_default=True)
@click.option("--port", type=int, default=8000, show_default=True)
def serve(host: str, port: int) -> None:
    """Serve the PlantKey API."""
    uvicorn.run(app, host=host, port=port, log_config=None)


if __name__ == "__main__":
    serve()
