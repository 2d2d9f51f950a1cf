"""Main entry point for the staff directory backend."""

from pathlib import Path

import uvicorn
from dotenv import load_dotenv

from staffdir import Application, Settings
from staffdir.api import create_asgi_app
from staffdir.logging_config import setup_logging


def main():
    """Run the application."""
    project_root = Path(__file__).resolve().parent.parent
    load_dotenv(project_root / ".env")

    settings = Settings.from_env()
    setup_logging(settings.log_level)

    application = Application(settings)

    uvicorn.run(
        create_asgi_app(application),
        host=settings.api_host,
        port=settings.api_port,
        log_level=settings.log_level.lower(),
        # Keep the JSON handlers from setup_logging
        log_config=None,
    )


if __name__ == "__main__":
    main()
