"""Main entry point for SupportNET."""

import os
from pathlib import Path

import uvicorn
from dotenv import load_dotenv

from supportnet import Application, config_from_env
from supportnet.api import create_fastapi_app
from supportnet.logging_config import setup_logging


def main():
    """Run the application."""
    project_root = Path(__file__).resolve().parent.parent
    load_dotenv(project_root / ".env")
    setup_logging()

    # Get configuration from environment
    api_host = os.getenv("API_HOST", "localhost")
    api_port = int(os.getenv("API_PORT", "8000"))
    config = config_from_env()

    app = create_fastapi_app(Application(config))

    uvicorn.run(
        app,
        host=api_host,
        port=api_port,
        log_level="info",
    )


if __name__ == "__main__":
    main()
