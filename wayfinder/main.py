"""Application entry point for the Wayfinder API.

Run locally:
    python -m wayfinder.main
or
    uvicorn wayfinder.main:app --host 0.0.0.0 --port 8000
"""

from __future__ import annotations

import logging

import uvicorn

from wayfinder.api import create_app
from wayfinder.config import Settings, load_env_file

load_env_file()
settings = Settings.from_env()
logging.basicConfig(
    level=getattr(logging, settings.log_level, logging.INFO),
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)
app = create_app(settings)


if __name__ == "__main__":
    uvicorn.run(
        "wayfinder.main:app",
        host=settings.api_host,
        port=settings.api_port,
        reload=settings.api_reload,
    )
