"""Run the shelter API with uvicorn: ``python -m shelter``."""

from __future__ import annotations

import uvicorn

from shelter.app import create_shelter_app
from shelter.infra.fastapi.settings import AppSettings
from shelter.infra.observability import configure_logging, get_logger


def main() -> None:
    settings = AppSettings()
    configure_logging()
    get_logger(__name__).info(
        "server_starting", host=settings.host, port=settings.port, version=settings.version
    )
    uvicorn.run(
        create_shelter_app(settings),
        host=settings.host,
        port=settings.port,
        log_config=None,
    )


if __name__ == "__main__":
    main()
