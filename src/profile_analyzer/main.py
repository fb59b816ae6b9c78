from __future__ import annotations

import logging

import uvicorn

from profile_analyzer.infrastructure.config import Settings, get_settings


def configure_logging(settings: Settings) -> None:
    logging.basicConfig(
        level=settings.log_level.upper(),
        format="%(asctime)s  %(levelname)-8s  %(name)s  %(message)s",
    )
    # httpx logs every request at INFO
    logging.getLogger("httpx").setLevel(logging.WARNING)


def main() -> None:
    """Serve the analyzer API with uvicorn (HOST / PORT from settings)."""
    settings = get_settings()
    configure_logging(settings)
    uvicorn.run(
        "profile_analyzer.interface.app:create_app",
        factory=True,
        host=settings.host,
        port=settings.port,
        log_level=settings.log_level.lower(),
    )


if __name__ == "__main__":
    main()
