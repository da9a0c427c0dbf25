# proshop/__main__.py
import argparse
import sys

import uvicorn

from .config import Settings
from .logger import get_logger
from .main import create_app

_logger = get_logger(__name__)


def main(argv=None) -> int:
    parser = argparse.ArgumentParser(description="Run the proshop API server")
    parser.add_argument("-d", "--destroy", action="store_true", help="Start with empty stores instead of seed data")
    args = parser.parse_args(argv)

    settings = Settings.from_env()
    if args.destroy:
        settings = Settings(port=settings.port, host=settings.host, env=settings.env, seed=False)

    app = create_app(settings=settings)
    _logger.info(f"Server running in {settings.env} mode on port {settings.port}")
    uvicorn.run(
        app,
        host=settings.host,
        port=settings.port,
        log_level="debug" if settings.debug else "info",
    )
    return 0


if __name__ == "__main__":
    sys.exit(main())
