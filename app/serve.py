"""
Server entrypoint. Run from project root:

  python -m app.serve

Equivalent to `uvicorn app.main:app` bound to HOST:PORT from the environment (or .env).
"""

import logging

import uvicorn

from app.core.config import get_settings
from app.main import app


def main() -> None:
    settings = get_settings()
    logging.basicConfig(
        level=settings.LOG_LEVEL,
        format="%(asctime)s %(levelname)s %(name)s %(message)s",
        datefmt="%Y-%m-%dT%H:%M:%SZ",
    )
    uvicorn.run(app, host=settings.HOST, port=settings.PORT, log_config=None)


if __name__ == "__main__":
    main()
