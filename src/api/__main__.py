"""Run the API server: python -m src.api"""

import logging

import uvicorn

from src.config import settings


def main() -> None:
    logging.basicConfig(
        level=settings.log_level.upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    uvicorn.run("src.api.app:app", host=settings.api_host, port=settings.api_port)


if __name__ == "__main__":
    main()
