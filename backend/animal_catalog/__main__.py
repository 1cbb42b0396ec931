"""Run the API with uvicorn: `python -m animal_catalog` or `animal-catalog`."""

import uvicorn

from animal_catalog.config import settings


def main() -> None:
    uvicorn.run(
        "animal_catalog.main:app",
        host=settings.host,
        port=settings.port,
        log_level=settings.log_level.lower(),
    )


if __name__ == "__main__":
    main()
