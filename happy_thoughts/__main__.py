"""Run the API with uvicorn on HOST:PORT (default 0.0.0.0:8080)."""

import uvicorn

from happy_thoughts.config import settings


def main() -> None:
    uvicorn.run(
        "happy_thoughts.main:app",
        host=settings.host,
        port=settings.port,
        log_level=settings.log_level.lower(),
    )


if __name__ == "__main__":
    main()
