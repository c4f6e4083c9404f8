"""Run the URL shortener with uvicorn."""

import uvicorn

from urlshortener.core.config import settings


def main() -> None:
    uvicorn.run(
        "urlshortener.main:app",
        host=settings.SERVER_HOST,
        port=settings.SERVER_PORT,
        reload=settings.DEBUG,
        log_config=None,
    )


if __name__ == "__main__":
    main()
