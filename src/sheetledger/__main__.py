"""Run the API server: ``python -m sheetledger``."""

import uvicorn

from sheetledger.config import settings


def main() -> None:
    uvicorn.run(
        "sheetledger.main:app",
        host=settings.host,
        port=settings.port,
        log_level=settings.log_level.lower(),
    )


if __name__ == "__main__":
    main()
