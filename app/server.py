"""
Run the API with uvicorn using HOST/PORT from settings:

  python -m app.server
"""

import sys

import uvicorn

from app.core.config import settings


def main() -> int:
    uvicorn.run(
        "app.main:app",
        host=settings.HOST,
        port=settings.PORT,
        reload=settings.APP_ENV == "dev" and settings.DEBUG,
        log_level=settings.LOG_LEVEL.lower(),
    )
    return 0


if __name__ == "__main__":
    sys.exit(main())
