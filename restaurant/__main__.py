"""
开发服务器入口：python -m restaurant
"""

import uvicorn

from .config.settings import settings


def main():
    uvicorn.run(
        "restaurant.app:app",
        host=settings.host,
        port=settings.port,
        reload=settings.debug,
        log_level=settings.log_level.lower(),
    )


if __name__ == "__main__":
    main()
