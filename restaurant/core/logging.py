"""
日志配置
应用启动时调用一次，各模块通过 logging.getLogger(__name__) 获取日志器
"""

import logging

LOG_FORMAT = "%(asctime)s %(levelname)s [%(name)s] %(message)s"


def configure_logging(level: str = "INFO") -> None:
    root = logging.getLogger()
    if not root.handlers:
        logging.basicConfig(level=level.upper(), format=LOG_FORMAT)
    else:
        root.setLevel(level.upper())
    # uvicorn 访问日志过于冗长
    logging.getLogger("uvicorn.access").setLevel(logging.WARNING)
