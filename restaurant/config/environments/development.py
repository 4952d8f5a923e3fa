from typing import List

from ..settings import Settings


class DevelopmentSettings(Settings):
    debug: bool = True
    log_level: str = "DEBUG"
    database_url: str = "duckdb://./data/restaurant_dev.duckdb"
    cors_origins: List[str] = ["*"]
