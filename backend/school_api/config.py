"""Application settings and validation."""

import os
from pathlib import Path

BASE = Path(__file__).resolve().parent.parent


class Settings:
    ENV: str
    DATABASE_URL: str
    LOG_LEVEL: str
    SQL_ECHO: bool
    ALLOW_DEV_CORS: bool
    MAX_PAGE_LIMIT: int

    def __init__(self):
        self.ENV = os.getenv("ENV", "dev").lower()
        self.DATABASE_URL = os.getenv("DATABASE_URL", f"sqlite:///{BASE / 'app.db'}")
        self.LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()
        self.SQL_ECHO = os.getenv("SQL_ECHO", "false").lower() == "true"
        self.ALLOW_DEV_CORS = os.getenv("ALLOW_DEV_CORS", "true").lower() == "true"
        self.MAX_PAGE_LIMIT = int(os.getenv("MAX_PAGE_LIMIT", "0"))  # 0 = no cap
        self._validate()

    def _validate(self):
        if self.MAX_PAGE_LIMIT < 0:
            raise RuntimeError("MAX_PAGE_LIMIT must be >= 0 (0 disables the cap)")
        if not self.DATABASE_URL:
            raise RuntimeError("DATABASE_URL must not be empty")


settings = Settings()
