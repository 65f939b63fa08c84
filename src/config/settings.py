"""
Configuration settings for the Employee Records API
"""

import os
from dataclasses import dataclass

_TRUTHY = {"1", "true", "yes", "on", "require"}

# Server configuration
PORT = int(os.getenv("PORT", 3000))
HOST = os.getenv("HOST", "0.0.0.0")
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()

# CORS settings - every origin is allowed unless narrowed
ALLOWED_ORIGINS = [origin.strip() for origin in os.getenv("ALLOWED_ORIGINS", "*").split(",") if origin.strip()]


@dataclass
class DatabaseSettings:
    """Connection parameters for the record store"""
    host: str = "localhost"
    port: int = 5432
    user: str = "postgres"
    password: str = ""
    database: str = "company_db"
    ssl: bool = False
    connect_timeout: float = 10

    @classmethod
    def from_env(cls) -> "DatabaseSettings":
        """Build settings from DB_* environment variables, falling back to the field defaults"""
        defaults = cls()
        return cls(
            host=os.getenv("DB_HOST", defaults.host),
            port=int(os.getenv("DB_PORT", defaults.port)),
            user=os.getenv("DB_USER", defaults.user),
            password=os.getenv("DB_PASSWORD", defaults.password),
            database=os.getenv("DB_NAME", defaults.database),
            ssl=os.getenv("DB_SSL", str(defaults.ssl)).strip().lower() in _TRUTHY,
            connect_timeout=float(os.getenv("DB_CONNECT_TIMEOUT", defaults.connect_timeout)),
        )

    def describe(self) -> str:
        """Connection target for log lines (never includes the password)"""
        return f"{self.user}@{self.host}:{self.port}/{self.database}"
