"""Environment-driven configuration."""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from typing import Any, Dict, List

DEFAULT_CORS_ORIGINS = [
    "http://localhost:3000",
    "http://localhost:5173",
    "http://127.0.0.1:3000",
    "http://127.0.0.1:5173",
]


def _split_origins(raw: str) -> List[str]:
    return [origin.strip() for origin in raw.split(",") if origin.strip()]


@dataclass
class Config:
    database_path: str = "growth_sim.db"
    cors_origins: List[str] = field(default_factory=lambda: list(DEFAULT_CORS_ORIGINS))
    default_locale: str = "ja"
    default_currency: str = "JPY"
    log_level: str = "INFO"

    @classmethod
    def from_env(cls) -> "Config":
        """Read GROWTH_SIM_* variables, falling back to the defaults above."""
        origins = os.getenv("GROWTH_SIM_CORS_ORIGINS")
        return cls(
            database_path=os.getenv("GROWTH_SIM_DATABASE_PATH", cls.database_path),
            cors_origins=_split_origins(origins) if origins else list(DEFAULT_CORS_ORIGINS),
            default_locale=os.getenv("GROWTH_SIM_DEFAULT_LOCALE", cls.default_locale),
            default_currency=os.getenv("GROWTH_SIM_DEFAULT_CURRENCY", cls.default_currency),
            log_level=os.getenv("GROWTH_SIM_LOG_LEVEL", cls.log_level).upper(),
        )

    def to_flask(self) -> Dict[str, Any]:
        return {
            "DATABASE_PATH": self.database_path,
            "CORS_ORIGINS": self.cors_origins,
            "DEFAULT_LOCALE": self.default_locale,
            "DEFAULT_CURRENCY": self.default_currency,
            "LOG_LEVEL": self.log_level,
        }
