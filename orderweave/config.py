"""
Settings — explicit configuration, passed in rather than read globally.

    settings = Settings.from_env()
    enricher = Enricher(store, settings.enrichment)
"""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass, field

from dotenv import load_dotenv


@dataclass(frozen=True, slots=True)
class EnrichmentSettings:
    """Knobs of a single enrichment pass."""

    memo_size: int = 256
    unknown_product_title: str = "Unknown Product"
    default_price: str = "0"


@dataclass(frozen=True, slots=True)
class Settings:
    database_url: str = "sqlite+aiosqlite:///:memory:"
    page_size: int = 10
    log_level: str = "INFO"
    enrichment: EnrichmentSettings = field(default_factory=EnrichmentSettings)

    @classmethod
    def from_env(cls) -> Settings:
        """
        Build settings from the environment (and a `.env` file, if present).

        Recognised variables:
            ORDERWEAVE_DATABASE_URL
            ORDERWEAVE_PAGE_SIZE
            ORDERWEAVE_LOG_LEVEL
            ORDERWEAVE_MEMO_SIZE
        """
        load_dotenv()
        defaults = cls()
        return cls(
            database_url=os.getenv("ORDERWEAVE_DATABASE_URL", defaults.database_url),
            page_size=_int_env("ORDERWEAVE_PAGE_SIZE", defaults.page_size),
            log_level=os.getenv("ORDERWEAVE_LOG_LEVEL", defaults.log_level).upper(),
            enrichment=EnrichmentSettings(
                memo_size=_int_env("ORDERWEAVE_MEMO_SIZE", defaults.enrichment.memo_size),
            ),
        )


def _int_env(name: str, default: int) -> int:
    raw = os.getenv(name)
    if raw is None:
        return default
    try:
        return int(raw)
    except ValueError:
        return default


def configure_logging(settings: Settings) -> None:
    """Configure root logging for applications. The library itself never calls this."""
    logging.basicConfig(
        level=settings.log_level,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


__all__ = ("EnrichmentSettings", "Settings", "configure_logging")
