# =============================================================================
# PEDIDOS v1.0 - CONFIGURATION
# =============================================================================
# Settings read from environment variables (.env supported)
# =============================================================================

import os

from dotenv import load_dotenv

load_dotenv()


class Settings:
    """Application-wide configuration."""

    # Database PostgreSQL
    PG_HOST: str = os.getenv("PG_HOST", "localhost")
    PG_PORT: int = int(os.getenv("PG_PORT", "5432"))
    PG_DATABASE: str = os.getenv("PG_DATABASE", "rip")
    PG_USER: str = os.getenv("PG_USER", "rip_app")
    PG_PASSWORD: str = os.getenv("PG_PASSWORD", "")

    # Pool
    PG_POOL_MIN: int = int(os.getenv("PG_POOL_MIN", "2"))
    PG_POOL_MAX: int = int(os.getenv("PG_POOL_MAX", "20"))

    # Schemas for order tables and the invoicing table
    DB_SCHEMA: str = os.getenv("DB_SCHEMA", "rip")
    INVOICE_SCHEMA: str = os.getenv("INVOICE_SCHEMA", "rip")

    # API
    API_PREFIX: str = os.getenv("API_PREFIX", "/api")
    LOG_LEVEL: str = os.getenv("LOG_LEVEL", "INFO")

    # Set by the test suite: no pool at startup
    TESTING: bool = os.getenv("TESTING", "false").lower() == "true"

    # Version
    VERSION: str = "1.0.0"
    APP_NAME: str = "RIP PEDIDOS"


# Singleton instance
config = Settings()
