"""
Configuration Management for Condo Finance

Uses pydantic-settings for type-safe configuration from environment variables.

DESIGN DECISION: All configuration is centralized here.
The parsers themselves take plain keyword arguments, so they stay pure;
the loading flow reads these settings and passes the values down.
"""

from functools import lru_cache
from pathlib import Path
from typing import Optional

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class DashboardSettings(BaseSettings):
    """
    Main application settings.

    Loads configuration from DASHBOARD_* environment variables and .env file.
    """

    model_config = SettingsConfigDict(
        env_prefix="DASHBOARD_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore"
    )

    # Presentation
    app_title: str = Field(
        default="Condomínio Dashboard",
        description="Title shown in the page header"
    )
    organization_name: str = Field(
        default="Edificio Cond. Curitiba e Porto Alegre",
        description="Name of the building the accounts belong to"
    )

    # CSV format
    field_delimiter: str = Field(
        default=";",
        min_length=1,
        max_length=1,
        description="Field separator used by the exports"
    )
    expenses_header_keyword: str = Field(
        default="categoria",
        min_length=1,
        description="Column-0 keyword that marks a header line in the expenses file"
    )
    funds_header_keyword: str = Field(
        default="data",
        min_length=1,
        description="Column-0 keyword that marks a header line in the funds file"
    )
    balances_header_keyword: str = Field(
        default="data",
        min_length=1,
        description="Column-0 keyword that marks a header line in the balances file"
    )

    # Optional files preloaded at startup
    expenses_csv_path: Optional[Path] = Field(
        default=None,
        description="Expenses CSV to load when the dashboard starts"
    )
    funds_csv_path: Optional[Path] = Field(
        default=None,
        description="Funds CSV to load when the dashboard starts"
    )
    balances_csv_path: Optional[Path] = Field(
        default=None,
        description="Account balances CSV to load when the dashboard starts"
    )

    # Logging
    log_level: str = Field(
        default="INFO",
        description="Standard library log level name"
    )
    json_logs: bool = Field(
        default=False,
        description="Render log lines as JSON instead of console output"
    )
    audit_history_size: int = Field(
        default=50,
        ge=1,
        le=1000,
        description="How many audit events are kept in memory for display"
    )

    @field_validator('log_level')
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        """Only accept standard level names."""
        level = v.strip().upper()
        allowed = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}
        if level not in allowed:
            raise ValueError(f"Unsupported log level: {v}. Allowed: {sorted(allowed)}")
        return level

    @property
    def configured_sources(self) -> dict[str, Optional[Path]]:
        """Preload paths keyed by dataset kind value."""
        return {
            "expenses": self.expenses_csv_path,
            "funds": self.funds_csv_path,
            "balances": self.balances_csv_path,
        }


@lru_cache()
def get_settings() -> DashboardSettings:
    """
    Get application settings (cached).

    Call get_settings.cache_clear() to reload if needed.
    """
    return DashboardSettings()


def check_data_sources(settings: Optional[DashboardSettings] = None) -> dict[str, bool]:
    """
    Report which configured preload files exist.

    Returns a dict of {dataset_kind: file_exists}. Sources without a
    configured path are reported as False.
    """
    settings = settings or get_settings()
    return {
        kind: path is not None and path.is_file()
        for kind, path in settings.configured_sources.items()
    }
