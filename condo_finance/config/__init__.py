"""Configuration package."""

from condo_finance.config.settings import (
    DashboardSettings,
    check_data_sources,
    get_settings,
)

__all__ = [
    "DashboardSettings",
    "check_data_sources",
    "get_settings",
]
