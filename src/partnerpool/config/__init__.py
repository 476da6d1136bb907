"""Configuration module for partnerpool."""

from partnerpool.config.settings import (
    DedupPolicy,
    SearchConfig,
    Settings,
    UmlautStrategy,
    get_settings,
)

__all__ = ["Settings", "SearchConfig", "UmlautStrategy", "DedupPolicy", "get_settings"]
