"""Plugin configuration loading and validation."""

from icon_variants.configs.loader import (
    ConfigError,
    LayoutConfig,
    PluginConfig,
    SelectionConfig,
    SetStyleConfig,
    UiConfig,
    VariantTableConfig,
    load_config,
)

__all__ = [
    "ConfigError",
    "LayoutConfig",
    "PluginConfig",
    "SelectionConfig",
    "SetStyleConfig",
    "UiConfig",
    "VariantTableConfig",
    "load_config",
]
