"""Cross-cutting utilities (lowest dependency layer).

This package provides shared primitives for:
    - Unified logging (logging_config)
    - YAML loading (fs)

No module in utils/ may import from upper layers (scene, variants, etc.).

Convenience imports:
    from icon_variants.utils import fs
    from icon_variants.utils.logging_config import setup_logging, get_logger
"""

from . import fs
from . import logging_config

from .logging_config import get_logger, log_context, pop_context, push_context, setup_logging

__all__ = [
    # Modules
    'fs',
    'logging_config',
    # Direct exports
    'setup_logging',
    'get_logger',
    'push_context',
    'pop_context',
    'log_context',
]
