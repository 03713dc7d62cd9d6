"""Plugin entrypoint.

Wires a host to a ``VariantGenerator``: configures logging, opens the UI
panel, routes UI messages to the generator and sends the initial form
state.

Usage::

    from icon_variants.plugin import run_plugin
    from icon_variants.scene import Document

    doc = Document()
    generator = run_plugin(doc)
    doc.ui.receive({"type": "generate", "variants": [{"sizePx": 16}]})
"""

from __future__ import annotations

import logging
from pathlib import Path

from icon_variants.configs.loader import PluginConfig, load_config
from icon_variants.generator import VariantGenerator
from icon_variants.messages import DefaultsMessage, VariantRow
from icon_variants.scene.host import Host
from icon_variants.utils.logging_config import setup_logging

logger = logging.getLogger(__name__)


def defaults_message(config: PluginConfig) -> DefaultsMessage:
    """Initial form state built from the configured variant table."""
    return DefaultsMessage(
        variants=[
            VariantRow(size_px=row.size_px, stroke_weight=row.stroke_weight)
            for row in config.variants.defaults
        ],
        custom_stroke=config.variants.custom_stroke,
    )


def run_plugin(
    host: Host,
    config: PluginConfig | str | Path | None = None,
    *,
    log_level: str = "INFO",
    configure_logging: bool = True,
) -> VariantGenerator:
    """Start the plugin on *host*.

    Parameters
    ----------
    host : Host
        Editor to run against.
    config : PluginConfig | str | Path | None
        Loaded config, a path to a config YAML, or ``None`` for defaults.
    log_level : str
        Root log level when ``configure_logging`` is set.
    configure_logging : bool
        Install the package's log handlers.  Embedding applications that
        manage logging themselves pass ``False``.

    Returns
    -------
    VariantGenerator
        Generator receiving the UI's messages.
    """
    if configure_logging:
        setup_logging(log_level, context={"app": "icon_variants"}, quiet_libs=["shapely"])

    cfg = config if isinstance(config, PluginConfig) else load_config(config)

    host.show_ui(cfg.ui.width, cfg.ui.height)
    generator = VariantGenerator(host, cfg)
    host.ui.on_message = generator.handle_message
    host.ui.post_message(defaults_message(cfg).to_wire())

    logger.info("Plugin ready (%d default sizes)", len(cfg.variants.defaults))
    return generator
