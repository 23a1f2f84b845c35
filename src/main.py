from __future__ import annotations

import logging

from src.config import settings
from src.engine.registry import PluginRegistry
from src.games.hive.plugin import HivePlugin

logger = logging.getLogger(__name__)


def configure_logging(level: str | None = None) -> None:
    logging.basicConfig(
        level=(level or settings.log_level).upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


def create_registry() -> PluginRegistry:
    """Build the plugin registry with every game this engine provides."""
    registry = PluginRegistry()
    registry.register(HivePlugin())
    logger.info(f"Loaded {len(registry.list_games())} game plugins")
    return registry
