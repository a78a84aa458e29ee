"""
Registry construction: built-in tools, then the deployment's extension modules.
"""

import importlib
import logging
from typing import List

from voice_relay.config.constants import LOGGER_NAME
from voice_relay.config.settings import Settings
from voice_relay.tools.builtin import register_builtin_tools
from voice_relay.tools.registry import ToolRegistry

logger = logging.getLogger(LOGGER_NAME)


def load_extension_tools(registry: ToolRegistry, module_names: List[str]) -> None:
    """Import each extension module and let it register its tools."""
    for module_name in module_names:
        try:
            module = importlib.import_module(module_name)
            module.register(registry)
            logger.info(f"Registered tools from {module_name}")
        except (ImportError, AttributeError) as e:
            logger.error(f"Error loading tools from module {module_name}: {e}")


def build_registry(settings: Settings) -> ToolRegistry:
    """Create the registry with built-in tools plus configured extensions."""
    registry = ToolRegistry()
    register_builtin_tools(registry)
    load_extension_tools(registry, settings.tool_modules)

    if not len(registry):
        logger.warning("No tools registered")
    else:
        logger.info(f"Loaded {len(registry)} tools for Gemini: {registry.names()}")
    return registry
