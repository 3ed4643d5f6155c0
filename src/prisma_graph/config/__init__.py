"""Project configuration."""

from prisma_graph.config.base import (
    EmitterConfig,
    LayoutConfig,
    ParserConfig,
    ProjectConfig,
)
from prisma_graph.config.loader import ConfigLoader, load_config

__all__ = [
    "EmitterConfig",
    "LayoutConfig",
    "ParserConfig",
    "ProjectConfig",
    "ConfigLoader",
    "load_config",
]
