"""Config Loader for loading project configuration from YAML files."""

from pathlib import Path
from typing import Any

import yaml
from pydantic import ValidationError

from prisma_graph.config.base import ProjectConfig
from prisma_graph.errors import ConfigError
from prisma_graph.utils.helpers import merge_dicts


DEFAULT_CONFIG_FILENAME = "prisma-graph.yaml"


class ConfigLoader:
    """Loads project configuration from YAML files."""

    def load_file(self, path: Path | str) -> ProjectConfig:
        """Load configuration from a YAML file.

        Args:
            path: Path to the YAML file

        Returns:
            Loaded ProjectConfig instance
        """
        path = Path(path)
        if not path.exists():
            raise ConfigError(f"Config file not found: {path}")
        if not path.is_file():
            raise ConfigError(f"Config path is not a file: {path}")

        try:
            with open(path) as f:
                content = f.read()
        except OSError as e:
            raise ConfigError(f"Failed to read config {path}: {e}") from e

        return self.load_from_string(content)

    def load_from_string(self, content: str) -> ProjectConfig:
        """Load configuration from a YAML string.

        An empty document yields the default configuration.
        """
        try:
            data = yaml.safe_load(content)
        except yaml.YAMLError as e:
            raise ConfigError(f"Invalid YAML in config: {e}") from e

        if data is None:
            data = {}
        if not isinstance(data, dict):
            raise ConfigError("Config must be a YAML mapping")

        return self._parse_config(data)

    def _parse_config(self, data: dict[str, Any]) -> ProjectConfig:
        """Overlay config data onto the defaults and validate it."""
        merged = merge_dicts(ProjectConfig().model_dump(), data)
        try:
            return ProjectConfig.model_validate(merged)
        except ValidationError as e:
            raise ConfigError(f"Invalid config: {e}") from e

    def save_file(self, config: ProjectConfig, path: Path | str) -> None:
        """Save configuration to a YAML file.

        Args:
            config: The configuration to save
            path: Path for the output file
        """
        path = Path(path)
        path.parent.mkdir(parents=True, exist_ok=True)

        with open(path, "w") as f:
            yaml.dump(config.model_dump(), f, default_flow_style=False, sort_keys=False)


def load_config(path: Path | str | None = None) -> ProjectConfig:
    """Convenience function to load configuration.

    Args:
        path: Path to the YAML file, or None for the defaults

    Returns:
        Loaded ProjectConfig instance
    """
    if path is None:
        return ProjectConfig()
    return ConfigLoader().load_file(path)
