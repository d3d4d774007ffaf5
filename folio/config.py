"""Site configuration for Folio.

Settings are read from ``folio.yaml`` in the project root and merged over
DEFAULT_CONFIG. The content model treats the resulting Settings as read-only.

Key functions:
- load_config: Load the raw configuration mapping.
- Settings.load: Build typed settings for a project.
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Any

import yaml

CONFIG_FILENAME = "folio.yaml"
ENVIRONMENT_VARIABLE = "FOLIO_ENV"

DEFAULT_CONFIG = {
    "title": "My Site",
    "subtitle": "",
    "content": "content",
    "environment": "development",
    "read_more": "Continue reading",
}


class ConfigError(Exception):
    """Error raised when ``folio.yaml`` cannot be used.

    Attributes:
        config_path: Path to the offending configuration file.
    """

    def __init__(self, config_path: Path, message: str):
        self.config_path = config_path
        super().__init__(f"{config_path}: {message}")


def load_config(project_root: Path) -> dict[str, Any]:
    """Load site configuration from folio.yaml.

    Args:
        project_root: Root directory of the project.

    Returns:
        Dictionary containing configuration values, with defaults applied.
        The FOLIO_ENV environment variable overrides ``environment``.

    Raises:
        ConfigError: If the file is not valid YAML or not a mapping.
    """
    config_path = project_root / CONFIG_FILENAME
    config = DEFAULT_CONFIG.copy()
    if config_path.exists():
        with open(config_path, encoding="utf-8") as f:
            try:
                loaded = yaml.safe_load(f) or {}
            except yaml.YAMLError as exc:
                raise ConfigError(config_path, f"invalid YAML: {exc}") from exc
        if not isinstance(loaded, dict):
            raise ConfigError(config_path, "expected a mapping of settings")
        config.update(loaded)
    env = os.environ.get(ENVIRONMENT_VARIABLE)
    if env:
        config["environment"] = env
    return config


@dataclass(frozen=True)
class Settings:
    """Site-wide settings consumed by the content model.

    Attributes:
        title: Site title, used to build page titles.
        subtitle: Site subtitle, available to Jinja content as ``settings.subtitle``.
        content_dir: Directory holding ``pages/`` and ``menu.txt``.
        production: Whether drafts are hidden.
        read_more: Default "read more" link text.
    """

    title: str = DEFAULT_CONFIG["title"]
    subtitle: str = ""
    content_dir: Path = Path(DEFAULT_CONFIG["content"])
    production: bool = False
    read_more: str = DEFAULT_CONFIG["read_more"]

    @property
    def pages_dir(self) -> Path:
        return self.content_dir / "pages"

    @property
    def menu_file(self) -> Path:
        return self.content_dir / "menu.txt"

    @classmethod
    def from_config(cls, config: dict[str, Any], project_root: Path) -> Settings:
        """Build settings from a configuration mapping.

        Args:
            config: Mapping as returned by load_config.
            project_root: Directory relative content paths are resolved against.

        Returns:
            Settings instance.
        """
        content_dir = Path(str(config.get("content") or DEFAULT_CONFIG["content"]))
        if not content_dir.is_absolute():
            content_dir = project_root / content_dir
        environment = str(config.get("environment") or "").strip().lower()
        return cls(
            title=str(config.get("title") or ""),
            subtitle=str(config.get("subtitle") or ""),
            content_dir=content_dir,
            production=environment == "production",
            read_more=str(config.get("read_more") or DEFAULT_CONFIG["read_more"]),
        )

    @classmethod
    def load(cls, project_root: Path) -> Settings:
        """Load settings for the project rooted at ``project_root``."""
        return cls.from_config(load_config(project_root), project_root)
