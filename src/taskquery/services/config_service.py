"""Configuration service for loading taskquery.yml."""

import logging
from pathlib import Path

import yaml
from pydantic import ValidationError

from ..models import SearchConfig

logger = logging.getLogger(__name__)


class ConfigService:
    """Service for loading and caching search configuration."""

    CONFIG_FILE = "taskquery.yml"

    def __init__(self, project_root: Path) -> None:
        """Initialize the config service.

        Args:
            project_root: Directory containing taskquery.yml
        """
        self.project_root = project_root
        self._config: SearchConfig | None = None
        self._config_error: str | None = None

    @property
    def has_config_error(self) -> bool:
        """Check if there was an error loading config."""
        return self._config_error is not None

    @property
    def config_error(self) -> str | None:
        """Get the config error message if any."""
        return self._config_error

    def get_config(self) -> SearchConfig:
        """Get configuration, loading from file if not cached."""
        if self._config is None:
            self._config = self._load_config()
        return self._config

    def reload(self) -> None:
        """Clear cached configuration, forcing reload on next access."""
        self._config = None
        self._config_error = None

    def _load_config(self) -> SearchConfig:
        """Load configuration from file or return default."""
        config_path = self.project_root / self.CONFIG_FILE
        self._config_error = None

        if not config_path.exists():
            logger.debug("No %s found, using defaults", self.CONFIG_FILE)
            return SearchConfig.default()

        try:
            with open(config_path) as f:
                data = yaml.safe_load(f)
        except yaml.YAMLError as e:
            self._config_error = f"Invalid YAML in {self.CONFIG_FILE}: {e}"
            logger.warning(self._config_error)
            return SearchConfig.default()

        if data is None:
            self._config_error = f"{self.CONFIG_FILE} is empty"
            logger.warning(self._config_error)
            return SearchConfig.default()

        if not isinstance(data, dict):
            self._config_error = f"{self.CONFIG_FILE} must contain a mapping"
            logger.warning(self._config_error)
            return SearchConfig.default()

        section = data.get("search", data)
        if not isinstance(section, dict):
            self._config_error = f"'search' in {self.CONFIG_FILE} must be a mapping"
            logger.warning(self._config_error)
            return SearchConfig.default()

        try:
            config = SearchConfig(**section)
        except ValidationError as e:
            self._config_error = f"Invalid {self.CONFIG_FILE}: {e}"
            logger.warning(self._config_error)
            return SearchConfig.default()

        logger.info("Loaded %s (week starts on %s)", self.CONFIG_FILE, config.week_starts_on)
        return config
