"""
Design Configuration Loader
Handles loading design constant and catalog overrides from JSON files
"""

import json
import logging
from pathlib import Path

from .catalog import Catalog
from .design_rules import DEFAULT_CONSTANTS
from .exceptions import ConfigurationError

logger = logging.getLogger(__name__)

CONSTANTS_FILE = "design_constants.json"
CATALOG_FILE = "catalog.json"


class ConfigLoader:
    """Manages loading of optional override files for a design run"""

    def __init__(self, json_dir=None):
        """
        Initialize the configuration loader

        Args:
            json_dir: Directory holding design_constants.json and/or
                      catalog.json. None means built-in defaults only.
        """
        self.json_dir = Path(json_dir) if json_dir else None
        self.configs = {}

    def load_all_configs(self):
        """
        Load every override file present in the directory

        Returns:
            True if both override files were found and loaded

        Raises:
            ConfigurationError: If a file exists but is not a JSON object
        """
        if self.json_dir is None:
            return False

        for key, filename in (('constants', CONSTANTS_FILE), ('catalog', CATALOG_FILE)):
            filepath = self.json_dir / filename
            try:
                with open(filepath, 'r') as f:
                    data = json.load(f)
            except FileNotFoundError:
                logger.info(f"No {filename} in {self.json_dir}, using defaults")
                continue
            except json.JSONDecodeError as e:
                raise ConfigurationError(f"Error parsing {filepath}: {e}") from e

            if not isinstance(data, dict):
                raise ConfigurationError(f"{filepath} must contain a JSON object")

            self.configs[key] = data
            logger.info(f"Loaded {filename} ({len(data)} entries)")

        return len(self.configs) == 2

    def get_constants(self):
        """
        Design constants with any loaded overrides applied

        Returns:
            DesignConstants instance
        """
        return DEFAULT_CONSTANTS.with_overrides(self.configs.get('constants', {}))

    def get_catalog(self):
        """
        Equipment catalog with any loaded overrides applied

        Returns:
            Catalog instance (verified complete)
        """
        return Catalog(self.configs.get('catalog'))
