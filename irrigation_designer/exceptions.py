"""
Design Engine Exceptions
Errors raised for invalid configuration or incomplete equipment catalogs
"""


class DesignError(Exception):
    """Base class for all irrigation design errors"""


class ConfigurationError(DesignError, ValueError):
    """Project options or override files are invalid"""


class CatalogLookupError(ConfigurationError, KeyError):
    """A referenced catalog entry does not exist"""

    def __init__(self, section, key):
        self.section = section
        self.key = key
        super().__init__(f"No '{key}' entry in {section} catalog")

    def __str__(self):
        # KeyError would otherwise repr() the message
        return self.args[0]


class InvalidSiteError(DesignError, ValueError):
    """Site-analysis data is missing required fields or malformed"""
