"""
Irrigation Designer - Deterministic Irrigation System Design
"""

from .catalog import Catalog
from .config_loader import ConfigLoader
from .context import DesignContext
from .design_engine import (
    generate_irrigation_design,
    generate_design_from_json,
    create_design_summary
)
from .design_rules import DesignConstants
from .exceptions import (
    DesignError,
    ConfigurationError,
    CatalogLookupError,
    InvalidSiteError
)
from .head_placement import place_all_heads
from .material_calc import calculate_materials
from .pipe_routing import route_pipes
from .site_parser import parse_site_analysis, parse_project_parameters
from .validation import validate_design
from .zone_assignment import assign_zones

__version__ = '1.0.0'
__all__ = [
    'Catalog',
    'ConfigLoader',
    'DesignContext',
    'DesignConstants',
    'DesignError',
    'ConfigurationError',
    'CatalogLookupError',
    'InvalidSiteError',
    'generate_irrigation_design',
    'generate_design_from_json',
    'create_design_summary',
    'parse_site_analysis',
    'parse_project_parameters',
    'place_all_heads',
    'assign_zones',
    'route_pipes',
    'calculate_materials',
    'validate_design'
]
