"""
Site Input Parsing Module
Converts site-analysis and project JSON data into design records
"""

import logging

from .exceptions import ConfigurationError, InvalidSiteError
from .geometry import area_of_polygon, centroid
from .models import IrrigableZone, Point, ProjectParameters, SiteAnalysis, ZONE_KINDS

logger = logging.getLogger(__name__)

WATER_SUPPLY_SIZES = (0.75, 1.0, 1.5, 2.0)
SOIL_TYPES = ('clay', 'loam', 'sand')
TURF_TYPES = ('bermudagrass', 'fescue', 'zoysia', 'centipede', 'st-augustine')
APPLICATION_TYPES = ('commercial', 'multifamily', 'athletic-field', 'hoa-common-area')


def parse_point(data):
    """
    Convert a {'x': .., 'y': ..} dictionary to a Point

    Returns:
        Point, or None when data is None
    """
    if data is None:
        return None
    try:
        return Point(float(data['x']), float(data['y']))
    except (KeyError, TypeError, ValueError) as e:
        raise InvalidSiteError(f"Invalid point {data!r}") from e


def parse_irrigable_zone(data, default_kind):
    """
    Build an IrrigableZone from site-analysis JSON

    Missing area is computed from the boundary (or width x length);
    a missing center falls back to the boundary centroid.

    Args:
        data: Zone dictionary (camelCase keys)
        default_kind: Kind used when the zone has no 'type'

    Returns:
        IrrigableZone
    """
    kind = data.get('type', default_kind)
    if kind not in ZONE_KINDS:
        raise InvalidSiteError(f"Zone {data.get('id')!r} has unknown type '{kind}'")

    boundary = tuple(parse_point(pt) for pt in data.get('boundaryPoints') or [])
    width = float(data.get('widthFt', 0) or 0)
    length = float(data.get('lengthFt', 0) or 0)

    area = data.get('areaFt2')
    if area is None:
        area = area_of_polygon(boundary) if len(boundary) >= 3 else width * length

    if data.get('centerX') is not None and data.get('centerY') is not None:
        center = Point(float(data['centerX']), float(data['centerY']))
    elif boundary:
        center = centroid(boundary)
    else:
        raise InvalidSiteError(f"Zone {data.get('id')!r} has neither a center nor a boundary")

    return IrrigableZone(
        id=str(data.get('id', '')),
        kind=kind,
        width_ft=width,
        length_ft=length,
        area_ft2=float(area),
        center=center,
        boundary_points=boundary,
        shape=data.get('shape', 'rectangular'),
        exposure=data.get('exposure', 'full-sun'),
        slope_ratio=data.get('slopeRatio')
    )


def parse_site_analysis(data):
    """
    Build a SiteAnalysis from the site-analysis collaborator's JSON

    Args:
        data: Dictionary with propertyWidthFt, propertyLengthFt and
              optional zone lists and equipment locations

    Returns:
        SiteAnalysis

    Raises:
        InvalidSiteError: If property dimensions are missing or invalid
    """
    try:
        width = float(data['propertyWidthFt'])
        length = float(data['propertyLengthFt'])
    except (KeyError, TypeError, ValueError) as e:
        raise InvalidSiteError("Site analysis needs propertyWidthFt and propertyLengthFt") from e

    if width <= 0 or length <= 0:
        raise InvalidSiteError(f"Property dimensions must be positive ({width} x {length})")

    site = SiteAnalysis(
        property_width_ft=width,
        property_length_ft=length,
        turf_zones=tuple(parse_irrigable_zone(z, 'turf') for z in data.get('turfZones') or []),
        bed_zones=tuple(parse_irrigable_zone(z, 'bed') for z in data.get('bedZones') or []),
        narrow_strips=tuple(parse_irrigable_zone(z, 'narrow-strip') for z in data.get('narrowStrips') or []),
        water_source_location=parse_point(data.get('waterSourceLocation')),
        controller_location=parse_point(data.get('controllerLocation')),
        nearest_building_location=parse_point(data.get('nearestBuildingLocation'))
    )

    logger.debug(f"Parsed site {width:g} x {length:g} ft: "
                 f"{len(site.turf_zones)} turf, {len(site.bed_zones)} bed, "
                 f"{len(site.narrow_strips)} strip zones")
    return site


def _check_option(name, value, allowed):
    if value not in allowed:
        raise ConfigurationError(
            f"{name} must be one of {', '.join(map(str, allowed))}; got {value!r}"
        )


def parse_project_parameters(data):
    """
    Build ProjectParameters from project form data

    Args:
        data: Dictionary with camelCase project options; absent options
              keep their defaults

    Returns:
        ProjectParameters

    Raises:
        ConfigurationError: If an option is outside its recognised values
    """
    defaults = ProjectParameters()

    try:
        supply = float(data.get('waterSupplySize', defaults.water_supply_size_in))
        pressure = float(data.get('staticPressurePSI', defaults.static_pressure_psi))
    except (TypeError, ValueError) as e:
        raise ConfigurationError(f"Invalid numeric project option: {e}") from e

    params = ProjectParameters(
        project_name=data.get('projectName', defaults.project_name),
        water_supply_size_in=supply,
        static_pressure_psi=pressure,
        soil_type=data.get('soilType', defaults.soil_type),
        turf_type=data.get('turfType', defaults.turf_type),
        application_type=data.get('applicationType', defaults.application_type)
    )

    _check_option('waterSupplySize', params.water_supply_size_in, WATER_SUPPLY_SIZES)
    _check_option('soilType', params.soil_type, SOIL_TYPES)
    _check_option('turfType', params.turf_type, TURF_TYPES)
    _check_option('applicationType', params.application_type, APPLICATION_TYPES)

    if params.static_pressure_psi <= 0:
        raise ConfigurationError("staticPressurePSI must be positive")

    return params
