"""
Head Placement Module
Turns irrigable zone polygons into sprinkler head and drip placements
"""

import logging

from .design_rules import select_head_for_zone, adjust_gpm_for_arc
from .exceptions import ConfigurationError
from .geometry import (
    area_of_polygon,
    bounding_box,
    generate_grid_points,
    is_point_in_polygon,
    rectangle_box,
    validate_boundary
)
from .models import HeadPlacement, Point

logger = logging.getLogger(__name__)

QUICK_COUPLER_ID = '44rc'
# (fraction of property width, fraction of property length)
QUICK_COUPLER_POSITIONS = [(0.5, 0.5), (0.5, 0.25), (0.5, 0.75)]


def is_degenerate_zone(zone, constants):
    """
    Check whether a zone has no usable area

    A zone is degenerate when it has one or two boundary points, a
    boundary enclosing less than the minimum area, or no boundary and a
    non-positive width, length or area.

    Args:
        zone: IrrigableZone
        constants: DesignConstants

    Returns:
        Tuple of (is_degenerate: bool, reason: str or None)
    """
    if zone.has_polygon:
        if area_of_polygon(zone.boundary_points) < constants.min_boundary_area_ft2:
            return (True, "boundary encloses no usable area")
        is_valid, error = validate_boundary(zone.boundary_points, constants.min_boundary_area_ft2)
        if not is_valid:
            # Self-intersecting outlines are still placed; containment uses even-odd
            logger.warning(f"Zone {zone.id}: {error}")
        return (False, None)

    if zone.boundary_points:
        return (True, f"boundary has only {len(zone.boundary_points)} point(s)")

    if zone.width_ft <= 0 or zone.length_ft <= 0 or zone.area_ft2 <= 0:
        return (True, "zone has no width, length or area")

    return (False, None)


def determine_arc(point, box, tolerance):
    """
    Classify a head position against the zone's bounding edges

    Args:
        point: Head position
        box: BoundingBox of the zone
        tolerance: Edge detection distance in feet

    Returns:
        90 for corners, 180 for edges, 360 for interior heads
    """
    near_vertical = (abs(point.x - box.min_x) < tolerance
                     or abs(point.x - box.max_x) < tolerance)
    near_horizontal = (abs(point.y - box.min_y) < tolerance
                       or abs(point.y - box.max_y) < tolerance)

    if near_vertical and near_horizontal:
        return 90
    if near_vertical or near_horizontal:
        return 180
    return 360


def place_drip_zone(zone, head_spec, context):
    """
    Represent a drip zone as a single emitter group at the zone center

    Args:
        zone: IrrigableZone
        head_spec: Drip catalog entry
        context: DesignContext

    Returns:
        List with exactly one HeadPlacement
    """
    constants = context.constants
    return [HeadPlacement(
        id=context.next_head_id(),
        position=zone.center,
        kind='drip',
        model=head_spec['model'],
        manufacturer=head_spec['manufacturer'],
        arc=0,
        radius_ft=0.0,
        gpm=(zone.area_ft2 / 144) * constants.drip_gpm_per_144_sqft,
        psi=constants.drip_psi,
        nozzle=head_spec['nozzle']
    )]


def place_heads_in_zone(zone, is_athletic_field, context):
    """
    Place heads over one irrigable zone

    Args:
        zone: IrrigableZone
        is_athletic_field: Use athletic-field equipment and triangular spacing
        context: DesignContext

    Returns:
        List of HeadPlacement records (empty for degenerate zones)
    """
    constants = context.constants

    degenerate, reason = is_degenerate_zone(zone, constants)
    if degenerate:
        logger.warning(f"Zone {zone.id} skipped: {reason}")
        return []

    head_id = select_head_for_zone(zone.kind, zone.dominant_dimension, is_athletic_field)
    head_spec = context.catalog.head(head_id)

    if head_spec['category'] == 'drip':
        return place_drip_zone(zone, head_spec, context)

    spacing = head_spec['default_radius_ft']
    if spacing <= 0:
        raise ConfigurationError(f"Head '{head_id}' has no throw radius to space heads by")

    pattern = 'triangular' if is_athletic_field else 'square'

    if zone.has_polygon:
        box = bounding_box(zone.boundary_points)
    else:
        box = rectangle_box(zone.center, zone.width_ft, zone.length_ft)

    grid_points = generate_grid_points(
        box.min_x, box.min_y,
        box.width, box.height,
        spacing, spacing,
        pattern
    )

    heads = []
    for point in grid_points:
        if zone.has_polygon and not is_point_in_polygon(point, zone.boundary_points):
            continue

        arc = determine_arc(point, box, constants.edge_tolerance_ft)
        heads.append(HeadPlacement(
            id=context.next_head_id(),
            position=point,
            kind=head_spec['category'],
            model=head_spec['model'],
            manufacturer=head_spec['manufacturer'],
            arc=arc,
            radius_ft=head_spec['default_radius_ft'],
            gpm=adjust_gpm_for_arc(head_spec['gpm_at_default_radius'], arc),
            psi=head_spec['psi'],
            nozzle=head_spec['nozzle']
        ))

    logger.debug(f"Zone {zone.id}: {len(heads)} x {head_spec['model']} ({pattern} grid)")
    return heads


def place_quick_couplers(site, context):
    """Quick couplers along the property's long center line"""
    spec = context.catalog.head(QUICK_COUPLER_ID)
    couplers = []
    for width_frac, length_frac in QUICK_COUPLER_POSITIONS:
        couplers.append(HeadPlacement(
            id=context.next_head_id(),
            position=Point(site.property_width_ft * width_frac,
                           site.property_length_ft * length_frac),
            kind='quick-coupler',
            model=spec['model'],
            manufacturer=spec['manufacturer'],
            arc=0,
            radius_ft=0.0,
            gpm=0.0,
            psi=0.0,
            nozzle=''
        ))
    return couplers


def place_all_heads(site, params, context):
    """
    Place heads for every irrigable zone on the site

    Turf zones come first, then beds, then narrow strips. Only turf uses
    athletic-field rules. Athletic-field projects also get three quick
    couplers that belong to no zone.

    Args:
        site: SiteAnalysis
        params: ProjectParameters
        context: DesignContext

    Returns:
        List of HeadPlacement records in placement order
    """
    is_athletic = params.is_athletic_field
    heads = []

    for zone in site.turf_zones:
        heads.extend(place_heads_in_zone(zone, is_athletic, context))
    for zone in site.bed_zones:
        heads.extend(place_heads_in_zone(zone, False, context))
    for zone in site.narrow_strips:
        heads.extend(place_heads_in_zone(zone, False, context))

    if is_athletic:
        heads.extend(place_quick_couplers(site, context))

    logger.info(f"Placed {len(heads)} heads")
    return heads
