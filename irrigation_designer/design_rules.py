"""
Design Rules Module
Sizing thresholds, equipment selection rules and the empirical constants
they depend on
"""

from dataclasses import dataclass, fields, replace

from .exceptions import ConfigurationError


@dataclass(frozen=True)
class DesignConstants:
    """
    Empirical design assumptions.

    Every value can be overridden through ConfigLoader without touching
    the placement, zoning or routing code.
    """
    # Drip: GPM per 144 sq ft of bed (0.9 GPH emitters on a 12" grid)
    drip_gpm_per_144_sqft: float = 0.9
    drip_psi: float = 30.0
    # Placeholder coverage radius for area-based precipitation on drip zones
    drip_placeholder_radius_ft: float = 10.0

    # Heads closer than this to a bounding edge get a part-circle arc
    edge_tolerance_ft: float = 2.0

    # Converts GPM per sq ft to inches per hour
    precip_constant: float = 96.25
    target_depth_in: float = 0.5

    master_valve_threshold_gpm: float = 30.0
    large_mainline_threshold_gpm: float = 40.0
    large_zone_valve_threshold_gpm: float = 15.0
    valves_per_box: int = 4

    # Routing offsets (ft)
    backflow_offset_ft: float = 5.0
    master_valve_offset_ft: float = 10.0
    mainline_start_offset_ft: float = 5.0
    zone_valve_offset_ft: float = 3.0
    controller_offset_ft: float = 5.0
    rain_sensor_offset_ft: float = 2.0
    poc_default_x_ft: float = 5.0

    max_velocity_fps: float = 5.0
    supply_utilization: float = 0.75
    master_valve_loss_psi: float = 2.0
    min_turf_coverage: float = 0.95
    min_boundary_area_ft2: float = 1.0

    def with_overrides(self, overrides):
        """
        Return a copy with some constants replaced

        Args:
            overrides: Dictionary of constant name -> value

        Raises:
            ConfigurationError: If a name is not a known constant
        """
        known = {f.name for f in fields(self)}
        unknown = sorted(set(overrides) - known)
        if unknown:
            raise ConfigurationError(f"Unknown design constants: {', '.join(unknown)}")
        return replace(self, **overrides)


DEFAULT_CONSTANTS = DesignConstants()

ZONE_COLORS = [
    '#DC2626',
    '#2563EB',
    '#16A34A',
    '#EA580C',
    '#9333EA',
    '#92400E',
    '#DB2777',
    '#0D9488'
]


def get_zone_color(zone_index):
    return ZONE_COLORS[zone_index % len(ZONE_COLORS)]


def select_head_for_zone(zone_kind, max_dimension_ft, is_athletic_field):
    """
    Pick the catalog head id for an irrigable zone

    Rules:
    1. Narrow strips always get strip nozzles
    2. Beds, planters and tree rings: <= 8 ft strip, <= 21 ft rotary
       nozzle, anything larger goes to drip
    3. Turf: athletic fields or > 80 ft large rotor, > 50 ft medium rotor,
       > 25 ft small rotor, otherwise fixed spray

    Args:
        zone_kind: Irrigable zone kind
        max_dimension_ft: Dominant zone dimension
        is_athletic_field: True for athletic-field projects

    Returns:
        Catalog head id
    """
    if zone_kind == 'narrow-strip':
        return 'he-van-15-sst'

    if zone_kind in ('bed', 'tree-ring', 'planter'):
        if max_dimension_ft <= 8:
            return 'he-van-15-sst'
        if max_dimension_ft <= 21:
            return 'mp3000'
        return 'tlcv-09-12-500'

    if is_athletic_field or max_dimension_ft > 80:
        return 'i-40-04-ss'
    if max_dimension_ft > 50:
        return '5004-pc-sam'
    if max_dimension_ft > 25:
        return 'pgp-adj'
    return '1804-sam-prs'


def get_lateral_size_in(head_kind):
    """Standard lateral diameter for a head kind"""
    if head_kind == 'rotor':
        return 1.0
    return 0.75


def get_max_gpm_for_lateral(lateral_size_in):
    """Largest zone flow a lateral of the given diameter should carry"""
    if lateral_size_in >= 1.25:
        return 22.0
    return 15.0


def get_mainline_size_in(total_gpm, constants=DEFAULT_CONSTANTS):
    if total_gpm >= constants.large_mainline_threshold_gpm:
        return 2.0
    return 1.5


def needs_master_valve(total_gpm, constants=DEFAULT_CONSTANTS):
    return total_gpm > constants.master_valve_threshold_gpm


def select_valve_for_zone(total_gpm, constants=DEFAULT_CONSTANTS):
    """Catalog id of the zone valve for a zone's flow"""
    if total_gpm > constants.large_zone_valve_threshold_gpm:
        return 'peb-150'
    return 'peb-100'


def adjust_gpm_for_arc(full_circle_gpm, arc):
    """Part-circle heads draw flow in proportion to their arc"""
    return full_circle_gpm * (arc / 360)
