"""
Design Data Models
Records exchanged between the design stages. Coordinates are in feet.
"""

from dataclasses import dataclass, field, asdict
from typing import List, NamedTuple, Optional, Tuple


ZONE_KINDS = ('turf', 'bed', 'narrow-strip', 'tree-ring', 'planter')


class Point(NamedTuple):
    x: float
    y: float


@dataclass(frozen=True)
class IrrigableZone:
    """A source-geometry polygon to be irrigated"""
    id: str
    kind: str
    width_ft: float
    length_ft: float
    area_ft2: float
    center: Point
    boundary_points: Tuple[Point, ...] = ()
    shape: str = 'rectangular'
    exposure: str = 'full-sun'
    slope_ratio: Optional[str] = None

    @property
    def dominant_dimension(self):
        return max(self.width_ft, self.length_ft)

    @property
    def has_polygon(self):
        return len(self.boundary_points) >= 3


@dataclass(frozen=True)
class SiteAnalysis:
    """Property geometry as delivered by the site-analysis collaborator"""
    property_width_ft: float
    property_length_ft: float
    turf_zones: Tuple[IrrigableZone, ...] = ()
    bed_zones: Tuple[IrrigableZone, ...] = ()
    narrow_strips: Tuple[IrrigableZone, ...] = ()
    water_source_location: Optional[Point] = None
    controller_location: Optional[Point] = None
    nearest_building_location: Optional[Point] = None


@dataclass(frozen=True)
class ProjectParameters:
    project_name: str = ''
    water_supply_size_in: float = 1.5
    static_pressure_psi: float = 60.0
    soil_type: str = 'loam'
    turf_type: str = 'bermudagrass'
    application_type: str = 'commercial'

    @property
    def is_athletic_field(self):
        return self.application_type == 'athletic-field'


@dataclass(frozen=True)
class HeadPlacement:
    """
    One sprinkler head or drip emitter group.

    Records are immutable; zone assignment hands back copies with
    ``zone_id`` filled in.
    """
    id: str
    position: Point
    kind: str
    model: str
    manufacturer: str
    arc: float
    radius_ft: float
    gpm: float
    psi: float
    nozzle: str
    zone_id: str = ''

    @property
    def x(self):
        return self.position.x

    @property
    def y(self):
        return self.position.y


@dataclass(frozen=True)
class Zone:
    """A valve zone: heads of one kind sharing a single valve"""
    id: str
    number: int
    head_kind: str
    head_ids: Tuple[str, ...]
    total_gpm: float
    precip_rate_in_hr: float
    runtime_minutes: int
    color: str
    valve_model: str
    valve_size_in: float
    exposure: str = 'full-sun'


@dataclass(frozen=True)
class PipeSegment:
    id: str
    start: Point
    end: Point
    diameter_in: float
    material: str
    kind: str
    zone_id: Optional[str] = None

    @property
    def length_ft(self):
        return ((self.end.x - self.start.x) ** 2 + (self.end.y - self.start.y) ** 2) ** 0.5


@dataclass(frozen=True)
class Valve:
    id: str
    position: Point
    model: str
    size_in: float
    kind: str
    zone_id: Optional[str] = None


@dataclass(frozen=True)
class Equipment:
    """Point equipment: POC, backflow preventer, controller or rain sensor"""
    position: Point
    model: str = ''
    size_in: Optional[float] = None


@dataclass(frozen=True)
class MaterialScheduleItem:
    item: str
    manufacturer: str
    model: str
    quantity: int
    unit: str = 'EA'


@dataclass
class IrrigationDesign:
    """Complete output of one design run"""
    heads: List[HeadPlacement]
    pipes: List[PipeSegment]
    zones: List[Zone]
    valves: List[Valve]
    controller: Equipment
    backflow: Equipment
    poc: Equipment
    rain_sensor: Equipment
    total_system_gpm: float
    total_zones: int
    material_schedule: List[MaterialScheduleItem] = field(default_factory=list)
    warnings: List[str] = field(default_factory=list)

    @property
    def zone_schedule(self):
        return self.zones

    def to_dict(self):
        """
        Convert the design to plain nested dictionaries and lists

        Returns:
            Dictionary suitable for JSON serialization by a renderer
        """
        data = _plain(asdict(self))
        data['zone_schedule'] = data['zones']
        return data


def _plain(value):
    """Replace Point tuples with {'x', 'y'} dictionaries, recursively"""
    if isinstance(value, Point):
        return {'x': value.x, 'y': value.y}
    if isinstance(value, dict):
        return {key: _plain(item) for key, item in value.items()}
    if isinstance(value, (list, tuple)):
        return [_plain(item) for item in value]
    return value
