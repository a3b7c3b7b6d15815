"""
Pipe Routing Module
Lays out mainline and lateral pipe and places the hydraulic equipment
"""

import logging
from dataclasses import dataclass, field
from typing import List

from .design_rules import get_mainline_size_in, get_lateral_size_in, needs_master_valve
from .geometry import centroid, distance
from .models import Equipment, PipeSegment, Point, Valve

logger = logging.getLogger(__name__)

BACKFLOW_ID = '009m2-qt'
MASTER_VALVE_ID = '200-peb'
CONTROLLER_ID = 'esp-lxme2'
RAIN_SENSOR_ID = 'rain-clik'

MAINLINE_MATERIAL = 'sch40-pvc'
LATERAL_MATERIAL = 'class200-pvc'


@dataclass
class RoutingResult:
    poc: Equipment
    backflow: Equipment
    controller: Equipment
    rain_sensor: Equipment
    mainline_size_in: float
    pipes: List[PipeSegment] = field(default_factory=list)
    valves: List[Valve] = field(default_factory=list)


def resolve_poc(site, constants):
    """Point of connection: the site's water source or the left mid-edge"""
    if site.water_source_location is not None:
        return site.water_source_location
    return Point(constants.poc_default_x_ft, site.property_length_ft / 2)


def resolve_controller(site, poc, constants):
    """
    Controller position

    Uses the site's controller location if given, otherwise a spot just
    past the nearest building (or the POC when no building is known).
    """
    if site.controller_location is not None:
        return site.controller_location
    anchor = site.nearest_building_location or poc
    return Point(anchor.x, anchor.y + constants.controller_offset_ft)


def find_nearest_connection(target, zone_heads, valve_position):
    """
    Find the point a head's lateral should connect from

    Args:
        target: Head being connected
        zone_heads: All heads in the same zone
        valve_position: Position of the zone valve

    Returns:
        The valve position or the position of the closest other head,
        whichever is nearer (ties go to the earlier candidate)
    """
    nearest = valve_position
    min_dist = distance(target.position, valve_position)
    for head in zone_heads:
        if head.id == target.id:
            continue
        d = distance(target.position, head.position)
        if d < min_dist:
            min_dist = d
            nearest = head.position
    return nearest


def route_pipes(site, heads, zones, context):
    """
    Build the piping network for a zoned design

    Args:
        site: SiteAnalysis
        heads: Heads with zone_id populated
        zones: Zones from zone assignment
        context: DesignContext

    Returns:
        RoutingResult with pipes, valves and point equipment
    """
    constants = context.constants
    catalog = context.catalog
    pipes = []
    valves = []

    poc = resolve_poc(site, constants)
    # Same rounding as IrrigationDesign.total_system_gpm
    total_gpm = round(sum(zone.total_gpm for zone in zones), 1)
    mainline_size = get_mainline_size_in(total_gpm, constants)

    backflow_spec = catalog.valve(BACKFLOW_ID)
    backflow_pos = Point(poc.x + constants.backflow_offset_ft, poc.y)

    controller_pos = resolve_controller(site, poc, constants)
    rain_sensor_pos = Point(controller_pos.x + constants.rain_sensor_offset_ft,
                            controller_pos.y - constants.rain_sensor_offset_ft)

    has_master = needs_master_valve(total_gpm, constants)
    if has_master:
        master_spec = catalog.valve(MASTER_VALVE_ID)
        master_pos = Point(backflow_pos.x + constants.master_valve_offset_ft, backflow_pos.y)
        valves.append(Valve(
            id='MV-1',
            position=master_pos,
            model=master_spec['model'],
            size_in=master_spec['size_in'],
            kind='master'
        ))
        pipes.append(PipeSegment(
            id=context.next_pipe_id(),
            start=backflow_pos,
            end=master_pos,
            diameter_in=mainline_size,
            material=MAINLINE_MATERIAL,
            kind='mainline'
        ))
        mainline_start = Point(master_pos.x, poc.y)
    else:
        mainline_start = Point(backflow_pos.x + constants.mainline_start_offset_ft, poc.y)

    for zone in zones:
        zone_heads = [head for head in heads if head.zone_id == zone.id]
        if not zone_heads:
            logger.debug(f"{zone.id} has no heads, not routed")
            continue

        center = centroid([head.position for head in zone_heads])
        valve_pos = Point(center.x - constants.zone_valve_offset_ft,
                          center.y - constants.zone_valve_offset_ft)
        valves.append(Valve(
            id=f"V-{zone.number}",
            position=valve_pos,
            model=zone.valve_model,
            size_in=zone.valve_size_in,
            kind='zone',
            zone_id=zone.id
        ))

        pipes.append(PipeSegment(
            id=context.next_pipe_id(),
            start=mainline_start,
            end=valve_pos,
            diameter_in=mainline_size,
            material=MAINLINE_MATERIAL,
            kind='mainline'
        ))

        lateral_size = get_lateral_size_in(zone.head_kind)
        pipe_kind = 'drip-supply' if zone.head_kind == 'drip' else 'lateral'

        for head in zone_heads:
            if head.kind == 'quick-coupler':
                continue
            pipes.append(PipeSegment(
                id=context.next_pipe_id(),
                start=find_nearest_connection(head, zone_heads, valve_pos),
                end=head.position,
                diameter_in=lateral_size,
                material=LATERAL_MATERIAL,
                kind=pipe_kind,
                zone_id=zone.id
            ))

    logger.info(f"Routed {len(pipes)} pipe segments, {len(valves)} valves "
                f"({total_gpm:.1f} GPM, {mainline_size:g}\" mainline)")

    return RoutingResult(
        poc=Equipment(position=poc),
        backflow=Equipment(position=backflow_pos, model=backflow_spec['model'], size_in=mainline_size),
        controller=Equipment(position=controller_pos, model=catalog.controller(CONTROLLER_ID)['model']),
        rain_sensor=Equipment(position=rain_sensor_pos, model=catalog.sensor(RAIN_SENSOR_ID)['model']),
        mainline_size_in=mainline_size,
        pipes=pipes,
        valves=valves
    )
