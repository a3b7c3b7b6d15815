"""
Zone Assignment Module
Groups placed heads into valve zones by head kind and lateral capacity
"""

import logging
import math
from dataclasses import replace

from .design_rules import (
    get_lateral_size_in,
    get_max_gpm_for_lateral,
    get_zone_color,
    select_valve_for_zone
)
from .models import Zone

logger = logging.getLogger(__name__)


def group_heads_by_kind(heads):
    """
    Group heads by kind, keeping first-seen kind order and input order

    Quick couplers are left out; they are never zoned.
    """
    groups = {}
    for head in heads:
        if head.kind == 'quick-coupler':
            continue
        groups.setdefault(head.kind, []).append(head)
    return groups


def estimate_zone_area(heads, constants):
    """
    Wetted area of a zone's heads

    Sprinkler heads contribute a full throw circle each; drip emitter
    groups use a fixed placeholder radius.

    Args:
        heads: Heads of one zone
        constants: DesignConstants

    Returns:
        Area in square feet
    """
    if not heads:
        return 0.0
    if heads[0].kind == 'drip':
        return len(heads) * math.pi * constants.drip_placeholder_radius_ft ** 2
    return sum(math.pi * head.radius_ft ** 2 for head in heads)


def create_zone(number, heads, head_kind, context):
    """
    Close a zone and derive its hydraulic attributes

    Args:
        number: Zone sequence number (1-based)
        heads: Member heads
        head_kind: Kind shared by every member
        context: DesignContext

    Returns:
        Zone record
    """
    constants = context.constants
    total_gpm = sum(head.gpm for head in heads)
    total_area = estimate_zone_area(heads, constants)

    precip_rate = (total_gpm * constants.precip_constant) / total_area if total_area > 0 else 0.0
    runtime = (constants.target_depth_in / precip_rate) * 60 if precip_rate > 0 else 0.0

    valve = context.catalog.valve(select_valve_for_zone(total_gpm, constants))

    return Zone(
        id=f"Z-{number}",
        number=number,
        head_kind=head_kind,
        head_ids=tuple(head.id for head in heads),
        total_gpm=round(total_gpm, 1),
        precip_rate_in_hr=round(precip_rate, 2),
        runtime_minutes=int(round(runtime)),
        color=get_zone_color(number - 1),
        valve_model=valve['model'],
        valve_size_in=valve['size_in']
    )


def assign_zones(heads, context):
    """
    Pack heads into valve zones

    Heads of each kind are taken in order and added to the open zone until
    the next head would push it past the kind's lateral capacity. A head
    that alone exceeds capacity still gets a zone of its own.

    Args:
        heads: HeadPlacement records from head placement
        context: DesignContext

    Returns:
        Tuple of (zones, updated_heads). updated_heads has the same order as
        heads, with zone_id set on every zoned head. The input list is not
        modified.
    """
    zones = []
    zone_of_head = {}

    for head_kind, group in group_heads_by_kind(heads).items():
        max_gpm = get_max_gpm_for_lateral(get_lateral_size_in(head_kind))

        current = []
        current_gpm = 0.0

        for head in group:
            if current and current_gpm + head.gpm > max_gpm:
                zones.append(_close_zone(current, head_kind, max_gpm, zone_of_head, context))
                current = []
                current_gpm = 0.0
            current.append(head)
            current_gpm += head.gpm

        if current:
            zones.append(_close_zone(current, head_kind, max_gpm, zone_of_head, context))

    updated_heads = [
        replace(head, zone_id=zone_of_head[head.id]) if head.id in zone_of_head else head
        for head in heads
    ]

    logger.info(f"Assigned {len(zone_of_head)} heads to {len(zones)} zones")
    return zones, updated_heads


def _close_zone(heads, head_kind, max_gpm, zone_of_head, context):
    zone = create_zone(context.next_zone_number(), heads, head_kind, context)
    if len(heads) == 1 and heads[0].gpm > max_gpm:
        logger.warning(
            f"{zone.id}: head {heads[0].id} draws {heads[0].gpm:.1f} GPM, "
            f"above the {max_gpm:g} GPM lateral capacity"
        )
    for head in heads:
        zone_of_head[head.id] = zone.id
    return zone
