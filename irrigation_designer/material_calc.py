"""
Material Calculation Module
Aggregates a routed design into a bill of quantities
"""

import math

from .models import MaterialScheduleItem

QUICK_COUPLER_MODEL = '44RC'

MATERIAL_NAMES = {
    'sch40-pvc': 'Sch. 40 PVC',
    'class200-pvc': 'Class 200 PVC'
}


def _catalog_item(entry, quantity, unit='EA'):
    return MaterialScheduleItem(
        item=entry['name'],
        manufacturer=entry['manufacturer'],
        model=entry['model'],
        quantity=quantity,
        unit=unit
    )


def count_heads_by_model(heads):
    """
    Count heads per model, in first-seen order

    Quick couplers are always counted under the 44RC model.
    """
    counts = {}
    for head in heads:
        model = QUICK_COUPLER_MODEL if head.kind == 'quick-coupler' else head.model
        counts[model] = counts.get(model, 0) + 1
    return counts


def sum_pipe_lengths(pipes):
    """
    Total pipe length per (diameter, material)

    Returns:
        Dictionary of (diameter_in, material) -> length in feet
    """
    lengths = {}
    for pipe in pipes:
        key = (pipe.diameter_in, pipe.material)
        lengths[key] = lengths.get(key, 0.0) + pipe.length_ft
    return lengths


def calculate_materials(design, context):
    """
    Build the material schedule for a design

    Args:
        design: IrrigationDesign (material_schedule is ignored)
        context: DesignContext

    Returns:
        List of MaterialScheduleItem
    """
    catalog = context.catalog
    items = []

    # Heads
    for model, count in count_heads_by_model(design.heads).items():
        spec = catalog.find_head_by_model(model)
        items.append(MaterialScheduleItem(
            item=spec['name'] if spec else model,
            manufacturer=spec['manufacturer'] if spec else '',
            model=model,
            quantity=count,
            unit='EA'
        ))

    # Valves
    zone_valves = [valve for valve in design.valves if valve.kind == 'zone']
    valve_1in = sum(1 for valve in zone_valves if valve.size_in == 1)
    valve_1_5in = sum(1 for valve in zone_valves if valve.size_in == 1.5)

    if valve_1in > 0:
        items.append(_catalog_item(catalog.valve('peb-100'), valve_1in))
    if valve_1_5in > 0:
        items.append(_catalog_item(catalog.valve('peb-150'), valve_1_5in))

    # Listed only when routing placed one
    if any(valve.kind == 'master' for valve in design.valves):
        items.append(_catalog_item(catalog.valve('200-peb'), 1))

    items.append(_catalog_item(catalog.valve('009m2-qt'), 1))
    items.append(_catalog_item(catalog.controller('esp-lxme2'), 1))
    items.append(_catalog_item(catalog.sensor('rain-clik'), 1))

    # Pipe
    for (diameter, material), length in sum_pipe_lengths(design.pipes).items():
        items.append(MaterialScheduleItem(
            item=f'{MATERIAL_NAMES.get(material, material)} - {diameter:g}" pipe',
            manufacturer='',
            model='',
            quantity=math.ceil(length),
            unit='LF'
        ))

    # Fittings and boxes
    sprinkler_count = sum(1 for head in design.heads if head.kind not in ('quick-coupler', 'drip'))
    items.append(_catalog_item(catalog.accessory('swing-joint'), sprinkler_count))

    box_count = math.ceil(len(zone_valves) / context.constants.valves_per_box)
    items.append(_catalog_item(catalog.accessory('valve-box-jumbo'), box_count))

    # Control wire follows the mainline
    mainline_length = sum(pipe.length_ft for pipe in design.pipes if pipe.kind == 'mainline')
    items.append(_catalog_item(catalog.accessory('wire-common'), math.ceil(mainline_length), 'LF'))
    items.append(_catalog_item(catalog.accessory('wire-zone'),
                               math.ceil(mainline_length * design.total_zones), 'LF'))

    drip_zones = sum(1 for zone in design.zones if zone.head_kind == 'drip')
    if drip_zones > 0:
        items.append(_catalog_item(catalog.accessory('drip-kit'), drip_zones))

    return items
