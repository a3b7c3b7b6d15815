"""
Design Validation Module
Rule checks run against a finished design
"""

from .design_rules import get_max_gpm_for_lateral, get_lateral_size_in
from .geometry import area_of_polygon, coverage_ratio, validate_boundary
from .hydraulics import HydraulicTables, calculate_velocity


def _friction_loss(tables, size_in, gpm, length_ft):
    loss = tables.pipe_pressure_loss(size_in, gpm, length_ft)
    return loss if loss is not None else 0.0


def zone_pressure_budget(design, zone, params, constants, tables):
    """
    Pressure left at the heads of one zone while it runs

    Static pressure less the water meter, backflow preventer, master
    valve, mainline feed and lateral friction losses. Laterals are
    charged as one run of the zone's full flow over their total length.

    Args:
        design: IrrigationDesign
        zone: Zone being checked
        params: ProjectParameters
        constants: DesignConstants
        tables: HydraulicTables

    Returns:
        Dictionary with each loss, 'pressure_at_head' and 'required_psi'
    """
    gpm = zone.total_gpm

    meter_loss = tables.device_pressure_loss('meter', params.water_supply_size_in)
    backflow_loss = 0.0
    if design.backflow is not None and design.backflow.model:
        backflow_loss = tables.device_pressure_loss('rpz', design.backflow.size_in or params.water_supply_size_in)

    masters = [valve for valve in design.valves if valve.kind == 'master']
    master_loss = constants.master_valve_loss_psi if masters else 0.0

    # Mainline feed: backflow -> master valve -> this zone's valve
    feed_ends = {valve.position for valve in masters}
    feed_ends.update(valve.position for valve in design.valves
                     if valve.kind == 'zone' and valve.zone_id == zone.id)
    mainline_loss = sum(
        _friction_loss(tables, pipe.diameter_in, gpm, pipe.length_ft)
        for pipe in design.pipes
        if pipe.kind == 'mainline' and pipe.end in feed_ends
    )

    lateral_length = sum(pipe.length_ft for pipe in design.pipes if pipe.zone_id == zone.id)
    lateral_loss = _friction_loss(tables, get_lateral_size_in(zone.head_kind), gpm, lateral_length)

    psi_of_head = {head.id: head.psi for head in design.heads}
    required_psi = max((psi_of_head.get(head_id, 0.0) for head_id in zone.head_ids), default=0.0)

    total_loss = meter_loss + backflow_loss + master_loss + mainline_loss + lateral_loss

    return {
        'static_psi': params.static_pressure_psi,
        'meter_loss': meter_loss,
        'backflow_loss': backflow_loss,
        'master_valve_loss': master_loss,
        'mainline_loss': mainline_loss,
        'lateral_loss': lateral_loss,
        'total_loss': total_loss,
        'pressure_at_head': params.static_pressure_psi - total_loss,
        'required_psi': required_psi
    }


def check_turf_coverage(site, design, constants):
    """
    Warnings for turf zones whose polygons the heads do not fully cover

    Args:
        site: SiteAnalysis the design was generated from
        design: IrrigationDesign
        constants: DesignConstants

    Returns:
        List of warning strings
    """
    warnings = []
    for zone in site.turf_zones:
        if not zone.has_polygon:
            continue
        if area_of_polygon(zone.boundary_points) < constants.min_boundary_area_ft2:
            continue
        is_valid, _ = validate_boundary(zone.boundary_points, constants.min_boundary_area_ft2)
        if not is_valid:
            continue

        ratio = coverage_ratio(zone.boundary_points, design.heads)
        if ratio < constants.min_turf_coverage:
            warnings.append(
                f"Turf zone {zone.id} is only {ratio:.0%} covered "
                f"(target {constants.min_turf_coverage:.0%})"
            )
    return warnings


def validate_design(design, params, constants, tables=None, site=None):
    """
    Check a design against code and hydraulic rules

    Issues make the design invalid; warnings are advisory.

    Rules:
    - A rain sensor and a backflow preventer are present
    - Every zone holds a single head kind
    - No zone draws more than the allowed share of supply line capacity
    - Mainline velocity at full system flow stays under the limit (warning)
    - Zones over their lateral capacity (warning)
    - Pressure left at each zone's heads meets their operating PSI (warning)
    - Turf polygons are covered by head throw (warning, needs site)

    Args:
        design: IrrigationDesign
        params: ProjectParameters
        constants: DesignConstants
        tables: Optional HydraulicTables
        site: Optional SiteAnalysis for the coverage check

    Returns:
        Dictionary with 'valid', 'issues' and 'warnings'
    """
    tables = tables or HydraulicTables()
    issues = []
    warnings = []

    if design.rain_sensor is None or not design.rain_sensor.model:
        issues.append("Rain sensor is required on automatic irrigation systems")
    if design.backflow is None or not design.backflow.model:
        issues.append("Backflow prevention is required at the point of connection")

    kind_of_head = {head.id: head.kind for head in design.heads}
    for zone in design.zones:
        kinds = {kind_of_head.get(head_id) for head_id in zone.head_ids}
        if len(kinds) > 1:
            issues.append(f"{zone.id} mixes head kinds: {', '.join(sorted(map(str, kinds)))}")

    supply_gpm = tables.supply_capacity_gpm(params.water_supply_size_in, constants.max_velocity_fps)
    allowed_gpm = supply_gpm * constants.supply_utilization
    for zone in design.zones:
        if zone.total_gpm > allowed_gpm:
            issues.append(
                f"{zone.id} draws {zone.total_gpm:g} GPM, over {allowed_gpm:.1f} GPM "
                f"({constants.supply_utilization:.0%} of a {params.water_supply_size_in:g}\" supply)"
            )

    mainline = [pipe for pipe in design.pipes if pipe.kind == 'mainline']
    if mainline:
        size_in = mainline[0].diameter_in
        velocity = calculate_velocity(design.total_system_gpm, tables.inside_diameter(size_in))
        if velocity > constants.max_velocity_fps:
            warnings.append(
                f"Mainline velocity {velocity:.1f} FPS exceeds {constants.max_velocity_fps:g} FPS "
                f"with all zones running"
            )

    for zone in design.zones:
        max_gpm = get_max_gpm_for_lateral(get_lateral_size_in(zone.head_kind))
        if zone.total_gpm > max_gpm:
            warnings.append(f"{zone.id} exceeds {max_gpm:g} GPM lateral capacity ({zone.total_gpm:g} GPM)")

    for zone in design.zones:
        budget = zone_pressure_budget(design, zone, params, constants, tables)
        if budget['pressure_at_head'] < budget['required_psi']:
            warnings.append(
                f"{zone.id} has {budget['pressure_at_head']:.1f} PSI at the heads, below the "
                f"{budget['required_psi']:g} PSI they need ({budget['total_loss']:.1f} PSI lost "
                f"from {params.static_pressure_psi:g} PSI static)"
            )

    if site is not None:
        warnings.extend(check_turf_coverage(site, design, constants))

    return {
        'valid': not issues,
        'issues': issues,
        'warnings': warnings
    }
