"""
Irrigation Design Engine
Runs head placement, zone assignment, pipe routing and material takeoff
"""

import logging

from .config_loader import ConfigLoader
from .context import DesignContext
from .head_placement import place_all_heads
from .material_calc import calculate_materials, sum_pipe_lengths
from .models import IrrigationDesign
from .pipe_routing import route_pipes
from .site_parser import parse_project_parameters, parse_site_analysis
from .validation import validate_design
from .zone_assignment import assign_zones

logger = logging.getLogger(__name__)


def generate_irrigation_design(site, params, constants=None, catalog=None):
    """
    Produce a complete irrigation design for a site

    Each call builds its own DesignContext, so IDs restart at 1 and
    concurrent calls share no state.

    Args:
        site: SiteAnalysis
        params: ProjectParameters
        constants: Optional DesignConstants (defaults if None)
        catalog: Optional Catalog (built-in tables if None)

    Returns:
        IrrigationDesign
    """
    context = DesignContext(constants, catalog)

    raw_heads = place_all_heads(site, params, context)
    zones, heads = assign_zones(raw_heads, context)
    routing = route_pipes(site, heads, zones, context)

    total_gpm = sum(zone.total_gpm for zone in zones)

    design = IrrigationDesign(
        heads=heads,
        pipes=routing.pipes,
        zones=zones,
        valves=routing.valves,
        controller=routing.controller,
        backflow=routing.backflow,
        poc=routing.poc,
        rain_sensor=routing.rain_sensor,
        total_system_gpm=round(total_gpm, 1),
        total_zones=len(zones)
    )
    design.material_schedule = calculate_materials(design, context)

    report = validate_design(design, params, context.constants, site=site)
    design.warnings = report['issues'] + report['warnings']
    for message in design.warnings:
        logger.warning(message)

    logger.info(f"Design complete: {len(heads)} heads, {len(zones)} zones, "
                f"{design.total_system_gpm:g} GPM")
    return design


def create_design_summary(design):
    """
    Create a human-readable summary of a design

    Args:
        design: IrrigationDesign

    Returns:
        Dictionary with formatted summary information
    """
    heads_by_kind = {}
    for head in design.heads:
        heads_by_kind[head.kind] = heads_by_kind.get(head.kind, 0) + 1

    pipe_lf = {}
    for pipe in design.pipes:
        pipe_lf[pipe.kind] = pipe_lf.get(pipe.kind, 0.0) + pipe.length_ft

    mainline_sizes = sorted({pipe.diameter_in for pipe in design.pipes if pipe.kind == 'mainline'})

    return {
        'status': 'SUCCESS' if design.heads else 'EMPTY',
        'total_heads': len(design.heads),
        'heads_by_kind': heads_by_kind,
        'total_zones': design.total_zones,
        'total_gpm': design.total_system_gpm,
        'mainline_size_in': mainline_sizes[-1] if mainline_sizes else None,
        'has_master_valve': any(valve.kind == 'master' for valve in design.valves),
        'pipe_lf_by_kind': {kind: round(length, 1) for kind, length in pipe_lf.items()},
        'pipe_runs': len(sum_pipe_lengths(design.pipes)),
        'material_lines': len(design.material_schedule),
        'warnings': list(design.warnings)
    }


def generate_design_from_json(site_data, project_data, json_dir=None):
    """
    Quick function to run a design from raw JSON dictionaries

    Args:
        site_data: Site-analysis dictionary (camelCase keys)
        project_data: Project options dictionary (camelCase keys)
        json_dir: Optional directory of override files

    Returns:
        IrrigationDesign
    """
    loader = ConfigLoader(json_dir)
    loader.load_all_configs()

    site = parse_site_analysis(site_data)
    params = parse_project_parameters(project_data)
    return generate_irrigation_design(site, params, loader.get_constants(), loader.get_catalog())
