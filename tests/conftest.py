"""Shared pytest fixtures for testing."""
import pytest

from irrigation_designer.context import DesignContext
from irrigation_designer.models import (
    Equipment,
    HeadPlacement,
    IrrigableZone,
    IrrigationDesign,
    Point,
    ProjectParameters,
    SiteAnalysis,
    Zone
)


def make_zone(kind='turf', x0=0.0, y0=0.0, width=40.0, length=40.0,
              with_boundary=True, zone_id='TZ-1'):
    """Rectangular irrigable zone with its lower-left corner at (x0, y0)."""
    boundary = ()
    if with_boundary:
        boundary = (
            Point(x0, y0),
            Point(x0 + width, y0),
            Point(x0 + width, y0 + length),
            Point(x0, y0 + length)
        )
    return IrrigableZone(
        id=zone_id,
        kind=kind,
        width_ft=width,
        length_ft=length,
        area_ft2=width * length,
        center=Point(x0 + width / 2, y0 + length / 2),
        boundary_points=boundary
    )


def make_head(head_id, kind='spray', gpm=1.5, x=0.0, y=0.0, radius=12.0,
              arc=360, zone_id='', model='1804-SAM-PRS'):
    return HeadPlacement(
        id=head_id,
        position=Point(x, y),
        kind=kind,
        model=model,
        manufacturer='Rain Bird',
        arc=arc,
        radius_ft=radius,
        gpm=gpm,
        psi=30.0,
        nozzle='15-SST',
        zone_id=zone_id
    )


def make_zone_record(number, head_ids, head_kind='spray', total_gpm=5.0,
                     valve_model='PEB-100', valve_size=1.0):
    return Zone(
        id=f"Z-{number}",
        number=number,
        head_kind=head_kind,
        head_ids=tuple(head_ids),
        total_gpm=total_gpm,
        precip_rate_in_hr=1.0,
        runtime_minutes=30,
        color='#DC2626',
        valve_model=valve_model,
        valve_size_in=valve_size
    )


def make_design(heads=(), zones=(), pipes=(), valves=(), total_gpm=0.0,
                rain_sensor_model='Rain-Clik', backflow_model='009M2-QT'):
    """Hand-built design with default point equipment."""
    return IrrigationDesign(
        heads=list(heads),
        pipes=list(pipes),
        zones=list(zones),
        valves=list(valves),
        controller=Equipment(position=Point(0, 5), model='ESP-LXME2'),
        backflow=Equipment(position=Point(10, 50), model=backflow_model, size_in=1.5),
        poc=Equipment(position=Point(5, 50)),
        rain_sensor=Equipment(position=Point(2, 3), model=rain_sensor_model),
        total_system_gpm=total_gpm,
        total_zones=len(zones)
    )


@pytest.fixture
def context():
    """Fresh design context with default constants and catalog."""
    return DesignContext()


@pytest.fixture
def commercial_params():
    return ProjectParameters(project_name='Test Office Park', turf_type='bermudagrass',
                             application_type='commercial')


@pytest.fixture
def athletic_params():
    return ProjectParameters(project_name='Test Stadium', application_type='athletic-field')


@pytest.fixture
def square_turf_site():
    """Single 40 x 40 ft turf zone on a 100 x 100 ft property."""
    return SiteAnalysis(
        property_width_ft=100.0,
        property_length_ft=100.0,
        turf_zones=(make_zone('turf', 0, 0, 40, 40),),
        nearest_building_location=Point(80.0, 80.0)
    )


@pytest.fixture
def athletic_site():
    """300 x 150 ft field covering the whole property."""
    return SiteAnalysis(
        property_width_ft=300.0,
        property_length_ft=150.0,
        turf_zones=(make_zone('turf', 0, 0, 300, 150, zone_id='FIELD'),),
        nearest_building_location=Point(10.0, 10.0)
    )


@pytest.fixture
def mixed_site():
    """Turf, bed and strip zones together."""
    return SiteAnalysis(
        property_width_ft=200.0,
        property_length_ft=160.0,
        turf_zones=(
            make_zone('turf', 0, 0, 120, 90, zone_id='TZ-1'),
            make_zone('turf', 130, 0, 40, 30, zone_id='TZ-2'),
        ),
        bed_zones=(
            make_zone('bed', 0, 100, 30, 12, zone_id='BZ-1'),
            make_zone('bed', 40, 100, 18, 10, zone_id='BZ-2'),
        ),
        narrow_strips=(
            make_zone('narrow-strip', 0, 130, 60, 6, zone_id='NS-1'),
        ),
        water_source_location=Point(0.0, 80.0),
        nearest_building_location=Point(150.0, 150.0)
    )
