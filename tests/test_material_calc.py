"""Tests for the material takeoff."""
import math

import pytest

from irrigation_designer.design_engine import generate_irrigation_design
from irrigation_designer.material_calc import (
    calculate_materials,
    count_heads_by_model,
    sum_pipe_lengths
)
from irrigation_designer.models import PipeSegment, Point, SiteAnalysis, Valve
from irrigation_designer.pipe_routing import route_pipes

from conftest import make_design, make_head, make_zone_record


def _by_model(items):
    return {item.model: item for item in items if item.model}


def _by_name(items):
    return {item.item: item for item in items}


class TestHelpers:
    """Test head counts and pipe length aggregation."""

    def test_count_heads_by_model(self):
        heads = [
            make_head('H-1', model='PGP-ADJ'),
            make_head('H-2', model='1804-SAM-PRS'),
            make_head('H-3', model='PGP-ADJ'),
            make_head('H-4', 'quick-coupler', gpm=0, model='anything')
        ]
        assert count_heads_by_model(heads) == {'PGP-ADJ': 2, '1804-SAM-PRS': 1, '44RC': 1}

    def test_sum_pipe_lengths(self):
        pipes = [
            PipeSegment('P-1', Point(0, 0), Point(3, 4), 1.0, 'class200-pvc', 'lateral'),
            PipeSegment('P-2', Point(0, 0), Point(0, 10), 1.0, 'class200-pvc', 'lateral'),
            PipeSegment('P-3', Point(0, 0), Point(6, 8), 1.5, 'sch40-pvc', 'mainline')
        ]
        assert sum_pipe_lengths(pipes) == {
            (1.0, 'class200-pvc'): pytest.approx(15.0),
            (1.5, 'sch40-pvc'): pytest.approx(10.0)
        }


class TestSquareTurfTakeoff:
    """Takeoff for a single 40 x 40 ft rotor zone."""

    @pytest.fixture
    def items(self, square_turf_site, commercial_params):
        design = generate_irrigation_design(square_turf_site, commercial_params)
        return design.material_schedule

    def test_heads_and_valves(self, items):
        models = _by_model(items)

        assert models['PGP-ADJ'].quantity == 4
        assert models['PEB-100'].quantity == 1
        assert 'PEB-150' not in models
        assert '200-PEB' not in models
        assert models['009M2-QT'].quantity == 1
        assert models['ESP-LXME2'].quantity == 1
        assert models['Rain-Clik'].quantity == 1

    def test_pipe_lengths_round_up(self, items):
        names = _by_name(items)
        mainline = names['Sch. 40 PVC - 1.5" pipe']
        lateral = names['Class 200 PVC - 1" pipe']

        assert mainline.quantity == 41
        assert mainline.unit == 'LF'
        assert lateral.quantity == 72
        assert lateral.unit == 'LF'

    def test_fittings_boxes_and_wire(self, items):
        names = _by_name(items)

        assert names['Swing Joint'].quantity == 4
        assert names['Valve Box - Standard'].quantity == 1
        assert names['Wire - Common'].quantity == 41
        assert names['Wire - Zone'].quantity == 41
        assert 'Drip Zone Kit' not in names

    def test_line_order(self, items):
        assert [item.item for item in items] == [
            'Rotor - Small Turf',
            'Zone Valve - 1 inch',
            'Backflow - RPZ',
            'Controller',
            'Rain Sensor',
            'Sch. 40 PVC - 1.5" pipe',
            'Class 200 PVC - 1" pipe',
            'Swing Joint',
            'Valve Box - Standard',
            'Wire - Common',
            'Wire - Zone'
        ]


class TestHandBuiltDesigns:
    """Takeoff rules checked against hand-built designs."""

    def test_master_valve_line_follows_placed_valve(self, context):
        master = Valve('MV-1', Point(20, 50), '200-PEB', 2.0, 'master')
        design = make_design(valves=[master], total_gpm=35.0)
        assert _by_model(calculate_materials(design, context))['200-PEB'].quantity == 1

    def test_no_master_valve_line_without_placed_valve(self, context):
        design = make_design(total_gpm=35.0)
        assert '200-PEB' not in _by_model(calculate_materials(design, context))

    def test_valve_sizes_and_boxes(self, context):
        valves = [
            Valve(f'V-{i}', Point(0, 0), 'PEB-100', 1.0, 'zone', f'Z-{i}') for i in range(1, 5)
        ] + [
            Valve('V-5', Point(0, 0), 'PEB-150', 1.5, 'zone', 'Z-5'),
            Valve('MV-1', Point(0, 0), '200-PEB', 2.0, 'master')
        ]
        items = calculate_materials(make_design(valves=valves, total_gpm=35.0), context)
        models = _by_model(items)

        assert models['PEB-100'].quantity == 4
        assert models['PEB-150'].quantity == 1
        assert _by_name(items)['Valve Box - Standard'].quantity == math.ceil(5 / 4)

    def test_drip_and_quick_couplers_need_no_swing_joints(self, context):
        heads = [
            make_head('H-1', 'spray'),
            make_head('H-2', 'drip', model='Techline TLCV-09-12-500', radius=0),
            make_head('H-3', 'quick-coupler', gpm=0, model='44RC', radius=0)
        ]
        zones = [
            make_zone_record(1, ['H-1']),
            make_zone_record(2, ['H-2'], 'drip', total_gpm=1.0)
        ]
        items = calculate_materials(make_design(heads=heads, zones=zones, total_gpm=2.5), context)
        names = _by_name(items)

        assert names['Swing Joint'].quantity == 1
        assert names['Drip Zone Kit'].quantity == 1
        assert names['Quick Coupler Valve'].quantity == 1
        assert names['Drip Emitter Line'].manufacturer == 'Netafim'

    def test_zone_wire_scales_with_zone_count(self, context):
        pipes = [PipeSegment('P-1', Point(0, 0), Point(0, 10.2), 1.5, 'sch40-pvc', 'mainline')]
        zones = [make_zone_record(n, [f'H-{n}']) for n in (1, 2, 3)]
        names = _by_name(calculate_materials(make_design(zones=zones, pipes=pipes), context))

        assert names['Wire - Common'].quantity == 11
        assert names['Wire - Zone'].quantity == 31

    def test_unknown_head_model_is_still_listed(self, context):
        heads = [make_head('H-1', model='CUSTOM-1')]
        item = _by_model(calculate_materials(make_design(heads=heads), context))['CUSTOM-1']
        assert item.item == 'CUSTOM-1'
        assert item.manufacturer == ''
        assert item.quantity == 1


class TestRoutingAgreement:
    """The takeoff lists exactly the master valves routing placed."""

    def _routed_design(self, gpms, context):
        site = SiteAnalysis(property_width_ft=100.0, property_length_ft=100.0)
        heads = []
        zones = []
        for number, gpm in enumerate(gpms, 1):
            head = make_head(f'H-{number}', 'rotor', gpm=gpm, x=20.0 * number, y=30.0,
                             zone_id=f'Z-{number}')
            heads.append(head)
            zones.append(make_zone_record(number, [head.id], 'rotor', total_gpm=gpm))
        result = route_pipes(site, heads, zones, context)
        design = make_design(heads=heads, zones=zones, pipes=result.pipes, valves=result.valves,
                             total_gpm=sum(gpms))
        return design, calculate_materials(design, context)

    @pytest.mark.parametrize('gpms', [
        [4.4, 11.8, 13.8],
        [15.0, 15.0, 5.0],
        [10.0, 10.0],
    ])
    def test_master_valve_counts_agree(self, context, gpms):
        design, items = self._routed_design(gpms, context)
        placed = [valve.model for valve in design.valves if valve.kind == 'master']
        listed = [item.model for item in items if item.model == '200-PEB']

        assert placed == listed

    def test_flow_noise_at_threshold_places_no_master_valve(self, context):
        design, items = self._routed_design([4.4, 11.8, 13.8], context)

        assert not any(valve.kind == 'master' for valve in design.valves)
        assert '200-PEB' not in _by_model(items)
