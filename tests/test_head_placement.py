"""Tests for head placement and equipment selection."""
import pytest

from irrigation_designer.context import DesignContext
from irrigation_designer.design_rules import select_head_for_zone, DesignConstants
from irrigation_designer.geometry import bounding_box
from irrigation_designer.head_placement import (
    determine_arc,
    place_all_heads,
    place_heads_in_zone
)
from irrigation_designer.models import IrrigableZone, Point, SiteAnalysis

from conftest import make_zone


class TestEquipmentSelection:
    """Test the head selection rule table."""

    @pytest.mark.parametrize('kind, dimension, athletic, expected', [
        ('narrow-strip', 100, False, 'he-van-15-sst'),
        ('narrow-strip', 5, True, 'he-van-15-sst'),
        ('bed', 8, False, 'he-van-15-sst'),
        ('bed', 15, False, 'mp3000'),
        ('planter', 21, False, 'mp3000'),
        ('tree-ring', 30, False, 'tlcv-09-12-500'),
        ('turf', 20, False, '1804-sam-prs'),
        ('turf', 40, False, 'pgp-adj'),
        ('turf', 60, False, '5004-pc-sam'),
        ('turf', 81, False, 'i-40-04-ss'),
        ('turf', 20, True, 'i-40-04-ss'),
        ('bed', 30, True, 'tlcv-09-12-500'),
    ])
    def test_select_head_for_zone(self, kind, dimension, athletic, expected):
        assert select_head_for_zone(kind, dimension, athletic) == expected


class TestArcClassification:
    """Test corner/edge/interior arcs."""

    def setup_method(self):
        self.box = bounding_box([Point(0, 0), Point(40, 40)])

    def test_corner(self):
        assert determine_arc(Point(1, 39), self.box, 2.0) == 90

    def test_edge(self):
        assert determine_arc(Point(20, 0), self.box, 2.0) == 180

    def test_interior(self):
        assert determine_arc(Point(20, 20), self.box, 2.0) == 360

    def test_tolerance_is_absolute(self):
        assert determine_arc(Point(2.5, 20), self.box, 2.0) == 360
        assert determine_arc(Point(2.5, 20), self.box, 3.0) == 180


class TestPlaceHeadsInZone:
    """Test placement over single zones."""

    def test_square_turf_zone(self, context):
        heads = place_heads_in_zone(make_zone('turf', 0, 0, 40, 40), False, context)

        assert [head.position for head in heads] == [
            Point(0, 0), Point(25, 0), Point(0, 25), Point(25, 25)
        ]
        assert {head.model for head in heads} == {'PGP-ADJ'}
        assert [head.arc for head in heads] == [90, 180, 180, 360]
        assert [head.gpm for head in heads] == pytest.approx([0.55, 1.1, 1.1, 2.2])
        assert [head.id for head in heads] == ['H-1', 'H-2', 'H-3', 'H-4']
        assert all(head.zone_id == '' for head in heads)

    def test_gpm_scales_with_arc(self, context, mixed_site, commercial_params):
        heads = place_all_heads(mixed_site, commercial_params, context)
        for head in heads:
            if head.kind in ('drip', 'quick-coupler'):
                continue
            spec = context.catalog.find_head_by_model(head.model)
            assert head.gpm == pytest.approx(spec['gpm_at_default_radius'] * head.arc / 360)

    def test_bed_over_21ft_is_drip(self, context):
        zone = make_zone('bed', 0, 0, 30, 10)
        heads = place_heads_in_zone(zone, False, context)

        assert len(heads) == 1
        drip = heads[0]
        assert drip.kind == 'drip'
        assert drip.position == Point(15, 5)
        assert drip.radius_ft == 0
        assert drip.arc == 0
        assert drip.psi == 30
        assert drip.gpm == pytest.approx(300 / 144 * 0.9)

    def test_drip_density_constant_can_be_overridden(self):
        context = DesignContext(DesignConstants(drip_gpm_per_144_sqft=1.8))
        heads = place_heads_in_zone(make_zone('bed', 0, 0, 30, 10), False, context)
        assert heads[0].gpm == pytest.approx(300 / 144 * 1.8)

    def test_narrow_strip_gets_strip_nozzles(self, context):
        heads = place_heads_in_zone(make_zone('narrow-strip', 0, 0, 40, 6), False, context)
        assert heads
        assert {head.kind for head in heads} == {'strip'}

    def test_rectangle_fallback_without_boundary(self, context):
        zone = make_zone('turf', 0, 0, 20, 20, with_boundary=False)
        heads = place_heads_in_zone(zone, False, context)

        assert [head.position for head in heads] == [
            Point(0, 0), Point(12, 0), Point(0, 12), Point(12, 12)
        ]
        assert {head.model for head in heads} == {'1804-SAM-PRS'}

    def test_points_outside_polygon_are_dropped(self, context):
        triangle = IrrigableZone(
            id='TRI', kind='turf', width_ft=40, length_ft=40, area_ft2=800,
            center=Point(13, 13),
            boundary_points=(Point(0, 0), Point(40, 0), Point(0, 40))
        )
        heads = place_heads_in_zone(triangle, False, context)
        assert Point(25, 25) not in [head.position for head in heads]
        assert len(heads) == 3

    def test_athletic_uses_triangular_grid(self, context):
        heads = place_heads_in_zone(make_zone('turf', 0, 0, 300, 150), True, context)
        rows = sorted({head.y for head in heads})
        first_row_x = min(head.x for head in heads if head.y == rows[0])
        second_row_x = min(head.x for head in heads if head.y == rows[1])

        assert {head.model for head in heads} == {'I-40-04-SS'}
        assert first_row_x == 0
        assert second_row_x == pytest.approx(21.0)
        assert len(heads) == 30


class TestDegenerateZones:
    """Degenerate geometry yields no heads rather than errors."""

    def test_zero_area_polygon(self, context):
        zone = IrrigableZone(
            id='LINE', kind='turf', width_ft=30, length_ft=0, area_ft2=0,
            center=Point(15, 0),
            boundary_points=(Point(0, 0), Point(15, 0), Point(30, 0))
        )
        assert place_heads_in_zone(zone, False, context) == []

    def test_single_point_boundary(self, context):
        zone = IrrigableZone(
            id='DOT', kind='turf', width_ft=10, length_ft=10, area_ft2=100,
            center=Point(5, 5), boundary_points=(Point(5, 5),)
        )
        assert place_heads_in_zone(zone, False, context) == []

    def test_zero_size_without_boundary(self, context):
        zone = make_zone('bed', 0, 0, 0, 0, with_boundary=False)
        assert place_heads_in_zone(zone, False, context) == []

    def test_degenerate_zone_does_not_consume_ids(self, context):
        empty = make_zone('turf', 0, 0, 0, 0, with_boundary=False)
        place_heads_in_zone(empty, False, context)
        heads = place_heads_in_zone(make_zone('turf', 0, 0, 40, 40), False, context)
        assert heads[0].id == 'H-1'


class TestPlaceAllHeads:
    """Test whole-site placement."""

    def test_quick_couplers_on_athletic_field(self, context, athletic_site, athletic_params):
        heads = place_all_heads(athletic_site, athletic_params, context)
        couplers = [head for head in heads if head.kind == 'quick-coupler']

        assert [head.position for head in couplers] == [
            Point(150, 75), Point(150, 37.5), Point(150, 112.5)
        ]
        assert all(head.gpm == 0 and head.model == '44RC' for head in couplers)
        assert heads[-3:] == couplers

    def test_no_quick_couplers_for_commercial(self, context, square_turf_site, commercial_params):
        heads = place_all_heads(square_turf_site, commercial_params, context)
        assert not any(head.kind == 'quick-coupler' for head in heads)

    def test_beds_never_use_athletic_rules(self, context, athletic_params):
        site = SiteAnalysis(
            property_width_ft=100, property_length_ft=100,
            bed_zones=(make_zone('bed', 0, 0, 15, 10),)
        )
        heads = place_all_heads(site, athletic_params, context)
        assert {head.kind for head in heads if head.kind != 'quick-coupler'} == {'rotary-nozzle'}

    def test_zone_category_order(self, context, mixed_site, commercial_params):
        heads = place_all_heads(mixed_site, commercial_params, context)
        kinds = [head.kind for head in heads]

        assert kinds[0] == 'rotor'
        assert kinds[-1] == 'strip'
        assert kinds.index('drip') > max(i for i, kind in enumerate(kinds) if kind in ('rotor', 'spray'))

    def test_ids_restart_per_context(self, square_turf_site, commercial_params):
        first = place_all_heads(square_turf_site, commercial_params, DesignContext())
        second = place_all_heads(square_turf_site, commercial_params, DesignContext())
        assert [head.id for head in first] == [head.id for head in second]
