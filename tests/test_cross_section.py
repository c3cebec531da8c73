import numpy as np
import pytest
from channelflow.cross_section import (Geometry, RectangularSection, TrapezoidalSection,
                                       TriangularSection, CircularSection, make_section)


@pytest.mark.parametrize("depth", [0.0, -0.5, -10.0])
def test_dry_geometry_for_non_positive_depth(shape_case, depth):
    section, _ = shape_case
    assert section.properties(depth) == Geometry(0.0, 0.0, 0.0, 0.0)


@pytest.mark.parametrize("depth", [0.01, 0.7, 3.0, 42.0])
def test_rectangular_closed_form(depth):
    geom = RectangularSection(width=5.0).properties(depth)

    assert geom.area == pytest.approx(5.0 * depth)
    assert geom.wetted_perimeter == pytest.approx(5.0 + 2 * depth)
    assert geom.top_width == pytest.approx(5.0)
    assert geom.centroid_depth == pytest.approx(depth / 2)
    assert geom.hydraulic_radius == pytest.approx(5.0 * depth / (5.0 + 2 * depth))


def test_trapezoid_without_side_slope_matches_rectangle():
    trap = TrapezoidalSection(width=4.0, side_slope=0.0).properties(1.3)
    rect = RectangularSection(width=4.0).properties(1.3)

    assert trap.area == pytest.approx(rect.area)
    assert trap.wetted_perimeter == pytest.approx(rect.wetted_perimeter)
    assert trap.top_width == pytest.approx(rect.top_width)
    assert trap.centroid_depth == pytest.approx(rect.centroid_depth)


def test_trapezoid_without_bottom_matches_triangle():
    trap = TrapezoidalSection(width=0.0, side_slope=1.5).properties(0.8)
    tri = TriangularSection(side_slope=1.5).properties(0.8)

    assert trap.area == pytest.approx(tri.area)
    assert trap.wetted_perimeter == pytest.approx(tri.wetted_perimeter)
    assert trap.top_width == pytest.approx(tri.top_width)
    assert trap.centroid_depth == pytest.approx(tri.centroid_depth)


def test_trapezoid_values():
    geom = TrapezoidalSection(width=3.0, side_slope=2.0).properties(1.0)

    assert geom.area == pytest.approx(5.0)
    assert geom.wetted_perimeter == pytest.approx(3.0 + 2 * np.sqrt(5.0))
    assert geom.top_width == pytest.approx(7.0)
    # centroid of a trapezoid with parallel sides 3 (bed) and 7 (surface)
    assert geom.centroid_depth == pytest.approx(1.0 - (1.0 / 3.0) * (2 * 7 + 3) / (7 + 3))


def test_circular_half_full():
    geom = CircularSection(diameter=2.0).properties(1.0)

    assert geom.area == pytest.approx(np.pi / 2)
    assert geom.wetted_perimeter == pytest.approx(np.pi)
    assert geom.top_width == pytest.approx(2.0)
    assert geom.centroid_depth == pytest.approx(4.0 / (3.0 * np.pi))


def test_circular_full_and_surcharged():
    section = CircularSection(diameter=2.0)
    full = section.properties(2.0)

    assert full.area == pytest.approx(np.pi)
    assert full.wetted_perimeter == pytest.approx(2 * np.pi)
    assert full.top_width == pytest.approx(0.0, abs=1e-12)
    assert full.centroid_depth == pytest.approx(1.0)
    assert section.properties(5.0) == full


def test_area_increases_with_depth(shape_case):
    section, _ = shape_case
    depths = np.linspace(0.05, 1.9, 30)
    areas = [section.area(y) for y in depths]

    assert np.all(np.diff(areas) > 0)


def test_make_section_ignores_irrelevant_parameters():
    section = make_section('Triangular', side_slope=1.5, width=99.0, diameter=-1.0)

    assert isinstance(section, TriangularSection)
    assert section.parameters() == {'side_slope': 1.5}
    assert isinstance(make_section('circular', diameter=1.2), CircularSection)


def test_make_section_rejects_unknown_shape_and_missing_parameters():
    with pytest.raises(ValueError):
        make_section('Parabolic', width=2.0)
    with pytest.raises(ValueError):
        make_section('Trapezoidal', width=2.0)


@pytest.mark.parametrize("section, message", [
    (RectangularSection(width=0.0), "Width must be positive."),
    (CircularSection(diameter=-1.0), "Diameter must be positive."),
    (TriangularSection(side_slope=0.0), "Side slope must be positive."),
    (TrapezoidalSection(width=0.0, side_slope=0.0), "Width or side slope must be positive."),
])
def test_validate(section, message):
    with pytest.raises(ValueError, match=message):
        section.validate()
