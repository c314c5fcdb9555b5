import pytest

from geometry.distance import EARTH_RADIUS_KM, haversine_km, path_length_km
from geometry.predicates import point_in_polygon, point_on_segment, segments_intersect

SQUARE = [(0.0, 0.0), (2.0, 0.0), (2.0, 2.0), (0.0, 2.0), (0.0, 0.0)]


# --- segment intersection ---

def test_crossing_segments_intersect():
    assert segments_intersect((0, 0), (2, 2), (0, 2), (2, 0))


def test_disjoint_segments_do_not_intersect():
    assert not segments_intersect((0, 0), (1, 1), (2, 0), (3, -1))


def test_intersection_is_symmetric():
    cases = [
        ((0, 0), (2, 2), (0, 2), (2, 0)),
        ((0, 0), (1, 0), (0, 1), (1, 1)),
        ((0, 0), (2, 0), (1, 0), (3, 0)),
    ]
    for p1, p2, q1, q2 in cases:
        assert segments_intersect(p1, p2, q1, q2) == segments_intersect(q1, q2, p1, p2)


def test_touching_endpoints_intersect():
    assert segments_intersect((0, 0), (1, 1), (1, 1), (2, 0))


def test_t_junction_intersects():
    assert segments_intersect((0, 0), (2, 0), (1, -1), (1, 0))


def test_parallel_segments_do_not_intersect():
    assert not segments_intersect((0, 0), (2, 0), (0, 1), (2, 1))


def test_short_perpendicular_segments_apart_do_not_intersect():
    # ~0.1 m long in degrees, 1e-7 apart
    assert not segments_intersect((0, 0), (9e-7, 0), (4e-7, 1e-7), (4e-7, 1e-6))
    assert segments_intersect((0, 0), (9e-7, 0), (4e-7, -1e-7), (4e-7, 1e-6))


def test_collinear_overlapping_segments_intersect():
    assert segments_intersect((0, 0), (2, 0), (1, 0), (3, 0))
    assert segments_intersect((0, 0), (4, 0), (1, 0), (2, 0))


def test_collinear_disjoint_segments_do_not_intersect():
    assert not segments_intersect((0, 0), (1, 0), (2, 0), (3, 0))


def test_degenerate_segment_only_meets_identical_point():
    # a point lying on the other segment does not count
    assert not segments_intersect((1, 0), (1, 0), (0, 0), (2, 0))
    assert segments_intersect((1, 1), (1, 1), (1, 1), (1, 1))
    assert not segments_intersect((1, 1), (1, 1), (1, 2), (1, 2))


def test_point_on_segment():
    assert point_on_segment((1, 1), (0, 0), (2, 2))
    assert not point_on_segment((3, 3), (0, 0), (2, 2))
    assert not point_on_segment((1, 1.1), (0, 0), (2, 2))


def test_point_near_a_short_segment_is_not_on_it():
    assert point_on_segment((4e-7, 0), (0, 0), (9e-7, 0))
    assert not point_on_segment((4e-7, 1e-7), (0, 0), (9e-7, 0))
    assert not point_on_segment((1e-6, 0), (0, 0), (9e-7, 0))


# --- point in polygon ---

def test_point_inside_and_outside():
    assert point_in_polygon((1, 1), SQUARE)
    assert not point_in_polygon((3, 1), SQUARE)
    assert not point_in_polygon((-1, 1), SQUARE)


@pytest.mark.parametrize("point", [(1, 0), (2, 1), (1, 2), (0, 1), (0, 0), (2, 2)])
def test_points_on_the_boundary_are_inside(point):
    assert point_in_polygon(point, SQUARE)


def test_open_ring_behaves_like_closed_ring():
    assert point_in_polygon((1, 1), SQUARE[:-1])
    assert not point_in_polygon((3, 3), SQUARE[:-1])


def test_ray_through_vertices_counts_once():
    diamond = [(0, 1), (1, 0), (2, 1), (1, 2), (0, 1)]
    assert point_in_polygon((1, 1), diamond)
    assert not point_in_polygon((-1, 1), diamond)
    assert not point_in_polygon((3, 1), diamond)


def test_concave_notch_is_outside():
    # a "U": the notch between the arms is outside
    u_shape = [(0, 0), (3, 0), (3, 3), (2, 3), (2, 1), (1, 1), (1, 3), (0, 3), (0, 0)]
    assert not point_in_polygon((1.5, 2), u_shape)
    assert point_in_polygon((0.5, 2), u_shape)
    assert point_in_polygon((2.5, 2), u_shape)


def test_too_few_vertices_contain_nothing():
    assert not point_in_polygon((0, 0), [(0, 0), (1, 1)])


# --- geodesic length ---

def test_one_degree_of_latitude():
    reference = EARTH_RADIUS_KM * 3.141592653589793 / 180
    assert haversine_km((0.0, 0.0), (1.0, 0.0)) == pytest.approx(reference, rel=1e-9)
    assert reference == pytest.approx(111.19, rel=0.005)


def test_one_degree_of_longitude_shrinks_with_latitude():
    at_equator = haversine_km((0.0, 0.0), (0.0, 1.0))
    at_sixty = haversine_km((60.0, 0.0), (60.0, 1.0))
    assert at_sixty == pytest.approx(at_equator / 2, rel=1e-3)


def test_path_length_sums_consecutive_pairs():
    path = [(0.0, 0.0), (1.0, 0.0), (1.0, 1.0)]
    expected = haversine_km(path[0], path[1]) + haversine_km(path[1], path[2])
    assert path_length_km(path) == pytest.approx(expected)


def test_path_length_of_short_paths_is_zero():
    assert path_length_km([]) == 0.0
    assert path_length_km([(10.0, 10.0)]) == 0.0
