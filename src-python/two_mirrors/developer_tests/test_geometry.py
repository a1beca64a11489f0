"""
===============================================================================
GEOMETRY KERNEL TESTS
===============================================================================

Tests for core.geometry, core.ray and core.mirror, covering:

1. VECTOR PRIMITIVES
   - Normalization (including the zero vector)
   - Reflection involution

2. RAY/SEGMENT INTERSECTION
   - Hit point, ray parameter and normal orientation
   - Parallel rays, hits behind the origin, hits past the segment ends

3. ANGLES
   - Normalization into [0, 360) and circular differences

4. RAYS AND MIRRORS
   - Zero-direction rays, mirrors built from the hinge, reflection

Run with:
    python developer_tests/test_geometry.py

Or with pytest:
    pytest developer_tests/test_geometry.py -v
===============================================================================
"""

import sys
from pathlib import Path

# Add the src-python directory to the path
src_path = Path(__file__).parent.parent.parent
if str(src_path) not in sys.path:
    sys.path.insert(0, str(src_path))

import pytest


# =============================================================================
# TEST CONFIGURATION
# =============================================================================

TOLERANCE = 1e-9
ANGLE_TOLERANCE = 1e-6  # degrees


def assert_close(actual, expected, tol=TOLERANCE, msg=""):
    """Assert that two values are close within tolerance."""
    if abs(actual - expected) > tol:
        raise AssertionError(
            f"{msg}: expected {expected}, got {actual} (diff: {abs(actual - expected)})"
        )


def assert_point_close(actual, expected, tol=TOLERANCE, msg=""):
    assert_close(actual.x, expected.x, tol, f"{msg} (x)")
    assert_close(actual.y, expected.y, tol, f"{msg} (y)")


# =============================================================================
# VECTOR PRIMITIVES
# =============================================================================

def test_normalize_vec():
    """Unit length for ordinary vectors, (0, 0) for the zero vector."""
    print("\n" + "=" * 60)
    print("TEST: normalize_vec")
    print("=" * 60)

    from two_mirrors.core.geometry import geometry, Point

    unit = geometry.normalize_vec(Point(3.0, 4.0))
    assert_point_close(unit, Point(0.6, 0.8), msg="3-4-5 vector")
    print(f"  (3, 4) -> {unit} - PASS")

    zero = geometry.normalize_vec(Point(0.0, 0.0))
    assert zero == Point(0.0, 0.0), f"Expected zero vector, got {zero}"
    print("  (0, 0) -> (0, 0) - PASS")


def test_reflection_involution():
    """Reflecting twice about the same unit normal gives the original vector."""
    print("\n" + "=" * 60)
    print("TEST: Reflection Involution")
    print("=" * 60)

    from two_mirrors.core.geometry import geometry

    for v_angle in (0.0, 17.0, 90.0, 133.3, 251.0, 359.0):
        for n_angle in (0.0, 45.0, 90.0, 200.0, 312.5):
            v = geometry.direction_from_angle(v_angle)
            n = geometry.direction_from_angle(n_angle)
            twice = geometry.reflect_vec(geometry.reflect_vec(v, n), n)
            assert_point_close(twice, v, 1e-12, f"v={v_angle}, n={n_angle}")
    print("  30 vector/normal pairs - PASS")


def test_reflect_vec_against_horizontal_surface():
    from two_mirrors.core.geometry import geometry, Point

    reflected = geometry.reflect_vec(Point(1.0, -1.0), Point(0.0, 1.0))
    assert_point_close(reflected, Point(1.0, 1.0), msg="Bounce off the x axis")


# =============================================================================
# RAY/SEGMENT INTERSECTION
# =============================================================================

def test_intersect_ray_segment_hit():
    """Straight-down ray onto a horizontal segment."""
    print("\n" + "=" * 60)
    print("TEST: Ray/Segment Intersection")
    print("=" * 60)

    from two_mirrors.core.geometry import geometry, Point

    hit = geometry.intersect_ray_segment(
        Point(2.0, 5.0), Point(0.0, -1.0), Point(-10.0, 0.0), Point(10.0, 0.0)
    )
    assert hit is not None, "Expected a hit"
    assert_point_close(hit.point, Point(2.0, 0.0), msg="Hit point")
    assert_close(hit.t, 5.0, msg="Ray parameter")
    assert_point_close(hit.normal, Point(0.0, 1.0), msg="Normal faces the ray")
    print(f"  Hit at {hit.point}, t={hit.t}, normal={hit.normal} - PASS")


def test_normal_faces_incoming_ray():
    """dot(normal, direction) < 0 from either side of the segment."""
    print("\n" + "=" * 60)
    print("TEST: Normal Sign Convention")
    print("=" * 60)

    from two_mirrors.core.geometry import geometry, Point

    p1 = Point(-50.0, -20.0)
    p2 = Point(60.0, 35.0)
    origins = [Point(-10.0, 40.0), Point(10.0, -40.0), Point(80.0, -5.0), Point(-70.0, 10.0)]
    for origin in origins:
        target = Point(5.0, 7.5)  # midpoint of the segment
        direction = geometry.normalize_vec(geometry.subtract(target, origin))
        hit = geometry.intersect_ray_segment(origin, direction, p1, p2)
        assert hit is not None, f"Expected a hit from {origin}"
        assert geometry.dot(hit.normal, direction) < 0, f"Normal not facing ray from {origin}"
        assert_close(geometry.length(hit.normal), 1.0, msg="Unit normal")
    print(f"  {len(origins)} origins on both sides - PASS")


def test_intersect_ray_segment_misses():
    """Parallel, behind the origin, past the ends, and at the origin itself."""
    print("\n" + "=" * 60)
    print("TEST: Ray/Segment Misses")
    print("=" * 60)

    from two_mirrors.core.geometry import geometry, Point

    a = Point(-10.0, 0.0)
    b = Point(10.0, 0.0)

    # Parallel, both off the line and along it
    assert geometry.intersect_ray_segment(Point(0.0, 5.0), Point(1.0, 0.0), a, b) is None
    assert geometry.intersect_ray_segment(Point(-20.0, 0.0), Point(1.0, 0.0), a, b) is None
    print("  Parallel rays - PASS")

    # Segment behind the ray
    assert geometry.intersect_ray_segment(Point(0.0, 5.0), Point(0.0, 1.0), a, b) is None
    print("  Behind the origin - PASS")

    # Line hit outside [p1, p2]
    assert geometry.intersect_ray_segment(Point(20.0, 5.0), Point(0.0, -1.0), a, b) is None
    print("  Past the segment end - PASS")

    # A ray leaving the surface does not re-hit it
    assert geometry.intersect_ray_segment(Point(0.0, 0.0), Point(0.0, 1.0), a, b) is None
    assert geometry.intersect_ray_segment(Point(0.0, 0.0), Point(1.0, -1.0), a, b) is None
    print("  Ray starting on the segment - PASS")


def test_intersect_ray_segment_endpoint_inclusive():
    from two_mirrors.core.geometry import geometry, Point

    hit = geometry.intersect_ray_segment(
        Point(10.0, 5.0), Point(0.0, -1.0), Point(-10.0, 0.0), Point(10.0, 0.0)
    )
    assert hit is not None, "Endpoint should count as a hit"
    assert_point_close(hit.point, Point(10.0, 0.0), msg="Endpoint hit")


# =============================================================================
# ANGLES
# =============================================================================

def test_normalize_angle():
    """Modular wraparound into [0, 360)."""
    print("\n" + "=" * 60)
    print("TEST: normalize_angle")
    print("=" * 60)

    from two_mirrors.core.geometry import geometry

    cases = [(0.0, 0.0), (360.0, 0.0), (370.0, 10.0), (-10.0, 350.0),
             (-720.0, 0.0), (725.5, 5.5), (359.999, 359.999)]
    for value, expected in cases:
        assert_close(geometry.normalize_angle(value), expected, ANGLE_TOLERANCE, f"{value}")
    print(f"  {len(cases)} cases - PASS")

    result = geometry.normalize_angle(-1e-20)
    assert 0.0 <= result < 360.0, f"Tiny negative wrapped to {result}"
    print("  Tiny negative stays in range - PASS")


def test_normalize_angle_rejects_non_finite():
    from two_mirrors.core.geometry import geometry

    with pytest.raises(ValueError):
        geometry.normalize_angle(float('nan'))
    with pytest.raises(ValueError):
        geometry.normalize_angle(float('inf'))


def test_angle_difference():
    from two_mirrors.core.geometry import geometry

    assert_close(geometry.angle_difference(355.0, 5.0), 10.0, ANGLE_TOLERANCE, "wrap")
    assert_close(geometry.angle_difference(5.0, 355.0), 10.0, ANGLE_TOLERANCE, "wrap reversed")
    assert_close(geometry.angle_difference(90.0, 270.0), 180.0, ANGLE_TOLERANCE, "opposite")
    assert_close(geometry.angle_difference(45.0, 70.0), 25.0, ANGLE_TOLERANCE, "plain")


def test_angle_of_and_direction_from_angle():
    from two_mirrors.core.geometry import geometry, Point

    for angle in (0.0, 30.0, 90.0, 180.0, 270.0, 315.0):
        assert_close(geometry.angle_of(geometry.direction_from_angle(angle)), angle,
                     ANGLE_TOLERANCE, f"round trip {angle}")
    assert_close(geometry.angle_of(Point(0.0, -2.0)), 270.0, ANGLE_TOLERANCE, "negative y axis")


def test_shapely_conversion():
    from shapely.geometry import Point as ShapelyPoint
    from two_mirrors.core.geometry import Point, Line

    sp = Point(1.5, -2.0).to_shapely()
    assert isinstance(sp, ShapelyPoint)
    assert (sp.x, sp.y) == (1.5, -2.0)

    line = Line(Point(0.0, 0.0), Point(3.0, 4.0))
    assert_close(line.to_shapely().length, 5.0, msg="LineString length")
    assert list(line.to_shapely().coords) == [(0.0, 0.0), (3.0, 4.0)]


# =============================================================================
# RAYS AND MIRRORS
# =============================================================================

def test_ray_normalizes_direction():
    from two_mirrors.core.geometry import Point
    from two_mirrors.core.ray import Ray

    ray = Ray(Point(1.0, 1.0), Point(0.0, 10.0))
    assert ray.direction == Point(0.0, 1.0)
    assert_close(ray.angle, 90.0, ANGLE_TOLERANCE, "Ray angle")
    assert_point_close(ray.point_at(3.0), Point(1.0, 4.0), msg="point_at")


def test_ray_rejects_zero_direction():
    from two_mirrors.core.geometry import Point
    from two_mirrors.core.ray import Ray

    with pytest.raises(ValueError):
        Ray(Point(0.0, 0.0), Point(0.0, 0.0))


def test_ray_through_target():
    from two_mirrors.core.geometry import Point
    from two_mirrors.core.ray import Ray

    ray = Ray.through(Point(10.0, 10.0), Point(0.0, 0.0))
    assert_close(ray.angle, 225.0, ANGLE_TOLERANCE, "Aimed at the origin")


def test_mirror_from_hinge():
    """Semi-infinite mirror starting at the hinge."""
    print("\n" + "=" * 60)
    print("TEST: Mirror.from_hinge")
    print("=" * 60)

    from two_mirrors.core.geometry import Point
    from two_mirrors.core.mirror import Mirror
    from two_mirrors.core.constants import INFINITE_MIRROR_LENGTH

    mirror = Mirror.from_hinge(90.0, 'm2')
    assert mirror.start == Point(0.0, 0.0)
    assert_close(mirror.end.x, 0.0, 1e-6, "End x")
    assert_close(mirror.end.y, INFINITE_MIRROR_LENGTH, 1e-6, "End y")
    assert_close(mirror.angle, 90.0, ANGLE_TOLERANCE, "Angle")
    assert mirror.id == 'm2'
    assert_close(mirror.to_shapely().length, INFINITE_MIRROR_LENGTH, 1e-6, "Shapely length")
    print(f"  {mirror} - PASS")

    wrapped = Mirror.from_hinge(-90.0, 'm2')
    assert_close(wrapped.angle, 270.0, ANGLE_TOLERANCE, "Negative angle wraps")
    print("  Negative angle wraps - PASS")


def test_mirror_reflects_ray():
    from two_mirrors.core.geometry import Point
    from two_mirrors.core.mirror import Mirror
    from two_mirrors.core.ray import Ray

    mirror = Mirror.from_hinge(0.0, 'm1')
    ray = Ray.through(Point(100.0, 50.0), Point(150.0, 0.0))
    hit = mirror.check_ray_intersects(ray)
    assert hit is not None
    assert_point_close(hit.point, Point(150.0, 0.0), 1e-9, "Hit point")

    outgoing = mirror.reflect(ray, hit)
    assert outgoing.origin == hit.point
    assert_close(outgoing.angle, 45.0, ANGLE_TOLERANCE, "Outgoing angle")


# =============================================================================
# MAIN
# =============================================================================

def run_all_tests():
    """Run all tests and report results."""
    print("\n" + "=" * 78)
    print("GEOMETRY KERNEL TESTS")
    print("=" * 78)

    tests = [
        # Vector primitives
        ("normalize_vec", test_normalize_vec),
        ("Reflection Involution", test_reflection_involution),
        ("reflect_vec", test_reflect_vec_against_horizontal_surface),

        # Intersection
        ("Ray/Segment Hit", test_intersect_ray_segment_hit),
        ("Normal Sign Convention", test_normal_faces_incoming_ray),
        ("Ray/Segment Misses", test_intersect_ray_segment_misses),
        ("Endpoint Hit", test_intersect_ray_segment_endpoint_inclusive),

        # Angles
        ("normalize_angle", test_normalize_angle),
        ("normalize_angle Non-finite", test_normalize_angle_rejects_non_finite),
        ("angle_difference", test_angle_difference),
        ("angle_of", test_angle_of_and_direction_from_angle),
        ("Shapely Conversion", test_shapely_conversion),

        # Rays and mirrors
        ("Ray Direction", test_ray_normalizes_direction),
        ("Ray Zero Direction", test_ray_rejects_zero_direction),
        ("Ray.through", test_ray_through_target),
        ("Mirror.from_hinge", test_mirror_from_hinge),
        ("Mirror.reflect", test_mirror_reflects_ray),
    ]

    passed = 0
    failed = 0
    errors = []

    for name, test_func in tests:
        try:
            test_func()
            passed += 1
        except Exception as e:
            failed += 1
            errors.append((name, str(e)))
            print(f"\n  FAILED: {name}")
            print(f"    Error: {e}")

    print("\n" + "=" * 78)
    print(f"SUMMARY: {passed}/{len(tests)} tests passed")
    print("=" * 78)

    if errors:
        print("\nFailed tests:")
        for name, error in errors:
            print(f"  - {name}: {error}")
        return False

    print("\nAll tests passed!")
    return True


if __name__ == "__main__":
    success = run_all_tests()
    sys.exit(0 if success else 1)
