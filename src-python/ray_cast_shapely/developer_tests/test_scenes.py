"""
===============================================================================
SCENE GENERATORS - Feature Verification Test
===============================================================================

Tests for the labyrinth generator and the shape helpers.

A PERFECT LABYRINTH
-------------------
A w x h labyrinth carved by the depth-first backtracker is a spanning tree
of the cell grid: exactly w*h - 1 interior walls are opened and every cell
is reachable from every other. The outer boundary stays closed, so a ray
started inside a mirror labyrinth never escapes.

Run with:
    python developer_tests/test_scenes.py

Or with pytest:
    pytest developer_tests/test_scenes.py -v
===============================================================================
"""

import sys
import math
from collections import deque
from pathlib import Path

# Add the src-python directory to the path for imports
src_python = Path(__file__).parent.parent.parent
if str(src_python) not in sys.path:
    sys.path.insert(0, str(src_python))

from ray_cast_shapely.core.geometry import Point
from ray_cast_shapely.core.materials import MaterialState
from ray_cast_shapely.core.ray import Ray
from ray_cast_shapely.core.scene_graph import SceneGraph
from ray_cast_shapely.core.solver import solve
from ray_cast_shapely.scenes import Labyrinth, circle_lines, box_lines
from ray_cast_shapely.scenes.labyrinth import DIRECTIONS


def line_length(line):
    (x1, y1), (x2, y2) = line
    return math.hypot(x2 - x1, y2 - y1)


def reachable_cells(labyrinth):
    seen = {(0, 0)}
    queue = deque([(0, 0)])
    while queue:
        x, y = queue.popleft()
        for (dx, dy), (side, _) in DIRECTIONS.items():
            nx, ny = x + dx, y + dy
            if not (0 <= nx < labyrinth.width and 0 <= ny < labyrinth.height):
                continue
            if labyrinth.is_open(x, y, side) and (nx, ny) not in seen:
                seen.add((nx, ny))
                queue.append((nx, ny))
    return seen


# =============================================================================
# LABYRINTH
# =============================================================================

def test_labyrinth_is_perfect():
    for seed in [0, 1, 7]:
        labyrinth = Labyrinth(6, 5, 10.0).generate_depth_first(seed)
        assert labyrinth.passages() == 6 * 5 - 1, f"seed {seed}"
        assert len(reachable_cells(labyrinth)) == 30, f"seed {seed}"


def test_labyrinth_wall_count():
    labyrinth = Labyrinth(6, 5, 10.0).generate_depth_first(3)
    all_walls = (5 + 1) * 6 + (6 + 1) * 5
    assert len(labyrinth.wall_lines()) == all_walls - labyrinth.passages()


def test_merged_walls_cover_the_same_length():
    labyrinth = Labyrinth(8, 8, 5.0, origin=(-20, -20)).generate_depth_first(11)
    merged = labyrinth.merged_lines()
    single = labyrinth.wall_lines()

    assert len(merged) < len(single)
    assert abs(sum(map(line_length, merged)) - sum(map(line_length, single))) < 1e-9


def test_labyrinth_is_reproducible():
    a = Labyrinth(5, 5, 1.0).generate_depth_first(42)
    b = Labyrinth(5, 5, 1.0).generate_depth_first(42)
    assert a.cells == b.cells


def test_single_cell_labyrinth_is_a_box():
    labyrinth = Labyrinth(1, 1, 10.0).generate_depth_first(0)
    assert labyrinth.passages() == 0
    assert len(labyrinth.wall_lines()) == 4
    assert len(labyrinth.merged_lines()) == 4


def test_labyrinth_rejects_bad_sizes():
    for args in [(0, 3, 1.0), (3, 0, 1.0), (3, 3, 0.0)]:
        try:
            Labyrinth(*args)
        except ValueError:
            continue
        raise AssertionError(f"Labyrinth{args} was accepted")


def test_labyrinth_add_to_graph():
    labyrinth = Labyrinth(4, 4, 10.0).generate_depth_first(5)
    graph = SceneGraph()
    edges = labyrinth.add_to_graph(graph, MaterialState.ABSORPTIVE)

    assert len(edges) == len(labyrinth.merged_lines())
    assert len(graph.snapshot_segments()) == len(edges)
    assert all(e.material is MaterialState.ABSORPTIVE for e in graph.edges)


def test_ray_never_escapes_mirror_labyrinth():
    labyrinth = Labyrinth(5, 5, 20.0).generate_depth_first(9)
    graph = SceneGraph()
    labyrinth.add_to_graph(graph)

    ray = Ray.from_angle((13.0, 7.0), 0.7)
    pieces = solve(ray, graph.snapshot_segments(), max_rays=200)

    assert len(pieces) == 200
    assert not any(p.escaped for p in pieces)
    for p in pieces:
        assert -1e-6 <= p.end.x <= 100 + 1e-6
        assert -1e-6 <= p.end.y <= 100 + 1e-6


# =============================================================================
# SHAPES
# =============================================================================

def test_circle_lines():
    lines = circle_lines((5, -3), 10.0, count=16)

    assert len(lines) == 16
    for (start, end), (next_start, _) in zip(lines, lines[1:] + lines[:1]):
        assert end == next_start
        assert abs(math.hypot(start[0] - 5, start[1] + 3) - 10.0) < 1e-9


def test_circle_lines_validation():
    for kwargs in [{'count': 2}, {'radius': 0.0}]:
        params = {'center': (0, 0), 'radius': 1.0, 'count': 8}
        params.update(kwargs)
        try:
            circle_lines(**params)
        except ValueError:
            continue
        raise AssertionError(f"circle_lines accepted {kwargs}")


def test_ray_stays_inside_mirror_circle():
    graph = SceneGraph()
    graph.add_segments(circle_lines((0, 0), 50.0, count=24))
    assert len(graph.nodes) == 24

    pieces = solve(Ray.from_angle((3.0, -2.0), 0.1), graph.snapshot_segments(), max_rays=40)

    assert len(pieces) == 40
    assert all(not p.escaped for p in pieces)
    assert all(math.hypot(p.end.x, p.end.y) <= 50.0 + 1e-6 for p in pieces)


def test_box_lines():
    lines = box_lines((0, 0), (4, 2))
    assert lines[0] == ((0, 0), (4, 0))
    assert sum(map(line_length, lines)) == 12


def test_absorptive_box_stops_ray():
    graph = SceneGraph()
    graph.add_segments(box_lines((-10, -10), (10, 10)), MaterialState.ABSORPTIVE)
    pieces = solve(Ray(Point(0, 0), Point(0, 1)), graph.snapshot_segments())

    assert len(pieces) == 1
    assert pieces[0].end == Point(0, 10)


def run_all_tests():
    """Run all tests and report results."""
    print("\n" + "=" * 78)
    print("SCENE GENERATOR TESTS")
    print("=" * 78)

    tests = [(name, func) for name, func in globals().items()
             if name.startswith('test_') and callable(func)]

    passed = 0
    errors = []
    for name, test_func in tests:
        try:
            test_func()
            passed += 1
        except Exception as e:
            errors.append((name, str(e)))
            print(f"\n  FAILED: {name}")
            print(f"    Error: {e}")

    print("\n" + "=" * 78)
    print(f"SUMMARY: {passed}/{len(tests)} tests passed")
    print("=" * 78)
    return not errors


if __name__ == "__main__":
    success = run_all_tests()
    sys.exit(0 if success else 1)
