"""
===============================================================================
SCENE GRAPH - Feature Verification Test
===============================================================================

Tests for the editable scene: nodes with stable ids, material-carrying edges,
picking helpers, bulk import, and the segment snapshot handed to the solver.

Run with:
    python developer_tests/test_scene_graph.py

Or with pytest:
    pytest developer_tests/test_scene_graph.py -v
===============================================================================
"""

import sys
from pathlib import Path

# Add the src-python directory to the path for imports
src_python = Path(__file__).parent.parent.parent
if str(src_python) not in sys.path:
    sys.path.insert(0, str(src_python))

from ray_cast_shapely.core.geometry import Point
from ray_cast_shapely.core.materials import MaterialState
from ray_cast_shapely.core.ray import Ray
from ray_cast_shapely.core.scene_graph import SceneGraph, SceneIntegrityError, Edge
from ray_cast_shapely.core.solver import solve
from ray_cast_shapely.scenes import box_lines


def expect_raises(exc_type, func, *args, **kwargs):
    try:
        func(*args, **kwargs)
    except exc_type as e:
        return e
    raise AssertionError(f"{func.__name__} did not raise {exc_type.__name__}")


def make_wall_scene():
    graph = SceneGraph("wall")
    a = graph.add_node((10, 0))
    b = graph.add_node({'x': 10, 'y': 100})
    graph.add_edge(a, b)
    return graph, a, b


# =============================================================================
# NODES
# =============================================================================

def test_node_ids_are_monotonic_and_never_reused():
    graph = SceneGraph()
    ids = [graph.add_node((i, 0)) for i in range(3)]
    assert ids == [0, 1, 2]

    graph.remove_node(2)
    assert graph.add_node((5, 5)) == 3

    graph.clear()
    assert graph.add_node((0, 0)) == 4


def test_remove_node_cascades_to_edges():
    graph = SceneGraph()
    a, b, c = (graph.add_node(p) for p in [(0, 0), (1, 0), (1, 1)])
    graph.add_edge(a, b)
    graph.add_edge(b, c)
    graph.add_edge(c, a)

    graph.remove_node(b)

    assert b not in graph.nodes
    assert len(graph.edges) == 1
    assert graph.edges[0].connects(a, c)


def test_remove_unknown_node_is_ignored():
    graph, _, _ = make_wall_scene()
    graph.remove_node(42)
    assert len(graph.nodes) == 2


def test_move_node():
    graph, a, b = make_wall_scene()
    graph.move_node(a, (20, 0))
    assert graph.nodes[a].position == Point(20, 0)
    expect_raises(KeyError, graph.move_node, 99, (0, 0))


# =============================================================================
# EDGES
# =============================================================================

def test_duplicate_and_self_edges_are_refused():
    graph, a, b = make_wall_scene()

    assert graph.add_edge(b, a) is None
    assert graph.add_edge(a, a) is None
    assert len(graph.edges) == 1


def test_add_edge_unknown_node_raises():
    graph, a, _ = make_wall_scene()
    expect_raises(KeyError, graph.add_edge, a, 99)


def test_edge_lookup_removal_and_material():
    graph, a, b = make_wall_scene()

    edge = graph.find_edge(b, a)
    assert edge is not None
    assert edge.material is MaterialState.REFLECTIVE

    graph.set_edge_material(a, b, 'absorptive')
    assert edge.material is MaterialState.ABSORPTIVE
    expect_raises(ValueError, graph.set_edge_material, a, b, 'foggy')

    assert graph.remove_edge(b, a) is True
    assert graph.remove_edge(a, b) is False
    expect_raises(KeyError, graph.set_edge_material, a, b, 'transparent')


# =============================================================================
# PICKING
# =============================================================================

def test_node_at():
    graph, a, b = make_wall_scene()
    assert graph.node_at((11, 1), radius=2) == a
    assert graph.node_at((10, 97), radius=5) == b
    assert graph.node_at((50, 50), radius=5) is None


def test_edge_at():
    graph, a, b = make_wall_scene()
    edge = graph.find_edge(a, b)

    assert graph.edge_at((11, 50), thickness=4) is edge
    assert graph.edge_at((14, 50), thickness=4) is None
    # Beyond the end the distance is measured to the endpoint
    assert graph.edge_at((10, 101), thickness=4) is edge
    assert graph.edge_at((10, 110), thickness=4) is None


# =============================================================================
# BULK IMPORT AND SNAPSHOT
# =============================================================================

def test_add_segments_shares_nodes():
    graph = SceneGraph()
    edges = graph.add_segments(box_lines((0, 0), (10, 5)), 'absorptive')

    assert len(edges) == 4
    assert len(graph.nodes) == 4
    assert all(e.material is MaterialState.ABSORPTIVE for e in edges)

    # Re-importing the same outline creates nothing new
    assert graph.add_segments(box_lines((0, 0), (10, 5))) == []
    assert len(graph.nodes) == 4


def test_snapshot_is_a_value_copy():
    graph, a, b = make_wall_scene()
    segments = graph.snapshot_segments()

    graph.move_node(a, (30, 0))

    assert segments[0].start == Point(10, 0)
    assert graph.snapshot_segments()[0].start == Point(30, 0)


def test_snapshot_with_broken_edge():
    graph, a, b = make_wall_scene()
    c = graph.add_node((0, 0))
    graph.add_edge(a, c)
    # Simulate an edge left dangling by an external edit
    graph.edges.append(Edge(b, 77))

    error = expect_raises(SceneIntegrityError, graph.snapshot_segments)
    assert len(error.broken_edges) == 1
    assert error.broken_edges[0].b == 77

    segments = graph.snapshot_segments(skip_broken=True)
    assert len(segments) == 2


def test_graph_drives_the_solver():
    graph, _, _ = make_wall_scene()
    pieces = solve(Ray(Point(0, 50), Point(1, 0)), graph.snapshot_segments())

    assert len(pieces) == 2
    assert pieces[0].end == Point(10, 50)


def test_repr():
    graph, _, _ = make_wall_scene()
    assert repr(graph) == "SceneGraph('wall', nodes=2, edges=1)"


def run_all_tests():
    """Run all tests and report results."""
    print("\n" + "=" * 78)
    print("SCENE GRAPH TESTS")
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
