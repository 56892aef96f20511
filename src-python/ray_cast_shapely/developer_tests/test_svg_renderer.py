"""
===============================================================================
SVG RENDERER - Feature Verification Test
===============================================================================

Tests for SVGRenderer: scene segments colored by material, solver output in
'ray' and 'hue_sweep' color modes, viewbox clipping, and file output.

Run with:
    python developer_tests/test_svg_renderer.py

Or with pytest:
    pytest developer_tests/test_svg_renderer.py -v
===============================================================================
"""

import sys
import tempfile
from pathlib import Path

# Add the src-python directory to the path for imports
src_python = Path(__file__).parent.parent.parent
if str(src_python) not in sys.path:
    sys.path.insert(0, str(src_python))

from ray_cast_shapely.core.geometry import Point, Segment
from ray_cast_shapely.core.materials import MaterialState
from ray_cast_shapely.core.ray import Ray, DrawableSegment, RED
from ray_cast_shapely.core.solver import solve
from ray_cast_shapely.core.svg_renderer import SVGRenderer, hue_sweep_color


VIEWBOX = (-50, -50, 200, 200)


def wall_scene():
    segments = [Segment(Point(10, 0), Point(10, 100))]
    pieces = solve(Ray(Point(0, 50), Point(1, 0), RED), segments)
    return segments, pieces


def test_draw_scene_and_rays():
    segments, pieces = wall_scene()
    renderer = SVGRenderer(400, 400, viewbox=VIEWBOX)
    renderer.draw_scene_segments(segments)
    drawn = renderer.draw_drawable_segments(pieces)

    svg = renderer.to_string()
    assert drawn == 2
    assert svg.count('class="ray"') == 2
    assert svg.count('class="segment reflective"') == 1
    assert 'rgb(255,0,0)' in svg
    assert 'id="layer-rays"' in svg


def test_escape_piece_is_clipped():
    renderer = SVGRenderer(viewbox=VIEWBOX)
    start, end = renderer._clip_to_viewbox(Point(10, 50), Point(-19990, 50))
    assert start == Point(10, 50)
    assert abs(end.x - (-50)) < 1e-9
    assert abs(end.y - 50) < 1e-9


def test_pieces_outside_viewbox_are_skipped():
    renderer = SVGRenderer(viewbox=VIEWBOX)
    outside = DrawableSegment(Point(500, 500), Point(600, 600), RED)
    assert renderer.draw_drawable_segments([outside]) == 0
    assert 'class="ray"' not in renderer.to_string()


def test_hue_sweep_mode():
    _, pieces = wall_scene()
    renderer = SVGRenderer(viewbox=VIEWBOX)
    renderer.draw_drawable_segments(pieces, color_mode='hue_sweep')

    svg = renderer.to_string()
    assert hue_sweep_color(0, 2) == 'rgb(255,0,0)'
    assert hue_sweep_color(1, 2) == 'rgb(204,0,255)'
    assert 'rgb(204,0,255)' in svg


def test_invalid_color_mode():
    renderer = SVGRenderer()
    try:
        renderer.draw_drawable_segments([], color_mode='rainbow')
    except ValueError:
        pass
    else:
        raise AssertionError("invalid color_mode was accepted")


def test_degenerate_segment_drawn_as_square():
    renderer = SVGRenderer(viewbox=VIEWBOX)
    renderer.draw_scene_segments([Segment(Point(5, 5), Point(5, 5), MaterialState.ABSORPTIVE)])
    assert 'class="segment' not in renderer.to_string()
    assert renderer.to_string().count('<rect') == 2


def test_save():
    _, pieces = wall_scene()
    renderer = SVGRenderer(viewbox=VIEWBOX)
    renderer.draw_drawable_segments(pieces)

    with tempfile.TemporaryDirectory() as tmp:
        path = Path(tmp) / 'wall.svg'
        renderer.save(str(path))
        content = path.read_text(encoding='utf-8')
    assert '<svg' in content
    assert content.count('class="ray"') == 2


def run_all_tests():
    """Run all tests and report results."""
    print("\n" + "=" * 78)
    print("SVG RENDERER TESTS")
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
