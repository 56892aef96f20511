"""
Copyright 2026 ray-cast-shapely authors and contributors

Licensed under the Apache License, Version 2.0 (the "License");
you may not use this file except in compliance with the License.
You may obtain a copy of the License at

    http://www.apache.org/licenses/LICENSE-2.0

Unless required by applicable law or agreed to in writing, software
distributed under the License is distributed on an "AS IS" BASIS,
WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
See the License for the specific language governing permissions and
limitations under the License.
"""

"""
Labyrinth Demo - A Ray Trapped in a Mirror Maze

A perfect labyrinth is carved with the depth-first backtracker and its walls
are imported into a scene graph as mirrors. One ray is fired from inside the
first cell. Mirrors do not attenuate, so the ray keeps bouncing until it
is absorbed or the solver's ray cap ends the solve.

Setup:
- 10 x 8 labyrinth with 40-unit cells, mirror walls
- A glass pane and an absorbing block placed in two cells
- Source ray from (20, 20) at 0.6 radians

Expected behavior:
- No piece leaves the labyrinth
- If the ray never reaches the absorbing block, the solver reports the cap
"""

import sys
import os
import logging

# Add parent directories to path to import ray_cast_shapely modules
sys.path.insert(0, os.path.join(os.path.dirname(__file__), '..', '..', '..'))

from ray_cast_shapely.core.geometry import Point
from ray_cast_shapely.core.materials import MaterialState
from ray_cast_shapely.core.ray import Ray, RED
from ray_cast_shapely.core.scene_graph import SceneGraph
from ray_cast_shapely.core.settings import SolverSettings
from ray_cast_shapely.core.solver import Solver
from ray_cast_shapely.core.svg_renderer import SVGRenderer
from ray_cast_shapely.scenes import Labyrinth, box_lines
from ray_cast_shapely.analysis import save_segments_csv, get_segment_statistics
from ray_cast_shapely.logging_config import setup_logging


def main():
    """Run the labyrinth demonstration."""

    setup_logging(logging.WARNING)

    print("Labyrinth Demo - A Ray Trapped in a Mirror Maze")
    print("=" * 60)

    graph = SceneGraph("labyrinth")
    labyrinth = Labyrinth(10, 8, 40.0).generate_depth_first(seed=2024)
    walls = labyrinth.add_to_graph(graph, MaterialState.REFLECTIVE)

    # A glass pane across one cell and an absorbing block in another
    a = graph.add_node((205, 125))
    b = graph.add_node((235, 155))
    graph.add_edge(a, b, MaterialState.TRANSPARENT)
    graph.add_segments(box_lines((290, 210), (310, 230)), MaterialState.ABSORPTIVE)

    print(f"\nScene setup:")
    print(f"  Labyrinth: {labyrinth.width}x{labyrinth.height} cells, {len(walls)} wall segments")
    print(f"  Graph: {graph}")

    settings = SolverSettings(max_rays=400)
    ray = Ray.from_angle(Point(20, 20), 0.6, RED)

    print("\nRunning solver...")
    solver = Solver(graph.snapshot_segments(), settings)
    pieces = solver.run(ray)

    print(f"  Processed {solver.processed_ray_count} rays")
    print(f"  Emitted pieces: {len(pieces)}")
    if solver.warning:
        print(f"  Warning: {solver.warning}")

    stats = get_segment_statistics(pieces)
    print(f"  Escaped: {stats['escaped']}, max generation: {stats['max_generation']}")
    print(f"  Total path length: {stats['total_length']:.1f}")

    print("\nCreating SVG visualization...")
    renderer = SVGRenderer(width=800, height=640, viewbox=(-10, -10, 420, 340))
    renderer.draw_scene_segments(graph.snapshot_segments())
    renderer.draw_drawable_segments(pieces, color_mode='hue_sweep', stroke_width=1.0)

    output_dir = os.path.dirname(os.path.abspath(__file__))
    svg_file = os.path.join(output_dir, 'output.svg')
    renderer.save(svg_file)
    print(f"\nSVG saved to: {svg_file}")

    csv_file = save_segments_csv(pieces, output_dir)
    print(f"CSV data exported to: {csv_file}")


if __name__ == "__main__":
    main()
