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
Glass Pane Demo - Splitting at Transparent Segments

A fan of rays hits a stack of three glass panes at increasing angles. At
each pane the color is divided between a reflected and a transmitted ray.
The demo runs each ray twice, once with straight-through transmission and
once with bend_transmitted=True, and renders both side by side.

Expected behavior:
- Near-normal rays pass mostly through; oblique rays mostly reflect
- With bending enabled the transmitted rays tilt toward the pane normal
"""

import sys
import os
import math

# Add parent directories to path to import ray_cast_shapely modules
sys.path.insert(0, os.path.join(os.path.dirname(__file__), '..', '..', '..'))

from ray_cast_shapely.core.geometry import Point
from ray_cast_shapely.core.materials import MaterialState
from ray_cast_shapely.core.ray import Ray, Color
from ray_cast_shapely.core.scene_graph import SceneGraph
from ray_cast_shapely.core.settings import SolverSettings
from ray_cast_shapely.core.solver import solve
from ray_cast_shapely.core.svg_renderer import SVGRenderer


def build_panes(graph, x_offset):
    for i in range(3):
        x = x_offset + 100 + 40 * i
        graph.add_segments([((x, -150), (x, 150))], MaterialState.TRANSPARENT)


def main():
    print("Glass Pane Demo - Splitting at Transparent Segments")
    print("=" * 60)

    renderer = SVGRenderer(width=1000, height=400, viewbox=(-20, -160, 700, 320))

    for x_offset, bend in [(0, False), (350, True)]:
        graph = SceneGraph(f"panes bend={bend}")
        build_panes(graph, x_offset)
        segments = graph.snapshot_segments()
        settings = SolverSettings(bend_transmitted=bend, min_energy=0.02)

        renderer.draw_scene_segments(segments)
        for degrees in (0, 20, 40, 60):
            angle = math.radians(degrees)
            ray = Ray.from_angle(Point(x_offset, 0), angle, Color(1.0, 0.6, 0.1, 1.0))
            pieces = solve(ray, segments, settings)
            drawn = renderer.draw_drawable_segments(pieces)
            print(f"  bend={bend!s:5} angle={degrees:2d} deg: {len(pieces)} pieces ({drawn} drawn)")

    output_dir = os.path.dirname(os.path.abspath(__file__))
    svg_file = os.path.join(output_dir, 'output.svg')
    renderer.save(svg_file)
    print(f"\nSVG saved to: {svg_file}")


if __name__ == "__main__":
    main()
