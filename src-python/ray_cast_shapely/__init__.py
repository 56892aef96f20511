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

Ray Cast Shapely
================

2D ray casting against line segments (mirrors, absorbers, glass panes),
with an editable scene graph and SVG output.

Main modules:
- core: Geometry, scene graph, solver and renderer
- scenes: Labyrinth and shape generators
- analysis: CSV export and run statistics
- examples: Demonstrations

Quick start:
    from ray_cast_shapely import SceneGraph, Ray, solve
    graph = SceneGraph()
    a, b = graph.add_node((10, 0)), graph.add_node((10, 100))
    graph.add_edge(a, b, 'reflective')
    pieces = solve(Ray.towards((0, 50), (1, 50)), graph.snapshot_segments())
"""

__version__ = "0.1.0"

# Convenience imports for common usage
from .core.geometry import Point, Segment, geometry
from .core.materials import MaterialState
from .core.ray import Ray, Color, DrawableSegment, RayDirectionError
from .core.settings import SolverSettings
from .core.solver import Solver, solve
from .core.scene_graph import SceneGraph, SceneIntegrityError
from .core.svg_renderer import SVGRenderer
from .logging_config import setup_logging

__all__ = [
    'Point',
    'Segment',
    'geometry',
    'MaterialState',
    'Ray',
    'Color',
    'DrawableSegment',
    'RayDirectionError',
    'SolverSettings',
    'Solver',
    'solve',
    'SceneGraph',
    'SceneIntegrityError',
    'SVGRenderer',
    'setup_logging',
    '__version__',
]
