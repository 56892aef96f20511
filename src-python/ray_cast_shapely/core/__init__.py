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

from .geometry import geometry, Point, Segment, CollisionInfo, Geometry
from . import constants
from .materials import MaterialState
from .ray import Ray, Color, DrawableSegment, RayDirectionError, WHITE, RED
from .settings import SolverSettings
from .solver import Solver, solve
from .scene_graph import SceneGraph, SceneIntegrityError, Node, Edge
from .svg_renderer import SVGRenderer

__all__ = [
    'geometry', 'Point', 'Segment', 'CollisionInfo', 'Geometry',
    'constants',
    'MaterialState',
    'Ray', 'Color', 'DrawableSegment', 'RayDirectionError', 'WHITE', 'RED',
    'SolverSettings',
    'Solver', 'solve',
    'SceneGraph', 'SceneIntegrityError', 'Node', 'Edge',
    'SVGRenderer',
]
