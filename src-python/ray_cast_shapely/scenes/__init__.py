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

Scene generators
================

Convenience content producing ((x1, y1), (x2, y2)) line lists for
SceneGraph.add_segments().
"""

from .labyrinth import Labyrinth
from .shapes import circle_lines, box_lines

__all__ = [
    'Labyrinth',
    'circle_lines',
    'box_lines',
]
