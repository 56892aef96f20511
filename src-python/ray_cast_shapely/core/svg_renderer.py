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

import colorsys
import math
from typing import Dict, Optional, Sequence, Tuple

import svgwrite

from .geometry import Point, Segment
from .materials import MaterialState
from .ray import DrawableSegment


MATERIAL_COLORS: Dict[MaterialState, str] = {
    MaterialState.REFLECTIVE: 'rgb(160,160,170)',
    MaterialState.ABSORPTIVE: 'rgb(40,40,40)',
    MaterialState.TRANSPARENT: 'rgb(90,170,230)',
}

VALID_COLOR_MODES = ('ray', 'hue_sweep')


def hue_sweep_color(index: int, total: int, hue_span: float = 0.8) -> str:
    """
    CSS color for the index-th of total emitted pieces, sweeping the hue
    from red toward violet in emission order.
    """
    fraction = index / max(total - 1, 1)
    r, g, b = colorsys.hsv_to_rgb(fraction * hue_span, 1.0, 1.0)
    return f'rgb({int(round(r * 255))},{int(round(g * 255))},{int(round(b * 255))})'


class SVGRenderer:
    """
    SVG renderer for segment scenes and solver output, using svgwrite.

    Coordinate System:
        The renderer uses a Y-up coordinate system (positive Y points upward),
        which matches mathematical convention. This is achieved by applying
        a vertical flip transformation to the SVG coordinate system.

    Attributes:
        width (int): Canvas width in pixels
        height (int): Canvas height in pixels
        user_viewbox (tuple): Visible region (min_x, min_y, width, height), Y-up
        dwg (svgwrite.Drawing): The SVG drawing object
        layer_objects (svgwrite.Group): Group for scene segments
        layer_rays (svgwrite.Group): Group for ray pieces
    """

    def __init__(self, width: int = 800, height: int = 600,
                 viewbox: Optional[Tuple[float, float, float, float]] = None,
                 background: str = 'white') -> None:
        """
        Args:
            width: Canvas width in pixels (default: 800)
            height: Canvas height in pixels (default: 600)
            viewbox: SVG viewBox as (min_x, min_y, width, height) in Y-up
                coordinates. If None, uses (0, 0, width, height)
            background: Background fill color
        """
        self.width = width
        self.height = height
        self.user_viewbox = viewbox if viewbox is not None else (0, 0, width, height)

        # SVG is Y-down: flip min_y so the user's region stays visible
        min_x, min_y, vb_width, vb_height = self.user_viewbox
        self.viewbox = (min_x, -(min_y + vb_height), vb_width, vb_height)

        self.dwg = svgwrite.Drawing(size=(f'{width}px', f'{height}px'),
                                    profile='full', debug=False)
        self.dwg.viewbox(*self.viewbox)
        self.dwg['xmlns:inkscape'] = 'http://www.inkscape.org/namespaces/inkscape'

        self.dwg.add(self.dwg.rect(
            insert=(self.viewbox[0], self.viewbox[1]),
            size=(self.viewbox[2], self.viewbox[3]),
            fill=background
        ))

        self.layer_objects = self.dwg.add(self.dwg.g(
            id='layer-objects',
            transform='scale(1, -1)',
            **{'inkscape:groupmode': 'layer', 'inkscape:label': 'Segments'}
        ))
        self.layer_rays = self.dwg.add(self.dwg.g(
            id='layer-rays',
            transform='scale(1, -1)',
            **{'inkscape:groupmode': 'layer', 'inkscape:label': 'Rays'}
        ))

    def _normalize_coord(self, value: float) -> float:
        """Map -0.0 and values within 1e-10 of zero to 0.0."""
        if value == 0.0 or abs(value) < 1e-10:
            return 0.0
        return value

    def _normalize_point(self, point: Point) -> Tuple[float, float]:
        return (self._normalize_coord(point.x), self._normalize_coord(point.y))

    def draw_scene_segments(self, segments: Sequence[Segment], stroke_width: float = 3.0) -> None:
        """
        Draw the scene geometry, colored by material.
        Degenerate segments are drawn as small squares.
        """
        for segment in segments:
            color = MATERIAL_COLORS[segment.material]
            if segment.is_degenerate:
                x, y = self._normalize_point(segment.start)
                self.layer_objects.add(self.dwg.rect(
                    insert=(x - stroke_width / 2, y - stroke_width / 2),
                    size=(stroke_width, stroke_width),
                    fill=color
                ))
                continue
            x1, y1 = self._normalize_point(segment.start)
            x2, y2 = self._normalize_point(segment.end)
            line = self.dwg.line(start=(x1, y1), end=(x2, y2),
                                 stroke=color, stroke_width=stroke_width)
            line['class'] = f'segment {segment.material.value}'
            self.layer_objects.add(line)

    def draw_drawable_segments(self, drawables: Sequence[DrawableSegment],
                               color_mode: str = 'ray', stroke_width: float = 1.5) -> int:
        """
        Draw solver output.

        Args:
            drawables: Pieces in emission order
            color_mode: 'ray' uses each piece's color with its intensity as
                opacity; 'hue_sweep' colors pieces by emission index
            stroke_width: Line width

        Returns:
            int: Number of pieces drawn (pieces entirely outside the viewbox
            or with non-finite coordinates are skipped)
        """
        if color_mode not in VALID_COLOR_MODES:
            raise ValueError(
                f"Invalid color_mode '{color_mode}'. "
                f"Valid options: {VALID_COLOR_MODES}"
            )
        drawn = 0
        total = len(drawables)
        for index, piece in enumerate(drawables):
            if color_mode == 'hue_sweep':
                color = hue_sweep_color(index, total)
                opacity = 1.0
            else:
                color = piece.color.to_css()
                opacity = max(0.0, min(1.0, piece.color.a))
            if self.draw_ray_segment(piece, color, opacity, stroke_width, index):
                drawn += 1
        return drawn

    def draw_ray_segment(self, piece: DrawableSegment, color: str, opacity: float = 1.0,
                         stroke_width: float = 1.5, index: Optional[int] = None) -> bool:
        """
        Draw one ray piece, clipped to the viewbox.

        Returns:
            bool: True if anything was drawn
        """
        coords = (piece.start.x, piece.start.y, piece.end.x, piece.end.y)
        if any(math.isnan(c) or math.isinf(c) for c in coords):
            return False

        p1, p2 = self._clip_to_viewbox(piece.start, piece.end)
        if p1 is None or p2 is None:
            return False

        x1, y1 = self._normalize_point(p1)
        x2, y2 = self._normalize_point(p2)
        line = self.dwg.line(start=(x1, y1), end=(x2, y2), stroke=color,
                             stroke_width=stroke_width, stroke_opacity=opacity)
        line['class'] = 'ray'
        line['data-generation'] = str(piece.generation)
        line['data-intensity'] = f'{piece.color.a:.6f}'
        if index is not None:
            line['id'] = f'ray-{index}'
        self.layer_rays.add(line)
        return True

    def _clip_to_viewbox(self, p1: Point, p2: Point):
        """
        Clip a line segment to the viewbox boundaries (Liang-Barsky).

        Returns:
            tuple: (clipped_p1, clipped_p2) or (None, None) if completely outside
        """
        min_x, min_y, width, height = self.user_viewbox
        max_x = min_x + width
        max_y = min_y + height

        x1, y1 = p1.x, p1.y
        dx = p2.x - x1
        dy = p2.y - y1

        t0, t1 = 0.0, 1.0
        for p, q in ((-dx, x1 - min_x), (dx, max_x - x1), (-dy, y1 - min_y), (dy, max_y - y1)):
            if abs(p) < 1e-10:
                # Parallel to this edge
                if q < 0:
                    return None, None
            else:
                t = q / p
                if p < 0:
                    t0 = max(t0, t)
                else:
                    t1 = min(t1, t)

        if t0 > t1:
            return None, None

        return Point(x1 + t0 * dx, y1 + t0 * dy), Point(x1 + t1 * dx, y1 + t1 * dy)

    def save(self, filename: Optional[str] = None) -> None:
        """
        Save the SVG to a file (default: 'output.svg').
        """
        if filename is None:
            filename = "output.svg"
        self.dwg.saveas(filename)

    def to_string(self) -> str:
        return self.dwg.tostring()
