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

===============================================================================
Solver Output Export Utilities
===============================================================================
Exports the drawable segments produced by a solve:

- CSV: one row per emitted piece, in emission order
- Statistics: summary counts for quick inspection of a run
===============================================================================
"""

import csv
import logging
from pathlib import Path
from typing import Dict, List, Sequence, Union

import numpy as np

from ..core.ray import DrawableSegment

logger = logging.getLogger(__name__)


def save_segments_csv(
    drawables: Sequence[DrawableSegment],
    output_path: Union[str, Path],
    filename: str = "rays.csv",
    precision_coords: int = 4,
    precision_color: int = 6,
) -> Path:
    """
    Export solver output to a CSV file.

    Args:
        drawables: DrawableSegment objects in emission order.
        output_path: Directory path where the CSV file will be saved.
            Created if missing.
        filename: Name of the output CSV file (default: "rays.csv").
        precision_coords: Decimal places for coordinates and lengths.
        precision_color: Decimal places for color channels.

    Returns:
        Path: Full path to the created CSV file.

    Raises:
        OSError: If the output directory cannot be created or file cannot be written.

    Example:
        >>> segments = solve(ray, graph.snapshot_segments())
        >>> output_file = save_segments_csv(segments, "./output")
    """
    output_dir = Path(output_path)
    output_dir.mkdir(parents=True, exist_ok=True)

    csv_file = output_dir / filename

    coord_fmt = f"{{:.{precision_coords}f}}"
    color_fmt = f"{{:.{precision_color}f}}"

    with open(csv_file, 'w', newline='', encoding='utf-8') as f:
        writer = csv.writer(f)
        writer.writerow([
            'index',
            'start_x',
            'start_y',
            'end_x',
            'end_y',
            'r',
            'g',
            'b',
            'intensity',
            'generation',
            'material',
            'length',
        ])

        for i, piece in enumerate(drawables):
            writer.writerow([
                i,
                coord_fmt.format(piece.start.x),
                coord_fmt.format(piece.start.y),
                coord_fmt.format(piece.end.x),
                coord_fmt.format(piece.end.y),
                color_fmt.format(piece.color.r),
                color_fmt.format(piece.color.g),
                color_fmt.format(piece.color.b),
                color_fmt.format(piece.color.a),
                piece.generation,
                piece.material.value if piece.material is not None else 'escaped',
                coord_fmt.format(piece.length),
            ])

    logger.info("Saved %d segments to %s", len(drawables), csv_file)
    return csv_file


def get_segment_statistics(drawables: Sequence[DrawableSegment]) -> Dict[str, object]:
    """
    Compute statistics about the output of a solve.

    Args:
        drawables: DrawableSegment objects to analyze.

    Returns:
        dict: Dictionary containing:
            - total_segments: Number of emitted pieces
            - escaped: Pieces whose ray left the scene
            - terminated: Pieces that ended on a segment
            - per_generation: {generation: count}
            - per_material: {material value: count} for terminated pieces
            - max_generation: Deepest generation emitted (-1 if empty)
            - total_length: Sum of piece lengths
            - total_intensity: Sum of carried intensities
    """
    if not drawables:
        return {
            'total_segments': 0,
            'escaped': 0,
            'terminated': 0,
            'per_generation': {},
            'per_material': {},
            'max_generation': -1,
            'total_length': 0.0,
            'total_intensity': 0.0,
        }

    starts = np.array([(p.start.x, p.start.y) for p in drawables], dtype=float)
    ends = np.array([(p.end.x, p.end.y) for p in drawables], dtype=float)
    lengths = np.hypot(*(ends - starts).T)
    generations = np.array([p.generation for p in drawables], dtype=int)
    intensities = np.array([p.color.a for p in drawables], dtype=float)

    values, counts = np.unique(generations, return_counts=True)
    per_generation = {int(v): int(c) for v, c in zip(values, counts)}

    per_material: Dict[str, int] = {}
    escaped = 0
    for piece in drawables:
        if piece.escaped:
            escaped += 1
        else:
            key = piece.material.value
            per_material[key] = per_material.get(key, 0) + 1

    return {
        'total_segments': len(drawables),
        'escaped': escaped,
        'terminated': len(drawables) - escaped,
        'per_generation': per_generation,
        'per_material': per_material,
        'max_generation': int(generations.max()),
        'total_length': float(lengths.sum()),
        'total_intensity': float(intensities.sum()),
    }


def filter_by_generation(drawables: Sequence[DrawableSegment], generation: int) -> List[DrawableSegment]:
    """Pieces emitted by rays of exactly the given generation."""
    return [piece for piece in drawables if piece.generation == generation]
