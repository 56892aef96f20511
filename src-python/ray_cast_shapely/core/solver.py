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

import logging
from collections import deque
from typing import Any, Deque, List, Optional, Sequence, Tuple

from .constants import MIN_RAY_SEGMENT_LENGTH_SQUARED
from .geometry import CollisionInfo, Segment, geometry
from .materials import MaterialState
from .ray import Ray, DrawableSegment
from .settings import SolverSettings

logger = logging.getLogger(__name__)


class Solver:
    """
    Ray propagation engine.

    Propagates one source ray through a fixed list of segments. Pending rays
    are kept in a FIFO queue, so splits are processed generation by
    generation and the emitted pieces come out breadth-first. That order is
    part of the output: renderers may color pieces by emission index.

    Each dequeued ray is traced to the nearest segment it hits (ignoring the
    segment it just left), one drawable piece is emitted, and the hit
    segment's material decides which child rays are queued:
        - absorptive: none
        - reflective: one mirror-reflected ray with the same color
        - transparent: a reflected ray and, below the critical angle, a
          transmitted ray, with the color divided between them

    Termination is guaranteed by the cap on emitted pieces (this is what
    stops closed mirror loops, since reflection does not attenuate) and by
    dropping rays whose intensity falls to min_energy or below.

    Attributes:
        segments (tuple): The segment snapshot being solved against
        settings (SolverSettings): The settings as given by the caller
        verbose (int): 0 silent, 1 per-ray log lines at INFO, 2 also
            per-intersection detail
        pending_rays (deque): Queue of (ray, originating segment index)
        ray_segments (list): Emitted drawable pieces of the last run
        processed_ray_count (int): Rays dequeued in the last run
        discarded_ray_count (int): Rays dropped for low energy in the last run
        warning (str or None): Set when the ray cap cut off queued rays
            that still carried more than min_energy
    """

    def __init__(self, segments: Sequence[Segment], settings: Optional[SolverSettings] = None,
                 verbose: int = 0) -> None:
        self.segments: Tuple[Segment, ...] = tuple(segments)
        self.settings: SolverSettings = settings if settings is not None else SolverSettings()
        self.verbose: int = verbose
        self.pending_rays: Deque[Tuple[Ray, Optional[int]]] = deque()
        self.ray_segments: List[DrawableSegment] = []
        self.processed_ray_count: int = 0
        self.discarded_ray_count: int = 0
        self.warning: Optional[str] = None
        self._active: SolverSettings = self.settings

    def _log(self, msg: str, *args: Any) -> None:
        if self.verbose >= 1:
            logger.info(msg, *args)
        else:
            logger.debug(msg, *args)

    def run(self, ray: Ray) -> List[DrawableSegment]:
        """
        Propagate a source ray and return the drawable pieces.

        Args:
            ray: The source ray. Its direction must already be unit length.

        Returns:
            list: DrawableSegment objects in emission order

        Raises:
            RayDirectionError: If the source ray direction is not unit length.
        """
        ray.check_normalized()

        # Settings are read once per run; later edits apply to the next run
        self._active = self.settings.copy()
        self.pending_rays = deque([(ray, None)])
        self.ray_segments = []
        self.processed_ray_count = 0
        self.discarded_ray_count = 0
        self.warning = None

        self._process_rays()

        # Queued rays at or below min_energy would be dropped anyway, so only
        # live ones mean the output was truncated
        truncated = any(r.intensity > self._active.min_energy for r, _ in self.pending_rays)
        if truncated and len(self.ray_segments) >= self._active.max_rays:
            self.warning = f"Solve stopped: maximum ray count ({self._active.max_rays}) reached"
            logger.info("%s with %d rays still pending", self.warning, len(self.pending_rays))

        return self.ray_segments

    def _process_rays(self) -> None:
        settings = self._active
        while self.pending_rays and len(self.ray_segments) < settings.max_rays:
            ray, origin_index = self.pending_rays.popleft()  # FIFO queue
            self.processed_ray_count += 1

            if ray.intensity <= settings.min_energy:
                self.discarded_ray_count += 1
                if self.verbose >= 2:
                    self._log("  dropped ray (intensity %.6f <= %.6f)", ray.intensity, settings.min_energy)
                continue

            # A non-unit direction here means a child ray was built wrong
            ray.check_normalized()

            self._log("processing ray %d: %r", self.processed_ray_count - 1, ray)

            nearest = self._find_nearest_intersection(ray, origin_index)

            if nearest is None:
                end = ray.point_at(settings.max_distance)
                self.ray_segments.append(DrawableSegment(ray.origin, end, ray.color, ray.generation))
                continue

            index, hit = nearest
            segment = self.segments[index]
            self.ray_segments.append(
                DrawableSegment(ray.origin, hit.point, ray.color, ray.generation, segment.material)
            )

            if segment.material is MaterialState.ABSORPTIVE:
                continue
            if segment.material is MaterialState.REFLECTIVE:
                self._on_reflective(ray, hit, index)
            else:
                self._on_transparent(ray, hit, index)

    def _find_nearest_intersection(self, ray: Ray,
                                   origin_index: Optional[int]) -> Optional[Tuple[int, CollisionInfo]]:
        """
        Find the closest segment hit by a ray.

        Args:
            ray: The ray to test
            origin_index: Index of the segment the ray departs from; it is
                skipped to avoid re-hitting the surface at the ray origin

        Returns:
            (segment index, CollisionInfo) of the nearest hit, or None
        """
        nearest = None
        nearest_distance_squared = float('inf')

        for index, segment in enumerate(self.segments):
            if index == origin_index:
                continue

            hit = geometry.intersect(ray, segment)
            if hit is None:
                continue

            distance_squared = geometry.distance_squared(hit.point, ray.origin)

            # Hits at the origin come from segments sharing the departure node
            if distance_squared < MIN_RAY_SEGMENT_LENGTH_SQUARED:
                continue

            if self.verbose >= 2:
                self._log("  candidate %r at (%.4f, %.4f), d2=%.6f",
                          segment, hit.point.x, hit.point.y, distance_squared)

            if distance_squared < nearest_distance_squared:
                nearest = (index, hit)
                nearest_distance_squared = distance_squared

        return nearest

    def _on_reflective(self, ray: Ray, hit: CollisionInfo, index: int) -> None:
        direction = geometry.reflect(ray.direction, hit.normal)
        self.pending_rays.append((ray.child(hit.point, direction, ray.color, 'reflect'), index))

    def _on_transparent(self, ray: Ray, hit: CollisionInfo, index: int) -> None:
        """
        Split a ray at a transparent segment.

        The reflected child always exists. At or beyond the critical angle it
        keeps the full color; otherwise the color is divided into
        color * (1 - w) reflected and color * w transmitted, where w is the
        transmittance weight of the configured split model.
        """
        settings = self._active
        d = ray.direction
        normal = geometry.face_against(hit.normal, d)

        reflectance = geometry.fresnel_reflectance(
            settings.ambient_index, settings.material_index, normal, d,
            settings.object_reflectivity,
        )
        critical = reflectance >= 1.0

        if settings.split_model == 'stylized':
            weight = abs(geometry.dot(d, normal)) ** settings.fresnel_exponent * settings.fresnel_scale
        else:
            weight = 1.0 - reflectance

        transmitted_direction = d
        if settings.bend_transmitted and not critical:
            refracted = geometry.refract(d, normal, settings.ambient_index / settings.material_index)
            if refracted is None:
                critical = True
            else:
                transmitted_direction = refracted

        reflected_direction = geometry.reflect(d, normal)

        if critical:
            if self.verbose >= 2:
                self._log("  critical incidence at (%.4f, %.4f)", hit.point.x, hit.point.y)
            self.pending_rays.append((ray.child(hit.point, reflected_direction, ray.color, 'tir'), index))
            return

        self.pending_rays.append(
            (ray.child(hit.point, reflected_direction, ray.color.scaled(1.0 - weight), 'reflect'), index)
        )
        self.pending_rays.append(
            (ray.child(hit.point, transmitted_direction, ray.color.scaled(weight), 'transmit'), index)
        )


def solve(ray: Ray, segments: Sequence[Segment], settings: Optional[SolverSettings] = None,
          verbose: int = 0, **overrides: Any) -> List[DrawableSegment]:
    """
    Propagate one ray through a segment snapshot.

    Args:
        ray: Source ray with a unit direction
        segments: Segment snapshot, e.g. from SceneGraph.snapshot_segments()
        settings: Solver settings (defaults if None); never modified
        verbose: Solver verbosity, see Solver
        **overrides: Individual settings, e.g. max_rays=50

    Returns:
        list: DrawableSegment objects in breadth-first emission order

    Raises:
        RayDirectionError: If the ray direction is not unit length.
        ValueError: If an override is invalid.
    """
    active = settings.copy() if settings is not None else SolverSettings()
    if overrides:
        active.update(**overrides)
    return Solver(segments, active, verbose=verbose).run(ray)
