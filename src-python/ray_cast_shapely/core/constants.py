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
Constants used throughout the ray casting solver.

Kept in their own module so the geometry helpers, the scene graph and the
solver can share them without circular imports.
"""

# Denominator threshold below which a ray and a segment count as parallel
PARALLEL_EPSILON = 1e-9

# Squared distance under which a hit point is treated as lying on the
# segment's start point (normal is then taken from the other end)
DEGENERATE_LENGTH_SQUARED = 1e-12

# Minimum ray segment length; hits closer than this to the ray origin are
# ignored so that rays leaving a shared node do not re-hit its neighbours
MIN_RAY_SEGMENT_LENGTH = 1e-6
MIN_RAY_SEGMENT_LENGTH_SQUARED = MIN_RAY_SEGMENT_LENGTH * MIN_RAY_SEGMENT_LENGTH

# Allowed deviation of |direction|^2 from 1.0
UNIT_LENGTH_TOLERANCE = 1e-6

# Solver defaults
DEFAULT_MAX_RAYS = 1000
DEFAULT_MAX_DISTANCE = 20000.0
DEFAULT_MIN_ENERGY = 0.1
DEFAULT_OBJECT_REFLECTIVITY = 0.0

# Refractive indices used by transparent segments
AIR_INDEX = 1.0
GLASS_INDEX = 1.5

# Shaping of the stylized transmittance split: (d.n)^6 * 0.97
FRESNEL_EXPONENT = 6
FRESNEL_SCALE = 0.97
