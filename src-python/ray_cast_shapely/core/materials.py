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

from enum import Enum


class MaterialState(Enum):
    """
    Optical behavior carried by a segment.

    Members:
        REFLECTIVE: Mirror. The ray is reflected about the segment normal.
        ABSORPTIVE: Blocker. The ray branch terminates at the hit point.
        TRANSPARENT: Glass. The ray splits into a reflected and a
            transmitted branch, with the color divided between them.
    """
    REFLECTIVE = 'reflective'
    ABSORPTIVE = 'absorptive'
    TRANSPARENT = 'transparent'

    @classmethod
    def parse(cls, value) -> 'MaterialState':
        """
        Accept a MaterialState or its string value (case-insensitive).

        Raises:
            ValueError: If the value names no material.
        """
        if isinstance(value, cls):
            return value
        try:
            return cls(str(value).lower())
        except ValueError:
            valid = tuple(m.value for m in cls)
            raise ValueError(
                f"Invalid material '{value}'. Valid options: {valid}"
            ) from None
