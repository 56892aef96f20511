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

import copy
from typing import Any, Dict

from .constants import (
    DEFAULT_MAX_RAYS,
    DEFAULT_MAX_DISTANCE,
    DEFAULT_MIN_ENERGY,
    DEFAULT_OBJECT_REFLECTIVITY,
    AIR_INDEX,
    GLASS_INDEX,
    FRESNEL_EXPONENT,
    FRESNEL_SCALE,
)


class SolverSettings:
    """
    Tuning parameters read by the solver.

    The shell that owns the scene owns one of these and passes it to each
    solve. The solver works on a copy taken when the solve starts, so edits
    made while a solve runs only apply to the next one.

    Attributes:
        max_rays (int): Cap on emitted drawable segments
        max_distance (float): Length of the piece emitted for an escaping ray
        min_energy (float): Rays with intensity at or below this are dropped
        object_reflectivity (float): Blend in [0, 1] of the Fresnel
            reflectance toward full reflectance
        ambient_index (float): Refractive index on the incident side of a
            transparent segment
        material_index (float): Refractive index of transparent segments
        split_model (str): How a transparent hit divides the color:
            - 'stylized': transmitted weight (d.n)^fresnel_exponent * fresnel_scale
            - 'schlick': reflected weight from the Schlick approximation
        fresnel_exponent (int): Shaping exponent of the stylized split
        fresnel_scale (float): Scale of the stylized split
        bend_transmitted (bool): If True, transmitted rays are refracted with
            Snell's law instead of continuing in the incoming direction
    """

    VALID_SPLIT_MODELS = ('stylized', 'schlick')

    def __init__(self, **kwargs: Any) -> None:
        self._max_rays = DEFAULT_MAX_RAYS
        self._max_distance = DEFAULT_MAX_DISTANCE
        self._min_energy = DEFAULT_MIN_ENERGY
        self._object_reflectivity = DEFAULT_OBJECT_REFLECTIVITY
        self._ambient_index = AIR_INDEX
        self._material_index = GLASS_INDEX
        self._split_model = 'stylized'
        self._fresnel_exponent = FRESNEL_EXPONENT
        self._fresnel_scale = FRESNEL_SCALE
        self.bend_transmitted = False
        self.update(**kwargs)

    def update(self, **kwargs: Any) -> 'SolverSettings':
        """
        Set several settings at once through their validating setters.

        Raises:
            AttributeError: On an unknown setting name.
            ValueError: On an invalid value.
        """
        for name, value in kwargs.items():
            if name not in self.to_dict():
                raise AttributeError(f"Unknown solver setting '{name}'")
            setattr(self, name, value)
        return self

    def copy(self) -> 'SolverSettings':
        """Return an independent snapshot of these settings."""
        return copy.copy(self)

    def to_dict(self) -> Dict[str, Any]:
        return {
            'max_rays': self._max_rays,
            'max_distance': self._max_distance,
            'min_energy': self._min_energy,
            'object_reflectivity': self._object_reflectivity,
            'ambient_index': self._ambient_index,
            'material_index': self._material_index,
            'split_model': self._split_model,
            'fresnel_exponent': self._fresnel_exponent,
            'fresnel_scale': self._fresnel_scale,
            'bend_transmitted': self.bend_transmitted,
        }

    @property
    def max_rays(self) -> int:
        return self._max_rays

    @max_rays.setter
    def max_rays(self, value: int) -> None:
        if isinstance(value, bool) or not isinstance(value, int) or value < 0:
            raise ValueError(f"max_rays must be a non-negative integer, got {value!r}")
        self._max_rays = value

    @property
    def max_distance(self) -> float:
        return self._max_distance

    @max_distance.setter
    def max_distance(self, value: float) -> None:
        if not isinstance(value, (int, float)) or value <= 0:
            raise ValueError(f"max_distance must be a positive number, got {value!r}")
        self._max_distance = float(value)

    @property
    def min_energy(self) -> float:
        return self._min_energy

    @min_energy.setter
    def min_energy(self, value: float) -> None:
        if not isinstance(value, (int, float)) or value < 0:
            raise ValueError(f"min_energy must be a non-negative number, got {value!r}")
        self._min_energy = float(value)

    @property
    def object_reflectivity(self) -> float:
        return self._object_reflectivity

    @object_reflectivity.setter
    def object_reflectivity(self, value: float) -> None:
        if not isinstance(value, (int, float)) or not 0.0 <= value <= 1.0:
            raise ValueError(f"object_reflectivity must be in [0, 1], got {value!r}")
        self._object_reflectivity = float(value)

    @property
    def ambient_index(self) -> float:
        return self._ambient_index

    @ambient_index.setter
    def ambient_index(self, value: float) -> None:
        if not isinstance(value, (int, float)) or value <= 0:
            raise ValueError(f"ambient_index must be a positive number, got {value!r}")
        self._ambient_index = float(value)

    @property
    def material_index(self) -> float:
        return self._material_index

    @material_index.setter
    def material_index(self, value: float) -> None:
        if not isinstance(value, (int, float)) or value <= 0:
            raise ValueError(f"material_index must be a positive number, got {value!r}")
        self._material_index = float(value)

    @property
    def split_model(self) -> str:
        return self._split_model

    @split_model.setter
    def split_model(self, value: str) -> None:
        if value not in self.VALID_SPLIT_MODELS:
            raise ValueError(
                f"Invalid split_model '{value}'. "
                f"Valid options: {self.VALID_SPLIT_MODELS}"
            )
        self._split_model = value

    @property
    def fresnel_exponent(self) -> int:
        return self._fresnel_exponent

    @fresnel_exponent.setter
    def fresnel_exponent(self, value: int) -> None:
        if isinstance(value, bool) or not isinstance(value, int) or value < 0:
            raise ValueError(f"fresnel_exponent must be a non-negative integer, got {value!r}")
        self._fresnel_exponent = value

    @property
    def fresnel_scale(self) -> float:
        return self._fresnel_scale

    @fresnel_scale.setter
    def fresnel_scale(self, value: float) -> None:
        if not isinstance(value, (int, float)) or not 0.0 <= value <= 1.0:
            raise ValueError(f"fresnel_scale must be in [0, 1], got {value!r}")
        self._fresnel_scale = float(value)

    def __repr__(self) -> str:
        items = ', '.join(f'{k}={v!r}' for k, v in self.to_dict().items())
        return f"SolverSettings({items})"
