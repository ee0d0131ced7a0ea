"""Distance metrics for exact nearest-neighbour search.

Every metric is oriented so that *smaller means more similar*:

=========  ==================================================
cosine     ``1 - (A·B) / (‖A‖·‖B‖)``
angular    ``acos(clamp((A·B) / (‖A‖·‖B‖), -1, 1)) / π``
euclidean  ``sqrt(Σ (aᵢ - bᵢ)²)``
manhattan  ``Σ |aᵢ - bᵢ|``
chebyshev  ``max |aᵢ - bᵢ|``
=========  ==================================================
"""

from __future__ import annotations

import math
from enum import Enum
from typing import Callable

import numpy as np
from numpy.typing import NDArray

from rag_store.documents import Vector
from rag_store.exceptions import InvalidArgumentError

FloatArray = NDArray[np.float64]


class DistanceMetric(str, Enum):
    COSINE = "cosine"
    ANGULAR = "angular"
    EUCLIDEAN = "euclidean"
    MANHATTAN = "manhattan"
    CHEBYSHEV = "chebyshev"

    @classmethod
    def parse(cls, value: str | DistanceMetric) -> DistanceMetric:
        try:
            return cls(value)
        except ValueError:
            allowed = ", ".join(m.value for m in cls)
            raise InvalidArgumentError(f"Unsupported distance metric {value!r}; expected one of: {allowed}.") from None


def _cosine_similarity(a: FloatArray, b: FloatArray) -> float:
    norm = float(np.linalg.norm(a) * np.linalg.norm(b))
    if norm == 0.0:
        raise InvalidArgumentError("Cosine/angular distance is undefined for a zero-magnitude vector.")
    return float(np.dot(a, b)) / norm


def cosine_distance(a: FloatArray, b: FloatArray) -> float:
    return 1.0 - _cosine_similarity(a, b)


def angular_distance(a: FloatArray, b: FloatArray) -> float:
    similarity = min(1.0, max(-1.0, _cosine_similarity(a, b)))
    return math.acos(similarity) / math.pi


def euclidean_distance(a: FloatArray, b: FloatArray) -> float:
    return float(np.sqrt(np.sum((a - b) ** 2)))


def manhattan_distance(a: FloatArray, b: FloatArray) -> float:
    return float(np.sum(np.abs(a - b)))


def chebyshev_distance(a: FloatArray, b: FloatArray) -> float:
    return float(np.max(np.abs(a - b)))


_METRICS: dict[DistanceMetric, Callable[[FloatArray, FloatArray], float]] = {
    DistanceMetric.COSINE: cosine_distance,
    DistanceMetric.ANGULAR: angular_distance,
    DistanceMetric.EUCLIDEAN: euclidean_distance,
    DistanceMetric.MANHATTAN: manhattan_distance,
    DistanceMetric.CHEBYSHEV: chebyshev_distance,
}


def compute_distance(metric: DistanceMetric | str, a: Vector, b: Vector) -> float:
    """Distance between *a* and *b* under *metric*.

    Raises
    ------
    InvalidArgumentError
        If the vectors differ in dimension.
    """
    if a.dimension != b.dimension:
        raise InvalidArgumentError(
            f"Vector dimensions do not match: {a.dimension} != {b.dimension}."
        )
    return _METRICS[DistanceMetric.parse(metric)](a.as_array(), b.as_array())
