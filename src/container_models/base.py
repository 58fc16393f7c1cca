from __future__ import annotations

from collections.abc import Callable, Sequence
from functools import partial
from operator import add, mul, sub, truediv
from typing import Annotated, NamedTuple

from numpy import array, bool_, float64
from numpy.typing import DTypeLike, NDArray
from pydantic import AfterValidator, BeforeValidator, ConfigDict, PlainSerializer


class Pair[T](NamedTuple):
    """An (x, y) pair with element-wise arithmetic."""

    x: T
    y: T

    def swapped(self) -> Pair[T]:
        return Pair(self.y, self.x)

    def _apply(self, op: Callable, other: Pair[T] | T) -> Pair[T]:
        if isinstance(other, Pair):
            return Pair(op(self.x, other.x), op(self.y, other.y))
        return Pair(op(self.x, other), op(self.y, other))

    def __add__(self, other: Pair[T] | T) -> Pair[T]:  # type: ignore[override]
        return self._apply(add, other)

    def __sub__(self, other: Pair[T] | T) -> Pair[T]:
        return self._apply(sub, other)

    def __mul__(self, other: Pair[T] | T) -> Pair[T]:  # type: ignore[override]
        return self._apply(mul, other)

    def __rmul__(self, other: T) -> Pair[T]:  # type: ignore[override]
        return self._apply(mul, other)

    def __truediv__(self, other: Pair[T] | T) -> Pair[T]:
        return self._apply(truediv, other)


type Coordinate = Pair[float]
type Extent = Pair[float]
type Resolution = Pair[int]


def serialize_ndarray(array_: NDArray) -> list:
    """Serialize numpy array to a Python list for JSON serialization."""
    return array_.tolist()


def coerce_to_array(dtype: DTypeLike, value: Sequence | NDArray | None) -> NDArray | None:
    """Coerce sequences (e.g. deserialized JSON lists) to a numpy array of `dtype`."""
    if isinstance(value, Sequence):
        try:
            return array(value, dtype=dtype)
        except OverflowError as ofe:
            raise ValueError("Array's value(s) out of range") from ofe
    return value


def validate_shape(n_dims: int, value: NDArray) -> NDArray:
    if (array_dims := value.ndim) != n_dims:
        raise ValueError(
            f"Array shape mismatch, expected {n_dims} dimension(s), but got {array_dims}"
        )
    return value


type FloatArray = Annotated[
    NDArray[float64],
    BeforeValidator(partial(coerce_to_array, float64)),
    PlainSerializer(serialize_ndarray),
]
type BoolArray = Annotated[
    NDArray[bool_],
    BeforeValidator(partial(coerce_to_array, bool_)),
    PlainSerializer(serialize_ndarray),
]

type FloatArray1D = Annotated[FloatArray, AfterValidator(partial(validate_shape, 1))]
type FloatArray2D = Annotated[FloatArray, AfterValidator(partial(validate_shape, 2))]
type BoolArray2D = Annotated[BoolArray, AfterValidator(partial(validate_shape, 2))]

type HeightData = FloatArray2D  # Shape: (rows, columns)
type BinaryMask = BoolArray2D  # Shape: (rows, columns)
type SpectrumData = FloatArray1D  # Shape: (samples,)

CONTAINER_CONFIG = ConfigDict(
    arbitrary_types_allowed=True,
    validate_assignment=True,
    extra="forbid",
)
