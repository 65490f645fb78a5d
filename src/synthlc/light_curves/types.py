from typing import Any, Protocol

from synthlc.types import Array, Scalar


class LightCurveFunc(Protocol):
    def __call__(self, time: Scalar, *args: Any, **kwargs: Any) -> Array: ...
