__all__ = ["Array", "ArrayLike", "Scalar"]

from typing import TypeAlias

from jax import Array
from jax.typing import ArrayLike

Scalar: TypeAlias = Array
