__all__ = ["ShapeMismatchError", "UnsupportedConstructError"]

from dataclasses import dataclass
from typing import Optional


@dataclass(frozen=True, slots=True)
class ShapeMismatchError(Exception):
    operation: str
    left_shape: tuple[int, int]
    right_shape: tuple[int, int]
    declared_shape: Optional[tuple[int, int]] = None

    def __str__(self):
        operands = (
            f"left operand of shape {self.left_shape[0]}x{self.left_shape[1]} and right operand "
            f"of shape {self.right_shape[0]}x{self.right_shape[1]}"
        )
        if self.declared_shape is not None:
            return (
                f"Expected the operands of {self.operation} to produce the declared shape "
                f"{self.declared_shape[0]}x{self.declared_shape[1]}, but found {operands}"
            )

        if self.operation == "multiply":
            requirement = "the columns of the left operand to equal the rows of the right operand"
        else:
            requirement = "both operands to have the same shape"
        return f"Expected {requirement} in {self.operation}, but found {operands}"


@dataclass(frozen=True, slots=True)
class UnsupportedConstructError(Exception):
    description: str

    def __str__(self):
        return (
            f"Expected a matrix expression built from two-dimensional leaves, products, and sums, "
            f"but found {self.description}"
        )
