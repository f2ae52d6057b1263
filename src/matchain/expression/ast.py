from __future__ import annotations

__all__ = ["Expression", "Leaf", "Product", "Sum"]

from abc import abstractmethod
from dataclasses import dataclass, field
from typing import Optional

import numpy as np

from ._exceptions import ShapeMismatchError, UnsupportedConstructError


class Expression:
    __slots__ = ()

    @property
    @abstractmethod
    def rows(self) -> int:
        raise NotImplementedError()

    @property
    @abstractmethod
    def cols(self) -> int:
        raise NotImplementedError()

    @property
    def shape(self) -> tuple[int, int]:
        return (self.rows, self.cols)

    @abstractmethod
    def children(self) -> tuple[Expression, ...]:
        raise NotImplementedError()

    @abstractmethod
    def deparse(self) -> str:
        """Convert the expression into a string.

        The rendering is deterministic and only inserts parentheses where the tree would otherwise
        be ambiguous, so that identical trees always render identically.
        """
        raise NotImplementedError()

    def __str__(self):
        return self.deparse()


def describe(value: object) -> str:
    if isinstance(value, np.ndarray):
        return f"a {value.ndim}-dimensional array"
    else:
        return f"a value of type {type(value).__name__}"


def check_operand(value: object):
    if not isinstance(value, Expression):
        raise UnsupportedConstructError(describe(value))


@dataclass(frozen=True, slots=True, eq=False)
class Leaf(Expression):
    matrix: np.ndarray
    label: Optional[str] = None

    def __post_init__(self):
        data = np.asarray(self.matrix)
        if data.ndim != 2:
            raise UnsupportedConstructError(describe(data))
        # Only real numbers convert to float64 without losing information
        if data.dtype.kind not in "biuf":
            raise UnsupportedConstructError(f"an array of {data.dtype} elements")

        # Copy so that the caller cannot mutate the leaf out from under the tree
        matrix = np.array(data, dtype=np.float64)
        matrix.flags.writeable = False
        object.__setattr__(self, "matrix", matrix)

    @property
    def rows(self) -> int:
        return self.matrix.shape[0]

    @property
    def cols(self) -> int:
        return self.matrix.shape[1]

    def children(self) -> tuple[Expression, ...]:
        return ()

    def deparse(self):
        if self.label is None:
            return f"[{self.rows}x{self.cols}]"
        else:
            return self.label

    def __eq__(self, other: object):
        if isinstance(other, Leaf):
            return self is other or (
                self.label == other.label and np.array_equal(self.matrix, other.matrix)
            )
        else:
            return NotImplemented

    def __hash__(self) -> int:
        return hash((self.label, self.matrix.shape))

    def __repr__(self):
        return f"Leaf(label={self.label!r}, shape={self.shape!r})"


@dataclass(frozen=True, slots=True)
class Product(Expression):
    left: Expression
    right: Expression
    rows: int = field(init=False, repr=False, compare=False)
    cols: int = field(init=False, repr=False, compare=False)

    def __post_init__(self):
        check_operand(self.left)
        check_operand(self.right)
        if self.left.cols != self.right.rows:
            raise ShapeMismatchError("multiply", self.left.shape, self.right.shape)
        object.__setattr__(self, "rows", self.left.rows)
        object.__setattr__(self, "cols", self.right.cols)

    def children(self) -> tuple[Expression, ...]:
        return (self.left, self.right)

    def deparse(self):
        left_string = self.left.deparse()
        if isinstance(self.left, Sum):
            left_string = f"({left_string})"

        right_string = self.right.deparse()
        # Preserve AST even though multiplication is associative.
        if isinstance(self.right, (Sum, Product)):
            right_string = f"({right_string})"

        return f"{left_string} * {right_string}"


@dataclass(frozen=True, slots=True)
class Sum(Expression):
    left: Expression
    right: Expression
    rows: int = field(init=False, repr=False, compare=False)
    cols: int = field(init=False, repr=False, compare=False)

    def __post_init__(self):
        check_operand(self.left)
        check_operand(self.right)
        if self.left.shape != self.right.shape:
            raise ShapeMismatchError("add", self.left.shape, self.right.shape)
        object.__setattr__(self, "rows", self.left.rows)
        object.__setattr__(self, "cols", self.left.cols)

    def children(self) -> tuple[Expression, ...]:
        return (self.left, self.right)

    def deparse(self):
        left_string = self.left.deparse()

        right_string = self.right.deparse()
        if isinstance(self.right, Sum):
            # Preserve AST even though addition is associative.
            right_string = f"({right_string})"

        return f"{left_string} + {right_string}"
