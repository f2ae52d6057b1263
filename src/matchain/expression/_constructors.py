__all__ = ["leaf", "multiply", "add"]

from typing import Optional

from numpy.typing import ArrayLike

from .ast import Expression, Leaf, Product, Sum


def leaf(matrix: ArrayLike, label: Optional[str] = None) -> Leaf:
    """Wrap a two-dimensional array, or anything `numpy.asarray` accepts, as a leaf.

    Raises:
        UnsupportedConstructError: If the data is not two-dimensional.
    """
    return Leaf(matrix, label)


def multiply(left: Expression, right: Expression) -> Product:
    """Build the product of two expressions.

    Raises:
        ShapeMismatchError: If the columns of `left` differ from the rows of `right`.
        UnsupportedConstructError: If either operand is not an expression, such as a scalar.
    """
    return Product(left, right)


def add(left: Expression, right: Expression) -> Sum:
    """Build the elementwise sum of two expressions.

    Raises:
        ShapeMismatchError: If the operands have different shapes.
        UnsupportedConstructError: If either operand is not an expression, such as a scalar.
    """
    return Sum(left, right)
