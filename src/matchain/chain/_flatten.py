__all__ = ["flatten_chain", "chain_dimensions"]

from typing import Sequence

from ..expression.ast import Expression, Product
from ._exceptions import MalformedChainError


def flatten_chain(expression: Expression) -> tuple[Expression, ...]:
    """Collect the operands of the maximal multiplicative run rooted at a product.

    Descends through children only while they are themselves products. Any other child, a leaf or
    a sum, is kept whole as an opaque operand. The operands are returned in left-to-right order
    and there are always at least two of them.
    """
    if not isinstance(expression, Product):
        raise MalformedChainError(
            (), f"found a {type(expression).__name__} at the root instead of a product"
        )

    operands = []
    pending = [expression]
    while pending:
        node = pending.pop()
        if isinstance(node, Product):
            pending.append(node.right)
            pending.append(node.left)
        else:
            operands.append(node)

    return tuple(operands)


def chain_dimensions(operands: Sequence[Expression]) -> tuple[int, ...]:
    """Boundary sequence of a chain, such that operand i has shape (p[i], p[i+1])."""
    if len(operands) == 0:
        raise MalformedChainError((), "found no operands")

    dimensions = [operands[0].rows]
    for operand in operands:
        if operand.rows != dimensions[-1]:
            raise MalformedChainError(
                (*dimensions, operand.rows),
                f"operand {operand} has {operand.rows} rows after an operand with "
                f"{dimensions[-1]} columns",
            )
        dimensions.append(operand.cols)

    return tuple(dimensions)
