__all__ = ["multiplication_cost", "left_to_right_cost"]

from functools import singledispatch
from operator import methodcaller
from typing import Sequence

from .chain import check_dimensions
from .expression import fold_tree
from .expression.ast import Expression, Leaf, Product, Sum


@singledispatch
def node_cost(self: Expression) -> int:
    raise NotImplementedError(f"multiplication_cost not implemented for {type(self)}: {self}")


@node_cost.register(Leaf)
def node_cost_leaf(self: Leaf) -> int:
    return 0


@node_cost.register(Product)
def node_cost_product(self: Product) -> int:
    return self.left.rows * self.left.cols * self.right.cols


@node_cost.register(Sum)
def node_cost_sum(self: Sum) -> int:
    return 0


def multiplication_cost(expression: Expression) -> int:
    """Number of scalar multiplications needed to evaluate the tree exactly as it is associated."""
    return fold_tree(
        expression,
        methodcaller("children"),
        lambda node, operand_costs: node_cost(node) + sum(operand_costs),
    )


def left_to_right_cost(dimensions: Sequence[int]) -> int:
    """Cost of the association (((A1 * A2) * A3) ... * An) of the chain with these dimensions."""
    dimensions = tuple(dimensions)
    check_dimensions(dimensions)

    return sum(
        dimensions[0] * dimensions[k] * dimensions[k + 1] for k in range(1, len(dimensions) - 1)
    )
