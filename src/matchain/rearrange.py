__all__ = ["rearrange"]

import logging
from functools import singledispatch

from .chain import chain_dimensions, flatten_chain, optimize_chain
from .cost import multiplication_cost
from .expression import fold_tree
from .expression.ast import Expression, Leaf, Product, Sum

logger = logging.getLogger(__name__)


@singledispatch
def rearrange_operands(self: Expression) -> tuple[Expression, ...]:
    raise NotImplementedError(f"rearrange not implemented for {type(self)}: {self}")


@rearrange_operands.register(Leaf)
def rearrange_operands_leaf(self: Leaf) -> tuple[Expression, ...]:
    return ()


@rearrange_operands.register(Sum)
def rearrange_operands_sum(self: Sum) -> tuple[Expression, ...]:
    # Chains are never fused across a sum
    return (self.left, self.right)


@rearrange_operands.register(Product)
def rearrange_operands_product(self: Product) -> tuple[Expression, ...]:
    # The whole run is rebuilt at once, so its inner products are not visited
    return flatten_chain(self)


@singledispatch
def rebuild(self: Expression, operands: tuple[Expression, ...]) -> Expression:
    raise NotImplementedError(f"rearrange not implemented for {type(self)}: {self}")


@rebuild.register(Leaf)
def rebuild_leaf(self: Leaf, operands: tuple[Expression, ...]) -> Expression:
    return self


@rebuild.register(Sum)
def rebuild_sum(self: Sum, operands: tuple[Expression, ...]) -> Expression:
    left, right = operands
    return Sum(left, right)


@rebuild.register(Product)
def rebuild_product(self: Product, operands: tuple[Expression, ...]) -> Expression:
    order = optimize_chain(chain_dimensions(operands))

    if logger.isEnabledFor(logging.DEBUG):
        original_cost = multiplication_cost(self) - sum(
            multiplication_cost(operand) for operand in flatten_chain(self)
        )
        logger.debug(
            "Reassociating chain of %d operands %s: %d scalar multiplications down to %d",
            order.length,
            order.dimensions,
            original_cost,
            order.cost,
        )

    return order.assemble(operands, Product)


def rearrange(expression: Expression) -> Expression:
    """Reassociate every multiplicative run of the tree into its cheapest order.

    Operands of a run, which are leaves or sums, are rearranged before the run itself. The
    returned tree has the same shape as the input and evaluates to the same matrix up to
    floating-point association effects. The input tree is left untouched.
    """
    return fold_tree(expression, rearrange_operands, rebuild)
