__all__ = ["evaluate"]

import logging
from collections import Counter
from concurrent.futures import ThreadPoolExecutor
from functools import singledispatch
from operator import methodcaller
from typing import Optional

import numpy as np

from .expression import ShapeMismatchError, fold_tree
from .expression.ast import Expression, Leaf, Product, Sum
from .strategy import EvaluationStrategy

logger = logging.getLogger(__name__)

children = methodcaller("children")


@singledispatch
def reduce_node(self: Expression, operands: tuple[np.ndarray, ...]) -> np.ndarray:
    raise NotImplementedError(f"evaluate not implemented for {type(self)}: {self}")


@reduce_node.register(Leaf)
def reduce_leaf(self: Leaf, operands: tuple[np.ndarray, ...]) -> np.ndarray:
    return self.matrix


@reduce_node.register(Product)
def reduce_product(self: Product, operands: tuple[np.ndarray, ...]) -> np.ndarray:
    left, right = operands
    if left.shape[1] != right.shape[0]:
        raise ShapeMismatchError("multiply", left.shape, right.shape)
    if (left.shape[0], right.shape[1]) != self.shape:
        raise ShapeMismatchError("multiply", left.shape, right.shape, self.shape)
    return left @ right


@reduce_node.register(Sum)
def reduce_sum(self: Sum, operands: tuple[np.ndarray, ...]) -> np.ndarray:
    left, right = operands
    if left.shape != right.shape:
        raise ShapeMismatchError("add", left.shape, right.shape)
    if left.shape != self.shape:
        raise ShapeMismatchError("add", left.shape, right.shape, self.shape)
    return left + right


def evaluate_sequential(expression: Expression) -> np.ndarray:
    return fold_tree(expression, children, reduce_node)


def group_by_height(expression: Expression) -> list[list[Expression]]:
    """Nodes of the tree grouped by their height above the leaves.

    Every node in a group depends only on nodes in earlier groups.
    """
    levels: list[list[Expression]] = []

    def place(node: Expression, child_heights: tuple[int, ...]) -> int:
        height = 1 + max(child_heights, default=-1)
        if height == len(levels):
            levels.append([])
        levels[height].append(node)
        return height

    fold_tree(expression, children, place)
    return levels


def evaluate_threaded(expression: Expression, max_workers: Optional[int]) -> np.ndarray:
    levels = group_by_height(expression)
    logger.debug(
        "Evaluating %d nodes in %d levels with up to %s workers",
        sum(len(level) for level in levels),
        len(levels),
        max_workers,
    )

    # Keyed by identity because leaves compare by value
    values: dict[int, np.ndarray] = {}
    # A node object may be an operand in more than one place
    uses = Counter(id(child) for level in levels for node in level for child in node.children())

    def reduce_in_place(node: Expression) -> np.ndarray:
        return reduce_node(node, tuple(values[id(child)] for child in node.children()))

    with ThreadPoolExecutor(max_workers=max_workers) as executor:
        for level in levels:
            for node, value in zip(level, executor.map(reduce_in_place, level)):
                values[id(node)] = value
            for node in level:
                for child in node.children():
                    uses[id(child)] -= 1
                    if uses[id(child)] == 0:
                        del values[id(child)]

    return values[id(expression)]


def evaluate(
    expression: Expression,
    strategy: EvaluationStrategy = EvaluationStrategy.sequential,
    max_workers: Optional[int] = None,
) -> np.ndarray:
    """Compute the matrix that an expression tree denotes.

    Products are dense matrix multiplications and sums are elementwise additions, both in double
    precision. The tree is evaluated exactly as it is associated; call `rearrange` first to
    evaluate it in the cheapest order.

    Args:
        expression: The tree to evaluate.
        strategy: With `threaded`, independent subtrees are evaluated concurrently, one level of
            the tree at a time. The result is identical to `sequential`.
        max_workers: Size of the thread pool for the `threaded` strategy. Ignored otherwise.

    Returns:
        The result matrix. For a bare leaf this is the leaf's own read-only array.

    Raises:
        ShapeMismatchError: If a computed operand does not have the shape its node declares.
    """
    match strategy:
        case EvaluationStrategy.sequential:
            return evaluate_sequential(expression)
        case EvaluationStrategy.threaded:
            return evaluate_threaded(expression, max_workers)
        case _:
            raise NotImplementedError(f"No evaluation strategy {strategy}")
