__all__ = ["fold_tree"]

from typing import Callable, Sequence, TypeVar

from .ast import Expression

Value = TypeVar("Value")


def fold_tree(
    expression: Expression,
    operands_of: Callable[[Expression], Sequence[Expression]],
    combine: Callable[[Expression, tuple[Value, ...]], Value],
) -> Value:
    """Reduce a tree bottom-up without recursing, so that depth is not bounded by the stack.

    Args:
        expression: The root of the tree.
        operands_of: The nodes whose values a node needs, in order. Nodes with no operands are
            combined immediately.
        combine: Called once per node, children before parents and left before right, with the
            node and the values of its operands.

    Returns:
        The value that `combine` produced for the root.
    """
    values: list[Value] = []
    pending: list[tuple[Expression, tuple[Expression, ...] | None]] = [(expression, None)]

    while pending:
        node, operands = pending.pop()
        if operands is None:
            operands = tuple(operands_of(node))
            if len(operands) > 0:
                pending.append((node, operands))
                pending.extend((operand, None) for operand in reversed(operands))
                continue

        # Operand values are released as soon as their parent is combined
        start = len(values) - len(operands)
        results = tuple(values[start:])
        del values[start:]
        values.append(combine(node, results))

    return values[0]
