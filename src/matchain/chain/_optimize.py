"""Optimal parenthesization of a chain of matrix products.

This is the textbook dynamic program over all associations of a chain. Given the boundary sequence
p, where operand i has shape (p[i], p[i+1]), the minimum number of scalar multiplications needed to
compute operands i..j is

    cost[i][j] = min over i <= k < j of cost[i][k] + cost[k+1][j] + p[i] * p[k+1] * p[j+1]

with cost[i][i] = 0. The tables are filled by increasing sub-chain length, and the minimizing k is
kept in a split table so that the optimal tree can be rebuilt without searching again. When several
splits tie, the leftmost one wins. Operands are indexed from zero throughout.
"""

__all__ = ["ChainOrder", "check_dimensions", "optimize_chain", "plan_chain"]

from dataclasses import dataclass
from typing import Callable, Optional, Sequence, TypeVar

from returns.result import Failure, Result, Success

from ._exceptions import MalformedChainError

Operand = TypeVar("Operand")


@dataclass(frozen=True, slots=True)
class ChainOrder:
    dimensions: tuple[int, ...]
    costs: tuple[tuple[int, ...], ...]
    splits: tuple[tuple[int, ...], ...]

    @property
    def length(self) -> int:
        return len(self.dimensions) - 1

    @property
    def cost(self) -> int:
        return self.costs[0][self.length - 1]

    def assemble(
        self, operands: Sequence[Operand], combine: Callable[[Operand, Operand], Operand]
    ) -> Operand:
        """Rebuild the optimal association of the operands.

        Args:
            operands: One value per operand of the chain, in order.
            combine: Joins the values of two adjacent sub-chains into the value of their product.

        Returns:
            The value of the whole chain, built by calling `combine` once per product in the
            optimal parenthesization.
        """
        if len(operands) != self.length:
            raise MalformedChainError(
                self.dimensions,
                f"{len(operands)} operands were given for a chain of length {self.length}",
            )

        # Walk the split table with an explicit stack; an unbalanced optimum can be as deep as the
        # chain is long
        values: list[Operand] = []
        pending = [(0, self.length - 1, False)]
        while pending:
            i, j, split = pending.pop()
            if i == j:
                values.append(operands[i])
            elif split:
                right = values.pop()
                left = values.pop()
                values.append(combine(left, right))
            else:
                k = self.splits[i][j]
                pending.append((i, j, True))
                pending.append((k + 1, j, False))
                pending.append((i, k, False))

        return values[0]

    def parenthesize(self, names: Optional[Sequence[str]] = None) -> str:
        if names is None:
            names = [f"A{i + 1}" for i in range(self.length)]
        return self.assemble(names, lambda left, right: f"({left} * {right})")


def check_dimensions(dimensions: tuple[int, ...]):
    if len(dimensions) < 2:
        raise MalformedChainError(dimensions, "found no operands")
    for dimension in dimensions:
        if dimension < 0:
            raise MalformedChainError(dimensions, f"found negative dimension {dimension}")


def optimize_chain(dimensions: Sequence[int]) -> ChainOrder:
    """Find the parenthesization of a chain that needs the fewest scalar multiplications.

    Args:
        dimensions: The boundary sequence of the chain. A chain of n operands has n + 1 dimensions.

    Raises:
        MalformedChainError: If there are fewer than two dimensions or any is negative.
    """
    dimensions = tuple(dimensions)
    check_dimensions(dimensions)

    n = len(dimensions) - 1
    costs = [[0] * n for _ in range(n)]
    splits = [[0] * n for _ in range(n)]

    for length in range(2, n + 1):
        for i in range(n - length + 1):
            j = i + length - 1
            best_cost = None
            best_split = i
            for k in range(i, j):
                cost = (
                    costs[i][k]
                    + costs[k + 1][j]
                    + dimensions[i] * dimensions[k + 1] * dimensions[j + 1]
                )
                # Strict comparison keeps the leftmost split among ties
                if best_cost is None or cost < best_cost:
                    best_cost = cost
                    best_split = k
            costs[i][j] = best_cost
            splits[i][j] = best_split

    return ChainOrder(
        dimensions,
        tuple(tuple(row) for row in costs),
        tuple(tuple(row) for row in splits),
    )


def plan_chain(dimensions: Sequence[int]) -> Result[ChainOrder, MalformedChainError]:
    try:
        return Success(optimize_chain(dimensions))
    except MalformedChainError as error:
        return Failure(error)
