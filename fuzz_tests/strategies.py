import hypothesis.strategies as st
import numpy as np
from hypothesis.extra.numpy import arrays

from matchain.expression import ast

names = st.from_regex(r"[A-Z][a-z0-9]?", fullmatch=True)
sizes = st.integers(min_value=1, max_value=6)

# Small integers keep every evaluation exact regardless of association
elements = st.integers(min_value=-3, max_value=3)


def dimension_sequences(max_operands=6):
    return st.lists(st.integers(min_value=0, max_value=40), min_size=2, max_size=max_operands + 1)


@st.composite
def leaves(draw, rows: int, cols: int) -> ast.Leaf:
    matrix = draw(arrays(np.int64, (rows, cols), elements=elements))
    return ast.Leaf(matrix, draw(st.none() | names))


@st.composite
def expressions(draw, rows: int | None = None, cols: int | None = None, depth: int = 4):
    if rows is None:
        rows = draw(sizes)
    if cols is None:
        cols = draw(sizes)

    if depth == 0:
        return draw(leaves(rows, cols))

    match draw(st.sampled_from(["leaf", "product", "product", "sum"])):
        case "leaf":
            return draw(leaves(rows, cols))
        case "product":
            inner = draw(sizes)
            return ast.Product(
                draw(expressions(rows, inner, depth - 1)),
                draw(expressions(inner, cols, depth - 1)),
            )
        case "sum":
            return ast.Sum(
                draw(expressions(rows, cols, depth - 1)),
                draw(expressions(rows, cols, depth - 1)),
            )


@st.composite
def chains(draw, min_operands=2, max_operands=6) -> ast.Expression:
    """A product tree of leaves with an arbitrary association."""
    dimensions = draw(st.lists(sizes, min_size=min_operands + 1, max_size=max_operands + 1))
    operands = [draw(leaves(dimensions[i], dimensions[i + 1])) for i in range(len(dimensions) - 1)]

    while len(operands) > 1:
        i = draw(st.integers(min_value=0, max_value=len(operands) - 2))
        operands[i : i + 2] = [ast.Product(operands[i], operands[i + 1])]

    return operands[0]
