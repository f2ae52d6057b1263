from functools import reduce

import numpy as np
import pytest

from matchain import MalformedChainError, left_to_right_cost, multiplication_cost
from matchain.expression import add, leaf, multiply

P = leaf(np.ones((10, 2)))
Q = leaf(np.ones((2, 5)))
R = leaf(np.ones((5, 3)))


@pytest.mark.parametrize(
    ("expression", "cost"),
    [
        (P, 0),
        (multiply(P, Q), 100),
        (multiply(multiply(P, Q), R), 250),
        (multiply(P, multiply(Q, R)), 90),
        (add(multiply(P, Q), multiply(P, Q)), 200),
        (multiply(add(P, P), multiply(Q, R)), 90),
    ],
)
def test_multiplication_cost(expression, cost):
    assert multiplication_cost(expression) == cost


@pytest.mark.parametrize(
    ("dimensions", "cost"),
    [
        ([10, 2], 0),
        ([10, 2, 5], 100),
        ([10, 2, 5, 3], 250),
        ([400, 300, 30, 500, 400], 89_600_000),
    ],
)
def test_left_to_right_cost(dimensions, cost):
    assert left_to_right_cost(dimensions) == cost


def test_left_to_right_cost_malformed():
    with pytest.raises(MalformedChainError):
        left_to_right_cost([3])


def test_multiplication_cost_of_long_chain():
    step = leaf(np.ones((2, 2)))
    assert multiplication_cost(reduce(multiply, [step] * 1000)) == 999 * 8
