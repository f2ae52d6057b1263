from functools import reduce

import numpy as np
from hypothesis import given

from matchain import EvaluationStrategy, evaluate, multiplication_cost, rearrange
from matchain.chain import flatten_chain
from matchain.expression import ast

from .strategies import chains, expressions


@given(expressions())
def test_rearrange_preserves_shape(expression):
    assert rearrange(expression).shape == expression.shape


@given(expressions())
def test_rearrange_preserves_value(expression):
    assert np.array_equal(evaluate(rearrange(expression)), evaluate(expression))


@given(expressions())
def test_rearrange_never_costs_more(expression):
    assert multiplication_cost(rearrange(expression)) <= multiplication_cost(expression)


@given(expressions())
def test_rearrange_is_idempotent(expression):
    optimized = rearrange(expression)
    assert rearrange(optimized) == optimized


@given(chains())
def test_every_association_rearranges_to_the_same_tree(chain):
    left_deep = reduce(ast.Product, flatten_chain(chain))
    assert rearrange(chain) == rearrange(left_deep)


@given(expressions())
def test_threaded_evaluation_matches_sequential(expression):
    assert np.array_equal(
        evaluate(expression, EvaluationStrategy.threaded, max_workers=2), evaluate(expression)
    )
