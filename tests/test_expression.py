import numpy as np
import pytest

from matchain.expression import (
    ShapeMismatchError,
    UnsupportedConstructError,
    add,
    leaf,
    multiply,
)
from matchain.expression.ast import Leaf, Product, Sum

A = leaf(np.ones((2, 3)), "A")
B = leaf(np.ones((3, 4)), "B")
C = leaf(np.ones((4, 5)), "C")
X = leaf(np.ones((2, 4)), "X")


def test_leaf_shape():
    assert A.shape == (2, 3)
    assert A.rows == 2
    assert A.cols == 3


def test_leaf_from_nested_lists():
    matrix = leaf([[1, 2], [3, 4], [5, 6]])
    assert matrix.shape == (3, 2)
    assert matrix.matrix.dtype == np.float64


def test_leaf_copies_and_freezes_data():
    data = np.zeros((2, 2))
    matrix = leaf(data)
    data[0, 0] = 5.0

    assert matrix.matrix[0, 0] == 0.0
    with pytest.raises(ValueError):
        matrix.matrix[0, 0] = 1.0


@pytest.mark.parametrize("data", [np.ones(3), np.ones((2, 2, 2)), 5.0, [1, 2, 3]])
def test_leaf_requires_two_dimensions(data):
    with pytest.raises(UnsupportedConstructError):
        leaf(data)


@pytest.mark.parametrize(
    "data",
    [
        np.array([[1 + 2j, 0], [0, 1]]),
        [["1", "2"]],
        np.array([[None, 1]]),
        np.array([["2020-01-01"]], dtype="datetime64[D]"),
    ],
)
def test_leaf_requires_real_numbers(data):
    with pytest.raises(UnsupportedConstructError):
        leaf(data)


def test_leaf_accepts_integers_and_booleans():
    assert np.array_equal(leaf([[True, False]]).matrix, np.array([[1.0, 0.0]]))
    assert leaf(np.array([[1, 2]], dtype=np.uint8)).matrix.dtype == np.float64


def test_product_shape():
    assert multiply(A, B).shape == (2, 4)
    assert multiply(multiply(A, B), C).shape == (2, 5)


def test_sum_shape():
    assert add(multiply(A, B), X).shape == (2, 4)


def test_product_shape_mismatch():
    with pytest.raises(ShapeMismatchError) as info:
        multiply(A, C)

    assert info.value.operation == "multiply"
    assert info.value.left_shape == (2, 3)
    assert info.value.right_shape == (4, 5)
    assert "2x3" in str(info.value)


def test_sum_shape_mismatch():
    with pytest.raises(ShapeMismatchError):
        add(A, B)


@pytest.mark.parametrize("operand", [2.0, 3, np.ones((3, 4)), "B"])
def test_scalar_operands_are_refused(operand):
    with pytest.raises(UnsupportedConstructError):
        multiply(A, operand)
    with pytest.raises(UnsupportedConstructError):
        add(operand, A)


def test_constructors_build_nodes():
    assert isinstance(leaf(np.ones((1, 1))), Leaf)
    assert isinstance(multiply(A, B), Product)
    assert isinstance(add(A, A), Sum)


def test_leaf_equality():
    assert leaf([[1, 2]], "a") == leaf([[1.0, 2.0]], "a")
    assert leaf([[1, 2]], "a") != leaf([[1, 2]], "b")
    assert leaf([[1, 2]], "a") != leaf([[1, 3]], "a")
    assert leaf([[1, 2]]) != leaf([[1], [2]])
    assert hash(leaf([[1, 2]], "a")) == hash(leaf([[1, 2]], "a"))


def test_tree_equality():
    assert multiply(multiply(A, B), C) == multiply(multiply(A, B), C)
    assert multiply(multiply(A, B), C) != multiply(A, multiply(B, C))
    assert {add(A, A), add(A, A)} == {add(A, A)}


@pytest.mark.parametrize(
    ("expression", "string"),
    [
        (A, "A"),
        (leaf(np.ones((2, 3))), "[2x3]"),
        (multiply(A, B), "A * B"),
        (multiply(multiply(A, B), C), "A * B * C"),
        (multiply(A, multiply(B, C)), "A * (B * C)"),
        (add(multiply(A, B), X), "A * B + X"),
        (add(X, add(X, X)), "X + (X + X)"),
        (multiply(add(A, A), B), "(A + A) * B"),
        (multiply(A, add(B, B)), "A * (B + B)"),
        (multiply(leaf(np.ones((2, 3))), leaf(np.ones((3, 4)))), "[2x3] * [3x4]"),
    ],
)
def test_deparse(expression, string):
    assert expression.deparse() == string
    assert str(expression) == string
