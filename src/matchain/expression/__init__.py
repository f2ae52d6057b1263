from . import ast
from ._constructors import add, leaf, multiply
from ._exceptions import ShapeMismatchError, UnsupportedConstructError
from ._traverse import fold_tree
