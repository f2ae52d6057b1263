from .chain import ChainOrder, MalformedChainError, optimize_chain, plan_chain
from .cost import left_to_right_cost, multiplication_cost
from .evaluate import evaluate
from .expression import ShapeMismatchError, UnsupportedConstructError, add, leaf, multiply
from .expression.ast import Expression, Leaf, Product, Sum
from .rearrange import rearrange
from .strategy import EvaluationStrategy
