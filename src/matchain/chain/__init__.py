from ._exceptions import MalformedChainError
from ._flatten import chain_dimensions, flatten_chain
from ._optimize import ChainOrder, check_dimensions, optimize_chain, plan_chain
