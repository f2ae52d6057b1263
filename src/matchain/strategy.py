__all__ = ["EvaluationStrategy"]

from enum import Enum


class EvaluationStrategy(str, Enum):
    # Python 3.10 does not support StrEnum, so do it manually
    sequential = "sequential"
    threaded = "threaded"

    def __str__(self) -> str:
        return self.name
