__all__ = ["MalformedChainError"]

from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class MalformedChainError(Exception):
    dimensions: tuple[int, ...]
    reason: str

    def __str__(self):
        expectation = (
            "Expected a chain of at least one operand with non-negative, compatible dimensions"
        )
        if len(self.dimensions) == 0:
            return f"{expectation}, but {self.reason}"
        else:
            return (
                f"{expectation}, but {self.reason} in chain with dimensions "
                f"{list(self.dimensions)}"
            )
