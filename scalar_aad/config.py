"""
Configuration objects for training and gradient checking.

Both are plain dataclasses validated on construction; ``from_dict`` builds
one from a mapping (e.g. parsed command-line or JSON settings) and rejects
unknown keys.
"""

from dataclasses import dataclass, fields
from typing import Any, Mapping, Optional


class _FromDictMixin:

    @classmethod
    def from_dict(cls, values: Mapping[str, Any]):
        known = {f.name for f in fields(cls)}
        unknown = set(values) - known
        if unknown:
            raise ValueError(f"unknown {cls.__name__} option(s): {', '.join(sorted(unknown))}")
        return cls(**values)


@dataclass
class TrainConfig(_FromDictMixin):
    """
    Settings for full-batch gradient descent.

    Attributes:
        learning_rate: SGD step size (data -= learning_rate * grad)
        epochs: Number of passes over the training set
        seed: Seed for parameter initialisation; None draws fresh entropy
        log_every: Log the loss every this many epochs
    """
    learning_rate: float = 0.1
    epochs: int = 100
    seed: Optional[int] = None
    log_every: int = 20

    def __post_init__(self):
        if self.learning_rate <= 0:
            raise ValueError(f"learning_rate must be positive, got {self.learning_rate}")
        if self.epochs < 1:
            raise ValueError(f"epochs must be >= 1, got {self.epochs}")
        if self.log_every < 1:
            raise ValueError(f"log_every must be >= 1, got {self.log_every}")


@dataclass
class GradCheckConfig(_FromDictMixin):
    """Step size h for central differences and the comparison tolerance."""
    h: float = 1e-6
    tol: float = 1e-4

    def __post_init__(self):
        if self.h <= 0:
            raise ValueError(f"h must be positive, got {self.h}")
        if self.tol <= 0:
            raise ValueError(f"tol must be positive, got {self.tol}")
