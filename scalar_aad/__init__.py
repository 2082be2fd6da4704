# scalar_aad/__init__.py
# Scalar reverse-mode automatic differentiation

from .core.errors import ScalarAADError, DomainError, GraphDefect
from .core.node import OpTag
from .core.var import Value
from .core.tape import Tape, use_tape
from .core.graph import topological_order
from .core.engine import backward, zero_grad
from .core.seeds import grad, grads, grads_list, value
from .core.gradcheck import check_gradients, assert_gradients_close, numeric_grad, evaluate
from .config import TrainConfig, GradCheckConfig

# Operator builders
from . import ops

__all__ = [
    # Core
    'Value',
    'OpTag',
    'Tape',
    'use_tape',
    # Errors
    'ScalarAADError',
    'DomainError',
    'GraphDefect',
    # Engine
    'topological_order',
    'backward',
    'zero_grad',
    # Helpers
    'grad',
    'grads',
    'grads_list',
    'value',
    # Verification
    'check_gradients',
    'assert_gradients_close',
    'numeric_grad',
    'evaluate',
    # Config
    'TrainConfig',
    'GradCheckConfig',
    'ops',
]
