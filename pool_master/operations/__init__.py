"""Operation invoker, role policy and sequences"""

from .invoker import OperationInvoker, ReadResult, WriteResult
from .roles import OPERATION_ROLES, required_role
from .sequence import DEFAULT_SEQUENCE, Step, load_sequence, run_sequence

__all__ = [
    "OperationInvoker",
    "ReadResult",
    "WriteResult",
    "OPERATION_ROLES",
    "required_role",
    "DEFAULT_SEQUENCE",
    "Step",
    "load_sequence",
    "run_sequence",
]
