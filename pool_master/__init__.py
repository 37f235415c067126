"""
Pool Master - invoke a liquidity position manager contract as admin or user
"""

from .core.connection import Web3Manager
from .core.config import Config
from .core.result import Ok, Err, ErrorKind
from .core.exceptions import PoolMasterError, ConfigError
from .operations.invoker import OperationInvoker

__version__ = "0.1.0"
__all__ = [
    "Web3Manager",
    "Config",
    "Ok",
    "Err",
    "ErrorKind",
    "PoolMasterError",
    "ConfigError",
    "OperationInvoker",
]
