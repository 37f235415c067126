"""Core module - configuration, connection, identities, results and exceptions"""

from .config import Config
from .connection import Web3Manager
from .identity import Identity, Role
from .result import Ok, Err, ErrorKind
from .exceptions import (
    PoolMasterError,
    ConfigError,
    NetworkError,
    SubmissionError,
    ExecutionError,
    DecodeError,
    EncodingError,
    RoleError,
    TransactionError,
)

__all__ = [
    "Config",
    "Web3Manager",
    "Identity",
    "Role",
    "Ok",
    "Err",
    "ErrorKind",
    "PoolMasterError",
    "ConfigError",
    "NetworkError",
    "SubmissionError",
    "ExecutionError",
    "DecodeError",
    "EncodingError",
    "RoleError",
    "TransactionError",
]
