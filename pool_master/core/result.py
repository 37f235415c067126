"""Tagged operation results"""

from dataclasses import dataclass
from enum import Enum
from typing import Any, Optional

from .exceptions import (
    PoolMasterError,
    ConfigError,
    NetworkError,
    SubmissionError,
    ExecutionError,
    DecodeError,
    EncodingError,
    RoleError,
)


class ErrorKind(str, Enum):
    """Failure categories an operation can report"""

    CONFIG = "config"
    NETWORK = "network"
    SUBMISSION = "submission"
    EXECUTION = "execution"
    DECODE = "decode"
    ENCODING = "encoding"
    ROLE = "role"


# Most specific first: GasPriceTooHighError is a SubmissionError
_KINDS = (
    (ConfigError, ErrorKind.CONFIG),
    (SubmissionError, ErrorKind.SUBMISSION),
    (ExecutionError, ErrorKind.EXECUTION),
    (DecodeError, ErrorKind.DECODE),
    (EncodingError, ErrorKind.ENCODING),
    (RoleError, ErrorKind.ROLE),
    (NetworkError, ErrorKind.NETWORK),
)


def kind_of(error):
    """Map an exception to its ErrorKind (unknown errors count as network)"""
    for exc_type, kind in _KINDS:
        if isinstance(error, exc_type):
            return kind
    return ErrorKind.NETWORK


@dataclass(frozen=True)
class Ok:
    """Successful operation"""

    value: Any = None

    @property
    def ok(self) -> bool:
        return True

    def unwrap(self):
        return self.value

    def unwrap_or(self, default):
        return self.value


@dataclass(frozen=True)
class Err:
    """Failed operation with its category and a human-readable detail"""

    kind: ErrorKind
    detail: str
    error: Optional[BaseException] = None

    @property
    def ok(self) -> bool:
        return False

    def unwrap(self):
        if self.error is not None:
            raise self.error
        raise PoolMasterError(f"{self.kind.value}: {self.detail}")

    def unwrap_or(self, default):
        return default

    @classmethod
    def from_exception(cls, error):
        return cls(kind=kind_of(error), detail=str(error), error=error)
