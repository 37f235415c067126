"""Custom exceptions for Pool Master interactions"""


class PoolMasterError(Exception):
    """Base exception for all Pool Master errors"""
    pass


class ConfigError(PoolMasterError):
    """Configuration-related errors (missing or invalid settings)"""

    def __init__(self, message, missing=None):
        super().__init__(message)
        self.missing = list(missing or [])


class NetworkError(PoolMasterError):
    """Node unreachable, malformed response, or confirmation timeout"""
    pass


class SubmissionError(PoolMasterError):
    """Node rejected the transaction (bad nonce, insufficient funds, ...)"""
    pass


class ExecutionError(PoolMasterError):
    """Call or transaction reverted on-chain"""
    pass


class DecodeError(PoolMasterError):
    """Response does not match the declared output types"""
    pass


class EncodingError(PoolMasterError):
    """Arguments do not match the declared input types"""
    pass


class RoleError(PoolMasterError):
    """No signer policy declared for a write operation"""
    pass


class TransactionError(PoolMasterError):
    """Illegal transaction lifecycle transition"""
    pass
