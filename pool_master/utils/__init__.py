"""Transaction and gas utilities"""

from .gas import GasManager, GasPriceTooHighError, load_gas_config
from .transactions import PendingTransaction, TransactionBuilder, TxState

__all__ = [
    "GasManager",
    "GasPriceTooHighError",
    "load_gas_config",
    "PendingTransaction",
    "TransactionBuilder",
    "TxState",
]
