"""Transaction lifecycle: build, sign, submit and confirm"""

import logging
from enum import Enum

from web3.exceptions import TimeExhausted

from ..core.exceptions import (
    ExecutionError,
    NetworkError,
    SubmissionError,
    TransactionError,
)
from .gas import GasManager

logger = logging.getLogger(__name__)


class TxState(str, Enum):
    BUILT = "built"
    SUBMITTED = "submitted"
    PENDING = "pending"
    CONFIRMED = "confirmed"
    FAILED = "failed"


_TRANSITIONS = {
    TxState.BUILT: (TxState.SUBMITTED, TxState.FAILED),
    TxState.SUBMITTED: (TxState.PENDING, TxState.FAILED),
    TxState.PENDING: (TxState.CONFIRMED, TxState.FAILED),
    TxState.CONFIRMED: (),
    TxState.FAILED: (),
}


class PendingTransaction:
    """A write operation moving through Built -> Submitted -> Pending -> Confirmed | Failed"""

    def __init__(self, function, identity, tx):
        self.function = function
        self.identity = identity
        self.tx = tx
        self.tx_hash = None
        self.receipt = None
        self.error = None
        self.state = TxState.BUILT
        self.history = [TxState.BUILT]

    def transition(self, state):
        if state not in _TRANSITIONS[self.state]:
            raise TransactionError(
                f"{self.function.name}: cannot move from {self.state.value} to {state.value}"
            )
        self.state = state
        self.history.append(state)

    def fail(self, error):
        self.error = error
        if self.state is not TxState.FAILED:
            self.transition(TxState.FAILED)
        return error

    @property
    def hash_hex(self):
        if self.tx_hash is None:
            return None
        return "0x" + bytes(self.tx_hash).hex()

    @property
    def is_final(self):
        return self.state in (TxState.CONFIRMED, TxState.FAILED)

    def __repr__(self):
        return (
            f"PendingTransaction({self.function.name}, signer={self.identity.role.value}, "
            f"state={self.state.value}, hash={self.hash_hex})"
        )


class TransactionBuilder:
    """Build and send EIP-1559 transactions with unified gas management"""

    def __init__(self, manager, gas_manager=None, gas_buffer=1.2):
        """
        Args:
            manager: Web3Manager instance
            gas_manager: GasManager instance (created if None from gas_config.json)
            gas_buffer: Multiplier applied to the gas estimate
        """
        self.manager = manager
        self.gas_manager = gas_manager or GasManager(manager)
        self.gas_buffer = gas_buffer

    def build(self, identity, address, function, args, value=0):
        """
        Build an EIP-1559 transaction for a contract function.

        Args:
            identity: Signing identity
            address: Contract address
            function: ContractFunction to call
            args: Positional arguments
            value: ETH value to send in wei (payable functions only)

        Returns:
            PendingTransaction in the BUILT state

        Raises:
            EncodingError: If the arguments do not match the function
            GasPriceTooHighError: If base fee exceeds maxFeePerGas
        """
        data = function.encode_call(args)
        function.validate_value(value)

        call = {"from": identity.address, "to": address, "data": data, "value": value}

        try:
            fees = self.gas_manager.fee_params(function.name)
            gas = self.gas_manager.gas_limit(call, function.name, self.gas_buffer)
            nonce = self.manager.get_nonce(identity.address)
        except SubmissionError:
            raise
        except Exception as e:
            raise NetworkError(f"Failed to prepare {function.name}: {e}")

        tx = {
            "to": address,
            "data": data,
            "value": value,
            "nonce": nonce,
            "gas": gas,
            "maxFeePerGas": fees["maxFeePerGas"],
            "maxPriorityFeePerGas": fees["maxPriorityFeePerGas"],
            "chainId": self.manager.chain_id,
            "type": 2,
        }
        return PendingTransaction(function, identity, tx)

    def submit(self, pending):
        """
        Sign and send. The transaction is PENDING on return; nothing is confirmed yet.

        Raises:
            SubmissionError: If the node rejects the transaction
            NetworkError: If the node cannot be reached
        """
        signed = pending.identity.sign_transaction(pending.tx)
        try:
            tx_hash = self.manager.w3.eth.send_raw_transaction(signed.raw_transaction)
        except OSError as e:
            raise pending.fail(NetworkError(f"{pending.function.name}: node unreachable: {e}"))
        except Exception as e:
            raise pending.fail(SubmissionError(f"{pending.function.name} rejected: {e}"))

        pending.transition(TxState.SUBMITTED)
        pending.tx_hash = tx_hash
        pending.transition(TxState.PENDING)
        return pending

    def wait(self, pending, timeout=120):
        """
        Block until the transaction is mined.

        Returns:
            Transaction receipt

        Raises:
            NetworkError: On timeout or transport failure
            ExecutionError: If the transaction reverted
        """
        try:
            receipt = self.manager.w3.eth.wait_for_transaction_receipt(
                pending.tx_hash, timeout=timeout
            )
        except TimeExhausted:
            raise pending.fail(NetworkError(
                f"{pending.function.name}: no receipt for {pending.hash_hex} after {timeout}s"
            ))
        except Exception as e:
            raise pending.fail(NetworkError(
                f"{pending.function.name}: waiting for {pending.hash_hex} failed: {e}"
            ))

        pending.receipt = receipt
        if receipt["status"] != 1:
            raise pending.fail(ExecutionError(
                f"{pending.function.name} reverted: {pending.hash_hex}"
            ))

        pending.transition(TxState.CONFIRMED)
        return receipt
