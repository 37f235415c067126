"""Pool master (liquidity position manager) contract wrapper"""

from web3.exceptions import ContractLogicError

from ..core.config import Config
from ..core.exceptions import ExecutionError, NetworkError
from ..utils.gas import GasManager
from ..utils.transactions import TransactionBuilder


class PoolMaster:
    """Low-level calls against the pool master contract: eth_call reads and signed writes"""

    def __init__(self, manager, descriptor=None, gas_manager=None):
        """
        Args:
            manager: Web3Manager instance
            descriptor: ContractDescriptor (built from the packaged ABI if None)
            gas_manager: GasManager instance (created if None)
        """
        self.manager = manager
        self.descriptor = descriptor or Config().descriptor()
        self.address = self.descriptor.address

        self.gas_manager = gas_manager or GasManager(manager)
        self.tx_builder = TransactionBuilder(manager, self.gas_manager)

    def call(self, name, args=(), sender=None, value=0):
        """
        Execute a function with eth_call and decode its outputs.

        Used for view functions and to preview the return values of writes.

        Args:
            name: Contract function name
            args: Positional arguments
            sender: Address the call is made from (None for anonymous reads)
            value: Wei attached to the call

        Returns:
            Tuple of decoded output values

        Raises:
            EncodingError: Arguments rejected, nothing was sent
            ExecutionError: The call reverted
            NetworkError: Node unreachable or returned an error
            DecodeError: Response does not match the declared outputs
        """
        function = self.descriptor[name]
        request = {"to": self.address, "data": function.encode_call(args)}
        if sender:
            request["from"] = sender
        if value:
            request["value"] = value

        try:
            raw = self.manager.w3.eth.call(request)
        except ContractLogicError as e:
            raise ExecutionError(f"{name} reverted: {e}")
        except Exception as e:
            raise NetworkError(f"{name} call failed: {e}")

        return function.decode_output(raw)

    def build(self, identity, name, args=(), value=0):
        """Build a write transaction signed by identity (BUILT state)"""
        return self.tx_builder.build(identity, self.address, self.descriptor[name], args, value)

    def submit(self, pending):
        """Sign and send; the transaction is PENDING on return"""
        return self.tx_builder.submit(pending)

    def wait(self, pending, timeout=120):
        """Block until mined; returns the receipt"""
        return self.tx_builder.wait(pending, timeout)
