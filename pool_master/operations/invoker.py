"""One method per pool master function, returning tagged results"""

import logging
from dataclasses import dataclass, field
from typing import Any, Dict, Optional, Tuple

from ..contracts.pool_master import PoolMaster
from ..core.config import Config
from ..core.identity import Role
from ..core.result import Ok, Err
from ..utils.transactions import PendingTransaction
from .roles import required_role

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ReadResult:
    """Decoded outputs of a view call"""

    function: str
    values: Tuple[Any, ...]
    named: Dict[str, Any] = field(default_factory=dict)


@dataclass(frozen=True)
class WriteResult:
    """
    A confirmed write.

    values and named come from the eth_call preview made from the signer
    against the state before submission, not from the mined transaction.
    They can differ from the on-chain outcome if state changed in between
    (e.g. another mint took the expected tokenId). They are empty when the
    invoker runs with simulate=False.
    """

    function: str
    values: Tuple[Any, ...]
    named: Dict[str, Any]
    transaction: PendingTransaction

    @property
    def tx_hash(self):
        return self.transaction.hash_hex

    @property
    def receipt(self):
        return self.transaction.receipt

    @property
    def state(self):
        return self.transaction.state


class OperationInvoker:
    """
    Invoke pool master operations.

    Reads go through eth_call and need no signer. Writes are signed by the
    identity the role table names, previewed with eth_call from that
    identity, submitted, and awaited until mined. Every operation returns
    Ok(...) or Err(kind, detail) and never raises, so independent
    operations in a sequence keep running after a failure.
    """

    def __init__(self, manager, descriptor=None, receipt_timeout=None, roles=None, simulate=True):
        """
        Args:
            manager: Web3Manager instance (connection plus admin/user identities)
            descriptor: ContractDescriptor (packaged ABI if None)
            receipt_timeout: Seconds to wait for a receipt (configured default if None)
            roles: Operation -> Role table override
            simulate: Preview write return values with eth_call before sending
        """
        self.manager = manager
        self.contract = PoolMaster(manager, descriptor)
        self.descriptor = self.contract.descriptor
        self.receipt_timeout = (
            Config().receipt_timeout if receipt_timeout is None else receipt_timeout
        )
        self.roles = roles
        self.simulate = simulate

    # ── dispatch ──────────────────────────────────────────────────────

    def invoke(self, name, *args, value=0):
        """Run any descriptor function by name, read or write by its mutability"""
        try:
            function = self.descriptor[name]
            if function.is_read_only:
                function.validate_value(value)
        except Exception as e:
            logger.error("Error invoking %s: %s", name, e)
            return Err.from_exception(e)
        if function.is_read_only:
            return self._read(name, args)
        return self._write(name, args, value=value)

    def _read(self, name, args):
        logger.info("[READ] %s(%s)", name, _fmt_args(args))
        try:
            values = self.contract.call(name, args)
        except Exception as e:
            result = Err.from_exception(e)
            logger.error("Error reading %s [%s]: %s", name, result.kind.value, e)
            return result

        named = self.descriptor[name].named_output(values)
        logger.info("%s: %s", name, named)
        return Ok(ReadResult(function=name, values=values, named=named))

    def _write(self, name, args, value=0):
        pending = None
        try:
            role = required_role(name, self.roles)
            identity = self.manager.identity(role)
            tag = "ADMIN-WRITE" if role is Role.ADMIN else "WRITE"
            logger.info("[%s] %s(%s) as %s", tag, name, _fmt_args(args), identity.address)

            function = self.descriptor[name]
            function.validate(args)
            function.validate_value(value)

            values = ()
            if self.simulate:
                values = self.contract.call(name, args, sender=identity.address, value=value)
                logger.debug("%s preview: %s", name, values)

            pending = self.contract.build(identity, name, args, value)
            self.contract.submit(pending)
            logger.info("Transaction sent! Hash: %s", pending.hash_hex)

            receipt = self.contract.wait(pending, self.receipt_timeout)
            logger.info(
                "Transaction confirmed in block %s (gas used %s)",
                receipt.get("blockNumber"),
                receipt.get("gasUsed"),
            )
        except Exception as e:
            if pending is not None and not pending.is_final:
                pending.fail(e)
            result = Err.from_exception(e)
            logger.error("Error during %s [%s]: %s", name, result.kind.value, e)
            return result

        named = function.named_output(values)
        if named:
            logger.info("%s: %s", name, named)
        return Ok(WriteResult(function=name, values=values, named=named, transaction=pending))

    # ── reads ─────────────────────────────────────────────────────────

    def get_dynamic_info(self, token_id):
        """
        Current price, tick and token amounts for a position.

        Returns:
            Ok(ReadResult) with named keys price, currentTick, amount0, amount1
        """
        return self._read("getDynamicInfo", (token_id,))

    # ── user writes ───────────────────────────────────────────────────

    def swap_exact_input_single(self, amount_in, min_amount_out, zero_for_one, value=0):
        """Swap amount_in of token0 for token1 (zero_for_one) or the reverse"""
        return self._write(
            "swapExactInputSingle", (amount_in, min_amount_out, zero_for_one), value=value
        )

    def collect_pool_all_fees(self):
        """Collect fees accrued by all positions"""
        return self._write("collectPoolAllFees", ())

    # ── admin writes ──────────────────────────────────────────────────

    def mint_position(self, tick_lower, tick_upper, amount0_max, amount1_max):
        """Mint a new position; values are (tokenId, liquidity, amount0, amount1)"""
        return self._write("mintPosition", (tick_lower, tick_upper, amount0_max, amount1_max))

    def burn_position(self, token_id, amount0_min=0, amount1_min=0):
        return self._write("burnPosition", (token_id, amount0_min, amount1_min))

    def increase_liquidity(self, token_id, amount0_max, amount1_max):
        return self._write("increaseLiquidity", (token_id, amount0_max, amount1_max))

    def decrease_liquidity(self, token_id, liquidity, amount0_min=0, amount1_min=0):
        return self._write("decreaseLiquidity", (token_id, liquidity, amount0_min, amount1_min))


def _fmt_args(args):
    return ", ".join(repr(a) for a in args)
