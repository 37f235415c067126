"""Fee and gas-limit policy for pool master transactions"""

import os
import json
import logging
from pathlib import Path

from ..core.exceptions import SubmissionError

logger = logging.getLogger(__name__)

GAS_CONFIG_ENV = "POOL_MASTER_GAS_CONFIG"
GWEI = 10 ** 9

# Used when eth_estimateGas fails
FALLBACK_LIMITS = {
    "swapExactInputSingle": 300000,
    "collectPoolAllFees": 400000,
    "mintPosition": 600000,
    "burnPosition": 300000,
    "increaseLiquidity": 400000,
    "decreaseLiquidity": 300000,
    "default": 500000,
}


class GasPriceTooHighError(SubmissionError):
    """Current base fee is above the configured fee cap"""
    pass


def load_gas_config(path=None):
    """First gas_config.json found (explicit path, env, cwd, home), else {}"""
    candidates = [
        path,
        os.getenv(GAS_CONFIG_ENV),
        Path.cwd() / "gas_config.json",
        Path.home() / ".pool-master" / "gas_config.json",
    ]
    for candidate in candidates:
        if candidate and Path(candidate).exists():
            with open(candidate) as f:
                return json.load(f)
    return {}


class GasManager:
    """EIP-1559 fees from the latest base fee, with an optional cap, and gas limits"""

    def __init__(self, manager, config=None, config_path=None):
        """
        Args:
            manager: Web3Manager instance
            config: Settings dict (maxFeePerGas, maxPriorityFeePerGas in Gwei; gasLimit)
            config_path: gas_config.json to read when config is None
        """
        self.manager = manager
        settings = config if config is not None else load_gas_config(config_path)
        self.fee_cap_gwei = settings.get("maxFeePerGas")
        self.tip_gwei = settings.get("maxPriorityFeePerGas", 1.5)
        self.limits = {**FALLBACK_LIMITS, **settings.get("gasLimit", {})}

    def fallback_limit(self, name):
        return self.limits.get(name, self.limits["default"])

    def fee_params(self, name=None):
        """
        maxFeePerGas and maxPriorityFeePerGas in wei.

        Raises:
            GasPriceTooHighError: If the base fee is above the configured cap
        """
        base_fee = self.manager.w3.eth.get_block("latest").get("baseFeePerGas", 0)
        tip = int(self.tip_gwei * GWEI)

        if self.fee_cap_gwei is None:
            max_fee = int((base_fee + tip) * 1.2)
        else:
            max_fee = int(self.fee_cap_gwei * GWEI)
            if max_fee < base_fee:
                raise GasPriceTooHighError(
                    f"{name or 'transaction'}: base fee {base_fee / GWEI:.2f} Gwei "
                    f"exceeds maxFeePerGas {self.fee_cap_gwei} Gwei"
                )

        return {"maxFeePerGas": max_fee, "maxPriorityFeePerGas": min(tip, max_fee)}

    def gas_limit(self, call, name, buffer=1.2):
        """Estimated gas for call times buffer; the fallback limit when estimation fails"""
        try:
            estimate = self.manager.w3.eth.estimate_gas(call)
        except Exception as e:
            logger.debug("Gas estimate for %s failed (%s), using fallback", name, e)
            estimate = self.fallback_limit(name)
        return int(estimate * buffer)
