"""Configuration loading and management"""

import os
import json
from pathlib import Path
from .exceptions import ConfigError


# Environment variable names
RPC_URL_ENV = "ARBITRUM_SEPOLIA_RPC_URL"
ADMIN_KEY_ENV = "ADMIN_PRIVATE_KEY"
USER_KEY_ENV = "USER_PRIVATE_KEY"
REQUIRED_ENV = (RPC_URL_ENV, ADMIN_KEY_ENV, USER_KEY_ENV)

ADDRESS_ENV = "POOL_MASTER_ADDRESS"
CHAIN_ID_ENV = "POOL_MASTER_CHAIN_ID"
RECEIPT_TIMEOUT_ENV = "POOL_MASTER_RECEIPT_TIMEOUT"


class Config:
    """Centralized configuration manager for the pool master contract"""

    _instance = None
    _package = None

    # Contract ABI, address and chain are shipped inside the package
    PACKAGE_ABIS = Path(__file__).parent.parent / "abis.json"

    DEFAULT_RECEIPT_TIMEOUT = 120

    def __new__(cls):
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __init__(self):
        if Config._package is None:
            self._load()

    def _load(self):
        """Load the packaged contract description"""
        if not self.PACKAGE_ABIS.exists():
            raise ConfigError(f"Contract ABI not found: {self.PACKAGE_ABIS}")
        with open(self.PACKAGE_ABIS) as f:
            Config._package = json.load(f)

    @property
    def abi(self):
        """Pool master contract ABI (list of entries)"""
        return Config._package["abi"]

    @property
    def contract_address(self):
        """Pool master address (POOL_MASTER_ADDRESS overrides the packaged one)"""
        return os.getenv(ADDRESS_ENV) or Config._package["address"]

    @property
    def chain_id(self):
        """Chain ID used when signing transactions"""
        raw = os.getenv(CHAIN_ID_ENV)
        if not raw:
            return Config._package["chainId"]
        try:
            return int(raw)
        except ValueError:
            raise ConfigError(f"{CHAIN_ID_ENV} must be an integer, got {raw!r}")

    @property
    def receipt_timeout(self):
        """Seconds to wait for a transaction receipt"""
        raw = os.getenv(RECEIPT_TIMEOUT_ENV)
        if not raw:
            return self.DEFAULT_RECEIPT_TIMEOUT
        try:
            return float(raw)
        except ValueError:
            raise ConfigError(f"{RECEIPT_TIMEOUT_ENV} must be a number, got {raw!r}")

    def descriptor(self):
        """Build the contract interface descriptor from the packaged ABI"""
        from ..contracts.descriptor import ContractDescriptor
        return ContractDescriptor.from_abi(self.contract_address, self.abi)
