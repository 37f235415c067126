"""Web3 connection and identity management"""

import os
from eth_account import Account
from web3 import Web3
from dotenv import load_dotenv
from .config import Config, RPC_URL_ENV, ADMIN_KEY_ENV, USER_KEY_ENV, REQUIRED_ENV
from .exceptions import ConfigError, NetworkError
from .identity import Identity, Role


class Web3Manager:
    """Holds the network connection and the admin and user identities"""

    def __init__(self, rpc_url=None, admin_key=None, user_key=None, w3=None, chain_id=None):
        """
        Initialize connection and identities.

        Args:
            rpc_url: JSON-RPC endpoint of the node
            admin_key: Admin private key (hex)
            user_key: User private key (hex)
            w3: Pre-built Web3 instance (tests inject a fake here)
            chain_id: Chain ID for signing (defaults to configured value)

        Raises:
            ConfigError: If any value is missing or a key is invalid
        """
        values = {
            RPC_URL_ENV: rpc_url,
            ADMIN_KEY_ENV: admin_key,
            USER_KEY_ENV: user_key,
        }
        missing = [name for name in REQUIRED_ENV if not values[name]]
        if missing:
            raise ConfigError(
                f"{', '.join(missing)} not set in environment or .env file",
                missing=missing,
            )

        self.config = Config()
        self.rpc_url = rpc_url
        self._chain_id = chain_id

        self.admin = self._setup_identity(Role.ADMIN, admin_key, ADMIN_KEY_ENV)
        self.user = self._setup_identity(Role.USER, user_key, USER_KEY_ENV)

        # HTTPProvider does not connect until the first request
        self.w3 = w3 if w3 is not None else Web3(Web3.HTTPProvider(rpc_url))

    @classmethod
    def from_env(cls, load_env=True, **kwargs):
        """Build from ARBITRUM_SEPOLIA_RPC_URL, ADMIN_PRIVATE_KEY and USER_PRIVATE_KEY"""
        if load_env:
            load_dotenv()
            load_dotenv("wallet.env")

        return cls(
            rpc_url=os.getenv(RPC_URL_ENV),
            admin_key=os.getenv(ADMIN_KEY_ENV),
            user_key=os.getenv(USER_KEY_ENV),
            **kwargs,
        )

    def _setup_identity(self, role, private_key, env_name):
        """Derive a signing identity from a private key"""
        try:
            account = Account.from_key(private_key)
        except Exception as e:
            # The key itself must not end up in the message
            raise ConfigError(f"{env_name} is not a valid private key ({type(e).__name__})")
        return Identity(role=role, account=account)

    def identity(self, role):
        """Get the identity for a role"""
        if Role(role) is Role.ADMIN:
            return self.admin
        return self.user

    @property
    def chain_id(self):
        """Chain ID used for signing (configured, not queried)"""
        if self._chain_id is not None:
            return self._chain_id
        return self.config.chain_id

    def node_chain_id(self):
        """Chain ID reported by the node"""
        return self.w3.eth.chain_id

    def check_connection(self):
        """Probe the node; raises NetworkError when it is unreachable"""
        try:
            connected = self.w3.is_connected()
        except Exception as e:
            raise NetworkError(f"Failed to connect to node: {e}")
        if not connected:
            raise NetworkError("Failed to connect to node")
        return True

    def get_nonce(self, address):
        """Get transaction count (nonce) including pending transactions"""
        return self.w3.eth.get_transaction_count(address, "pending")
