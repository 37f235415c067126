"""Shared fixtures: a fake node that records calls and signers"""

import pytest
from eth_abi import encode
from eth_account import Account
from hexbytes import HexBytes
from web3.datastructures import AttributeDict

from pool_master.core.config import Config
from pool_master.core.connection import Web3Manager
from pool_master.operations.invoker import OperationInvoker

# Well-known development keys (Hardhat/Anvil accounts 0 and 1)
ADMIN_KEY = "0xac0974bec39a17e36ba4a6b4d238ff944bacb478cbed5efcae784d7bf4f2ff80"
USER_KEY = "0x59c6995e998f97a5a0044966f0945389dc9e86dae88c7a8412f4603b6b78690d"
RPC_URL = "http://127.0.0.1:8545"
CHAIN_ID = 421614


class FakeEth:
    """Stands in for w3.eth: answers eth_call by selector and mines every transaction"""

    def __init__(self):
        self.chain_id = CHAIN_ID
        self.gas_price = 10 ** 8
        self.responses = {}
        self.calls = []
        self.sent = []
        self.events = []
        self.receipt_status = 1
        self.send_error = None
        self.wait_error = None
        self._nonces = {}

    def respond(self, function, types, values):
        """Answer eth_call for a ContractFunction with ABI-encoded values"""
        self.responses[function.selector] = encode(types, values)

    def call(self, request, block_identifier=None):
        self.calls.append(request)
        self.events.append(("call", request.get("from")))
        response = self.responses.get(bytes(request["data"][:4]), b"")
        if isinstance(response, Exception):
            raise response
        return HexBytes(response)

    def estimate_gas(self, tx):
        return 100000

    def get_block(self, block_identifier):
        return AttributeDict({"number": 1, "baseFeePerGas": 10 ** 8})

    def get_transaction_count(self, address, block_identifier=None):
        return self._nonces.get(address, 0)

    def send_raw_transaction(self, raw):
        if self.send_error is not None:
            raise self.send_error
        sender = Account.recover_transaction(raw)
        self._nonces[sender] = self._nonces.get(sender, 0) + 1
        tx_hash = HexBytes(bytes([len(self.sent) + 1]) * 32)
        self.sent.append({"sender": sender, "raw": raw, "hash": tx_hash})
        self.events.append(("send", sender))
        return tx_hash

    def wait_for_transaction_receipt(self, tx_hash, timeout=120, poll_latency=0.1):
        self.events.append(("wait", HexBytes(tx_hash)))
        if self.wait_error is not None:
            raise self.wait_error
        return AttributeDict({
            "transactionHash": HexBytes(tx_hash),
            "status": self.receipt_status,
            "blockNumber": 100 + len(self.sent),
            "gasUsed": 90000,
        })

    @property
    def senders(self):
        return [tx["sender"] for tx in self.sent]


class FakeWeb3:
    def __init__(self):
        self.eth = FakeEth()
        self.connected = True

    def is_connected(self):
        return self.connected


@pytest.fixture
def fake_w3():
    return FakeWeb3()


@pytest.fixture
def manager(fake_w3):
    return Web3Manager(RPC_URL, ADMIN_KEY, USER_KEY, w3=fake_w3, chain_id=CHAIN_ID)


@pytest.fixture
def descriptor():
    return Config().descriptor()


@pytest.fixture
def invoker(manager):
    return OperationInvoker(manager, receipt_timeout=5)


@pytest.fixture
def admin_address():
    return Account.from_key(ADMIN_KEY).address


@pytest.fixture
def user_address():
    return Account.from_key(USER_KEY).address
