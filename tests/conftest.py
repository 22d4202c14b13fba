"""
Pytest fixtures for the wasm deployer tests.
"""
import json
from typing import Any, Dict, List, Optional
from unittest.mock import MagicMock

import pytest

from wasm_deployer.config import NetworkConfig

# Constants for testing
TEST_ADDRESS = "terra1x46rqay4d3cssq8gxxvqz8xt6nwlz4td20k38v"
TEST_CONTRACT = "terra18vd8fpwxzck93qlwghaj6arh4p7c5n896xzem5"
TEST_LCD_URL = "https://lcd.example.com"
TEST_CHAIN_ID = "test-1"
TEST_MNEMONIC = (
    "notice oak worry limit wrap speak medal online prefer cluster roof addict "
    "wrist behave treat actual wasp year salad speed social layer crew genius"
)
TEST_WASM = b"\x00asm\x01\x00\x00\x00"


class FakeTxLog:
    """Stand-in for terra_sdk's TxLog with the fields the deployer reads"""

    def __init__(self, events: List[Dict[str, Any]]):
        self.events = events
        self.events_by_type: Dict[str, Dict[str, List[str]]] = {}
        for event in events:
            attrs = self.events_by_type.setdefault(event["type"], {})
            for attribute in event.get("attributes", []):
                attrs.setdefault(attribute["key"], []).append(attribute["value"])


class FakeBroadcastResult:
    """Stand-in for terra_sdk's BlockTxBroadcastResult"""

    def __init__(
        self,
        txhash: str = "ABCDEF0123456789",
        raw_log: str = "[]",
        logs: Optional[List[FakeTxLog]] = None,
        code: int = 0,
        codespace: Optional[str] = None
    ):
        self.txhash = txhash
        self.raw_log = raw_log
        self.logs = logs if logs is not None else []
        self.code = code
        self.codespace = codespace


def store_code_result(code_id: Any = "42", txhash: str = "STORE_HASH") -> FakeBroadcastResult:
    events = [
        {"type": "message", "attributes": [{"key": "action", "value": "store_code"}]},
        {"type": "store_code", "attributes": [
            {"key": "sender", "value": TEST_ADDRESS},
            {"key": "code_id", "value": str(code_id)},
        ]},
    ]
    return FakeBroadcastResult(txhash=txhash, raw_log=json.dumps([{"events": events}]), logs=[FakeTxLog(events)])


def instantiate_result(
    contract_address: str = TEST_CONTRACT,
    event_type: str = "instantiate_contract",
    attribute_key: str = "contract_address",
    txhash: str = "INSTANTIATE_HASH"
) -> FakeBroadcastResult:
    events = [
        {"type": "message", "attributes": [{"key": "action", "value": "instantiate_contract"}]},
        {"type": event_type, "attributes": [
            {"key": "owner", "value": TEST_ADDRESS},
            {"key": "code_id", "value": "42"},
            {"key": attribute_key, "value": contract_address},
        ]},
    ]
    return FakeBroadcastResult(txhash=txhash, raw_log=json.dumps([{"events": events}]), logs=[FakeTxLog(events)])


@pytest.fixture(autouse=True)
def _reset_network_cache():
    """Each test starts from an empty network cache."""
    NetworkConfig._networks_cache = None
    yield
    NetworkConfig._networks_cache = None


@pytest.fixture
def wallet():
    """Wallet double whose signed tx is a sentinel object."""
    mock_wallet = MagicMock()
    mock_wallet.key.acc_address = TEST_ADDRESS
    mock_wallet.create_and_sign_tx.return_value = MagicMock(name="signed_tx")
    return mock_wallet


@pytest.fixture
def terra():
    """LCD client double; set terra.tx.broadcast.return_value per test."""
    mock_terra = MagicMock()
    mock_terra.tx.broadcast.return_value = FakeBroadcastResult()
    return mock_terra


@pytest.fixture
def wasm_file(tmp_path):
    path = tmp_path / "interview_challenge.wasm"
    path.write_bytes(TEST_WASM)
    return path
