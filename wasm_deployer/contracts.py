"""
Contract upload, instantiation and interaction.
"""
import base64
import logging
from pathlib import Path
from typing import Any, Dict, List, Optional, Union

from terra_proto.cosmwasm.wasm.v1 import AccessType
from terra_sdk.client.lcd import LCDClient, Wallet
from terra_sdk.core.broadcast import BlockTxBroadcastResult
from terra_sdk.core.wasm import MsgExecuteContract, MsgInstantiateContract, MsgStoreCode
from terra_sdk.core.wasm.data import AccessConfig

from .config import DEFAULT_LABEL
from .exceptions import LogParseError
from .models import FeeSpec
from .transactions import send_transaction

logger = logging.getLogger(__name__)

# Anyone may instantiate uploaded code.
INSTANTIATE_PERMISSION = AccessConfig(AccessType.ACCESS_TYPE_EVERYBODY, "")

STORE_CODE_EVENT = "store_code"
CODE_ID_ATTRIBUTE = "code_id"

# (event type, attribute key) pairs that carry the new contract address.
# The first is emitted by Terra classic, the second by wasmd based chains.
CONTRACT_ADDRESS_EVENTS = (
    ("instantiate_contract", "contract_address"),
    ("instantiate", "_contract_address"),
)


def store_code(
    terra: LCDClient,
    deployer: Wallet,
    filepath: Union[str, Path],
    verbose: bool = False,
    fee: Optional[FeeSpec] = None
) -> int:
    """
    Upload contract bytecode and return the code ID assigned by the network.

    The file is read before anything is signed, so a missing binary fails
    without touching the network.

    Args:
        terra: LCD client
        deployer: Wallet that uploads and pays for the code
        filepath: Path to the compiled .wasm binary
        verbose: Print the tx hash and raw log
        fee: Fee override

    Returns:
        Code ID as an integer

    Raises:
        FileNotFoundError: If the binary does not exist
        TransactionError: If the upload transaction fails
        LogParseError: If the tx log has no positive code ID
    """
    return code_id_from(upload_code(terra, deployer, filepath, verbose=verbose, fee=fee))


def upload_code(
    terra: LCDClient,
    deployer: Wallet,
    filepath: Union[str, Path],
    verbose: bool = False,
    fee: Optional[FeeSpec] = None
) -> BlockTxBroadcastResult:
    """Broadcast a store-code transaction and return its result unmodified."""
    code = base64.b64encode(Path(filepath).read_bytes()).decode("ascii")
    logger.debug(f"Uploading {filepath} ({len(code)} base64 chars)")
    msg = MsgStoreCode(
        sender=deployer.key.acc_address,
        wasm_byte_code=code,
        instantiate_permission=INSTANTIATE_PERMISSION,
    )
    return send_transaction(terra, deployer, [msg], verbose=verbose, fee=fee)


def instantiate_contract(
    terra: LCDClient,
    deployer: Wallet,
    admin: Wallet,
    code_id: int,
    instantiate_msg: Dict[str, Any],
    label: str = DEFAULT_LABEL,
    verbose: bool = False,
    fee: Optional[FeeSpec] = None
) -> BlockTxBroadcastResult:
    """
    Instantiate a contract from an existing code ID.

    Returns the broadcast result unmodified; use contract_address_from() to
    get the new contract's address.
    """
    msg = MsgInstantiateContract(
        sender=deployer.key.acc_address,
        admin=admin.key.acc_address,
        code_id=code_id,
        label=label,
        msg=instantiate_msg,
    )
    return send_transaction(terra, deployer, [msg], verbose=verbose, fee=fee)


def execute_contract(
    terra: LCDClient,
    sender: Wallet,
    contract_address: str,
    execute_msg: Dict[str, Any],
    verbose: bool = False,
    fee: Optional[FeeSpec] = None
) -> BlockTxBroadcastResult:
    msg = MsgExecuteContract(sender.key.acc_address, contract_address, execute_msg)
    return send_transaction(terra, sender, [msg], verbose=verbose, fee=fee)


def query_contract(terra: LCDClient, contract_address: str, query_msg: Dict[str, Any]) -> Any:
    return terra.wasm.contract_query(contract_address, query_msg)


def code_id_from(result: BlockTxBroadcastResult) -> int:
    """
    Parse the code ID out of a store-code transaction result.

    Raises:
        LogParseError: If the event or attribute is missing, not numeric or below 1
    """
    events_by_type = _first_log(result).events_by_type
    try:
        raw_code_id = events_by_type[STORE_CODE_EVENT][CODE_ID_ATTRIBUTE][0]
    except (KeyError, IndexError, TypeError):
        raise LogParseError(
            f"No '{CODE_ID_ATTRIBUTE}' attribute in '{STORE_CODE_EVENT}' event of tx {result.txhash}"
        )
    if not isinstance(raw_code_id, str) or not raw_code_id.isdecimal():
        raise LogParseError(f"Code ID is not numeric: {raw_code_id!r}")
    code_id = int(raw_code_id)
    if code_id < 1:
        raise LogParseError(f"Code ID must be positive: {raw_code_id!r}")
    return code_id


def contract_address_from(result: BlockTxBroadcastResult) -> str:
    """
    Find the new contract address in an instantiate transaction result.

    Raises:
        LogParseError: If no non-empty contract address attribute is present
    """
    events = _first_log(result).events or []
    for event_type, attribute_key in CONTRACT_ADDRESS_EVENTS:
        for event in events:
            if event.get("type") != event_type:
                continue
            for attribute in event.get("attributes", []):
                if attribute.get("key") == attribute_key and attribute.get("value"):
                    return attribute["value"]
    raise LogParseError(f"No contract address in instantiate events of tx {result.txhash}")


def _first_log(result: BlockTxBroadcastResult):
    if not result.logs:
        raise LogParseError(f"Transaction {result.txhash} returned no logs")
    return result.logs[0]


class UsersContract:
    """
    Client for a deployed users contract.

    Wraps the contract's execute messages (add_user, remove_user) and queries
    (get_users, get_user).
    """

    def __init__(
        self,
        terra: LCDClient,
        wallet: Wallet,
        contract_address: str,
        verbose: bool = False,
        fee: Optional[FeeSpec] = None
    ):
        self.terra = terra
        self.wallet = wallet
        self.contract_address = contract_address
        self.verbose = verbose
        self.fee = fee

    def add_user(self, user: str) -> BlockTxBroadcastResult:
        return self._execute({"add_user": {"user": user}})

    def remove_user(self, user: str) -> BlockTxBroadcastResult:
        return self._execute({"remove_user": {"user": user}})

    def get_users(self) -> List[str]:
        response = query_contract(self.terra, self.contract_address, {"get_users": {}})
        return list(response["users"])

    def get_user(self, user: str) -> bool:
        """Return whether the user is registered in the contract."""
        response = query_contract(self.terra, self.contract_address, {"get_user": {"user": user}})
        return bool(response["exist"])

    def _execute(self, execute_msg: Dict[str, Any]) -> BlockTxBroadcastResult:
        logger.debug(f"Executing {execute_msg} on {self.contract_address}")
        return execute_contract(
            self.terra,
            self.wallet,
            self.contract_address,
            execute_msg,
            verbose=self.verbose,
            fee=self.fee,
        )
