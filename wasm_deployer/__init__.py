"""
wasm-deployer: upload and instantiate CosmWasm contracts on Terra networks.
"""
from .config import DeployConfig, NetworkConfig
from .contracts import (
    UsersContract,
    code_id_from,
    contract_address_from,
    execute_contract,
    instantiate_contract,
    query_contract,
    store_code,
    upload_code,
)
from .deploy import run_deploy
from .exceptions import (
    ConfigurationError,
    DeployerError,
    LogParseError,
    NodeConnectionError,
    TransactionError,
)
from .models import DEFAULT_FEE, DeployResult, FeeSpec, InstantiateMsg
from .network import check_node, create_client, create_wallet
from .transactions import send_transaction
from .version import __version__

__all__ = [
    "ConfigurationError",
    "DEFAULT_FEE",
    "DeployConfig",
    "DeployResult",
    "DeployerError",
    "FeeSpec",
    "InstantiateMsg",
    "LogParseError",
    "NetworkConfig",
    "NodeConnectionError",
    "TransactionError",
    "UsersContract",
    "__version__",
    "check_node",
    "code_id_from",
    "contract_address_from",
    "create_client",
    "create_wallet",
    "execute_contract",
    "instantiate_contract",
    "query_contract",
    "run_deploy",
    "send_transaction",
    "store_code",
    "upload_code",
]
