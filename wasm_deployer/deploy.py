"""
Upload and instantiate the users contract, printing the resulting identifiers.

Usage:
    TERRA_MNEMONIC="..." wasm-deploy --network localterra --wasm artifacts/interview_challenge.wasm
"""
import argparse
import logging
import sys
from pathlib import Path
from typing import List, Optional

from terra_sdk.client.lcd import LCDClient, Wallet

from .config import DEFAULT_NETWORK, DeployConfig
from .contracts import UsersContract, code_id_from, contract_address_from, instantiate_contract, upload_code
from .exceptions import DeployerError
from .models import DeployResult, InstantiateMsg
from .network import check_node, create_client, create_wallet
from .version import __version__

logger = logging.getLogger(__name__)


def run_deploy(
    config: DeployConfig,
    terra: Optional[LCDClient] = None,
    wallet: Optional[Wallet] = None
) -> DeployResult:
    """
    Upload the configured binary and instantiate it owned by the wallet.

    Args:
        config: Deploy configuration
        terra: LCD client to use instead of building one from config
        wallet: Wallet to use instead of deriving one from the mnemonic

    Returns:
        DeployResult with the code ID and contract address

    Raises:
        FileNotFoundError: If the wasm binary is missing
        TransactionError: If either transaction fails on-chain
        LogParseError: If an identifier is missing from the tx logs
    """
    terra = terra or create_client(config.lcd_url, config.chain_id)
    wallet = wallet or create_wallet(terra, config.mnemonic.get_secret_value())
    address = wallet.key.acc_address
    print("Wallet: ", address)

    print("Start deploy wasm ")
    upload = upload_code(terra, wallet, config.wasm_path, verbose=config.verbose, fee=config.fee)
    code_id = code_id_from(upload)
    print("Done")
    print("\nCodeId: ", code_id)

    print("\n\nInstantiate contract")
    init_msg = InstantiateMsg(owner=address, users=[])
    result = instantiate_contract(
        terra,
        wallet,
        wallet,
        code_id,
        init_msg.model_dump(),
        label=config.label,
        verbose=config.verbose,
        fee=config.fee,
    )
    contract_address = contract_address_from(result)
    print(" Done!", f"contractAddress={contract_address}")

    return DeployResult(
        wallet_address=address,
        code_id=code_id,
        contract_address=contract_address,
        store_tx_hash=upload.txhash,
        instantiate_tx_hash=result.txhash,
    )


def smoke_test(terra: LCDClient, wallet: Wallet, deployed: DeployResult, verbose: bool = False) -> List[str]:
    """Register the owner in the fresh contract and read the user list back."""
    contract = UsersContract(terra, wallet, deployed.contract_address, verbose=verbose)
    print("\nAdd user", deployed.wallet_address)
    contract.add_user(deployed.wallet_address)
    users = contract.get_users()
    print("Users: ", users)
    return users


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="wasm-deploy",
        description="Upload a CosmWasm binary to a Terra network and instantiate it.",
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    parser.add_argument(
        "--network",
        help=f"Bundled network to use. Default: $TERRA_NETWORK or {DEFAULT_NETWORK}",
    )
    parser.add_argument("--lcd-url", help="Override the network's LCD URL")
    parser.add_argument("--chain-id", help="Override the network's chain ID")
    parser.add_argument("--wasm", type=Path, metavar="PATH", help="Compiled contract binary to upload")
    parser.add_argument("--label", help="Label for the instantiated contract")
    parser.add_argument("--verbose", action="store_true", help="Print tx hashes and raw logs")
    parser.add_argument("--skip-preflight", action="store_true", help="Do not query node info before deploying")
    parser.add_argument("--smoke", action="store_true", help="Add the owner as a user after deploying")
    parser.add_argument(
        "--log-level",
        default="WARNING",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Logging level. Default: %(default)s",
    )
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    logging.basicConfig(
        level=getattr(logging, args.log_level),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    try:
        config = DeployConfig.from_env(
            network=args.network,
            lcd_url=args.lcd_url,
            chain_id=args.chain_id,
            wasm_path=args.wasm,
            label=args.label,
            verbose=args.verbose,
        )

        if not args.skip_preflight:
            check_node(config.lcd_url, config.chain_id, timeout=config.timeout, retry_count=config.retry_count)

        terra = create_client(config.lcd_url, config.chain_id)
        wallet = create_wallet(terra, config.mnemonic.get_secret_value())
        deployed = run_deploy(config, terra=terra, wallet=wallet)
        if args.smoke:
            smoke_test(terra, wallet, deployed, verbose=config.verbose)
    except DeployerError as e:
        logger.error(f"Deploy failed: {e}")
        print(f"Error: {e}", file=sys.stderr)
        return 1

    return 0


if __name__ == "__main__":
    sys.exit(main())
