"""
Signing and broadcasting of transactions.
"""
import json
import logging
from typing import Optional, Sequence

from terra_sdk.client.lcd import LCDClient, Wallet
from terra_sdk.client.lcd.api.tx import CreateTxOptions
from terra_sdk.core.broadcast import BlockTxBroadcastResult, is_tx_error
from terra_sdk.core.msg import Msg

from .exceptions import TransactionError
from .models import DEFAULT_FEE, FeeSpec

logger = logging.getLogger(__name__)


def send_transaction(
    terra: LCDClient,
    sender: Wallet,
    msgs: Sequence[Msg],
    verbose: bool = False,
    fee: Optional[FeeSpec] = None
) -> BlockTxBroadcastResult:
    """
    Sign and broadcast a transaction.

    Args:
        terra: LCD client to broadcast through
        sender: Wallet that signs and pays the fee
        msgs: Messages to include, in order
        verbose: Print the tx hash and raw log after broadcasting
        fee: Fee to attach (defaults to DEFAULT_FEE)

    Returns:
        The broadcast result

    Raises:
        ValueError: If msgs is empty
        TransactionError: If the node reports a non-zero result code
    """
    if not msgs:
        raise ValueError("At least one message is required to build a transaction")

    fee = fee or DEFAULT_FEE
    tx = sender.create_and_sign_tx(CreateTxOptions(msgs=list(msgs), fee=fee.to_fee()))
    result = terra.tx.broadcast(tx)
    logger.info(f"Transaction broadcast: {result.txhash}")

    if verbose:
        print_tx_log(result)

    if is_tx_error(result):
        logger.error(f"Transaction {result.txhash} failed with code {result.code} ({result.codespace})")
        raise TransactionError(result.code, result.codespace, result.raw_log, txhash=result.txhash)

    return result


def print_tx_log(result: BlockTxBroadcastResult) -> None:
    """Print the tx hash and the raw log, pretty-printed when it is JSON."""
    print("\nTxHash:", result.txhash)
    try:
        print("Raw log:", json.dumps(json.loads(result.raw_log), indent=2))
    except (TypeError, ValueError):
        print("Failed to parse log! Raw log:", result.raw_log)
