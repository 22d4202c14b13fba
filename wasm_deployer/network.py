"""
LCD client and wallet construction, plus a node preflight check.
"""
import logging
from typing import Optional

import requests
from requests.adapters import HTTPAdapter
from terra_sdk.client.lcd import LCDClient, Wallet
from terra_sdk.key.mnemonic import MnemonicKey
from urllib3.util.retry import Retry

from .exceptions import NodeConnectionError

logger = logging.getLogger(__name__)

NODE_INFO_PATH = "/cosmos/base/tendermint/v1beta1/node_info"


def create_client(lcd_url: str, chain_id: str) -> LCDClient:
    return LCDClient(url=lcd_url, chain_id=chain_id)


def create_wallet(terra: LCDClient, mnemonic: str) -> Wallet:
    """Derive the signing wallet for a mnemonic phrase."""
    return terra.wallet(MnemonicKey(mnemonic=mnemonic))


def create_session(retry_count: int = 3) -> requests.Session:
    """
    Create an HTTP session that retries idempotent reads.

    Args:
        retry_count: Number of retries for connection errors and 5xx responses

    Returns:
        Configured requests session
    """
    session = requests.Session()
    retries = Retry(
        total=retry_count,
        backoff_factor=0.5,
        status_forcelist=[500, 502, 503, 504],
        allowed_methods=["GET"],
        raise_on_status=False,
        connect=retry_count,
        read=retry_count,
    )
    session.mount("http://", HTTPAdapter(max_retries=retries))
    session.mount("https://", HTTPAdapter(max_retries=retries))
    return session


def check_node(
    lcd_url: str,
    chain_id: str,
    timeout: int = 30,
    retry_count: int = 3,
    session: Optional[requests.Session] = None
) -> str:
    """
    Verify the LCD node is reachable and serves the expected chain.

    Args:
        lcd_url: Base URL of the LCD node
        chain_id: Chain ID the node must report
        timeout: Request timeout in seconds
        retry_count: Number of HTTP retries
        session: Optional pre-built session

    Returns:
        The chain ID reported by the node

    Raises:
        NodeConnectionError: If the node cannot be queried or reports another chain
    """
    session = session or create_session(retry_count)
    url = f"{lcd_url.rstrip('/')}{NODE_INFO_PATH}"
    try:
        response = session.get(url, timeout=timeout)
        response.raise_for_status()
        network = response.json()["default_node_info"]["network"]
    except requests.RequestException as e:
        logger.error(f"Node info request failed: {e}")
        raise NodeConnectionError(f"Could not reach LCD node at {lcd_url}: {e}") from e
    except (ValueError, KeyError, TypeError) as e:
        raise NodeConnectionError(f"Unexpected node info response from {lcd_url}: {e}") from e

    if network != chain_id:
        raise NodeConnectionError(
            f"Chain ID mismatch: configured {chain_id}, node at {lcd_url} reports {network}"
        )
    logger.debug(f"Node at {lcd_url} serves {network}")
    return network
