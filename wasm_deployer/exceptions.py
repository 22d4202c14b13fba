"""
Exceptions for the wasm deployer.
"""
from typing import Optional


class DeployerError(Exception):
    """Base exception for all deployer errors."""
    pass


class TransactionError(DeployerError):
    """
    Raised when the network accepted a broadcast but the transaction failed.

    Carries the diagnostic fields reported by the node so callers can inspect
    them without parsing the message.
    """

    def __init__(
        self,
        code: Optional[int],
        codespace: Optional[str],
        raw_log: Optional[str],
        txhash: Optional[str] = None
    ):
        self.code = code
        self.codespace = codespace
        self.raw_log = raw_log
        self.txhash = txhash
        super().__init__(
            "Transaction failed!"
            f"\ncode: {code}"
            f"\ncodespace: {codespace}"
            f"\nraw_log: {raw_log}"
        )


class LogParseError(DeployerError, ValueError):
    """Raised when an expected event or attribute is missing from a tx log."""
    pass


class ConfigurationError(DeployerError, ValueError):
    """Raised when deploy configuration is missing or invalid."""
    pass


class NodeConnectionError(DeployerError):
    """Raised when the LCD node cannot be reached or serves another chain."""
    pass
