"""
Data models for the wasm deployer.
"""
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field
from terra_sdk.core import Coins
from terra_sdk.core.fee import Fee


class FeeSpec(BaseModel):
    """Fixed fee attached to every transaction"""
    model_config = ConfigDict(frozen=True)

    gas_limit: int = Field(2_000_000, gt=0)
    amount: int = Field(1_000_000, ge=0)
    denom: str = "uusd"

    def to_fee(self) -> Fee:
        """Convert to the SDK fee object used when signing."""
        return Fee(self.gas_limit, Coins({self.denom: self.amount}))


DEFAULT_FEE = FeeSpec()


class InstantiateMsg(BaseModel):
    """Instantiate message accepted by the users contract"""
    owner: str
    users: List[str] = Field(default_factory=list)


class DeployResult(BaseModel):
    """Identifiers produced by a full upload + instantiate run"""
    model_config = ConfigDict(frozen=True)

    wallet_address: str
    code_id: int = Field(..., gt=0)
    contract_address: str = Field(..., min_length=1)
    store_tx_hash: Optional[str] = None
    instantiate_tx_hash: Optional[str] = None
