"""
Network and deploy configuration.
"""
import importlib.resources
import json
import logging
import os
import urllib.parse
from pathlib import Path
from typing import Any, Dict, Mapping, Optional

from pydantic import BaseModel, Field, SecretStr, ValidationError, field_validator

from .exceptions import ConfigurationError
from .models import DEFAULT_FEE, FeeSpec

logger = logging.getLogger(__name__)

DEFAULT_NETWORK = "localterra"
DEFAULT_WASM_PATH = Path("artifacts") / "interview_challenge.wasm"
DEFAULT_LABEL = "instantiate_contract"


class NetworkConfig:
    """Lookup of the networks bundled in networks.json"""

    _networks_cache: Optional[Dict[str, Dict[str, Any]]] = None

    @classmethod
    def load_networks(cls) -> Dict[str, Dict[str, Any]]:
        """
        Load network definitions, caching them after the first read.

        Returns:
            Mapping of network name to its chainId / lcd / denom entries
        """
        if cls._networks_cache is None:
            text = importlib.resources.files("wasm_deployer").joinpath("networks.json").read_text()
            cls._networks_cache = json.loads(text)
        return cls._networks_cache

    @classmethod
    def get_network(cls, network: str) -> Dict[str, Any]:
        networks = cls.load_networks()
        if network not in networks:
            available = ", ".join(sorted(networks))
            raise ConfigurationError(f"Unknown network '{network}'. Available networks: {available}")
        return networks[network]

    @classmethod
    def get_lcd_url(cls, network: str, override: Optional[str] = None) -> str:
        """
        Resolve the LCD URL for a network.

        Precedence is the explicit override, then the ``<NETWORK>_LCD_URL``
        environment variable, then the bundled value.
        """
        if override:
            return override
        env_var = f"{network.upper().replace('-', '_')}_LCD_URL"
        env_url = os.environ.get(env_var)
        if env_url:
            logger.debug(f"Using LCD URL from {env_var}")
            return env_url
        return cls.get_network(network)["lcd"]

    @classmethod
    def get_chain_id(cls, network: str) -> str:
        return cls.get_network(network)["chainId"]

    @classmethod
    def get_fee_denom(cls, network: str) -> str:
        return cls.get_network(network).get("denom", DEFAULT_FEE.denom)


class DeployConfig(BaseModel):
    """Everything a deploy run needs, passed explicitly into the pipeline"""

    lcd_url: str
    chain_id: str = Field(..., min_length=1)
    mnemonic: SecretStr
    wasm_path: Path = DEFAULT_WASM_PATH
    label: str = DEFAULT_LABEL
    fee: FeeSpec = DEFAULT_FEE
    verbose: bool = False
    timeout: int = Field(30, gt=0)
    retry_count: int = Field(3, ge=0)

    @field_validator("lcd_url")
    @classmethod
    def _check_lcd_url(cls, value: str) -> str:
        parsed = urllib.parse.urlparse(value)
        host = parsed.hostname or ""
        is_local = host in ("localhost", "127.0.0.1")
        if parsed.scheme not in ("http", "https"):
            raise ValueError(f"lcd_url must be an http(s) URL (got: {value!r})")
        if parsed.scheme != "https" and not is_local:
            raise ValueError(f"lcd_url must use https:// for security (got: {parsed.scheme}://)")
        return value.rstrip("/")

    @field_validator("mnemonic")
    @classmethod
    def _check_mnemonic(cls, value: SecretStr) -> SecretStr:
        words = value.get_secret_value().split()
        if not words:
            raise ValueError("mnemonic must not be empty")
        return SecretStr(" ".join(words))

    @classmethod
    def from_network(cls, network: str, mnemonic: str, **overrides: Any) -> "DeployConfig":
        """
        Build a config from a bundled network definition.

        Args:
            network: Network name from networks.json
            mnemonic: Wallet mnemonic phrase
            **overrides: Any DeployConfig field, e.g. ``lcd_url`` or ``wasm_path``

        Returns:
            Validated DeployConfig

        Raises:
            ConfigurationError: If the network is unknown or a field is invalid
        """
        values: Dict[str, Any] = {
            "lcd_url": NetworkConfig.get_lcd_url(network, overrides.pop("lcd_url", None)),
            "chain_id": overrides.pop("chain_id", None) or NetworkConfig.get_chain_id(network),
            "mnemonic": mnemonic,
            "fee": overrides.pop("fee", None) or FeeSpec(denom=NetworkConfig.get_fee_denom(network)),
        }
        values.update({key: value for key, value in overrides.items() if value is not None})
        return cls._build(values)

    @classmethod
    def from_env(
        cls,
        env: Optional[Mapping[str, str]] = None,
        network: Optional[str] = None,
        **overrides: Any
    ) -> "DeployConfig":
        """
        Build a config from TERRA_* environment variables.

        ``TERRA_MNEMONIC`` is required. ``TERRA_NETWORK`` picks the bundled
        defaults which ``TERRA_LCD_URL``, ``TERRA_CHAIN_ID`` and
        ``TERRA_WASM_PATH`` override. Non-None keyword overrides (as given
        on the command line) take precedence over the environment.
        """
        env = os.environ if env is None else env
        mnemonic = env.get("TERRA_MNEMONIC")
        if not mnemonic:
            raise ConfigurationError("TERRA_MNEMONIC environment variable is required")
        values: Dict[str, Any] = {
            "lcd_url": env.get("TERRA_LCD_URL"),
            "chain_id": env.get("TERRA_CHAIN_ID"),
            "wasm_path": env.get("TERRA_WASM_PATH"),
        }
        values.update({key: value for key, value in overrides.items() if value is not None})
        return cls.from_network(network or env.get("TERRA_NETWORK", DEFAULT_NETWORK), mnemonic, **values)

    @classmethod
    def _build(cls, values: Dict[str, Any]) -> "DeployConfig":
        try:
            return cls(**values)
        except ValidationError as e:
            raise ConfigurationError(f"Invalid deploy configuration: {e}") from e
