"""
Deployer configuration

Reads config.json (privateKey, supportedCoins) and lets environment
variables, optionally loaded from a .env file, override any value.
"""

import os
import json
import logging
from dataclasses import dataclass, field
from typing import List, Optional
from dotenv import load_dotenv

from .errors import ConfigurationError

logger = logging.getLogger(__name__)

DEFAULT_RPC_URL = "https://fullnode.mainnet.sui.io:443"
DEFAULT_PACKAGE_PATH = "sources/event_registry.move"
DEFAULT_GAS_BUDGET = 500_000_000  # MIST


@dataclass(frozen=True)
class DeployConfig:
    """Everything the entry point needs to run a deployment"""
    private_key: str
    supported_coins: List[str] = field(default_factory=list)
    rpc_url: str = DEFAULT_RPC_URL
    package_path: str = DEFAULT_PACKAGE_PATH
    sui_cli: str = "sui"
    gas_budget: int = DEFAULT_GAS_BUDGET


def _read_config_file(path: str) -> dict:
    if not os.path.exists(path):
        logger.debug(f"No config file at {path}, using environment only")
        return {}
    try:
        with open(path, 'r') as f:
            data = json.load(f)
    except (OSError, json.JSONDecodeError) as e:
        raise ConfigurationError(f"Could not read config file {path}: {e}") from e
    if not isinstance(data, dict):
        raise ConfigurationError(f"Config file {path} must contain a JSON object")
    return data


def load_config(path: Optional[str] = None) -> DeployConfig:
    """
    Load deployer configuration

    Args:
        path: Path to the JSON config file (default: $CONFIG_PATH or config.json)

    Returns:
        DeployConfig with environment overrides applied
    """
    load_dotenv()
    path = path or os.getenv("CONFIG_PATH", "config.json")
    data = _read_config_file(path)

    private_key = os.getenv("PRIVATE_KEY") or data.get("privateKey")
    if not private_key:
        raise ConfigurationError("privateKey not found in config file or PRIVATE_KEY environment variable")

    coins_env = os.getenv("SUPPORTED_COINS")
    if coins_env is not None:
        supported_coins = [c.strip() for c in coins_env.split(",") if c.strip()]
    else:
        supported_coins = data.get("supportedCoins", [])
    if not isinstance(supported_coins, list) or not all(isinstance(c, str) for c in supported_coins):
        raise ConfigurationError("supportedCoins must be a list of coin type strings")

    gas_budget_raw = os.getenv("GAS_BUDGET", str(DEFAULT_GAS_BUDGET))
    try:
        gas_budget = int(gas_budget_raw)
    except ValueError as e:
        raise ConfigurationError(f"GAS_BUDGET must be an integer, got {gas_budget_raw!r}") from e
    if gas_budget <= 0:
        raise ConfigurationError("GAS_BUDGET must be positive")

    return DeployConfig(
        private_key=private_key,
        supported_coins=supported_coins,
        rpc_url=os.getenv("SUI_RPC_URL", DEFAULT_RPC_URL),
        package_path=os.getenv("PACKAGE_PATH", DEFAULT_PACKAGE_PATH),
        sui_cli=os.getenv("SUI_CLI_PATH", "sui"),
        gas_budget=gas_budget,
    )
