"""
ADW Token SDK - Configuration

Deployment parameters for the ledger, resolved lowest to highest from:
DEFAULTS, an optional JSON config file, a .env file, environment
variables, then explicit overrides (CLI arguments).
"""

import json
import logging
import os
from typing import Any, Dict, Optional

from .token_types import TokenConfig

log = logging.getLogger(__name__)

# ============ CONFIGURATION ============

DEFAULTS: Dict[str, Any] = {
    "name": "AdwaitToken",
    "symbol": "ADW",
    "decimals": 18,
    "initial_supply": 1_000_000,    # whole tokens, scaled by decimals

    # First account of the standard local dev mnemonic
    "deployer": "0xf39Fd6e51aad88F6F4ce6aB8827279cffFb92266",

    "host": "127.0.0.1",
    "port": 8545,
}

ENV_VARS = {
    "name": "TOKEN_NAME",
    "symbol": "TOKEN_SYMBOL",
    "decimals": "TOKEN_DECIMALS",
    "initial_supply": "TOKEN_INITIAL_SUPPLY",
    "deployer": "TOKEN_DEPLOYER",
    "host": "TOKEN_HOST",
    "port": "TOKEN_PORT",
}

INT_FIELDS = ("decimals", "initial_supply", "port")


def load_env_file(path: str) -> int:
    """
    Load KEY=VALUE lines into os.environ without overriding existing vars.

    Returns:
        Number of variables set
    """
    if not os.path.exists(path):
        return 0
    count = 0
    with open(path) as f:
        for line in f:
            line = line.strip()
            if line and not line.startswith("#") and "=" in line:
                key, value = line.split("=", 1)
                key = key.strip()
                if key not in os.environ:
                    os.environ[key] = value.strip().strip('"').strip("'")
                    count += 1
    log.debug(f"Loaded {count} variables from {path}")
    return count


def load_config_file(path: str) -> Dict[str, Any]:
    """Read a JSON object of config keys."""
    with open(path, "r") as f:
        data = json.load(f)
    if not isinstance(data, dict):
        raise ValueError(f"Config file {path} must contain a JSON object")
    unknown = set(data) - set(DEFAULTS)
    if unknown:
        raise ValueError(f"Unknown config keys in {path}: {sorted(unknown)}")
    return data


def _coerce(key: str, value: Any) -> Any:
    if key in INT_FIELDS and not isinstance(value, int):
        try:
            return int(str(value).replace("_", ""))
        except ValueError:
            raise ValueError(f"{key} must be an integer, got {value!r}")
    return value


def load_config(config_path: Optional[str] = None,
                env_file: Optional[str] = ".env",
                overrides: Optional[Dict[str, Any]] = None) -> TokenConfig:
    """
    Resolve the deployment config.

    Args:
        config_path: Optional JSON config file
        env_file: .env file to load first (None to skip)
        overrides: Highest-priority values; None entries are ignored

    Returns:
        Validated TokenConfig
    """
    values = dict(DEFAULTS)

    if config_path:
        values.update(load_config_file(config_path))
        log.info(f"Loaded config from {config_path}")

    if env_file:
        load_env_file(env_file)

    for key, var in ENV_VARS.items():
        if var in os.environ:
            values[key] = os.environ[var]
            log.debug(f"{key} taken from ${var}")

    for key, value in (overrides or {}).items():
        if value is None:
            continue
        if key not in DEFAULTS:
            raise ValueError(f"Unknown config key: {key}")
        values[key] = value

    values = {key: _coerce(key, value) for key, value in values.items()}
    config = TokenConfig(**values)
    log.info(f"Config: {config.name} ({config.symbol}), supply {config.initial_supply}, "
             f"deployer {config.deployer}")
    return config
