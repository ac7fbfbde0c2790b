"""
Deployment Settings
Values resolved from the environment (.env is loaded on import)
"""

import os
import math
from typing import Optional
from urllib.parse import urlsplit
from dotenv import load_dotenv

load_dotenv()


def _get_float(name: str, default: Optional[float]) -> Optional[float]:
    raw = os.getenv(name)
    if raw is None or raw.strip() == '':
        return default
    try:
        value = float(raw)
    except ValueError:
        raise ValueError(f"{name} must be a number, got {raw!r}") from None
    if not math.isfinite(value):
        raise ValueError(f"{name} must be a finite number, got {raw!r}")
    return value


def redact_url(url: Optional[str]) -> Optional[str]:
    """
    Strip everything after the host from an RPC URL

    Hosted endpoints carry API keys in the path, query or userinfo.
    """
    if not url:
        return url
    parts = urlsplit(url)
    if not parts.hostname:
        return '<redacted>'
    host = parts.hostname if parts.port is None else f"{parts.hostname}:{parts.port}"
    hidden = parts.path not in ('', '/') or parts.query or parts.username
    return f"{parts.scheme}://{host}" + ('/***' if hidden else '')


class DeploySettings:
    """Everything the deployment script reads from its environment"""

    def __init__(
        self,
        network: Optional[str] = None,
        rpc_url: Optional[str] = None,
        private_key: Optional[str] = None,
        artifacts_dir: str = 'artifacts',
        confirmation_timeout: float = 120,
        gas_buffer: float = 1.2,
        max_fee_gwei: Optional[float] = None
    ):
        """
        Args:
            network: Network name from the network table (None = default)
            rpc_url: Explicit endpoint, overrides the network's URL
            private_key: Deployer key; None deploys from the node's first account
            artifacts_dir: Hardhat artifacts root
            confirmation_timeout: Seconds to wait for the deployment receipt
            gas_buffer: Multiplier on the gas estimate
            max_fee_gwei: Fee cap in gwei (None = uncapped)
        """
        self.network = network
        self.rpc_url = rpc_url
        self.private_key = private_key
        self.artifacts_dir = artifacts_dir
        self.confirmation_timeout = confirmation_timeout
        self.gas_buffer = gas_buffer
        self.max_fee_gwei = max_fee_gwei

    @classmethod
    def from_env(cls) -> 'DeploySettings':
        timeout = _get_float('DEPLOY_TIMEOUT', 120)
        gas_buffer = _get_float('GAS_BUFFER', 1.2)
        max_fee_gwei = _get_float('MAX_FEE_GWEI', None)

        if timeout <= 0:
            raise ValueError(f"DEPLOY_TIMEOUT must be positive, got {timeout}")
        if gas_buffer < 1:
            raise ValueError(f"GAS_BUFFER must be at least 1, got {gas_buffer}")
        if max_fee_gwei is not None and max_fee_gwei <= 0:
            raise ValueError(f"MAX_FEE_GWEI must be positive, got {max_fee_gwei}")

        return cls(
            network=os.getenv('DEPLOY_NETWORK') or None,
            rpc_url=os.getenv('RPC_URL') or None,
            private_key=os.getenv('DEPLOYER_PRIVATE_KEY') or None,
            artifacts_dir=os.getenv('ARTIFACTS_DIR') or 'artifacts',
            confirmation_timeout=timeout,
            gas_buffer=gas_buffer,
            max_fee_gwei=max_fee_gwei
        )

    def __repr__(self):
        # never print the key or the endpoint's API key
        key = '<set>' if self.private_key else None
        return (
            f"DeploySettings(network={self.network!r}, rpc_url={redact_url(self.rpc_url)!r}, "
            f"private_key={key}, artifacts_dir={self.artifacts_dir!r})"
        )
