"""
Network Manager
Resolves the target network and opens a checked Web3 connection
"""

import os
import json
from importlib import resources
from pathlib import Path
from typing import Dict, Optional
from web3 import Web3
from loguru import logger

from blockchain.exceptions import NetworkConfigError, NetworkConnectionError

from .settings import redact_url

DEFAULT_CONFIG_NAME = 'network_config.json'


class NetworkManager:
    """
    Network selection driven by a JSON network table
    (utils/network_config.json unless another file is given)

    Endpoint resolution order:
    1. RPC_URL override from settings
    2. Network's http_url
    3. Environment variable named by the network's http_url_env
    """

    def __init__(self, settings, config_path=None):
        """
        Initialize Network Manager

        Args:
            settings: DeploySettings
            config_path: Network table (default: the packaged network_config.json)
        """
        self.settings = settings
        if config_path:
            self.config_path = Path(config_path)
        else:
            self.config_path = resources.files(__package__).joinpath(DEFAULT_CONFIG_NAME)

        self.config = json.loads(self.config_path.read_text())

        self.network_name = settings.network or self.config.get('default_network', 'localhost')
        self.network = self._get_network(self.network_name)

        logger.info(f"Network: {self.network.get('name', self.network_name)}")

    def _get_network(self, name: str) -> Dict:
        networks = self.config.get('networks', {})

        if name not in networks:
            known = ', '.join(sorted(networks)) or 'none'
            raise NetworkConfigError(f"Unknown network {name!r} (known: {known})")

        return networks[name]

    def get_rpc_url(self) -> str:
        """Endpoint for the selected network"""
        if self.settings.rpc_url:
            return self.settings.rpc_url

        if self.network.get('http_url'):
            return self.network['http_url']

        env_name = self.network.get('http_url_env')
        url = os.getenv(env_name) if env_name else None

        if not url:
            hint = f" (set {env_name} or RPC_URL)" if env_name else " (set RPC_URL)"
            raise NetworkConfigError(f"No RPC endpoint for network {self.network_name!r}{hint}")

        return url

    @property
    def expected_chain_id(self) -> Optional[int]:
        return self.network.get('chain_id')

    def get_web3(self) -> Web3:
        """
        Connect to the selected network

        Returns:
            Web3 instance that answered and reports the expected chain id
        """
        url = self.get_rpc_url()
        w3 = Web3(Web3.HTTPProvider(url))

        if not w3.is_connected():
            raise NetworkConnectionError(
                f"Failed to connect to {self.network_name} at {redact_url(url)}"
            )

        self.check_chain_id(w3)

        logger.success(f"Connected to {self.network.get('name', self.network_name)}")
        return w3

    def check_chain_id(self, w3: Web3):
        """
        Compare the node's chain id with the configured one

        Args:
            w3: Connected Web3 instance
        """
        expected = self.expected_chain_id
        if expected is None:
            return

        chain_id = w3.eth.chain_id
        if chain_id != expected:
            raise NetworkConfigError(
                f"Network {self.network_name!r} expects chain id {expected}, "
                f"node reports {chain_id}"
            )
