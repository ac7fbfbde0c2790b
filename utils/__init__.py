"""
Utilities Package
Settings, network selection and logging for the deployment scripts
"""

from .settings import DeploySettings
from .network_manager import NetworkManager
from .logging_config import configure_logging

__all__ = [
    'DeploySettings',
    'NetworkManager',
    'configure_logging'
]
