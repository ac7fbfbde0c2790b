"""
Blockchain Interaction Package
Handles artifact loading, deployment transactions and confirmation tracking
"""

from .artifacts import ArtifactLoader, ContractArtifact
from .transaction_builder import TransactionBuilder
from .deployer import ContractDeployer, DeployedContract
from .exceptions import (
    DeploymentError,
    ArtifactNotFoundError,
    InvalidArtifactError,
    NetworkConfigError,
    NetworkConnectionError,
    InsufficientFundsError,
    DeploymentTimeoutError,
    DeploymentFailedError,
)

__all__ = [
    'ArtifactLoader',
    'ContractArtifact',
    'TransactionBuilder',
    'ContractDeployer',
    'DeployedContract',
    'DeploymentError',
    'ArtifactNotFoundError',
    'InvalidArtifactError',
    'NetworkConfigError',
    'NetworkConnectionError',
    'InsufficientFundsError',
    'DeploymentTimeoutError',
    'DeploymentFailedError',
]
