"""
Deployment Errors
Every failure surfaced by the deployer derives from DeploymentError
"""


class DeploymentError(Exception):
    """Base error for anything that stops a deployment"""


class ArtifactNotFoundError(DeploymentError):
    """No compiled artifact matches the requested contract name"""


class InvalidArtifactError(DeploymentError):
    """Artifact exists but cannot be deployed as-is"""


class NetworkConfigError(DeploymentError):
    """Network is unknown, has no endpoint, or reports the wrong chain id"""


class NetworkConnectionError(DeploymentError):
    """RPC endpoint did not answer"""


class InsufficientFundsError(DeploymentError):
    """Deployer balance does not cover the estimated deployment cost"""


class DeploymentTimeoutError(DeploymentError):
    """Receipt did not arrive within the confirmation timeout"""


class DeploymentFailedError(DeploymentError):
    """Transaction was mined but no contract was created"""
