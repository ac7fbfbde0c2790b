"""
Auction Deployment Script
Deploys the Auction contract and prints its address

Run from the project root: python -m scripts.deploy_auction
"""

import sys
from loguru import logger

from blockchain import ContractDeployer, DeployedContract
from utils import DeploySettings, NetworkManager, configure_logging

CONTRACT_NAME = "Auction"


def deploy_auction(deployer: ContractDeployer) -> DeployedContract:
    """Deploy Auction and wait until the creation transaction is mined"""
    auction = deployer.deploy_contract(CONTRACT_NAME)
    auction.wait_for_deployment()
    return auction


def main() -> int:
    try:
        configure_logging()
        settings = DeploySettings.from_env()
        w3 = NetworkManager(settings).get_web3()
        deployer = ContractDeployer.from_settings(w3, settings)

        auction = deploy_auction(deployer)
    except Exception as e:
        logger.exception(f"Deployment failed: {e}")
        return 1

    print(f"{CONTRACT_NAME} contract deployed to {auction.target}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
