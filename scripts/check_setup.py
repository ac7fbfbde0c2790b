"""
Setup Check Script
Verifies settings, artifact, network and deployer funds before deploying
"""

import sys
from web3 import Web3
from loguru import logger

from blockchain import ArtifactLoader, ContractDeployer
from utils import DeploySettings, NetworkManager, configure_logging

CONTRACT_NAME = "Auction"


def check_settings(state: dict) -> bool:
    """Load deployment settings from the environment"""
    logger.info("Checking settings...")

    state['settings'] = DeploySettings.from_env()
    logger.success(f"  ✓ {state['settings']!r}")
    return True


def check_artifact(state: dict) -> bool:
    """Check the compiled artifact is present and deployable"""
    logger.info("Checking contract artifact...")

    settings = state.get('settings')
    if settings is None:
        logger.warning("  Settings unavailable - skipping")
        return False

    artifact = ArtifactLoader(settings.artifacts_dir).load(CONTRACT_NAME)
    logger.success(f"  ✓ {artifact.fully_qualified_name} ({artifact.path})")
    return True


def check_network(state: dict) -> bool:
    """Check the RPC endpoint answers with the expected chain id"""
    logger.info("Checking network connection...")

    settings = state.get('settings')
    if settings is None:
        logger.warning("  Settings unavailable - skipping")
        return False

    w3 = NetworkManager(settings).get_web3()
    state['w3'] = w3

    logger.success(f"  ✓ Chain {w3.eth.chain_id}, block {w3.eth.block_number}")
    return True


def check_deployer_balance(state: dict) -> bool:
    """Check the deployer account exists and holds funds"""
    logger.info("Checking deployer balance...")

    settings = state.get('settings')
    w3 = state.get('w3')
    if settings is None or w3 is None:
        logger.warning("  No network connection - skipping")
        return False

    deployer = ContractDeployer.from_settings(w3, settings)
    address = deployer.deployer_address
    balance = w3.eth.get_balance(address)

    logger.info(f"  Deployer: {address}")
    logger.info(f"  Balance: {Web3.from_wei(balance, 'ether')} ETH")

    if balance == 0:
        logger.error("  ✗ Deployer has no funds")
        return False

    logger.success("  ✓ Deployer funded")
    return True


def main() -> int:
    """Run all setup checks"""
    try:
        configure_logging()
    except ValueError as e:
        logger.error(str(e))
        return 1

    logger.info("=" * 70)
    logger.info(f"{CONTRACT_NAME} Deployment Setup Check")
    logger.info("=" * 70)

    checks = [
        ("Settings", check_settings),
        ("Contract Artifact", check_artifact),
        ("Network Connection", check_network),
        ("Deployer Balance", check_deployer_balance)
    ]

    state = {}
    results = []

    for name, check_func in checks:
        try:
            result = check_func(state)
        except Exception as e:
            logger.error(f"  ✗ {name}: {e}")
            result = False
        results.append((name, result))

    passed = sum(1 for _, result in results if result)

    logger.info("=" * 70)
    for name, result in results:
        status = "✓ PASS" if result else "✗ FAIL"
        logger.info(f"  {status}: {name}")
    logger.info(f"Total: {passed}/{len(results)} checks passed")

    if passed == len(results):
        logger.success("Ready to deploy: python deploy.py")
        return 0

    logger.error("Not ready to deploy - fix issues above")
    return 1


if __name__ == "__main__":
    sys.exit(main())
