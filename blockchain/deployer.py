"""
Contract Deployer
Submits contract-creation transactions and tracks them until confirmed
"""

from typing import Optional
from web3 import Web3
from web3.exceptions import TimeExhausted
from eth_account import Account
from loguru import logger

from .artifacts import ArtifactLoader, ContractArtifact
from .transaction_builder import TransactionBuilder
from .exceptions import (
    DeploymentError,
    DeploymentFailedError,
    DeploymentTimeoutError,
    InsufficientFundsError,
)


class DeployedContract:
    """
    Handle on a submitted deployment

    The address is only known once the creation transaction is confirmed;
    call wait_for_deployment() before reading `target`.
    """

    def __init__(
        self,
        w3: Web3,
        artifact: ContractArtifact,
        tx_hash: bytes,
        timeout: float = 120,
        poll_latency: float = 0.5
    ):
        self.w3 = w3
        self.name = artifact.contract_name
        self.abi = artifact.abi
        self.tx_hash = tx_hash
        self.timeout = timeout
        self.poll_latency = poll_latency

        self.receipt = None
        self.address: Optional[str] = None
        self.contract = None

    @property
    def target(self) -> str:
        """Checksummed address of the deployed contract"""
        if self.address is None:
            raise DeploymentError(
                f"{self.name} deployment {Web3.to_hex(self.tx_hash)} is not confirmed yet"
            )
        return self.address

    def wait_for_deployment(self) -> 'DeployedContract':
        """
        Block until the creation transaction is mined

        Returns:
            self, with address, receipt and contract set
        """
        if self.address is not None:
            return self

        tx_hex = Web3.to_hex(self.tx_hash)
        logger.info("Waiting for confirmation...")

        try:
            receipt = self.w3.eth.wait_for_transaction_receipt(
                self.tx_hash,
                timeout=self.timeout,
                poll_latency=self.poll_latency
            )
        except TimeExhausted as e:
            raise DeploymentTimeoutError(
                f"{self.name} deployment {tx_hex} not mined within {self.timeout}s"
            ) from e

        if receipt['status'] != 1:
            raise DeploymentFailedError(f"{self.name} deployment {tx_hex} reverted")

        contract_address = receipt.get('contractAddress')
        if not contract_address:
            raise DeploymentFailedError(
                f"Receipt for {tx_hex} has no contract address"
            )

        address = Web3.to_checksum_address(contract_address)

        if not self.w3.eth.get_code(address):
            raise DeploymentFailedError(f"No code at {address} after deployment {tx_hex}")

        self.receipt = receipt
        self.address = address
        self.contract = self.w3.eth.contract(address=address, abi=self.abi)

        logger.success(f"{self.name} deployed at {address}")
        logger.success(f"Transaction hash: {tx_hex}")
        logger.success(f"Gas used: {receipt['gasUsed']}")

        return self


class ContractDeployer:
    """
    Deploys compiled contracts from a single deployer account

    With a local account (private key) transactions are signed here and sent
    raw; otherwise the node's first unlocked account sends them.
    """

    def __init__(
        self,
        w3: Web3,
        loader: ArtifactLoader,
        account=None,
        builder: Optional[TransactionBuilder] = None,
        confirmation_timeout: float = 120,
        poll_latency: float = 0.5
    ):
        """
        Initialize Contract Deployer

        Args:
            w3: Connected Web3 instance
            loader: Artifact loader
            account: eth_account LocalAccount (None = node account)
            builder: Transaction builder (default settings when None)
            confirmation_timeout: Seconds to wait for a receipt
            poll_latency: Seconds between receipt polls
        """
        self.w3 = w3
        self.loader = loader
        self.account = account
        self.builder = builder or TransactionBuilder(w3)
        self.confirmation_timeout = confirmation_timeout
        self.poll_latency = poll_latency

    @classmethod
    def from_settings(cls, w3: Web3, settings) -> 'ContractDeployer':
        """
        Build a deployer from DeploySettings

        Args:
            w3: Connected Web3 instance
            settings: DeploySettings

        Returns:
            ContractDeployer
        """
        account = Account.from_key(settings.private_key) if settings.private_key else None

        builder = TransactionBuilder(
            w3,
            gas_buffer=settings.gas_buffer,
            max_fee_gwei=settings.max_fee_gwei
        )

        return cls(
            w3,
            ArtifactLoader(settings.artifacts_dir),
            account=account,
            builder=builder,
            confirmation_timeout=settings.confirmation_timeout
        )

    @property
    def deployer_address(self) -> str:
        if self.account is not None:
            return self.account.address

        accounts = self.w3.eth.accounts
        if not accounts:
            raise DeploymentError(
                "No deployer account: set DEPLOYER_PRIVATE_KEY or use a node with unlocked accounts"
            )
        return accounts[0]

    def deploy_contract(self, name: str, *args, value: int = 0) -> DeployedContract:
        """
        Submit the creation transaction for a named contract

        Args:
            name: Bare or fully qualified contract name
            *args: Constructor arguments
            value: Wei sent to a payable constructor

        Returns:
            DeployedContract (pending until wait_for_deployment)
        """
        artifact = self.loader.load(name)
        sender = self.deployer_address

        logger.info(f"Deploying {artifact.contract_name} from: {sender}")

        factory = self.w3.eth.contract(abi=artifact.abi, bytecode=artifact.bytecode)
        constructor = factory.constructor(*args)

        logger.info("Building deployment transaction...")
        tx = self.builder.build_deployment_tx(constructor, sender, value)

        self._check_balance(sender, tx)

        logger.info("Sending deployment transaction...")
        tx_hash = self._send(tx)
        logger.info(f"Transaction sent: {Web3.to_hex(tx_hash)}")

        return DeployedContract(
            self.w3,
            artifact,
            tx_hash,
            timeout=self.confirmation_timeout,
            poll_latency=self.poll_latency
        )

    def _check_balance(self, sender: str, tx):
        balance = self.w3.eth.get_balance(sender)
        cost = self.builder.estimate_cost(tx)

        logger.info(f"Account balance: {Web3.from_wei(balance, 'ether')} ETH")
        logger.info(f"Estimated deployment cost: {Web3.from_wei(cost, 'ether')} ETH")

        if balance < cost:
            raise InsufficientFundsError(
                f"{sender} holds {balance} wei, deployment needs up to {cost} wei"
            )

    def _send(self, tx) -> bytes:
        if self.account is not None:
            logger.info("Signing transaction...")
            signed_tx = self.account.sign_transaction(tx)
            return self.w3.eth.send_raw_transaction(signed_tx.raw_transaction)

        return self.w3.eth.send_transaction(tx)
