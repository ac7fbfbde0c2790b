"""
Transaction Builder
Constructs contract-creation transactions
"""

from typing import Dict, Optional
from web3 import Web3
from loguru import logger


class TransactionBuilder:
    """
    Builds deployment transactions: buffered gas limit, pending nonce,
    fee fields from web3 defaults (optionally capped)
    """

    def __init__(
        self,
        w3: Web3,
        gas_buffer: float = 1.2,
        fallback_gas_limit: int = 3_000_000,
        max_fee_gwei: Optional[float] = None
    ):
        """
        Initialize Transaction Builder

        Args:
            w3: Web3 instance
            gas_buffer: Multiplier applied to the node's gas estimate
            fallback_gas_limit: Gas limit used when estimation fails
            max_fee_gwei: Upper bound for gasPrice / maxFeePerGas (None = no cap)
        """
        self.w3 = w3
        self.gas_buffer = gas_buffer
        self.fallback_gas_limit = fallback_gas_limit
        self.max_fee_gwei = max_fee_gwei

    def estimate_gas(self, constructor, sender: str, value: int = 0) -> int:
        """
        Estimate gas for a constructor call, with buffer

        Args:
            constructor: web3 ContractConstructor
            sender: Deployer address
            value: Wei sent to a payable constructor

        Returns:
            Gas limit
        """
        try:
            gas_estimate = constructor.estimate_gas({'from': sender, 'value': value})
            gas_limit = int(gas_estimate * self.gas_buffer)
        except Exception as e:
            logger.warning(f"Gas estimation failed: {e}, using default")
            gas_limit = self.fallback_gas_limit

        logger.info(f"Gas limit: {gas_limit}")
        return gas_limit

    def build_deployment_tx(self, constructor, sender: str, value: int = 0) -> Dict:
        """
        Build the contract-creation transaction

        Args:
            constructor: web3 ContractConstructor
            sender: Deployer address
            value: Wei sent to a payable constructor

        Returns:
            Transaction dict ready to sign or send
        """
        params = {
            'from': sender,
            'nonce': self.w3.eth.get_transaction_count(sender, 'pending'),
            'gas': self.estimate_gas(constructor, sender, value),
        }
        if value:
            params['value'] = value

        tx = constructor.build_transaction(params)
        return self._apply_fee_cap(tx)

    def _apply_fee_cap(self, tx: Dict) -> Dict:
        """Clamp fee fields to max_fee_gwei"""
        if self.max_fee_gwei is None:
            return tx

        cap_wei = int(Web3.to_wei(self.max_fee_gwei, 'gwei'))

        for field in ('gasPrice', 'maxFeePerGas', 'maxPriorityFeePerGas'):
            if field in tx and tx[field] > cap_wei:
                logger.warning(
                    f"{field} {Web3.from_wei(tx[field], 'gwei')} gwei "
                    f"capped at {self.max_fee_gwei} gwei"
                )
                tx[field] = cap_wei

        return tx

    @staticmethod
    def estimate_cost(tx: Dict) -> int:
        """
        Worst-case cost of a transaction in wei

        Args:
            tx: Built transaction

        Returns:
            gas * (maxFeePerGas or gasPrice) + value
        """
        fee = tx.get('maxFeePerGas', tx.get('gasPrice', 0))
        return tx['gas'] * fee + tx.get('value', 0)
