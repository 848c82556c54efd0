"""
Gas operations for manager transactions.

This module handles:
- Gas limit estimation with a percentage buffer
- Gas price lookup
"""

from typing import Any

from web3 import Web3


def apply_gas_buffer(gas_estimate: int, buffer_percent: int) -> int:
    """
    Scale an estimate by ``buffer_percent`` percent using integer math.

    Examples:
        >>> apply_gas_buffer(100000, 120)
        120000
        >>> apply_gas_buffer(51234, 130)
        66604
    """
    return gas_estimate * buffer_percent // 100


class GasManager:
    """
    Manages gas-related operations for blockchain transactions.
    """

    def estimate_gas_limit(
        self,
        function_call: Any,
        from_address: str,
        buffer_percent: int,
    ) -> int:
        """
        Estimate gas limit for a contract write.

        Estimation failures (reverts, insufficient funds, RPC errors) are
        propagated: a transaction that cannot be estimated would fail.

        Args:
            function_call: Bound contract function
            from_address: Sender address
            buffer_percent: Percentage applied to the estimate (e.g. 120)

        Returns:
            Gas limit with safety buffer
        """
        gas_est = function_call.estimate_gas({"from": from_address})
        return apply_gas_buffer(int(gas_est), buffer_percent)

    def get_gas_price(self, w3: Web3) -> int:
        """
        Current gas price in wei.

        Args:
            w3: Web3 instance
        """
        return int(w3.eth.gas_price)
