"""
Singleton pattern for ContractGateway.

Provides global access to a single ContractGateway instance.
"""

from app.config.settings import Settings

from .contract_gateway import ContractGateway


_contract_gateway: ContractGateway | None = None


def get_contract_gateway() -> ContractGateway:
    """
    Get the singleton contract gateway instance.

    Raises:
        RuntimeError: If gateway not initialized
    """
    if _contract_gateway is None:
        raise RuntimeError("ContractGateway not initialized")
    return _contract_gateway


def init_contract_gateway(settings: Settings) -> ContractGateway:
    """
    Initialize the singleton contract gateway instance.

    Args:
        settings: Application settings
    """
    global _contract_gateway
    _contract_gateway = ContractGateway(settings)
    return _contract_gateway
