"""
Core blockchain constants and configurations.

This module contains:
- USDT Rain contract ABI (functions used by the backend)
- Gas settings
"""

from app.config.constants import USDT_DECIMALS


def _fn(
    name: str,
    inputs: list[str] | None = None,
    outputs: list[str] | None = None,
    view: bool = True,
) -> dict:
    """Build a JSON ABI function entry with unnamed parameters."""
    return {
        "type": "function",
        "name": name,
        "inputs": [{"name": "", "type": t} for t in inputs or []],
        "outputs": [{"name": "", "type": t} for t in outputs or []],
        "stateMutability": "view" if view else "nonpayable",
    }


# getUserInfo(address) output layout
USER_INFO_OUTPUTS = [
    "uint256",  # userId
    "uint256",  # sponsorId
    "uint256",  # directReferrals
    "uint256",  # totalEarned
    "uint256",  # totalWithdrawn
    "bool",     # isActive
    "uint256",  # activationTimestamp
    "uint256",  # nonWorkingClaimed
    "uint256",  # achieverLevel
    "string",   # userName
    "string",   # contactNumber
]

USDT_RAIN_ABI = [
    _fn("addEligibleUser", ["address"], view=False),
    _fn("removeEligibleUser", ["address"], view=False),
    _fn("getUserInfo", ["address"], USER_INFO_OUTPUTS),
    _fn("getEligibleUsers", outputs=["address[]"]),
    _fn("eligibleUserCount", outputs=["uint256"]),
    _fn("getUserAddressById", ["uint256"], ["address"]),
    _fn("totalUsers", outputs=["uint256"]),
    _fn("manager", outputs=["address"]),
    # totalAllocated, totalClaimed, totalPending, eligibleCount
    _fn("getGlobalPoolStats", outputs=["uint256"] * 4),
    _fn("globalPoolBalance", outputs=["uint256"]),
    # totalUsers, totalActivatedUsers, globalPoolBalance, totalDistributed
    _fn("getContractStats", outputs=["uint256"] * 4),
    _fn("distributeGlobalPoolVirtual", view=False),
]

__all__ = [
    "USDT_RAIN_ABI",
    "USER_INFO_OUTPUTS",
    "USDT_DECIMALS",
]
