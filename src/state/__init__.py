"""
State management for constant-product pools
"""

from .balances import BalanceTable
from .pools import PoolConfig, PoolState, compute_pool_id, compute_vault_authority
from .lp import LPTable

__all__ = [
    "BalanceTable",
    "PoolConfig",
    "PoolState",
    "compute_pool_id",
    "compute_vault_authority",
    "LPTable",
]
