"""
LP share balance tracking for AMM pools.

LP shares are scoped per pool_id and are tracked separately from token balances.
The sum of a pool's entries equals that pool's `lp_supply`.
"""

from __future__ import annotations

from typing import Dict, Tuple

from ..core.curve.errors import InsufficientBalanceError
from .balances import Amount, PubKey

# Type alias
PoolId = str


class LPTable:
    """
    LP balance table mapping (owner, pool_id) -> lp_amount.

    Notes:
    - LP balances are always non-negative.
    - Zero balances are omitted to keep the table sparse.
    """

    def __init__(self) -> None:
        self._balances: Dict[Tuple[PubKey, PoolId], Amount] = {}

    def get(self, owner: PubKey, pool_id: PoolId) -> Amount:
        """Get LP balance for (owner, pool_id). Returns 0 if not found."""
        return self._balances.get((owner, pool_id), 0)

    def mint(self, owner: PubKey, pool_id: PoolId, amount: Amount) -> None:
        if amount < 0:
            raise ValueError(f"LP mint amount must be non-negative: {amount}")
        new_balance = self.get(owner, pool_id) + amount
        if new_balance:
            self._balances[(owner, pool_id)] = new_balance

    def burn(self, owner: PubKey, pool_id: PoolId, amount: Amount) -> None:
        """Burn LP shares held by ``owner``; fails if they hold fewer."""
        if amount < 0:
            raise ValueError(f"LP burn amount must be non-negative: {amount}")
        current = self.get(owner, pool_id)
        if amount > current:
            raise InsufficientBalanceError(
                f"Insufficient LP balance for {owner}: {current} < {amount}"
            )
        if current == amount:
            self._balances.pop((owner, pool_id), None)
        else:
            self._balances[(owner, pool_id)] = current - amount

    def pool_total(self, pool_id: PoolId) -> Amount:
        return sum(amount for (_, pid), amount in self._balances.items() if pid == pool_id)

    def get_all_balances(self) -> Dict[Tuple[PubKey, PoolId], Amount]:
        """Return all LP balances."""
        return dict(self._balances)

    def __repr__(self) -> str:
        return f"LPTable({len(self._balances)} entries)"
