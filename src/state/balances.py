"""
Token account balances for the in-memory pool host.

Implements BalanceTable[Owner, Mint] -> Amount. Pool vaults are ordinary
entries owned by the pool's vault authority key (see `src/state/pools.py`).
"""

from typing import Dict, Tuple

from ..core.curve.errors import InsufficientBalanceError


# Type aliases
PubKey = str  # account owner key (opaque string)
MintId = str  # token mint identifier (opaque string)
Amount = int  # Non-negative integer in the mint's smallest unit


class BalanceTable:
    """
    Balance table mapping (owner, mint) -> amount.

    Zero balances are omitted to keep the table sparse. Callers that need a
    deterministic order sort keys themselves.
    """

    def __init__(self):
        self._balances: Dict[Tuple[PubKey, MintId], Amount] = {}

    def get(self, owner: PubKey, mint: MintId) -> Amount:
        """Get balance for (owner, mint). Returns 0 if not found."""
        return self._balances.get((owner, mint), 0)

    def set(self, owner: PubKey, mint: MintId, amount: Amount) -> None:
        """
        Set balance for (owner, mint).

        Raises:
            ValueError: If amount is negative
        """
        if amount < 0:
            raise ValueError(f"Balance cannot be negative: {amount}")
        if amount == 0:
            self._balances.pop((owner, mint), None)
        else:
            self._balances[(owner, mint)] = amount

    def credit(self, owner: PubKey, mint: MintId, amount: Amount) -> None:
        if amount < 0:
            raise ValueError(f"Credit must be non-negative: {amount}")
        self.set(owner, mint, self.get(owner, mint) + amount)

    def debit(self, owner: PubKey, mint: MintId, amount: Amount) -> None:
        """
        Remove ``amount`` from (owner, mint).

        Raises:
            InsufficientBalanceError: If the account holds less than ``amount``
        """
        if amount < 0:
            raise ValueError(f"Debit must be non-negative: {amount}")
        current = self.get(owner, mint)
        if amount > current:
            raise InsufficientBalanceError(
                f"Insufficient balance for {owner} in {mint}: {current} < {amount}"
            )
        self.set(owner, mint, current - amount)

    def transfer(self, mint: MintId, source: PubKey, destination: PubKey, amount: Amount) -> None:
        """Move ``amount`` of ``mint`` from ``source`` to ``destination``."""
        self.debit(source, mint, amount)
        self.credit(destination, mint, amount)

    def get_all_balances(self) -> Dict[Tuple[PubKey, MintId], Amount]:
        return dict(self._balances)

    def total_supply(self, mint: MintId) -> Amount:
        return sum(amount for (_, m), amount in self._balances.items() if m == mint)

    def __repr__(self) -> str:
        return f"BalanceTable({len(self._balances)} entries)"
