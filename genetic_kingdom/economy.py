"""The player's coin balance."""

from __future__ import annotations

DEFAULT_STARTING_COINS = 500


class Economy:
    """Tracks the coins available for towers and upgrades."""

    def __init__(self, starting_coins: int = DEFAULT_STARTING_COINS) -> None:
        self.coins = starting_coins

    def __repr__(self) -> str:
        return f"Economy(coins={self.coins})"

    def can_afford(self, cost: int) -> bool:
        """Whether the balance covers the cost."""
        return self.coins >= cost

    def spend(self, amount: int) -> None:
        """Take coins from the balance."""
        self.coins -= amount

    def earn(self, amount: int) -> None:
        """Add coins to the balance."""
        self.coins += amount