"""Table rules for the blackjack engine."""

from dataclasses import dataclass


@dataclass(frozen=True)
class RuleSet:
    """
    Blackjack table rules configuration.

    Constants the reducer consults for dealing, betting and settlement.
    """

    # Shoe configuration
    num_decks: int = 2
    reshuffle_threshold: int = 30  # Replace the shoe at or below this many cards

    # Betting
    chip_denominations: tuple[int, ...] = (1, 5, 10, 50, 100)
    starting_credits: int = 1000

    # Blackjack payout (3:2 = 1.5)
    blackjack_payout: float = 1.5

    # Dealer draws while below this total
    dealer_stands_on: int = 17

    # Split rules
    max_splits: int = 3  # Up to four hands

    def __post_init__(self) -> None:
        """Validate rule combinations."""
        if self.num_decks < 1 or self.num_decks > 8:
            raise ValueError("num_decks must be between 1 and 8")
        if not 0 <= self.reshuffle_threshold < self.total_cards:
            raise ValueError("reshuffle_threshold must leave cards to deal")
        if not self.chip_denominations or min(self.chip_denominations) < 1:
            raise ValueError("chip_denominations must be positive")
        if self.blackjack_payout < 1.0:
            raise ValueError("blackjack_payout must be at least 1.0")
        if self.max_splits < 0:
            raise ValueError("max_splits cannot be negative")
        if self.starting_credits < 0:
            raise ValueError("starting_credits cannot be negative")

    @property
    def total_cards(self) -> int:
        """Return the number of cards in a full shoe."""
        return self.num_decks * 52
