"""Hand evaluation for blackjack."""

from dataclasses import dataclass
from typing import Iterable, Iterator

from blackjack.cards import Card


def hand_value(cards: Iterable[Card]) -> int:
    """
    Calculate the best hand value, ignoring hidden cards.

    Aces count as 11 and are reduced to 1 while the total is over 21.
    """
    total = 0
    aces = 0

    for card in cards:
        if card.hidden:
            continue
        if card.is_ace:
            aces += 1
        total += card.value

    # Reduce aces from 11 to 1 as needed
    while total > 21 and aces > 0:
        total -= 10
        aces -= 1

    return total


def is_soft(cards: Iterable[Card]) -> bool:
    """Check if an ace in the hand is still counted as 11."""
    visible = [card for card in cards if not card.hidden]
    if not any(card.is_ace for card in visible):
        return False
    total_hard = sum(1 if card.is_ace else card.value for card in visible)
    return total_hard + 10 <= 21


def is_blackjack(cards: Iterable[Card]) -> bool:
    """Check for a natural: exactly two cards totalling 21."""
    cards = list(cards)
    return len(cards) == 2 and hand_value(cards) == 21


def is_bust(cards: Iterable[Card]) -> bool:
    """Check if the hand value is over 21."""
    return hand_value(cards) > 21


def normalized_rank(card: Card) -> int:
    """Rank used for pairing: 10/J/Q/K are all 10, Ace is 11."""
    return card.value


@dataclass(frozen=True)
class Hand:
    """An immutable blackjack hand."""

    cards: tuple[Card, ...] = ()

    def add(self, card: Card) -> "Hand":
        """Return a new hand with the card appended."""
        return Hand(self.cards + (card,))

    def revealed(self) -> "Hand":
        """Return the hand with every card face up."""
        return Hand(tuple(card.revealed() for card in self.cards))

    @property
    def value(self) -> int:
        """Value of the face-up cards."""
        return hand_value(self.cards)

    @property
    def full_value(self) -> int:
        """Value including any hidden card."""
        return hand_value(self.revealed().cards)

    @property
    def is_soft(self) -> bool:
        return is_soft(self.cards)

    @property
    def is_blackjack(self) -> bool:
        return is_blackjack(self.cards)

    @property
    def is_busted(self) -> bool:
        return is_bust(self.cards)

    @property
    def has_hidden(self) -> bool:
        """Check if any card is face down."""
        return any(card.hidden for card in self.cards)

    @property
    def is_pair(self) -> bool:
        """Check for two cards of equal normalized rank."""
        return (
            len(self.cards) == 2
            and normalized_rank(self.cards[0]) == normalized_rank(self.cards[1])
        )

    def __len__(self) -> int:
        return len(self.cards)

    def __iter__(self) -> Iterator[Card]:
        return iter(self.cards)

    def __str__(self) -> str:
        cards_str = " ".join(str(card) for card in self.cards)
        value_str = f"({self.value})"
        if self.is_soft:
            value_str = f"(soft {self.value})"
        if self.is_blackjack:
            value_str = "(BLACKJACK)"
        if self.is_busted:
            value_str = "(BUST)"
        return f"{cards_str} {value_str}"

    def __repr__(self) -> str:
        return f"Hand({list(self.cards)!r}, value={self.value})"


def compare_hands(player_value: int, dealer_value: int) -> int:
    """
    Compare final player and dealer totals.

    Returns:
        1 if player wins
        -1 if dealer wins
        0 if push (tie)
    """
    # Player busts always loses
    if player_value > 21:
        return -1

    # Dealer busts, player wins
    if dealer_value > 21:
        return 1

    if player_value > dealer_value:
        return 1
    if dealer_value > player_value:
        return -1
    return 0  # Push
