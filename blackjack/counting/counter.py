"""Running/true count tracking as an immutable value."""

from dataclasses import dataclass, replace
from typing import Iterable

from blackjack.cards import CARDS_PER_DECK, Card
from blackjack.counting.hilo import tag_value


@dataclass(frozen=True)
class CounterState:
    """
    Hi-Lo counter carried inside the game state.

    Attributes:
        running_count: Sum of tag values since the last reset
        cards_seen: Cards counted since the last reset
        decks_remaining: Estimated decks left to be seen
        total_decks: Decks in a full shoe, fixed for the session
        is_enabled: Whether cards are being counted
    """

    running_count: int = 0
    cards_seen: int = 0
    decks_remaining: float = 2.0
    total_decks: int = 2
    is_enabled: bool = False

    @classmethod
    def create(cls, total_decks: int = 2, is_enabled: bool = False) -> "CounterState":
        """Create a zeroed counter for a shoe of ``total_decks`` decks."""
        return cls(
            decks_remaining=float(total_decks),
            total_decks=total_decks,
            is_enabled=is_enabled,
        )


def reset(counter: CounterState) -> CounterState:
    """Zero the count, keeping the deck size and enabled flag."""
    return CounterState.create(counter.total_decks, counter.is_enabled)


def toggle(counter: CounterState) -> CounterState:
    """Flip counting on or off. Turning it on always starts from zero."""
    if counter.is_enabled:
        return replace(counter, is_enabled=False)
    return CounterState.create(counter.total_decks, is_enabled=True)


def process_card(counter: CounterState, card: Card) -> CounterState:
    """Count one visible card. Does nothing while counting is disabled."""
    if not counter.is_enabled:
        return counter

    cards_seen = counter.cards_seen + 1
    return replace(
        counter,
        running_count=counter.running_count + tag_value(card),
        cards_seen=cards_seen,
        decks_remaining=(counter.total_decks * CARDS_PER_DECK - cards_seen)
        / CARDS_PER_DECK,
    )


def process_cards(counter: CounterState, cards: Iterable[Card]) -> CounterState:
    """Count several cards in order."""
    for card in cards:
        counter = process_card(counter, card)
    return counter


def true_count(counter: CounterState) -> float:
    """
    Running count per remaining deck.

    Returns 0 when disabled, and the running count itself once no decks
    remain.
    """
    if not counter.is_enabled:
        return 0
    if counter.decks_remaining > 0:
        return counter.running_count / counter.decks_remaining
    return counter.running_count


def running_count_of(counter: CounterState) -> int:
    """Running count as shown to the player (0 while disabled)."""
    return counter.running_count if counter.is_enabled else 0


def cards_seen_of(counter: CounterState) -> int:
    """Cards seen as shown to the player (0 while disabled)."""
    return counter.cards_seen if counter.is_enabled else 0


def decks_remaining_of(counter: CounterState) -> float:
    """Decks remaining as shown to the player (full shoe while disabled)."""
    return counter.decks_remaining if counter.is_enabled else counter.total_decks
