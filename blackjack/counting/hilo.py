"""Hi-Lo card counting tags."""

from typing import Mapping

from blackjack.cards import Card, Rank

# Hi-Lo is balanced: a full deck sums to 0.
#   2-6: +1 (low cards)
#   7-9: 0  (neutral)
#   10-A: -1 (high cards)
HILO_TAGS: Mapping[Rank, int] = {
    Rank.TWO: 1,
    Rank.THREE: 1,
    Rank.FOUR: 1,
    Rank.FIVE: 1,
    Rank.SIX: 1,
    Rank.SEVEN: 0,
    Rank.EIGHT: 0,
    Rank.NINE: 0,
    Rank.TEN: -1,
    Rank.JACK: -1,
    Rank.QUEEN: -1,
    Rank.KING: -1,
    Rank.ACE: -1,
}


def tag_value(card: Card) -> int:
    """Return the Hi-Lo contribution of a single card."""
    return HILO_TAGS[card.rank]

