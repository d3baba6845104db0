"""Blackjack engine - 100% UI-agnostic."""

from blackjack.cards import Card, Rank, Shoe, Suit, create_shoe, draw, shuffle
from blackjack.hand import Hand, hand_value, is_blackjack, is_bust
from blackjack.rules import RuleSet

__all__ = [
    "Card",
    "Hand",
    "Rank",
    "RuleSet",
    "Shoe",
    "Suit",
    "create_shoe",
    "draw",
    "hand_value",
    "is_blackjack",
    "is_bust",
    "shuffle",
]
