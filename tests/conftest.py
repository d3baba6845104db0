"""Pytest fixtures for blackjack engine tests."""

from dataclasses import replace
from random import Random

import pytest

from blackjack.cards import Card, Shoe, create_shoe
from blackjack.counting import CounterState
from blackjack.game import BlackjackTable, GameState, PlaceBet, apply, new_game
from blackjack.hand import Hand
from blackjack.rules import RuleSet


def stack_shoe(*cards: str) -> Shoe:
    """
    Build a shoe that deals ``cards`` first, in the order given.

    A full unshuffled deck sits underneath so the shoe stays above the
    reshuffle threshold.
    """
    filler = create_shoe(1).cards
    top = tuple(Card.from_string(c) for c in reversed(cards))
    return Shoe(filler + top)


def chips_for(amount: int, denominations=(100, 50, 10, 5, 1)) -> list[int]:
    """Break an amount into chips, largest first."""
    chips = []
    for chip in denominations:
        while amount >= chip:
            chips.append(chip)
            amount -= chip
    return chips


def hand(*cards: str) -> Hand:
    """Build a hand from card strings."""
    return Hand(tuple(Card.from_string(c) for c in cards))


@pytest.fixture
def rng():
    """Seeded random number generator for reproducible tests."""
    return Random(42)


@pytest.fixture
def rules():
    """Default ruleset."""
    return RuleSet()


@pytest.fixture
def state(rng) -> GameState:
    """A fresh table waiting for a bet."""
    return new_game(rng=rng)


@pytest.fixture
def make_state():
    """
    Factory for a betting state with a stacked shoe and an optional bet.

    Usage: make_state("10S", "6H", "9D", "7C", bet=50)
    """

    def _make(*cards: str, credits: int = 1000, bet: int = 0, counting: bool = False) -> GameState:
        state = new_game(credits, rng=Random(0))
        state = replace(
            state,
            shoe=stack_shoe(*cards),
            counter=CounterState.create(2, is_enabled=counting),
        )
        for chip in chips_for(bet):
            state = apply(state, PlaceBet(chip))
        return state

    return _make


@pytest.fixture
def blackjack_hand():
    """A natural blackjack hand."""
    return hand("AS", "KH")


@pytest.fixture
def soft_17_hand():
    """A soft 17 hand (A-6)."""
    return hand("AS", "6H")


@pytest.fixture
def hard_16_hand():
    """A hard 16 hand (10-6)."""
    return hand("10S", "6H")


@pytest.fixture
def pair_8s_hand():
    """A pair of 8s hand."""
    return hand("8S", "8H")



@pytest.fixture
def make_table():
    """Factory for a table whose shoe deals ``cards`` first."""

    def _make(*cards: str, credits: int = 1000) -> BlackjackTable:
        table = BlackjackTable(credits=credits, rng=Random(0))
        table._state = replace(table.state, shoe=stack_shoe(*cards))
        return table

    return _make
