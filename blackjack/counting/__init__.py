"""Card counting."""

from blackjack.counting.counter import (
    CounterState,
    process_card,
    process_cards,
    reset,
    toggle,
    true_count,
)
from blackjack.counting.hilo import HILO_TAGS, tag_value

__all__ = [
    "CounterState",
    "HILO_TAGS",
    "process_card",
    "process_cards",
    "reset",
    "tag_value",
    "toggle",
    "true_count",
]
