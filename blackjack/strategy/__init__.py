"""Strategy tables, index plays and the table-side advisor."""

from blackjack.strategy.advisor import (
    Advice,
    advise,
    count_classification,
    recommend_bet,
    suggest_action,
)
from blackjack.strategy.basic import BasicStrategy, Play
from blackjack.strategy.deviations import ILLUSTRIOUS_18, IndexPlay, find_deviation

__all__ = [
    "Advice",
    "advise",
    "count_classification",
    "recommend_bet",
    "suggest_action",
    "BasicStrategy",
    "Play",
    "IndexPlay",
    "ILLUSTRIOUS_18",
    "find_deviation",
]
