"""Game reducer, state and table session."""

from blackjack.game.actions import (
    Action,
    ClearBet,
    DoubleDown,
    Hit,
    NewGame,
    PlaceBet,
    RemoveBetChip,
    Split,
    Stand,
    StartGame,
    ToggleCardCounting,
    UndoLastBet,
    action_from_name,
)
from blackjack.game.events import EventEmitter, EventType, GameEvent
from blackjack.game.reducer import apply, new_game
from blackjack.game.state import GameResult, GameState, GameStatus
from blackjack.game.table import BlackjackTable

__all__ = [
    "Action",
    "BlackjackTable",
    "ClearBet",
    "DoubleDown",
    "EventEmitter",
    "EventType",
    "GameEvent",
    "GameResult",
    "GameState",
    "GameStatus",
    "Hit",
    "NewGame",
    "PlaceBet",
    "RemoveBetChip",
    "Split",
    "Stand",
    "StartGame",
    "ToggleCardCounting",
    "UndoLastBet",
    "action_from_name",
    "apply",
    "new_game",
]
