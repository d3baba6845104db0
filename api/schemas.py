"""Pydantic schemas for API requests and responses."""

from typing import Literal

from pydantic import BaseModel, ConfigDict, Field

ActionName = Literal[
    "new_game",
    "place_bet",
    "remove_bet_chip",
    "undo_last_bet",
    "clear_bet",
    "start_game",
    "hit",
    "stand",
    "double_down",
    "split",
    "toggle_card_counting",
]


class ActionRequest(BaseModel):
    """Request for one table action."""

    type: ActionName
    amount: int | None = Field(default=None, ge=1, description="Chip amount for betting actions")


class CardResponse(BaseModel):
    """Card representation. Hidden cards carry no rank or suit."""

    model_config = ConfigDict(from_attributes=True)

    rank: str | None
    suit: str | None
    value: int | None
    hidden: bool = False


class HandResponse(BaseModel):
    """Hand representation."""

    cards: list[CardResponse]
    value: int
    is_soft: bool
    is_blackjack: bool
    is_busted: bool


class CounterResponse(BaseModel):
    """Hi-Lo counter as visible to the player."""

    is_enabled: bool
    running_count: int
    true_count: float
    cards_seen: int
    decks_remaining: float


class GameStateResponse(BaseModel):
    """Current game state."""

    game_status: Literal["betting", "playing", "dealer_turn", "finished"]
    message: str
    player_hand: HandResponse
    dealer_hand: HandResponse
    player_score: int
    dealer_score: int
    credits: int
    current_bet: int
    selected_chips: dict[int, int]
    can_double_down: bool
    can_split: bool
    is_double_down: bool
    split_hands: list[HandResponse]
    split_bets: list[int]
    current_hand_index: int
    split_count: int
    game_result: Literal["win", "lose", "tie"] | None
    winnings: int
    cards_remaining: int
    deck_shuffled: bool
    counter: CounterResponse


class NewGameResponse(BaseModel):
    """A freshly created table."""

    session_id: str
    state: GameStateResponse


class AdviceResponse(BaseModel):
    """Strategy advice for the current state."""

    action: str
    bet: int
    count_reading: str
    true_count: float
