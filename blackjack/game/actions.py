"""Player actions accepted by the reducer."""

from dataclasses import dataclass
from typing import ClassVar, Union


@dataclass(frozen=True)
class NewGame:
    trigger: ClassVar[str] = "new_game"


@dataclass(frozen=True)
class PlaceBet:
    amount: int
    trigger: ClassVar[str] = "place_bet"


@dataclass(frozen=True)
class RemoveBetChip:
    amount: int
    trigger: ClassVar[str] = "remove_bet_chip"


@dataclass(frozen=True)
class UndoLastBet:
    trigger: ClassVar[str] = "undo_last_bet"


@dataclass(frozen=True)
class ClearBet:
    trigger: ClassVar[str] = "clear_bet"


@dataclass(frozen=True)
class StartGame:
    trigger: ClassVar[str] = "start_game"


@dataclass(frozen=True)
class Hit:
    trigger: ClassVar[str] = "hit"


@dataclass(frozen=True)
class Stand:
    trigger: ClassVar[str] = "stand"


@dataclass(frozen=True)
class DoubleDown:
    trigger: ClassVar[str] = "double_down"


@dataclass(frozen=True)
class Split:
    trigger: ClassVar[str] = "split"


@dataclass(frozen=True)
class ToggleCardCounting:
    trigger: ClassVar[str] = "toggle_card_counting"


Action = Union[
    NewGame,
    PlaceBet,
    RemoveBetChip,
    UndoLastBet,
    ClearBet,
    StartGame,
    Hit,
    Stand,
    DoubleDown,
    Split,
    ToggleCardCounting,
]

ACTION_TYPES: dict[str, type] = {
    cls.trigger: cls
    for cls in (
        NewGame,
        PlaceBet,
        RemoveBetChip,
        UndoLastBet,
        ClearBet,
        StartGame,
        Hit,
        Stand,
        DoubleDown,
        Split,
        ToggleCardCounting,
    )
}


def action_from_name(name: str, amount: int | None = None) -> Action:
    """
    Build an action from its trigger name.

    Args:
        name: Trigger name such as "place_bet" or "hit"
        amount: Chip amount for the betting actions

    Raises:
        ValueError: If the name is unknown or a required amount is missing
    """
    try:
        cls = ACTION_TYPES[name]
    except KeyError:
        raise ValueError(f"Unknown action: {name}") from None

    if cls in (PlaceBet, RemoveBetChip):
        if amount is None:
            raise ValueError(f"Action {name} requires an amount")
        return cls(amount)
    return cls()
