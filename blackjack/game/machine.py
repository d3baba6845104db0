"""Phase machine: which actions are legal in which game status."""

from transitions import Machine, MachineError

from blackjack.game.state import GameStatus

STATES = [s.value for s in GameStatus]

BETTING = GameStatus.BETTING.value
PLAYING = GameStatus.PLAYING.value
DEALER_TURN = GameStatus.DEALER_TURN.value
FINISHED = GameStatus.FINISHED.value

TRANSITIONS = [
    # Chip handling stays in betting
    {"trigger": "place_bet", "source": BETTING, "dest": BETTING},
    {"trigger": "remove_bet_chip", "source": BETTING, "dest": BETTING},
    {"trigger": "undo_last_bet", "source": BETTING, "dest": BETTING},
    {"trigger": "clear_bet", "source": BETTING, "dest": BETTING},
    # Deal; naturals settle straight back to betting
    {"trigger": "start_game", "source": BETTING, "dest": PLAYING},
    {"trigger": "start_game", "source": BETTING, "dest": BETTING},
    {"trigger": "start_game", "source": BETTING, "dest": FINISHED},
    # Player actions; PLAYING → PLAYING advances between split hands
    {"trigger": "hit", "source": PLAYING, "dest": PLAYING},
    {"trigger": "hit", "source": PLAYING, "dest": DEALER_TURN},
    {"trigger": "hit", "source": PLAYING, "dest": BETTING},
    {"trigger": "hit", "source": PLAYING, "dest": FINISHED},
    {"trigger": "stand", "source": PLAYING, "dest": PLAYING},
    {"trigger": "stand", "source": PLAYING, "dest": DEALER_TURN},
    {"trigger": "double_down", "source": PLAYING, "dest": PLAYING},
    {"trigger": "double_down", "source": PLAYING, "dest": DEALER_TURN},
    {"trigger": "double_down", "source": PLAYING, "dest": BETTING},
    {"trigger": "double_down", "source": PLAYING, "dest": FINISHED},
    {"trigger": "split", "source": PLAYING, "dest": PLAYING},
    {"trigger": "split", "source": PLAYING, "dest": DEALER_TURN},
    # Dealer resolution
    {"trigger": "settle", "source": DEALER_TURN, "dest": BETTING},
    {"trigger": "settle", "source": DEALER_TURN, "dest": FINISHED},
    # Always available
    {"trigger": "toggle_card_counting", "source": "*", "dest": None},
    {"trigger": "new_game", "source": "*", "dest": BETTING},
    {"trigger": "new_game", "source": "*", "dest": FINISHED},
]

# Model-less machine used purely as a transition table
_machine = Machine(
    model=None,
    states=STATES,
    transitions=TRANSITIONS,
    initial=BETTING,
    auto_transitions=False,
)


def allowed_triggers(status: GameStatus) -> list[str]:
    """Return the action triggers available from a status."""
    return _machine.get_triggers(status.value)


def is_allowed(trigger: str, status: GameStatus) -> bool:
    """Check if an action trigger may fire from a status."""
    return trigger in allowed_triggers(status)


def check_transition(trigger: str, source: GameStatus, dest: GameStatus) -> GameStatus:
    """
    Validate a status change against the transition table.

    Returns:
        The destination status

    Raises:
        MachineError: If the change is not declared
    """
    if not _machine.get_transitions(trigger=trigger, source=source.value, dest=dest.value):
        raise MachineError(
            f"Cannot go from {source.value} to {dest.value} via {trigger}"
        )
    return dest
