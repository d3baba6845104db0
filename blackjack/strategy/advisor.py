"""
Player-facing advice built on basic strategy and the Hi-Lo count.

Everything here reads a ``GameState`` (or plain numbers) and never changes
the game.
"""

from typing import NamedTuple

from blackjack.game.state import GameState, GameStatus
from blackjack.strategy.basic import BasicStrategy, Play
from blackjack.strategy.deviations import find_deviation

_strategy = BasicStrategy()

DEFAULT_CHIPS = (1, 5, 10, 50, 100)

# Bet units by minimum true count, highest first
BET_RAMP = (
    (4.0, 8),
    (3.0, 6),
    (2.0, 4),
    (1.0, 2),
)


class Advice(NamedTuple):
    """Suggested play and wager for the current state."""

    action: str
    bet: int
    count_reading: str
    true_count: float


def count_classification(true_count: float) -> str:
    """Describe how favourable the remaining shoe is."""
    if true_count >= 3:
        return "Very Hot"
    if true_count >= 1:
        return "Hot"
    if true_count > -1:
        return "Neutral"
    if true_count > -3:
        return "Cold"
    return "Very Cold"


def suggest_action(
    player_score: int,
    dealer_up_card: int | None,
    can_double_down: bool,
    game_status: GameStatus,
    true_count: float = 0.0,
    can_split: bool = False,
    pair_rank: int | None = None,
    is_soft: bool = False,
) -> str:
    """
    Suggest the next play for the active hand.

    Args:
        player_score: Active hand total
        dealer_up_card: Value of the dealer's upcard (2-11, Ace=11)
        can_double_down: Whether doubling is currently allowed
        game_status: Current game status
        true_count: True count used for index plays
        can_split: Whether splitting is currently allowed
        pair_rank: Card value of the pair, if the hand is one
        is_soft: Whether the hand is soft

    Returns:
        "Hit", "Stand", "Double Down" or "Split" while playing,
        otherwise a short status note
    """
    if game_status == GameStatus.BETTING:
        return "Place your bet"
    if game_status == GameStatus.DEALER_TURN:
        return "Dealer's turn"
    if game_status == GameStatus.FINISHED:
        return "Game over - start a new game"

    if player_score >= 21 or dealer_up_card is None:
        return str(Play.STAND)

    split_rank = pair_rank if can_split else None
    if split_rank is not None:
        play = _strategy.get_play(player_score, dealer_up_card, pair_rank=split_rank)
        if play == Play.SPLIT:
            return str(play)

    deviation = find_deviation(
        player_score, dealer_up_card, true_count, is_soft=is_soft, pair_rank=split_rank
    )
    if deviation is not None:
        if deviation.deviation != Play.DOUBLE or can_double_down:
            return str(deviation.deviation)

    play = _strategy.get_play(
        player_score,
        dealer_up_card,
        is_soft=is_soft,
        pair_rank=split_rank,
        can_double=can_double_down,
        can_split=can_split,
    )
    return str(play)


def _round_to_chips(amount: int, chips: tuple[int, ...]) -> int:
    smallest = min(chips)
    return amount - amount % smallest


def recommend_bet(
    true_count: float,
    credits: int,
    unit: int = 10,
    chips: tuple[int, ...] = DEFAULT_CHIPS,
) -> int:
    """
    Suggest a wager from a 1-8 unit spread on the true count.

    Args:
        true_count: Current true count
        credits: Credits available to bet
        unit: Size of one betting unit
        chips: Chip denominations the bet must be built from

    Returns:
        Suggested bet, never more than ``credits``
    """
    units = 1
    for threshold, ramp_units in BET_RAMP:
        if true_count >= threshold:
            units = ramp_units
            break
    bet = min(units * unit, max(credits, 0))
    return _round_to_chips(bet, chips)


def advise(state: GameState, unit: int = 10) -> Advice:
    """Put together the action, wager and count reading for a state."""
    tc = state.true_count
    hand = state.active_hand
    up_card = state.dealer_up_card
    pair_rank = hand.cards[0].value if hand.is_pair else None

    action = suggest_action(
        player_score=hand.value,
        dealer_up_card=up_card.value if up_card is not None else None,
        can_double_down=state.can_double_down,
        game_status=state.game_status,
        true_count=tc,
        can_split=state.can_split,
        pair_rank=pair_rank,
        is_soft=hand.is_soft,
    )
    if state.is_split and state.game_status == GameStatus.PLAYING:
        action = f"Hand {state.current_hand_index + 1} of {len(state.split_hands)}: {action}"

    bankroll = state.credits + state.current_bet
    return Advice(
        action=action,
        bet=recommend_bet(tc, bankroll, unit, state.rules.chip_denominations),
        count_reading=count_classification(tc) if state.counter.is_enabled else "Off",
        true_count=tc,
    )
