"""Game API endpoints."""

import logging
from typing import Annotated

from fastapi import APIRouter, HTTPException, Header

from api.schemas import (
    ActionRequest,
    AdviceResponse,
    CardResponse,
    CounterResponse,
    GameStateResponse,
    HandResponse,
    NewGameResponse,
)
from api.session import get_registry, get_session_signer
from blackjack.cards import Card
from blackjack.counting.counter import cards_seen_of, decks_remaining_of
from blackjack.game import BlackjackTable, GameState, action_from_name
from blackjack.hand import Hand
from blackjack.strategy import advise
from config import config

logger = logging.getLogger(__name__)

router = APIRouter()

SessionHeader = Annotated[str, Header(alias="X-Session-ID")]


def _card_to_response(card: Card) -> CardResponse:
    """Convert a Card to CardResponse; hidden cards stay anonymous."""
    if card.hidden:
        return CardResponse(rank=None, suit=None, value=None, hidden=True)
    return CardResponse(rank=card.rank.label, suit=card.suit.name.lower(), value=card.value)


def _hand_to_response(hand: Hand) -> HandResponse:
    """Convert a Hand to HandResponse."""
    return HandResponse(
        cards=[_card_to_response(c) for c in hand.cards],
        value=hand.value,
        is_soft=hand.is_soft,
        is_blackjack=hand.is_blackjack,
        is_busted=hand.is_busted,
    )


def _state_to_response(state: GameState) -> GameStateResponse:
    """Convert game state to response."""
    counter = state.counter
    return GameStateResponse(
        game_status=state.game_status.value,
        message=state.message,
        player_hand=_hand_to_response(state.player_hand),
        dealer_hand=_hand_to_response(state.dealer_hand),
        player_score=state.player_score,
        dealer_score=state.dealer_score,
        credits=state.credits,
        current_bet=state.current_bet,
        selected_chips=dict(state.selected_chips),
        can_double_down=state.can_double_down,
        can_split=state.can_split,
        is_double_down=state.is_double_down,
        split_hands=[_hand_to_response(h) for h in state.split_hands],
        split_bets=list(state.split_bets),
        current_hand_index=state.current_hand_index,
        split_count=state.split_count,
        game_result=state.game_result.value if state.game_result else None,
        winnings=state.winnings,
        cards_remaining=state.cards_remaining,
        deck_shuffled=state.deck_shuffled,
        counter=CounterResponse(
            is_enabled=counter.is_enabled,
            running_count=state.running_count,
            true_count=round(state.true_count, 2),
            cards_seen=cards_seen_of(counter),
            decks_remaining=round(decks_remaining_of(counter), 2),
        ),
    )


async def _get_table(token: str) -> BlackjackTable:
    """Resolve a signed session token to its live table."""
    session_id = get_session_signer().unsign(token)
    if session_id is None:
        raise HTTPException(status_code=400, detail="Invalid session token")

    table = await get_registry().get(session_id)
    if table is None:
        raise HTTPException(status_code=404, detail="Session not found or expired")
    return table


@router.post("/new")
async def new_game() -> NewGameResponse:
    """Open a new table with a fresh wallet and shoe."""
    registry = get_registry()
    await registry.cleanup_expired()

    table = BlackjackTable(rules=config.game.to_rules())
    session_id = await registry.create(table)
    logger.info("Opened table %s", session_id)

    return NewGameResponse(
        session_id=get_session_signer().sign(session_id),
        state=_state_to_response(table.state),
    )


@router.get("/state")
async def get_state(session_id: SessionHeader) -> GameStateResponse:
    """Get current game state."""
    table = await _get_table(session_id)
    return _state_to_response(table.state)


@router.post("/action")
async def player_action(
    request: ActionRequest,
    session_id: SessionHeader,
) -> GameStateResponse:
    """Apply one table action."""
    table = await _get_table(session_id)

    try:
        action = action_from_name(request.type, request.amount)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e)) from e

    return _state_to_response(table.dispatch(action))


@router.get("/advice")
async def get_advice(session_id: SessionHeader) -> AdviceResponse:
    """Suggest a play and a wager for the current state."""
    table = await _get_table(session_id)
    advice = advise(table.state)
    return AdviceResponse(
        action=advice.action,
        bet=advice.bet,
        count_reading=advice.count_reading,
        true_count=round(advice.true_count, 2),
    )
