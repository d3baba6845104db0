"""Stateful table session around the pure reducer."""

import logging
from dataclasses import replace
from random import Random
from typing import Callable

from blackjack.cards import draw
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
)
from blackjack.game.events import EventEmitter, EventType, GameEvent
from blackjack.game.reducer import apply, new_game
from blackjack.game.state import GameState, GameStatus
from blackjack.hand import Hand
from blackjack.rules import RuleSet

logger = logging.getLogger(__name__)

_ROUND_ACTIONS = (StartGame, Hit, Stand, DoubleDown, Split)


class BlackjackTable:
    """
    One player's seat at the table.

    Holds the current ``GameState`` and applies actions one at a time, so
    callers get a serialized view of the game. After every action it emits
    events describing what changed.
    """

    def __init__(
        self,
        rules: RuleSet | None = None,
        credits: int | None = None,
        rng: Random | None = None,
    ) -> None:
        """
        Initialize a new table.

        Args:
            rules: Table rules (uses defaults if not provided)
            credits: Starting credits (defaults to the rules' starting credits)
            rng: Random number generator for reproducible games
        """
        self.rules = rules or RuleSet()
        self._rng = rng or Random()
        self.events = EventEmitter()
        self._state = new_game(credits, self.rules, self._rng)
        logger.info("New table with %d credits", self._state.credits)

    @property
    def state(self) -> GameState:
        """Current game state."""
        return self._state

    def subscribe(
        self,
        handler: Callable[[GameEvent], None],
        event_type: EventType | None = None,
    ) -> Callable[[], None]:
        """Subscribe to table events."""
        return self.events.subscribe(handler, event_type)

    def dispatch(self, action: Action) -> GameState:
        """
        Apply one action and publish its events.

        Args:
            action: The player's action

        Returns:
            The new state
        """
        before = self._state
        rng_state = self._rng.getstate() if isinstance(action, (Hit, DoubleDown)) else None
        after = apply(before, action, self._rng)
        self._state = after

        logger.debug(
            "%s: %s -> %s (credits %d, bet %d)",
            action.trigger,
            before.game_status.value,
            after.game_status.value,
            after.credits,
            after.current_bet,
        )
        self._publish(action, before, after, rng_state)
        return after

    # Convenience wrappers

    def place_bet(self, amount: int) -> GameState:
        return self.dispatch(PlaceBet(amount))

    def remove_bet_chip(self, amount: int) -> GameState:
        return self.dispatch(RemoveBetChip(amount))

    def undo_last_bet(self) -> GameState:
        return self.dispatch(UndoLastBet())

    def clear_bet(self) -> GameState:
        return self.dispatch(ClearBet())

    def deal(self) -> GameState:
        return self.dispatch(StartGame())

    def hit(self) -> GameState:
        return self.dispatch(Hit())

    def stand(self) -> GameState:
        return self.dispatch(Stand())

    def double_down(self) -> GameState:
        return self.dispatch(DoubleDown())

    def split(self) -> GameState:
        return self.dispatch(Split())

    def toggle_counting(self) -> GameState:
        return self.dispatch(ToggleCardCounting())

    def new_game(self) -> GameState:
        return self.dispatch(NewGame())

    def _acted_hand(self, before: GameState, after: GameState, rng_state: tuple | None) -> Hand:
        """
        The hand a Hit or DoubleDown drew into, including the new card.

        On a split the reducer may already have moved to the next hand, or
        settled the round and cleared the split hands. In that last case the
        card is recovered by replaying the first draw.
        """
        if not before.is_split:
            return after.player_hand
        if after.is_split:
            return after.split_hands[before.current_hand_index]

        replay = Random()
        replay.setstate(rng_state)
        rules = before.rules
        drawn = draw(before.shoe, replay, rules.reshuffle_threshold, rules.num_decks)
        return before.active_hand.add(drawn.card)

    def _publish(
        self,
        action: Action,
        before: GameState,
        after: GameState,
        rng_state: tuple | None = None,
    ) -> None:
        """Emit the events for one transition."""
        emit = self.events.emit_new

        if after is before:
            emit(
                EventType.INVALID_ACTION,
                action=action.trigger,
                state=before.game_status.value,
            )
            return

        if replace(after, message=before.message, deck_shuffled=before.deck_shuffled) == before:
            # Rejected with an explanation only
            event_type = (
                EventType.INSUFFICIENT_FUNDS
                if "Not enough credits" in after.message
                else EventType.INVALID_ACTION
            )
            logger.info("%s rejected: %s", action.trigger, after.message)
            emit(event_type, action=action.trigger, message=after.message)
            return

        if after.deck_shuffled:
            logger.info("Shoe reshuffled during %s", action.trigger)
            emit(EventType.SHOE_SHUFFLED, cards_remaining=after.cards_remaining)

        if isinstance(action, PlaceBet):
            emit(EventType.BET_PLACED, amount=action.amount, total=after.current_bet)
        elif isinstance(action, (RemoveBetChip, UndoLastBet)):
            emit(
                EventType.BET_REMOVED,
                amount=before.current_bet - after.current_bet,
                total=after.current_bet,
            )
        elif isinstance(action, ClearBet):
            emit(EventType.BET_CLEARED, refunded=before.current_bet)
        elif isinstance(action, StartGame):
            emit(
                EventType.ROUND_STARTED,
                bet=before.current_bet,
                player=[str(card) for card in after.player_hand],
                dealer_showing=str(after.dealer_up_card),
            )
            if after.player_hand.is_blackjack:
                emit(EventType.PLAYER_BLACKJACK)
            if after.dealer_hand.revealed().is_blackjack:
                emit(EventType.DEALER_BLACKJACK)
        elif isinstance(action, Hit):
            hand = self._acted_hand(before, after, rng_state)
            emit(EventType.PLAYER_HIT, hand_value=hand.value)
            if hand.is_busted:
                emit(EventType.PLAYER_BUSTS, hand_value=hand.value)
        elif isinstance(action, Stand):
            emit(EventType.PLAYER_STAND, hand_value=before.player_score)
        elif isinstance(action, DoubleDown):
            hand = self._acted_hand(before, after, rng_state)
            emit(EventType.PLAYER_DOUBLE, hand_value=hand.value)
            if hand.is_busted:
                emit(EventType.PLAYER_BUSTS, hand_value=hand.value)
        elif isinstance(action, Split):
            emit(EventType.PLAYER_SPLIT, split_count=after.split_count)
        elif isinstance(action, ToggleCardCounting):
            emit(EventType.COUNTING_TOGGLED, enabled=after.counter.is_enabled)
        elif isinstance(action, NewGame):
            logger.info("New game with %d credits", after.credits)
            emit(EventType.GAME_STARTED, credits=after.credits)

        if (
            after.is_split
            and after.game_status == GameStatus.PLAYING
            and after.current_hand_index != before.current_hand_index
        ):
            emit(EventType.HAND_ADVANCED, hand_index=after.current_hand_index)

        if isinstance(action, _ROUND_ACTIONS) and after.game_status != GameStatus.PLAYING:
            logger.info(
                "Round ended: %s (%+d), credits %d",
                after.game_result.value if after.game_result else "none",
                after.winnings,
                after.credits,
            )
            emit(
                EventType.ROUND_ENDED,
                result=after.game_result.value if after.game_result else None,
                winnings=after.winnings,
                credits=after.credits,
            )

        if after.game_status == GameStatus.FINISHED and before.game_status != GameStatus.FINISHED:
            logger.info("Game over: no credits left")
            emit(EventType.GAME_ENDED, reason="bankrupt")
