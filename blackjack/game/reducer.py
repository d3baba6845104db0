"""
Pure blackjack reducer.

``apply(state, action)`` returns a new ``GameState`` and never mutates its
input. Invalid actions come back as the same state, or with only the message
changed; nothing here raises for a player mistake.
"""

import math
from dataclasses import replace
from random import Random
from typing import Callable

from blackjack.cards import Card, draw, fresh_shoe
from blackjack.counting.counter import CounterState, process_card, reset, toggle
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
from blackjack.game.machine import check_transition, is_allowed
from blackjack.game.state import GameResult, GameState, GameStatus
from blackjack.hand import Hand, compare_hands
from blackjack.rules import RuleSet

Handler = Callable[[GameState, Action, Random | None], GameState]


def new_game(
    credits: int | None = None,
    rules: RuleSet | None = None,
    rng: Random | None = None,
    counter: CounterState | None = None,
) -> GameState:
    """
    Build the state for a fresh table.

    Args:
        credits: Wallet to start with (defaults to the rules' starting credits)
        rules: Table rules
        rng: Random number generator for the opening shuffle
        counter: Existing counter whose enabled flag should be kept

    Returns:
        A state waiting for the first bet
    """
    rules = rules or RuleSet()
    if credits is None:
        credits = rules.starting_credits
    if counter is None:
        counter = CounterState.create(rules.num_decks)
    else:
        counter = reset(counter)

    if credits > 0:
        status = GameStatus.BETTING
        message = f"Place your bet! You have ${credits} credits."
    else:
        status = GameStatus.FINISHED
        message = "Game Over - No credits left!"

    return GameState(
        shoe=fresh_shoe(rules.num_decks, rng),
        game_status=status,
        message=message,
        credits=credits,
        counter=counter,
        rules=rules,
    )


def apply(state: GameState, action: Action, rng: Random | None = None) -> GameState:
    """
    Advance the game by one action.

    Args:
        state: Current state (left untouched)
        action: The player's action
        rng: Random number generator used when the shoe is reshuffled

    Returns:
        The next state
    """
    if not is_allowed(action.trigger, state.game_status):
        return state
    if state.deck_shuffled:
        # The reshuffle flag only describes the transition that produced it
        state = replace(state, deck_shuffled=False)
    return _HANDLERS[type(action)](state, action, rng)


# Dealing


def _deal(state: GameState, rng: Random | None, face_up: bool = True) -> tuple[Card, GameState]:
    """Draw one card, counting it if it lands face up."""
    rules = state.rules
    drawn = draw(state.shoe, rng, rules.reshuffle_threshold, rules.num_decks)
    counter = state.counter
    if drawn.reshuffled:
        counter = reset(counter)

    card = drawn.card
    if face_up:
        counter = process_card(counter, card)
    else:
        card = card.as_hidden()

    return card, replace(
        state,
        shoe=drawn.shoe,
        counter=counter,
        deck_shuffled=state.deck_shuffled or drawn.reshuffled,
    )


def _reveal_dealer(state: GameState) -> GameState:
    """Turn the hole card over and count it."""
    counter = state.counter
    for card in state.dealer_hand:
        if card.hidden:
            counter = process_card(counter, card.revealed())
    dealer = state.dealer_hand.revealed()
    return replace(state, dealer_hand=dealer, dealer_score=dealer.value, counter=counter)


# Betting


def _bet_message(bet: int) -> str:
    if bet > 0:
        return f'Bet placed: ${bet}. Click "Deal" to start!'
    return "Place your bet!"


def _place_bet(state: GameState, action: PlaceBet, rng: Random | None) -> GameState:
    amount = action.amount
    if amount not in state.rules.chip_denominations:
        return replace(state, message=f"Invalid chip amount: ${amount}")
    if state.credits - amount < 0:
        return replace(state, message="Not enough credits!")

    chips = dict(state.selected_chips)
    chips[amount] = chips.get(amount, 0) + 1
    new_bet = state.current_bet + amount

    return replace(
        state,
        current_bet=new_bet,
        credits=state.credits - amount,
        selected_chips=chips,
        game_result=None,
        winnings=0,
        message=_bet_message(new_bet),
    )


def _take_chip(state: GameState, amount: int) -> GameState:
    """Return one chip of ``amount`` from the bet to the wallet."""
    if state.selected_chips.get(amount, 0) <= 0:
        return state

    chips = dict(state.selected_chips)
    chips[amount] -= 1
    if chips[amount] == 0:
        del chips[amount]
    new_bet = state.current_bet - amount

    return replace(
        state,
        current_bet=new_bet,
        credits=state.credits + amount,
        selected_chips=chips,
        message=_bet_message(new_bet),
    )


def _remove_bet_chip(state: GameState, action: RemoveBetChip, rng: Random | None) -> GameState:
    return _take_chip(state, action.amount)


def _undo_last_bet(state: GameState, action: UndoLastBet, rng: Random | None) -> GameState:
    if not state.selected_chips:
        return state
    return _take_chip(state, max(state.selected_chips))


def _clear_bet(state: GameState, action: ClearBet, rng: Random | None) -> GameState:
    if state.current_bet == 0:
        return state
    return replace(
        state,
        credits=state.credits + state.current_bet,
        current_bet=0,
        selected_chips={},
        message=_bet_message(0),
    )


# Round flow


def _refresh_flags(state: GameState) -> GameState:
    """Recompute double/split availability for the active hand."""
    hand = state.active_hand
    bet = state.active_bet
    unplayed = len(hand) == 2 and not state.split_aces
    can_double = unplayed and state.credits >= bet
    can_split = (
        unplayed
        and hand.is_pair
        and state.credits >= bet
        and state.split_count < state.rules.max_splits
    )
    return replace(state, can_double_down=can_double, can_split=can_split)


def _with_active_hand(state: GameState, hand: Hand, bet: int | None = None) -> GameState:
    """Store the active hand (and optionally its bet)."""
    if state.is_split:
        index = state.current_hand_index
        hands = list(state.split_hands)
        hands[index] = hand
        bets = list(state.split_bets)
        if bet is not None:
            bets[index] = bet
        return replace(
            state,
            split_hands=tuple(hands),
            split_bets=tuple(bets),
            player_hand=hand,
            player_score=hand.value,
        )

    return replace(
        state,
        player_hand=hand,
        player_score=hand.value,
        current_bet=state.current_bet if bet is None else bet,
    )


def _end_round(
    state: GameState,
    trigger: str,
    credits: int,
    result: GameResult,
    winnings: int,
    message: str,
) -> GameState:
    """Close the round: clear the wager and split state, record the result."""
    if credits == 0:
        dest = GameStatus.FINISHED
        suffix = "Game Over - No credits left!"
    else:
        dest = GameStatus.BETTING
        suffix = "Place your next bet!"
    check_transition(trigger, state.game_status, dest)

    return replace(
        state,
        game_status=dest,
        credits=credits,
        current_bet=0,
        selected_chips={},
        can_double_down=False,
        can_split=False,
        is_double_down=False,
        split_hands=(),
        current_hand_index=0,
        split_bets=(),
        split_count=0,
        split_aces=False,
        game_result=result,
        winnings=winnings,
        message=f"{message} {suffix}",
    )


def _start_game(state: GameState, action: StartGame, rng: Random | None) -> GameState:
    if state.current_bet <= 0:
        return replace(state, message="Place a bet first!")

    state = replace(
        state,
        is_double_down=False,
        game_result=None,
        winnings=0,
    )

    # Deal: player, player, dealer, dealer (face down)
    first, state = _deal(state, rng)
    second, state = _deal(state, rng)
    up_card, state = _deal(state, rng)
    hole_card, state = _deal(state, rng, face_up=False)

    player = Hand((first, second))
    dealer = Hand((up_card, hole_card))
    state = replace(
        state,
        player_hand=player,
        dealer_hand=dealer,
        player_score=player.value,
        dealer_score=dealer.value,
    )

    player_bj = player.is_blackjack
    dealer_bj = dealer.full_value == 21
    bet = state.current_bet

    if player_bj or dealer_bj:
        state = _reveal_dealer(state)
        if player_bj and dealer_bj:
            return _end_round(
                state,
                "start_game",
                state.credits + bet,
                GameResult.TIE,
                0,
                "Push! Both have blackjack.",
            )
        if player_bj:
            profit = math.floor(bet * state.rules.blackjack_payout)
            return _end_round(
                state,
                "start_game",
                state.credits + bet + profit,
                GameResult.WIN,
                profit,
                f"Blackjack! You win ${profit}! (1.5x your bet)",
            )
        return _end_round(
            state,
            "start_game",
            state.credits,
            GameResult.LOSE,
            -bet,
            "Dealer has blackjack! You lose.",
        )

    status = check_transition("start_game", state.game_status, GameStatus.PLAYING)
    state = replace(state, game_status=status, message="Your turn! Hit, Stand, or Double Down?")
    return _refresh_flags(state)


def _activate(state: GameState, index: int, trigger: str, rng: Random | None) -> GameState:
    """Make a split hand the active one, skipping hands that cannot act."""
    hand = state.split_hands[index]
    state = replace(
        state,
        current_hand_index=index,
        player_hand=hand,
        player_score=hand.value,
        is_double_down=False,
    )

    # No further action on 21 or on split aces
    if hand.value == 21 or state.split_aces:
        return _finish_hand(state, trigger, rng)

    check_transition(trigger, state.game_status, GameStatus.PLAYING)
    state = replace(
        state,
        message=f"Playing hand {index + 1} of {len(state.split_hands)}. Hit, Stand, or Double Down?",
    )
    return _refresh_flags(state)


def _finish_hand(state: GameState, trigger: str, rng: Random | None) -> GameState:
    """Move to the next split hand, or hand over to the dealer."""
    if state.is_split and state.current_hand_index < len(state.split_hands) - 1:
        return _activate(state, state.current_hand_index + 1, trigger, rng)
    return _dealer_turn(state, trigger, rng)


def _dealer_turn(state: GameState, trigger: str, rng: Random | None) -> GameState:
    """Reveal, draw to the standing total, then settle every player hand."""
    status = check_transition(trigger, state.game_status, GameStatus.DEALER_TURN)
    state = replace(state, game_status=status, can_double_down=False, can_split=False)
    state = _reveal_dealer(state)

    # Dealer hits 16 and below, stands on 17
    while state.dealer_hand.value < state.rules.dealer_stands_on:
        card, state = _deal(state, rng)
        state = replace(state, dealer_hand=state.dealer_hand.add(card))

    state = replace(state, dealer_score=state.dealer_hand.value)
    return _settle(state)


def _settle(state: GameState) -> GameState:
    """Pay or collect each hand against the final dealer total."""
    dealer_value = state.dealer_hand.value
    if state.is_split:
        hands = state.split_hands
        bets = state.split_bets
    else:
        hands = (state.player_hand,)
        bets = (state.current_bet,)

    returned = 0
    net = 0
    outcomes: list[int] = []
    for hand, bet in zip(hands, bets):
        outcome = compare_hands(hand.value, dealer_value)
        if outcome == 1:
            returned += bet * 2
            net += bet
        elif outcome == 0:
            returned += bet
        else:
            net -= bet
        outcomes.append(outcome)

    if net > 0:
        result = GameResult.WIN
    elif net < 0:
        result = GameResult.LOSE
    else:
        result = GameResult.TIE

    if state.is_split:
        labels = {1: "win", 0: "push", -1: "lose"}
        summary = ", ".join(
            f"Hand {i + 1}: {labels[outcome]}" for i, outcome in enumerate(outcomes)
        )
        sign = "+" if net >= 0 else "-"
        message = f"{summary}. Net: {sign}${abs(net)}."
    else:
        message = _single_hand_message(outcomes[0], dealer_value, net)

    return _end_round(
        state,
        "settle",
        state.credits + returned,
        result,
        net,
        message,
    )


def _single_hand_message(outcome: int, dealer_value: int, net: int) -> str:
    if outcome == 1:
        lead = "Dealer busts! You win!" if dealer_value > 21 else "You win!"
        return f"{lead} You won ${net}!"
    if outcome == -1:
        return "Dealer wins!"
    return "Push! It's a tie!"


# Player actions


def _hit(state: GameState, action: Hit, rng: Random | None) -> GameState:
    card, state = _deal(state, rng)
    hand = state.active_hand.add(card)
    state = _with_active_hand(state, hand)

    if hand.is_busted:
        if state.is_split:
            return _finish_hand(state, "hit", rng)
        return _end_round(
            state,
            "hit",
            state.credits,
            GameResult.LOSE,
            -state.current_bet,
            "Bust! You lose!",
        )

    if hand.value == 21:
        return _finish_hand(state, "hit", rng)

    status = check_transition("hit", state.game_status, GameStatus.PLAYING)
    return replace(
        state,
        game_status=status,
        can_double_down=False,
        can_split=False,
        message="Your turn! Hit or Stand?",
    )


def _stand(state: GameState, action: Stand, rng: Random | None) -> GameState:
    return _finish_hand(state, "stand", rng)


def _double_down(state: GameState, action: DoubleDown, rng: Random | None) -> GameState:
    if not state.can_double_down:
        return state

    bet = state.active_bet
    if state.credits < bet:
        return replace(state, message="Not enough credits to double down!")

    state = replace(state, credits=state.credits - bet)
    card, state = _deal(state, rng)
    hand = state.active_hand.add(card)
    state = _with_active_hand(state, hand, bet=bet * 2)
    state = replace(state, is_double_down=True, can_double_down=False, can_split=False)

    if hand.is_busted and not state.is_split:
        return _end_round(
            state,
            "double_down",
            state.credits,
            GameResult.LOSE,
            -bet * 2,
            "Double Down Bust! You lose.",
        )
    return _finish_hand(state, "double_down", rng)


def _split(state: GameState, action: Split, rng: Random | None) -> GameState:
    hand = state.active_hand
    if not state.can_split or not hand.is_pair:
        return state

    bet = state.active_bet
    if state.credits < bet or state.split_count >= state.rules.max_splits:
        return replace(state, message="Not enough credits to split!")

    state = replace(state, credits=state.credits - bet)
    first, second = hand.cards
    first_new, state = _deal(state, rng)
    second_new, state = _deal(state, rng)
    new_hands = (Hand((first, first_new)), Hand((second, second_new)))

    index = state.current_hand_index if state.is_split else 0
    if state.is_split:
        hands = state.split_hands[:index] + new_hands + state.split_hands[index + 1:]
        bets = state.split_bets[:index] + (bet, bet) + state.split_bets[index + 1:]
    else:
        hands = new_hands
        bets = (bet, bet)

    state = replace(
        state,
        split_hands=hands,
        split_bets=bets,
        split_count=state.split_count + 1,
        split_aces=first.is_ace,
    )
    return _activate(state, index, "split", rng)


# Table controls


def _toggle_card_counting(
    state: GameState, action: ToggleCardCounting, rng: Random | None
) -> GameState:
    counter = toggle(state.counter)
    label = "enabled" if counter.is_enabled else "disabled"
    return replace(state, counter=counter, message=f"Card counting {label}.")


def _new_game(state: GameState, action: NewGame, rng: Random | None) -> GameState:
    fresh = new_game(state.credits, state.rules, rng, counter=state.counter)
    check_transition("new_game", state.game_status, fresh.game_status)
    return fresh


_HANDLERS: dict[type, Handler] = {
    NewGame: _new_game,
    PlaceBet: _place_bet,
    RemoveBetChip: _remove_bet_chip,
    UndoLastBet: _undo_last_bet,
    ClearBet: _clear_bet,
    StartGame: _start_game,
    Hit: _hit,
    Stand: _stand,
    DoubleDown: _double_down,
    Split: _split,
    ToggleCardCounting: _toggle_card_counting,
}
