"""Game status enumeration and the immutable game state snapshot."""

from dataclasses import dataclass, field
from enum import Enum
from typing import Mapping

from blackjack.cards import Card, Shoe
from blackjack.counting.counter import CounterState, running_count_of, true_count
from blackjack.hand import Hand
from blackjack.rules import RuleSet


class GameStatus(Enum):
    """
    Game state machine states.

    Flow: BETTING → PLAYING → DEALER_TURN → BETTING (or FINISHED when broke)
    """

    # Chips are being placed
    BETTING = "betting"

    # Player acts on the active hand
    PLAYING = "playing"

    # Dealer draws and bets are settled
    DEALER_TURN = "dealer_turn"

    # Credits exhausted with no bet outstanding
    FINISHED = "finished"

    def __str__(self) -> str:
        return self.name.replace("_", " ").title()


class GameResult(Enum):
    """Outcome of the last settled round."""

    WIN = "win"
    LOSE = "lose"
    TIE = "tie"


@dataclass(frozen=True)
class GameState:
    """
    Everything the table knows, replaced wholesale on every action.

    When the player has split, ``player_hand`` mirrors the active entry of
    ``split_hands`` and ``split_bets`` holds one wager per split hand.
    """

    player_hand: Hand = field(default_factory=Hand)
    dealer_hand: Hand = field(default_factory=Hand)
    shoe: Shoe = field(default_factory=Shoe)
    game_status: GameStatus = GameStatus.BETTING
    player_score: int = 0
    dealer_score: int = 0
    message: str = ""
    deck_shuffled: bool = False

    # Wallet and wager
    credits: int = 1000
    current_bet: int = 0
    selected_chips: Mapping[int, int] = field(default_factory=dict)

    # Derived action flags
    can_double_down: bool = False
    can_split: bool = False
    is_double_down: bool = False

    # Split bookkeeping
    split_hands: tuple[Hand, ...] = ()
    current_hand_index: int = 0
    split_bets: tuple[int, ...] = ()
    split_count: int = 0
    split_aces: bool = False

    # Last settled round
    game_result: GameResult | None = None
    winnings: int = 0

    counter: CounterState = field(default_factory=CounterState)
    rules: RuleSet = field(default_factory=RuleSet)

    @property
    def is_split(self) -> bool:
        """Check if the player is playing split hands."""
        return bool(self.split_hands)

    @property
    def active_hand(self) -> Hand:
        """The hand the player is currently acting on."""
        if self.is_split:
            return self.split_hands[self.current_hand_index]
        return self.player_hand

    @property
    def active_bet(self) -> int:
        """The wager riding on the active hand."""
        if self.is_split:
            return self.split_bets[self.current_hand_index]
        return self.current_bet

    @property
    def cards_remaining(self) -> int:
        """Return the number of cards left in the shoe."""
        return len(self.shoe)

    @property
    def running_count(self) -> int:
        """Running count as shown to the player (0 while disabled)."""
        return running_count_of(self.counter)

    @property
    def true_count(self) -> float:
        """True count as shown to the player (0 while disabled)."""
        return true_count(self.counter)

    @property
    def dealer_up_card(self) -> Card | None:
        """The dealer's face-up first card, if dealt."""
        if not self.dealer_hand.cards:
            return None
        return self.dealer_hand.cards[0]
