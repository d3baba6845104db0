"""Basic strategy tables for a two-deck, dealer-stands-on-17 game."""

from enum import Enum, auto
from typing import Mapping


class Play(Enum):
    """Possible player plays."""

    HIT = auto()
    STAND = auto()
    DOUBLE = auto()
    SPLIT = auto()

    # Conditional plays (fallback if doubling is not allowed)
    DOUBLE_OR_HIT = auto()
    DOUBLE_OR_STAND = auto()

    def __str__(self) -> str:
        return {
            Play.HIT: "Hit",
            Play.STAND: "Stand",
            Play.DOUBLE: "Double Down",
            Play.SPLIT: "Split",
            Play.DOUBLE_OR_HIT: "Double Down (else Hit)",
            Play.DOUBLE_OR_STAND: "Double Down (else Stand)",
        }[self]


# Dealer upcards run 2..11, with 11 for an Ace
UPCARDS = range(2, 12)

StrategyTable = Mapping[tuple[int, int], Play]


def _fill(table: dict[tuple[int, int], Play], total: int, play: Play, upcards=UPCARDS) -> None:
    for dealer in upcards:
        table[(total, dealer)] = play


def build_hard_table() -> StrategyTable:
    """Hard totals 4-21."""
    H, S, D = Play.HIT, Play.STAND, Play.DOUBLE_OR_HIT
    table: dict[tuple[int, int], Play] = {}

    for total in range(4, 9):
        _fill(table, total, H)

    _fill(table, 9, H)
    _fill(table, 9, D, range(2, 7))

    _fill(table, 10, D)
    _fill(table, 10, H, (10, 11))

    _fill(table, 11, D)

    _fill(table, 12, H)
    _fill(table, 12, S, (4, 5, 6))

    for total in range(13, 17):
        _fill(table, total, S, range(2, 7))
        _fill(table, total, H, range(7, 12))

    for total in range(17, 22):
        _fill(table, total, S)

    return table


def build_soft_table() -> StrategyTable:
    """Soft totals 12 (A,A counted once) through 21."""
    H, S, D, Ds = Play.HIT, Play.STAND, Play.DOUBLE_OR_HIT, Play.DOUBLE_OR_STAND
    table: dict[tuple[int, int], Play] = {}

    _fill(table, 12, H)

    # A,2 and A,3
    for total in (13, 14):
        _fill(table, total, H)
        _fill(table, total, D, (5, 6))

    # A,4 and A,5
    for total in (15, 16):
        _fill(table, total, H)
        _fill(table, total, D, (4, 5, 6))

    # A,6
    _fill(table, 17, H)
    _fill(table, 17, D, (3, 4, 5, 6))

    # A,7
    _fill(table, 18, S, (2, 7, 8))
    _fill(table, 18, Ds, (3, 4, 5, 6))
    _fill(table, 18, H, (9, 10, 11))

    for total in (19, 20, 21):
        _fill(table, total, S)

    return table


def build_pair_table() -> StrategyTable:
    """Pairs keyed by card value (10 for any ten-value pair, 11 for aces)."""
    H, S, P, D = Play.HIT, Play.STAND, Play.SPLIT, Play.DOUBLE_OR_HIT
    table: dict[tuple[int, int], Play] = {}

    for rank in (2, 3):
        _fill(table, rank, H)
        _fill(table, rank, P, range(2, 8))

    _fill(table, 4, H)
    _fill(table, 4, P, (5, 6))

    # Never split fives: play as hard 10
    _fill(table, 5, D)
    _fill(table, 5, H, (10, 11))

    _fill(table, 6, H)
    _fill(table, 6, P, range(2, 8))

    _fill(table, 7, H)
    _fill(table, 7, P, range(2, 9))

    _fill(table, 8, P)

    _fill(table, 9, P)
    _fill(table, 9, S, (7, 10, 11))

    _fill(table, 10, S)

    _fill(table, 11, P)

    return table


class BasicStrategy:
    """
    Basic strategy lookup.

    Pre-computed dictionaries for O(1) lookup.
    """

    def __init__(self) -> None:
        self._hard_table = build_hard_table()
        self._soft_table = build_soft_table()
        self._pair_table = build_pair_table()

    def get_play(
        self,
        player_total: int,
        dealer_upcard: int,
        is_soft: bool = False,
        pair_rank: int | None = None,
        can_double: bool = True,
        can_split: bool = True,
    ) -> Play:
        """
        Get the basic strategy play.

        Args:
            player_total: Player's hand total
            dealer_upcard: Dealer's upcard value (2-11, Ace=11)
            is_soft: Whether the hand is soft
            pair_rank: Card value of a splittable pair, if the hand is one
            can_double: Whether doubling is allowed
            can_split: Whether splitting is allowed

        Returns:
            The recommended play
        """
        if pair_rank is not None and can_split:
            play = self._pair_table.get((pair_rank, dealer_upcard))
            if play is not None:
                return self._resolve(play, can_double)

        table = self._soft_table if is_soft else self._hard_table
        play = table.get((player_total, dealer_upcard))
        if play is not None:
            return self._resolve(play, can_double)

        # Totals outside the tables
        return Play.STAND if player_total >= 17 else Play.HIT

    @staticmethod
    def _resolve(play: Play, can_double: bool) -> Play:
        """Resolve conditional plays based on what's allowed."""
        if play == Play.DOUBLE_OR_HIT:
            return Play.DOUBLE if can_double else Play.HIT
        if play == Play.DOUBLE_OR_STAND:
            return Play.DOUBLE if can_double else Play.STAND
        return play

    @property
    def hard_table(self) -> StrategyTable:
        return self._hard_table

    @property
    def soft_table(self) -> StrategyTable:
        return self._soft_table

    @property
    def pair_table(self) -> StrategyTable:
        return self._pair_table
