"""Count-based deviations from basic strategy (Illustrious 18 playing indices)."""

from dataclasses import dataclass
from typing import Literal

from blackjack.strategy.basic import Play


@dataclass(frozen=True)
class IndexPlay:
    """
    A strategy deviation keyed on the true count.

    At or past the index, ``deviation`` replaces the basic strategy play.
    """

    player_total: int
    dealer_upcard: int  # 2-11 (11 = Ace)
    deviation: Play
    index: float
    # Pair hands are keyed by card value instead of total
    pair_rank: int | None = None
    direction: Literal["at_or_above", "at_or_below"] = "at_or_above"

    def should_deviate(self, true_count: float) -> bool:
        if self.direction == "at_or_above":
            return true_count >= self.index
        return true_count <= self.index

    @property
    def description(self) -> str:
        hand = f"{self.pair_rank},{self.pair_rank}" if self.pair_rank else str(self.player_total)
        upcard = "A" if self.dealer_upcard == 11 else str(self.dealer_upcard)
        sign = "or higher" if self.direction == "at_or_above" else "or lower"
        return f"{self.deviation} {hand} vs {upcard} at TC {self.index:+g} {sign}"


def _play(total, upcard, deviation, index, direction="at_or_above", pair=None) -> IndexPlay:
    return IndexPlay(
        player_total=total,
        dealer_upcard=upcard,
        deviation=deviation,
        index=index,
        pair_rank=pair,
        direction=direction,
    )


# Insurance and surrender are not offered at this table, so those indices
# are left out. Ordered by expected value gain.
ILLUSTRIOUS_18: list[IndexPlay] = [
    _play(16, 10, Play.STAND, 0),
    _play(15, 10, Play.STAND, 4),
    _play(20, 5, Play.SPLIT, 5, pair=10),
    _play(20, 6, Play.SPLIT, 4, pair=10),
    _play(10, 10, Play.DOUBLE, 4),
    _play(12, 3, Play.STAND, 2),
    _play(12, 2, Play.STAND, 3),
    _play(10, 11, Play.DOUBLE, 4),
    _play(9, 7, Play.DOUBLE, 3),
    _play(16, 9, Play.STAND, 5),
    _play(13, 2, Play.HIT, -1, "at_or_below"),
    _play(12, 4, Play.HIT, 0, "at_or_below"),
    _play(12, 5, Play.HIT, -2, "at_or_below"),
    _play(12, 6, Play.HIT, -1, "at_or_below"),
    _play(13, 3, Play.HIT, -2, "at_or_below"),
]


def find_deviation(
    player_total: int,
    dealer_upcard: int,
    true_count: float,
    is_soft: bool = False,
    pair_rank: int | None = None,
) -> IndexPlay | None:
    """
    Find the index play that applies at this count, if any.

    Args:
        player_total: Player's hand total
        dealer_upcard: Dealer's upcard value (2-11)
        true_count: Current true count
        is_soft: Whether the hand is soft (no soft indices are listed)
        pair_rank: Card value of a splittable pair

    Returns:
        The matching index play, or None
    """
    if is_soft:
        return None

    for play in ILLUSTRIOUS_18:
        if play.dealer_upcard != dealer_upcard:
            continue
        if play.pair_rank is not None:
            if play.pair_rank != pair_rank:
                continue
        elif play.player_total != player_total:
            continue
        if play.should_deviate(true_count):
            return play
    return None
