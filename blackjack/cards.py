"""Card and Shoe value types - immutable card representations."""

from dataclasses import dataclass, replace
from enum import Enum, auto
from random import Random
from typing import Iterator, NamedTuple


class Suit(Enum):
    """Card suits, in shoe-building order."""

    HEARTS = auto()
    DIAMONDS = auto()
    CLUBS = auto()
    SPADES = auto()

    def __str__(self) -> str:
        symbols = {
            Suit.HEARTS: "♥",
            Suit.DIAMONDS: "♦",
            Suit.CLUBS: "♣",
            Suit.SPADES: "♠",
        }
        return symbols[self]


class Rank(Enum):
    """Card ranks. The enum value is the counting rank (Ace high = 14)."""

    TWO = 2
    THREE = 3
    FOUR = 4
    FIVE = 5
    SIX = 6
    SEVEN = 7
    EIGHT = 8
    NINE = 9
    TEN = 10
    JACK = 11
    QUEEN = 12
    KING = 13
    ACE = 14

    def __str__(self) -> str:
        return self.label

    @property
    def label(self) -> str:
        """Return the rank label (A, 2..10, J, Q, K)."""
        if self.value <= 10:
            return str(self.value)
        return {
            Rank.JACK: "J",
            Rank.QUEEN: "Q",
            Rank.KING: "K",
            Rank.ACE: "A",
        }[self]

    @property
    def blackjack_value(self) -> int:
        """Return the blackjack point value (Ace = 11, face cards = 10)."""
        if self.value <= 10:
            return self.value
        if self == Rank.ACE:
            return 11
        return 10  # Face cards

    @property
    def is_ace(self) -> bool:
        """Check if this rank is an Ace."""
        return self == Rank.ACE


# Rank order inside each suit of a freshly built deck
DECK_RANK_ORDER: tuple[Rank, ...] = (
    Rank.ACE,
    Rank.TWO,
    Rank.THREE,
    Rank.FOUR,
    Rank.FIVE,
    Rank.SIX,
    Rank.SEVEN,
    Rank.EIGHT,
    Rank.NINE,
    Rank.TEN,
    Rank.JACK,
    Rank.QUEEN,
    Rank.KING,
)

CARDS_PER_DECK = 52


@dataclass(frozen=True, slots=True)
class Card:
    """Immutable playing card. A hidden copy differs only by the flag."""

    rank: Rank
    suit: Suit
    hidden: bool = False

    def __str__(self) -> str:
        if self.hidden:
            return "??"
        return f"{self.rank}{self.suit}"

    def __repr__(self) -> str:
        flag = ", hidden" if self.hidden else ""
        return f"Card({self.rank.name}, {self.suit.name}{flag})"

    @property
    def value(self) -> int:
        """Return the blackjack point value."""
        return self.rank.blackjack_value

    @property
    def label(self) -> str:
        """Return the rank label."""
        return self.rank.label

    @property
    def is_ace(self) -> bool:
        """Check if this card is an Ace."""
        return self.rank.is_ace

    def as_hidden(self) -> "Card":
        """Return a face-down copy of this card."""
        return replace(self, hidden=True)

    def revealed(self) -> "Card":
        """Return a face-up copy of this card."""
        return replace(self, hidden=False)

    @classmethod
    def from_string(cls, s: str) -> "Card":
        """Create a card from a string like '2♣', 'AS', 'Kh'."""
        s = s.strip().upper()
        if len(s) < 2:
            raise ValueError(f"Invalid card string: {s}")

        rank_str = s[:-1]
        suit_str = s[-1]

        rank_map = {rank.label: rank for rank in Rank}
        rank_map["T"] = Rank.TEN

        suit_map = {
            "C": Suit.CLUBS,
            "♣": Suit.CLUBS,
            "D": Suit.DIAMONDS,
            "♦": Suit.DIAMONDS,
            "H": Suit.HEARTS,
            "♥": Suit.HEARTS,
            "S": Suit.SPADES,
            "♠": Suit.SPADES,
        }

        if rank_str not in rank_map:
            raise ValueError(f"Invalid rank: {rank_str}")
        if suit_str not in suit_map:
            raise ValueError(f"Invalid suit: {suit_str}")

        return cls(rank_map[rank_str], suit_map[suit_str])


@dataclass(frozen=True)
class Shoe:
    """
    The working multi-deck set of cards.

    Cards are consumed from the end of the tuple: the last card is the next
    one drawn.
    """

    cards: tuple[Card, ...] = ()

    def __len__(self) -> int:
        return len(self.cards)

    def __iter__(self) -> Iterator[Card]:
        return iter(self.cards)

    @property
    def cards_remaining(self) -> int:
        """Return the number of cards remaining."""
        return len(self.cards)

    def pop(self) -> tuple[Card, "Shoe"]:
        """Take the next card, returning it with the shorter shoe."""
        if not self.cards:
            raise IndexError("Cannot draw from empty shoe")
        return self.cards[-1], Shoe(self.cards[:-1])


class Draw(NamedTuple):
    """Result of drawing one card from the shoe."""

    card: Card
    shoe: Shoe
    reshuffled: bool


def create_shoe(num_decks: int = 2) -> Shoe:
    """
    Build an unshuffled shoe.

    Order is suit-major, rank-minor (A, 2..10, J, Q, K), repeated per deck.
    """
    if num_decks < 1:
        raise ValueError("Shoe must have at least 1 deck")
    return Shoe(
        tuple(
            Card(rank, suit)
            for _ in range(num_decks)
            for suit in Suit
            for rank in DECK_RANK_ORDER
        )
    )


def shuffle(shoe: Shoe, rng: Random | None = None) -> Shoe:
    """Return a uniformly random permutation of the shoe (Fisher-Yates)."""
    cards = list(shoe.cards)
    (rng or Random()).shuffle(cards)
    return Shoe(tuple(cards))


def fresh_shoe(num_decks: int = 2, rng: Random | None = None) -> Shoe:
    """Build and shuffle a full shoe."""
    return shuffle(create_shoe(num_decks), rng)


def draw(
    shoe: Shoe,
    rng: Random | None = None,
    threshold: int = 30,
    num_decks: int = 2,
) -> Draw:
    """
    Draw one card, reshuffling first when the shoe is at or below threshold.

    Args:
        shoe: Shoe to draw from
        rng: Random number generator used if a reshuffle is needed
        threshold: Remaining-card count at which the shoe is replaced
        num_decks: Number of decks in a replacement shoe

    Returns:
        The card, the remaining shoe, and whether a reshuffle happened
    """
    reshuffled = False
    if len(shoe) <= threshold:
        shoe = fresh_shoe(num_decks, rng)
        reshuffled = True
    card, rest = shoe.pop()
    return Draw(card, rest, reshuffled)
