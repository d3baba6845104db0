"""Tests for Card and Shoe values."""

from random import Random

import pytest

from blackjack.cards import (
    Card,
    Rank,
    Shoe,
    Suit,
    create_shoe,
    draw,
    fresh_shoe,
    shuffle,
)


class TestCard:
    """Tests for the Card class."""

    def test_card_immutability(self):
        """Test that cards are immutable."""
        card = Card(Rank.ACE, Suit.SPADES)
        with pytest.raises(AttributeError):
            card.rank = Rank.KING

    def test_card_value(self):
        """Test card blackjack values."""
        assert Card(Rank.TWO, Suit.HEARTS).value == 2
        assert Card(Rank.TEN, Suit.HEARTS).value == 10
        assert Card(Rank.JACK, Suit.HEARTS).value == 10
        assert Card(Rank.QUEEN, Suit.HEARTS).value == 10
        assert Card(Rank.KING, Suit.HEARTS).value == 10
        assert Card(Rank.ACE, Suit.HEARTS).value == 11

    def test_rank_labels(self):
        assert [r.label for r in Rank] == [
            "2", "3", "4", "5", "6", "7", "8", "9", "10", "J", "Q", "K", "A",
        ]

    def test_card_from_string(self):
        """Test creating cards from strings."""
        assert Card.from_string("AS") == Card(Rank.ACE, Suit.SPADES)
        assert Card.from_string("2H") == Card(Rank.TWO, Suit.HEARTS)
        assert Card.from_string("10D") == Card(Rank.TEN, Suit.DIAMONDS)
        assert Card.from_string("TD") == Card(Rank.TEN, Suit.DIAMONDS)
        assert Card.from_string("kc") == Card(Rank.KING, Suit.CLUBS)
        assert Card.from_string("K♥") == Card(Rank.KING, Suit.HEARTS)

    @pytest.mark.parametrize("bad", ["", "A", "1S", "AX"])
    def test_card_from_string_invalid(self, bad):
        with pytest.raises(ValueError):
            Card.from_string(bad)

    def test_hidden_card(self):
        """A hidden card prints as ?? and keeps its identity underneath."""
        card = Card(Rank.ACE, Suit.SPADES)
        hidden = card.as_hidden()
        assert hidden.hidden
        assert str(hidden) == "??"
        assert hidden != card
        assert hidden.revealed() == card

    def test_card_str(self):
        assert str(Card(Rank.QUEEN, Suit.DIAMONDS)) == "Q♦"


class TestShoe:
    """Tests for shoe construction, shuffling and drawing."""

    def test_create_shoe_size(self):
        assert len(create_shoe(2)) == 104
        assert len(create_shoe(1)) == 52

    def test_create_shoe_order(self):
        """Suit-major, rank-minor with the ace first."""
        cards = create_shoe(1).cards
        assert cards[0] == Card(Rank.ACE, Suit.HEARTS)
        assert cards[1] == Card(Rank.TWO, Suit.HEARTS)
        assert cards[12] == Card(Rank.KING, Suit.HEARTS)
        assert cards[13] == Card(Rank.ACE, Suit.DIAMONDS)

    def test_create_shoe_composition(self):
        cards = create_shoe(2).cards
        for rank in Rank:
            assert sum(1 for c in cards if c.rank == rank) == 8
        for suit in Suit:
            assert sum(1 for c in cards if c.suit == suit) == 26

    def test_create_shoe_rejects_zero_decks(self):
        with pytest.raises(ValueError):
            create_shoe(0)

    def test_shuffle_is_permutation(self, rng):
        shoe = create_shoe(2)
        shuffled = shuffle(shoe, rng)
        assert len(shuffled) == len(shoe)
        assert sorted(shuffled, key=repr) == sorted(shoe, key=repr)
        assert shuffled != shoe

    def test_shuffle_does_not_mutate(self, rng):
        shoe = create_shoe(1)
        before = shoe.cards
        shuffle(shoe, rng)
        assert shoe.cards == before

    def test_shuffle_reproducible(self):
        assert fresh_shoe(2, Random(7)) == fresh_shoe(2, Random(7))

    def test_pop_takes_last_card(self):
        shoe = Shoe((Card(Rank.TWO, Suit.CLUBS), Card(Rank.ACE, Suit.SPADES)))
        card, rest = shoe.pop()
        assert card == Card(Rank.ACE, Suit.SPADES)
        assert len(rest) == 1
        assert len(shoe) == 2

    def test_pop_empty(self):
        with pytest.raises(IndexError):
            Shoe().pop()

    def test_draw_without_reshuffle(self, rng):
        shoe = create_shoe(1)
        drawn = draw(shoe, rng)
        assert drawn.card == Card(Rank.KING, Suit.SPADES)
        assert drawn.shoe.cards_remaining == 51
        assert not drawn.reshuffled

    def test_draw_reshuffles_at_threshold(self, rng):
        shoe = Shoe(create_shoe(1).cards[:30])
        drawn = draw(shoe, rng, threshold=30, num_decks=2)
        assert drawn.reshuffled
        assert drawn.shoe.cards_remaining == 103

    def test_draw_above_threshold_keeps_shoe(self, rng):
        shoe = Shoe(create_shoe(1).cards[:31])
        drawn = draw(shoe, rng, threshold=30)
        assert not drawn.reshuffled
        assert drawn.shoe.cards_remaining == 30

    def test_draw_from_empty_shoe_reshuffles(self, rng):
        drawn = draw(Shoe(), rng)
        assert drawn.reshuffled
        assert len(drawn.shoe) == 103
