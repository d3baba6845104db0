"""Tests for the table session and its events."""

import logging
from random import Random

import pytest

from blackjack.game import BlackjackTable, EventEmitter, EventType, GameEvent, GameStatus


@pytest.fixture
def table():
    """A seeded table."""
    return BlackjackTable(rng=Random(42))


class TestEventEmitter:
    """Tests for the emitter itself."""

    def test_subscribe_and_emit(self):
        emitter = EventEmitter()
        seen = []
        emitter.subscribe(seen.append, EventType.BET_PLACED)
        emitter.emit_new(EventType.BET_PLACED, amount=5)
        emitter.emit_new(EventType.PLAYER_HIT)
        assert [e.event_type for e in seen] == [EventType.BET_PLACED]
        assert seen[0].data == {"amount": 5}

    def test_catch_all_subscriber(self):
        emitter = EventEmitter()
        seen = []
        emitter.subscribe(seen.append)
        emitter.emit_new(EventType.BET_PLACED)
        emitter.emit_new(EventType.PLAYER_HIT)
        assert len(seen) == 2

    def test_unsubscribe(self):
        emitter = EventEmitter()
        seen = []
        unsubscribe = emitter.subscribe(seen.append)
        assert unsubscribe()
        assert not emitter.unsubscribe(seen.append)
        emitter.emit(GameEvent(EventType.PLAYER_HIT))
        assert seen == []

    def test_history_is_bounded(self):
        emitter = EventEmitter(max_history=3)
        for amount in range(5):
            emitter.emit_new(EventType.BET_PLACED, amount=amount)
        assert [e.data["amount"] for e in emitter.history] == [2, 3, 4]
        emitter.clear_history()
        assert emitter.history == []


class TestBlackjackTable:
    """Tests for BlackjackTable dispatch."""

    def test_starts_betting(self, table):
        assert table.state.game_status == GameStatus.BETTING
        assert table.state.credits == 1000

    def test_bet_events(self, table):
        table.place_bet(10)
        table.place_bet(5)
        table.undo_last_bet()
        table.clear_bet()
        types = [e.event_type for e in table.events.history]
        assert types == [
            EventType.BET_PLACED,
            EventType.BET_PLACED,
            EventType.BET_REMOVED,
            EventType.BET_CLEARED,
        ]
        assert table.events.history[2].data == {"amount": 10, "total": 5}

    def test_invalid_action_event(self, table):
        before = table.state
        assert table.hit() is before
        event = table.events.history[-1]
        assert event.event_type == EventType.INVALID_ACTION
        assert event.data["action"] == "hit"

    def test_insufficient_funds_event(self, make_table):
        table = make_table(credits=50)
        table.place_bet(100)
        assert table.events.history[-1].event_type == EventType.INSUFFICIENT_FUNDS
        assert table.state.message == "Not enough credits!"

    def test_round_events(self, make_table):
        table = make_table("10S", "6H", "9D", "7C", "KD")
        table.place_bet(50)
        table.deal()
        table.hit()
        types = [e.event_type for e in table.events.history]
        assert types == [
            EventType.BET_PLACED,
            EventType.ROUND_STARTED,
            EventType.PLAYER_HIT,
            EventType.PLAYER_BUSTS,
            EventType.ROUND_ENDED,
        ]
        ended = table.events.history[-1]
        assert ended.data == {"result": "lose", "winnings": -50, "credits": 950}

    def test_blackjack_event(self, make_table):
        table = make_table("AS", "KH", "9D", "7C")
        table.place_bet(100)
        table.deal()
        types = [e.event_type for e in table.events.history]
        assert EventType.PLAYER_BLACKJACK in types
        assert types[-1] == EventType.ROUND_ENDED

    def test_split_events(self, make_table):
        table = make_table("8S", "8H", "9D", "7C", "3D", "KC", "2S")
        table.place_bet(100)
        table.deal()
        table.split()
        table.stand()
        types = [e.event_type for e in table.events.history]
        assert EventType.PLAYER_SPLIT in types
        assert types[-2:] == [EventType.PLAYER_STAND, EventType.HAND_ADVANCED]

    def test_bust_on_first_split_hand(self, make_table):
        # Hand 1: 8,6 then K; hand 2: 8,K
        table = make_table("8S", "8H", "9D", "7C", "6D", "KC", "KS")
        table.place_bet(100)
        table.deal()
        table.split()
        table.hit()

        assert table.state.current_hand_index == 1
        recent = table.events.history[-3:]
        assert [e.event_type for e in recent] == [
            EventType.PLAYER_HIT,
            EventType.PLAYER_BUSTS,
            EventType.HAND_ADVANCED,
        ]
        assert recent[0].data == {"hand_value": 24}
        assert recent[1].data == {"hand_value": 24}

    def test_bust_on_split_hand_that_settles_round(self, make_table):
        # Hand 2 holds 10,A and stands on its own, so the bust ends the round
        table = make_table("10S", "10H", "9D", "7C", "4D", "AC", "KS")
        table.place_bet(100)
        table.deal()
        table.split()
        table.hit()

        assert table.state.game_status != GameStatus.PLAYING
        types = [e.event_type for e in table.events.history]
        hit = next(e for e in table.events.history if e.event_type == EventType.PLAYER_HIT)
        assert hit.data == {"hand_value": 24}
        assert EventType.PLAYER_BUSTS in types
        assert types[-1] == EventType.ROUND_ENDED

    def test_double_bust_on_split_hand(self, make_table):
        table = make_table("8S", "8H", "9D", "7C", "6D", "KC", "QS")
        table.place_bet(100)
        table.deal()
        table.split()
        table.double_down()

        recent = table.events.history[-3:]
        assert [e.event_type for e in recent] == [
            EventType.PLAYER_DOUBLE,
            EventType.PLAYER_BUSTS,
            EventType.HAND_ADVANCED,
        ]
        assert recent[0].data == {"hand_value": 24}

    def test_game_ended_when_broke(self, make_table):
        table = make_table("10S", "7H", "10D", "9C", credits=100)
        seen = []
        table.subscribe(seen.append, EventType.GAME_ENDED)
        table.place_bet(100)
        table.deal()
        table.stand()
        assert table.state.game_status == GameStatus.FINISHED
        assert len(seen) == 1

    def test_toggle_counting_event(self, table):
        table.toggle_counting()
        event = table.events.history[-1]
        assert event.event_type == EventType.COUNTING_TOGGLED
        assert event.data == {"enabled": True}

    def test_new_game_event(self, table):
        table.place_bet(100)
        table.new_game()
        event = table.events.history[-1]
        assert event.event_type == EventType.GAME_STARTED
        assert event.data == {"credits": 900}

    def test_dispatch_logs(self, table, caplog):
        with caplog.at_level(logging.DEBUG, logger="blackjack.game.table"):
            table.place_bet(10)
        assert "place_bet: betting -> betting" in caplog.text
