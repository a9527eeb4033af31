"""
Tests for Swiss opening round pairing.
"""
import pytest
import sys
import os

sys.path.insert(0, os.path.join(os.path.dirname(__file__), '..', 'src'))

from brackets.swiss import generate_swiss_round
from brackets.models import BYE, MatchIdAllocator, normalize_players
from conftest import make_player_names


def build(count):
    return generate_swiss_round(normalize_players(make_player_names(count)), MatchIdAllocator())


class TestSwissRound:
    """Tests for generate_swiss_round."""

    def test_single_round(self):
        rounds = build(8)
        assert len(rounds) == 1
        assert rounds[0]['name'] == "Ronda 1"
        assert rounds[0]['bracket'] == 'swiss'

    def test_even_roster(self):
        matches = build(8)[0]['matches']
        assert len(matches) == 4
        assert all(m['winner'] is None for m in matches)

    def test_every_match_tagged(self):
        for match in build(6)[0]['matches']:
            assert match['bracket'] == 'swiss'

    def test_consecutive_pairing(self):
        matches = build(4)[0]['matches']
        assert [(m['top']['name'], m['bottom']['name']) for m in matches] == [
            ("Player 1", "Player 2"), ("Player 3", "Player 4")
        ]

    def test_odd_roster_bye(self):
        matches = build(7)[0]['matches']
        assert len(matches) == 4
        bye_match = matches[-1]
        assert bye_match['top']['name'] == "Player 7"
        assert bye_match['bottom']['name'] == BYE
        assert bye_match['winner'] == "Player 7"

    def test_everyone_plays_once(self):
        names = make_player_names(9)
        matches = generate_swiss_round(normalize_players(names), MatchIdAllocator())[0]['matches']
        seen = [s['name'] for m in matches for s in (m['top'], m['bottom']) if s['name'] != BYE]
        assert sorted(seen) == sorted(names)

    def test_no_bracket_routing(self):
        """Swiss matches do not point at later matches."""
        for match in build(4)[0]['matches']:
            assert 'next_match_id' not in match
