"""
Tests for free-for-all staging.
"""
import pytest
import sys
import os
import yaml

sys.path.insert(0, os.path.join(os.path.dirname(__file__), '..', 'src'))

from brackets.free_for_all import split_groups, generate_free_for_all_rounds
from brackets.models import BYE, TBD, MatchIdAllocator, normalize_players


def roster(count):
    return normalize_players([{'name': f"P{i + 1}", 'avatar': None, 'email': f"p{i}@t.com"} for i in range(count)])


class TestSplitGroups:

    def test_even_split(self):
        assert split_groups(16, 8) == [8, 8]

    def test_near_equal_groups(self):
        assert split_groups(20, 8) == [7, 7, 6]
        assert split_groups(9, 8) == [5, 4]


class TestFreeForAll:
    """Tests for generate_free_for_all_rounds."""

    def test_sixteen_players(self):
        rounds = generate_free_for_all_rounds(roster(16), MatchIdAllocator())
        assert rounds[0]['name'] == "Fase 1"
        assert len(rounds[0]['matches']) == 2
        assert len(rounds[0]['matches'][0]['players']) == 8
        assert rounds[1]['name'] == "Final"
        assert len(rounds[1]['matches']) == 1
        assert len(rounds) == 2

    def test_final_has_advancing_players(self):
        rounds = generate_free_for_all_rounds(roster(16), MatchIdAllocator())
        final = rounds[1]['matches'][0]
        assert len(final['players']) == 8
        assert all(slot['name'] == TBD for slot in final['players'])
        assert 'advancing' not in final

    def test_small_roster_is_only_a_final(self):
        rounds = generate_free_for_all_rounds(roster(5), MatchIdAllocator())
        assert [r['name'] for r in rounds] == ["Final"]
        assert [s['name'] for s in rounds[0]['matches'][0]['players']] == ["P1", "P2", "P3", "P4", "P5"]

    def test_multiple_stages(self):
        rounds = generate_free_for_all_rounds(roster(40), MatchIdAllocator())
        assert [r['name'] for r in rounds] == ["Fase 1", "Fase 2", "Fase 3", "Final"]
        assert [len(r['matches']) for r in rounds] == [5, 3, 2, 1]

    def test_tags_and_top_bottom(self):
        rounds = generate_free_for_all_rounds(roster(16), MatchIdAllocator())
        first = rounds[0]['matches'][0]
        assert first['bracket'] == 'free-for-all'
        assert first['top']['name'] == "P1"
        assert first['bottom']['name'] == "P2"
        assert first['advancing'] == 4
        assert first['winner'] is None

    def test_slots_are_not_shared(self):
        """top, bottom and the players list hold independent slot copies."""
        slots = roster(16)
        rounds = generate_free_for_all_rounds(slots, MatchIdAllocator())
        first = rounds[0]['matches'][0]
        assert first['top'] == first['players'][0]
        assert first['top'] is not first['players'][0]
        assert first['bottom'] is not first['players'][1]
        assert first['players'][0] is not slots[0]
        first['top']['score'] = 3
        assert first['players'][0]['score'] is None

    def test_yaml_dump_has_no_aliases(self):
        rounds = generate_free_for_all_rounds(roster(16), MatchIdAllocator())
        dumped = yaml.safe_dump(rounds)
        assert '&id' not in dumped
        assert '*id' not in dumped

    def test_every_player_once_in_first_stage(self):
        rounds = generate_free_for_all_rounds(roster(20), MatchIdAllocator())
        names = [s['name'] for m in rounds[0]['matches'] for s in m['players']]
        assert names == [f"P{i + 1}" for i in range(20)]

    def test_lone_player_group_wins_by_bye(self):
        rounds = generate_free_for_all_rounds(roster(3), MatchIdAllocator(), group_size=2)
        lone = rounds[0]['matches'][1]
        assert lone['players'][0]['name'] == "P3"
        assert lone['bottom']['name'] == BYE
        assert lone['winner'] == "P3"

    def test_unique_ids(self):
        rounds = generate_free_for_all_rounds(roster(40), MatchIdAllocator())
        ids = [m['id'] for r in rounds for m in r['matches']]
        assert len(ids) == len(set(ids))
