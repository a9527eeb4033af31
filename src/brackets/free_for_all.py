"""
Free-for-all staging: many entrants share one match (a lobby, a heat).

Entrants are split into consecutive groups of at most ``group_size``; the
top half of every group moves on until a single group is left for the Final.
"""
import math
from typing import Dict, List

from .models import MatchIdAllocator, bye_slot, copy_slot, make_match, make_round, tbd_slot

FREE_FOR_ALL = 'free-for-all'
DEFAULT_GROUP_SIZE = 8


def split_groups(count: int, group_size: int) -> List[int]:
    """Split ``count`` entrants into the fewest near-equal groups of at most ``group_size``."""
    num_groups = math.ceil(count / group_size)
    base, extra = divmod(count, num_groups)
    return [base + 1] * extra + [base] * (num_groups - extra)


def _group_match(allocator: MatchIdAllocator, players: List[Dict]) -> Dict:
    bottom = copy_slot(players[1]) if len(players) > 1 else bye_slot()
    match = make_match(allocator, copy_slot(players[0]), bottom, FREE_FOR_ALL)
    match['players'] = [copy_slot(player) for player in players]
    return match


def generate_free_for_all_rounds(slots: List[Dict], allocator: MatchIdAllocator,
                                 group_size: int = DEFAULT_GROUP_SIZE) -> List[Dict]:
    """
    Generate the free-for-all stages ("Fase 1", "Fase 2", ..., "Final").

    Only the first stage knows its occupants; later stages are filled with
    TBD slots. Non-final matches record how many of their players advance.
    """
    group_size = max(group_size, 2)
    rounds = []
    count = len(slots)
    stage = 1

    while True:
        is_final = count <= group_size
        groups = [count] if is_final else split_groups(count, group_size)
        matches = []
        offset = 0
        for size in groups:
            if stage == 1:
                players = list(slots[offset:offset + size])
            else:
                players = [tbd_slot() for _ in range(size)]
            offset += size
            match = _group_match(allocator, players)
            if not is_final:
                match['advancing'] = math.ceil(size / 2)
            matches.append(match)

        round_name = "Final" if is_final else f"Fase {stage}"
        rounds.append(make_round(round_name, FREE_FOR_ALL, matches))
        if is_final:
            break
        count = sum(match['advancing'] for match in matches)
        stage += 1

    return rounds
