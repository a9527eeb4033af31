"""
Round robin scheduling (circle method).
"""
from typing import Dict, List

from .models import BYE, MatchIdAllocator, bye_slot, copy_slot, make_match, make_round

ROUND_ROBIN = 'round-robin'


def generate_round_robin_rounds(slots: List[Dict], allocator: MatchIdAllocator) -> List[Dict]:
    """
    Generate a full round robin where every entrant meets every other once.

    The first entrant stays fixed while the rest rotate one position per
    round. An odd roster gets a BYE partner, so each round someone sits out
    and is credited with the win. The BYE always takes the bottom slot.
    """
    rotation = list(slots)
    if len(rotation) % 2 == 1:
        rotation.append(bye_slot())
    num_entrants = len(rotation)

    rounds = []
    for round_num in range(num_entrants - 1):
        matches = []
        for i in range(num_entrants // 2):
            top, bottom = rotation[i], rotation[num_entrants - 1 - i]
            if top['name'] == BYE:
                top, bottom = bottom, top
            matches.append(make_match(allocator, copy_slot(top), copy_slot(bottom), ROUND_ROBIN))
        rounds.append(make_round(f"Ronda {round_num + 1}", ROUND_ROBIN, matches))
        rotation = [rotation[0], rotation[-1]] + rotation[1:-1]
    return rounds
