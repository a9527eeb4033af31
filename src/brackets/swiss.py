"""
Swiss pairing for the opening round.

Only round 1 is generated here. Later rounds depend on reported results, so
the caller re-ranks the roster and asks for a fresh single-round pairing.
"""
import logging
from typing import Dict, List

from .models import MatchIdAllocator, bye_slot, make_match, make_round

logger = logging.getLogger(__name__)

SWISS = 'swiss'
FIRST_ROUND_NAME = 'Ronda 1'


def generate_swiss_round(slots: List[Dict], allocator: MatchIdAllocator) -> List[Dict]:
    """
    Pair consecutive entrants: (1, 2), (3, 4), ...

    With an odd roster the last entrant plays a BYE in the bottom slot and
    is credited with the win straight away.
    """
    matches = []
    for i in range(0, len(slots) - 1, 2):
        matches.append(make_match(allocator, slots[i], slots[i + 1], SWISS))
    if len(slots) % 2 == 1:
        matches.append(make_match(allocator, slots[-1], bye_slot(), SWISS))
        logger.debug("Swiss: %s receives the bye", slots[-1]['name'])
    return [make_round(FIRST_ROUND_NAME, SWISS, matches)]
