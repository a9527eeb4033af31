"""
Single elimination bracket generation.

Entrants are placed in input order (straight seeding); the roster is padded
with BYE slots up to the next power of two and the padding always goes after
the real entrants.
"""
import logging
import math
from typing import Dict, List

from .models import (
    MatchIdAllocator,
    bye_slot,
    copy_slot,
    make_match,
    make_round,
    tbd_slot,
)

logger = logging.getLogger(__name__)

WINNERS = 'winners'


def get_round_name(teams_in_round: int, bracket_size: int) -> str:
    """Get the name of a round based on number of teams still in it."""
    if teams_in_round == 2:
        return "Final"
    elif teams_in_round == 4:
        return "Semifinales"
    elif teams_in_round == 8:
        return "Cuartos"
    else:
        round_number = int(math.log2(bracket_size)) - int(math.log2(teams_in_round)) + 1
        return f"Ronda {round_number}"


def calculate_bracket_size(num_teams: int) -> int:
    """Calculate the bracket size (next power of 2)."""
    if num_teams <= 0:
        return 0
    return 2 ** math.ceil(math.log2(num_teams))


def calculate_byes(num_teams: int) -> int:
    """Calculate number of byes needed."""
    bracket_size = calculate_bracket_size(num_teams)
    return bracket_size - num_teams


def pad_with_byes(slots: List[Dict]) -> List[Dict]:
    """Return the slots followed by enough BYE slots to fill a power-of-2 bracket."""
    bracket_size = calculate_bracket_size(max(len(slots), 2))
    return list(slots) + [bye_slot() for _ in range(bracket_size - len(slots))]


def create_first_round_matches(slots: List[Dict], allocator: MatchIdAllocator, bracket: str = WINNERS) -> List[Dict]:
    """
    Pad the roster and pair it sequentially: (1, 2), (3, 4), ...

    A match against a single BYE is won by the real entrant immediately.
    BYE against BYE is kept as an empty match with no winner.
    """
    padded = pad_with_byes(slots)
    matches = []
    for i in range(0, len(padded), 2):
        matches.append(make_match(allocator, padded[i], padded[i + 1], bracket))
    return matches


def _feeder_slot(feeder: Dict) -> Dict:
    """Slot for the next round: the bye winner if already known, else TBD."""
    if feeder['winner'] is not None:
        winner_side = feeder['top'] if feeder['top']['name'] == feeder['winner'] else feeder['bottom']
        return copy_slot(winner_side)
    return tbd_slot()


def build_elimination_rounds(slots: List[Dict], allocator: MatchIdAllocator,
                             bracket: str = WINNERS, prefix: str = "") -> List[Dict]:
    """
    Build every round of a knockout thread.

    Round 1 comes from the padded roster; each later round has half as many
    matches, with slots pre-filled from bye winners of the round before.
    Every match gets a ``next_match_id`` pointing at the match its winner
    moves into (None for the final).
    """
    first_round = create_first_round_matches(slots, allocator, bracket)
    bracket_size = len(first_round) * 2
    total_rounds = int(math.log2(bracket_size))

    rounds = []
    current_matches = first_round
    teams_in_round = bracket_size

    for round_num in range(total_rounds):
        round_name = prefix + get_round_name(teams_in_round, bracket_size)
        if round_num > 0:
            prev_matches = current_matches
            current_matches = []
            for i in range(len(prev_matches) // 2):
                top = _feeder_slot(prev_matches[i * 2])
                bottom = _feeder_slot(prev_matches[i * 2 + 1])
                match = make_match(allocator, top, bottom, bracket)
                prev_matches[i * 2]['next_match_id'] = match['id']
                prev_matches[i * 2 + 1]['next_match_id'] = match['id']
                current_matches.append(match)
        rounds.append(make_round(round_name, bracket, current_matches))
        teams_in_round //= 2

    current_matches[0]['next_match_id'] = None
    return rounds


def generate_single_elimination_rounds(slots: List[Dict], allocator: MatchIdAllocator) -> List[Dict]:
    """Generate a single elimination bracket from normalized slots."""
    rounds = build_elimination_rounds(slots, allocator)
    logger.debug("Single elimination: %d entrants, %d byes, %d rounds",
                 len(slots), calculate_byes(max(len(slots), 2)), len(rounds))
    return rounds
