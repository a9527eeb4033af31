"""
Double elimination bracket generation.

In double elimination:
- Entrants must lose twice to be eliminated
- Winners Bracket: entrants that haven't lost yet
- Losers Bracket: entrants that have lost once
- Grand Final: Winners bracket champion vs Losers bracket champion

Rounds come back in the order winners, losers, grand final, and all of them
draw match ids from the same allocator.
"""
import logging
import math
from typing import Dict, List

from .elimination import (
    WINNERS,
    _feeder_slot,
    build_elimination_rounds,
    get_round_name,
)
from .models import (
    BYE,
    LOSERS_CHAMPION,
    WINNERS_CHAMPION,
    MatchIdAllocator,
    bye_slot,
    make_match,
    make_round,
    make_slot,
    tbd_slot,
)

logger = logging.getLogger(__name__)

LOSERS = 'losers'
FINALS = 'finals'
GRAND_FINAL_NAME = 'Gran Final'


def get_winners_round_name(teams_in_round: int, bracket_size: int) -> str:
    """Get the name for a winners bracket round."""
    return f"W {get_round_name(teams_in_round, bracket_size)}"


def get_losers_round_name(round_num: int, total_losers_rounds: int) -> str:
    """Get the name for a losers bracket round (0-indexed)."""
    rounds_from_end = total_losers_rounds - round_num - 1
    if rounds_from_end == 0:
        return "L Final"
    elif rounds_from_end == 1:
        return "L Semifinales"
    else:
        return f"L Ronda {round_num + 1}"


def calculate_losers_bracket_rounds(bracket_size: int) -> int:
    """
    Calculate number of rounds in losers bracket.
    For N entrants in winners bracket (power of 2, N >= 4):
    - Winners bracket has log2(N) rounds
    - Losers bracket has 2 * (log2(N) - 1) rounds

    Pattern: minor, major, minor, major, ... ending with a major round.
    A 2-entrant bracket still gets a single losers round for the
    winners-final loser.
    """
    if bracket_size < 2:
        return 0
    if bracket_size == 2:
        return 1
    winners_rounds = int(math.log2(bracket_size))
    return 2 * (winners_rounds - 1)


def _loser_slot(winners_match: Dict) -> Dict:
    """Slot for whoever drops out of a winners match: a BYE if one played in it."""
    if BYE in (winners_match['top']['name'], winners_match['bottom']['name']):
        return bye_slot()
    return tbd_slot()


def _drop_in(winners_match: Dict, losers_match: Dict) -> None:
    winners_match['loser_match_id'] = losers_match['id']


def _advance(feeder: Dict, target: Dict) -> None:
    feeder['next_match_id'] = target['id']


def _cross_drop_ins(winners_matches: List[Dict]) -> List[Dict]:
    """
    Order winners matches for a major round: the losers of pair (2i, 2i+1)
    swap places, so losers match 2i receives the loser of winners match 2i+1
    and the other way round. The next minor round merges exactly those two
    losers matches. A single match stays in place.
    """
    if len(winners_matches) < 2:
        return list(winners_matches)
    return [winners_matches[i ^ 1] for i in range(len(winners_matches))]


def _generate_losers_bracket(winners_rounds: List[Dict], allocator: MatchIdAllocator) -> List[Dict]:
    """
    Generate losers bracket rounds following standard double elimination format.

    The losers bracket alternates between:
    - Minor rounds (even indices: 0, 2, 4...): only losers bracket entrants compete
    - Major rounds (odd indices: 1, 3, 5...): losers from the winners bracket drop in

    For an 8-entrant bracket:
    - L Ronda 1 (minor): 4 W Cuartos losers pair off -> 2 matches
    - L Ronda 2 (major): 2 W Semifinales losers + 2 L Ronda 1 winners -> 2 matches
    - L Semifinales (minor): 2 L Ronda 2 winners -> 1 match
    - L Final (major): W Final loser + L Semifinales winner -> 1 match

    Before each major round, losers match i holds only entrants who dropped
    out of winners matches under winners match i of that round. Drop-ins are
    crossed with the neighbouring match (see _cross_drop_ins), so in every
    major round but the losers final a drop-in never faces an entrant they
    already beat.
    """
    bracket_size = len(winners_rounds[0]['matches']) * 2
    total_losers_rounds = calculate_losers_bracket_rounds(bracket_size)

    if bracket_size == 2:
        final = winners_rounds[-1]['matches'][0]
        match = make_match(allocator, _loser_slot(final), bye_slot(), LOSERS)
        _drop_in(final, match)
        match['next_match_id'] = None
        return [make_round(get_losers_round_name(0, 1), LOSERS, [match])]

    losers_rounds = []
    prev_matches = []
    for round_num in range(total_losers_rounds):
        round_name = get_losers_round_name(round_num, total_losers_rounds)
        round_matches = []

        if round_num == 0:
            dropped = winners_rounds[0]['matches']
            for i in range(len(dropped) // 2):
                match = make_match(allocator, _loser_slot(dropped[i * 2]), _loser_slot(dropped[i * 2 + 1]), LOSERS)
                _drop_in(dropped[i * 2], match)
                _drop_in(dropped[i * 2 + 1], match)
                round_matches.append(match)

        elif round_num % 2 == 1:
            winners_round = winners_rounds[(round_num + 1) // 2]
            dropped = _cross_drop_ins(winners_round['matches'])
            for dropped_match, feeder in zip(dropped, prev_matches):
                match = make_match(allocator, _loser_slot(dropped_match), _feeder_slot(feeder), LOSERS)
                _drop_in(dropped_match, match)
                _advance(feeder, match)
                round_matches.append(match)

        else:
            for i in range(len(prev_matches) // 2):
                match = make_match(allocator, _feeder_slot(prev_matches[i * 2]), _feeder_slot(prev_matches[i * 2 + 1]), LOSERS)
                _advance(prev_matches[i * 2], match)
                _advance(prev_matches[i * 2 + 1], match)
                round_matches.append(match)

        losers_rounds.append(make_round(round_name, LOSERS, round_matches))
        prev_matches = round_matches

    prev_matches[0]['next_match_id'] = None
    return losers_rounds


def generate_double_elimination_rounds(slots: List[Dict], allocator: MatchIdAllocator) -> List[Dict]:
    """
    Generate a complete double elimination bracket from normalized slots.

    Returns the winners rounds ("W ..."), then the losers rounds ("L ..."),
    then a single "Gran Final" round whose slots stay as bracket champion
    placeholders until both champions are known.
    """
    winners_rounds = build_elimination_rounds(slots, allocator, WINNERS, prefix="W ")
    losers_rounds = _generate_losers_bracket(winners_rounds, allocator)

    grand_final = make_match(allocator, make_slot(WINNERS_CHAMPION), make_slot(LOSERS_CHAMPION), FINALS)
    grand_final['next_match_id'] = None
    _advance(winners_rounds[-1]['matches'][0], grand_final)
    _advance(losers_rounds[-1]['matches'][0], grand_final)

    rounds = winners_rounds + losers_rounds + [make_round(GRAND_FINAL_NAME, FINALS, [grand_final])]
    logger.debug("Double elimination: %d entrants, %d winners rounds, %d losers rounds, %d matches",
                 len(slots), len(winners_rounds), len(losers_rounds), allocator.issued)
    return rounds
