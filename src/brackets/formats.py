"""
Entry point that turns a roster and a format name into a list of rounds.
"""
import logging
from typing import Dict, List, Optional

from .double_elimination import generate_double_elimination_rounds
from .elimination import generate_single_elimination_rounds
from .free_for_all import DEFAULT_GROUP_SIZE, generate_free_for_all_rounds
from .models import BracketInvariantError, MatchIdAllocator, get_bye_winner, iter_matches, normalize_players
from .round_robin import generate_round_robin_rounds
from .swiss import generate_swiss_round

logger = logging.getLogger(__name__)

SINGLE_ELIMINATION = 'single-elimination'
DOUBLE_ELIMINATION = 'double-elimination'
SWISS = 'swiss'
ROUND_ROBIN = 'round-robin'
FREE_FOR_ALL = 'free-for-all'

DEFAULT_FORMAT = SINGLE_ELIMINATION
SUPPORTED_FORMATS = [SINGLE_ELIMINATION, DOUBLE_ELIMINATION, SWISS, ROUND_ROBIN, FREE_FOR_ALL]


def resolve_format(format: Optional[str]) -> str:
    """Map a requested format onto a supported one; unknown formats fall back to single elimination."""
    if format is None:
        return DEFAULT_FORMAT
    if format not in SUPPORTED_FORMATS:
        logger.warning("Unknown tournament format %r, using %s", format, DEFAULT_FORMAT)
        return DEFAULT_FORMAT
    return format


def verify_rounds(rounds: List[Dict]) -> None:
    """
    Check the structural guarantees of freshly generated rounds.

    Raises BracketInvariantError on a duplicate match id, or on a bye
    match whose winner is not the player facing the BYE.

    A bye match here means a single BYE against a known player. A BYE
    against a pending slot (``TBD`` or a champion placeholder) is left
    with ``winner`` None and passes: it only resolves once advancement
    fills the slot. Double elimination produces these in the losers
    bracket when a winners match already held a BYE, and for two entrants.
    """
    seen_ids = set()
    for match in iter_matches(rounds):
        if match['id'] in seen_ids:
            raise BracketInvariantError(f"Duplicate match id {match['id']}")
        seen_ids.add(match['id'])

        bye_winner = get_bye_winner(match)
        if bye_winner is not None and match['winner'] != bye_winner['name']:
            raise BracketInvariantError(
                f"Bye match {match['id']} has winner {match['winner']!r}, expected {bye_winner['name']!r}"
            )


def generate_rounds(num_participants: int, seeded_players: Optional[List] = None,
                    format: Optional[str] = None, group_size: int = DEFAULT_GROUP_SIZE) -> List[Dict]:
    """
    Generate every round of a tournament.

    Args:
        num_participants: Declared roster size. Below 2 nothing is generated.
        seeded_players: Names or dicts (``name`` plus optional ``avatar``,
            ``email`` and any other fields), in seeding order.
        format: One of SUPPORTED_FORMATS. Defaults to single elimination.
        group_size: Players per match for the free-for-all format.

    Returns:
        A list of round dicts, or ``[]`` when there is nothing to play.
        When ``num_participants`` and the roster length disagree, the roster
        wins.
    """
    if not seeded_players or num_participants is None or num_participants < 2:
        return []

    slots = normalize_players(seeded_players)
    if len(slots) < 2:
        return []
    if len(slots) != num_participants:
        logger.debug("Roster has %d entrants but %d were declared; using the roster", len(slots), num_participants)

    resolved = resolve_format(format)
    allocator = MatchIdAllocator()

    if resolved == DOUBLE_ELIMINATION:
        rounds = generate_double_elimination_rounds(slots, allocator)
    elif resolved == SWISS:
        rounds = generate_swiss_round(slots, allocator)
    elif resolved == ROUND_ROBIN:
        rounds = generate_round_robin_rounds(slots, allocator)
    elif resolved == FREE_FOR_ALL:
        rounds = generate_free_for_all_rounds(slots, allocator, group_size)
    else:
        rounds = generate_single_elimination_rounds(slots, allocator)

    verify_rounds(rounds)
    logger.debug("Generated %s bracket: %d entrants, %d rounds, %d matches",
                 resolved, len(slots), len(rounds), allocator.issued)
    return rounds
