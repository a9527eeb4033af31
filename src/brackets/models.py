"""
Slot, match and round building blocks shared by every bracket format.

Everything produced here is plain JSON-serializable data (dicts, lists,
strings, ints and None) so callers can persist it as-is.
"""
import logging
from collections.abc import Mapping
from typing import Any, Dict, List, Optional

logger = logging.getLogger(__name__)

BYE = 'BYE'
TBD = 'TBD'
WINNERS_CHAMPION = 'Winners Bracket Champion'
LOSERS_CHAMPION = 'Losers Bracket Champion'

# Slot names that never belong to a real contestant
PLACEHOLDER_NAMES = {BYE, TBD, WINNERS_CHAMPION, LOSERS_CHAMPION}


class BracketInvariantError(AssertionError):
    """Raised when a generated bracket breaks one of its structural guarantees.

    This is a programming error inside the engine, never a consequence of
    user input, so it derives from AssertionError.
    """


class MatchIdAllocator:
    """Hands out strictly increasing match ids for one bracket generation."""

    def __init__(self, start=1):
        self._next = start

    def next_id(self) -> int:
        match_id = self._next
        self._next += 1
        return match_id

    @property
    def issued(self) -> int:
        """Number of ids issued so far."""
        return self._next - 1

    def __repr__(self):
        return f"MatchIdAllocator(next={self._next})"


def make_slot(name: str, **extra) -> Dict[str, Any]:
    """Create a slot with no score. Extra keyword fields are kept verbatim."""
    slot = dict(extra)
    slot['name'] = name
    slot['score'] = None
    slot.setdefault('avatar', None)
    return slot


def bye_slot() -> Dict[str, Any]:
    return make_slot(BYE)


def tbd_slot() -> Dict[str, Any]:
    return make_slot(TBD)


def copy_slot(slot: Dict[str, Any]) -> Dict[str, Any]:
    """Copy a slot so the copy can be scored independently of the original."""
    return dict(slot)


def normalize_player(entry) -> Optional[Dict[str, Any]]:
    """
    Convert one roster entry into a slot.

    Strings become ``{'name': entry, 'score': None, 'avatar': None}``.
    Mappings keep every key they carry, with ``score`` reset to None and
    ``avatar`` defaulting to None. Returns None for entries without a name.
    """
    if entry is None:
        return None
    if isinstance(entry, str):
        return {'name': entry, 'score': None, 'avatar': None}
    if isinstance(entry, Mapping):
        name = entry.get('name')
        if name is None or name == '':
            return None
        slot = dict(entry)
        slot['name'] = str(name)
        slot['score'] = None
        slot['avatar'] = entry.get('avatar')
        return slot
    return {'name': str(entry), 'score': None, 'avatar': None}


def normalize_players(seeded_players) -> List[Dict[str, Any]]:
    """Normalize a whole roster in input order, skipping unusable entries."""
    slots = []
    for position, entry in enumerate(seeded_players or []):
        slot = normalize_player(entry)
        if slot is None:
            logger.warning("Skipping roster entry %d without a name: %r", position + 1, entry)
            continue
        slots.append(slot)
    return slots


def make_match(allocator: MatchIdAllocator, top: Dict, bottom: Dict, bracket: str) -> Dict[str, Any]:
    """
    Create a match between two slots.

    A match with exactly one BYE against a known player is decided on the
    spot in that player's favour.
    """
    match = {
        'id': allocator.next_id(),
        'top': top,
        'bottom': bottom,
        'winner': None,
        'bracket': bracket,
    }
    bye_winner = get_bye_winner(match)
    if bye_winner is not None:
        match['winner'] = bye_winner['name']
    return match


def make_round(name: str, bracket: str, matches: List[Dict]) -> Dict[str, Any]:
    return {
        'name': name,
        'bracket': bracket,
        'matches': matches,
    }


def is_player_slot(slot: Dict) -> bool:
    """True when the slot holds a real contestant rather than a placeholder."""
    return slot.get('name') not in PLACEHOLDER_NAMES


def is_bye_match(match: Dict) -> bool:
    """True when exactly one side of the match is a BYE."""
    return (match['top']['name'] == BYE) != (match['bottom']['name'] == BYE)


def get_bye_winner(match: Dict) -> Optional[Dict]:
    """Return the slot that wins a bye match, or None if nobody wins by bye yet."""
    if not is_bye_match(match):
        return None
    other = match['bottom'] if match['top']['name'] == BYE else match['top']
    if not is_player_slot(other):
        # BYE against a pending slot: decided once the slot is filled
        return None
    return other


def iter_matches(rounds: List[Dict]):
    for round_data in rounds:
        for match in round_data['matches']:
            yield match
