"""
Standings derived from a snapshot of generated rounds.

The calculation only reads the rounds (winners and reported scores) and
can be repeated at any time; it never modifies its input.
"""
from typing import Dict, List, Optional

from .models import is_player_slot, iter_matches

# Formats ranked by 3-1-0 points instead of plain wins
POINT_FORMATS = {'swiss', 'round-robin'}
WIN_POINTS = 3
DRAW_POINTS = 1


def _occupants(match: Dict) -> List[Dict]:
    return match.get('players') or [match['top'], match['bottom']]


def _is_draw(match: Dict, players: List[Dict]) -> bool:
    """A two-player match with equal reported scores and no winner."""
    if match.get('winner') is not None or len(players) != 2 or 'players' in match:
        return False
    top_score = match['top'].get('score')
    bottom_score = match['bottom'].get('score')
    return top_score is not None and bottom_score is not None and top_score == bottom_score


def _collect_stats(rounds: List[Dict]) -> Dict[str, Dict]:
    stats = {}
    for match in iter_matches(rounds):
        players = [slot for slot in _occupants(match) if is_player_slot(slot)]
        for slot in players:
            entry = stats.setdefault(slot['name'], {
                'wins': 0,
                'losses': 0,
                'draws': 0,
                'game_wins': 0,
                'opponents': [],
                'avatar': None,
            })
            if entry['avatar'] is None:
                entry['avatar'] = slot.get('avatar')
            if slot.get('score') is not None:
                entry['game_wins'] += slot['score']
            entry['opponents'].extend(other['name'] for other in players if other['name'] != slot['name'])

        winner = match.get('winner')
        if winner is not None:
            for slot in players:
                if slot['name'] == winner:
                    stats[slot['name']]['wins'] += 1
                else:
                    stats[slot['name']]['losses'] += 1
        elif _is_draw(match, players):
            for slot in players:
                stats[slot['name']]['draws'] += 1
    return stats


def calculate_standings(rounds: List[Dict], format: Optional[str] = None) -> List[Dict]:
    """
    Rank every real participant found in ``rounds``.

    Ordering: more points (wins, or 3-1-0 points for Swiss and round robin),
    fewer losses, higher Buchholz (point formats only), more game wins, then
    the order in which participants first appear. Participants tied on every
    criterion except appearance share a rank (1, 1, 3, ...).
    """
    if not rounds:
        return []

    uses_points = format in POINT_FORMATS
    stats = _collect_stats(rounds)

    rows = []
    for order, (name, entry) in enumerate(stats.items()):
        if uses_points:
            points = entry['wins'] * WIN_POINTS + entry['draws'] * DRAW_POINTS
        else:
            points = entry['wins']
        buchholz = sum(stats[opponent]['wins'] for opponent in entry['opponents'])
        rows.append({
            'name': name,
            'rank': 0,
            'wins': entry['wins'],
            'losses': entry['losses'],
            'draws': entry['draws'],
            'points': points,
            'buchholz': buchholz,
            'game_wins': entry['game_wins'],
            'avatar': entry['avatar'],
            '_order': order,
        })

    def ranking_key(row):
        return (
            -row['points'],
            row['losses'],
            -row['buchholz'] if uses_points else 0,
            -row['game_wins'],
        )

    rows.sort(key=lambda row: ranking_key(row) + (row['_order'],))

    previous_key = None
    for index, row in enumerate(rows):
        key = ranking_key(row)
        if key != previous_key:
            row['rank'] = index + 1
            previous_key = key
        else:
            row['rank'] = rows[index - 1]['rank']
        del row['_order']
    return rows
