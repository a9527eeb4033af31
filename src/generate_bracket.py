"""
Print the bracket (or standings) for a roster stored in a YAML file.

Usage:
    python src/generate_bracket.py roster.yaml
    python src/generate_bracket.py roster.yaml --format double-elimination
    python src/generate_bracket.py roster.yaml --output json
    python src/generate_bracket.py roster.yaml --standings

The roster file is either a list of players (names or mappings with
``name``, ``avatar``, ``email``...) or a mapping with a ``players`` list and
an optional ``format``.
"""
import argparse
import json
import logging
import sys
import yaml
from brackets import SUPPORTED_FORMATS, calculate_standings, generate_rounds


def load_roster(file_path):
    """Return (players, format) from a roster YAML file."""
    with open(file_path, mode='r', encoding='utf-8') as file:
        data = yaml.safe_load(file)
    if data is None:
        return [], None
    if isinstance(data, list):
        return data, None
    if isinstance(data, dict):
        return data.get('players') or [], data.get('format')
    raise ValueError(f"{file_path}: expected a list of players or a mapping with 'players'")


def format_rounds(rounds):
    """Render rounds as plain text, one 'Top vs Bottom' line per match."""
    lines = []
    for round_data in rounds:
        if lines:
            lines.append('')
        lines.append(f"# {round_data['name']}")
        for match in round_data['matches']:
            if 'players' in match:
                names = ', '.join(slot['name'] for slot in match['players'])
                line = f"[{match['id']}] {names}"
            else:
                line = f"[{match['id']}] {match['top']['name']} vs {match['bottom']['name']}"
            if match['winner']:
                line += f" -> {match['winner']}"
            lines.append(line)
    return '\n'.join(lines)


def format_standings(standings):
    lines = []
    for row in standings:
        lines.append(f"{row['rank']:>3}. {row['name']}  W{row['wins']} L{row['losses']} D{row['draws']}  pts {row['points']}")
    return '\n'.join(lines)


def main(argv=None):
    parser = argparse.ArgumentParser(description='Generate tournament rounds from a YAML roster')
    parser.add_argument('roster', help='Path to the roster YAML file')
    parser.add_argument('--format', choices=SUPPORTED_FORMATS, help='Tournament format (overrides the file)')
    parser.add_argument('--output', choices=['text', 'yaml', 'json'], default='text', help='Output format')
    parser.add_argument('--standings', action='store_true', help='Print standings instead of rounds')
    parser.add_argument('--verbose', action='store_true', help='Enable debug logging')
    args = parser.parse_args(argv)

    logging.basicConfig(level=logging.DEBUG if args.verbose else logging.WARNING,
                        format='%(levelname)s %(name)s: %(message)s')

    try:
        players, file_format = load_roster(args.roster)
    except (OSError, yaml.YAMLError, ValueError) as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    tournament_format = args.format or file_format
    rounds = generate_rounds(len(players), players, tournament_format)
    if not rounds:
        print("Not enough players to generate a bracket.", file=sys.stderr)
        return 1

    result = calculate_standings(rounds, tournament_format) if args.standings else rounds
    if args.output == 'json':
        print(json.dumps(result, indent=2))
    elif args.output == 'yaml':
        print(yaml.safe_dump(result, default_flow_style=False, sort_keys=False), end='')
    elif args.standings:
        print(format_standings(result))
    else:
        print(format_rounds(result))
    return 0


if __name__ == '__main__':
    sys.exit(main())
