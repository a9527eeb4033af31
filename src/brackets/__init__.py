"""
Bracket construction and standings engine.
"""
from .formats import DEFAULT_FORMAT, SUPPORTED_FORMATS, generate_rounds, verify_rounds
from .models import BracketInvariantError
from .standings import calculate_standings

__all__ = [
    'DEFAULT_FORMAT',
    'SUPPORTED_FORMATS',
    'BracketInvariantError',
    'calculate_standings',
    'generate_rounds',
    'verify_rounds',
]
