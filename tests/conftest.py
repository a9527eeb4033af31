"""
Shared pytest fixtures for bracket engine tests.

Running tests:
    pytest tests/
"""
import pytest
import sys
import os

# Add src directory to path for imports
sys.path.insert(0, os.path.join(os.path.dirname(__file__), '..', 'src'))


def make_player_names(count):
    return [f"Player {i + 1}" for i in range(count)]


def make_player_objects(count):
    return [
        {'name': f"Player {i + 1}", 'avatar': f"https://example.com/avatar{i + 1}.png"}
        for i in range(count)
    ]


@pytest.fixture
def player_names():
    """Factory for bare-string rosters."""
    return make_player_names


@pytest.fixture
def player_objects():
    """Factory for rosters of player dicts with avatars."""
    return make_player_objects


@pytest.fixture
def client():
    """Create a Flask test client."""
    from app import app
    app.config['TESTING'] = True
    with app.test_client() as client:
        yield client
