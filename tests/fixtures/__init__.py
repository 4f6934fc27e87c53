"""Test fixtures for govm tests.

Fixtures are organized by type:

- archives: In-memory release tarballs
- directories: Base directories and fake installations

Fixtures are registered for every test through tests/conftest.py.
"""

__all__ = [
    "archives",
    "directories",
]
