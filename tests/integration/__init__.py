"""Integration tests: shipped examples composed end to end."""
