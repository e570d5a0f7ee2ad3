"""Unit tests for the capability engine.

Fast, isolated tests for individual components.
No network; filesystem only through temporary directories.
"""
