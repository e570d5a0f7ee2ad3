"""
Computation combinators (bind/return families) built on the capability engine.
"""

from object_capability.combinators.monad import ABSENT, fallible, monadic, optional, sequence, singular

__all__ = [
    "ABSENT",
    "fallible",
    "monadic",
    "optional",
    "sequence",
    "singular",
]
