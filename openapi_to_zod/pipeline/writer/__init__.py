"""
Output writing for generated code.
"""

from __future__ import annotations

from .atomic_writer import AtomicWriter, check_brackets

__all__ = [
    "AtomicWriter",
    "check_brackets",
]
