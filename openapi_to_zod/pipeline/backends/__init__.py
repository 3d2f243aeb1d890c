"""
Code generation backends.

Contains the Zod expression converter and the dependency-ordered emitter.
"""

from __future__ import annotations

from .emitter import GeneratedDefinition, ZodEmitter
from .zod_backend import OPEN_OBJECT, OPEN_RECORD, WILDCARD, ZodBackend

__all__ = [
    "GeneratedDefinition",
    "ZodBackend",
    "ZodEmitter",
    "WILDCARD",
    "OPEN_OBJECT",
    "OPEN_RECORD",
]
