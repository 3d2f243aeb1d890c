"""
Pipeline - OpenAPI schema to Zod generator.

The generator runs in phases over run-scoped state:

1. Parser: parse ``components.schemas`` into tagged schema nodes
2. Collector: follow references (across files) and build the registry
3. Backend: convert every collected schema into a Zod expression
4. Emitter: order definitions by dependency and render the output
5. Writer: optionally validate and atomically write the result
"""

from __future__ import annotations

from .config import CodeGeneratorConfig, OutputConfig, OutputMode
from .diagnostics import Diagnostic, Diagnostics
from .errors import GenerationError, OutputValidationError, SchemaDocumentError
from .generator import PipelineGenerator
from .writer import AtomicWriter

__all__ = [
    "PipelineGenerator",
    "CodeGeneratorConfig",
    "OutputConfig",
    "OutputMode",
    "Diagnostic",
    "Diagnostics",
    "GenerationError",
    "SchemaDocumentError",
    "OutputValidationError",
    "AtomicWriter",
]
