"""OpenAPI to Zod Generator

Generates Zod validators and inferred TypeScript types from the
``components.schemas`` of OpenAPI documents, following $ref across files.
"""

__version__ = "1.0.0"

from .pipeline import (  # noqa: E402
    AtomicWriter,
    CodeGeneratorConfig,
    Diagnostics,
    GenerationError,
    OutputConfig,
    OutputMode,
    PipelineGenerator,
)

__all__ = [
    "PipelineGenerator",
    "CodeGeneratorConfig",
    "OutputConfig",
    "OutputMode",
    "Diagnostics",
    "GenerationError",
    "AtomicWriter",
]
