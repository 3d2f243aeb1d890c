"""
Configuration for the Zod generator pipeline.

Mirrors the options accepted in a ``--config`` JSON file.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum

DEFAULT_OUTPUT_PATH = "generated-schemas.ts"


class OutputMode(str, Enum):
    """Output mode for file generation.

    Controls behavior when the output file already exists.
    """

    FORCE = "force"  # Default: overwrite the existing file
    ERROR_IF_EXISTS = "error"  # Raise error if file exists


@dataclass
class OutputConfig:
    """Configuration for output file handling.

    Attributes:
        path: Output file, relative to the working directory
        mode: How to handle existing output files
        validate_before_write: Whether to sanity-check code before writing
        atomic_write: Whether to use atomic file writes
    """

    path: str = DEFAULT_OUTPUT_PATH
    mode: OutputMode = OutputMode.FORCE
    validate_before_write: bool = True
    atomic_write: bool = True


@dataclass
class CodeGeneratorConfig:
    """Configuration options for code generation."""

    # Add generation comment at top of file
    add_generation_comment: bool = True

    # Setup line emitted before the definitions
    zod_import: str = 'import { z } from "zod"'

    # Suffixes stripped from untyped nodes to find an aliased base schema
    alias_suffixes: list[str] = field(default_factory=lambda: ["Config", "Update"])

    # How to render property names that are not valid identifiers: "quote" or "camel"
    property_name_style: str = "quote"

    # Root schemas that are not emitted
    ignore_schemas: list[str] = field(default_factory=list)

    output: OutputConfig = field(default_factory=OutputConfig)

    @staticmethod
    def from_dict(d: dict) -> CodeGeneratorConfig:
        """Create a config from a dictionary."""
        config = CodeGeneratorConfig()
        for k, v in d.items():
            if k == "output" and isinstance(v, dict):
                mode = v.get("mode", OutputMode.FORCE)
                if isinstance(mode, str):
                    mode = OutputMode(mode)
                config.output = OutputConfig(
                    path=v.get("path", DEFAULT_OUTPUT_PATH),
                    mode=mode,
                    validate_before_write=v.get("validate_before_write", True),
                    atomic_write=v.get("atomic_write", True),
                )
            elif hasattr(config, k):
                setattr(config, k, v)
        return config

    def to_dict(self) -> dict:
        """Convert config to a dictionary."""
        return {
            "add_generation_comment": self.add_generation_comment,
            "zod_import": self.zod_import,
            "alias_suffixes": self.alias_suffixes,
            "property_name_style": self.property_name_style,
            "ignore_schemas": self.ignore_schemas,
            "output": {
                "path": self.output.path,
                "mode": self.output.mode.value,
                "validate_before_write": self.output.validate_before_write,
                "atomic_write": self.output.atomic_write,
            },
        }
