"""
Pipeline generator: runs the phases for one schema document.
"""

from __future__ import annotations

from collections.abc import Mapping
from pathlib import Path
from typing import Any

import yaml

from .. import __version__
from ..cli_utils import reconstruct_command_line
from .analyzer import DocumentCache, ReferenceResolver, SchemaCollector, SchemaRegistry, build_document
from .backends import GeneratedDefinition, ZodBackend, ZodEmitter
from .config import CodeGeneratorConfig
from .diagnostics import Diagnostics
from .errors import SchemaDocumentError
from .schema_ast import SchemaKind, SchemaNode, SchemaParser

INTERNAL_REF_PREFIX = "#/components/schemas/"


class PipelineGenerator:
    """Generates Zod schemas from an OpenAPI document.

    All state (document cache, registry, diagnostics) belongs to the
    instance, so independent generators never share anything.
    """

    def __init__(
        self,
        document: Mapping[str, Any],
        base_dir: str | Path = ".",
        config: CodeGeneratorConfig | None = None,
        diagnostics: Diagnostics | None = None,
    ):
        """
        Initialize the generator.

        Args:
            document: The deserialized root document
            base_dir: Directory external references are resolved against
            config: Code generation configuration
            diagnostics: Collector for warnings (a new one by default)
        """
        self.config = config or CodeGeneratorConfig()
        self.diagnostics = Diagnostics() if diagnostics is None else diagnostics
        self.parser = SchemaParser()
        self.cache = DocumentCache(self.diagnostics, self.parser)
        self.resolver = ReferenceResolver(self.cache, Path(base_dir), self.diagnostics)
        self.document = build_document(document, parser=self.parser)

        self.registry: SchemaRegistry | None = None
        self.definitions: dict[str, GeneratedDefinition] = {}

    @classmethod
    def from_file(cls, path: str | Path, config: CodeGeneratorConfig | None = None) -> PipelineGenerator:
        """
        Create a generator for a document on disk.

        Raises:
            SchemaDocumentError: If the document cannot be read or is not a mapping
        """
        path = Path(path)
        try:
            with open(path, encoding="utf-8") as f:
                raw = yaml.safe_load(f)
        except (OSError, yaml.YAMLError) as e:
            raise SchemaDocumentError(f"Could not load schema document {path}: {e}") from e

        if not isinstance(raw, Mapping):
            raise SchemaDocumentError(f"Schema document {path} is not a mapping")

        return cls(raw, base_dir=path.parent, config=config)

    def generate(self) -> str:
        """Run collection, conversion and emission; return the TypeScript source."""
        registry = self.collect()
        self.definitions = self.convert(registry)
        emitter = ZodEmitter(self.config, self.diagnostics)
        return emitter.emit(registry, self.definitions, self._generate_command_comment())

    def collect(self) -> SchemaRegistry:
        """Phase 1: collect every schema reachable from the root document."""
        collector = SchemaCollector(self.resolver, self.diagnostics)
        self.registry = collector.collect_all(self.document.schemas)
        return self.registry

    def convert(self, registry: SchemaRegistry) -> dict[str, GeneratedDefinition]:
        """Phase 2: convert every collected schema."""
        backend = ZodBackend(registry, self.resolver, self.diagnostics, self.config)
        definitions = {}
        for name, node in registry.schemas.items():
            if self._is_self_alias(name, node):
                # A schema that only points at itself carries no structure
                definitions[name] = GeneratedDefinition(name=name, expression="z.string()")
                continue

            refs: set[str] = set()
            expression = backend.convert(node, name, refs, {name})
            definitions[name] = GeneratedDefinition(
                name=name,
                expression=expression,
                description=node.description,
                references=refs,
            )
        return definitions

    @staticmethod
    def _is_self_alias(name: str, node: SchemaNode) -> bool:
        return node.kind == SchemaKind.REFERENCE and node.ref == f"{INTERNAL_REF_PREFIX}{name}"

    def _generate_command_comment(self) -> str:
        """Generate a command line comment for the generated file"""
        if not self.config.add_generation_comment:
            return ""

        try:
            from ..openapi_to_zod import openapi_to_zod as click_command  # noqa

            command_line = reconstruct_command_line(click_command)
        except (ImportError, AttributeError):
            command_line = "openapi_to_zod"

        return f"// Generated by openapi_to_zod v{__version__} : {command_line}"
