"""
Zod code generation backend.

Converts one schema node into one Zod expression. Named schemas referenced
internally are emitted as aliases (and recorded as dependencies), external
schemas are inlined, and anything that cannot be resolved degrades to a
permissive type instead of failing the run.
"""

from __future__ import annotations

import textwrap

from ...utils import safe_property_name, snake_to_pascal_case, to_literal
from ..analyzer import Reference, ReferenceResolver, SchemaRegistry
from ..config import CodeGeneratorConfig
from ..diagnostics import UNRESOLVED_REFERENCE, Diagnostics
from ..schema_ast import SchemaKind, SchemaNode

WILDCARD = "z.any()"
OPEN_OBJECT = "z.object({}).passthrough()"
OPEN_RECORD = "z.record(z.string(), z.any())"


class ZodBackend:
    """Schema node -> Zod expression converter."""

    TYPE_MAP = {
        "string": "z.string()",
        "number": "z.number()",
        "integer": "z.number()",
        "boolean": "z.boolean()",
    }

    # String formats with a dedicated refinement
    FORMAT_MAP = {
        "date-time": "z.string().datetime()",
    }

    INDENT = "  "

    def __init__(
        self,
        registry: SchemaRegistry,
        resolver: ReferenceResolver,
        diagnostics: Diagnostics,
        config: CodeGeneratorConfig | None = None,
    ):
        """
        Initialize the backend.

        Args:
            registry: Collected schemas, used for internal references
            resolver: Resolver used for external references
            diagnostics: Collector receiving unresolved references
            config: Code generation configuration
        """
        self.registry = registry
        self.resolver = resolver
        self.diagnostics = diagnostics
        self.config = config or CodeGeneratorConfig()

    def convert(self, node: SchemaNode, name: str, refs: set[str], path: set[str] | None = None) -> str:
        """
        Convert a schema node to a Zod expression.

        Args:
            node: The schema to convert
            name: Naming context (schema name, or a name derived from the
                property / item / value being converted)
            refs: Receives the names of named schemas the expression aliases
            path: Reference identifiers and schema names being converted on
                the current call stack; a reference already on it closes a
                cycle (callers seed it with the name of the schema converted)

        Returns:
            Zod expression text
        """
        if path is None:
            path = set()

        match node.kind:
            case SchemaKind.REFERENCE:
                return self._convert_reference(node, refs, path)
            case SchemaKind.UNTYPED:
                return self._convert_untyped(name, refs, path)
            case SchemaKind.UNION:
                return self._convert_union(node, name, refs, path)
            case SchemaKind.MERGE:
                return self._convert_merge(node, name, refs, path)
            case SchemaKind.ENUM:
                return self._convert_enum(node)
            case SchemaKind.PRIMITIVE:
                return self._convert_primitive(node)
            case SchemaKind.ARRAY:
                return self._convert_array(node, name, refs, path)
            case SchemaKind.OBJECT:
                return self._convert_object(node, name, refs, path)
        return WILDCARD

    def _convert_reference(self, node: SchemaNode, refs: set[str], path: set[str]) -> str:
        reference = Reference.parse(node.ref)
        if reference.key in path:
            return WILDCARD

        if reference.is_external:
            resolved = self.resolver.resolve_external(reference)
            if resolved is None:
                return WILDCARD
            # The inlined schema's own name is on the path too, so it cannot alias itself
            entered = {reference.key, reference.name} - path
            path.update(entered)
            try:
                return self.convert(resolved, reference.name, refs, path)
            finally:
                path.difference_update(entered)

        ref_name = reference.name
        if ref_name not in self.registry:
            self.diagnostics.warn(
                UNRESOLVED_REFERENCE,
                f"Could not resolve reference {node.ref}, falling back to z.any()",
                reference=node.ref,
            )
            return WILDCARD

        refs.add(ref_name)
        return ref_name

    def _convert_untyped(self, name: str, refs: set[str], path: set[str]) -> str:
        """Alias "<Base>Config"-style names to a known <Base> schema, else accept any object."""
        for suffix in self.config.alias_suffixes:
            if not suffix or not name.endswith(suffix):
                continue
            base = name[: -len(suffix)]
            if base and base in self.registry and base not in path:
                refs.add(base)
                return base
        return OPEN_OBJECT

    def _convert_union(self, node: SchemaNode, name: str, refs: set[str], path: set[str]) -> str:
        members = [self.convert(member, name, refs, path) for member in node.members]
        if not members:
            return WILDCARD
        if len(members) == 1:
            return members[0]
        return f"z.union([{', '.join(members)}])"

    def _convert_merge(self, node: SchemaNode, name: str, refs: set[str], path: set[str]) -> str:
        if not node.members:
            return WILDCARD

        base, *extensions = node.members
        base_type = self.convert(base, f"{name}Base", refs, path)

        extension_properties: dict[str, SchemaNode] = {}
        extension_required: list[str] = []
        for extension in extensions:
            resolved = self._resolve_extension(extension)
            if resolved is None:
                continue
            extension_properties.update(resolved.properties)
            extension_required.extend(resolved.required)

        if not extension_properties:
            return base_type

        lines = self._property_lines(extension_properties, extension_required, refs, path)
        return f"{base_type}.extend({self._block(lines)})"

    def _resolve_extension(self, extension: SchemaNode) -> SchemaNode | None:
        """The schema whose properties an allOf member contributes."""
        if not extension.is_reference:
            return extension

        reference = Reference.parse(extension.ref)
        if reference.is_external:
            return self.resolver.resolve_external(reference)

        resolved = self.registry.get(reference.name)
        if resolved is None:
            self.diagnostics.warn(
                UNRESOLVED_REFERENCE,
                f"Could not resolve reference {extension.ref} in allOf, ignoring it",
                reference=extension.ref,
            )
        return resolved

    def _convert_enum(self, node: SchemaNode) -> str:
        values = node.enum_values
        if not values:
            return "z.never()"
        if all(isinstance(v, str) for v in values):
            return f"z.enum([{', '.join(to_literal(v) for v in values)}])"

        # z.enum only takes strings
        literals = [f"z.literal({to_literal(v)})" for v in values]
        if len(literals) == 1:
            return literals[0]
        return f"z.union([{', '.join(literals)}])"

    def _convert_primitive(self, node: SchemaNode) -> str:
        if node.type_name == "string" and node.format in self.FORMAT_MAP:
            return self.FORMAT_MAP[node.format]
        return self.TYPE_MAP.get(node.type_name or "", WILDCARD)

    def _convert_array(self, node: SchemaNode, name: str, refs: set[str], path: set[str]) -> str:
        if node.items is None:
            return f"z.array({WILDCARD})"
        item_type = self.convert(node.items, f"{name}Item", refs, path)
        return f"z.array({item_type})"

    def _convert_object(self, node: SchemaNode, name: str, refs: set[str], path: set[str]) -> str:
        additional = node.additional_properties
        if additional is True:
            return OPEN_RECORD
        if isinstance(additional, SchemaNode):
            value_type = self.convert(additional, f"{name}Value", refs, path)
            return f"z.record(z.string(), {value_type})"

        if not node.properties:
            return "z.object({})"
        lines = self._property_lines(node.properties, node.required, refs, path)
        return f"z.object({self._block(lines)})"

    def _property_lines(
        self,
        properties: dict[str, SchemaNode],
        required: list[str],
        refs: set[str],
        path: set[str],
    ) -> list[str]:
        """Render ``key: type[.optional()][.describe(...)]`` for each property, in order."""
        lines = []
        for key, prop in properties.items():
            zod_type = self.convert(prop, snake_to_pascal_case(key), refs, path)
            optional = "" if key in required else ".optional()"
            description = f".describe({to_literal(prop.description)})" if prop.description else ""
            safe_key = safe_property_name(key, self.config.property_name_style)
            lines.append(f"{safe_key}: {zod_type}{optional}{description}")
        return lines

    def _block(self, lines: list[str]) -> str:
        """Wrap property lines in braces, indenting nested expressions one level."""
        body = textwrap.indent(",\n".join(lines), self.INDENT)
        return "{\n" + body + "\n}"
