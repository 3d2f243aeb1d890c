"""
Dependency-ordered emission of generated definitions.

Definitions are written depth-first from the root document's schemas so
that every aliased schema is declared before the schema using it.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path

import jinja2

from ..analyzer import SchemaRegistry
from ..config import CodeGeneratorConfig
from ..diagnostics import CIRCULAR_DEPENDENCY, Diagnostics


@dataclass
class GeneratedDefinition:
    """Generated code for one named schema."""

    name: str = ""
    expression: str = ""
    description: str | None = None
    # Named schemas the expression aliases (ordering only)
    references: set[str] = field(default_factory=set)


class ZodEmitter:
    """Orders definitions by dependency and renders the output file."""

    TEMPLATE_LANG = "zod"
    FILE_EXTENSION = "ts"

    def __init__(self, config: CodeGeneratorConfig, diagnostics: Diagnostics):
        """
        Initialize the emitter.

        Args:
            config: Code generation configuration
            diagnostics: Collector receiving circular dependencies
        """
        self.config = config
        self.diagnostics = diagnostics
        self._setup_templates()

    def _setup_templates(self) -> None:
        """Set up Jinja2 templates."""
        template_dir = Path(__file__).parent.parent.parent / "templates" / self.TEMPLATE_LANG
        self.jinja_env = jinja2.Environment(
            loader=jinja2.FileSystemLoader(str(template_dir)),
            lstrip_blocks=True,
            trim_blocks=True,
        )
        self.prefix_template = self.jinja_env.get_template(f"prefix.{self.FILE_EXTENSION}.jinja2")
        self.definition_template = self.jinja_env.get_template(f"definition.{self.FILE_EXTENSION}.jinja2")

    def order(self, root_names: list[str], definitions: dict[str, GeneratedDefinition]) -> list[str]:
        """
        Compute the emission order.

        Each root schema is visited depth-first, its dependencies first. A
        schema reached again while it is still being visited closes a cycle:
        it is reported and not emitted through that path.

        Args:
            root_names: Root document schema names, in document order
            definitions: Generated definitions by schema name

        Returns:
            Schema names in emission order
        """
        ignored = set(self.config.ignore_schemas)
        ordered: list[str] = []
        done: set[str] = set()
        in_progress: set[str] = set()

        def visit(name: str) -> None:
            if name in done or name in ignored:
                return
            if name in in_progress:
                self.diagnostics.warn(
                    CIRCULAR_DEPENDENCY,
                    f"Circular dependency detected for {name}",
                    reference=name,
                )
                return
            definition = definitions.get(name)
            if definition is None:
                return

            in_progress.add(name)
            for dependency in sorted(definition.references):
                visit(dependency)
            in_progress.discard(name)

            ordered.append(name)
            done.add(name)

        for name in root_names:
            visit(name)
        return ordered

    def emit(
        self,
        registry: SchemaRegistry,
        definitions: dict[str, GeneratedDefinition],
        generation_comment: str = "",
    ) -> str:
        """
        Render the output file.

        Args:
            registry: The run's registry (provides the root schema names)
            definitions: Generated definitions by schema name
            generation_comment: Optional header comment line

        Returns:
            TypeScript source text
        """
        prefix = self.prefix_template.render(
            generation_comment=generation_comment,
            setup_line=self.config.zod_import,
        )
        blocks = [prefix]
        for name in self.order(registry.root_names, definitions):
            blocks.append(self.render_definition(definitions[name]))
        return "\n\n".join(blocks) + "\n"

    def render_definition(self, definition: GeneratedDefinition) -> str:
        """Render the declaration and inferred type alias of one schema."""
        return self.definition_template.render(
            name=definition.name,
            expression=definition.expression,
            description_lines=self._description_lines(definition.description),
        )

    def _description_lines(self, description: str | None) -> list[str]:
        if not description:
            return []
        text = description.strip().replace("*/", "*\\/")
        return [f" * {line}".rstrip() for line in text.splitlines()]
