"""
End-to-end tests of the generation pipeline on documents from disk.
"""

from __future__ import annotations

from pathlib import Path

import pytest

from openapi_to_zod import __version__
from openapi_to_zod.pipeline import CodeGeneratorConfig, PipelineGenerator
from openapi_to_zod.pipeline.diagnostics import DOCUMENT_LOAD_FAILED, SCHEMA_NAME_CONFLICT, UNRESOLVED_REFERENCE
from openapi_to_zod.pipeline.errors import GenerationError, SchemaDocumentError

TEST_DATA_DIR = Path(__file__).parent / "test_data"
SPECS_DIR = TEST_DATA_DIR / "specs"
REFERENCE_DIR = TEST_DATA_DIR / "reference"


def generate(filename, **config_options):
    """Generate code for a spec file without the generation comment."""
    config = CodeGeneratorConfig(add_generation_comment=False, **config_options)
    generator = PipelineGenerator.from_file(SPECS_DIR / filename, config)
    return generator, generator.generate()


class TestPetstore:
    """Generation for a document split across two files."""

    def test_matches_reference(self):
        _, output = generate("petstore.yaml")
        reference = (REFERENCE_DIR / "petstore.ts").read_text()
        assert output == reference

    def test_no_diagnostics(self):
        generator, _ = generate("petstore.yaml")
        assert len(generator.diagnostics) == 0

    def test_every_emitted_alias_is_declared_first(self):
        generator, output = generate("petstore.yaml")
        for name, definition in generator.definitions.items():
            if f"export const {name} " not in output:
                continue
            for dependency in definition.references:
                assert output.index(f"export const {dependency} ") < output.index(f"export const {name} ")

    def test_generation_comment(self):
        generator = PipelineGenerator.from_file(SPECS_DIR / "petstore.yaml")
        output = generator.generate()
        assert output.startswith(f"// Generated by openapi_to_zod v{__version__} : openapi_to_zod\n")

    def test_ignore_schemas(self):
        _, output = generate("petstore.yaml", ignore_schemas=["PetList"])
        assert "export const PetList" not in output
        assert "export const Pet " in output


class TestDegradedDocuments:
    """Documents with missing files, cycles and conflicts still generate."""

    def test_broken_external_reference(self):
        generator, output = generate("broken_ref.yaml")

        assert "  address: z.any().optional(),\n  email: z.string().optional()" in output
        assert "export const Order = z.object({\n  id: z.string()\n})" in output
        assert len(generator.diagnostics.by_code(DOCUMENT_LOAD_FAILED)) == 1
        assert len(generator.diagnostics.by_code(UNRESOLVED_REFERENCE)) == 1

    def test_cross_file_cycle(self):
        generator, output = generate("cycle_a.yaml")

        assert "export const Node = z.object({\n  next: z.object({\n    target: z.object({\n" in output
        assert "      next: z.any().optional()\n" in output
        assert "export const Link" not in output
        assert len(generator.diagnostics) == 0

    def test_name_conflict(self):
        generator, output = generate("conflict.yaml")

        assert "export const Address = z.object({\n  line1: z.string().optional()\n})" in output
        assert "  sender: z.object({\n    address: Address.optional()\n  }).optional()" in output
        assert "street" not in output
        assert output.index("export const Address ") < output.index("export const Shipment ")

        conflicts = generator.diagnostics.by_code(SCHEMA_NAME_CONFLICT)
        assert len(conflicts) == 1
        assert conflicts[0].reference == "Address"

    def test_yaml_dates_and_type_lists(self):
        generator, output = generate("releases.yaml")

        assert 'export const Release = z.enum(["2024-01-01", "2024-06-01"])' in output
        assert '  builtAt: z.enum(["2024-01-01T10:00:00"]).optional(),' in output
        assert "  nickname: z.any().optional()" in output
        assert len(generator.diagnostics) == 0


class TestDocumentErrors:
    """Root documents that cannot be used at all."""

    @pytest.mark.parametrize("filename", ["invalid.yaml", "not_a_mapping.yaml", "missing.yaml"])
    def test_from_file_raises(self, filename):
        with pytest.raises(SchemaDocumentError):
            PipelineGenerator.from_file(SPECS_DIR / filename)

    def test_document_error_is_a_generation_error(self):
        assert issubclass(SchemaDocumentError, GenerationError)

    def test_document_without_schemas(self):
        generator = PipelineGenerator({"openapi": "3.0.3"}, config=CodeGeneratorConfig(add_generation_comment=False))
        assert generator.generate() == 'import { z } from "zod"\n'


class TestIsolation:
    """Runs share no state."""

    def test_independent_runs(self):
        _, first = generate("petstore.yaml")
        _, broken = generate("broken_ref.yaml")
        generator, second = generate("petstore.yaml")

        assert first == second
        assert "Customer" not in second
        assert len(generator.diagnostics) == 0

    def test_generate_twice(self):
        generator, first = generate("petstore.yaml")
        assert generator.generate() == first

    def test_in_memory_document_resolves_against_base_dir(self):
        document = {
            "components": {
                "schemas": {
                    "Pet": {"type": "object", "properties": {"owner": {"$ref": "common.yaml#/components/schemas/Owner"}}}
                }
            }
        }
        generator = PipelineGenerator(document, base_dir=SPECS_DIR, config=CodeGeneratorConfig(add_generation_comment=False))
        output = generator.generate()

        assert "address: Address.optional()" in output
        assert output.index("export const Address ") < output.index("export const Pet ")
        assert len(generator.diagnostics) == 0

    def test_self_alias(self):
        generator = PipelineGenerator(
            {"components": {"schemas": {"Loop": {"$ref": "#/components/schemas/Loop"}}}},
            config=CodeGeneratorConfig(add_generation_comment=False),
        )
        assert "export const Loop = z.string()" in generator.generate()
