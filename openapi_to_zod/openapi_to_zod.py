import json
from pathlib import Path

import click

from .cli_utils import configure_logging
from .pipeline import AtomicWriter, CodeGeneratorConfig, GenerationError, OutputMode, PipelineGenerator


@click.command()
@click.option("--output", "-o", default=None, type=click.Path(dir_okay=False), help="Output file (default: generated-schemas.ts)")
@click.option("--config", "-c", default=None, type=click.Path(exists=True, resolve_path=True))
@click.option("--verbose", "-v", is_flag=True, default=False, help="Log debug output")
@click.argument("path", type=click.Path(exists=True, dir_okay=False, resolve_path=True))
def openapi_to_zod(output, config, verbose, path):
    """Generate Zod schemas from the components.schemas of an OpenAPI document."""
    configure_logging(verbose)

    if config is not None:
        with open(config) as f:
            config = CodeGeneratorConfig.from_dict(json.load(f))
    else:
        config = CodeGeneratorConfig()

    if output is not None:
        config.output.path = output

    try:
        codegen = PipelineGenerator.from_file(path, config)
        out = codegen.generate()

        target = Path(config.output.path)
        validate = config.output.validate_before_write
        if config.output.atomic_write:
            writer = AtomicWriter(setup_line=config.zod_import)
            if config.output.mode == OutputMode.ERROR_IF_EXISTS:
                writer.write_if_not_exists(target, out, validate)
            else:
                writer.write(target, out, validate)
        else:
            if config.output.mode == OutputMode.ERROR_IF_EXISTS and target.exists():
                raise FileExistsError(f"Output file already exists: {target}")
            if validate:
                AtomicWriter(setup_line=config.zod_import).validate_content(out)
            with open(target, "w", encoding="utf-8") as f:
                f.write(out)
    except (GenerationError, OSError) as e:
        raise click.ClickException(str(e)) from e

    click.echo("Successfully generated Zod schemas!")
