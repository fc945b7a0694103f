import json
import logging
from pathlib import Path

import click

from .pipeline import AtomicWriter, CodeGeneratorConfig, ImportGenerator, OutputMode, SchemaImportError

COMMAND_NAME = "k8s_schema_to_code"

# Flags with no effect on the generated files
UNRECORDED_PARAMS = {"verbose"}


def reconstruct_command_line(ctx: click.Context) -> str:
    """
    Command line recorded in the generation comment.

    Paths are shortened to their last component so the output does not depend
    on where the generator ran. Options left at their default are omitted.
    """
    arguments = []
    options = []
    for param in ctx.command.params:
        value = ctx.params.get(param.name)
        if param.name in UNRECORDED_PARAMS or value is None or value is False:
            continue
        if isinstance(param.type, click.Path):
            value = Path(value).name

        if isinstance(param, click.Argument):
            arguments.append(str(value))
        elif value != param.default:
            if param.is_flag:
                options.append(param.opts[0])
            else:
                options.extend([param.opts[0], str(value)])

    return " ".join([COMMAND_NAME, *arguments, *options])


@click.command()
@click.option("--config", "-c", default=None, type=click.Path(exists=True, resolve_path=True))
@click.option("--language", "-l", default=None, type=click.Choice(["typescript", "python"]))
@click.option("--force", "-f", is_flag=True, default=False, help="Overwrite existing output files")
@click.option(
    "--skip-invalid",
    is_flag=True,
    default=False,
    help="Log and skip resources that cannot be generated instead of failing",
)
@click.option("--verbose", "-v", is_flag=True, default=False)
@click.argument("path", type=click.Path(exists=True, resolve_path=True))
@click.argument("output", type=click.Path(file_okay=False, resolve_path=True))
def k8s_schema_to_code(config, language, force, skip_invalid, verbose, path, output):
    """Generate API object constructs from the Kubernetes schema at PATH into OUTPUT."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.INFO,
        format="%(levelname)s %(name)s: %(message)s",
    )

    with open(path) as f:
        schema = json.load(f)

    if config is not None:
        with open(config) as f:
            config = CodeGeneratorConfig.from_dict(json.load(f))
    else:
        config = CodeGeneratorConfig()

    # CLI flags override the config file
    if language is not None:
        config.language = language
    if force:
        config.output.mode = OutputMode.FORCE
    if skip_invalid:
        config.skip_invalid_resources = True
    config.command_line = reconstruct_command_line(click.get_current_context())

    try:
        files = ImportGenerator(schema, config).generate()
    except SchemaImportError as e:
        raise click.ClickException(str(e)) from e

    writer = AtomicWriter(atomic=config.output.atomic_write)
    for file_name, content in files.items():
        target = Path(output) / file_name
        try:
            if config.output.mode == OutputMode.FORCE:
                writer.write(target, content)
            else:
                writer.write_if_not_exists(target, content)
        except FileExistsError as e:
            raise click.ClickException(str(e)) from e
        click.echo(str(target))
