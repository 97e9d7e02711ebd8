import json
import logging

import click

from .cli_utils import dump_schema, resolve_target, split_targets
from .config import GeneratorConfig
from .generator import generate_schema, generate_schemas


@click.command()
@click.option("--config", "-c", default=None, type=click.Path(exists=True, resolve_path=True))
@click.option(
    "--output-mode/--input-mode",
    "use_output",
    default=None,
    help="Describe values after transforms (output) or as accepted (input)",
)
@click.option("--indent", default=None, type=int)
@click.option("--sort-keys", is_flag=True, default=False)
@click.option(
    "--log-level",
    default=None,
    type=click.Choice(["DEBUG", "INFO", "WARNING", "ERROR"], case_sensitive=False),
)
@click.argument("target", type=str)
@click.argument("output", required=False, default=None, type=click.Path(resolve_path=True))
def validator_to_openapi(config, use_output, indent, sort_keys, log_level, target, output):
    """Write the OpenAPI schema of the validator tree TARGET (module:attribute) as JSON."""
    if config is not None:
        with open(config) as f:
            config = GeneratorConfig.from_dict(json.load(f))
    else:
        config = GeneratorConfig()

    # CLI flags override the config file
    if use_output is not None:
        config.use_output = use_output
    if indent is not None:
        config.indent = indent
    if sort_keys:
        config.sort_keys = True
    if log_level is not None:
        config.log_level = log_level

    logging.basicConfig(level=config.log_level.upper(), format="%(levelname)s %(name)s: %(message)s")

    node, named_nodes = split_targets(resolve_target(target))
    if node is not None:
        schema = generate_schema(node, config.use_output)
    else:
        schema = generate_schemas(named_nodes, config.use_output)

    out = dump_schema(schema, indent=config.indent, sort_keys=config.sort_keys)
    if output is None:
        click.echo(out)
    else:
        with open(output, "w") as f:
            f.write(out + "\n")
