"""Main CLI entry point for ppi-overlap.

Provides command group with global options and subcommands for pipeline operations.
"""

import logging
from pathlib import Path

import click

from ppi_overlap import __version__
from ppi_overlap.config.loader import load_config
from ppi_overlap.cli.map_cmd import map_to_human
from ppi_overlap.cli.overlap_cmd import overlap
from ppi_overlap.persistence import PipelineStore


# Configure logging
logging.basicConfig(
    level=logging.INFO,
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
)


@click.group()
@click.option(
    '--config',
    type=click.Path(exists=True, path_type=Path),
    default='config/default.yaml',
    help='Path to pipeline configuration YAML file'
)
@click.option(
    '--verbose',
    is_flag=True,
    help='Enable verbose logging (DEBUG level)'
)
@click.pass_context
def cli(ctx, config, verbose):
    """ppi-overlap: Reconcile protein-protein interactions across StringDB, BioGrid and ortholog tables.

    Builds canonical PPI sets, maps them between identifier namespaces and
    computes StringDB/BioGrid overlaps and species-to-human PPI maps.
    """
    ctx.ensure_object(dict)
    ctx.obj['config_path'] = config
    ctx.obj['verbose'] = verbose

    if verbose:
        logging.getLogger().setLevel(logging.DEBUG)
        logging.debug("Verbose logging enabled")


@cli.command()
@click.pass_context
def info(ctx):
    """Display pipeline information and configuration summary."""
    config_path = ctx.obj['config_path']

    click.echo(f"PPI Overlap v{__version__}")
    click.echo(f"Config: {config_path}")
    click.echo()

    try:
        config = load_config(config_path)

        config_hash = config.config_hash()
        click.echo(f"Config Hash: {config_hash[:16]}...")
        click.echo()

        click.echo(click.style("Reference Organism:", bold=True))
        click.echo(f"  Taxon ID: {config.taxon_id}")
        click.echo(f"  Ortholog Reference Species: {config.orthologs.reference_species}")
        click.echo(f"  Experiments Threshold: > {config.stringdb.experiments_threshold}")
        click.echo()

        click.echo(click.style("Paths:", bold=True))
        click.echo(f"  Data Directory: {config.data_dir}")
        click.echo(f"  Output Directory: {config.output_dir}")
        click.echo(f"  DuckDB Path: {config.duckdb_path}")
        click.echo()

        click.echo(click.style("Configured Species:", bold=True))
        if config.species:
            for species in config.species:
                click.echo(f"  {species.name} (taxon {species.taxon_id})")
        else:
            click.echo("  (none)")

        if config.duckdb_path.exists():
            click.echo()
            click.echo(click.style("Stored Tables:", bold=True))
            with PipelineStore.from_config(config) as store:
                for table in store.list_tables():
                    click.echo(f"  {table['table_name']}: {table['row_count']} rows")

    except Exception as e:
        click.echo(click.style(f"Error loading config: {e}", fg='red'), err=True)
        ctx.exit(1)


# Register commands
cli.add_command(map_to_human)
cli.add_command(overlap)


if __name__ == '__main__':
    cli()
