"""Map-to-human command: map a species' StringDB PPIs onto human orthologs."""

import logging
import sys

import click

from ppi_overlap.config.loader import load_config
from ppi_overlap.errors import ParseError
from ppi_overlap.persistence import PipelineStore, ProvenanceTracker
from ppi_overlap.workflows import run_species_to_human

logger = logging.getLogger(__name__)


@click.command('map-to-human')
@click.option(
    '--species',
    'species_names',
    multiple=True,
    help='Species name from the config (repeatable; default: all configured species)'
)
@click.pass_context
def map_to_human(ctx, species_names):
    """Map StringDB PPIs of other species to UniProt and human orthologs.

    For each species: keeps binding PPIs with experimental evidence, maps
    them to UniProt (one representative accession per protein), then onto
    human UniProt accessions through the ortholog table.
    """
    config_path = ctx.obj['config_path']
    click.echo(click.style("=== Species to Human PPI Mapping ===", bold=True))
    click.echo()

    store = None
    try:
        config = load_config(config_path)
        names = list(species_names) or [s.name for s in config.species]
        if not names:
            click.echo(click.style("No species configured", fg='red'), err=True)
            sys.exit(1)

        store = PipelineStore.from_config(config)
        provenance = ProvenanceTracker.from_config(config)

        for name in names:
            click.echo(f"Mapping {name.upper()}...")
            summary = run_species_to_human(config, name, store=store, provenance=provenance)

            for stage in summary.degraded_stages:
                click.echo(click.style(f"  Degraded: {stage}", fg='yellow'))
            click.echo(f"  StringDB PPIs: {summary.stringdb_ppis}")
            click.echo(f"  Ortholog proteins: {summary.ortholog_proteins}")
            click.echo(f"  UniProt PPIs: {summary.uniprot_ppis}")
            click.echo(f"  Human PPIs: {summary.human_ppis}")
            click.echo(
                f"  Mapping failures: {summary.uniprot_mapping_failures} UniProt, "
                f"{summary.ortholog_mapping_failures} ortholog"
            )
            click.echo(f"  Self-interactions skipped: {summary.self_interactions_skipped}")
            click.echo()

        provenance.save_to_store(store)
        provenance.save_sidecar(config.output_dir / "species_to_human")
        click.echo(click.style("Mapping complete", fg='green'))

    except ParseError as e:
        click.echo(click.style(f"Error parsing input: {e}", fg='red'), err=True)
        sys.exit(1)
    except ValueError as e:
        click.echo(click.style(f"Error: {e}", fg='red'), err=True)
        sys.exit(1)
    except Exception as e:
        click.echo(click.style(f"Mapping failed: {e}", fg='red'), err=True)
        logger.exception("Map-to-human command failed")
        sys.exit(1)
    finally:
        if store is not None:
            store.close()
