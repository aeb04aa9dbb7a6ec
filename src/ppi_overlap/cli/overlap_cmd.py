"""Overlap command: StringDB/BioGrid PPI overlap for the reference organism."""

import logging
import sys

import click

from ppi_overlap.config.loader import load_config, load_config_with_overrides
from ppi_overlap.errors import ParseError
from ppi_overlap.persistence import PipelineStore, ProvenanceTracker
from ppi_overlap.workflows import run_stringdb_biogrid_overlap

logger = logging.getLogger(__name__)


@click.command('overlap')
@click.option(
    '--threshold',
    type=int,
    default=None,
    help='Override the experiments score threshold (keeps score > threshold)'
)
@click.pass_context
def overlap(ctx, threshold):
    """Compute the StringDB/BioGrid PPI overlap and remainders.

    Writes the overlap, StringDB-only and BioGrid-only pair lists as UniProt
    accession pairs, plus logs of identifiers that could not be mapped.
    """
    config_path = ctx.obj['config_path']
    click.echo(click.style("=== StringDB/BioGrid Overlap ===", bold=True))
    click.echo()

    store = None
    try:
        if threshold is not None:
            config = load_config_with_overrides(
                config_path, {"stringdb.experiments_threshold": threshold}
            )
        else:
            config = load_config(config_path)
        click.echo(click.style(f"  Config loaded: {config_path}", fg='green'))
        click.echo(f"  Taxon ID: {config.taxon_id}")
        click.echo()

        store = PipelineStore.from_config(config)
        provenance = ProvenanceTracker.from_config(config)

        summary = run_stringdb_biogrid_overlap(config, store=store, provenance=provenance)

        for stage in summary.degraded_stages:
            click.echo(click.style(f"  Degraded: {stage}", fg='yellow'))

        click.echo(click.style("=== Overlap Summary ===", bold=True))
        click.echo(f"StringDB PPIs: {summary.stringdb_ppis}")
        click.echo(f"BioGrid PPIs: {summary.biogrid_ppis}")
        click.echo(f"BioGrid PPIs mapped to StringDB: {summary.mapped_biogrid_ppis}")
        click.echo(f"BioGrid mapping failures: {summary.biogrid_mapping_failures}")
        click.echo(
            f"Self-interactions after mapping skipped: "
            f"{summary.biogrid_self_interactions_after_mapping}"
        )
        click.echo(f"Overlap: {summary.overlap}")
        click.echo(f"StringDB only: {summary.stringdb_only}")
        click.echo(f"BioGrid only: {summary.biogrid_only}")
        click.echo(f"UniProt mapping failures: {summary.uniprot_mapping_failures}")
        click.echo()

        provenance.save_to_store(store)
        provenance.save_sidecar(config.output_dir / "overlaps" / "overlap")

        click.echo(click.style("Overlap complete", fg='green'))

    except ParseError as e:
        click.echo(click.style(f"Error parsing input: {e}", fg='red'), err=True)
        sys.exit(1)
    except Exception as e:
        click.echo(click.style(f"Overlap failed: {e}", fg='red'), err=True)
        logger.exception("Overlap command failed")
        sys.exit(1)
    finally:
        if store is not None:
            store.close()
