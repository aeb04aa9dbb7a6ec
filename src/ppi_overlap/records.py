"""Delimited record reading and PPI construction from tabular records.

Every input file is read into a polars DataFrame with all columns kept as
strings, so numeric validation stays with the filter that needs it.
"""

from pathlib import Path
from typing import Optional

import polars as pl
import structlog

from ppi_overlap.errors import FileAccessError, StageResult
from ppi_overlap.ppi.models import IdentifierType, InteractionSet, ProteinProteinInteraction

logger = structlog.get_logger()


def read_records(
    path: Path | str,
    separator: str = "\t",
    has_header: bool = True,
    comment_prefix: Optional[str] = None,
) -> StageResult[pl.DataFrame]:
    """Read a delimited file into a string-typed DataFrame.

    The file handle is held only for the duration of the read and is closed
    even when parsing fails.

    Args:
        path: File to read
        separator: Single-character field delimiter
        has_header: Whether the first row holds column names. Without a header
            columns are named column_1, column_2, ... and are addressed by index.
        comment_prefix: Lines starting with this prefix are skipped

    Returns:
        StageResult holding the DataFrame, or a failed result holding an empty
        DataFrame when the file is missing or unreadable.
    """
    path = Path(path)
    try:
        with open(path, "rb") as handle:
            df = pl.read_csv(
                handle,
                separator=separator,
                has_header=has_header,
                infer_schema=False,
                quote_char=None,
                comment_prefix=comment_prefix,
                truncate_ragged_lines=True,
                raise_if_empty=False,
            )
    except OSError as e:
        error = FileAccessError(path, e.strerror or str(e))
        logger.error("records_read_failed", path=str(path), reason=error.reason)
        return StageResult.failure(error, pl.DataFrame())
    except (pl.exceptions.ComputeError, UnicodeDecodeError) as e:
        error = FileAccessError(path, str(e))
        logger.error("records_read_failed", path=str(path), reason=error.reason)
        return StageResult.failure(error, pl.DataFrame())

    logger.info("records_read", path=str(path), row_count=df.height, column_count=df.width)
    return StageResult.success(df)


def column_name(df: pl.DataFrame, column: int | str) -> str:
    """Resolve a column given by position or by name."""
    if isinstance(column, int):
        return df.columns[column]
    return column


def build_interactions(
    df: pl.DataFrame,
    column_a: int | str,
    column_b: int | str,
    identifier_type: IdentifierType,
) -> tuple[InteractionSet, int]:
    """Build canonical PPIs from two identifier columns.

    Rows with a missing identifier are ignored. Rows whose two identifiers are
    textually identical are not turned into PPIs; they are counted instead.

    Returns:
        Tuple of (interactions, self_interaction_count)
    """
    if df.is_empty():
        return frozenset(), 0

    col_a = column_name(df, column_a)
    col_b = column_name(df, column_b)
    pairs = df.select(col_a, col_b).drop_nulls()

    self_interactions = pairs.filter(pl.col(col_a) == pl.col(col_b)).height
    interactions = frozenset(
        ProteinProteinInteraction.from_identifiers(a, b, identifier_type)
        for a, b in pairs.filter(pl.col(col_a) != pl.col(col_b)).iter_rows()
    )
    return interactions, self_interactions
