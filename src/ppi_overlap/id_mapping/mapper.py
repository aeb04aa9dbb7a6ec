"""Multi-valued identifier lookup tables built from namespace-mapping files.

StringDB ships its cross-references as headerless, tab-separated files:

    <taxon id> TAB <compound id, pipe-delimited> TAB <StringDB id>

A table maps one namespace's identifier to the set of identifiers it
corresponds to in another namespace. Recurring source keys accumulate values
rather than overwriting them.
"""

import logging
from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import Iterator, Optional

import polars as pl

from ppi_overlap.errors import StageResult
from ppi_overlap.ppi.models import IdentifierType
from ppi_overlap.records import column_name, read_records

logger = logging.getLogger(__name__)

COMPOUND_SEPARATOR = "|"
UNIPROT_TAG = "UniProt"


class TokenMode(str, Enum):
    """How identifiers are pulled out of a (possibly compound) field."""

    WHOLE = "whole"
    FIRST = "first"
    ALL = "all"
    TAGGED = "tagged"


@dataclass(frozen=True)
class FieldSpec:
    """Where and how to read identifiers from a record.

    Attributes:
        column: Column position or name
        mode: WHOLE uses the field as-is, FIRST takes the first pipe-delimited
            token, ALL yields every token, TAGGED takes the value of the token
            whose tag starts with ``tag`` (e.g. ``UniProt=P12345``)
        tag: Namespace tag for TAGGED mode
    """
    column: int | str
    mode: TokenMode = TokenMode.WHOLE
    tag: Optional[str] = None


def extract_tagged_token(tokens: list[str], tag: str = UNIPROT_TAG) -> Optional[str]:
    """Return the value of the first ``tag...=value`` token, or None."""
    for token in tokens:
        token_tag, sep, value = token.partition("=")
        if sep and token_tag.startswith(tag) and value:
            return value
    return None


def extract_tokens(field: Optional[str], spec: FieldSpec) -> list[str]:
    """Extract identifiers from a field according to ``spec``.

    Returns an empty list when the field is missing or carries no token of the
    expected namespace tag; the caller skips that row's contribution.
    """
    if field is None:
        return []
    field = field.strip()
    if not field:
        return []

    if spec.mode == TokenMode.WHOLE:
        return [field]

    tokens = [t for t in field.split(COMPOUND_SEPARATOR) if t]
    if spec.mode == TokenMode.FIRST:
        return tokens[:1]
    if spec.mode == TokenMode.ALL:
        return tokens

    value = extract_tagged_token(tokens, spec.tag or UNIPROT_TAG)
    return [value] if value is not None else []


@dataclass
class MappingStats:
    """Diagnostics collected while building a mapping table.

    Attributes:
        rows_total: Rows seen
        rows_filtered: Rows dropped by the organism filter
        rows_skipped: Rows with no usable source or target identifier
    """
    rows_total: int = 0
    rows_filtered: int = 0
    rows_skipped: int = 0


class MappingTable:
    """Many-to-many lookup from one identifier namespace into another."""

    def __init__(
        self,
        source_type: IdentifierType,
        target_type: IdentifierType,
        name: str = "",
    ):
        self.source_type = source_type
        self.target_type = target_type
        self.name = name or f"{source_type.value}->{target_type.value}"
        self.stats = MappingStats()
        self._entries: dict[str, set[str]] = {}

    def add(self, source: str, target: str) -> None:
        self._entries.setdefault(source, set()).add(target)

    def resolve(self, identifier: str) -> frozenset[str]:
        """Look up an identifier.

        Returns:
            Non-empty frozenset of target identifiers, or an empty frozenset
            when the identifier has no mapping.
        """
        return frozenset(self._entries.get(identifier, ()))

    def pairs(self) -> Iterator[tuple[str, str]]:
        """Yield (source, target) pairs in sorted order."""
        for source in sorted(self._entries):
            for target in sorted(self._entries[source]):
                yield source, target

    def to_dataframe(self) -> pl.DataFrame:
        rows = list(self.pairs())
        return pl.DataFrame(
            {
                "source_id": [s for s, _ in rows],
                "target_id": [t for _, t in rows],
            },
            schema={"source_id": pl.Utf8, "target_id": pl.Utf8},
        )

    def __contains__(self, identifier: object) -> bool:
        return identifier in self._entries

    def __len__(self) -> int:
        return len(self._entries)

    def __repr__(self) -> str:
        return f"MappingTable({self.name!r}, keys={len(self)})"


def build_mapping(
    rows: pl.DataFrame,
    source: FieldSpec,
    target: FieldSpec,
    source_type: IdentifierType,
    target_type: IdentifierType,
    organism_column: int | str | None = None,
    organism_filter: Optional[str] = None,
    name: str = "",
) -> MappingTable:
    """Build a multi-valued mapping table from records.

    For each row: apply the organism filter (when given), extract one or more
    source keys and one or more target identifiers, and add every
    source -> target combination to the table.

    Args:
        rows: Records to read
        source: Where the source-namespace identifier lives
        target: Where the target-namespace identifier(s) live
        source_type: Namespace of the keys
        target_type: Namespace of the values
        organism_column: Column holding the organism/taxon id
        organism_filter: Keep only rows whose organism column equals this value

    Returns:
        MappingTable; membership does not depend on row order.
    """
    table = MappingTable(source_type, target_type, name=name)
    if rows.is_empty():
        logger.warning(f"No records to build mapping {table.name}")
        return table

    stats = table.stats
    stats.rows_total = rows.height

    if organism_filter is not None and organism_column is not None:
        organism = column_name(rows, organism_column)
        filtered = rows.filter(pl.col(organism).str.strip_chars() == organism_filter)
        stats.rows_filtered = rows.height - filtered.height
        rows = filtered

    source_col = column_name(rows, source.column)
    target_col = column_name(rows, target.column)

    for source_field, target_field in rows.select(source_col, target_col).iter_rows():
        source_ids = extract_tokens(source_field, source)
        target_ids = extract_tokens(target_field, target)
        if not source_ids or not target_ids:
            stats.rows_skipped += 1
            continue
        for source_id in source_ids:
            for target_id in target_ids:
                table.add(source_id, target_id)

    logger.info(
        f"Built mapping {table.name}: {len(table)} keys from "
        f"{stats.rows_total} rows ({stats.rows_filtered} filtered by organism, "
        f"{stats.rows_skipped} without identifiers)"
    )
    return table


def load_stringdb_to_uniprot(
    path: Path | str,
    taxon_id: Optional[str] = None,
) -> StageResult[MappingTable]:
    """Load a StringDB -> UniProt accession table from ``*.uniprot_2_string.*``.

    The UniProt field is ``ACCESSION|ENTRY_NAME``; only the accession is kept.
    """
    result = read_records(path, has_header=False, comment_prefix="#")
    table = build_mapping(
        result.value,
        source=FieldSpec(2),
        target=FieldSpec(1, TokenMode.FIRST),
        source_type=IdentifierType.STRINGDB,
        target_type=IdentifierType.UNIPROT_ACCESSION,
        organism_column=0 if taxon_id is not None else None,
        organism_filter=taxon_id,
        name="StringDB->UniProt",
    )
    return StageResult.combine(table, result)


def load_entrez_to_stringdb(
    path: Path | str,
    taxon_id: Optional[str] = None,
) -> StageResult[MappingTable]:
    """Load an Entrez Gene -> StringDB table from ``*.entrez_2_string.*``.

    The Entrez field may list several gene ids separated by pipes; each becomes
    its own key.
    """
    result = read_records(path, has_header=False, comment_prefix="#")
    table = build_mapping(
        result.value,
        source=FieldSpec(1, TokenMode.ALL),
        target=FieldSpec(2),
        source_type=IdentifierType.ENTREZ_GENE,
        target_type=IdentifierType.STRINGDB,
        organism_column=0 if taxon_id is not None else None,
        organism_filter=taxon_id,
        name="EntrezGene->StringDB",
    )
    return StageResult.combine(table, result)
