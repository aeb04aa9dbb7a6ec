"""Canonical protein and protein-protein interaction entities."""

from enum import Enum
from typing import Iterable, TypeAlias

PAIR_SEPARATOR = "\t"


class IdentifierType(str, Enum):
    """Identifier namespaces a protein can be expressed in."""

    STRINGDB = "STRINGDB"
    UNIPROT_ACCESSION = "UNIPROT_ACCESSION"
    UNIPROT_GENE_NAME = "UNIPROT_GENE_NAME"
    ENTREZ_GENE = "ENTREZ_GENE"
    ORTHOLOG_SOURCE_ID = "ORTHOLOG_SOURCE_ID"


class Protein:
    """Immutable protein identifier within a namespace.

    Two proteins are equal only when both the identifier value and the
    namespace match.
    """

    __slots__ = ("_value", "_type")

    def __init__(self, identifier_value: str, identifier_type: IdentifierType):
        if PAIR_SEPARATOR in identifier_value:
            raise ValueError(
                f"Identifier {identifier_value!r} contains the pair separator"
            )
        self._value = identifier_value
        self._type = IdentifierType(identifier_type)

    @property
    def identifier_value(self) -> str:
        return self._value

    @property
    def identifier_type(self) -> IdentifierType:
        return self._type

    def __setattr__(self, name, value):
        if hasattr(self, "_type"):
            raise AttributeError("Protein is immutable")
        super().__setattr__(name, value)

    def sort_key(self) -> tuple[str, str]:
        return (self._value, self._type.value)

    def __eq__(self, other) -> bool:
        if not isinstance(other, Protein):
            return NotImplemented
        return self._value == other._value and self._type == other._type

    def __hash__(self) -> int:
        return hash((self._value, self._type))

    def __repr__(self) -> str:
        return f"Protein({self._value!r}, {self._type.value})"

    def __str__(self) -> str:
        return self._value


class ProteinProteinInteraction:
    """Unordered pair of proteins in canonical order.

    The two proteins are ordered by identifier value (ties broken on the
    namespace name) at construction, so ``PPI(a, b)`` and ``PPI(b, a)`` are the
    same entity: equality, hashing, ordering and ``str()`` all derive from the
    canonical key.

    Self-pairs are not rejected here; callers drop them before construction.
    """

    __slots__ = ("_first", "_second", "_key")

    def __init__(self, protein_a: Protein, protein_b: Protein):
        first, second = sorted((protein_a, protein_b), key=Protein.sort_key)
        object.__setattr__(self, "_first", first)
        object.__setattr__(self, "_second", second)
        object.__setattr__(self, "_key", (first.identifier_value, second.identifier_value))

    def __setattr__(self, name, value):
        raise AttributeError("ProteinProteinInteraction is immutable")

    @classmethod
    def from_identifiers(
        cls,
        identifier_a: str,
        identifier_b: str,
        identifier_type: IdentifierType,
    ) -> "ProteinProteinInteraction":
        """Build a PPI from two identifiers sharing one namespace."""
        return cls(Protein(identifier_a, identifier_type), Protein(identifier_b, identifier_type))

    @property
    def protein_a(self) -> Protein:
        """First protein in canonical order."""
        return self._first

    @property
    def protein_b(self) -> Protein:
        """Second protein in canonical order."""
        return self._second

    @property
    def canonical_key(self) -> tuple[str, str]:
        return self._key

    def is_self_interaction(self) -> bool:
        return self._key[0] == self._key[1]

    def __eq__(self, other) -> bool:
        if not isinstance(other, ProteinProteinInteraction):
            return NotImplemented
        return self._key == other._key

    def __hash__(self) -> int:
        return hash(self._key)

    def __lt__(self, other: "ProteinProteinInteraction") -> bool:
        if not isinstance(other, ProteinProteinInteraction):
            return NotImplemented
        return self._key < other._key

    def __le__(self, other: "ProteinProteinInteraction") -> bool:
        if not isinstance(other, ProteinProteinInteraction):
            return NotImplemented
        return self._key <= other._key

    def __str__(self) -> str:
        return PAIR_SEPARATOR.join(self._key)

    def __repr__(self) -> str:
        return f"PPI({self._first!r}, {self._second!r})"


# Deduplicating, immutable collection of PPIs in one namespace
InteractionSet: TypeAlias = frozenset[ProteinProteinInteraction]


def sorted_interactions(interactions: Iterable[ProteinProteinInteraction]) -> list[ProteinProteinInteraction]:
    """Return interactions in canonical order for deterministic output."""
    return sorted(interactions)
