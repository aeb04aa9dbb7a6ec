"""Tests for Protein and PPI canonical identity."""

import pytest

from ppi_overlap.ppi import (
    IdentifierType,
    Protein,
    ProteinProteinInteraction,
    sorted_interactions,
)


def _ppi(a, b, identifier_type=IdentifierType.STRINGDB):
    return ProteinProteinInteraction.from_identifiers(a, b, identifier_type)


class TestProtein:
    """Protein value semantics."""

    def test_equal_value_and_type(self):
        assert Protein("P1", IdentifierType.UNIPROT_ACCESSION) == Protein(
            "P1", IdentifierType.UNIPROT_ACCESSION
        )
        assert hash(Protein("P1", IdentifierType.STRINGDB)) == hash(
            Protein("P1", IdentifierType.STRINGDB)
        )

    def test_same_value_different_namespace_is_distinct(self):
        stringdb = Protein("123", IdentifierType.STRINGDB)
        entrez = Protein("123", IdentifierType.ENTREZ_GENE)

        assert stringdb != entrez
        assert len({stringdb, entrez}) == 2

    def test_immutable(self):
        protein = Protein("P1", IdentifierType.STRINGDB)
        with pytest.raises(AttributeError):
            protein._value = "P2"

    def test_str_is_identifier_value(self):
        assert str(Protein("Q8NBK3", IdentifierType.UNIPROT_ACCESSION)) == "Q8NBK3"

    def test_separator_in_identifier_rejected(self):
        with pytest.raises(ValueError):
            Protein("P1\tP2", IdentifierType.STRINGDB)


class TestProteinProteinInteraction:
    """Order-independent PPI identity."""

    def test_symmetric_equality_and_hash(self):
        ab = _ppi("A", "B")
        ba = _ppi("B", "A")

        assert ab == ba
        assert hash(ab) == hash(ba)

    def test_reversed_pairs_collapse_in_set(self):
        interactions = {_ppi("A", "B"), _ppi("B", "A"), _ppi("C", "D")}
        assert len(interactions) == 2

    def test_str_never_reveals_construction_order(self):
        assert str(_ppi("9606.P2", "9606.P1")) == "9606.P1\t9606.P2"
        assert str(_ppi("9606.P1", "9606.P2")) == "9606.P1\t9606.P2"

    def test_canonical_protein_order(self):
        ppi = _ppi("Z", "A")
        assert ppi.protein_a.identifier_value == "A"
        assert ppi.protein_b.identifier_value == "Z"
        assert ppi.canonical_key == ("A", "Z")

    def test_ordering_follows_canonical_key(self):
        ppis = [_ppi("C", "D"), _ppi("B", "A"), _ppi("A", "C")]
        assert [str(p) for p in sorted_interactions(ppis)] == [
            "A\tB",
            "A\tC",
            "C\tD",
        ]

    def test_separator_cannot_cause_collision(self):
        # "A\tB" + "C" vs "A" + "B\tC" would collide under plain concatenation
        with pytest.raises(ValueError):
            _ppi("A\tB", "C")

    def test_tie_on_value_is_deterministic(self):
        first = ProteinProteinInteraction(
            Protein("X", IdentifierType.STRINGDB),
            Protein("X", IdentifierType.ENTREZ_GENE),
        )
        second = ProteinProteinInteraction(
            Protein("X", IdentifierType.ENTREZ_GENE),
            Protein("X", IdentifierType.STRINGDB),
        )
        assert first.protein_a == second.protein_a
        assert first.protein_a.identifier_type == IdentifierType.ENTREZ_GENE

    def test_self_interaction_detection(self):
        assert _ppi("A", "A").is_self_interaction()
        assert not _ppi("A", "B").is_self_interaction()

    def test_immutable(self):
        ppi = _ppi("A", "B")
        with pytest.raises(AttributeError):
            ppi._first = Protein("C", IdentifierType.STRINGDB)
