"""ppi-overlap: reconcile protein-protein interactions across StringDB, BioGrid and ortholog tables."""

__version__ = "0.1.0"
