"""topoboard - chess and Go rules on classic, toroidal and mirrored boards."""

__version__ = "0.1.0"
