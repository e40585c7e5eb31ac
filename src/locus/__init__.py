"""locus: distance and proximity checks for microscopy spot centroids."""

__version__ = "0.1.0"
