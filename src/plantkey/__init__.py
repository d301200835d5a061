"""PlantKey: trait-based plant identification and confidence scoring."""

__version__ = "1.0.0"
