"""NER Intel - entity extraction and knowledge linking API."""

__version__ = "1.0.0"
