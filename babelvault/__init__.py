"""babelvault - wikilinks, tags and Leaflet documents for a folder of notes."""

__version__ = "0.1.0"
