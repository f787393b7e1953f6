from .leafletfinder import LeafletFinder, classify
