"""
leafletndx
Leaflet-resolved index groups for planar lipid membranes
"""

from importlib.metadata import version

from .leafletfinder.leafletfinder import LeafletFinder, classify
from .core.groups import LeafletGroup, LeafletGroups
from .core.registry import NameRegistry
from .core.topologyattrs import *
from .exceptions import (LeafletNdxError, EmptySelectionError,
                         MissingHeadgroupError, AmbiguousHeadgroupError,
                         InternalInconsistencyError, SelectionQueryError)


__version__ = version("leafletndx")
