"""Program name and command-line defaults."""

PROGRAM_NAME = "leaflets2ndx"

#: index file read for named groups when none is given
DEFAULT_NDX = "index.ndx"
#: selection of membrane lipids
DEFAULT_MEMBRANE = "Membrane"
#: selection of one headgroup atom per lipid
DEFAULT_HEADGROUPS = "name PO4"

#: bilayer normal
NORMAL_AXIS = "z"

#: atom numbers per line in written index groups
NDX_WRAP = 15

LOWER = 0
UPPER = 1
LEAFLET_NAMES = ("lower", "upper")

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"
