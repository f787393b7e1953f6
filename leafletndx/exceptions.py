"""
Exceptions
==========

All errors raised by leafletndx derive from :class:`LeafletNdxError`.
Each error carries a stable ``code`` and a human-readable ``message``.
"""

from typing import Optional


class LeafletNdxError(Exception):
    """Base exception for leafletndx.

    Attributes
    ----------
    code: str
        Stable error identifier
    message: str
        Human-readable diagnostic
    """

    code = "leafletndx_error"

    def __init__(self, message: str, code: Optional[str] = None):
        super().__init__(message)
        self.message = message
        if code is not None:
            self.code = code


class EmptySelectionError(LeafletNdxError, ValueError):
    """A selection that must contain atoms is empty."""

    code = "empty_selection"


class HeadgroupError(LeafletNdxError):
    """A lipid residue does not have exactly one headgroup atom.

    Attributes
    ----------
    resname: str
        Residue name of the offending lipid
    resid: int
        Residue number of the offending lipid
    n_headgroups: int
        Number of headgroup atoms found in the residue
    """

    code = "headgroup_error"

    def __init__(self, message: str, resname: str, resid: int,
                 n_headgroups: int = 0):
        super().__init__(message)
        self.resname = resname
        self.resid = resid
        self.n_headgroups = n_headgroups


class MissingHeadgroupError(HeadgroupError):
    code = "missing_headgroup"


class AmbiguousHeadgroupError(HeadgroupError):
    code = "ambiguous_headgroup"


class InternalInconsistencyError(LeafletNdxError, RuntimeError):
    """Internal state does not agree with itself. Never caused by user input."""

    code = "internal_error"


class SelectionQueryError(LeafletNdxError):
    """A selection query could not be understood or resolved."""

    code = "selection_query"

    def __init__(self, message: str, query: str):
        super().__init__(message)
        self.query = query
