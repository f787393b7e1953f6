import functools
from typing import Union


def cached_property(func):
    """Cache a property within a class.
    Requires the Class to have a cache dict called ``_cache``.

    Example
    -------
    How to add a cache for a variable to a class by using the `@cached_property`
    decorator::

        class A(object):
            def__init__(self):
                self._cache = dict()
            @cached_property
            def center(self):
                # only run if the lookup of "center" in _cache fails
                return center

    Clearing ``_cache`` forces recomputation on the next access.

    .. note::
        Adapted from MDAnalysis. This code is GPL licensed.
    """

    key = func.__name__

    @functools.wraps(func)
    def wrapper(self, *args, **kwargs):
        try:
            return self._cache[key]
        except KeyError:
            self._cache[key] = ret = func(self, *args, **kwargs)
            return ret
    return property(wrapper)


def axis_to_index(x: Union[str, int]) -> int:
    if isinstance(x, str):
        try:
            return {"x": 0, "y": 1, "z": 2}[x.lower()]
        except KeyError:
            raise ValueError(f"axis must be one of 'x', 'y', 'z', "
                             f"but {x!r} was given.") from None
    if x not in (0, 1, 2):
        raise ValueError(f"axis index must be 0, 1 or 2, but {x} was given.")
    return int(x)
