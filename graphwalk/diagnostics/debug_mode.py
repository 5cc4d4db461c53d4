"""Process-wide switch for graphwalk's invariant checks.

The switch starts from the GRAPHWALK_DEBUG environment variable. Graph
construction, DisjointSet.union, KahnStepper and the spanning-tree steppers
consult it and run the checks in ``graphwalk.diagnostics.core`` while it is
on.
"""

from __future__ import annotations

import os
from contextlib import contextmanager
from typing import Iterator, Mapping, Optional

ENV_VAR = "GRAPHWALK_DEBUG"

_TRUTHY = frozenset({"1", "true", "yes", "on"})


def _flag_from_env(environ: Mapping[str, str]) -> bool:
    return environ.get(ENV_VAR, "").strip().lower() in _TRUTHY


_debug_enabled: bool = _flag_from_env(os.environ)


def is_debug_enabled() -> bool:
    """Return True while invariant checks are switched on."""
    return _debug_enabled


def set_debug_enabled(enabled: bool) -> None:
    """Switch invariant checks on or off for the whole process."""
    global _debug_enabled
    _debug_enabled = bool(enabled)


def reload_debug_from_env(environ: Optional[Mapping[str, str]] = None) -> bool:
    """
    Re-read the switch from the environment.

    Parameters
    ----------
    environ:
        Mapping to read GRAPHWALK_DEBUG from; defaults to ``os.environ``.
        Accepted true values are ``1``, ``true``, ``yes`` and ``on`` in any
        case; anything else, or an unset variable, turns checks off.

    Returns
    -------
    bool
        The new state of the switch.
    """
    set_debug_enabled(_flag_from_env(os.environ if environ is None else environ))
    return _debug_enabled


@contextmanager
def debug_context(enabled: bool = True) -> Iterator[None]:
    """
    Set the switch for the duration of a ``with`` block.

    The previous state comes back on exit, also when the block raises, so
    contexts nest.

    Example
    -------
    >>> with debug_context(True):
    ...     kruskal_mst(graph)  # spanning-edge checks run here
    """
    previous = is_debug_enabled()
    set_debug_enabled(enabled)
    try:
        yield
    finally:
        set_debug_enabled(previous)
