"""Discovery of the installed dataset backend.

Backends are separate distributions that advertise a factory in the
``kite_dataset.backends`` entry-point group::

    [project.entry-points."kite_dataset.backends"]
    hive = "kite_hive.backend:HiveBackend"

The factory is called with the :class:`~kite_dataset.config.RuntimeConfig`
and must return an object satisfying
:class:`~kite_dataset.core.protocols.DatasetBackend`.
"""

from __future__ import annotations

import logging
from importlib.metadata import EntryPoint, entry_points

from kite_dataset.config import BACKEND_KEY, RuntimeConfig
from kite_dataset.core.protocols import DatasetBackend
from kite_dataset.exceptions import StateError

logger = logging.getLogger(__name__)

ENTRY_POINT_GROUP = "kite_dataset.backends"


def available_backends() -> dict[str, EntryPoint]:
    """Installed backend entry points by name."""
    return {ep.name: ep for ep in entry_points(group=ENTRY_POINT_GROUP)}


def load_backend(conf: RuntimeConfig) -> DatasetBackend:
    """Instantiate the configured backend.

    The backend named by the ``backend`` key (``KITE_BACKEND``) is used;
    without one, the only installed backend is used.

    Raises
    ------
    StateError
        If no backend is installed, the name is unknown, or several are
        installed and none is selected.
    """
    backends = available_backends()
    name = conf.get(BACKEND_KEY)

    if name is None:
        if not backends:
            raise StateError(
                "No dataset backend is installed.",
                hint=f"Install a package that provides a '{ENTRY_POINT_GROUP}' entry point.",
            )
        if len(backends) > 1:
            raise StateError(
                "Several dataset backends are installed; none is selected.",
                hint=f"Set KITE_BACKEND to one of: {', '.join(sorted(backends))}",
            )
        name = next(iter(backends))

    entry_point = backends.get(name)
    if entry_point is None:
        known = ", ".join(sorted(backends)) or "none installed"
        raise StateError(
            f"Unknown dataset backend: {name}",
            hint=f"Available backends: {known}",
        )

    logger.debug("Loading dataset backend %s from %s", name, entry_point.value)
    factory = entry_point.load()
    return factory(conf)
