"""Version information for kite-dataset.

``__version__`` is the version this source tree declares.  The
``--version`` flag reports what is actually installed, read back from
the distribution metadata by :func:`resolve_version`.
"""

from __future__ import annotations

from importlib import metadata
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from kite_dataset.cli.console import Console

__version__ = "0.1.0"

DISTRIBUTION_NAME = "kite-dataset"

UNKNOWN_VERSION = "unknown"


def resolve_version(console: Console, *, debug: bool = False) -> str:
    """Return the installed version, or ``"unknown"``.

    A failure to read the metadata is only reported at warning level;
    it never stops the caller.
    """
    try:
        version = metadata.version(DISTRIBUTION_NAME)
    except Exception as exc:  # noqa: BLE001
        if debug:
            console.warning(
                "Unable to determine version from the %s distribution metadata",
                DISTRIBUTION_NAME,
            )
            console.warning("Exception:", exc_info=exc)
        else:
            console.warning(
                "Unable to determine version from the %s distribution metadata: %s",
                DISTRIBUTION_NAME,
                exc,
            )
        return UNKNOWN_VERSION
    return version or UNKNOWN_VERSION
