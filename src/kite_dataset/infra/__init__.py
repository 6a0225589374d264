"""Infrastructure layer: integration with installed dataset backends.

Rules
-----
* No imports from ``cli``.
* No user-facing output.
"""

from kite_dataset.infra.backends import ENTRY_POINT_GROUP, available_backends, load_backend

__all__: list[str] = [
    "ENTRY_POINT_GROUP",
    "available_backends",
    "load_backend",
]
