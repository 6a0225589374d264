"""Runtime configuration read from the process environment.

The configuration is built once by the entry point and handed to the
dispatcher, which passes it to every configurable command before
``run``.  Nothing reads the environment after that.
"""

from __future__ import annotations

import os
from collections.abc import Mapping
from dataclasses import dataclass, field

ENV_PREFIX = "KITE_"

BACKEND_KEY = "backend"
"""Name of the ``kite_dataset.backends`` entry point to load."""

NAMESPACE_KEY = "default.namespace"
"""Namespace used for bare dataset names."""

DEFAULT_NAMESPACE = "default"


def _key_for(variable: str) -> str:
    """``KITE_DEFAULT_NAMESPACE`` -> ``default.namespace``."""
    return variable[len(ENV_PREFIX):].lower().replace("_", ".")


@dataclass(frozen=True)
class RuntimeConfig:
    """Immutable key/value configuration handle."""

    properties: Mapping[str, str] = field(default_factory=dict)

    @classmethod
    def from_environ(cls, environ: Mapping[str, str] | None = None) -> RuntimeConfig:
        """Collect every ``KITE_*`` variable from *environ* (default ``os.environ``)."""
        source = os.environ if environ is None else environ
        properties = {
            _key_for(name): value
            for name, value in source.items()
            if name.startswith(ENV_PREFIX) and len(name) > len(ENV_PREFIX)
        }
        return cls(properties=properties)

    def get(self, key: str, default: str | None = None) -> str | None:
        value = self.properties.get(key)
        if value is None or not value.strip():
            return default
        return value.strip()

    @property
    def namespace(self) -> str:
        return self.get(NAMESPACE_KEY, DEFAULT_NAMESPACE) or DEFAULT_NAMESPACE
