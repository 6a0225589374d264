"""Core layer: pure helpers and the backend contract.

Rules
-----
* No console output.
* No imports from ``cli`` or ``infra``.
* Only local file reads (schemas, descriptors); no dataset I/O.
"""

from kite_dataset.core.models import (
    ColumnMapping,
    CopyTask,
    DatasetDescriptor,
    ImportTask,
    PartitionField,
    SchemaRequest,
)
from kite_dataset.core.protocols import DatasetBackend

__all__: list[str] = [
    "ColumnMapping",
    "CopyTask",
    "DatasetBackend",
    "DatasetDescriptor",
    "ImportTask",
    "PartitionField",
    "SchemaRequest",
]
