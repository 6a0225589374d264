"""Registered kite-dataset commands.

:data:`COMMANDS` is the registration order, which is also the order of
the generic help listing (after ``help``).
"""

from kite_dataset.cli.commands.base import BaseCommand, DatasetCommand
from kite_dataset.cli.commands.configs import (
    CreateColumnMappingCommand,
    CreatePartitionStrategyCommand,
    FlumeConfigCommand,
    Log4jConfigCommand,
)
from kite_dataset.cli.commands.dataset import (
    CopyCommand,
    CreateDatasetCommand,
    DeleteCommand,
    InfoCommand,
    SchemaCommand,
    ShowRecordsCommand,
    TransformCommand,
    UpdateDatasetCommand,
)
from kite_dataset.cli.commands.imports import (
    CSVImportCommand,
    InputFormatImportCommand,
    JSONImportCommand,
    TarImportCommand,
)
from kite_dataset.cli.commands.schemas import (
    CSVSchemaCommand,
    JSONSchemaCommand,
    MergeSchemasCommand,
    ObjectSchemaCommand,
)

COMMANDS: tuple[type[BaseCommand], ...] = (
    CreateDatasetCommand,
    CopyCommand,
    TransformCommand,
    UpdateDatasetCommand,
    DeleteCommand,
    SchemaCommand,
    InfoCommand,
    ShowRecordsCommand,
    MergeSchemasCommand,
    ObjectSchemaCommand,
    InputFormatImportCommand,
    CSVSchemaCommand,
    CSVImportCommand,
    JSONSchemaCommand,
    JSONImportCommand,
    CreatePartitionStrategyCommand,
    CreateColumnMappingCommand,
    Log4jConfigCommand,
    FlumeConfigCommand,
    TarImportCommand,
)

__all__: list[str] = [
    "COMMANDS",
    "BaseCommand",
    "CSVImportCommand",
    "CSVSchemaCommand",
    "CopyCommand",
    "CreateColumnMappingCommand",
    "CreateDatasetCommand",
    "CreatePartitionStrategyCommand",
    "DatasetCommand",
    "DeleteCommand",
    "FlumeConfigCommand",
    "InfoCommand",
    "InputFormatImportCommand",
    "JSONImportCommand",
    "JSONSchemaCommand",
    "Log4jConfigCommand",
    "MergeSchemasCommand",
    "ObjectSchemaCommand",
    "SchemaCommand",
    "ShowRecordsCommand",
    "TarImportCommand",
    "TransformCommand",
    "UpdateDatasetCommand",
]
