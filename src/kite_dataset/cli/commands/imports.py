"""Commands that load records from files into a dataset."""

from __future__ import annotations

import argparse
from typing import Any

from kite_dataset.cli import exit_codes
from kite_dataset.cli.commands.base import (
    DatasetCommand,
    check_writers,
    parse_properties,
    require_local_path,
)
from kite_dataset.core.models import ImportTask
from kite_dataset.exceptions import ArgumentError

TAR_COMPRESSION: tuple[str, ...] = ("none", "deflate", "snappy", "bzip2")


class _ImportCommand(DatasetCommand):
    """Shared ``<path> <dataset>`` handling for the import commands."""

    format: str
    path_label: str

    def add_common_arguments(self, parser: argparse.ArgumentParser) -> None:
        parser.add_argument("path", metavar="<path>", help=f"{self.path_label} path to import")
        parser.add_argument("dataset", metavar="<dataset>", help="Target dataset name or URI")
        parser.add_argument(
            "--no-compaction",
            dest="compact",
            action="store_false",
            help="Copy to output directly, without compacting the data",
        )
        parser.add_argument(
            "--num-writers",
            type=int,
            metavar="<n>",
            help="The number of writer processes to use",
        )
        self.add_namespace_argument(parser)

    def import_options(self, args: argparse.Namespace) -> dict[str, Any]:
        return {}

    def run(self, args: argparse.Namespace) -> int:
        require_local_path(args.path, self.path_label)
        check_writers(args.num_writers)

        options = {"compact": args.compact, "num_writers": args.num_writers}
        options.update(self.import_options(args))
        task = ImportTask(
            format=self.format,
            path=args.path,
            target=self.uri_for(args.dataset, args),
            options=options,
        )
        self.report_added(self.backend().import_records(task), args.dataset)
        return exit_codes.SUCCESS


class CSVImportCommand(_ImportCommand):
    name = "csv-import"
    description = "Copy CSV records into a Dataset"
    examples = (
        "# Copy the records from sample.csv to dataset \"sample\":",
        "path/to/sample.csv sample",
        "# Copy the records from sample.csv to a dataset URI:",
        "path/to/sample.csv dataset:hdfs:/user/me/datasets/sample",
    )
    format = "csv"
    path_label = "CSV"

    def add_arguments(self, parser: argparse.ArgumentParser) -> None:
        self.add_common_arguments(parser)
        parser.add_argument("--delimiter", default=",", metavar="<char>", help="Delimiter character")
        parser.add_argument("--escape", default="\\", metavar="<char>", help="Escape character")
        parser.add_argument("--quote", default='"', metavar="<char>", help="Quote character")
        parser.add_argument(
            "--skip-lines", type=int, default=0, metavar="<n>",
            help="Lines to skip before CSV start",
        )
        parser.add_argument(
            "--no-header", dest="header", action="store_false",
            help="Don't use the first line of the CSV as field names",
        )

    def import_options(self, args: argparse.Namespace) -> dict[str, Any]:
        if args.skip_lines < 0:
            raise ArgumentError(f"Lines to skip must not be negative: {args.skip_lines}")
        return {
            "delimiter": args.delimiter,
            "escape": args.escape,
            "quote": args.quote,
            "skip_lines": args.skip_lines,
            "header": args.header,
        }


class JSONImportCommand(_ImportCommand):
    name = "json-import"
    description = "Copy JSON records into a Dataset"
    examples = (
        "# Copy the records from sample.json to dataset \"sample\":",
        "path/to/sample.json sample",
    )
    format = "json"
    path_label = "JSON"

    def add_arguments(self, parser: argparse.ArgumentParser) -> None:
        self.add_common_arguments(parser)


class InputFormatImportCommand(_ImportCommand):
    name = "inputformat-import"
    description = "Import records into a Dataset using an existing InputFormat"
    examples = (
        "# Import the keys of a sequence file into a dataset:",
        "path/to/data.seq sample --format sequencefile --record-type key",
    )
    format = "inputformat"
    path_label = "Source"

    def add_arguments(self, parser: argparse.ArgumentParser) -> None:
        self.add_common_arguments(parser)
        parser.add_argument(
            "--format", dest="input_format", required=True, metavar="<format>",
            help="Name of the input format used to read the source",
        )
        parser.add_argument(
            "--record-type", choices=("key", "value"), default="value",
            help="Which part of each input pair becomes the record",
        )
        parser.add_argument(
            "--set", action="append", metavar="<key=value>",
            help="Add a property to the input format configuration",
        )
        parser.add_argument(
            "--transform", metavar="<module:function>",
            help="Import path of the function applied to every record",
        )

    def import_options(self, args: argparse.Namespace) -> dict[str, Any]:
        return {
            "input_format": args.input_format,
            "record_type": args.record_type,
            "properties": parse_properties(args.set),
            "transform": args.transform,
        }


class TarImportCommand(_ImportCommand):
    name = "tar-import"
    description = "Import files in tarball into a Dataset"
    examples = (
        "# Import files from the tarball into dataset \"sample\":",
        "path/to/sample.tar.gz sample",
        "# Store the file contents with bzip2 compression:",
        "path/to/sample.tar.gz sample --compression bzip2",
    )
    format = "tar"
    path_label = "Tarball"

    def add_arguments(self, parser: argparse.ArgumentParser) -> None:
        self.add_common_arguments(parser)
        parser.add_argument(
            "--compression", choices=TAR_COMPRESSION, default="snappy",
            help="Compression codec for the stored file contents",
        )

    def import_options(self, args: argparse.Namespace) -> dict[str, Any]:
        return {"compression": args.compression}
