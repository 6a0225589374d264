"""Commands that create, change, inspect and move datasets.

Every command here is a :class:`DatasetCommand`: it resolves dataset
names to URIs, builds a request model and hands it to the backend.
"""

from __future__ import annotations

import argparse

from kite_dataset.cli import exit_codes
from kite_dataset.cli.commands.base import DatasetCommand, check_writers, parse_properties
from kite_dataset.core.avro import dump_schema, load_json, load_schema
from kite_dataset.core.models import CopyTask, DatasetDescriptor
from kite_dataset.exceptions import ArgumentError, DatasetNotFoundError

FORMATS: tuple[str, ...] = ("avro", "parquet")


def _add_copy_arguments(parser: argparse.ArgumentParser) -> None:
    parser.add_argument("source", metavar="<source>", help="Source dataset name or URI")
    parser.add_argument("target", metavar="<target>", help="Target dataset name or URI")
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
    parser.add_argument(
        "--overwrite",
        action="store_true",
        help="Remove any data already in the target view or dataset",
    )


class CreateDatasetCommand(DatasetCommand):
    name = "create"
    description = "Create an empty dataset"
    examples = (
        "# Create dataset \"users\" in Hive:",
        "users --schema user.avsc",
        "# Create Parquet dataset \"users\" partitioned by user id:",
        "users -s user.avsc --format parquet -p id-partition.json",
    )

    def add_arguments(self, parser: argparse.ArgumentParser) -> None:
        parser.add_argument("dataset", metavar="<dataset>", help="Dataset name or URI")
        parser.add_argument(
            "-s", "--schema", required=True, metavar="<file>",
            help="The file containing the Avro schema",
        )
        parser.add_argument(
            "-f", "--format", choices=FORMATS, default="avro",
            help="The file format: avro or parquet",
        )
        parser.add_argument(
            "-p", "--partition-by", metavar="<file>",
            help="A file containing a JSON-formatted partition strategy",
        )
        parser.add_argument(
            "-m", "--column-mapping", metavar="<file>",
            help="A file containing a JSON-formatted column mapping",
        )
        parser.add_argument("--location", metavar="<path>", help="Location where the data is stored")
        parser.add_argument(
            "--set", action="append", metavar="<key=value>",
            help="Add a property to the dataset descriptor",
        )
        self.add_namespace_argument(parser)

    def run(self, args: argparse.Namespace) -> int:
        uri = self.uri_for(args.dataset, args)
        descriptor = DatasetDescriptor(
            schema=load_schema(args.schema),
            format=args.format,
            partition_strategy=load_json(args.partition_by) if args.partition_by else None,
            column_mapping=load_json(args.column_mapping) if args.column_mapping else None,
            location=args.location,
            properties=parse_properties(args.set),
        )
        self.backend().create(uri, descriptor)
        return exit_codes.SUCCESS


class UpdateDatasetCommand(DatasetCommand):
    name = "update"
    description = "Update the metadata descriptor for dataset"
    examples = (
        "# Update schema for dataset \"users\" in Hive:",
        "users --schema user.avsc",
        "# Set a descriptor property:",
        "users --set kite.writer.cache-size=20",
    )

    def add_arguments(self, parser: argparse.ArgumentParser) -> None:
        parser.add_argument("dataset", metavar="<dataset>", help="Dataset name or URI")
        parser.add_argument("-s", "--schema", metavar="<file>", help="The file containing the Avro schema")
        parser.add_argument(
            "--set", action="append", metavar="<key=value>",
            help="Add a property to the dataset descriptor",
        )
        self.add_namespace_argument(parser)

    def run(self, args: argparse.Namespace) -> int:
        if args.schema is None and not args.set:
            raise ArgumentError("Nothing to update", hint="Pass --schema and/or --set key=value")
        uri = self.uri_for(args.dataset, args)
        descriptor = DatasetDescriptor(
            schema=load_schema(args.schema) if args.schema else None,
            properties=parse_properties(args.set),
        )
        self.backend().update(uri, descriptor)
        return exit_codes.SUCCESS


class DeleteCommand(DatasetCommand):
    name = "delete"
    description = "Delete one or more datasets and related metadata"
    examples = (
        "# Delete all data and metadata for the dataset \"users\":",
        "users",
        "# Delete a view of \"events\":",
        "view:hive:default/events?source=mobile",
    )

    def add_arguments(self, parser: argparse.ArgumentParser) -> None:
        parser.add_argument("datasets", nargs="+", metavar="<dataset>", help="Dataset names or URIs")
        self.add_namespace_argument(parser)

    def run(self, args: argparse.Namespace) -> int:
        backend = self.backend()
        for name in args.datasets:
            if not backend.delete(self.uri_for(name, args)):
                raise DatasetNotFoundError(f"No such dataset: {name}")
        return exit_codes.SUCCESS


class SchemaCommand(DatasetCommand):
    name = "schema"
    description = "Show the schema for a Dataset"
    examples = (
        "# Print the schema for dataset \"users\" to standard out:",
        "users",
        "# Save the schema for dataset \"users\" to user.avsc:",
        "users -o user.avsc",
    )

    def add_arguments(self, parser: argparse.ArgumentParser) -> None:
        parser.add_argument("datasets", nargs="+", metavar="<dataset>", help="Dataset names or URIs")
        self.add_output_argument(parser, "the schema")
        parser.add_argument("--minimize", action="store_true", help="Minimize schema file size by eliminating white space")
        self.add_namespace_argument(parser)

    def run(self, args: argparse.Namespace) -> int:
        if len(args.datasets) > 1 and args.output not in (None, "-"):
            raise ArgumentError("Cannot output multiple schemas to one file")
        backend = self.backend()
        for name in args.datasets:
            schema = backend.schema(self.uri_for(name, args))
            self.output(dump_schema(schema, minimize=args.minimize), args.output)
        return exit_codes.SUCCESS


class InfoCommand(DatasetCommand):
    name = "info"
    description = "Print all metadata for a Dataset"
    examples = (
        "# Print all metadata for the \"users\" dataset:",
        "users",
    )

    def add_arguments(self, parser: argparse.ArgumentParser) -> None:
        parser.add_argument("datasets", nargs="+", metavar="<dataset>", help="Dataset names or URIs")
        self.add_namespace_argument(parser)

    def run(self, args: argparse.Namespace) -> int:
        backend = self.backend()
        for name in args.datasets:
            self.console.info("%s", backend.describe(self.uri_for(name, args)))
        return exit_codes.SUCCESS


class ShowRecordsCommand(DatasetCommand):
    name = "show"
    description = "Print the first n records in a Dataset"
    examples = (
        "# Show the first 10 records in dataset \"users\":",
        "users",
        "# Show the first 50 records:",
        "users -n 50",
    )

    def add_arguments(self, parser: argparse.ArgumentParser) -> None:
        parser.add_argument("dataset", metavar="<dataset>", help="Dataset name or URI")
        parser.add_argument(
            "-n", "--num-records", type=int, default=10, metavar="<n>",
            help="The number of records to print",
        )
        self.add_namespace_argument(parser)

    def run(self, args: argparse.Namespace) -> int:
        if args.num_records < 0:
            raise ArgumentError(f"Number of records must not be negative: {args.num_records}")
        uri = self.uri_for(args.dataset, args)
        for record in self.backend().read(uri, args.num_records):
            self.console.info("%s", record)
        return exit_codes.SUCCESS


class CopyCommand(DatasetCommand):
    name = "copy"
    description = "Copy records from one Dataset to another"
    examples = (
        "# Copy the contents of movies_avro to movies_parquet:",
        "movies_avro movies_parquet",
        "# Copy the movies dataset into HBase in a map-only job:",
        "movies dataset:hbase:zk-host/movies --no-compaction",
    )

    def add_arguments(self, parser: argparse.ArgumentParser) -> None:
        _add_copy_arguments(parser)
        self.add_namespace_argument(parser)

    def run(self, args: argparse.Namespace) -> int:
        check_writers(args.num_writers)
        task = CopyTask(
            source=self.uri_for(args.source, args),
            target=self.uri_for(args.target, args),
            num_writers=args.num_writers,
            compact=args.compact,
            overwrite=args.overwrite,
        )
        self.report_added(self.backend().copy(task), args.target)
        return exit_codes.SUCCESS


class TransformCommand(DatasetCommand):
    name = "transform"
    description = "Transform records from one Dataset and store them in another"
    examples = (
        "# Transform the contents of movies_src using a record function:",
        "movies_src movies --transform my_transforms:normalize",
    )

    def add_arguments(self, parser: argparse.ArgumentParser) -> None:
        _add_copy_arguments(parser)
        parser.add_argument(
            "--transform", required=True, metavar="<module:function>",
            help="Import path of the function applied to every record",
        )
        self.add_namespace_argument(parser)

    def run(self, args: argparse.Namespace) -> int:
        module, sep, function = args.transform.partition(":")
        if not sep or not module or not function:
            raise ArgumentError(
                f"Invalid transform: {args.transform}",
                hint="Use module:function, for example my_transforms:normalize",
            )
        check_writers(args.num_writers)
        task = CopyTask(
            source=self.uri_for(args.source, args),
            target=self.uri_for(args.target, args),
            transform=args.transform,
            num_writers=args.num_writers,
            compact=args.compact,
            overwrite=args.overwrite,
        )
        self.report_added(self.backend().copy(task), args.target)
        return exit_codes.SUCCESS
