"""Commands that build Avro schemas from samples, classes or other schemas."""

from __future__ import annotations

import argparse

from kite_dataset.cli import exit_codes
from kite_dataset.cli.commands.base import DatasetCommand, require_local_path
from kite_dataset.core.avro import dump_schema, load_schema
from kite_dataset.core.models import SchemaRequest


def _add_schema_output_arguments(parser: argparse.ArgumentParser) -> None:
    DatasetCommand.add_output_argument(parser, "the schema")
    parser.add_argument(
        "--minimize",
        action="store_true",
        help="Minimize schema file size by eliminating white space",
    )


class MergeSchemasCommand(DatasetCommand):
    name = "merge-schemas"
    description = "Merge multiple schemas into one"
    examples = (
        "# Print the merged schema of two files:",
        "schema_v1.avsc schema_v2.avsc",
        "# Save the merged schema to a file:",
        "schema_v1.avsc schema_v2.avsc -o merged.avsc",
    )

    def add_arguments(self, parser: argparse.ArgumentParser) -> None:
        parser.add_argument("schemas", nargs="+", metavar="<schema>", help="Schema files to merge")
        _add_schema_output_arguments(parser)

    def run(self, args: argparse.Namespace) -> int:
        schemas = [load_schema(path) for path in args.schemas]
        merged = schemas[0] if len(schemas) == 1 else self.backend().merge_schemas(schemas)
        self.output(dump_schema(merged, minimize=args.minimize), args.output)
        return exit_codes.SUCCESS


class ObjectSchemaCommand(DatasetCommand):
    name = "obj-schema"
    description = "Build a schema from a class"
    examples = (
        "# Print the schema for a record class to standard out:",
        "my_models.User",
        "# Save the schema for a class found on an extra path:",
        "my_models.User --lib ./models -o user.avsc",
    )

    def add_arguments(self, parser: argparse.ArgumentParser) -> None:
        parser.add_argument("class_name", metavar="<class>", help="Dotted path of the class to inspect")
        parser.add_argument(
            "--lib", action="append", metavar="<path>",
            help="Extra locations to search for the class",
        )
        _add_schema_output_arguments(parser)

    def run(self, args: argparse.Namespace) -> int:
        request = SchemaRequest(
            kind="object",
            source=args.class_name,
            options={"lib": tuple(args.lib or ())},
        )
        schema = self.backend().infer_schema(request)
        self.output(dump_schema(schema, minimize=args.minimize), args.output)
        return exit_codes.SUCCESS


class CSVSchemaCommand(DatasetCommand):
    name = "csv-schema"
    description = "Build a schema from a CSV data sample"
    examples = (
        "# Print the schema for samples.csv to standard out:",
        "samples.csv --record-name Sample",
        "# Write schema to sample.avsc:",
        "samples.csv -o sample.avsc --record-name Sample",
    )

    def add_arguments(self, parser: argparse.ArgumentParser) -> None:
        parser.add_argument("sample", metavar="<sample.csv>", help="A CSV data sample")
        parser.add_argument(
            "--class", "--record-name", dest="record_name", required=True, metavar="<name>",
            help="A name or class for the result schema",
        )
        parser.add_argument("--delimiter", default=",", metavar="<char>", help="Delimiter character")
        parser.add_argument("--escape", default="\\", metavar="<char>", help="Escape character")
        parser.add_argument("--quote", default='"', metavar="<char>", help="Quote character")
        parser.add_argument(
            "--no-header", dest="header", action="store_false",
            help="Don't use the first line of the CSV as field names",
        )
        parser.add_argument(
            "--require", action="append", metavar="<field>",
            help="Do not allow null values for the given field",
        )
        _add_schema_output_arguments(parser)

    def run(self, args: argparse.Namespace) -> int:
        require_local_path(args.sample, "Sample")
        request = SchemaRequest(
            kind="csv",
            source=args.sample,
            record_name=args.record_name,
            options={
                "delimiter": args.delimiter,
                "escape": args.escape,
                "quote": args.quote,
                "header": args.header,
                "required": tuple(args.require or ()),
            },
        )
        schema = self.backend().infer_schema(request)
        self.output(dump_schema(schema, minimize=args.minimize), args.output)
        return exit_codes.SUCCESS


class JSONSchemaCommand(DatasetCommand):
    name = "json-schema"
    description = "Build a schema from a JSON data sample"
    examples = (
        "# Print the schema for samples.json to standard out:",
        "samples.json --record-name Sample",
        "# Write schema to sample.avsc:",
        "samples.json -o sample.avsc --record-name Sample",
    )

    def add_arguments(self, parser: argparse.ArgumentParser) -> None:
        parser.add_argument("sample", metavar="<sample.json>", help="A JSON data sample")
        parser.add_argument(
            "--class", "--record-name", dest="record_name", required=True, metavar="<name>",
            help="A name or class for the result schema",
        )
        _add_schema_output_arguments(parser)

    def run(self, args: argparse.Namespace) -> int:
        require_local_path(args.sample, "Sample")
        request = SchemaRequest(kind="json", source=args.sample, record_name=args.record_name)
        schema = self.backend().infer_schema(request)
        self.output(dump_schema(schema, minimize=args.minimize), args.output)
        return exit_codes.SUCCESS
