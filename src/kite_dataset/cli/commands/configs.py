"""Commands that generate configuration files.

These run locally: partition strategies and column mappings are built
from a schema file, and the log4j and Flume snippets only need a
dataset URI.
"""

from __future__ import annotations

import argparse

from kite_dataset.cli import exit_codes
from kite_dataset.cli.commands.base import BaseCommand, DatasetCommand
from kite_dataset.core.avro import dump_schema, field_names, load_json, load_schema
from kite_dataset.core.partitions import build_column_mapping, build_partition_strategy
from kite_dataset.exceptions import ArgumentError, ValidationError

DEFAULT_FLUME_PORT = 41415


class CreatePartitionStrategyCommand(BaseCommand):
    name = "partition-config"
    description = "Builds a partition strategy for a schema"
    examples = (
        "# Partition by email address, balanced across 16 hash partitions:",
        "email:hash[16] email:identity -s user.avsc -o email-part.json",
        "# Partition by created_at time's year, month, and day:",
        "created_at:year created_at:month created_at:day -s event.avsc",
    )

    def add_arguments(self, parser: argparse.ArgumentParser) -> None:
        parser.add_argument(
            "partitions", nargs="+", metavar="<field:type>",
            help="Partition fields; types: identity, hash[N], year, month, day, hour, minute, provided",
        )
        parser.add_argument(
            "-s", "--schema", required=True, metavar="<file>",
            help="The file containing the Avro schema",
        )
        self.add_output_argument(parser, "the partition strategy")
        parser.add_argument("--minimize", action="store_true", help="Minimize output size by eliminating white space")

    def run(self, args: argparse.Namespace) -> int:
        schema = load_schema(args.schema)
        strategy = build_partition_strategy(args.partitions, field_names(schema))
        self.output(dump_schema(strategy, minimize=args.minimize), args.output)
        return exit_codes.SUCCESS


class CreateColumnMappingCommand(BaseCommand):
    name = "mapping-config"
    description = "Builds a column mapping for a schema"
    examples = (
        "# Store email in the key and username in column u:username:",
        "email:key username:u:username -s user.avsc -p email-part.json",
        "# Store preferences as one column per map key in family prefs:",
        "email:key preferences:prefs -s user.avsc -p email-part.json -o mapping.json",
    )

    def add_arguments(self, parser: argparse.ArgumentParser) -> None:
        parser.add_argument(
            "mappings", nargs="+", metavar="<field:mapping>",
            help="Mappings: field:key, field:version, field:family or field:family:qualifier",
        )
        parser.add_argument(
            "-s", "--schema", required=True, metavar="<file>",
            help="The file containing the Avro schema",
        )
        parser.add_argument(
            "-p", "--partition-by", metavar="<file>",
            help="The file containing the JSON partition strategy",
        )
        self.add_output_argument(parser, "the column mapping")
        parser.add_argument("--minimize", action="store_true", help="Minimize output size by eliminating white space")

    def run(self, args: argparse.Namespace) -> int:
        schema = load_schema(args.schema)
        strategy = None
        if args.partition_by:
            strategy = load_json(args.partition_by)
            if not isinstance(strategy, list):
                raise ValidationError(f"Partition strategy in {args.partition_by} is not a list")
        mapping = build_column_mapping(args.mappings, field_names(schema), strategy)
        self.output(dump_schema(mapping, minimize=args.minimize), args.output)
        return exit_codes.SUCCESS


class Log4jConfigCommand(DatasetCommand):
    name = "log4j-config"
    description = "Build a log4j config to log events to a dataset"
    examples = (
        "# Print log4j configuration to log to dataset \"users\":",
        "--host flume.cluster.com --class org.kitesdk.examples.MyLoggingApp users",
        "# Save log4j configuration to the file log4j.properties:",
        "--host flume.cluster.com --package org.kitesdk.examples -o log4j.properties users",
    )

    def add_arguments(self, parser: argparse.ArgumentParser) -> None:
        parser.add_argument("dataset", metavar="<dataset>", help="Dataset name or URI")
        parser.add_argument("--host", required=True, metavar="<host>", help="Flume agent host name")
        parser.add_argument(
            "--port", type=int, default=DEFAULT_FLUME_PORT, metavar="<port>",
            help="Flume agent port",
        )
        parser.add_argument("--class", dest="logger_class", metavar="<class>", help="Logger to send to Flume")
        parser.add_argument("--package", metavar="<package>", help="Package whose loggers send to Flume")
        parser.add_argument("--log-all", action="store_true", help="Send every logger to Flume")
        self.add_output_argument(parser, "the configuration")
        self.add_namespace_argument(parser)

    def run(self, args: argparse.Namespace) -> int:
        targets = [name for name in (args.logger_class, args.package) if name]
        if not targets and not args.log_all:
            raise ArgumentError(
                "No logger selected",
                hint="Pass --class <class>, --package <package> or --log-all",
            )

        lines = [
            "log4j.appender.flume = org.kitesdk.data.flume.Log4jAppender",
            f"log4j.appender.flume.Hostname = {args.host}",
            f"log4j.appender.flume.Port = {args.port}",
            f"log4j.appender.flume.DatasetUri = {self.uri_for(args.dataset, args)}",
            "log4j.appender.flume.UnsafeMode = true",
        ]
        if args.log_all:
            lines.append("log4j.rootLogger = INFO, flume")
        lines += [f"log4j.logger.{name} = INFO, flume" for name in targets]

        self.output("\n".join(lines), args.output)
        return exit_codes.SUCCESS


class FlumeConfigCommand(DatasetCommand):
    name = "flume-config"
    description = "Build a Flume config to log events to a dataset"
    examples = (
        "# Print a Flume config that writes to dataset \"users\" with a memory channel:",
        "users --channel-type memory",
        "# Save a file-channel config to flume.properties:",
        "users --checkpoint-dir /data/1/flume/checkpoint --data-dir /data/2/flume/data -o flume.properties",
    )

    def add_arguments(self, parser: argparse.ArgumentParser) -> None:
        parser.add_argument("dataset", metavar="<dataset>", help="Dataset name or URI")
        parser.add_argument("--agent", default="tier1", metavar="<name>", help="Flume agent name")
        parser.add_argument("--source", default="avro-event-source", metavar="<name>", help="Avro source name")
        parser.add_argument("--bind", default="0.0.0.0", metavar="<address>", help="Avro source bind address")
        parser.add_argument(
            "--port", type=int, default=DEFAULT_FLUME_PORT, metavar="<port>",
            help="Avro source port",
        )
        parser.add_argument("--channel", default="avro-event-channel", metavar="<name>", help="Channel name")
        parser.add_argument(
            "--channel-type", choices=("file", "memory"), default="file",
            help="Channel type",
        )
        parser.add_argument(
            "--capacity", type=int, metavar="<n>",
            help="Channel capacity (default: 1000000 for file, 10000000 for memory)",
        )
        parser.add_argument(
            "--transaction-capacity", type=int, default=1000, metavar="<n>",
            help="Channel transaction capacity",
        )
        parser.add_argument("--checkpoint-dir", metavar="<dir>", help="File channel checkpoint directory")
        parser.add_argument(
            "--data-dir", action="append", metavar="<dir>",
            help="File channel data directory (repeatable)",
        )
        parser.add_argument("--sink", default="kite-dataset", metavar="<name>", help="Sink name")
        parser.add_argument(
            "--batch-size", type=int, default=1000, metavar="<n>",
            help="Records to write per batch",
        )
        parser.add_argument(
            "--roll-interval", type=int, default=30, metavar="<seconds>",
            help="Seconds to wait before rolling the current file",
        )
        self.add_output_argument(parser, "the configuration")
        self.add_namespace_argument(parser)

    def run(self, args: argparse.Namespace) -> int:
        if args.channel_type == "file" and (not args.checkpoint_dir or not args.data_dir):
            raise ArgumentError(
                "A file channel needs --checkpoint-dir and --data-dir",
                hint="Pass both, or use --channel-type memory",
            )
        for option, value in (
            ("port", args.port),
            ("transaction-capacity", args.transaction_capacity),
            ("batch-size", args.batch_size),
            ("roll-interval", args.roll_interval),
        ):
            if value < 1:
                raise ArgumentError(f"--{option} must be positive: {value}")

        capacity = args.capacity
        if capacity is None:
            capacity = 10_000_000 if args.channel_type == "memory" else 1_000_000

        agent, source, channel, sink = args.agent, args.source, args.channel, args.sink
        lines = [
            f"{agent}.sources = {source}",
            f"{agent}.channels = {channel}",
            f"{agent}.sinks = {sink}",
            "",
            f"{agent}.sources.{source}.type = avro",
            f"{agent}.sources.{source}.channels = {channel}",
            f"{agent}.sources.{source}.bind = {args.bind}",
            f"{agent}.sources.{source}.port = {args.port}",
            "",
            f"{agent}.channels.{channel}.type = {args.channel_type}",
            f"{agent}.channels.{channel}.capacity = {capacity}",
            f"{agent}.channels.{channel}.transactionCapacity = {args.transaction_capacity}",
        ]
        if args.channel_type == "file":
            lines += [
                f"{agent}.channels.{channel}.checkpointDir = {args.checkpoint_dir}",
                f"{agent}.channels.{channel}.dataDirs = {','.join(args.data_dir)}",
            ]
        lines += [
            "",
            f"{agent}.sinks.{sink}.type = org.apache.flume.sink.kite.DatasetSink",
            f"{agent}.sinks.{sink}.channel = {channel}",
            f"{agent}.sinks.{sink}.kite.dataset.uri = {self.uri_for(args.dataset, args)}",
            f"{agent}.sinks.{sink}.kite.batchSize = {args.batch_size}",
            f"{agent}.sinks.{sink}.kite.rollInterval = {args.roll_interval}",
        ]

        self.output("\n".join(lines), args.output)
        return exit_codes.SUCCESS
