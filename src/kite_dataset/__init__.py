"""kite-dataset: command-line utility for managing Kite datasets.

Dispatches a fixed set of subcommands, renders their help, and turns
every failure into a single console message and an exit code.
"""

from kite_dataset.version import __version__

__all__: list[str] = ["__version__"]
