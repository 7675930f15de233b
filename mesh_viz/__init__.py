"""
Mesh Visualization Package.

This package renders dataflow meshes as Graphviz DOT documents, either as a
single static structure or as one snapshot per activation cycle, with a legend
summarizing each cycle's activation statistics.
"""

from .config import ExporterConfig, config_from_dict, default_config, load_config
from .dot_graph import HTML, DotGraph, Subgraph
from .errors import DuplicateComponentError, ExportError, LegendRenderError, PortNodeNotFoundError
from .exporter import DotExporter
from .stats import StatEntry, cycle_stats
