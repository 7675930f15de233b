"""
Legend rendering.

The legend is a cluster holding a single plaintext node whose HTML-like label
summarizes the mesh and, for cycle snapshots, the cycle number and its
statistics table.
"""

from __future__ import annotations

import html
import logging
from typing import Dict, List, Optional

from mesh_core.mesh import ActivationCycle, Mesh

from .attributes import apply_attributes
from .config import DEFAULT_LEGEND_TEMPLATE, ExporterConfig
from .dot_graph import HTML, DotGraph
from .errors import LegendRenderError
from .ids import LEGEND_NODE_ID, LEGEND_SUBGRAPH_ID
from .stats import StatEntry, cycle_stats

logger = logging.getLogger(__name__)


def mesh_description(mesh: Mesh) -> str:
    """Return the mesh description, or a generated one when it is empty."""
    if mesh.description:
        return mesh.description
    return f"A mesh with {len(mesh.components)} components"


def render_legend(
    description: str,
    cycle_number: Optional[int] = None,
    stats: Optional[List[StatEntry]] = None,
    template: str = DEFAULT_LEGEND_TEMPLATE,
) -> str:
    """
    Render the legend markup fragment.

    Args:
        description: Mesh description (escaped before rendering)
        cycle_number: Activation cycle shown by the snapshot, if any
        stats: Statistics table of that cycle, rendered in the given order
        template: Format string with {description}, {cycle_rows} and {stats_rows}

    Returns:
        HTML-like label body, without the enclosing angle brackets

    Raises:
        LegendRenderError: If the template cannot be formatted
    """
    cycle_rows = ""
    if cycle_number is not None:
        cycle_rows = f'<TR><TD COLSPAN="2">Activation cycle: <B>{int(cycle_number)}</B></TD></TR>'

    stats_rows = ""
    if stats is not None:
        stats_rows = '<TR><TD COLSPAN="2"><I>Stats</I></TD></TR>' + "".join(
            f'<TR><TD ALIGN="LEFT">{html.escape(e.name)}</TD><TD ALIGN="RIGHT">{e.value}</TD></TR>'
            for e in stats
        )

    try:
        return template.format(
            description=html.escape(description),
            cycle_rows=cycle_rows,
            stats_rows=stats_rows,
        )
    except (KeyError, IndexError, ValueError, AttributeError) as err:
        raise LegendRenderError(f"failed to render legend: {err!r}") from err


def add_legend(
    graph: DotGraph,
    mesh: Mesh,
    cycle: Optional[ActivationCycle],
    config: ExporterConfig,
) -> Dict[str, str]:
    """Attach the legend cluster and node to `graph`; returns the node attributes."""
    subgraph = graph.subgraph(LEGEND_SUBGRAPH_ID)
    apply_attributes(subgraph.attributes, config.legend.subgraph)
    subgraph.delete("label")

    cycle_number = None
    stats = None
    if cycle is not None:
        cycle_number = cycle.number
        stats = cycle_stats(cycle)
        logger.debug("Legend for cycle %d: %s", cycle.number, stats)

    fragment = render_legend(
        mesh_description(mesh), cycle_number, stats, template=config.legend.template
    )

    node = subgraph.node(LEGEND_NODE_ID)
    apply_attributes(node, config.legend.node)
    node["label"] = HTML(fragment)
    return node
