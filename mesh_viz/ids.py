"""
Identifiers of rendered graph elements.

Port node identifiers are the only link between the pass that renders
components and the pass that renders pipes, so they must be a pure function of
(component name, direction, port name). Names are percent-encoded, which keeps
the scheme injective when names contain the "/" separator.
"""

from __future__ import annotations

from urllib.parse import quote

from mesh_core.enums import PortDirection

LEGEND_SUBGRAPH_ID = "cluster_legend"
LEGEND_NODE_ID = "legend"

_COMPONENT_PREFIX = "component"
_SUBGRAPH_PREFIX = "cluster_component_"

_DIRECTION_MARKERS = {
    PortDirection.IN: "in",
    PortDirection.OUT: "out",
}


def _enc(name: str) -> str:
    return quote(str(name), safe="")


def direction_marker(direction) -> str:
    """Map a port direction to "in"/"out"; unknown directions map to ""."""
    return _DIRECTION_MARKERS.get(direction, "")


def port_id(component_name: str, direction, port_name: str) -> str:
    return f"{_COMPONENT_PREFIX}/{_enc(component_name)}/{direction_marker(direction)}/{_enc(port_name)}"


def component_node_id(component_name: str) -> str:
    return f"{_COMPONENT_PREFIX}/{_enc(component_name)}"


def error_node_id(component_name: str) -> str:
    # Port ids always have four segments, this one has three.
    return f"{_COMPONENT_PREFIX}/{_enc(component_name)}/error"


def component_subgraph_id(component_name: str) -> str:
    return _SUBGRAPH_PREFIX + _enc(component_name)
