"""
In-memory graph model for DOT output.

`DotGraph` is the narrow capability layer the exporter builds on: create a
node, create an edge, create a labeled cluster subgraph, set attributes and
look a node up by id. Membership and lookups are kept in a NetworkX
multigraph; `to_digraph()` turns the result into a `graphviz.Digraph` for
serialization.
"""

from __future__ import annotations

from typing import Dict, List, Mapping, Optional, Tuple

import graphviz
import networkx as nx

from .attributes import apply_attributes


class HTML(str):
    """Attribute value emitted as an HTML-like label (`<...>`) instead of quoted text."""


def _dot_attrs(attrs: Mapping[str, str]) -> Dict[str, str]:
    # Plain values are escaped text: backslashes are doubled and "<nil>" is not HTML.
    return {
        name: f"<{value}>" if isinstance(value, HTML) else graphviz.escape(value)
        for name, value in attrs.items()
    }


class Subgraph:
    """
    A cluster subgraph of a `DotGraph`.

    Nodes created through a subgraph start from a copy of `node_defaults`.
    A fresh subgraph is labeled with its own name.
    """

    def __init__(self, graph: "DotGraph", name: str):
        self.graph = graph
        self.name = name
        self.attributes: Dict[str, str] = {"label": name}
        self.node_defaults: Dict[str, str] = {}

    def node(self, node_id: str) -> Dict[str, str]:
        return self.graph._add_node(node_id, self.name, self.node_defaults)

    def edge(self, src: str, dst: str) -> Dict[str, str]:
        return self.graph._add_edge(src, dst, self.name)

    def label(self, text: str) -> "Subgraph":
        self.attributes["label"] = str(text)
        return self

    def delete(self, name: str) -> "Subgraph":
        self.attributes.pop(name, None)
        return self

    def nodes(self) -> List[str]:
        return self.graph._nodes_in(self.name)

    def edges(self) -> List[Tuple[str, str, Dict[str, str]]]:
        return self.graph._edges_in(self.name)


class DotGraph:
    """
    Directed graph with cluster subgraphs, built node by node and edge by edge.

    Attributes:
        name: Name of the root graph
        attributes: Root graph attributes
    """

    def __init__(self, name: str = "mesh"):
        self.name = name
        self.attributes: Dict[str, str] = {}
        self._nx = nx.MultiDiGraph()
        # (src, dst, subgraph, attrs) in insertion order; the multigraph groups edges by source
        self._edges: List[Tuple[str, str, Optional[str], Dict[str, str]]] = []
        self._subgraphs: Dict[str, Subgraph] = {}

    # ----- building -----
    def subgraph(self, name: str) -> Subgraph:
        """Return the cluster subgraph with this name, creating it if needed."""
        if name not in self._subgraphs:
            self._subgraphs[name] = Subgraph(self, name)
        return self._subgraphs[name]

    def node(self, node_id: str) -> Dict[str, str]:
        """Create a root-level node (or return the existing one) and return its attributes."""
        return self._add_node(node_id, None, {})

    def edge(self, src: str, dst: str) -> Dict[str, str]:
        """Create a root-level edge between existing nodes and return its attributes."""
        return self._add_edge(src, dst, None)

    def _add_node(self, node_id: str, subgraph: Optional[str], defaults: Mapping[str, str]) -> Dict[str, str]:
        if node_id in self._nx:
            return self._nx.nodes[node_id]["attrs"]
        attrs: Dict[str, str] = apply_attributes({}, defaults)
        self._nx.add_node(node_id, subgraph=subgraph, attrs=attrs)
        return attrs

    def _add_edge(self, src: str, dst: str, subgraph: Optional[str]) -> Dict[str, str]:
        for node_id in (src, dst):
            if node_id not in self._nx:
                raise KeyError(f"cannot connect unknown node {node_id!r}")
        attrs: Dict[str, str] = {}
        self._nx.add_edge(src, dst, subgraph=subgraph, attrs=attrs)
        self._edges.append((src, dst, subgraph, attrs))
        return attrs

    # ----- lookup -----
    def find_node(self, node_id: str) -> Optional[Dict[str, str]]:
        """Return the attributes of the node with this id, or None when absent."""
        if node_id not in self._nx:
            return None
        return self._nx.nodes[node_id]["attrs"]

    def node_subgraph(self, node_id: str) -> Optional[str]:
        return self._nx.nodes[node_id]["subgraph"]

    @property
    def subgraphs(self) -> List[Subgraph]:
        return list(self._subgraphs.values())

    def nodes(self) -> Dict[str, Dict[str, str]]:
        return {n: dict(d["attrs"]) for n, d in self._nx.nodes(data=True)}

    def edges(self) -> List[Tuple[str, str, Dict[str, str]]]:
        return [(u, v, dict(attrs)) for u, v, _, attrs in self._edges]

    def _nodes_in(self, subgraph: Optional[str]) -> List[str]:
        return [n for n, d in self._nx.nodes(data=True) if d["subgraph"] == subgraph]

    def _edges_in(self, subgraph: Optional[str]) -> List[Tuple[str, str, Dict[str, str]]]:
        return [(u, v, attrs) for u, v, sg, attrs in self._edges if sg == subgraph]

    # ----- conversion -----
    def to_networkx(self) -> nx.MultiDiGraph:
        """
        Return a flattened NetworkX copy for analysis.

        Node and edge attributes are copied as plain data; the owning cluster is
        stored under the "subgraph" key (None for root-level elements).
        """
        G = nx.MultiDiGraph(name=self.name, **self.attributes)
        for node_id, data in self._nx.nodes(data=True):
            G.add_node(node_id, subgraph=data["subgraph"], **data["attrs"])
        for u, v, subgraph, attrs in self._edges:
            G.add_edge(u, v, subgraph=subgraph, **attrs)
        return G

    def to_digraph(self) -> graphviz.Digraph:
        """Build the `graphviz.Digraph` describing this graph."""
        dot = graphviz.Digraph(name=self.name, graph_attr=_dot_attrs(self.attributes))
        for sg in self._subgraphs.values():
            with dot.subgraph(name=sg.name) as cluster:
                cluster.attr(_attributes=_dot_attrs(sg.attributes))
                for node_id in self._nodes_in(sg.name):
                    cluster.node(node_id, _attributes=_dot_attrs(self._nx.nodes[node_id]["attrs"]))
                for u, v, attrs in self._edges_in(sg.name):
                    cluster.edge(u, v, _attributes=_dot_attrs(attrs))
        for node_id in self._nodes_in(None):
            dot.node(node_id, _attributes=_dot_attrs(self._nx.nodes[node_id]["attrs"]))
        for u, v, attrs in self._edges_in(None):
            dot.edge(u, v, _attributes=_dot_attrs(attrs))
        return dot

    @property
    def source(self) -> str:
        """DOT source text."""
        return self.to_digraph().source

    def write(self) -> bytes:
        """DOT source encoded as UTF-8."""
        return self.source.encode("utf-8")
