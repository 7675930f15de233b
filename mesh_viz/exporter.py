"""
DOT exporter for dataflow meshes.

The exporter renders a mesh as a Graphviz graph description:

- A legend cluster with the mesh description and, per cycle, its statistics
- One cluster per component holding the component node, one node per port
  wired to the component node and, when the component failed in the cycle,
  an error node
- One edge per pipe between the output port node and the input port node

Configuration: every style bucket comes from `ExporterConfig` in
`mesh_viz.config`. The two rendering passes (components, then pipes) are
independent and meet only through the port identifiers of `mesh_viz.ids`.
"""

from __future__ import annotations

import logging
from typing import Iterable, List, Optional

from mesh_core.enums import PortDirection
from mesh_core.mesh import ActivationCycle, ActivationResult, Component, Mesh, Port

from .attributes import apply_attributes
from .config import ExporterConfig, default_config
from .dot_graph import DotGraph, Subgraph
from .errors import DuplicateComponentError, ExportError, LegendRenderError, PortNodeNotFoundError
from .ids import component_node_id, component_subgraph_id, error_node_id, port_id
from .legend import add_legend

logger = logging.getLogger(__name__)


class DotExporter:
    """
    Renders meshes, optionally per activation cycle, as DOT documents.

    Attributes:
        config: Styling configuration, read but never modified
    """

    def __init__(self, config: ExporterConfig | None = None):
        self.config = config or default_config()

    # ----- public API -----
    def export(self, mesh: Mesh) -> Optional[bytes]:
        """
        Return the static structure of the mesh as a DOT document.

        Returns None for a mesh without components.
        """
        if len(mesh.components) == 0:
            return None
        return self.build_graph(mesh).write()

    def export_with_cycles(self, mesh: Mesh, cycles: Iterable[ActivationCycle]) -> Optional[List[bytes]]:
        """
        Return one DOT document per activation cycle.

        The document of cycle N is at index N - 1. Returns None when the mesh
        has no components or there are no cycles.

        Raises:
            ExportError: If a graph cannot be built or a cycle number is out of range
            Exception: The failure accumulated by `cycles` (its `error`), unchanged
        """
        if len(mesh.components) == 0:
            return None

        cycle_list = list(cycles)
        if not cycle_list:
            return None

        upstream_error = getattr(cycles, "error", None)
        if upstream_error is not None:
            raise upstream_error

        results: List[Optional[bytes]] = [None] * len(cycle_list)
        for cycle in cycle_list:
            if not 1 <= cycle.number <= len(cycle_list):
                raise ExportError(f"cycle number {cycle.number} is outside 1..{len(cycle_list)}")
            if results[cycle.number - 1] is not None:
                raise ExportError(f"cycle number {cycle.number} appears more than once")
            results[cycle.number - 1] = self.build_graph(mesh, cycle).write()

        return results

    def build_graph(self, mesh: Mesh, cycle: Optional[ActivationCycle] = None) -> DotGraph:
        """
        Build the full graph of the mesh.

        Args:
            mesh: Mesh to render
            cycle: Optional activation cycle overlaid on the components

        Raises:
            DuplicateComponentError: If two components share a name
            PortNodeNotFoundError: If a pipe endpoint was not rendered
            LegendRenderError: If the legend template fails
        """
        _check_unique_names(mesh.components)
        logger.debug(
            "Building graph for %d components (cycle=%s)",
            len(mesh.components),
            cycle.number if cycle is not None else None,
        )

        graph = DotGraph()
        apply_attributes(graph.attributes, self.config.main_graph)
        try:
            add_legend(graph, mesh, cycle, self.config)
        except LegendRenderError as err:
            raise LegendRenderError(f"failed to build main graph: {err}") from err
        self._add_components(graph, mesh.components, cycle)
        self._add_pipes(graph, mesh.components)
        return graph

    # ----- components -----
    def _add_components(
        self, graph: DotGraph, components: List[Component], cycle: Optional[ActivationCycle]
    ) -> None:
        for c in components:
            result = cycle.result_for(c.name) if cycle is not None else None
            subgraph = self._component_subgraph(graph, c, result)
            node_id = self._component_node(subgraph, c, result)

            for p in c.inputs.values():
                subgraph.edge(self._port_node(subgraph, c, p), node_id)

            for p in c.outputs.values():
                subgraph.edge(node_id, self._port_node(subgraph, c, p))

    def _component_subgraph(
        self, graph: DotGraph, c: Component, result: Optional[ActivationResult]
    ) -> Subgraph:
        style = self.config.component
        subgraph = graph.subgraph(component_subgraph_id(c.name))
        apply_attributes(subgraph.node_defaults, style.subgraph_node_base)
        apply_attributes(subgraph.attributes, style.subgraph)

        if result is not None:
            apply_attributes(subgraph.attributes, style.subgraph_by_code.get(result.code))

        subgraph.label(c.name)
        return subgraph

    def _component_node(
        self, subgraph: Subgraph, c: Component, result: Optional[ActivationResult]
    ) -> str:
        style = self.config.component
        node_id = component_node_id(c.name)
        node = subgraph.node(node_id)
        apply_attributes(node, style.node)
        node["label"] = c.description or style.node_default_label
        node["group"] = c.name

        if result is not None and result.error is not None:
            error_id = error_node_id(c.name)
            error_node = subgraph.node(error_id)
            apply_attributes(error_node, style.error_node)
            error_node["label"] = str(result.error)
            subgraph.edge(node_id, error_id)

        return node_id

    def _port_node(self, subgraph: Subgraph, c: Component, p: Port) -> str:
        node_id = port_id(c.name, p.direction, p.name)
        node = subgraph.node(node_id)
        node["label"] = p.name
        node["group"] = c.name
        apply_attributes(node, self.config.port.node)
        return node_id

    # ----- pipes -----
    def _add_pipes(self, graph: DotGraph, components: List[Component]) -> None:
        for c in components:
            for src in c.outputs.values():
                for dest in src.pipes:
                    # Pipes always run from an output port to an input port
                    src_id = port_id(c.name, PortDirection.OUT, src.name)
                    if graph.find_node(src_id) is None:
                        raise PortNodeNotFoundError(
                            f"failed to add pipes: source port {src.name!r} of {c.name!r} not found in graph"
                        )

                    dest_component = dest.component.name if dest.component is not None else ""
                    dest_id = port_id(dest_component, PortDirection.IN, dest.name)
                    if graph.find_node(dest_id) is None:
                        raise PortNodeNotFoundError(
                            f"failed to add pipes: destination port {dest.name!r} of {dest_component!r} not found in graph"
                        )
                    apply_attributes(graph.edge(src_id, dest_id), self.config.pipe.edge)


def _check_unique_names(components: List[Component]) -> None:
    seen = set()
    for c in components:
        if c.name in seen:
            raise DuplicateComponentError(f"component name {c.name!r} is used more than once")
        seen.add(c.name)
