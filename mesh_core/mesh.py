"""
Mesh data structures.

This module defines the topology and activation history consumed by the
visualization layer:
- Port: Named, directional attachment point; output ports hold pipes
- Component: Named processing unit with ordered input and output ports
- Mesh: Ordered collection of uniquely named components
- ActivationResult / ActivationCycle / CycleGroup: Per-cycle execution outcomes
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, Iterator, List, Optional

from .enums import ActivationCode, PortDirection


@dataclass(eq=False)
class Port:
    """
    A named port on a component.

    Attributes:
        name: Port name, unique among the ports of one direction on its component
        direction: IN or OUT
        component: Owning component (set when the port is added to one)
        pipes: Destination input ports, only populated on OUT ports
    """

    name: str
    direction: PortDirection
    component: Optional["Component"] = field(default=None, repr=False)
    pipes: List["Port"] = field(default_factory=list, repr=False)

    def pipe_to(self, *destinations: "Port") -> "Port":
        """
        Connect this output port to one or more input ports.

        Raises:
            ValueError: If this port is not an output or a destination is not an input
        """
        if self.direction is not PortDirection.OUT:
            raise ValueError(f"pipes must start at an output port, got input port {self.name!r}")
        for dest in destinations:
            if dest.direction is not PortDirection.IN:
                raise ValueError(f"pipes must end at an input port, got output port {dest.name!r}")
            self.pipes.append(dest)
        return self


@dataclass(eq=False)
class Component:
    """
    A named processing unit of the mesh.

    Ports are kept in insertion order, which is also the order they are rendered in.
    """

    name: str
    description: str = ""
    inputs: Dict[str, Port] = field(default_factory=dict, repr=False)
    outputs: Dict[str, Port] = field(default_factory=dict, repr=False)

    def add_inputs(self, *names: str) -> "Component":
        for name in names:
            self.inputs[name] = Port(name, PortDirection.IN, component=self)
        return self

    def add_outputs(self, *names: str) -> "Component":
        for name in names:
            self.outputs[name] = Port(name, PortDirection.OUT, component=self)
        return self

    def input(self, name: str) -> Port:
        try:
            return self.inputs[name]
        except KeyError:
            raise KeyError(f"component {self.name!r} has no input port {name!r}") from None

    def output(self, name: str) -> Port:
        try:
            return self.outputs[name]
        except KeyError:
            raise KeyError(f"component {self.name!r} has no output port {name!r}") from None


class Mesh:
    """
    Container for the components of one dataflow mesh.

    Attributes:
        description: Optional human-readable description
        components: Components in insertion order
    """

    def __init__(self, description: str = ""):
        self.description = description
        self.components: List[Component] = []

    def add_components(self, *components: Component) -> "Mesh":
        """
        Append components to the mesh.

        Raises:
            ValueError: If a component with the same name is already present
        """
        for c in components:
            if any(existing.name == c.name for existing in self.components):
                raise ValueError(f"component {c.name!r} already exists in mesh")
            self.components.append(c)
        return self

    def component(self, name: str) -> Component:
        for c in self.components:
            if c.name == name:
                return c
        raise KeyError(f"mesh has no component {name!r}")

    def __len__(self) -> int:
        return len(self.components)


@dataclass
class ActivationResult:
    """Outcome of one component's activation in one cycle."""

    component_name: str
    activated: bool
    code: ActivationCode
    error: Optional[BaseException] = None


@dataclass
class ActivationCycle:
    """One discrete execution step of a mesh, numbered from 1."""

    number: int
    results: List[ActivationResult] = field(default_factory=list)

    def result_for(self, component_name: str) -> Optional[ActivationResult]:
        """Return the activation result of the named component, or None."""
        for r in self.results:
            if r.component_name == component_name:
                return r
        return None


@dataclass
class CycleGroup:
    """
    Ordered activation cycles of one mesh run.

    `error` carries a failure accumulated by whatever produced the cycles;
    consumers must treat a group with an error as unusable.
    """

    cycles: List[ActivationCycle] = field(default_factory=list)
    error: Optional[BaseException] = None

    def __iter__(self) -> Iterator[ActivationCycle]:
        return iter(self.cycles)

    def __len__(self) -> int:
        return len(self.cycles)
