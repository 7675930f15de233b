"""
YAML scene compiler for meshes and their activation history.

This module compiles a YAML scene description into a `Mesh` of components
connected by pipes, together with an optional `CycleGroup` describing what
happened in each activation cycle.

YAML schema (minimal):

description: word counter
components:
  - name: reader
    description: reads lines
    inputs: [path]
    outputs: [lines]
  - name: counter
    inputs: [lines]
    outputs: [count]
pipes:
  - from: reader.lines
    to: counter.lines        # or a list of "component.port" references
cycles:
  - results:
      - component: reader
        activated: true
        code: OK
      - component: counter
        activated: true
        code: ReturnedError
        error: empty input

Notes:
- Port references are written as "component.port"; the port name is the part
  after the first dot, so component names must not contain dots.
- Cycles are numbered from 1 in document order.
- Error values are wrapped in `RuntimeError` carrying the given message.
"""

from __future__ import annotations

from typing import Any, Dict, List, Tuple

import yaml

from .enums import ActivationCode
from .mesh import ActivationCycle, ActivationResult, Component, CycleGroup, Mesh, Port


def _split_ref(ref: str) -> Tuple[str, str]:
    if not isinstance(ref, str) or "." not in ref:
        raise ValueError(f"port reference must look like 'component.port', got {ref!r}")
    component_name, port_name = ref.split(".", 1)
    return component_name, port_name


def _resolve(mesh: Mesh, ref: str, output: bool) -> Port:
    component_name, port_name = _split_ref(ref)
    try:
        c = mesh.component(component_name)
        return c.output(port_name) if output else c.input(port_name)
    except KeyError as err:
        raise ValueError(f"unresolved port reference {ref!r}: {err.args[0]}") from None


def compile_mesh(spec: Dict[str, Any]) -> Mesh:
    """
    Compile the topology part of a YAML-parsed dictionary into a `Mesh`.

    Args:
        spec: Parsed YAML dictionary

    Returns:
        Mesh: Components with their ports and pipes
    """
    mesh = Mesh(description=str(spec.get("description") or ""))

    for entry in spec.get("components", []) or []:
        name = entry.get("name")
        if not name:
            raise ValueError(f"component entry without a name: {entry!r}")
        c = Component(str(name), description=str(entry.get("description") or ""))
        c.add_inputs(*[str(p) for p in entry.get("inputs", []) or []])
        c.add_outputs(*[str(p) for p in entry.get("outputs", []) or []])
        mesh.add_components(c)

    for pipe in spec.get("pipes", []) or []:
        src = _resolve(mesh, pipe.get("from"), output=True)
        targets = pipe.get("to")
        if isinstance(targets, str):
            targets = [targets]
        for target in targets or []:
            src.pipe_to(_resolve(mesh, target, output=False))

    return mesh


def compile_cycles(spec: Dict[str, Any], mesh: Mesh) -> CycleGroup:
    """Compile the `cycles` section, checking every result against the mesh."""
    known = {c.name for c in mesh.components}
    cycles: List[ActivationCycle] = []
    for number, entry in enumerate(spec.get("cycles", []) or [], start=1):
        results = []
        for r in (entry or {}).get("results", []) or []:
            name = str(r.get("component"))
            if name not in known:
                raise ValueError(f"cycle {number}: unknown component {name!r}")
            error = r.get("error")
            results.append(
                ActivationResult(
                    component_name=name,
                    activated=bool(r.get("activated", False)),
                    code=ActivationCode.from_name(str(r.get("code", "OK"))),
                    error=RuntimeError(str(error)) if error is not None else None,
                )
            )
        cycles.append(ActivationCycle(number, results))
    return CycleGroup(cycles)


def compile_from_dict(spec: Dict[str, Any]) -> Tuple[Mesh, CycleGroup]:
    """Compile a YAML-parsed dictionary into a mesh and its cycles."""
    mesh = compile_mesh(spec)
    return mesh, compile_cycles(spec, mesh)


def compile_from_yaml(yaml_text: str) -> Tuple[Mesh, CycleGroup]:
    """Compile from YAML text."""
    data = yaml.safe_load(yaml_text) or {}
    return compile_from_dict(data)


def compile_from_file(path: str) -> Tuple[Mesh, CycleGroup]:
    """Compile from a YAML file path."""
    with open(path, "r", encoding="utf-8") as f:
        txt = f.read()
    return compile_from_yaml(txt)
