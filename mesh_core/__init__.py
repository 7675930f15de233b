"""
Mesh Core Package.

This package contains the dataflow mesh model rendered by `mesh_viz`:

- Topology (Mesh, Component, Port) with pipes between output and input ports
- Activation history (ActivationResult, ActivationCycle, CycleGroup)
- Closed vocabularies (PortDirection, ActivationCode)
- A YAML scene compiler
"""

__version__ = "0.1.0"

from .enums import ActivationCode, PortDirection
from .mesh import ActivationCycle, ActivationResult, Component, CycleGroup, Mesh, Port
from .compiler import compile_from_dict, compile_from_file, compile_from_yaml
