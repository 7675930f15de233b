"""
Exceptions raised while exporting a mesh.

Failures coming from the mesh model itself (for example an error carried by a
`CycleGroup`) are not wrapped; they propagate unchanged.
"""


class ExportError(Exception):
    """Base class for failures of a single export call."""


class PortNodeNotFoundError(ExportError, LookupError):
    """A pipe endpoint does not resolve to a port node rendered earlier."""


class LegendRenderError(ExportError):
    """The legend template could not be rendered."""


class DuplicateComponentError(ExportError, ValueError):
    """Two components of one mesh share a name."""
