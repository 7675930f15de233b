"""
Configuration objects for the DOT exporter.

Every style bucket is a mapping of Graphviz attribute name to value, applied to
the matching graph element. Defaults can be overridden bucket by bucket from a
plain dictionary or a YAML file, enabling restyling without editing exporter
logic.
"""

from __future__ import annotations

import copy
from dataclasses import dataclass, field, fields
from typing import Any, Dict, Mapping

import yaml

from mesh_core.enums import ActivationCode

AttributeMap = Dict[str, str]

DEFAULT_LEGEND_TEMPLATE = (
    '<TABLE BORDER="0" CELLBORDER="1" CELLSPACING="0" CELLPADDING="4">'
    '<TR><TD COLSPAN="2"><B>{description}</B></TD></TR>'
    "{cycle_rows}"
    "{stats_rows}"
    "</TABLE>"
)


@dataclass
class LegendStyle:
    subgraph: AttributeMap = field(
        default_factory=lambda: {"style": "dashed", "color": "#9CA3AF"}
    )
    node: AttributeMap = field(
        default_factory=lambda: {"shape": "plaintext", "fontname": "Helvetica", "fontsize": "10"}
    )
    # Placeholders: {description}, {cycle_rows}, {stats_rows}
    template: str = DEFAULT_LEGEND_TEMPLATE


@dataclass
class ComponentStyle:
    subgraph: AttributeMap = field(
        default_factory=lambda: {
            "style": "rounded",
            "color": "#111827",
            "margin": "20",
            "penwidth": "2",
            "fontname": "Helvetica",
        }
    )
    # Applied to every node created inside a component subgraph
    subgraph_node_base: AttributeMap = field(
        default_factory=lambda: {"fontname": "Helvetica", "fontsize": "10"}
    )
    node: AttributeMap = field(
        default_factory=lambda: {"shape": "ellipse", "style": "filled", "fillcolor": "#E5E7EB"}
    )
    node_default_label: str = "f(x)"
    error_node: AttributeMap = field(
        default_factory=lambda: {"shape": "note", "style": "filled", "fillcolor": "#FCA5A5"}
    )
    subgraph_by_code: Dict[ActivationCode, AttributeMap] = field(
        default_factory=lambda: {
            ActivationCode.OK: {"color": "#22C55E"},
            ActivationCode.NO_INPUT: {"color": "#9CA3AF"},
            ActivationCode.NO_FUNCTION: {"color": "#6B7280", "style": "rounded,dashed"},
            ActivationCode.RETURNED_ERROR: {"color": "#EF4444"},
            ActivationCode.PANICKED: {"color": "#B91C1C", "penwidth": "4"},
            ActivationCode.WAITING_FOR_INPUTS_CLEAR: {"color": "#F59E0B"},
            ActivationCode.WAITING_FOR_INPUTS_KEEP: {"color": "#60A5FA"},
        }
    )


@dataclass
class PortStyle:
    node: AttributeMap = field(
        default_factory=lambda: {"shape": "circle", "width": "0.3", "fixedsize": "false"}
    )


@dataclass
class PipeStyle:
    edge: AttributeMap = field(
        default_factory=lambda: {"color": "#A78BFA", "penwidth": "2", "minlen": "2"}
    )


@dataclass
class ExporterConfig:
    """
    Configuration for `DotExporter` styling.

    Buckets are merged onto the matching elements in the order the exporter
    creates them; the exporter only reads them.
    """

    main_graph: AttributeMap = field(
        default_factory=lambda: {"layout": "dot", "rankdir": "LR", "splines": "ortho", "compound": "true"}
    )
    legend: LegendStyle = field(default_factory=LegendStyle)
    component: ComponentStyle = field(default_factory=ComponentStyle)
    port: PortStyle = field(default_factory=PortStyle)
    pipe: PipeStyle = field(default_factory=PipeStyle)


_DEFAULT_CONFIG = ExporterConfig()


def default_config() -> ExporterConfig:
    """Return a private copy of the default configuration."""
    return copy.deepcopy(_DEFAULT_CONFIG)


def _merge_section(section: Any, overrides: Mapping[str, Any], path: str) -> None:
    known = {f.name for f in fields(section)}
    for key, value in overrides.items():
        if key not in known:
            raise ValueError(f"unknown config bucket: {path}{key}")
        current = getattr(section, key)
        if key == "subgraph_by_code":
            for code_name, attrs in (value or {}).items():
                code = ActivationCode.from_name(str(code_name))
                current.setdefault(code, {}).update({str(k): str(v) for k, v in (attrs or {}).items()})
        elif isinstance(current, dict):
            current.update({str(k): str(v) for k, v in (value or {}).items()})
        elif isinstance(current, str):
            setattr(section, key, str(value))
        else:
            if not isinstance(value, Mapping):
                raise ValueError(f"config bucket {path}{key} expects a mapping")
            _merge_section(current, value, f"{path}{key}.")


def config_from_dict(overrides: Mapping[str, Any] | None) -> ExporterConfig:
    """
    Build a configuration by merging overrides onto the defaults.

    Attribute buckets are merged key by key, so an override only needs the
    attributes it changes. `component.subgraph_by_code` is keyed by activation
    code display names.

    Raises:
        ValueError: On unknown buckets or activation codes
    """
    cfg = default_config()
    _merge_section(cfg, overrides or {}, "")
    return cfg


def load_config(path: str) -> ExporterConfig:
    """Load style overrides from a YAML file."""
    with open(path, "r", encoding="utf-8") as f:
        data = yaml.safe_load(f) or {}
    if not isinstance(data, Mapping):
        raise ValueError(f"{path}: expected a mapping of config buckets")
    return config_from_dict(data)
