"""
Unit tests for legend rendering and attachment.
"""

import pytest

from mesh_core.enums import ActivationCode
from mesh_core.mesh import ActivationCycle, ActivationResult, Component, Mesh
from mesh_viz.config import config_from_dict, default_config
from mesh_viz.dot_graph import HTML, DotGraph
from mesh_viz.errors import LegendRenderError
from mesh_viz.ids import LEGEND_NODE_ID, LEGEND_SUBGRAPH_ID
from mesh_viz.legend import add_legend, mesh_description, render_legend
from mesh_viz.stats import cycle_stats


class TestRenderLegend:
    def test_description_only(self):
        fragment = render_legend("my mesh")
        assert "my mesh" in fragment
        assert "Activation cycle" not in fragment
        assert "Stats" not in fragment

    def test_description_is_escaped(self):
        fragment = render_legend("a <b> & c")
        assert "a &lt;b&gt; &amp; c" in fragment

    def test_cycle_and_full_stats_table(self):
        stats = cycle_stats(ActivationCycle(4, []))
        fragment = render_legend("m", cycle_number=4, stats=stats)
        assert "Activation cycle: <B>4</B>" in fragment
        for entry in stats:
            assert f">{entry.name}</TD>" in fragment
        # Zero-valued entries are rendered too
        assert fragment.count('<TD ALIGN="RIGHT">0</TD>') == 8

    def test_custom_template(self):
        fragment = render_legend("m", 2, template="{description}|{cycle_rows}|{stats_rows}")
        assert fragment.startswith("m|<TR>")
        assert fragment.endswith("|")

    def test_malformed_template_fails(self):
        with pytest.raises(LegendRenderError):
            render_legend("m", template="{unknown_field}")
        with pytest.raises(LegendRenderError):
            render_legend("m", template="{description")


class TestMeshDescription:
    def test_explicit_description(self):
        assert mesh_description(Mesh("counter")) == "counter"

    def test_generated_description(self):
        mesh = Mesh().add_components(Component("a"), Component("b"))
        assert mesh_description(mesh) == "A mesh with 2 components"


class TestAddLegend:
    def test_legend_cluster_has_no_label(self):
        g = DotGraph()
        cfg = config_from_dict({"legend": {"subgraph": {"label": "should vanish", "color": "blue"}}})
        add_legend(g, Mesh("m").add_components(Component("a")), None, cfg)
        sg = g.subgraph(LEGEND_SUBGRAPH_ID)
        assert "label" not in sg.attributes
        assert sg.attributes["color"] == "blue"

    def test_legend_node_label_is_html(self):
        g = DotGraph()
        cycle = ActivationCycle(1, [ActivationResult("a", True, ActivationCode.OK)])
        add_legend(g, Mesh("m").add_components(Component("a")), cycle, default_config())
        node = g.find_node(LEGEND_NODE_ID)
        assert isinstance(node["label"], HTML)
        assert "Activation cycle: <B>1</B>" in node["label"]
        assert node["shape"] == "plaintext"
        assert g.node_subgraph(LEGEND_NODE_ID) == LEGEND_SUBGRAPH_ID
