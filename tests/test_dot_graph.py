"""
Unit tests for the DotGraph capability layer and attribute helpers.
"""

import pytest

from mesh_viz.attributes import apply_attributes
from mesh_viz.dot_graph import HTML, DotGraph


class TestApplyAttributes:
    def test_later_values_win(self):
        target = {"color": "black", "shape": "box"}
        apply_attributes(target, {"color": "red"})
        assert target == {"color": "red", "shape": "box"}

    def test_values_are_strings(self):
        target = apply_attributes({}, {"penwidth": 2, "fixedsize": False})
        assert target == {"penwidth": "2", "fixedsize": "False"}

    def test_none_is_noop(self):
        assert apply_attributes({"a": "1"}, None) == {"a": "1"}


class TestDotGraphBuilding:
    def test_node_lookup(self):
        g = DotGraph()
        g.node("x")["label"] = "X"
        assert g.find_node("x") == {"label": "X"}
        assert g.find_node("missing") is None

    def test_node_is_created_once(self):
        g = DotGraph()
        first = g.node("x")
        first["label"] = "X"
        assert g.node("x") is first
        assert list(g.nodes()) == ["x"]

    def test_edge_requires_existing_nodes(self):
        g = DotGraph()
        g.node("a")
        with pytest.raises(KeyError):
            g.edge("a", "b")

    def test_parallel_edges_are_kept(self):
        g = DotGraph()
        g.node("a")
        g.node("b")
        g.edge("a", "b")
        g.edge("a", "b")
        assert len(g.edges()) == 2

    def test_subgraph_defaults_label_and_node_defaults(self):
        g = DotGraph()
        sg = g.subgraph("cluster_x")
        assert sg.attributes == {"label": "cluster_x"}
        sg.node_defaults["fontsize"] = "10"
        attrs = sg.node("n1")
        assert attrs == {"fontsize": "10"}
        # Defaults are copied, not shared
        attrs["fontsize"] = "20"
        assert sg.node_defaults["fontsize"] == "10"
        assert sg.nodes() == ["n1"]
        assert g.node_subgraph("n1") == "cluster_x"

    def test_subgraph_is_reused_and_label_deleted(self):
        g = DotGraph()
        assert g.subgraph("cluster_x") is g.subgraph("cluster_x")
        g.subgraph("cluster_x").delete("label")
        assert "label" not in g.subgraph("cluster_x").attributes
        assert len(g.subgraphs) == 1


class TestDotGraphSerialization:
    def build_graph(self):
        g = DotGraph("demo")
        g.attributes["rankdir"] = "LR"
        sg = g.subgraph("cluster_a")
        sg.label("A")
        sg.node("a/in")["label"] = "in"
        sg.node("a")["label"] = "<nil>"
        sg.edge("a/in", "a")
        g.node("legend")["label"] = HTML("<B>hello</B>")
        g.edge("a", "legend")["color"] = "#ff0000"
        return g

    def test_source_contains_elements(self):
        src = self.build_graph().source
        assert src.startswith("digraph demo {")
        assert "subgraph cluster_a {" in src
        assert '"a/in" -> a' in src
        assert "rankdir=LR" in src
        assert 'color="#ff0000"' in src

    def test_plain_label_is_not_html(self):
        src = self.build_graph().source
        assert 'label="<nil>"' in src

    def test_html_label_is_emitted_unquoted(self):
        src = self.build_graph().source
        assert "label=<<B>hello</B>>" in src

    def test_write_returns_utf8_bytes(self):
        g = self.build_graph()
        assert g.write() == g.source.encode("utf-8")

    def test_to_networkx_flattens_attributes(self):
        G = self.build_graph().to_networkx()
        assert G.nodes["a/in"]["label"] == "in"
        assert G.nodes["a/in"]["subgraph"] == "cluster_a"
        assert G.nodes["legend"]["subgraph"] is None
        assert G.number_of_edges() == 2
        assert G.graph["rankdir"] == "LR"


class TestEdgeOrder:
    def test_edges_keep_insertion_order_across_sources(self):
        g = DotGraph()
        sg = g.subgraph("cluster_a")
        for node_id in ["a", "a/in", "a/out"]:
            sg.node(node_id)
        # Edge from "a" is added last but "a" was created first
        sg.edge("a", "a/out")
        sg.edge("a/in", "a")
        assert [(u, v) for u, v, _ in sg.edges()] == [("a", "a/out"), ("a/in", "a")]

        g2 = DotGraph()
        sg2 = g2.subgraph("cluster_a")
        for node_id in ["a", "a/in", "a/out"]:
            sg2.node(node_id)
        sg2.edge("a/in", "a")
        sg2.edge("a", "a/out")
        assert [(u, v) for u, v, _ in sg2.edges()] == [("a/in", "a"), ("a", "a/out")]
        assert [(u, v) for u, v, _ in g2.edges()] == [("a/in", "a"), ("a", "a/out")]
        src = g2.source
        assert src.index('"a/in" -> a') < src.index('a -> "a/out"')


class TestEscaping:
    def test_trailing_backslash_stays_inside_the_label(self):
        g = DotGraph()
        g.node("err")["label"] = "path C:\\tmp\\"
        assert 'label="path C:\\\\tmp\\\\"' in g.source

    def test_escape_sequences_are_not_reinterpreted(self):
        g = DotGraph()
        g.node("err")["label"] = "line1\\nline2"
        assert 'label="line1\\\\nline2"' in g.source

    def test_attribute_named_like_a_parameter(self):
        g = DotGraph()
        g.node("a")["name"] = "alpha"
        g.node("b")
        g.edge("a", "b")["tail_name"] = "x"
        src = g.source
        assert "name=alpha" in src
        assert "tail_name=x" in src
