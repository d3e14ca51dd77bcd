"""Tests for GraphService."""

from __future__ import annotations

from gqltypes import Field, Object, Schema, String
from gqltypes.services.graph import GraphService


class TestGraphService:
    def test_summary(self, schema: Schema) -> None:
        result = GraphService(schema).summary()
        assert result.ok
        assert result.op == "graph"
        nodes = set(result.data["nodes"])
        assert nodes == {"Query", "Mutation", "User", "Book", "SearchResult", "String", "UserType"}
        assert result.data["node_count"] == 7
        edges = {(e["source"], e["target"]): e["via"] for e in result.data["edges"]}
        assert edges[("Query", "User")] == ["User", "userByAge"]
        assert edges[("User", "String")] == ["firstName", "lastName", "fullName"]
        assert edges[("SearchResult", "Book")] == ["member"]
        assert result.data["edge_count"] == len(edges)

    def test_node_kinds(self, schema: Schema) -> None:
        g = GraphService(schema).graph
        assert g.nodes["Query"]["kind"] == "Root"
        assert g.nodes["User"]["kind"] == "Object"
        assert g.nodes["SearchResult"]["kind"] == "Union"
        assert g.nodes["UserType"]["kind"] == "Enum"

    def test_cycles(self, schema: Schema) -> None:
        result = GraphService(schema).cycles()
        assert result.ok
        assert result.data["cycles"] == [["Book", "User"]]
        assert result.data["count"] == 1

    def test_self_reference_is_cycle(self) -> None:
        node = Object("Node", lambda: [Field("next", node)])
        result = GraphService(Schema(queries=[Field("head", node)])).cycles()
        assert result.data["cycles"] == [["Node"]]

    def test_cycle_keeps_direction(self) -> None:
        alpha = Object("Alpha", lambda: [Field("next", gamma)])
        beta = Object("Beta", lambda: [Field("next", alpha)])
        gamma = Object("Gamma", lambda: [Field("next", beta)])
        result = GraphService(Schema(queries=[Field("start", beta)])).cycles()
        assert result.data["cycles"] == [["Alpha", "Gamma", "Beta"]]

    def test_acyclic(self) -> None:
        leaf = Object("Leaf", [Field("name", String)])
        result = GraphService(Schema(queries=[Field("leaf", leaf)])).cycles()
        assert result.data == {"cycles": [], "count": 0}

    def test_reachable(self, schema: Schema) -> None:
        result = GraphService(schema).reachable("Book")
        assert result.ok
        assert result.data["reachable"] == ["String", "User", "UserType"]
        assert result.data["count"] == 3

    def test_reachable_unknown(self, schema: Schema) -> None:
        result = GraphService(schema).reachable("Nope")
        assert not result.ok
        assert result.error is not None
        assert result.error.code == "UNKNOWN_TYPE"

    def test_graph_built_once(self, schema: Schema) -> None:
        svc = GraphService(schema)
        assert svc.graph is svc.graph
