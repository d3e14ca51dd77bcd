"""GraphService: type reference graph over a schema.

Nodes are named types plus the ``Query``/``Mutation`` roots; an edge
``A -> B`` means some field of A (or a union member slot) produces B.
Built from the walked type index on first use. Cyclic graphs such as
User -> Book -> User are expected, not errors.
"""

from __future__ import annotations

import networkx as nx

from gqltypes.domain.schema import ROOT_TYPE_NAMES
from gqltypes.services.base import BaseService
from gqltypes.services.contracts import (
    CyclesResultData,
    GraphResultData,
    ReachableResultData,
    dump_validated,
)
from gqltypes.services.result import ServiceError, ServiceResult
from gqltypes.services.telemetry import traced

type _Graph = nx.DiGraph


class GraphService(BaseService):
    """Graph queries over the type reference graph."""

    _graph: _Graph | None = None

    @property
    def graph(self) -> _Graph:
        """Return the graph, building it on first access."""
        if self._graph is None:
            self._graph = self._build()
        return self._graph

    def _build(self) -> _Graph:
        g: _Graph = nx.DiGraph()
        for op in self.schema.operations():
            g.add_node(ROOT_TYPE_NAMES[op], kind="Root")
        for name, named in self.index.types.items():
            g.add_node(name, kind=str(named.kind))
        for ref in self.index.references:
            if g.has_edge(ref.source, ref.target):
                g.edges[ref.source, ref.target]["via"].append(ref.via)
            else:
                g.add_edge(ref.source, ref.target, via=[ref.via])
        return g

    @traced
    def summary(self) -> ServiceResult:
        g = self.graph
        edges = [
            {"source": s, "target": t, "via": attrs["via"]} for s, t, attrs in g.edges(data=True)
        ]
        data = dump_validated(
            GraphResultData,
            {
                "nodes": list(g.nodes),
                "edges": edges,
                "node_count": g.number_of_nodes(),
                "edge_count": g.number_of_edges(),
            },
        )
        return ServiceResult(ok=True, op="graph", data=data)

    @traced
    def cycles(self) -> ServiceResult:
        """List elementary reference cycles (self-references included).

        Each cycle keeps its edge direction and starts at its smallest name.
        """
        found = [_rotated(cycle) for cycle in nx.simple_cycles(self.graph)]
        found.sort()
        data = dump_validated(CyclesResultData, {"cycles": found, "count": len(found)})
        return ServiceResult(ok=True, op="cycles", data=data)

    @traced
    def reachable(self, name: str) -> ServiceResult:
        """Every type reachable from *name* by following field types."""
        g = self.graph
        if name not in g:
            return ServiceResult(
                ok=False,
                op="reachable",
                error=ServiceError(
                    code="UNKNOWN_TYPE",
                    message=f"No type named {name!r} is reachable from the schema roots",
                    detail={"name": name},
                ),
            )
        found = sorted(nx.descendants(g, name))
        data = dump_validated(
            ReachableResultData, {"source": name, "reachable": found, "count": len(found)}
        )
        return ServiceResult(ok=True, op="reachable", data=data)


def _rotated(cycle: list[str]) -> list[str]:
    start = cycle.index(min(cycle))
    return cycle[start:] + cycle[:start]
