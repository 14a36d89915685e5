import networkx as nx
import pytest
from pcstkit import ExtractorConfig
from pcstkit.retrieval import ExtractedSubgraph, SubgraphExtractor


def make_chain_graph(n=6, cost=1.0):
    G = nx.Graph()
    for i in range(n):
        G.add_node(f"n{i}", entity_name=f"entity {i}")
    for i in range(n - 1):
        G.add_edge(f"n{i}", f"n{i + 1}", relation="next", cost=cost)
    return G


def make_extractor(**kwargs):
    kwargs.setdefault("verbose", False)
    return SubgraphExtractor(ExtractorConfig(**kwargs))


def test_extract_returns_subgraph():
    G = make_chain_graph()
    extracted = make_extractor().extract(G, {"n0": 5.0, "n2": 5.0})
    assert isinstance(extracted, ExtractedSubgraph)
    assert set(extracted.subgraph.nodes()) == {"n0", "n1", "n2"}
    assert extracted.num_nodes == 3
    assert extracted.num_edges == 2
    assert extracted.trimmed == 0
    assert extracted.root is None
    assert extracted.extraction_time_ms >= 0


def test_extract_copies_attributes():
    G = make_chain_graph()
    G.graph["id"] = "kg"
    sub = make_extractor().extract(G, {"n0": 5.0, "n1": 5.0}).subgraph
    assert sub.graph["id"] == "kg"
    assert sub.nodes["n1"]["entity_name"] == "entity 1"
    assert sub["n0"]["n1"] == {"relation": "next", "cost": 1.0}


def test_extract_does_not_modify_input():
    G = make_chain_graph()
    extracted = make_extractor().extract(G, {"n0": 5.0, "n2": 5.0})
    extracted.subgraph.remove_node("n1")
    assert G.has_node("n1")
    assert G.number_of_edges() == 5


def test_budget_trims_rooted_chain():
    G = make_chain_graph()
    prizes = {f"n{i}": 10.0 for i in range(1, 6)}
    extractor = make_extractor(budget=3)
    extracted = extractor.extract(G, prizes, root="n0")
    assert set(extracted.subgraph.nodes()) == {"n0", "n1", "n2"}
    assert extracted.trimmed == 3
    assert extracted.root == "n0"
    assert extracted.result.num_nodes == 6
    assert extractor.validate_subgraph(extracted)


def test_budget_trims_lowest_prize_leaves():
    G = make_chain_graph(cost=0.1)
    prizes = {f"n{i}": float(i + 1) for i in range(6)}
    extracted = make_extractor(budget=4).extract(G, prizes)
    assert set(extracted.subgraph.nodes()) == {"n2", "n3", "n4", "n5"}
    assert nx.is_connected(extracted.subgraph)


def test_rooted_extraction_keeps_root():
    G = make_chain_graph()
    extracted = make_extractor().extract(G, {"n5": 0.5}, root="n0")
    assert set(extracted.subgraph.nodes()) == {"n0"}
    assert extracted.root == "n0"


def test_multigraph_uses_cheapest_edge():
    G = nx.MultiGraph()
    G.add_edge("a", "b", relation="slow", cost=5.0)
    G.add_edge("a", "b", relation="fast", cost=1.0)
    sub = make_extractor().extract(G, {"a": 3.0, "b": 3.0}).subgraph
    assert not sub.is_multigraph()
    assert sub["a"]["b"]["relation"] == "fast"


def test_directed_graph_keeps_direction():
    G = nx.DiGraph()
    G.add_edge("a", "b", cost=1.0)
    G.add_edge("c", "b", cost=1.0)
    sub = make_extractor().extract(G, {"a": 3.0, "c": 3.0}).subgraph
    assert sub.is_directed()
    assert sub.has_edge("a", "b")
    assert sub.has_edge("c", "b")
    assert not sub.has_edge("b", "a")


def test_cost_attribute_is_configurable():
    G = nx.Graph()
    G.add_edge("a", "b", weight=100.0)
    G.add_edge("b", "c", weight=0.5)
    extracted = make_extractor(cost_attr="weight").extract(G, {"a": 2.0, "b": 2.0, "c": 2.0})
    assert set(extracted.subgraph.nodes()) == {"b", "c"}


def test_validate_subgraph_rejects_over_budget():
    extractor = make_extractor(budget=2)
    G = make_chain_graph(3)
    oversized = ExtractedSubgraph(subgraph=G, result=None, root=None, num_nodes=3,
                                  num_edges=2, extraction_time_ms=0.0)
    assert not extractor.validate_subgraph(oversized)


def test_validate_subgraph_rejects_disconnected_rooted():
    extractor = make_extractor(budget=10)
    G = nx.Graph()
    G.add_nodes_from(["r", "x"])
    extracted = ExtractedSubgraph(subgraph=G, result=None, root="r", num_nodes=2,
                                  num_edges=0, extraction_time_ms=0.0)
    assert not extractor.validate_subgraph(extracted)


def test_verbose_output(capsys):
    extractor = SubgraphExtractor(ExtractorConfig(budget=3))
    prizes = {f"n{i}": 10.0 for i in range(6)}
    extractor.extract(make_chain_graph(), prizes)
    out = capsys.readouterr().out
    assert "PCST selected: 6 nodes, 5 edges" in out
    assert "Trimmed: 6 -> 3 nodes" in out


def test_empty_graph():
    extracted = make_extractor().extract(nx.Graph(), {})
    assert extracted.num_nodes == 0
    assert make_extractor().validate_subgraph(extracted)


def test_tolerance_reaches_solver():
    # the a-b edge nets only 0.05
    G = nx.Graph()
    G.add_edge("a", "b", cost=0.95)
    prizes = {"a": 1.0, "b": 1.0}
    assert make_extractor().extract(G, prizes).num_nodes == 2

    coarse = make_extractor(tolerance=0.1)
    assert coarse.solver.config.tolerance == 0.1
    assert coarse.extract(G, prizes).num_nodes == 0
