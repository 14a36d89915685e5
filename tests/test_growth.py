import numpy as np
import pytest
from pcstkit.core.growth import run_growth


def make_instance(prizes, edges, costs):
    return (
        np.array(prizes, dtype=np.float64),
        np.array(edges, dtype=np.int64).reshape(-1, 2),
        np.array(costs, dtype=np.float64),
    )


def test_path_merges_all_nodes():
    prizes, edges, costs = make_instance([10.0, 1.0, 10.0], [[0, 1], [1, 2]], [1.0, 1.0])
    growth = run_growth(prizes, edges, costs)
    assert growth.edges == [0, 1]
    assert growth.saturated == [0, 1, 2]
    assert growth.end_time == pytest.approx(20.0)


def test_rooted_star_root_never_saturates():
    prizes, edges, costs = make_instance(
        [100.0, 0.5, 0.5, 0.5, 0.5],
        [[0, 1], [0, 2], [0, 3], [0, 4]],
        [1.0] * 4,
    )
    growth = run_growth(prizes, edges, costs, root=0)
    assert growth.edges == [0, 1, 2, 3]
    assert growth.saturated == []


def test_candidate_forest_is_acyclic():
    prizes, edges, costs = make_instance([10.0] * 3, [[0, 1], [0, 2], [1, 2]], [1.0] * 3)
    growth = run_growth(prizes, edges, costs)
    assert growth.edges == [0, 1]


def test_zero_prize_relay_is_paid_by_neighbors():
    prizes, edges, costs = make_instance([5.0, 0.0, 5.0], [[0, 1], [1, 2]], [1.0, 1.0])
    growth = run_growth(prizes, edges, costs)
    assert sorted(growth.edges) == [0, 1]
    # relay saturates immediately, the merged cluster later
    assert growth.saturated == [0, 1, 2]
    assert growth.end_time == pytest.approx(9.0)


def test_expensive_edge_never_tightens():
    prizes, edges, costs = make_instance([0.1, 0.1], [[0, 1]], [10.0])
    growth = run_growth(prizes, edges, costs)
    assert growth.edges == []
    assert growth.saturated == [0, 1]


def test_isolated_zero_prize_node_stays_inactive():
    prizes, edges, costs = make_instance([0.0], [], [])
    growth = run_growth(prizes, edges, costs)
    assert growth.edges == []
    assert growth.saturated == []
    assert growth.end_time == 0.0


def test_isolated_prized_node_saturates():
    prizes, edges, costs = make_instance([5.0], [], [])
    growth = run_growth(prizes, edges, costs)
    assert growth.edges == []
    assert growth.saturated == [0]
    assert growth.end_time == pytest.approx(5.0)


def test_zero_cost_edges_tighten_before_saturation():
    prizes, edges, costs = make_instance([0.0, 0.0], [[0, 1]], [0.0])
    growth = run_growth(prizes, edges, costs)
    assert growth.edges == [0]
    assert growth.saturated == [0, 1]
