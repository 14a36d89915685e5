import math
import pytest
from pcstkit import ExtractorConfig, IterativeConfig, PruningMode, SolverConfig


def test_default_solver_config():
    config = SolverConfig.default()
    assert config.pruning == PruningMode.STRONG
    assert config.tolerance == 1e-9
    assert config.cost_attr == "cost"
    assert config.default_edge_cost == 1.0
    assert config.verbose is False


@pytest.mark.parametrize("name, expected", [
    ("none", PruningMode.NONE),
    ("Simple", PruningMode.SIMPLE),
    ("GW", PruningMode.GW),
    (" strong ", PruningMode.STRONG),
    (PruningMode.GW, PruningMode.GW),
])
def test_pruning_mode_parse(name, expected):
    assert PruningMode.parse(name) == expected
    assert SolverConfig(pruning=name).pruning == expected


def test_unknown_pruning_mode():
    with pytest.raises(ValueError, match="pruning must be one of"):
        SolverConfig(pruning="aggressive")


@pytest.mark.parametrize("tolerance", [-1e-9, math.inf, math.nan])
def test_invalid_tolerance(tolerance):
    with pytest.raises(ValueError):
        SolverConfig(tolerance=tolerance)


def test_zero_tolerance_allowed():
    assert SolverConfig(tolerance=0.0).tolerance == 0.0


def test_invalid_default_edge_cost():
    with pytest.raises(ValueError):
        SolverConfig(default_edge_cost=-1.0)
    with pytest.raises(ValueError):
        ExtractorConfig(default_edge_cost=math.inf)


def test_empty_cost_attr():
    with pytest.raises(ValueError):
        SolverConfig(cost_attr="")


@pytest.mark.parametrize("kwargs", [{"beta": 0.0}, {"beta": -2.0}, {"max_depth": -1}])
def test_invalid_iterative_config(kwargs):
    with pytest.raises(ValueError):
        IterativeConfig(**kwargs)


def test_extractor_config():
    config = ExtractorConfig(budget=10, pruning="gw", tolerance=1e-6, cost_attr="weight")
    solver_config = config.solver_config()
    assert solver_config.pruning == PruningMode.GW
    assert solver_config.tolerance == 1e-6
    assert solver_config.cost_attr == "weight"
    assert solver_config.verbose is False
    with pytest.raises(ValueError):
        ExtractorConfig(budget=0)
    with pytest.raises(ValueError):
        ExtractorConfig(tolerance=-1.0)


def test_print_summary(capsys):
    SolverConfig(pruning="gw").print_summary()
    out = capsys.readouterr().out
    assert "Pruning: gw" in out
    assert "Cost attribute: cost" in out
