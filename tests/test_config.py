import pytest

from layer_graph.config import DEFAULT_OUTPUT_DIR, BatchSettings, load_settings, read_env_defaults


def test_env_defaults(monkeypatch):
    monkeypatch.setenv("LAYER_GRAPH_MAX_DEPTH", "4")
    monkeypatch.setenv("LAYER_GRAPH_BRANCH_FACTOR", "2")
    monkeypatch.setenv("LAYER_GRAPH_COUNT", "3")
    monkeypatch.setenv("LAYER_GRAPH_SEED", "99")
    settings = load_settings()

    assert settings == BatchSettings(
        max_depth=4, branch_factor=2, graph_count=3, output_dir=DEFAULT_OUTPUT_DIR, seed=99, workers=1
    )


def test_overrides_win_over_env(monkeypatch):
    monkeypatch.setenv("LAYER_GRAPH_MAX_DEPTH", "4")
    settings = load_settings({"max_depth": 2, "branch_factor": 1, "graph_count": 1, "output_dir": None})
    assert settings.max_depth == 2
    assert settings.output_dir == DEFAULT_OUTPUT_DIR


def test_missing_values_are_prompted():
    questions = []
    answers = iter(["3", "2", "5"])

    def prompt(question):
        questions.append(question)
        return next(answers)

    settings = load_settings(prompt=prompt)
    assert questions == [
        "Enter max_depth: ",
        "Enter new_vertices_num: ",
        "Enter the number of graphs to be created: ",
    ]
    assert (settings.max_depth, settings.branch_factor, settings.graph_count) == (3, 2, 5)


def test_missing_values_without_prompt():
    with pytest.raises(ValueError, match="LAYER_GRAPH_MAX_DEPTH"):
        load_settings({"branch_factor": 1, "graph_count": 1})


def test_malformed_env_value(monkeypatch):
    monkeypatch.setenv("LAYER_GRAPH_WORKERS", "many")
    with pytest.raises(ValueError, match="LAYER_GRAPH_WORKERS"):
        read_env_defaults()


@pytest.mark.parametrize(
    "overrides",
    [
        {"max_depth": 0},
        {"branch_factor": -1},
        {"graph_count": -1},
        {"workers": 0},
        {"seed": -5},
    ],
)
def test_out_of_range_values(overrides):
    values = {"max_depth": 2, "branch_factor": 1, "graph_count": 1}
    values.update(overrides)
    with pytest.raises(ValueError):
        load_settings(values)
