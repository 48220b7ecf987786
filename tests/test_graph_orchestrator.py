from dataclasses import FrozenInstanceError

import pytest

from layer_graph import AlreadyConnectedError, EdgeCategory, GraphOrchestrator, PreconditionViolation, Vertex


def _grow(orchestrator: GraphOrchestrator, parent: int) -> int:
    child = orchestrator.insert_vertex(creator=parent, depth=orchestrator.depth_of(parent) + 1)
    orchestrator.insert_edge(parent, child)
    return child


@pytest.fixture
def tree():
    """0 -> (1, 2, 3); 1 -> 4; 3 -> 5; 4 -> 6."""
    orchestrator = GraphOrchestrator(max_depth=3, branch_factor=3)
    orchestrator.insert_root()
    for _ in range(3):
        _grow(orchestrator, 0)
    _grow(orchestrator, 1)
    _grow(orchestrator, 3)
    _grow(orchestrator, 4)
    return orchestrator


def test_root_and_depth_index():
    orchestrator = GraphOrchestrator(max_depth=2, branch_factor=1)
    assert orchestrator.insert_root() == 0
    assert orchestrator.vertices_at_depth(0) == (0,)
    assert orchestrator.state.depth == 0
    assert orchestrator.creator_of(0) is None


def test_vertex_ids_are_contiguous(tree):
    assert [vertex.id for vertex in tree.state.vertices] == list(range(7))
    assert tree.state.depth_index == [[0], [1, 2, 3], [4, 5], [6]]


def test_tree_edges_are_derived(tree):
    assert all(edge.category is EdgeCategory.TREE for edge in tree.state.edges)
    assert tree.state.vertex(4).edge_ids == (3, 5)
    assert tree.state.vertex(6).edge_ids == (5,)


def test_second_root_rejected(tree):
    with pytest.raises(PreconditionViolation):
        tree.insert_vertex(creator=None, depth=0)


def test_vertex_depth_must_follow_creator(tree):
    with pytest.raises(PreconditionViolation):
        tree.insert_vertex(creator=1, depth=3)
    with pytest.raises(PreconditionViolation):
        tree.insert_vertex(creator=99, depth=1)


def test_unknown_and_negative_vertex_ids(tree):
    with pytest.raises(PreconditionViolation):
        tree.are_connected(-1, 0)
    with pytest.raises(PreconditionViolation):
        tree.insert_edge(0, 42)


def test_duplicate_pair_rejected_in_both_directions(tree):
    edge_id = tree.insert_edge(1, 2)
    assert tree.state.edges[edge_id].category is EdgeCategory.LATERAL
    assert tree.are_connected(1, 2)
    assert tree.are_connected(2, 1)
    with pytest.raises(AlreadyConnectedError):
        tree.insert_edge(1, 2)
    with pytest.raises(AlreadyConnectedError) as excinfo:
        tree.insert_edge(2, 1)
    assert excinfo.value.edge_id == edge_id


def test_parent_child_pair_counts_as_connected(tree):
    assert tree.are_connected(0, 1)
    with pytest.raises(AlreadyConnectedError):
        tree.insert_edge(0, 1)


def test_loop_recorded_once(tree):
    edges_before = tree.state.vertex(2).edge_ids
    edge_id = tree.insert_edge(2, 2)
    assert tree.state.edges[edge_id].category is EdgeCategory.LOOP
    assert tree.state.vertex(2).edge_ids == edges_before + (edge_id,)
    assert tree.has_loop(2)
    with pytest.raises(AlreadyConnectedError):
        tree.insert_edge(2, 2)


def test_self_pair_without_loop_is_not_connected(tree):
    assert not tree.are_connected(1, 1)


def test_forward_categories(tree):
    assert tree.classify_edge(2, 4) is EdgeCategory.FORWARD_SKIP_1
    assert tree.classify_edge(0, 4) is EdgeCategory.FORWARD_SKIP_2
    assert tree.classify_edge(1, 6) is EdgeCategory.FORWARD_SKIP_2


def test_unrelated_pairs_have_no_category(tree):
    # same depth but not neighbours in the bucket
    with pytest.raises(PreconditionViolation):
        tree.classify_edge(1, 3)
    # three levels apart
    with pytest.raises(PreconditionViolation):
        tree.insert_edge(0, 6)
    # backwards
    with pytest.raises(PreconditionViolation):
        tree.insert_edge(4, 2)


def test_requested_category_must_match(tree):
    with pytest.raises(PreconditionViolation):
        tree.insert_edge(2, 4, EdgeCategory.FORWARD_SKIP_2)
    assert tree.insert_edge(2, 4, "yellow") == 6


def test_vertices_at_depth_bounds(tree):
    assert tree.vertices_at_depth(2) == (4, 5)
    with pytest.raises(PreconditionViolation):
        tree.vertices_at_depth(4)
    with pytest.raises(PreconditionViolation):
        tree.vertices_at_depth(-1)


def test_count_created_by(tree):
    assert tree.count_created_by(0) == 3
    assert tree.count_created_by(1) == 1
    assert tree.count_created_by(2) == 0


def test_count_edges(tree):
    tree.insert_edge(5, 5)
    assert tree.count_edges(EdgeCategory.TREE) == 6
    assert tree.count_edges("green") == 1
    assert tree.count_edges(EdgeCategory.LATERAL) == 0


def test_clamp_max_depth():
    orchestrator = GraphOrchestrator(max_depth=4, branch_factor=1)
    orchestrator.insert_root()
    _grow(orchestrator, 0)
    assert orchestrator.clamp_max_depth() == 1
    assert orchestrator.state.requested_depth == 4


def test_sealed_orchestrator_rejects_mutation(tree):
    tree.seal()
    with pytest.raises(PreconditionViolation):
        tree.insert_edge(1, 2)
    with pytest.raises(PreconditionViolation):
        tree.insert_vertex(creator=2, depth=2)
    with pytest.raises(PreconditionViolation):
        tree.clamp_max_depth()
    assert tree.are_connected(0, 1)


def test_sealed_graph_is_frozen_snapshot(tree):
    graph = tree.seal()

    assert graph.depth_index == ((0,), (1, 2, 3), (4, 5), (6,))
    assert graph.vertices_at_depth(2) == (4, 5)
    assert graph.are_connected(1, 4)
    assert graph.count_created_by(0) == 3
    with pytest.raises(FrozenInstanceError):
        graph.max_depth = 42
    with pytest.raises(FrozenInstanceError):
        graph.vertices[0].depth = 3
    with pytest.raises(AttributeError):
        graph.vertices[0].edge_ids.append(999)
    with pytest.raises(TypeError):
        graph.depth_index[1][0] = 9


def test_vertex_ids_checked_against_stored_vertices(tree):
    tree.state.vertices.append(Vertex(id=7, depth=1, creator=0))
    with pytest.raises(PreconditionViolation, match="collides"):
        tree.insert_vertex(creator=0, depth=1)


def test_edge_ids_checked_against_stored_edges(tree):
    tree.state.edges.append(tree.state.edges[0])
    with pytest.raises(PreconditionViolation, match="collides"):
        tree.insert_edge(1, 2)
