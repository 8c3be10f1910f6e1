"""Unit tests for the test node model."""

from spectree.core.node import (
    ROOT_KEY, SpecNode, RunResult, flatten, is_container, is_root_node,
    is_runnable_test, same_span,
)


class TestNodeIdentity:
    def test_nodes_compare_by_identity(self, node_factory):
        a = node_factory("a", start=0, end=10)
        b = node_factory("a", start=0, end=10)
        assert a != b
        assert a == a

    def test_same_span_ignores_key(self, node_factory):
        a = node_factory("a", start=0, end=10)
        b = node_factory("b", start=0, end=10)
        c = node_factory("a", start=0, end=11)
        assert same_span(a, b)
        assert not same_span(a, c)

    def test_root_detected_by_key(self, node_factory):
        assert is_root_node(node_factory(ROOT_KEY, spec=False))
        assert not is_root_node(node_factory("other", spec=False))


class TestNodeKinds:
    def test_container_and_runnable(self, sample_tree):
        root, container, spec_a, _ = sample_tree
        assert is_container(container)
        assert not is_runnable_test(container)
        assert is_runnable_test(spec_a)
        assert not is_container(spec_a)

    def test_new_node_is_idle(self, node_factory):
        node = node_factory("a")
        assert node.running is False
        assert node.result is None


def test_flatten_is_preorder(sample_tree):
    root, container, spec_a, spec_b = sample_tree
    assert flatten([root]) == [root, container, spec_a, spec_b]


def test_flatten_keeps_sibling_order(node_factory):
    first = node_factory("first", spec=False, nodes=[node_factory("inner")])
    second = node_factory("second")
    flat = flatten([first, second])
    assert [n.key for n in flat] == ["first", "inner", "second"]


def test_node_from_dict_builds_children():
    node = SpecNode.from_dict({
        "key": "c", "name": "Describe", "text": "cart", "start": 5, "end": 90,
        "spec": False, "focused": True,
        "nodes": [{"key": "s", "name": "It", "text": "adds", "start": 20, "end": 60, "spec": True}],
    })
    assert node.focused is True
    assert len(node.nodes) == 1
    assert node.nodes[0].spec is True
    assert node.nodes[0].start == 20


def test_result_from_runner_payload():
    result = RunResult.from_dict({"testName": "s", "isPassed": False, "output": "boom"})
    assert result == RunResult(test_name="s", is_passed=False, output="boom")
    assert RunResult.from_dict({"testName": "s", "isPassed": True}).output is None
    assert result.to_dict() == {"testName": "s", "isPassed": False, "output": "boom"}
