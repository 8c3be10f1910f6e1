"""Unit tests for DiscoveryIndex."""

from spectree.core.discovery import DiscoveryIndex
from spectree.core.node import flatten


def test_index_maps_every_key(sample_tree):
    root = sample_tree[0]
    index = DiscoveryIndex()
    index.on_discovered(flatten([root]))

    assert len(index) == 4
    assert index.get("specA") is sample_tree[2]
    assert "containerX" in index
    assert index.root_node is root


def test_missing_root_is_not_an_error(node_factory):
    index = DiscoveryIndex()
    index.on_discovered([node_factory("a"), node_factory("b")])
    assert index.root_node is None
    assert len(index.discovered_tests) == 2


def test_rediscovery_replaces_all_nodes(node_factory):
    """Nodes from an earlier discovery are unreachable afterwards."""
    index = DiscoveryIndex()
    old_a = node_factory("a")
    old_gone = node_factory("gone")
    index.on_discovered([old_a, old_gone])

    new_a = node_factory("a")
    index.on_discovered([new_a])

    assert index.get("a") is new_a
    assert index.get("gone") is None
    assert old_a not in index.discovered_tests
    assert all(n is not old_a and n is not old_gone for n in index.discovered_tests)


def test_empty_or_none_discovery_clears(node_factory):
    index = DiscoveryIndex()
    index.on_discovered([node_factory("a")])
    index.on_discovered(None)
    assert index.discovered_tests == []
    assert index.get("a") is None
    assert index.root_node is None


def test_nodes_with_key_returns_matches_in_order(node_factory):
    index = DiscoveryIndex()
    first = node_factory("dup")
    second = node_factory("dup")
    index.on_discovered([first, node_factory("x"), second])
    assert index.nodes_with_key("dup") == [first, second]
    # Lookup by key resolves to the last occurrence
    assert index.get("dup") is second
