"""Tests for ClickDisambiguator."""

import pytest

from spectree.gui.click_disambiguator import ClickDisambiguator, ClickIntent


@pytest.fixture
def clicks(qapp):
    return ClickDisambiguator(double_click_threshold=400)


def test_same_node_within_threshold_is_double(clicks, node_factory):
    a = node_factory("a", start=0, end=10)
    assert clicks.click(a, now=0) is ClickIntent.SINGLE
    assert clicks.click(a, now=300) is ClickIntent.DOUBLE


def test_different_nodes_are_two_singles(clicks, node_factory):
    a = node_factory("a", start=0, end=10)
    b = node_factory("b", start=20, end=30)
    assert clicks.click(a, now=0) is ClickIntent.SINGLE
    assert clicks.click(b, now=300) is ClickIntent.SINGLE


def test_slow_second_click_is_single(clicks, node_factory):
    a = node_factory("a", start=0, end=10)
    clicks.click(a, now=0)
    assert clicks.click(a, now=400) is ClickIntent.SINGLE


def test_span_equality_not_identity(clicks, node_factory):
    a = node_factory("a", start=0, end=10)
    twin = node_factory("twin", start=0, end=10)
    clicks.click(a, now=0)
    assert clicks.click(twin, now=100) is ClickIntent.DOUBLE


def test_last_click_always_recorded(clicks, node_factory):
    """A-B-B: the second B pairs with the first B, not with A."""
    a = node_factory("a", start=0, end=10)
    b = node_factory("b", start=20, end=30)
    clicks.click(a, now=0)
    clicks.click(b, now=100)
    assert clicks.click(b, now=200) is ClickIntent.DOUBLE


def test_signals_emitted(clicks, node_factory, qtbot):
    a = node_factory("a")
    with qtbot.waitSignal(clicks.single_clicked, timeout=1000) as blocker:
        clicks.click(a, now=0)
    assert blocker.args == [a]
    with qtbot.waitSignal(clicks.double_clicked, timeout=1000) as blocker:
        clicks.click(a, now=10)
    assert blocker.args == [a]


def test_threshold_clamped_and_zero_disables_double(qapp, node_factory):
    clicks = ClickDisambiguator(double_click_threshold=-50)
    assert clicks.double_click_threshold == 0
    a = node_factory("a")
    clicks.click(a, now=0)
    assert clicks.click(a, now=0) is ClickIntent.SINGLE


def test_injected_clock_used(qapp, node_factory):
    now = [1000.0]
    clicks = ClickDisambiguator(double_click_threshold=400, clock=lambda: now[0])
    a = node_factory("a")
    clicks.click(a)
    now[0] = 1250.0
    assert clicks.click(a) is ClickIntent.DOUBLE


def test_reset_forgets_previous_click(clicks, node_factory):
    a = node_factory("a")
    clicks.click(a, now=0)
    clicks.reset()
    assert clicks.click(a, now=10) is ClickIntent.SINGLE
