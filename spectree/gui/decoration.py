"""Derived presentation of a test node: label, icon, tooltip."""
from dataclasses import dataclass, field
from enum import Enum, auto
from typing import List, Optional

from ..core.node import SpecNode, is_container, is_runnable_test


class CollapsibleState(Enum):
    NONE = auto()
    EXPANDED = auto()


# Icon names, resolved against the host's icon theme
ICON_RUNNING = "spinner"
ICON_PASSED = "test-passed"
ICON_FAILED = "test-failed"
ICON_FOCUSED = "test-focused"
ICON_SPEC = "test"
ICON_CONTAINER = "test-container"


@dataclass
class TreeItem:
    """Everything the view needs to render one node."""
    label: str
    collapsible_state: CollapsibleState
    icon: str
    tooltip: str
    command: Optional[str] = None
    arguments: List[object] = field(default_factory=list)
    context_value: str = ""


def label_for_node(node: SpecNode) -> str:
    if not node.text:
        return node.name
    return f"{node.name}: {node.text}"


def icon_for_node(node: SpecNode) -> str:
    """Pick the icon reflecting run state first, then node kind."""
    if node.running:
        return ICON_RUNNING
    if node.result is not None:
        return ICON_PASSED if node.result.is_passed else ICON_FAILED
    if node.focused:
        return ICON_FOCUSED
    if node.spec:
        return ICON_SPEC
    return ICON_CONTAINER


def result_summary(node: SpecNode) -> str:
    if node.result is None:
        return "-"
    if node.result.is_passed:
        return "passed"
    if node.result.output:
        return "\n\n" + node.result.output
    return "not passed"


def tooltip_for_node(node: SpecNode) -> str:
    """Markdown tooltip listing the node's fields and last result."""
    lines = [
        f"**name:** {node.name}",
        f"**text:** {node.text}",
        f"**start:** {node.start}",
        f"**end:** {node.end}",
        f"**spec:** {str(node.spec).lower()}",
        f"**focused:** {str(node.focused).lower()}",
        f"**result:** {result_summary(node)}",
    ]
    return "  \n\n".join(lines)


def tree_item_for_node(node: SpecNode, click_command: Optional[str] = None) -> TreeItem:
    collapsible = CollapsibleState.EXPANDED if is_container(node) else CollapsibleState.NONE
    return TreeItem(
        label=label_for_node(node),
        collapsible_state=collapsible,
        icon=icon_for_node(node),
        tooltip=tooltip_for_node(node),
        command=click_command,
        arguments=[node] if click_command else [],
        context_value="test" if is_runnable_test(node) else "",
    )
