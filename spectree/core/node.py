"""Test tree node model - one discovered container or spec."""
from dataclasses import dataclass, field
from typing import Any, Dict, Iterable, List, Optional

ROOT_KEY = "root"


@dataclass
class RunResult:
    """Last known outcome of a single test, as reported by the runner."""

    test_name: str
    is_passed: bool
    output: Optional[str] = None

    def to_dict(self) -> dict:
        """Convert to the runner's wire shape."""
        d = {'testName': self.test_name, 'isPassed': self.is_passed}
        if self.output is not None:
            d['output'] = self.output
        return d

    @classmethod
    def from_dict(cls, d: Dict[str, Any]) -> 'RunResult':
        """Create from a runner payload ({testName, isPassed, output?})."""
        return cls(
            test_name=d['testName'],
            is_passed=bool(d['isPassed']),
            output=d.get('output'),
        )


@dataclass(eq=False)
class SpecNode:
    """One node of the discovered test tree.

    Compared by identity: nodes are replaced wholesale on every discovery,
    and signals carry the live instance. Use ``same_span`` for positional
    equality.
    """

    key: str            # Stable identity, unique within one discovered set
    name: str           # Container/spec keyword, e.g. "Describe", "It"
    text: str           # Label text as written in source
    start: int          # Span start offset
    end: int            # Span end offset
    spec: bool = False  # True for a runnable leaf test
    focused: bool = False
    running: bool = False
    result: Optional[RunResult] = None
    nodes: List['SpecNode'] = field(default_factory=list)

    @classmethod
    def from_dict(cls, d: Dict[str, Any]) -> 'SpecNode':
        """Build a node (and its children) from parser output."""
        return cls(
            key=d['key'],
            name=d.get('name', ''),
            text=d.get('text', ''),
            start=d.get('start', 0),
            end=d.get('end', 0),
            spec=d.get('spec', False),
            focused=d.get('focused', False),
            nodes=[cls.from_dict(c) for c in d.get('nodes', [])],
        )

    def __repr__(self) -> str:
        return f"SpecNode(key={self.key!r}, span=[{self.start},{self.end}], running={self.running})"


def is_root_node(node: SpecNode) -> bool:
    return node.key == ROOT_KEY


def is_container(node: SpecNode) -> bool:
    return len(node.nodes) > 0


def is_runnable_test(node: SpecNode) -> bool:
    """A runnable test is a spec leaf, not a container."""
    return node.spec


def same_span(a: SpecNode, b: SpecNode) -> bool:
    """Positional equality used for click disambiguation."""
    return a.start == b.start and a.end == b.end


def flatten(nodes: Iterable[SpecNode]) -> List[SpecNode]:
    """Depth-first, pre-order flattening of a nested outline."""
    flat: List[SpecNode] = []
    stack = list(reversed(list(nodes)))
    while stack:
        node = stack.pop()
        flat.append(node)
        stack.extend(reversed(node.nodes))
    return flat
