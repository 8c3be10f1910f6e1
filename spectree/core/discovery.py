"""Discovery index - routes run/result events to the live node set."""
from typing import Dict, List, Optional, Sequence

from .node import SpecNode, is_root_node
from ..logging import get_logger

logger = get_logger(__name__)


class DiscoveryIndex:
    """Mapping from test key to node for the most recent discovered set.

    Rebuilt from scratch on every discovery; nodes from an earlier
    discovery are never reachable afterwards.
    """

    def __init__(self):
        self._tests: List[SpecNode] = []
        self._by_key: Dict[str, SpecNode] = {}
        self._root: Optional[SpecNode] = None

    def on_discovered(self, nodes: Optional[Sequence[SpecNode]]) -> None:
        """Replace the discovered set with a new flattened node sequence."""
        tests = list(nodes) if nodes else []
        self._root = next((n for n in tests if is_root_node(n)), None)
        self._tests = tests
        self._by_key = {}
        for node in tests:
            self._by_key[node.key] = node
        logger.debug(f"Discovered {len(tests)} nodes, root={'yes' if self._root else 'no'}")

    def get(self, key: str) -> Optional[SpecNode]:
        return self._by_key.get(key)

    def nodes_with_key(self, key: str) -> List[SpecNode]:
        """All discovered nodes carrying ``key``, in discovery order."""
        return [n for n in self._tests if n.key == key]

    @property
    def discovered_tests(self) -> List[SpecNode]:
        """The flattened set from the last discovery."""
        return self._tests

    @property
    def root_node(self) -> Optional[SpecNode]:
        return self._root

    def __len__(self) -> int:
        return len(self._by_key)

    def __contains__(self, key: str) -> bool:
        return key in self._by_key
