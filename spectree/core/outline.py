"""Parsed outline of one source document."""
from dataclasses import dataclass, field
from typing import Any, Awaitable, Callable, Dict, List

from .editor import TextDocument
from .node import SpecNode, flatten


class OutlineParseError(Exception):
    """Raised by an outline parser when the source cannot be outlined."""


@dataclass
class Outline:
    """Nested test tree of a document plus its pre-order flattening."""
    nested: List[SpecNode] = field(default_factory=list)
    flat: List[SpecNode] = field(default_factory=list)

    @classmethod
    def from_nested(cls, nested: List[SpecNode]) -> 'Outline':
        return cls(nested=list(nested), flat=flatten(nested))

    @classmethod
    def from_dict(cls, d: Dict[str, Any]) -> 'Outline':
        """Create from parser JSON output ({"nested": [...]})."""
        try:
            nested = [SpecNode.from_dict(n) for n in d.get('nested', [])]
        except (KeyError, TypeError, AttributeError) as e:
            raise OutlineParseError(f"Malformed outline: {e}") from e
        return cls.from_nested(nested)


# Parsers are asynchronous and may raise any exception.
OutlineParser = Callable[[TextDocument], Awaitable[Outline]]
