from enum import Enum
from dataclasses import dataclass
from typing import Tuple

from lnsimulator.lib.exceptions import InvalidChannel
from lnsimulator.lib.utilities import is_integer


class CapacityClass(Enum):
    SMALL = 'small'
    MEDIUM = 'medium'
    LARGE = 'large'

    def __str__(self):
        return self.value


class NodePair(tuple):
    """Represents a node pair mapped to a fixed (ascending) order."""

    def __new__(cls, nodes: Tuple[int, int]):
        if nodes[0] < nodes[1]:
            seq = (nodes[0], nodes[1])
        else:
            seq = (nodes[1], nodes[0])

        return super().__new__(cls, seq)


@dataclass(frozen=True)
class Channel:
    """An undirected payment channel between two distinct nodes."""
    start: int
    end: int
    capacity: int

    def __post_init__(self):
        for node in (self.start, self.end):
            if not is_integer(node):
                raise InvalidChannel(
                    f"Channel endpoints must be node indices, got {node!r}.")
        # channels are stored with their endpoints in ascending order
        if self.start > self.end:
            start, end = self.end, self.start
            object.__setattr__(self, 'start', start)
            object.__setattr__(self, 'end', end)

    @property
    def node_pair(self) -> NodePair:
        return NodePair((self.start, self.end))

    @property
    def capacity_class(self) -> CapacityClass:
        from lnsimulator.lib.ln_utilities import classify_capacity
        return classify_capacity(self.capacity)

    def __str__(self):
        return f"{self.start}-{self.end} {self.capacity} sat"
