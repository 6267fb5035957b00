"""
Random payment channel network generation and graph queries.
"""
import random
from typing import Dict, Iterable, List, Optional, Tuple, Union

import networkx as nx
from networkx.utils import create_py_random_state

from lnsimulator.lib.data_types import Channel
from lnsimulator.lib.exceptions import (
    InvalidChannel,
    InvalidNetworkParameters,
    InvalidNode,
)
from lnsimulator.lib.ln_utilities import node_from_label, node_label
from lnsimulator.lib.utilities import is_integer, profiled

import logging
logger = logging.getLogger(__name__)
logger.addHandler(logging.NullHandler())

# representative channel sizes in sat, from 5m sat up to 2 BTC
CHANNEL_CAPACITIES_SAT = (
    5_000_000, 10_000_000, 20_000_000, 30_000_000, 40_000_000, 50_000_000,
    60_000_000, 70_000_000, 80_000_000, 90_000_000, 100_000_000, 200_000_000,
)

RandomState = Union[None, int, random.Random]


class Network:
    """
    Contains the network graph of one generation.

    Nodes are the integers 0..number_of_nodes-1. Each channel is stored once
    per unordered node pair in the networkx graph (edge attributes `capacity`
    and `channel`) and in the ordered channel list. The order of the channel
    list is the order in which the channels were created, the channels of a
    node are iterated in that same order by networkx.

    A network is not modified after construction, a new generation replaces
    it as a whole.
    """
    graph: nx.Graph

    def __init__(self, number_of_nodes: int,
                 channels: Iterable[Union[Channel, Tuple[int, int, int]]] = ()):
        if not is_integer(number_of_nodes) or number_of_nodes <= 0:
            raise InvalidNetworkParameters(
                f"Number of nodes must be a positive integer, "
                f"got {number_of_nodes!r}.")

        self.graph = nx.Graph()
        for node in range(number_of_nodes):
            self.graph.add_node(node, label=node_label(node))

        self._channels: List[Channel] = []
        for channel in channels:
            if not isinstance(channel, Channel):
                if not isinstance(channel, (tuple, list)) or len(channel) != 3:
                    raise InvalidChannel(
                        f"Channel definitions need to be (start, end, capacity), "
                        f"got {channel!r}.")
                channel = Channel(*channel)
            self._add_channel(channel)

    @classmethod
    def from_channels(cls, number_of_nodes: int,
                      channels: Iterable[Union[Channel, Tuple[int, int, int]]]) -> 'Network':
        """
        Builds a network from explicit channel definitions.

        :param number_of_nodes: int
        :param channels: Channel objects or (start, end, capacity) tuples,
            their order defines the storage order
        :return: Network
        """
        return cls(number_of_nodes, channels)

    def _add_channel(self, channel: Channel):
        if channel.start == channel.end:
            raise InvalidChannel(
                f"Channel endpoints must differ, got node {channel.start} twice.")
        self.validate_node(channel.start)
        self.validate_node(channel.end)
        if not is_integer(channel.capacity) or channel.capacity <= 0:
            raise InvalidChannel(
                f"Channel capacity must be a positive integer, "
                f"got {channel.capacity!r}.")
        if self.graph.has_edge(channel.start, channel.end):
            raise InvalidChannel(
                f"There is already a channel between node {channel.start} "
                f"and node {channel.end}.")

        self.graph.add_edge(
            channel.start,
            channel.end,
            node_pair=channel.node_pair,
            capacity=channel.capacity,
            channel=channel)
        self._channels.append(channel)

    @property
    def number_of_nodes(self) -> int:
        return self.graph.number_of_nodes()

    @property
    def number_of_channels(self) -> int:
        return len(self._channels)

    @property
    def nodes(self) -> range:
        return range(self.number_of_nodes)

    @property
    def channels(self) -> Tuple[Channel, ...]:
        return tuple(self._channels)

    def has_node(self, node) -> bool:
        return is_integer(node) and 0 <= node < self.number_of_nodes

    def validate_node(self, node):
        """
        Raises an InvalidNode error if node is not part of the network.

        :param node: int
        """
        if not self.has_node(node):
            raise InvalidNode(
                f"Node {node!r} is not in the network "
                f"(valid nodes: 0 to {self.number_of_nodes - 1}).")

    def has_channel(self, node_a: int, node_b: int) -> bool:
        return self.graph.has_edge(node_a, node_b)

    def channel(self, node_a: int, node_b: int) -> Optional[Channel]:
        """
        Gives back the channel between two nodes.

        :param node_a: int
        :param node_b: int
        :return: Channel or None if the nodes are not connected
        """
        edge = self.graph.get_edge_data(node_a, node_b)
        if edge is None:
            return None
        return edge['channel']

    def capacity_eligible_graph(self, amt_sat: int) -> nx.Graph:
        """
        Gives a read-only view of the graph that only contains channels which
        can carry amt_sat.

        :param amt_sat: int
        :return: networkx graph view
        """
        def filter_edge(node_a, node_b):
            return self.graph[node_a][node_b]['capacity'] >= amt_sat

        return nx.subgraph_view(self.graph, filter_edge=filter_edge)

    def number_channels(self, node: int) -> int:
        """
        Determines the degree of a given node.

        :param node: int
        :return: int
        """
        try:
            return self.graph.degree[node]
        except KeyError:
            return 0

    def node_capacity(self, node: int) -> int:
        """
        Calculates the total capacity of a node in satoshi.

        :param node: int
        :return: int
        """
        total_capacity = 0
        for _, _, capacity in self.graph.edges(node, data='capacity'):
            total_capacity += capacity
        return total_capacity

    def node_label(self, node: int) -> str:
        try:
            return self.graph.nodes[node]['label']
        except KeyError:
            return 'unknown node'

    def node_by_label(self, label: str) -> int:
        """
        Resolves a node label (or a node index given as a string) to the node.

        :param label: str
        :return: node: int
        """
        node = node_from_label(label)
        self.validate_node(node)
        return node

    def to_dict(self) -> Dict:
        return {
            'nodes': [
                {'node': n, 'label': self.node_label(n)} for n in self.nodes
            ],
            'channels': [
                {
                    'start': c.start,
                    'end': c.end,
                    'capacity': c.capacity,
                    'class': str(c.capacity_class),
                } for c in self._channels
            ],
        }

    def __repr__(self):
        return (f"Network({self.number_of_nodes} nodes, "
                f"{self.number_of_channels} channels)")


def draw_capacity(rng: random.Random) -> int:
    """Simulates the random capacity of a payment channel."""
    return rng.choice(CHANNEL_CAPACITIES_SAT)


@profiled
def generate_network(number_of_nodes: int, channel_probability: float,
                     rng: RandomState = None) -> Network:
    """
    Generates a random network with number_of_nodes nodes.

    Every unordered node pair (i, j) with i < j is considered once and gets a
    channel with probability channel_probability. The capacity of each
    channel is drawn uniformly from CHANNEL_CAPACITIES_SAT.

    :param number_of_nodes: positive int
    :param channel_probability: float in [0, 1]
    :param rng: random.Random instance, an int seed or None for the global
        random state
    :return: Network
    """
    if not is_integer(number_of_nodes) or number_of_nodes <= 0:
        raise InvalidNetworkParameters(
            f"Number of nodes must be a positive integer, "
            f"got {number_of_nodes!r}.")
    if isinstance(channel_probability, bool) or not isinstance(channel_probability, (int, float)) \
            or not 0.0 <= channel_probability <= 1.0:
        raise InvalidNetworkParameters(
            f"Channel probability must be within [0, 1], "
            f"got {channel_probability!r}.")

    rng = create_py_random_state(rng)

    channels = []
    for i in range(number_of_nodes):
        for j in range(i + 1, number_of_nodes):
            if rng.random() < channel_probability:
                channels.append(Channel(i, j, draw_capacity(rng)))

    network = Network(number_of_nodes, channels)
    logger.debug(
        f"Generated network: {network.number_of_nodes} nodes, "
        f"{network.number_of_channels} channels.")
    return network
