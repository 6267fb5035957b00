from collections import Counter
from typing import Dict, List, Tuple

import numpy as np
import networkx as nx

from lnsimulator.lib.data_types import CapacityClass
from lnsimulator.lib.ln_utilities import format_capacity
from lnsimulator.lib.network import Network

import logging
logger = logging.getLogger(__name__)
logger.addHandler(logging.NullHandler())


class NetworkAnalysis(object):
    """
    Class for network analysis of a generated network.
    """

    def __init__(self, network: Network):
        """
        :param network: :class:`lib.network.Network`
        """
        self.network = network

    def isolated_nodes(self) -> List[int]:
        return sorted(nx.isolates(self.network.graph))

    def connected_components(self) -> List[List[int]]:
        """
        Determines the groups of nodes which are connected by channels,
        largest group first.

        :return: list of sorted node lists
        """
        components = [sorted(c) for c in nx.connected_components(self.network.graph)]
        return sorted(components, key=lambda c: (-len(c), c[0]))

    def find_nodes_with_largest_degrees(self, node_count=10) -> List[Tuple[int, int]]:
        """
        Finds node_count nodes in the graph, which have the most connections.

        :param node_count: int
        :return: list of nodes sorted by degree
        """
        nodes_and_degrees = list(self.network.graph.degree)
        nodes_sorted_by_degrees_decremental = sorted(
            nodes_and_degrees, key=lambda x: x[1], reverse=True)

        return nodes_sorted_by_degrees_decremental[:node_count]

    def find_nodes_with_highest_total_capacities(self, node_count=10) -> List[Tuple[int, int]]:
        """
        Finds node_count nodes in the graph with the largest amount of bitcoin
        assigned in their channels.

        :param node_count: int
        :return: list of nodes sorted by capacity
        """
        nodes_and_capacity = [
            (n, self.network.node_capacity(n)) for n in self.network.nodes]

        nodes_and_capacity = sorted(
            nodes_and_capacity, key=lambda x: x[1], reverse=True)

        return nodes_and_capacity[:node_count]

    def capacity_class_counts(self) -> Dict[CapacityClass, int]:
        counts = Counter(c.capacity_class for c in self.network.channels)
        return {capacity_class: counts.get(capacity_class, 0)
                for capacity_class in CapacityClass}

    def statistics(self) -> Dict:
        """
        Calculates basic statistics of the network.

        :return: dict
        """
        capacities = np.array(
            [c.capacity for c in self.network.channels], dtype=np.int64)
        degrees = np.array(
            [d for _, d in self.network.graph.degree], dtype=np.int64)

        if capacities.size:
            mean_capacity = float(np.mean(capacities))
            median_capacity = float(np.median(capacities))
            total_capacity = int(np.sum(capacities))
        else:
            mean_capacity = median_capacity = 0.0
            total_capacity = 0

        return {
            'nodes': self.network.number_of_nodes,
            'channels': self.network.number_of_channels,
            'isolated_nodes': len(self.isolated_nodes()),
            'connected_components': nx.number_connected_components(self.network.graph),
            'total_capacity': total_capacity,
            'mean_capacity': mean_capacity,
            'median_capacity': median_capacity,
            'mean_degree': float(np.mean(degrees)),
            'max_degree': int(np.max(degrees)),
            'capacity_classes': {
                str(k): v for k, v in self.capacity_class_counts().items()},
        }

    def print_statistics(self):
        statistics = self.statistics()
        logger.info("-------- Network --------")
        logger.info(f"nodes:                {statistics['nodes']}")
        logger.info(f"channels:             {statistics['channels']}")
        logger.info(f"isolated nodes:       {statistics['isolated_nodes']}")
        logger.info(f"connected components: {statistics['connected_components']}")
        logger.info(f"total capacity:       "
                    f"{format_capacity(statistics['total_capacity'])}")
        logger.info(f"mean capacity:        "
                    f"{format_capacity(round(statistics['mean_capacity']))}")
        logger.info(f"median capacity:      "
                    f"{format_capacity(round(statistics['median_capacity']))}")
        logger.info(f"mean degree:          {statistics['mean_degree']:.2f}")
        logger.info(f"max degree:           {statistics['max_degree']}")
        logger.info("-------- Channel sizes --------")
        for capacity_class, count in statistics['capacity_classes'].items():
            logger.info(f"{capacity_class:<10} {count}")
        logger.info("-------- Largest nodes --------")
        for node, capacity in self.find_nodes_with_highest_total_capacities(5):
            logger.info(
                f"{self.network.node_label(node):<5} "
                f"{self.network.number_channels(node):>3} channels "
                f"{format_capacity(capacity):>14}")
        logger.info("-------- Best connected nodes --------")
        for node, degree in self.find_nodes_with_largest_degrees(5):
            logger.info(f"{self.network.node_label(node):<5} {degree:>3} channels")
