from collections import deque
from typing import List

from lnsimulator.lib.data_types import Channel
from lnsimulator.lib.exceptions import InvalidAmount, NoRoute
from lnsimulator.lib.network import Network
from lnsimulator.lib.utilities import is_integer, profiled

import logging
logger = logging.getLogger(__name__)
logger.addHandler(logging.NullHandler())


def validate_amount(amt_sat):
    if not is_integer(amt_sat) or amt_sat <= 0:
        raise InvalidAmount(
            f"Payment amount must be a positive integer number of sat, "
            f"got {amt_sat!r}.")


def is_valid_path(network: Network, path: List[int], amt_sat: int) -> bool:
    """Checks that every hop of path is a channel which can carry amt_sat."""
    for node_from, node_to in zip(path, path[1:]):
        channel = network.channel(node_from, node_to)
        if channel is None or channel.capacity < amt_sat:
            return False
    return True


def path_channels(network: Network, path: List[int]) -> List[Channel]:
    """
    Maps a path to the channels it traverses.

    :param network: Network
    :param path: hops in terms of nodes
    :return: channels in order of traversal
    """
    channels = []
    for node_from, node_to in zip(path, path[1:]):
        channel = network.channel(node_from, node_to)
        if channel is None:
            raise NoRoute(
                f"Nodes {node_from} and {node_to} are not connected by a channel.")
        channels.append(channel)
    return channels


@profiled
def find_path(network: Network, source: int, target: int, amt_sat: int) -> List[int]:
    """Finds a path of channels which all can carry amt_sat.

    The search is breadth first, so the path has the least number of hops
    among all paths of sufficient capacity. Channels with a capacity smaller
    than amt_sat are ignored. Among paths of equal length the first one found
    wins, neighbors being expanded in channel creation order.

    :param network: Network
    :param source: find a path from this node
    :param target: to this node
    :param amt_sat: amount in sat each channel needs to be able to carry

    :return: hops in terms of the nodes, starting with source and ending with target
    :raises NoRoute: if target can't be reached from source
    """
    network.validate_node(source)
    network.validate_node(target)
    validate_amount(amt_sat)

    if source == target:
        return [source]

    eligible_graph = network.capacity_eligible_graph(amt_sat)
    visited = {source}
    queue = deque([[source]])

    while queue:
        path = queue.popleft()
        node = path[-1]
        for neighbor in eligible_graph.adj[node]:
            if neighbor in visited:
                continue
            extended_path = path + [neighbor]
            if neighbor == target:
                if not is_valid_path(network, extended_path, amt_sat):
                    logger.warning(
                        f"Discarding path {extended_path}, it contains a "
                        f"channel with insufficient capacity.")
                    continue
                logger.debug(
                    f"Found path {extended_path} for {amt_sat} sat "
                    f"({len(extended_path) - 1} hops).")
                return extended_path
            visited.add(neighbor)
            queue.append(extended_path)

    logger.debug(f"No path from {source} to {target} for {amt_sat} sat.")
    raise NoRoute(f"No path from node {source} to node {target} can carry "
                  f"{amt_sat} sat.")
