"""
Simulation of a payment being routed through the network.
"""
from dataclasses import dataclass, field
from typing import Iterator, List, Tuple

from lnsimulator.lib.data_types import Channel
from lnsimulator.lib.exceptions import NoRoute, SameSenderReceiver
from lnsimulator.lib.ln_utilities import format_capacity
from lnsimulator.lib.network import Network
from lnsimulator.lib.pathfinding import find_path, path_channels

import logging
logger = logging.getLogger(__name__)
logger.addHandler(logging.NullHandler())


@dataclass
class Payment:
    network: Network = field(repr=False)
    sender: int
    receiver: int
    amt_sat: int
    path: List[int]
    channels: List[Channel]

    @property
    def number_of_hops(self) -> int:
        return len(self.channels)

    def hops(self) -> Iterator[Tuple[int, int, Channel]]:
        """Yields (node_from, node_to, channel) for each hop, in order of
        traversal."""
        for node_from, node_to, channel in zip(self.path, self.path[1:], self.channels):
            yield node_from, node_to, channel

    def path_labels(self) -> List[str]:
        return [self.network.node_label(n) for n in self.path]

    def summary(self) -> str:
        return (f"Payment of {format_capacity(self.amt_sat)} successfully sent "
                f"from Node {self.network.node_label(self.sender)} "
                f"to Node {self.network.node_label(self.receiver)}")


def send_payment(network: Network, sender: int, receiver: int, amt_sat: int) -> Payment:
    """
    Routes a payment of amt_sat from sender to receiver.

    Channel capacities are not changed by the payment.

    :param network: Network
    :param sender: node
    :param receiver: node
    :param amt_sat: int
    :return: Payment
    :raises SameSenderReceiver: if sender and receiver are the same node
    :raises NoRoute: if no channel path can carry the amount
    """
    network.validate_node(sender)
    network.validate_node(receiver)
    if sender == receiver:
        raise SameSenderReceiver("Sender and receiver must be different nodes.")

    try:
        path = find_path(network, sender, receiver, amt_sat)
    except NoRoute as e:
        logger.debug(f"Routing failed: {e}")
        raise NoRoute(
            f"No path found for the payment of {format_capacity(amt_sat)}. "
            f"Try a smaller amount or choose different nodes.") from e

    payment = Payment(
        network=network,
        sender=sender,
        receiver=receiver,
        amt_sat=amt_sat,
        path=path,
        channels=path_channels(network, path),
    )
    logger.debug(f"Payment route: {' -> '.join(payment.path_labels())}")
    return payment
