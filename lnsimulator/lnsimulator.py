#!/usr/bin/env python
import argparse
import json
import random
import sys
# readline has a desired side effect on keyword input of enabling history
import readline  # noqa: F401

from pygments import highlight, lexers, formatters

from lnsimulator.lib.network import Network, generate_network
from lnsimulator.lib.network_info import NetworkAnalysis
from lnsimulator.lib.listchannels import ListChannels
from lnsimulator.lib.ln_utilities import format_capacity
from lnsimulator.lib.pathfinding import find_path
from lnsimulator.lib.payment import send_payment
from lnsimulator.lib.exceptions import InputValidationError, NoRoute
from lnsimulator import settings

import logging.config
logger = logging.getLogger()


def probability_float(unchecked_value):
    """
    Type function for argparse - a float within [0, 1]

    :param: unchecked_value: str
    """
    try:
        value = float(unchecked_value)
    except ValueError:
        raise argparse.ArgumentTypeError("Must be a floating point number")
    if not 0.0 <= value <= 1.0:
        raise argparse.ArgumentTypeError(f"{value} not in range [0.0, 1.0]")
    return value


def positive_int(unchecked_value):
    """
    Type function for argparse - a positive integer
    """
    try:
        value = int(unchecked_value)
    except ValueError:
        raise argparse.ArgumentTypeError("Must be an integer number")
    if value <= 0:
        raise argparse.ArgumentTypeError(f"{value} is not positive")
    return value


class Simulator(object):
    """Holds the network of the current generation."""
    network: Network

    def __init__(self, number_of_nodes=settings.NUMBER_OF_NODES,
                 channel_probability=settings.CHANNEL_PROBABILITY,
                 seed=settings.SEED):
        self.number_of_nodes = number_of_nodes
        self.channel_probability = channel_probability
        self.rng = random.Random(seed)
        self.regenerate()

    def regenerate(self, number_of_nodes=None, channel_probability=None):
        """
        Replaces the network by a freshly generated one.

        :param number_of_nodes: int, keeps the previous value if None
        :param channel_probability: float, keeps the previous value if None
        """
        if number_of_nodes is not None:
            self.number_of_nodes = number_of_nodes
        if channel_probability is not None:
            self.channel_probability = channel_probability
        self.network = generate_network(
            self.number_of_nodes, self.channel_probability, rng=self.rng)
        logger.info(
            f"Generated network with {self.network.number_of_nodes} nodes "
            f"and {self.network.number_of_channels} channels.")


class Parser(object):
    def __init__(self):
        # setup the command line parser
        self.parser = argparse.ArgumentParser(
            prog='lnsimulator',
            description='Lightning network payment routing simulator.')
        self.parser.add_argument(
            '--loglevel', default='INFO', choices=['INFO', 'DEBUG'])
        self.parser.add_argument(
            '--nodes', type=positive_int, default=settings.NUMBER_OF_NODES,
            help='number of nodes of the generated network')
        self.parser.add_argument(
            '--probability', type=probability_float,
            default=settings.CHANNEL_PROBABILITY,
            help='probability that a channel between two nodes is created')
        self.parser.add_argument(
            '--seed', type=int, default=settings.SEED,
            help='seed for the network generation, for reproducible networks')
        subparsers = self.parser.add_subparsers(dest='cmd')

        # cmd: network
        self.parser_network = subparsers.add_parser(
            'network', help='displays statistics of the network',
            formatter_class=argparse.ArgumentDefaultsHelpFormatter)
        self.parser_network.add_argument(
            '--json', action='store_true',
            help='print all nodes and channels as json')

        # cmd: listchannels
        self.parser_listchannels = subparsers.add_parser(
            'listchannels', help='lists the channels of the network',
            formatter_class=argparse.ArgumentDefaultsHelpFormatter)
        self.parser_listchannels.add_argument(
            '--sort-by', default='rev_cid', type=str,
            help="sort by column [abbreviation, e.g. 'cap', "
                 "prefix 'rev_' for ascending order]")

        # cmd: route
        self.parser_route = subparsers.add_parser(
            'route', help='finds a path which can carry an amount',
            formatter_class=argparse.ArgumentDefaultsHelpFormatter)
        self.parser_route.add_argument(
            'source', type=str, help='node label or index')
        self.parser_route.add_argument(
            'target', type=str, help='node label or index')
        self.parser_route.add_argument(
            'amt_sat', type=positive_int, help='amount in satoshis')

        # cmd: pay
        self.parser_pay = subparsers.add_parser(
            'pay', help='simulates a payment between two nodes',
            formatter_class=argparse.ArgumentDefaultsHelpFormatter)
        self.parser_pay.add_argument(
            'sender', type=str, help='node label or index')
        self.parser_pay.add_argument(
            'receiver', type=str, help='node label or index')
        self.parser_pay.add_argument(
            'amt_sat', type=positive_int, help='amount in satoshis')

        # cmd: regenerate
        self.parser_regenerate = subparsers.add_parser(
            'regenerate', help='replaces the network with a new random one '
                               '(interactive mode)')
        self.parser_regenerate.add_argument(
            '--nodes', dest='new_nodes', type=positive_int, default=None,
            help='number of nodes, defaults to the current value')
        self.parser_regenerate.add_argument(
            '--probability', dest='new_probability', type=probability_float,
            default=None,
            help='channel probability, defaults to the current value')

    def parse_arguments(self, args=None):
        return self.parser.parse_args(args)

    def run_commands(self, simulator: Simulator, args):
        # program execution
        if args.loglevel and logger.handlers:
            # update the loglevel of the stdout handler to the user choice
            logger.handlers[0].setLevel(args.loglevel)

        network = simulator.network
        try:
            if args.cmd == 'network':
                if args.json:
                    network_json = json.dumps(network.to_dict(), indent=2)
                    # convert json into color coded characters
                    colorful_json = highlight(
                        network_json,
                        lexers.JsonLexer(),
                        formatters.TerminalFormatter()
                    )
                    logger.info(colorful_json)
                else:
                    NetworkAnalysis(network).print_statistics()

            elif args.cmd == 'listchannels':
                ListChannels(network).print_all_channels(args.sort_by)

            elif args.cmd == 'route':
                source = network.node_by_label(args.source)
                target = network.node_by_label(args.target)
                path = find_path(network, source, target, args.amt_sat)
                logger.info(' -> '.join(network.node_label(n) for n in path))

            elif args.cmd == 'pay':
                sender = network.node_by_label(args.sender)
                receiver = network.node_by_label(args.receiver)
                payment = send_payment(network, sender, receiver, args.amt_sat)
                for node_from, node_to, channel in payment.hops():
                    logger.info(
                        f"{network.node_label(node_from)} -> "
                        f"{network.node_label(node_to)} "
                        f"(capacity: {format_capacity(channel.capacity)})")
                logger.info(payment.summary())

            elif args.cmd == 'regenerate':
                simulator.regenerate(args.new_nodes, args.new_probability)

        except InputValidationError as e:
            logger.error(f"Invalid request: {e}")
            return 1
        except NoRoute as e:
            logger.error(f"No route: {e}")
            return 2
        except ValueError as e:
            logger.error(f"Error: {e}")
            return 1
        return 0


def main():
    logging.config.dictConfig(settings.logger_config)
    parser = Parser()

    # if lnsimulator is run with a command, run once
    args = parser.parse_arguments()
    simulator = Simulator(
        number_of_nodes=args.nodes,
        channel_probability=args.probability,
        seed=args.seed)

    if args.cmd:
        return parser.run_commands(simulator, args)

    # otherwise enter an interactive mode
    logger.info("Running in interactive mode. "
                "You can type 'help' or 'exit'.")

    while True:
        try:
            user_input = input("$ lnsimulator ")
        except KeyboardInterrupt:
            logger.info("")
            continue
        except EOFError:
            logger.info("exit")
            return 0

        if not user_input or user_input in ['help', '-h', '--help']:
            parser.parser.print_help()
            continue
        elif user_input == 'exit':
            return 0

        args_list = user_input.split()
        try:
            args = parser.parse_arguments(args_list)
            parser.run_commands(simulator, args)
        except SystemExit:
            # argparse may raise SystemExit on incorrect user input,
            # which is a graceful exit. The user gets the standard output
            # from argparse of what went wrong.
            continue


if __name__ == '__main__':
    sys.exit(main())
