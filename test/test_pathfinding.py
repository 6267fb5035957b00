from unittest import TestCase, mock

import networkx as nx

from lnsimulator.lib.exceptions import InvalidAmount, InvalidNode, NoRoute
from lnsimulator.lib.network import Network, generate_network
from lnsimulator.lib.pathfinding import find_path, is_valid_path, path_channels

from graph_definitions import routing_graph
from testing_common import network_from_definition


class TestFindPath(TestCase):
    def setUp(self):
        self.network = network_from_definition('routing_graph')
        self.line = network_from_definition('line_graph')

    def test_line(self):
        self.assertEqual([0, 1, 2], find_path(self.line, 0, 2, 5_000_000))

    def test_amount_above_all_capacities(self):
        with self.assertRaises(NoRoute):
            find_path(self.line, 0, 2, 20_000_000)

    def test_isolated_node(self):
        for amt_sat in [1, 5_000_000, 10_000_000]:
            with self.assertRaises(NoRoute):
                find_path(self.line, 0, 3, amt_sat)

    def test_capacity_determines_route(self):
        """
        The higher the amount, the more channels drop out, see the drawing in
        graph_definitions.routing_graph.
        """
        self.assertEqual([0, 1, 4], find_path(self.network, 0, 4, 5_000_000))
        self.assertEqual([0, 1, 4], find_path(self.network, 0, 4, 10_000_000))
        self.assertEqual([0, 3, 4], find_path(self.network, 0, 4, 15_000_000))
        self.assertEqual([0, 1, 2, 4], find_path(self.network, 0, 4, 25_000_000))
        self.assertEqual([0, 3, 2, 4], find_path(self.network, 0, 4, 50_000_000))
        with self.assertRaises(NoRoute):
            find_path(self.network, 0, 4, 65_000_000)

    def test_capacity_equal_to_amount_is_eligible(self):
        self.assertEqual([0, 1, 2], find_path(self.line, 0, 2, 10_000_000))
        with self.assertRaises(NoRoute):
            find_path(self.line, 0, 2, 10_000_001)

    def test_reverse_direction(self):
        self.assertEqual([2, 1, 0], find_path(self.line, 2, 0, 5_000_000))
        self.assertEqual([4, 1, 0], find_path(self.network, 4, 0, 5_000_000))

    def test_tie_break_by_channel_order(self):
        # A -> C: A-B-C and A-D-C have two hops, A-B is stored first
        self.assertEqual([0, 1, 2], find_path(self.network, 0, 2, 5_000_000))

        # the same topology with A-D stored before A-B
        reordered_channels = list(routing_graph.channels)
        reordered_channels[0], reordered_channels[1] = \
            reordered_channels[1], reordered_channels[0]
        reordered = Network.from_channels(
            routing_graph.number_of_nodes, reordered_channels)
        self.assertEqual([0, 3, 2], find_path(reordered, 0, 2, 5_000_000))

    def test_source_equals_target(self):
        self.assertEqual([3], find_path(self.line, 3, 3, 5_000_000))

    def test_under_capacity_path_is_discarded(self):
        # an unfiltered graph lets the search reach the target over channels
        # which are too small, the final check on the path must reject it
        with mock.patch.object(
                self.line, 'capacity_eligible_graph', return_value=self.line.graph):
            with self.assertLogs('lnsimulator.lib.pathfinding', level='WARNING') as logs:
                with self.assertRaises(NoRoute):
                    find_path(self.line, 0, 2, 20_000_000)
        self.assertIn('Discarding path [0, 1, 2]', logs.records[0].getMessage())

    def test_under_capacity_path_is_replaced(self):
        with mock.patch.object(
                self.network, 'capacity_eligible_graph', return_value=self.network.graph):
            with self.assertLogs('lnsimulator.lib.pathfinding', level='WARNING') as logs:
                path = find_path(self.network, 0, 4, 15_000_000)
        self.assertEqual([0, 3, 4], path)
        self.assertEqual(1, len(logs.records))
        self.assertIn('Discarding path [0, 1, 4]', logs.records[0].getMessage())

    def test_idempotence(self):
        first = find_path(self.network, 0, 4, 25_000_000)
        second = find_path(self.network, 0, 4, 25_000_000)
        self.assertEqual(first, second)

    def test_invalid_nodes(self):
        for source, target in [(-1, 2), (0, 4), (0, 100), ('0', 2), (0, None)]:
            with self.assertRaises(InvalidNode):
                find_path(self.line, source, target, 5_000_000)

    def test_invalid_amounts(self):
        for amt_sat in [0, -5, 1.5, True, None]:
            with self.assertRaises(InvalidAmount):
                find_path(self.line, 0, 2, amt_sat)

    def test_validation_error_is_no_routing_failure(self):
        with self.assertRaises(InvalidNode) as context:
            find_path(self.line, 0, 7, 5_000_000)
        self.assertNotIsInstance(context.exception, NoRoute)
        self.assertIsInstance(context.exception, ValueError)


class TestPathProperties(TestCase):
    """Compares the breadth first search with networkx on random networks."""

    amounts = [5_000_000, 30_000_000, 75_000_000, 150_000_000]

    def test_soundness_completeness_minimality(self):
        for seed in range(20):
            network = generate_network(8, 0.35, rng=seed)
            for amt_sat in self.amounts:
                eligible_graph = network.capacity_eligible_graph(amt_sat)
                for source in network.nodes:
                    for target in network.nodes:
                        if source == target:
                            continue
                        if not nx.has_path(eligible_graph, source, target):
                            with self.assertRaises(NoRoute):
                                find_path(network, source, target, amt_sat)
                            continue

                        path = find_path(network, source, target, amt_sat)
                        self.assertEqual(source, path[0])
                        self.assertEqual(target, path[-1])
                        self.assertEqual(len(path), len(set(path)))
                        self.assertTrue(is_valid_path(network, path, amt_sat))
                        self.assertEqual(
                            nx.shortest_path_length(eligible_graph, source, target),
                            len(path) - 1)


class TestPathHelpers(TestCase):
    def setUp(self):
        self.network = network_from_definition('routing_graph')

    def test_path_channels(self):
        channels = path_channels(self.network, [0, 3, 2, 4])
        self.assertEqual(
            [(0, 3, 60_000_000), (2, 3, 90_000_000), (2, 4, 70_000_000)],
            [(c.start, c.end, c.capacity) for c in channels])

    def test_path_channels_not_connected(self):
        with self.assertRaises(NoRoute):
            path_channels(self.network, [0, 2])

    def test_is_valid_path(self):
        self.assertTrue(is_valid_path(self.network, [0, 1, 4], 10_000_000))
        self.assertFalse(is_valid_path(self.network, [0, 1, 4], 10_000_001))
        self.assertFalse(is_valid_path(self.network, [0, 2], 1))
        self.assertTrue(is_valid_path(self.network, [0], 1))
