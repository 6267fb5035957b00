"""
Module for printing the channels of a network.
"""
import logging
from typing import Dict, List

from lnsimulator.lib.ln_utilities import format_capacity
from lnsimulator.lib.network import Network
from lnsimulator import settings

logger = logging.getLogger(__name__)
logger.addHandler(logging.NullHandler())


# define printing abbreviations
# convert key can specify a function, which lets one do unit conversions
PRINT_CHANNELS_FORMAT = {
    'cid': {
        'dict_key': 'channel_number',
        'description': 'channel number (creation order)',
        'width': 4,
        'format': '>4',
        'align': '>',
    },
    'start': {
        'dict_key': 'start',
        'description': 'first node of the channel',
        'width': 5,
        'format': '<5',
        'align': '<',
    },
    'end': {
        'dict_key': 'end',
        'description': 'second node of the channel',
        'width': 5,
        'format': '<5',
        'align': '<',
    },
    'cap': {
        'dict_key': 'capacity',
        'description': 'channel capacity [sat]',
        'width': 11,
        'format': '11d',
        'align': '>',
    },
    'fcap': {
        'dict_key': 'capacity',
        'description': 'channel capacity',
        'width': 14,
        'format': '>14',
        'align': '>',
        'convert': lambda x: format_capacity(x),
    },
    'class': {
        'dict_key': 'capacity_class',
        'description': 'channel size (small, medium, large)',
        'width': 6,
        'format': '<6',
        'align': '<',
    },
}

DEFAULT_COLUMNS = 'cid,start,end,cap,fcap,class'


class ListChannels(object):
    """Prints the channels of a network in tabular form."""

    def __init__(self, network: Network):
        self.network = network

    def channel_rows(self) -> List[Dict]:
        return [
            {
                'channel_number': number,
                'start': self.network.node_label(channel.start),
                'end': self.network.node_label(channel.end),
                'capacity': channel.capacity,
                'capacity_class': str(channel.capacity_class),
            } for number, channel in enumerate(self.network.channels)
        ]

    def print_all_channels(self, sort_string='rev_cid'):
        sort_key, reverse_sorting = self._sorting_order(sort_string)
        self._print_channels(
            self.channel_rows(), DEFAULT_COLUMNS,
            sort_dict={
                'function': lambda x: x[sort_key],
                'string': sort_string,
                'reverse': reverse_sorting,
            })

    def _print_channels(self, channels, columns, sort_dict):
        """
        General purpose channel printing.

        :param channels: list of dict
        :param columns: str
        :param sort_dict: dict
        """
        if not channels:
            logger.info(">>> Did not find any channels.")
            return

        channels = sorted(
            channels, key=sort_dict['function'], reverse=sort_dict['reverse'])

        logger.info("Sorting channels by %s.", sort_dict['string'])

        logger.info("-------- Description --------")
        columns = columns.split(',')
        for column in columns:
            logger.info(
                "%-10s %s", column,
                PRINT_CHANNELS_FORMAT[column]['description'])

        logger.info("-------- Channels --------")
        column_header = ''
        for column in columns:
            column_label = PRINT_CHANNELS_FORMAT[column]['align']
            column_width = PRINT_CHANNELS_FORMAT[column]['width']
            column_header += f"{column:{column_label}{column_width}} "

        for channel_number, channel_data in enumerate(channels):
            if not channel_number % settings.TABLE_HEADER_REPEAT:
                logger.info(column_header)
            logger.info(self._row_string(channel_data, columns))

    @staticmethod
    def _row_string(column_values, columns):
        """
        Constructs the formatted row string for table printing.

        :param column_values: dict
        :param columns: list of str
        :return: formatted str
        """
        string = ''
        for column in columns:
            format_string = PRINT_CHANNELS_FORMAT[column]['format']
            conversion_function = PRINT_CHANNELS_FORMAT[column].get(
                'convert', lambda x: x)
            value = column_values[PRINT_CHANNELS_FORMAT[column]['dict_key']]
            converted_value = conversion_function(value)
            string += f"{converted_value:{format_string}} "

        return string

    @staticmethod
    def _sorting_order(sort_string):
        """
        Determines the sorting key and the sorting order.

        If sort_string starts with 'rev_', the sorting order is reversed.

        :param sort_string: str
        :return: (str, bool)
        """
        reverse_sorting = True
        if sort_string[:4] == 'rev_':
            reverse_sorting = False
            sort_string = sort_string[4:]

        try:
            sort_key = PRINT_CHANNELS_FORMAT[sort_string]['dict_key']
        except KeyError:
            raise ValueError(
                f"Unknown sort column '{sort_string}', choose one of "
                f"{', '.join(PRINT_CHANNELS_FORMAT)}.")

        return sort_key, reverse_sorting
