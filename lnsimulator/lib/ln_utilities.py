"""Contains Lightning network specific conversion utilities."""
import re
from decimal import Decimal, ROUND_HALF_UP

from lnsimulator.lib.data_types import CapacityClass
from lnsimulator.lib.exceptions import InvalidNode

import logging
logger = logging.getLogger(__name__)
logger.addHandler(logging.NullHandler())

SAT_PER_BTC = 100_000_000
MILLION_SAT = 1_000_000

# upper bounds (exclusive) of the capacity classes
SMALL_CHANNEL_CEIL_SAT = 20_000_000
MEDIUM_CHANNEL_CEIL_SAT = 50_000_000

NUMBER_OF_LETTERS = 26


def classify_capacity(capacity: int) -> CapacityClass:
    """Sorts a channel capacity into one of the capacity classes.

    :param capacity: channel capacity in sat
    :return: small, medium or large
    """
    if capacity < SMALL_CHANNEL_CEIL_SAT:
        return CapacityClass.SMALL
    if capacity < MEDIUM_CHANNEL_CEIL_SAT:
        return CapacityClass.MEDIUM
    return CapacityClass.LARGE


def _round_cents(amt_sat: int, unit: int) -> Decimal:
    # halves are rounded up
    return (Decimal(amt_sat) / unit).quantize(Decimal('0.01'), rounding=ROUND_HALF_UP)


def format_capacity(amt_sat: int) -> str:
    """Formats an amount in sat for display, either in BTC or in millions of
    sat.

    >>> format_capacity(250_000_000)
    '2.50 BTC'
    >>> format_capacity(15_000_000)
    '15.00m sats'
    """
    if amt_sat >= SAT_PER_BTC:
        return f"{_round_cents(amt_sat, SAT_PER_BTC)} BTC"
    return f"{_round_cents(amt_sat, MILLION_SAT)}m sats"


def node_label(node: int) -> str:
    """Derives the display label of a node from its index.

    The first 26 nodes are labeled A to Z, afterwards the letters repeat with
    the round number appended (A1, B1, ..., Z1, A2, ...).
    """
    letter = chr(ord('A') + node % NUMBER_OF_LETTERS)
    if node >= NUMBER_OF_LETTERS:
        return letter + str(node // NUMBER_OF_LETTERS)
    return letter


def node_from_label(label: str) -> int:
    """Parses a node label or a plain node index and gives back the node index.

    If the label can't be interpreted, an InvalidNode error is raised.

    :param label: e.g. 'C', 'B1' or '27'
    :return: node index
    """
    label = str(label).strip()
    if re.fullmatch(r'[0-9]+', label):
        return int(label)

    match = re.fullmatch(r'([A-Za-z])([1-9][0-9]*)?', label)
    if match is None:
        raise InvalidNode(f"'{label}' is neither a node label nor an index.")
    letter, round_number = match.groups()
    index = ord(letter.upper()) - ord('A')
    if round_number:
        index += int(round_number) * NUMBER_OF_LETTERS
    logger.debug("Node label %s represents node %s.", label, index)
    return index
