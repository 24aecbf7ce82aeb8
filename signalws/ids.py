"""Random identifiers for peers and lobbies."""

import random

ID_MIN = 100_000
ID_MAX = 999_999


def new_id() -> int:
    """Return a random six-digit identifier between 100000 and 999999.

    Starting at 100000 means an identifier never needs leading zeros.
    """
    return random.randrange(ID_MIN, ID_MAX + 1)