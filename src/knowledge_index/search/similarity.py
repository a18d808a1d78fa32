"""
String similarity rating based on the Sørensen–Dice coefficient.

Strings are compared as multisets of character bigrams after all whitespace
is removed. The comparison is case-sensitive.
"""

import re
from collections import Counter
from collections.abc import Iterable

_WHITESPACE = re.compile(r"\s+")


def compare_two_strings(first: str, second: str) -> float:
    """
    Rate the similarity of two strings between 0.0 and 1.0.

    Identical strings (ignoring whitespace) rate 1.0; a string shorter than
    two characters has no bigrams and rates 0.0 against anything else.
    """
    first = _WHITESPACE.sub("", first)
    second = _WHITESPACE.sub("", second)

    if first == second:
        return 1.0
    if len(first) < 2 or len(second) < 2:
        return 0.0

    first_bigrams = Counter(first[i : i + 2] for i in range(len(first) - 1))

    intersection_size = 0
    for i in range(len(second) - 1):
        bigram = second[i : i + 2]
        if first_bigrams[bigram] > 0:
            first_bigrams[bigram] -= 1
            intersection_size += 1

    return (2.0 * intersection_size) / (len(first) + len(second) - 2)


def rate_all(main: str, targets: Iterable[str]) -> list[float]:
    """Rate ``main`` against every target, preserving target order."""
    return [compare_two_strings(main, target) for target in targets]
