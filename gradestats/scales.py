"""Mapping scores to distribution buckets."""

import collections
import collections.abc

import pandas as pd


# helper functions =====================================================================


def _check_that_buckets_monotonically_decrease(buckets):
    prev = float("inf")
    for threshold in buckets.values():
        if threshold >= prev:
            raise ValueError("Bucket thresholds are not monotonically decreasing.")
        prev = threshold


def check_buckets(buckets):
    """Verify that a bucket scale is usable.

    Parameters
    ----------
    buckets : OrderedDict
        An ordered mapping from bucket labels to lower thresholds.

    Raises
    ------
    TypeError
        If `buckets` is not a mapping.
    ValueError
        If there are no buckets, or the thresholds are not strictly decreasing.

    """
    if not isinstance(buckets, collections.abc.Mapping):
        raise TypeError("Buckets must be a mapping of labels to thresholds.")

    if not buckets:
        raise ValueError("Buckets cannot be empty.")

    _check_that_buckets_monotonically_decrease(buckets)


# common scales ========================================================================

DEFAULT_BUCKETS = collections.OrderedDict(
    [
        ("excellent", 90),
        ("good", 80),
        ("medium", 70),
        ("pass", 60),
        ("fail", float("-inf")),
    ]
)
"""The default buckets. A score belongs to the first bucket whose threshold it meets."""


# public functions =====================================================================


def map_scores_to_buckets(scores, buckets=None):
    """Map each score to the label of its bucket.

    Buckets are closed below and open above: with the default buckets, a score
    of exactly 90 is ``"excellent"`` while 89.9 is ``"good"``. Scores below
    every threshold fall into the last bucket.

    Parameters
    ----------
    scores : pandas.Series
        A series of numeric scores. No bounds are assumed.
    buckets : OrderedDict
        An ordered mapping from labels to lower thresholds.
        Default: :attr:`DEFAULT_BUCKETS`.

    Returns
    -------
    pandas.Series
        A series of labels with the same index as `scores`.

    Raises
    ------
    ValueError
        If the provided buckets are invalid.

    """
    if buckets is None:
        buckets = DEFAULT_BUCKETS
    else:
        check_buckets(buckets)

    labels = list(buckets)

    def _map(score):
        for label, threshold in buckets.items():
            if score >= threshold:
                return label
        else:
            return labels[-1]

    return pd.Series(scores, dtype=float).apply(_map).astype(object)
