"""Pure statistical building blocks used by the aggregation engine."""

import collections.abc
import typing

import numpy as np
import pandas as pd

from .core import Course
from .scales import DEFAULT_BUCKETS, map_scores_to_buckets


def _as_series(scores) -> pd.Series:
    if isinstance(scores, pd.Series):
        return scores.astype(float)
    if isinstance(scores, collections.abc.Mapping):
        return pd.Series(dict(scores), dtype=float)
    return pd.Series(list(scores), dtype=float)


def _finite_or_none(x) -> typing.Optional[float]:
    x = float(x)
    if not np.isfinite(x):
        return None
    return x


def resolve_courses(grades, catalog):
    """Join a student's grades against the course catalog.

    Parameters
    ----------
    grades : Mapping[str, float]
        Course ids mapped to scores.
    catalog : CourseCatalog
        Used to look up each course.

    Returns
    -------
    resolved : list[tuple[Course, float]]
        Courses found in the catalog along with their scores, in the order of
        `grades`.
    unresolved : list[str]
        Ids of courses the catalog does not know. These are excluded, not
        reported as errors, since their credit is unknown.

    """
    resolved: typing.List[typing.Tuple[Course, float]] = []
    unresolved: typing.List[str] = []
    for course_id, score in grades.items():
        course = catalog.lookup(course_id)
        if course is None:
            unresolved.append(course_id)
        else:
            resolved.append((course, score))
    return resolved, unresolved


def weighted_mean(scores, credits) -> typing.Optional[float]:
    """The credit-weighted mean of `scores`.

    Returns `None` when there is nothing to average or the credits sum to
    zero, instead of propagating a NaN or an infinity.

    """
    scores = np.asarray(scores, dtype=float)
    credits = np.asarray(credits, dtype=float)

    if len(scores) == 0:
        return None

    total_credit = credits.sum()
    if total_credit == 0 or not np.isfinite(total_credit):
        return None

    return _finite_or_none(np.dot(scores, credits) / total_credit)


def weighted_gpa(grades, catalog) -> typing.Optional[float]:
    """Compute a student's GPA.

    The GPA is ``sum(score * credit) / sum(credit)`` over every graded course
    found in the catalog. Courses missing from the catalog are skipped.

    Parameters
    ----------
    grades : Mapping[str, float]
        Course ids mapped to scores.
    catalog : CourseCatalog
        Supplies the credit of each course.

    Returns
    -------
    Optional[float]
        The GPA, or `None` if `grades` is empty or no credit could be counted.

    Example
    -------
    >>> weighted_gpa({"A": 90, "B": 80}, catalog)  # A: 3 credits, B: 2 credits
    86.0

    """
    resolved, _ = resolve_courses(grades, catalog)
    return weighted_mean(
        [score for _, score in resolved], [course.credit for course, _ in resolved]
    )


def rank(scores) -> pd.Series:
    """The rank of each student according to score.

    Parameters
    ----------
    scores : Mapping[str, float] or pd.Series
        Scores keyed by student id.

    Returns
    -------
    pd.Series
        The integer rank of each student, ordered from best to worst. Students
        with equal scores keep their relative order from `scores` and receive
        consecutive ranks.

    """
    sorted_scores = _as_series(scores).sort_values(ascending=False, kind="mergesort")
    return pd.Series(
        np.arange(1, len(sorted_scores) + 1), index=sorted_scores.index, name="rank"
    )


def average(scores) -> typing.Optional[float]:
    """The unweighted mean of the scores, or `None` if there are none."""
    scores = _as_series(scores)
    if len(scores) == 0:
        return None
    return _finite_or_none(scores.mean())


def distribution(scores, buckets=None) -> typing.Dict[str, int]:
    """Counts the number of scores in each bucket.

    Parameters
    ----------
    scores : Mapping[str, float] or pd.Series
        The scores.
    buckets : OrderedDict
        Labels mapped to lower thresholds. Default:
        :attr:`gradestats.scales.DEFAULT_BUCKETS`.

    Returns
    -------
    dict[str, int]
        The count of each bucket, from highest to lowest. Every bucket is
        present, and the counts add up to the number of scores.

    """
    if buckets is None:
        buckets = DEFAULT_BUCKETS

    labels = map_scores_to_buckets(_as_series(scores), buckets)
    counts = labels.value_counts().reindex(list(buckets), fill_value=0)
    return {label: int(count) for label, count in counts.items()}
