from enum import IntEnum
from typing import Iterable


class ReviewStatus(IntEnum):
    """
    Aggregate review status of a VCV, ordered from least to most confident.
    """

    no_assertion = 0
    no_criteria = 1
    single_submitter = 2
    conflicting_interpretations = 3
    multiple_submitters = 4
    multiple_submitters_no_conflict = 5
    expert_panel = 6
    practice_guideline = 7


def higher(a: ReviewStatus, b: ReviewStatus) -> ReviewStatus:
    return a if a > b else b


def highest(statuses: Iterable[ReviewStatus]) -> ReviewStatus:
    """
    Returns the most confident status. An empty input gives no_assertion.

    Example:
        >>> highest([ReviewStatus.single_submitter, ReviewStatus.expert_panel])
        <ReviewStatus.expert_panel: 6>
        >>> highest([])
        <ReviewStatus.no_assertion: 0>
    """
    result = ReviewStatus.no_assertion
    for status in statuses:
        result = higher(result, status)
    return result
