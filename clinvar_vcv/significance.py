"""
Controlled vocabularies for VCV records.

`get_significances` turns free text from Description/Explanation elements
into candidate significance terms. It does not validate them; the classifier
checks every term against VALID_SIGNIFICANCES.
"""

import re
from types import MappingProxyType
from typing import Mapping

from clinvar_vcv.model.review_status import ReviewStatus

REVIEW_STATUS_NAMES: Mapping[str, ReviewStatus] = MappingProxyType(
    {
        "no assertion provided": ReviewStatus.no_assertion,
        "no classification provided": ReviewStatus.no_assertion,
        "no interpretation for the single variant": ReviewStatus.no_assertion,
        "no classification for the single variant": ReviewStatus.no_assertion,
        "no classifications from unflagged records": ReviewStatus.no_assertion,
        "no assertion criteria provided": ReviewStatus.no_criteria,
        "criteria provided, single submitter": ReviewStatus.single_submitter,
        "criteria provided, conflicting interpretations": ReviewStatus.conflicting_interpretations,
        "criteria provided, conflicting classifications": ReviewStatus.conflicting_interpretations,
        "criteria provided, multiple submitters": ReviewStatus.multiple_submitters,
        "criteria provided, multiple submitters, no conflicts": ReviewStatus.multiple_submitters_no_conflict,
        "reviewed by expert panel": ReviewStatus.expert_panel,
        "practice guideline": ReviewStatus.practice_guideline,
    }
)

CONFLICTING_SIGNIFICANCES = frozenset(
    [
        "conflicting interpretations of pathogenicity",
        "conflicting classifications of pathogenicity",
        "conflicting classifications of oncogenicity",
        "conflicting data from submitters",
    ]
)

VALID_SIGNIFICANCES = frozenset(
    [
        # germline
        "benign",
        "likely benign",
        "uncertain significance",
        "likely pathogenic",
        "pathogenic",
        "low penetrance",
        "established risk allele",
        "likely risk allele",
        "uncertain risk allele",
        "drug response",
        "association",
        "association not found",
        "risk factor",
        "protective",
        "affects",
        "confers sensitivity",
        "histocompatibility",
        "other",
        "not provided",
        # legacy submitter wording
        "no known pathogenicity",
        "non-pathogenic",
        "probable-non-pathogenic",
        "probably not pathogenic",
        "probable-pathogenic",
        "probably pathogenic",
        "pathologic",
        "suspected benign",
        "variant of unknown significance",
        "unknown",
        "untested",
        # oncogenicity
        "oncogenic",
        "likely oncogenic",
        # somatic clinical impact
        "tier i - strong",
        "tier ii - potential",
        "tier iii - unknown",
        "tier iv - benign/likely benign",
        # placeholders on records without an aggregate classification
        "no classification for the single variant",
        "no classifications from unflagged records",
        "no classification provided",
        "no interpretation for the single variant",
    ]
).union(CONFLICTING_SIGNIFICANCES)

_TERM_SEPARATORS = re.compile(r"[/,;]")
# "Pathogenic(1)" in "Pathogenic(1); Uncertain significance(2)"
_SUBMISSION_COUNT = re.compile(r"\s*\(\d+\)$")


def _normalize(term: str) -> str:
    return term.strip().lower().replace("_", " ")


def _split_terms(text: str) -> list[str]:
    """
    Splits a description into terms, unless the whole description is a
    known term. Some terms contain a separator ("tier iv - benign/likely benign").

    Example:
        >>> _split_terms("Pathogenic/Likely pathogenic")
        ['pathogenic', 'likely pathogenic']
        >>> _split_terms("Pathogenic, low penetrance")
        ['pathogenic', 'low penetrance']
        >>> _split_terms("Tier IV - Benign/Likely benign")
        ['tier iv - benign/likely benign']
    """
    text = _normalize(text)
    if not text:
        return []
    if text in VALID_SIGNIFICANCES:
        return [text]
    return [t for t in (_normalize(p) for p in _TERM_SEPARATORS.split(text)) if t]


def _explanation_terms(explanation: str) -> list[str]:
    """
    Example:
        >>> _explanation_terms("Pathogenic(1); Uncertain significance(2)")
        ['pathogenic', 'uncertain significance']
    """
    terms = []
    for part in explanation.split(";"):
        terms.extend(_split_terms(_SUBMISSION_COUNT.sub("", part.strip())))
    return terms


def get_significances(description: str | None, explanation: str | None) -> list[str]:
    """
    Returns the candidate significance terms for a description and optional
    explanation, in order of appearance and without duplicates.

    The explanation is only consulted when the description is a conflicting
    summary (or absent), since it then lists the underlying classifications.
    """
    terms = _split_terms(description) if description else []
    if explanation and (
        not terms or any(t in CONFLICTING_SIGNIFICANCES for t in terms)
    ):
        terms.extend(_explanation_terms(explanation))
    return list(dict.fromkeys(terms))
