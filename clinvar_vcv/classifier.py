"""
Classifies VariationArchive elements into VcvItems.

A VariationArchive holds exactly one of three record shapes (see RecordType).
Current records keep per-kind classifications under a Classifications
element; older records keep a single ReviewStatus and a list of
Interpretations. Both are reduced to one review status and a list of
significance terms from the controlled vocabulary.
"""

import functools
import logging
from types import MappingProxyType
from typing import Callable, Iterable, Mapping

from pydantic import BaseModel, ConfigDict, field_validator

from clinvar_vcv.dates import parse_date
from clinvar_vcv.element import XmlElement
from clinvar_vcv.exceptions import (
    InvalidSignificanceError,
    MissingFieldError,
    UnmappedReviewStatusError,
    UnrecognizedClassificationError,
)
from clinvar_vcv.model.review_status import ReviewStatus, highest
from clinvar_vcv.model.variation_archive import (
    NO_CLASSIFICATION_TAG,
    ClassificationEntry,
    RawRecord,
    RecordType,
    VcvItem,
)
from clinvar_vcv.significance import (
    REVIEW_STATUS_NAMES,
    VALID_SIGNIFICANCES,
    get_significances,
)

_logger = logging.getLogger("clinvar_vcv")

CLINICAL_SIGNIFICANCE_TYPE = "Clinical significance"

Matcher = Callable[[str | None, str | None], Iterable[str]]
DateParser = Callable[[str | None], int]


class ClassifierTables(BaseModel):
    """
    Lookup tables used by the classifier. Loaded once and shared.
    """

    model_config = ConfigDict(frozen=True)

    review_status_names: Mapping[str, ReviewStatus]
    valid_significances: frozenset[str]

    @field_validator("review_status_names")
    @classmethod
    def _read_only_review_status_names(cls, v, _info):
        # pydantic hands back a plain dict
        return MappingProxyType(dict(v))


@functools.cache
def default_tables() -> ClassifierTables:
    return ClassifierTables(
        review_status_names=REVIEW_STATUS_NAMES,
        valid_significances=VALID_SIGNIFICANCES,
    )


class VcvClassifier:
    def __init__(
        self,
        tables: ClassifierTables | None = None,
        matcher: Matcher = get_significances,
        date_parser: DateParser = parse_date,
    ):
        self.tables = tables or default_tables()
        self.matcher = matcher
        self.date_parser = date_parser

    def classify(self, element: XmlElement | None) -> VcvItem | None:
        """
        Returns the VcvItem for a VariationArchive element, or None when the
        element is absent or empty. Any schema violation raises a VcvRecordError.
        """
        if element is None or element.is_empty:
            return None

        raw = RawRecord.from_xml(element, self.date_parser)
        match raw.record_type:
            case RecordType.ClassifiedRecord:
                return self._from_classifications(raw)
            case RecordType.InterpretedRecord:
                return self._from_interpretations(raw)
            case RecordType.IncludedRecord:
                # VCV 2.5 IncludedRecords may have the ClassifiedRecord layout
                classifications = raw.record.child("Classifications")
                if classifications is not None and not classifications.is_empty:
                    return self._from_classifications(raw)
                return self._from_interpretations(raw)
            case _:
                raise ValueError(f"Unknown record type: {raw.record_type}")

    def review_status(self, review_status: str, raw: RawRecord) -> ReviewStatus:
        try:
            return self.tables.review_status_names[review_status]
        except KeyError as e:
            raise UnmappedReviewStatusError(
                f"Unmapped review status '{review_status}' for {raw.label}",
                raw.accession,
                raw.version,
            ) from e

    def validate_significances(self, terms: Iterable[str], raw: RawRecord) -> list[str]:
        outputs = []
        for term in terms:
            if term not in self.tables.valid_significances:
                raise InvalidSignificanceError(
                    f"Invalid clinical significance found. Observed: {term} ({raw.label})",
                    raw.accession,
                    raw.version,
                )
            outputs.append(term)
        return outputs

    def classified_significances(
        self, description: str | None, raw: RawRecord
    ) -> tuple[str, ...] | None:
        """
        Terms for one classification's Description. None when the description
        is missing or yields no terms, never an empty tuple.
        """
        if not description:
            return None
        terms = self.validate_significances(self.matcher(description.lower(), None), raw)
        return tuple(terms) if terms else None

    def interpreted_significances(
        self, interpretations: XmlElement | None, raw: RawRecord
    ) -> tuple[str, ...] | None:
        """
        Terms from the "Clinical significance" entries of an Interpretations
        element. Unlike classified_significances the result may be empty.
        """
        if interpretations is None or interpretations.is_empty:
            return None

        outputs = []
        for interpretation in interpretations.children("Interpretation"):
            if interpretation.attribute("Type") != CLINICAL_SIGNIFICANCE_TYPE:
                continue
            description = interpretation.child_text("Description")
            explanation = interpretation.child_text("Explanation")
            if description is None and explanation is None:
                continue
            terms = self.matcher(
                description.lower() if description is not None else None,
                explanation.lower() if explanation is not None else None,
            )
            outputs.extend(self.validate_significances(terms, raw))
        return tuple(outputs)

    def _from_classifications(self, raw: RawRecord) -> VcvItem:
        classifications = raw.record.child("Classifications")
        if classifications is None or classifications.is_empty:
            raise MissingFieldError(
                f"No Classifications element found for {raw.label}",
                raw.accession,
                raw.version,
            )

        entries = ClassificationEntry.list_from_xml(classifications)
        if len(entries) >= 2:
            return self._resolve_multiple(raw, entries)
        if len(entries) == 1:
            return self._resolve_single(raw, entries[0])

        # Evidence-only records
        no_classification = classifications.child(NO_CLASSIFICATION_TAG)
        if no_classification is not None and not no_classification.is_empty:
            return self._resolve_single(
                raw, ClassificationEntry.from_xml(no_classification, None)
            )

        raise UnrecognizedClassificationError(
            f"No recognized classification type found for {raw.label}",
            raw.accession,
            raw.version,
        )

    def _resolve_single(self, raw: RawRecord, entry: ClassificationEntry) -> VcvItem:
        _logger.debug(f"{raw.label}: {entry.label} classification")
        if entry.review_status is None:
            raise MissingFieldError(
                f"No review status provided for {raw.label}",
                raw.accession,
                raw.version,
            )
        return VcvItem(
            accession=raw.accession,
            version=raw.version,
            date=raw.date,
            review_status=self.review_status(entry.review_status, raw),
            significances=self.classified_significances(entry.description, raw),
        )

    def _resolve_multiple(
        self, raw: RawRecord, entries: list[ClassificationEntry]
    ) -> VcvItem:
        _logger.debug(f"{raw.label}: {[e.label for e in entries]} classifications")
        statuses = []
        combined = []
        for entry in entries:
            if entry.review_status is None:
                raise MissingFieldError(
                    f"No review status provided for {entry.label}"
                    f" classification in {raw.label}",
                    raw.accession,
                    raw.version,
                )
            statuses.append(self.review_status(entry.review_status, raw))
            significances = self.classified_significances(entry.description, raw)
            if significances:
                combined.extend(significances)

        return VcvItem(
            accession=raw.accession,
            version=raw.version,
            date=raw.date,
            review_status=highest(statuses),
            significances=tuple(combined) if combined else None,
        )

    def _from_interpretations(self, raw: RawRecord) -> VcvItem:
        _logger.debug(f"{raw.label}: {raw.record_type} interpretations")
        significances = self.interpreted_significances(
            raw.record.child("Interpretations"), raw
        )
        review_status = raw.record.child_text("ReviewStatus")
        if review_status is None:
            raise MissingFieldError(
                f"No review status provided for {raw.label}",
                raw.accession,
                raw.version,
            )
        return VcvItem(
            accession=raw.accession,
            version=raw.version,
            date=raw.date,
            review_status=self.review_status(review_status, raw),
            significances=significances,
        )


def classify(element: XmlElement | None) -> VcvItem | None:
    return VcvClassifier().classify(element)
