"""
Data model for VariationArchive records in ClinVar VCV XML files.
"""

from __future__ import annotations

import dataclasses
import logging
from enum import StrEnum
from typing import Callable

from clinvar_vcv.element import XmlElement
from clinvar_vcv.exceptions import AmbiguousRecordError, MissingFieldError
from clinvar_vcv.model.review_status import ReviewStatus

_logger = logging.getLogger("clinvar_vcv")


class StatementType(StrEnum):
    """
    Typed classification kinds found under a Classifications element.
    Declaration order is the order kinds are combined in.
    """

    GermlineClassification = "GermlineClassification"
    OncogenicityClassification = "OncogenicityClassification"
    SomaticClinicalImpact = "SomaticClinicalImpact"

    @property
    def label(self) -> str:
        return _STATEMENT_TYPE_LABELS[self]


_STATEMENT_TYPE_LABELS = {
    StatementType.GermlineClassification: "germline",
    StatementType.OncogenicityClassification: "oncogenicity",
    StatementType.SomaticClinicalImpact: "somatic",
}

NO_CLASSIFICATION_TAG = "NoClassification"


class RecordType(StrEnum):
    """
    The three mutually exclusive record shapes under a VariationArchive.

    ClassifiedRecord is the current (VCV 2.x) shape. InterpretedRecord is the
    pre-2024 shape. IncludedRecord exists in both, and from VCV 2.5 on may
    carry a Classifications element like ClassifiedRecord does.
    """

    ClassifiedRecord = "ClassifiedRecord"
    InterpretedRecord = "InterpretedRecord"
    IncludedRecord = "IncludedRecord"


@dataclasses.dataclass(frozen=True)
class ClassificationEntry:
    statement_type: StatementType | None
    review_status: str | None
    description: str | None

    @property
    def label(self) -> str:
        if self.statement_type is None:
            return "no"
        return self.statement_type.label

    @staticmethod
    def from_xml(inp: XmlElement, statement_type: StatementType | None):
        """
        <GermlineClassification DateLastEvaluated="2010-06-29" NumberOfSubmissions="2">
            <ReviewStatus>criteria provided, single submitter</ReviewStatus>
            <Description>Pathogenic</Description>
        </GermlineClassification>
        """
        return ClassificationEntry(
            statement_type=statement_type,
            review_status=inp.child_text("ReviewStatus"),
            description=inp.child_text("Description"),
        )

    @staticmethod
    def list_from_xml(classifications: XmlElement) -> list[ClassificationEntry]:
        """
        Returns the non-empty typed classifications in StatementType order.
        NoClassification is not included.
        """
        outputs = []
        for statement_type in StatementType:
            element = classifications.child(statement_type.value)
            if element is not None and not element.is_empty:
                outputs.append(ClassificationEntry.from_xml(element, statement_type))
        return outputs


@dataclasses.dataclass(frozen=True)
class RawRecord:
    accession: str
    version: str
    date: int
    record_type: RecordType
    record: XmlElement

    @property
    def label(self) -> str:
        return f"{self.accession}.{self.version}"

    @staticmethod
    def from_xml(inp: XmlElement, parse_date: Callable[[str | None], int]) -> RawRecord:
        accession = inp.attribute("Accession")
        version = inp.attribute("Version")
        if accession is None or version is None:
            raise MissingFieldError(
                f"VariationArchive is missing Accession or Version: {accession}.{version}",
                accession,
                version,
            )
        date = parse_date(inp.attribute("DateLastUpdated"))

        # Placeholder records (<IncludedRecord/>) count as absent
        populated = []
        for record_type in RecordType:
            element = inp.child(record_type.value)
            if element is not None and not element.is_empty:
                populated.append((record_type, element))
        if len(populated) != 1:
            raise AmbiguousRecordError(
                "Exactly one of ClassifiedRecord/InterpretedRecord/IncludedRecord"
                f" should be present for {accession}",
                accession,
                version,
            )
        record_type, record = populated[0]
        _logger.debug(f"RawRecord.from_xml: {accession}.{version} {record_type=}")
        return RawRecord(
            accession=accession,
            version=version,
            date=date,
            record_type=record_type,
            record=record,
        )


@dataclasses.dataclass(frozen=True)
class VcvItem:
    accession: str
    version: str
    date: int
    review_status: ReviewStatus
    # None means no opinion was found. The InterpretedRecord path may
    # produce an empty tuple instead, and that difference is kept.
    significances: tuple[str, ...] | None

    def to_dict(self) -> dict:
        return {
            "accession": self.accession,
            "version": self.version,
            "date": self.date,
            "review_status": self.review_status.name,
            "significances": (
                list(self.significances) if self.significances is not None else None
            ),
        }
