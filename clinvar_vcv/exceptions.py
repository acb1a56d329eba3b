"""
Errors raised while classifying VariationArchive records.

All of them are fatal for the whole stream. They carry the accession and
version of the offending record so the caller can report it.
"""


class VcvRecordError(ValueError):
    def __init__(self, message: str, accession: str | None = None, version: str | None = None):
        super().__init__(message)
        self.message = message
        self.accession = accession
        self.version = version

    def __str__(self) -> str:
        return self.message


class AmbiguousRecordError(VcvRecordError):
    """
    Raised when a VariationArchive does not have exactly one populated
    ClassifiedRecord, InterpretedRecord or IncludedRecord.
    """


class MissingFieldError(VcvRecordError):
    """
    Raised when a required element (Classifications, ReviewStatus) or
    attribute (Accession, Version) is absent.
    """


class UnrecognizedClassificationError(VcvRecordError):
    """
    Raised when a Classifications element holds none of the known
    classification types.
    """


class InvalidSignificanceError(VcvRecordError):
    pass


class UnmappedReviewStatusError(VcvRecordError, KeyError):
    pass
