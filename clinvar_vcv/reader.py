"""
Module for iterating over VariationArchive elements in ClinVar VCV XML files
and classifying them.
"""

import logging
from enum import StrEnum
from typing import BinaryIO, Iterator

from lxml import etree

from clinvar_vcv.classifier import VcvClassifier
from clinvar_vcv.element import XmlElement
from clinvar_vcv.model.variation_archive import VcvItem

_logger = logging.getLogger("clinvar_vcv")

RELEASE_TAG = "ClinVarVariationRelease"
VARIATION_ARCHIVE_TAG = "VariationArchive"


class ElementTreeEvent(StrEnum):
    """
    Enum for lxml iterparse events
    """

    START = "start"
    END = "end"


def _iterparse(reader: BinaryIO | str):
    # DTDs are never loaded and entities never resolved. A DOCTYPE is
    # rejected outright by _assert_no_doctype.
    return etree.iterparse(
        reader,
        events=(ElementTreeEvent.START.value, ElementTreeEvent.END.value),
        load_dtd=False,
        resolve_entities=False,
        no_network=True,
        remove_blank_text=True,
        huge_tree=True,
    )


def _localname(elem) -> str:
    return etree.QName(elem).localname


def _assert_no_doctype(elem):
    doctype = elem.getroottree().docinfo.doctype
    if doctype:
        raise ValueError(f"DTD processing is prohibited, found: {doctype}")


def get_clinvar_vcv_xml_releaseinfo(reader: BinaryIO | str) -> dict:
    """
    Parses top level release info from file.
    Returns dict with {"release_date"} key.
    """
    release_date = None
    for event, elem in _iterparse(reader):
        if event == ElementTreeEvent.START and _localname(elem) == RELEASE_TAG:
            _assert_no_doctype(elem)
            release_date = elem.get("ReleaseDate")
        break
    if release_date is None:
        raise ValueError(f"Root element {RELEASE_TAG} not found!")
    return {"release_date": release_date}


def read_vcv_elements(reader: BinaryIO | str) -> Iterator[XmlElement]:
    """
    Generator function that yields each VariationArchive directly under the
    root element, in document order. Only one record subtree is held in
    memory at a time.

    Accepts `reader` as a readable binary file object, or a filename.
    """
    unclosed = 0
    for event, elem in _iterparse(reader):
        # Sanity checks to make sure we only parse at the correct depth.
        # For depth=1 (first level inside the root, unclosed should == 1)
        if event == ElementTreeEvent.START:
            unclosed += 1
            if unclosed == 1:
                _assert_no_doctype(elem)
                if _localname(elem) == RELEASE_TAG:
                    _logger.info(f"Parsing release date: {elem.get('ReleaseDate')}")
            continue

        unclosed -= 1
        if _localname(elem) != VARIATION_ARCHIVE_TAG:
            continue
        if unclosed != 1:
            _logger.warning(
                f"Found a VariationArchive at a depth other than 1:"
                f" {unclosed}, accession: {elem.get('Accession')}"
            )
            elem.clear()
            continue

        yield XmlElement.from_xml(etree.tostring(elem, with_tail=False))

        # Drop the finished record and anything before it
        elem.clear()
        while elem.getprevious() is not None:
            del elem.getparent()[0]


def read_vcv_items(
    reader: BinaryIO | str, classifier: VcvClassifier | None = None
) -> Iterator[VcvItem]:
    """
    Generator function that reads a ClinVar VCV XML file and outputs a VcvItem
    per VariationArchive. Empty VariationArchive elements are skipped.
    """
    classifier = classifier or VcvClassifier()
    for element in read_vcv_elements(reader):
        item = classifier.classify(element)
        if item is None:
            _logger.debug(f"Skipping empty VariationArchive: {element.attribute('Accession')}")
            continue
        yield item
