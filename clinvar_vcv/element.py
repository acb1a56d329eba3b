"""
Read-only view over one XML element parsed by xmltodict.

xmltodict turns a record into nested dicts: attributes are stored under
"@Name" keys, text under "$" (see `_handle_text_nodes`), and child elements
under their tag name. A tag that occurs once maps to a dict (or None for an
empty element such as <Foo/>), a repeated tag maps to a list.
"""

from __future__ import annotations

from typing import Any, Tuple

import xmltodict

from clinvar_vcv.utils import ensure_list

TEXT_KEY = "$"
ATTRIBUTE_PREFIX = "@"


def _handle_text_nodes(path, key, value) -> Tuple[Any, Any]:
    """
    Takes a path, key, value, returns a tuple of new (key, value)

    If the value looks like an XML text node, put it in a key "$".

    Used as a postprocessor for xmltodict.parse.
    """
    if isinstance(value, str) and not key.startswith(ATTRIBUTE_PREFIX):
        if key == "#text":
            return (TEXT_KEY, value)
        else:
            return (key, {TEXT_KEY: value})
    return (key, value)


def _parse_xml_document(doc_str: str | bytes):
    """
    Reads an XML document from a string.

    Entities are not expanded (disable_entities).
    """
    return xmltodict.parse(
        doc_str, postprocessor=_handle_text_nodes, disable_entities=True
    )


class XmlElement:
    __slots__ = ("tag_name", "_content")

    def __init__(self, tag_name: str, content: dict | str | None):
        if isinstance(content, str):
            content = {TEXT_KEY: content}
        self.tag_name = tag_name
        self._content: dict = content or {}

    @staticmethod
    def from_xml(doc: str | bytes) -> XmlElement:
        parsed = _parse_xml_document(doc)
        if not isinstance(parsed, dict):
            raise RuntimeError(f"xmltodict returned non-dict type: ({type(parsed)}) {parsed}")
        if len(parsed.keys()) != 1:
            raise RuntimeError(f"parsed dict had more than 1 key: ({parsed.keys()}) {parsed}")
        tag, content = list(parsed.items())[0]
        return XmlElement(tag, content)

    def attribute(self, name: str) -> str | None:
        return self._content.get(ATTRIBUTE_PREFIX + name)

    def children(self, name: str) -> list[XmlElement]:
        if name not in self._content:
            return []
        return [XmlElement(name, c) for c in ensure_list(self._content[name])]

    def child(self, name: str) -> XmlElement | None:
        children = self.children(name)
        return children[0] if children else None

    def child_names(self) -> list[str]:
        return [
            k
            for k in self._content
            if k != TEXT_KEY and not k.startswith(ATTRIBUTE_PREFIX)
        ]

    @property
    def text_value(self) -> str | None:
        text = self._content.get(TEXT_KEY)
        if text is None or not text.strip():
            return None
        return text

    @property
    def is_empty(self) -> bool:
        """
        True when there are no child elements and no text. Attributes are not
        content: ClinVar emits placeholder records like <IncludedRecord/>.
        """
        return not self.child_names() and self.text_value is None

    def child_text(self, name: str) -> str | None:
        child = self.child(name)
        return child.text_value if child is not None else None

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}({self.tag_name!r}, {self._content!r})"
