"""
Translation XML post-processing.

This module turns a downloaded PoEditor android_strings export into one
Android resources document per qualifier:
- Parsing the raw XML
- Formatting translations (placeholders, percent escaping)
- Splitting entries into qualifier documents by key pattern
"""

import copy
import re
from dataclasses import dataclass
from typing import Dict, Iterator, Optional, Sequence

from lxml import etree

from poeditor_importer.config import TABLET_QUALIFIER, TABLET_REGEX_STRING
from poeditor_importer.exceptions import ParseError
from poeditor_importer.logger import get_logger
from poeditor_importer.resources.formatter import format_translation_xml

logger = get_logger(__name__)

RESOURCES_TAG = "resources"
DEFAULT_QUALIFIER = ""

# Qualifier name -> <resources> root of that partition
PartitionedDocumentMap = Dict[str, etree._Element]


@dataclass(frozen=True)
class QualifierPattern:
    """Entries whose key matches regex are moved to the qualifier's document, minus the matched text."""
    regex: str
    qualifier: str

    def match(self, key: str) -> Optional[str]:
        """Return the key with the matched text removed, or None if the key does not match."""
        found = re.search(self.regex, key)
        if not found:
            return None
        stripped = key[:found.start()] + key[found.end():]
        return stripped or None


TABLET_QUALIFIER_PATTERN = QualifierPattern(regex=TABLET_REGEX_STRING, qualifier=TABLET_QUALIFIER)


def parse_resources_xml(xml_text: str) -> etree._Element:
    """
    Parse Android resources XML text.

    Raises:
        ParseError: If the text is not well-formed or the root is not <resources>
    """
    parser = etree.XMLParser(
        remove_blank_text=False,
        strip_cdata=False,
        resolve_entities=False,
        no_network=True,
    )
    try:
        root = etree.fromstring(xml_text.encode('utf-8'), parser)
    except (etree.XMLSyntaxError, ValueError) as e:
        raise ParseError(f"Malformed translation XML: {e}", code="malformed_xml") from e

    if root.tag != RESOURCES_TAG:
        raise ParseError(f"Unexpected root element <{root.tag}>, expected <{RESOURCES_TAG}>",
                         code="malformed_xml", details={"root": root.tag})
    return root


def iter_entries(root: etree._Element) -> Iterator[etree._Element]:
    """Yield resource entries (<string>, <plurals>, <string-array>, ...) in document order."""
    for child in root:
        # Comments and processing instructions have a non-string tag
        if isinstance(child.tag, str) and child.get('name') is not None:
            yield child


def new_resources_document(template: etree._Element = None) -> etree._Element:
    """Create an empty <resources> root, keeping the namespace declarations of template."""
    nsmap = template.nsmap if template is not None else None
    return etree.Element(RESOURCES_TAG, nsmap=nsmap)


class XmlPostProcessor:
    """Formats and splits downloaded translation files."""

    def split_translation_xml(self, root: etree._Element,
                              qualifier_patterns: Sequence[QualifierPattern]) -> PartitionedDocumentMap:
        """
        Split the entries of root into one document per qualifier.

        Patterns are tried in order and the first match decides an entry's
        qualifier. Plurals and arrays move as one unit. The input tree is left
        untouched; the default document is always present, even when empty.
        """
        partitions: PartitionedDocumentMap = {DEFAULT_QUALIFIER: new_resources_document(root)}

        for entry in iter_entries(root):
            key = entry.get('name')
            qualifier = DEFAULT_QUALIFIER
            for pattern in qualifier_patterns:
                stripped_key = pattern.match(key)
                if stripped_key is not None:
                    qualifier, key = pattern.qualifier, stripped_key
                    break

            entry_copy = copy.deepcopy(entry)
            entry_copy.set('name', key)
            entry_copy.tail = None

            if qualifier not in partitions:
                partitions[qualifier] = new_resources_document(root)
            partitions[qualifier].append(entry_copy)

        for qualifier, document in partitions.items():
            logger.debug(f"Partition '{qualifier or 'default'}': {len(document)} entries")

        return partitions

    def partition(self, xml_text: str,
                  qualifier_patterns: Sequence[QualifierPattern]) -> PartitionedDocumentMap:
        """Parse xml_text and split it by qualifier without formatting translations."""
        return self.split_translation_xml(parse_resources_xml(xml_text), qualifier_patterns)

    def post_process_translation_xml(self, xml_text: str,
                                     qualifier_patterns: Sequence[QualifierPattern] = None
                                     ) -> PartitionedDocumentMap:
        """
        Parse a downloaded translation file, format its translations for
        Android and split it by qualifier.

        Args:
            xml_text: Raw android_strings export
            qualifier_patterns: Patterns in priority order (defaults to the tablet pattern)

        Returns:
            Mapping of qualifier ("" for default) to <resources> root

        Raises:
            ParseError: If xml_text is not a valid resources document
        """
        if qualifier_patterns is None:
            qualifier_patterns = [TABLET_QUALIFIER_PATTERN]

        root = parse_resources_xml(xml_text)
        format_translation_xml(root)
        return self.split_translation_xml(root, qualifier_patterns)
