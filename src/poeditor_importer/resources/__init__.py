"""
Resources module - Android string resource handling

This module provides:
- formatter: Translation string formatting for Android
- post_processor: Parsing and qualifier splitting of downloaded files
- writer: Writing strings.xml files to the res/ tree
"""

from poeditor_importer.resources.formatter import (
    format_translation_string,
    format_translation_xml,
)

from poeditor_importer.resources.post_processor import (
    DEFAULT_QUALIFIER,
    TABLET_QUALIFIER_PATTERN,
    QualifierPattern,
    XmlPostProcessor,
    parse_resources_xml,
)

from poeditor_importer.resources.writer import (
    AndroidXmlWriter,
    get_values_folder_name,
    serialize_resources,
)
