"""
Android resource XML writer.

This module writes post-processed translation documents to the res/
directory tree:
- Resource folder naming (values, values-es, values-tablet-es)
- Deterministic serialization
- Full overwrite of existing files
"""

import copy
from pathlib import Path
from typing import List, Union

from lxml import etree

from poeditor_importer.config import STRINGS_FILE_NAME, VALUES_FOLDER_NAME
from poeditor_importer.exceptions import FileWriteError
from poeditor_importer.logger import get_logger
from poeditor_importer.resources.post_processor import DEFAULT_QUALIFIER, PartitionedDocumentMap

logger = get_logger(__name__)

XML_DECLARATION = '<?xml version="1.0" encoding="utf-8"?>\n'
INDENT = "    "


def get_values_folder_name(language_code: str, default_lang: str, qualifier: str = DEFAULT_QUALIFIER) -> str:
    """
    Get the resource folder name for a language and qualifier.

    Example:
        >>> get_values_folder_name("es", "en", "tablet")
        'values-tablet-es'
    """
    parts = [VALUES_FOLDER_NAME]
    if qualifier:
        parts.append(qualifier)
    if language_code != default_lang:
        parts.append(language_code)
    return "-".join(parts)


def _is_blank(text) -> bool:
    return not text or not text.strip()


def _indent_items(entry: etree._Element):
    """Indent the <item> children of a plurals or array entry."""
    children = list(entry)
    if not children or not _is_blank(entry.text):
        return
    if not all(child.tag == "item" and _is_blank(child.tail) for child in children):
        return

    entry.text = "\n" + INDENT * 2
    for child in children:
        child.tail = "\n" + INDENT * 2
    children[-1].tail = "\n" + INDENT


def serialize_resources(document: etree._Element) -> str:
    """
    Serialize a <resources> document with one entry per line.

    Only whitespace between elements is rewritten, so translation text
    (including inline markup) is written exactly as parsed.
    """
    document = copy.deepcopy(document)
    entries = list(document)

    if entries:
        document.text = "\n" + INDENT
        for entry in entries:
            entry.tail = "\n" + INDENT
            if isinstance(entry.tag, str):
                _indent_items(entry)
        entries[-1].tail = "\n"
    else:
        document.text = None

    return XML_DECLARATION + etree.tostring(document, encoding="unicode") + "\n"


class AndroidXmlWriter:
    """Writes partitioned translation documents as Android strings.xml files."""

    def save_xml(self,
                 res_dir_path: Union[str, Path],
                 partitioned_map: PartitionedDocumentMap,
                 default_lang: str,
                 language_code: str) -> List[Path]:
        """
        Write every partition of a language to its resource folder.

        Existing files are overwritten; manual edits to them are lost.

        Args:
            res_dir_path: Android res/ directory
            partitioned_map: Qualifier to <resources> document
            default_lang: Language written to the unsuffixed folders
            language_code: Language of the documents

        Returns:
            Paths of the written files

        Raises:
            FileWriteError: If a folder or file cannot be written
        """
        res_dir = Path(res_dir_path)
        written = []

        for qualifier, document in partitioned_map.items():
            folder = res_dir / get_values_folder_name(language_code, default_lang, qualifier)
            file_path = folder / STRINGS_FILE_NAME

            content = serialize_resources(document)
            try:
                folder.mkdir(parents=True, exist_ok=True)
                with open(file_path, 'w', encoding='utf-8', newline='\n') as f:
                    f.write(content)
            except OSError as e:
                raise FileWriteError(f"Failed to write {file_path}: {e}", path=file_path) from e

            logger.info(f"Saved {len(document)} entries to {file_path}")
            written.append(file_path)

        return written
