"""
PoEditor Android strings importer.

Downloads translations from PoEditor and writes them as Android
values*/strings.xml resource files.
"""

from poeditor_importer.exceptions import (
    ApiError,
    FileWriteError,
    NetworkError,
    ParseError,
    PoEditorImportError,
)
from poeditor_importer.importer import ImportResult, PoEditorStringsImporter, import_poeditor_strings

__all__ = [
    'ApiError',
    'FileWriteError',
    'NetworkError',
    'ParseError',
    'PoEditorImportError',
    'ImportResult',
    'PoEditorStringsImporter',
    'import_poeditor_strings',
]
