"""
API Module

This module provides the PoEditor API client and the translation file downloader.
"""

from poeditor_importer.api.client import PoEditorApiClient, create_http_client
from poeditor_importer.api.downloader import download_url_to_string
from poeditor_importer.api.models import ProjectLanguage, TranslationFileReference

__all__ = [
    'PoEditorApiClient',
    'create_http_client',
    'download_url_to_string',
    'ProjectLanguage',
    'TranslationFileReference',
]
