"""
PoEditor strings importer.

Downloads every language of a PoEditor project and writes it to an Android
res/ directory. Languages are handled one at a time, in the order PoEditor
lists them; the first failure stops the run and is re-raised.
"""

from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict, List, Optional, Sequence, Union

import httpx

from poeditor_importer.api.client import PoEditorApiClient, create_http_client
from poeditor_importer.api.downloader import download_url_to_string
from poeditor_importer.config import ANDROID_STRINGS_EXPORT_TYPE, load_config
from poeditor_importer.logger import get_logger
from poeditor_importer.resources.post_processor import (
    TABLET_QUALIFIER_PATTERN,
    QualifierPattern,
    XmlPostProcessor,
)
from poeditor_importer.resources.writer import AndroidXmlWriter

logger = get_logger(__name__)

ERROR_MESSAGE = ("An error happened when retrieving strings from project. "
                 "Please review the importer's input parameters and try again")


@dataclass
class ImportResult:
    """Files written by an import run, per language code."""
    written_files: Dict[str, List[Path]] = field(default_factory=dict)

    @property
    def languages(self) -> List[str]:
        return list(self.written_files.keys())


class PoEditorStringsImporter:
    """
    Downloads, post-processes and saves PoEditor translations.

    The HTTP client, post-processor and writer are built once and reused for
    every language of a run.
    """

    def __init__(self,
                 http_client: Optional[httpx.Client] = None,
                 post_processor: Optional[XmlPostProcessor] = None,
                 xml_writer: Optional[AndroidXmlWriter] = None):
        self._owns_http_client = http_client is None
        if http_client is None:
            config = load_config()
            http_client = create_http_client(timeout=config.get('timeout'))
        self.http_client = http_client
        self.post_processor = post_processor or XmlPostProcessor()
        self.xml_writer = xml_writer or AndroidXmlWriter()

    def close(self):
        if self._owns_http_client:
            self.http_client.close()

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.close()

    def import_poeditor_strings(self,
                                api_token: str,
                                project_id: int,
                                default_lang: str,
                                res_dir_path: Union[str, Path],
                                qualifier_patterns: Sequence[QualifierPattern] = None) -> ImportResult:
        """
        Import every language of a PoEditor project into res_dir_path.

        Args:
            api_token: PoEditor API token
            project_id: PoEditor project ID
            default_lang: Language written to the unsuffixed values folder
            res_dir_path: Android res/ directory
            qualifier_patterns: Key patterns for qualifier files (defaults to tablet)

        Returns:
            ImportResult with the files written per language

        Raises:
            PoEditorImportError: On the first failure; languages already
                written are left on disk
        """
        if qualifier_patterns is None:
            qualifier_patterns = [TABLET_QUALIFIER_PATTERN]

        result = ImportResult()

        try:
            api_client = PoEditorApiClient(api_token, self.http_client)

            logger.info("Retrieving project languages...")
            project_languages = api_client.get_project_languages(project_id)

            logger.info(f"Available languages: [{', '.join(lang.code for lang in project_languages)}]")
            for language in project_languages:
                language_code = language.code

                logger.info(f"Retrieving translation file URL for language code: {language_code}")
                translation_file_url = api_client.get_translation_file_url(
                    project_id=project_id,
                    code=language_code,
                    export_type=ANDROID_STRINGS_EXPORT_TYPE)

                logger.debug(f"Downloading file from URL: {translation_file_url}")
                translation_file = download_url_to_string(self.http_client, translation_file_url)

                post_processed_xml_document_map = self.post_processor.post_process_translation_xml(
                    translation_file, qualifier_patterns)

                result.written_files[language_code] = self.xml_writer.save_xml(
                    res_dir_path, post_processed_xml_document_map, default_lang, language_code)

        except Exception:
            logger.error(ERROR_MESSAGE)
            raise

        logger.info(f"Imported {len(result.written_files)} languages into {res_dir_path}")
        return result


def import_poeditor_strings(api_token: str,
                            project_id: int,
                            default_lang: str,
                            res_dir_path: Union[str, Path],
                            qualifier_patterns: Sequence[QualifierPattern] = None) -> ImportResult:
    """Run one import with a freshly built importer."""
    with PoEditorStringsImporter() as importer:
        return importer.import_poeditor_strings(
            api_token, project_id, default_lang, res_dir_path, qualifier_patterns)
