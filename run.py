"""Project root entry point for running an import with the parameters in config/config.json."""

from __future__ import annotations

import sys
from pathlib import Path


def _bootstrap_path() -> None:
    """Ensure the src/ directory is importable when running from project root."""
    project_root = Path(__file__).resolve().parent
    src_dir = project_root / "src"
    if str(src_dir) not in sys.path:
        sys.path.insert(0, str(src_dir))


def main():
    _bootstrap_path()
    from poeditor_importer import PoEditorImportError, import_poeditor_strings
    from poeditor_importer.config import CONFIG_FILE, create_default_config, get_poeditor_settings

    if not CONFIG_FILE.exists():
        create_default_config()
        print(f"Fill in the 'poeditor' section of {CONFIG_FILE} and run again.")
        return 1

    settings = get_poeditor_settings()
    try:
        import_poeditor_strings(
            api_token=settings['api_token'],
            project_id=settings['project_id'],
            default_lang=settings['default_lang'],
            res_dir_path=settings['res_dir_path'],
        )
    except PoEditorImportError:
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
