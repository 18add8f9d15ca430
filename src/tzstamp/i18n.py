"""
Internationalization (i18n) support for tzstamp.

This module handles loading gettext translation files from the locale directory
and provides functions to retrieve translated strings based on the configured language.
Catalogs ship as ``.po`` sources and are compiled to ``.mo`` with polib the first
time a language is set up, or whenever the source is newer than the binary.

Usage Examples:
    Basic setup:
        >>> from tzstamp import i18n
        >>> i18n.setup_i18n("en")
        >>> message = i18n.translate("This field is required")

    With formatting:
        >>> message = i18n.translate("Unknown timezone: {timezone}", timezone="Nowhere/Fake")
"""

import gettext
import logging
from collections.abc import Callable
from pathlib import Path

import polib

logger = logging.getLogger(__name__)

DEFAULT_LANGUAGE = "en"
DOMAIN = "messages"

# Global translation function
_: Callable[[str], str] = lambda x: x  # Default fallback

PACKAGED_LOCALE_DIR = Path(__file__).parent / "locale"

_current_language: str = DEFAULT_LANGUAGE
_locale_dir: Path = PACKAGED_LOCALE_DIR


def needs_compilation(po_file: Path, mo_file: Path | None = None) -> bool:
    """
    Check if a .po file needs to be compiled to .mo format.

    Args:
        po_file: Path to the .po file
        mo_file: Path to the .mo file (defaults to same location as .po)

    Returns:
        True if compilation is needed, False otherwise
    """
    if mo_file is None:
        mo_file = po_file.with_suffix(".mo")

    if not mo_file.exists():
        return True

    try:
        return po_file.stat().st_mtime > mo_file.stat().st_mtime
    except OSError as e:
        logger.warning(f"Error checking file times for {po_file}: {e}")
        return True


def compile_po_to_mo(po_file: Path, mo_file: Path | None = None) -> None:
    """
    Compile a .po file to .mo binary format.

    Args:
        po_file: Path to the .po file to compile
        mo_file: Path for the output .mo file (defaults to same location as .po)

    Raises:
        OSError: If the .po file cannot be read or the .mo file cannot be written
    """
    if mo_file is None:
        mo_file = po_file.with_suffix(".mo")

    catalog = polib.pofile(str(po_file))
    catalog.save_as_mofile(str(mo_file))
    logger.info(f"Compiled {po_file} to {mo_file}")


def compile_translations(locale_dir: Path, force: bool = False) -> list[Path]:
    """
    Compile every stale .po file under a locale directory.

    Args:
        locale_dir: Directory laid out as ``<lang>/LC_MESSAGES/<domain>.po``
        force: Compile even if the .mo file is up to date

    Returns:
        The .po files that were compiled
    """
    compiled: list[Path] = []
    if not locale_dir.exists():
        logger.warning(f"Locale directory does not exist: {locale_dir}")
        return compiled

    for po_file in sorted(locale_dir.glob(f"*/LC_MESSAGES/{DOMAIN}.po")):
        if force or needs_compilation(po_file):
            compile_po_to_mo(po_file)
            compiled.append(po_file)
        else:
            logger.debug(f"Skipping {po_file} (up to date)")

    return compiled


def available_languages(locale_dir: Path | None = None) -> list[str]:
    """
    List languages that ship a catalog.

    Args:
        locale_dir: Locale directory to inspect (defaults to the packaged one)

    Returns:
        Sorted language codes, always including the source language
    """
    directory = locale_dir or _locale_dir
    languages = {DEFAULT_LANGUAGE}
    if directory.exists():
        languages.update(
            po_file.parent.parent.name
            for po_file in directory.glob(f"*/LC_MESSAGES/{DOMAIN}.po")
        )
    return sorted(languages)


def setup_i18n(language: str = DEFAULT_LANGUAGE, locale_dir: Path | None = None) -> None:
    """
    Setup internationalization for the specified language.

    Missing catalogs fall back to the untranslated English source strings.

    Args:
        language: Language code (e.g., 'en', 'zh_TW')
        locale_dir: Custom locale directory path. If None, uses the packaged 'locale' directory
    """
    global _, _current_language, _locale_dir

    if locale_dir is not None:
        _locale_dir = locale_dir

    try:
        po_file = _locale_dir / language / "LC_MESSAGES" / f"{DOMAIN}.po"
        if po_file.exists() and needs_compilation(po_file):
            compile_po_to_mo(po_file)
    except OSError as e:
        logger.warning(f"Failed to compile translations for {language}: {e}")

    translation = gettext.translation(
        DOMAIN,
        localedir=_locale_dir,
        languages=[language],
        fallback=True,
    )

    _ = translation.gettext
    _current_language = language

    if isinstance(translation, gettext.GNUTranslations):
        logger.info(f"Loaded translations for language: {language}")
    elif language != DEFAULT_LANGUAGE:
        logger.warning(f"No translations found for {language}, using default English strings")
    logger.debug(f"Using locale directory: {_locale_dir}")


def get_current_language() -> str:
    """
    Get the currently configured language.

    Returns:
        The current language code (e.g., 'en', 'zh_TW')
    """
    return _current_language


def get_locale_directory() -> Path:
    """
    Get the current locale directory path.

    Returns:
        Path to the locale directory
    """
    return _locale_dir


def translate(message: str, **kwargs: object) -> str:
    """
    Translate a message with optional formatting.

    Args:
        message: The message to translate
        **kwargs: Format arguments for the translated string

    Returns:
        The translated and formatted message

    Examples:
        >>> translate("This field is required")
        'This field is required'
    """
    translated = _(message)

    if kwargs:
        try:
            return translated.format(**kwargs)
        except (KeyError, ValueError) as e:
            logger.warning(f"Translation formatting error for '{message}': {e}")
            return translated

    return translated


# Alias for convenience
t = translate
