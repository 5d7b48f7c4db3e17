"""Localized display text.

Labels and descriptions are stored as language-code -> text mappings.
A requested language is honoured only if it is one of the configured
supported languages; otherwise the configured default language is used.
"""

from typing import Mapping, Optional

from .config import get_settings


def localized(text: Mapping[str, str], lang: Optional[str] = None,
              default_lang: Optional[str] = None) -> str:
    """
    Pick the text for a language.

    Args:
        text: Language code -> text
        lang: Requested language; ignored when not supported
        default_lang: Fallback language; the configured default when omitted

    Returns:
        The requested text, else the fallback language's, else any
        available text, else ""
    """
    settings = get_settings()
    if lang and lang in settings.supported_languages_list and lang in text:
        return text[lang]
    fallback = default_lang or settings.default_language
    return text.get(fallback) or next(iter(text.values()), "")
