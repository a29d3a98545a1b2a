"""
Display formatting for option keys and labels.

Option text can carry multilingual blocks of the form
``<span lang="en" class="multilang">Blue</span><span lang="de" class="multilang">Blau</span>``.
MultilangFormatter keeps the block for the configured language and reduces
the rest of the markup to plain text.
"""

import html
import re

from typing_extensions import Protocol

_MULTILANG_GROUP_RE = re.compile(
    r'(?:<(?:span|lang)(?:\s+lang="[a-zA-Z0-9_-]+"|\s+class="multilang"){2}\s*>.*?</(?:span|lang)>\s*)+',
    re.IGNORECASE | re.DOTALL,
)
_MULTILANG_BLOCK_RE = re.compile(
    r'<(?:span|lang)[^>]*?lang="([a-zA-Z0-9_-]+)"[^>]*>(.*?)</(?:span|lang)>',
    re.IGNORECASE | re.DOTALL,
)
_TAG_RE = re.compile(r'<[^>]+>')
_WHITESPACE_RE = re.compile(r'\s+')


class TextFormatter(Protocol):
    """Turns raw option text into display text."""

    def format(self, raw: str) -> str:
        ...


class PlainFormatter:
    """Returns text unchanged."""

    def format(self, raw: str) -> str:
        return raw


class MultilangFormatter:
    """
    Formatter that resolves multilingual blocks and strips HTML tags.

    Args:
        language: Language code to display, e.g. ``"en"`` or ``"pt_br"``
    """

    def __init__(self, language: str = 'en'):
        self.language = language.lower()

    def _candidates(self):
        # pt_br falls back to pt
        yield self.language
        if '_' in self.language:
            yield self.language.split('_', 1)[0]

    def _pick_block(self, match: 're.Match') -> str:
        blocks = [(lang.lower(), text) for lang, text in _MULTILANG_BLOCK_RE.findall(match.group(0))]
        if not blocks:
            return match.group(0)
        for candidate in self._candidates():
            for lang, text in blocks:
                if lang == candidate:
                    return text
        return blocks[0][1]

    def format(self, raw: str) -> str:
        if not raw:
            return ''
        text = _MULTILANG_GROUP_RE.sub(self._pick_block, raw)
        text = _TAG_RE.sub('', text)
        text = html.unescape(text)
        return _WHITESPACE_RE.sub(' ', text).strip()
