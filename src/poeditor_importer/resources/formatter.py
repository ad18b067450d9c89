"""
Translation String Formatting

PoEditor exports keep placeholders in its own {{variable}} syntax. Android
needs positional format arguments (%1$s) instead, and once a string is used
as a format string its literal percent signs must be written as %%.
Translations without PoEditor placeholders are left exactly as exported.
"""

import itertools
import re
from typing import Iterator, List

from lxml import etree

# {{name}} or {2{name}}
VARIABLE_REGEX = re.compile(r"\{(\d*)\{([^{}]+)\}\}")

# Escaped percent, a printf format specifier, or a lone percent sign.
# The space flag is left out so "100% sure" reads as a literal percent.
PERCENT_REGEX = re.compile(r"%%|%(?:\d+\$)?[-#+0,(]*\d*(?:\.\d+)?[a-zA-Z]|%")

# Elements whose text is a translation
TRANSLATABLE_TAGS = ("string", "item")


def _escape_percent(text: str) -> str:
    return PERCENT_REGEX.sub(lambda m: "%%" if m.group(0) == "%" else m.group(0), text)


def _replace_variables(text: str, counter: Iterator[int]) -> str:
    def repl(match):
        position = match.group(1) or str(next(counter))
        return f"%{position}$s"

    return VARIABLE_REGEX.sub(repl, text)


def _format(text: str, counter: Iterator[int]) -> str:
    return _replace_variables(_escape_percent(text), counter)


def has_variables(text: str) -> bool:
    return bool(text) and VARIABLE_REGEX.search(text) is not None


def format_translation_string(translation_string: str) -> str:
    """
    Format a single translation for Android.

    Only strings containing PoEditor placeholders are changed: {{name}}
    becomes %1$s, %2$s, ... in order of appearance, {N{name}} becomes %N$s,
    and a lone '%' becomes '%%'.

    Example:
        >>> format_translation_string("Hi {{user}}, 50% done")
        'Hi %1$s, 50%% done'
        >>> format_translation_string("50% done")
        '50% done'
    """
    if not has_variables(translation_string):
        return translation_string
    return _format(translation_string, itertools.count(1))


def _text_nodes(element: etree._Element) -> List[str]:
    texts = [element.text]
    for child in element.iterdescendants():
        texts.extend([child.text, child.tail])
    return [text for text in texts if text]


def format_element_text(element: etree._Element):
    """
    Format the text of one translatable element in place.

    Text around inline markup (<b>, <i>, ...) is formatted too, and implicit
    placeholder positions are numbered across the whole element. Elements
    without placeholders are not touched.
    """
    if not any(has_variables(text) for text in _text_nodes(element)):
        return

    counter = itertools.count(1)
    if element.text:
        element.text = _format(element.text, counter)
    for child in element.iterdescendants():
        if child.text:
            child.text = _format(child.text, counter)
        if child.tail:
            child.tail = _format(child.tail, counter)


def format_translation_xml(root: etree._Element):
    """Format every <string> and <item> translation below root in place."""
    for element in root.iter(*TRANSLATABLE_TAGS):
        format_element_text(element)
