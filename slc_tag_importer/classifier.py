"""
Symbol classification for SLC/MicroLogix addresses.

Maps a raw symbol such as ``N7:0`` or ``B3:0/1`` to the data-file family it
belongs to and the primitive type its variable is declared with.  Both
functions are pure and never raise.
"""

from __future__ import annotations

from typing import Optional, Tuple

from .models import DataTypeKind, SymbolCategory
from .schema import (
    DEFAULT_CATEGORY,
    DEFAULT_DATA_TYPE,
    FOLDER_RULE_CHAINS,
    TYPE_RULES,
)


def classify(symbol: Optional[str]) -> Tuple[SymbolCategory, DataTypeKind]:
    """Return the ``(category, data_type)`` pair for *symbol*.

    Prefixes are tested case-sensitively in priority order and the first
    match wins.  Empty or unrecognized symbols default to
    ``(UNCLASSIFIED, BOOLEAN)``.

    Example::

        >>> classify('N7:0')
        (<SymbolCategory.INTEGER: 'Integer'>, <DataTypeKind.INT16: 'Int16'>)
    """
    if not symbol:
        return DEFAULT_CATEGORY, DEFAULT_DATA_TYPE

    text = symbol.strip()
    for prefix, category, data_type in TYPE_RULES:
        if text.startswith(prefix):
            return category, data_type

    return DEFAULT_CATEGORY, DEFAULT_DATA_TYPE


def folder_category(symbol: Optional[str]) -> SymbolCategory:
    """Return the category whose folder *symbol* is placed in.

    The I/O and status chain is checked first, then the data-file chain,
    independently.  When both chains match, the data-file chain wins.
    Symbols matching neither chain stay ``UNCLASSIFIED`` (placed directly
    under the Tags container).
    """
    placement = DEFAULT_CATEGORY
    if not symbol:
        return placement

    text = symbol.strip()
    for chain in FOLDER_RULE_CHAINS:
        for prefix, category in chain:
            if text.startswith(prefix):
                placement = category
                break
    return placement
