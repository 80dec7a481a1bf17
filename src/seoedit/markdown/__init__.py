"""Markdown import/export of SEO documents.

Example:
    >>> from seoedit.markdown import decode, encode
    >>> pages = decode("## Page: Home\\n### Block 1: Title\\n")
    >>> pages[0].blocks[0].name
    'Title'
    >>> markdown = encode(pages)
"""

from seoedit.markdown.codec import (
    DEFAULT_TITLE,
    EMPTY_PLACEHOLDER,
    HEADER_LABELS,
    ScanState,
    decode,
    encode,
)

__all__ = [
    "DEFAULT_TITLE",
    "EMPTY_PLACEHOLDER",
    "HEADER_LABELS",
    "ScanState",
    "decode",
    "encode",
]
