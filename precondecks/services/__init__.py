"""
Pipeline services.

Local page cache and deck list output.
"""

from precondecks.services.decklist_writer import (
    format_card_line,
    format_decklist,
    output_path,
    write_decklist,
)
from precondecks.services.files import sanitize_filename, write_text_atomic
from precondecks.services.page_cache import (
    CacheResult,
    build_local_copy,
    cache_path,
    ensure_cached,
)

__all__ = [
    "CacheResult",
    "build_local_copy",
    "cache_path",
    "ensure_cached",
    "format_card_line",
    "format_decklist",
    "output_path",
    "sanitize_filename",
    "write_decklist",
    "write_text_atomic",
]
