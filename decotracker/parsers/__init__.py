from decotracker.parsers.save_document import (
    extract_codes,
    parse_and_extract,
    parse_save_text,
)

__all__ = [
    "extract_codes",
    "parse_and_extract",
    "parse_save_text",
]
