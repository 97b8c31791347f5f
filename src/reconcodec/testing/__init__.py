from __future__ import annotations

from .corpus import (
    generate_corpus_files,
    generate_data_literals,
    generate_number_literals,
    split_chunks,
)

__all__ = [
    "generate_corpus_files",
    "generate_data_literals",
    "generate_number_literals",
    "split_chunks",
]
