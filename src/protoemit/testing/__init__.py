from __future__ import annotations

from .corpus import generate_corpus_files, generate_corpus_trees, generate_trees

__all__ = ["generate_corpus_files", "generate_corpus_trees", "generate_trees"]
