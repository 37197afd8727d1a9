"""Grounding helpers for the emissions chat assistant."""

from .context_builder import (
    build_data_appendix,
    build_grounding_appendix,
    build_raw_appendix,
    build_system_instruction,
    normalize_company,
)
from .entity_matcher import levenshtein, normalize_text, select_relevant_companies, similarity

__all__ = [
    "build_data_appendix",
    "build_grounding_appendix",
    "build_raw_appendix",
    "build_system_instruction",
    "levenshtein",
    "normalize_company",
    "normalize_text",
    "select_relevant_companies",
    "similarity",
]
