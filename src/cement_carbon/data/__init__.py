"""Dataset loading and source-report links."""

from .brsr import BRSR_MAP, get_brsr_url
from .loader import DatasetError, DatasetLoader, load_companies

__all__ = [
    "BRSR_MAP",
    "DatasetError",
    "DatasetLoader",
    "get_brsr_url",
    "load_companies",
]
