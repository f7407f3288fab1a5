"""Built-in document definitions."""

from .doc_001 import DOC_001

BUILTIN_DEFINITIONS = (DOC_001,)

__all__ = ["BUILTIN_DEFINITIONS", "DOC_001"]
