"""Filename normalization to a canonical lowercase, hyphenated form."""

from tidyfs.rename.models import RenameDisposition, RenamePlanEntry, RenameSummary
from tidyfs.rename.normalizer import FilenameNormalizer, RenameError, canonical_name

__all__ = [
    "FilenameNormalizer",
    "RenameDisposition",
    "RenameError",
    "RenamePlanEntry",
    "RenameSummary",
    "canonical_name",
]
