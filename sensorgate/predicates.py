"""Composable file predicates used to query the file index."""

from __future__ import annotations

from dataclasses import dataclass
from typing import FrozenSet, Iterable, Protocol, Tuple

from .models import FileMeta


class FilePredicate(Protocol):
    """Anything that can decide whether a single file matches."""

    def apply(self, file: FileMeta) -> bool:
        ...


@dataclass(frozen=True)
class AllPredicate:
    """Neutral element: matches every file."""

    def apply(self, file: FileMeta) -> bool:
        return True


@dataclass(frozen=True)
class LanguagePredicate:
    """Matches files whose language is one of ``languages``."""

    languages: FrozenSet[str]

    def apply(self, file: FileMeta) -> bool:
        return file.language is not None and file.language in self.languages


@dataclass(frozen=True)
class TypePredicate:
    """Matches files of a single type (``main`` or ``test``)."""

    file_type: str

    def apply(self, file: FileMeta) -> bool:
        return file.type == self.file_type


@dataclass(frozen=True)
class AndPredicate:
    """Conjunction of predicates; an empty conjunction matches everything."""

    operands: Tuple[FilePredicate, ...]

    def apply(self, file: FileMeta) -> bool:
        for operand in self.operands:
            if not operand.apply(file):
                return False
        return True


class FilePredicates:
    """Factory for the predicates understood by :class:`ManifestFileSystem`."""

    def all(self) -> FilePredicate:
        return AllPredicate()

    def has_languages(self, languages: Iterable[str]) -> FilePredicate:
        return LanguagePredicate(frozenset(language.lower() for language in languages))

    def has_language(self, language: str) -> FilePredicate:
        return self.has_languages([language])

    def has_type(self, file_type: str) -> FilePredicate:
        return TypePredicate(file_type)

    def and_(self, *predicates: FilePredicate) -> FilePredicate:
        return AndPredicate(tuple(predicates))


__all__ = [
    "AllPredicate",
    "AndPredicate",
    "FilePredicate",
    "FilePredicates",
    "LanguagePredicate",
    "TypePredicate",
]
