"""File index over a scanned repository manifest."""

from __future__ import annotations

from typing import Iterator

from .models import FileMeta, RepoManifest
from .predicates import FilePredicate, FilePredicates


class ManifestFileSystem:
    """Answers existence queries over the files of a :class:`RepoManifest`."""

    def __init__(self, manifest: RepoManifest) -> None:
        self.manifest = manifest
        self._predicates = FilePredicates()

    def predicates(self) -> FilePredicates:
        return self._predicates

    def files(self, predicate: FilePredicate) -> Iterator[FileMeta]:
        """Yield manifest files accepted by ``predicate``."""
        for file in self.manifest.files:
            if predicate.apply(file):
                yield file

    def has_files(self, predicate: FilePredicate) -> bool:
        """Return True when at least one file matches ``predicate``."""
        return next(self.files(predicate), None) is not None

    def languages(self) -> set[str]:
        return {file.language for file in self.manifest.files if file.language is not None}


__all__ = ["ManifestFileSystem"]
