"""File values — what ``size``, ``min``, ``max``, ``between`` and ``mimes`` see
when a field holds an upload.

Any object with a ``name`` and a ``size`` in bytes satisfies ``File``, so
upload objects from web frameworks can be validated without conversion.
"""

from collections.abc import Iterable, Iterator
from dataclasses import dataclass
from typing import Protocol, runtime_checkable


@runtime_checkable
class File(Protocol):
    """An uploaded file: a name and a size in bytes."""

    name: str
    size: int


@dataclass(frozen=True, slots=True)
class UploadedFile:
    """Plain ``File`` implementation."""

    name: str
    size: int

    @property
    def kilobytes(self) -> int:
        return kilobytes(self)


class FileList:
    """An ordered collection of files from a multi-file field.

    Kept distinct from ``list`` so size rules compare each member's
    size instead of treating the value as an array.
    """

    __slots__ = ("_files",)

    def __init__(self, files: Iterable[File] = ()) -> None:
        self._files: tuple[File, ...] = tuple(files)

    def __iter__(self) -> Iterator[File]:
        return iter(self._files)

    def __len__(self) -> int:
        return len(self._files)

    def __getitem__(self, index: int) -> File:
        return self._files[index]

    def __repr__(self) -> str:
        return f"FileList({list(self._files)!r})"


def kilobytes(file: File) -> int:
    """Size of *file* in whole kilobytes (rounded down)."""
    return int(file.size) // 1024
