"""Tests for ruleval.files — File protocol, UploadedFile and FileList."""

from dataclasses import dataclass, fields

from ruleval.files import File, FileList, UploadedFile, kilobytes


@dataclass
class _FrameworkUpload:
    name: str
    size: int
    stream: object = None


class TestFileProtocol:
    def test_uploaded_file(self) -> None:
        assert isinstance(UploadedFile("a.png", 10), File)

    def test_foreign_object(self) -> None:
        assert isinstance(_FrameworkUpload("a.png", 10), File)

    def test_string_is_not_file(self) -> None:
        assert not isinstance("a.png", File)


class TestKilobytes:
    def test_rounds_down(self) -> None:
        assert kilobytes(UploadedFile("a", 1023)) == 0
        assert kilobytes(UploadedFile("a", 1024)) == 1
        assert kilobytes(UploadedFile("a", 2047)) == 1

    def test_property(self) -> None:
        assert UploadedFile("a", 4096).kilobytes == 4

    def test_carries_name_and_size_only(self) -> None:
        assert [f.name for f in fields(UploadedFile)] == ["name", "size"]


class TestFileList:
    def test_sequence_behaviour(self) -> None:
        first, second = UploadedFile("a", 1), UploadedFile("b", 2)
        files = FileList([first, second])
        assert len(files) == 2
        assert list(files) == [first, second]
        assert files[1] is second

    def test_empty(self) -> None:
        assert len(FileList()) == 0
