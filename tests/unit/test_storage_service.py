"""Unit tests for the image store."""

import os

import pytest

from services.storage_service import StorageService


def _write(directory, name, size=10, mtime=None):
    path = directory / name
    path.write_bytes(b"\0" * size)
    if mtime is not None:
        os.utime(path, (mtime, mtime))
    return path


class TestSaveImage:
    """Test writing images to disk."""

    def test_creates_directory_on_first_save(self, storage, images_dir):
        """The image directory and its parents are created lazily."""
        assert not images_dir.exists()
        path = storage.save_image("ai-test.png", b"png-bytes")
        assert images_dir.is_dir()
        assert path == images_dir / "ai-test.png"
        assert path.read_bytes() == b"png-bytes"

    def test_no_temporary_file_left(self, storage, images_dir):
        storage.save_image("ai-test.png", b"data")
        assert [p.name for p in images_dir.iterdir()] == ["ai-test.png"]

    def test_overwrites_same_name(self, storage):
        storage.save_image("ai-test.png", b"first")
        path = storage.save_image("ai-test.png", b"second")
        assert path.read_bytes() == b"second"

    @pytest.mark.parametrize("filename", ["", "../escape.png", "nested/dir.png", ".."])
    def test_rejects_path_components(self, storage, filename):
        """Filenames cannot point outside the images directory."""
        with pytest.raises(ValueError):
            storage.save_image(filename, b"data")


class TestListImages:
    """Test listing stored images."""

    def test_missing_directory_lists_nothing(self, storage):
        assert storage.list_images() == []

    def test_filters_by_extension(self, storage, images_dir):
        """Only .png files are listed."""
        images_dir.mkdir(parents=True)
        _write(images_dir, "ai-one.png")
        _write(images_dir, "notes.txt")
        _write(images_dir, ".ai-two.png.tmp")
        (images_dir / "folder.png").mkdir()

        listed = storage.list_images()
        assert [entry["filename"] for entry in listed] == ["ai-one.png"]

    def test_newest_first(self, storage, images_dir):
        """Entries are sorted by modification time, newest first."""
        images_dir.mkdir(parents=True)
        _write(images_dir, "ai-old.png", mtime=1_000_000)
        _write(images_dir, "ai-new.png", mtime=3_000_000)
        _write(images_dir, "ai-mid.png", mtime=2_000_000)

        listed = storage.list_images()
        assert [entry["filename"] for entry in listed] == ["ai-new.png", "ai-mid.png", "ai-old.png"]
        assert listed[0]["created"].startswith("1970-02-04")

    def test_entry_fields(self, storage, images_dir):
        """Entries carry url and a KB size string."""
        images_dir.mkdir(parents=True)
        _write(images_dir, "ai-sized.png", size=2048)

        entry = storage.list_images()[0]
        assert entry["url"] == "http://testserver/images/ai-sized.png"
        assert entry["size"] == "2.0 KB"
        assert set(entry) == {"filename", "url", "created", "size"}


class TestImageUrl:
    """Test URL generation."""

    def test_trailing_slash_in_base_url(self, temp_dir):
        storage = StorageService(temp_dir, "http://localhost:5000/")
        assert storage.get_image_url("a.png") == "http://localhost:5000/images/a.png"

    def test_non_ascii_filename_is_percent_encoded(self, storage):
        """URLs stay ASCII when prompt words carry accented letters."""
        url = storage.get_image_url("ai-tech-2024-01-02-03-04-05-café-noir-abc123.png")
        assert url == "http://testserver/images/ai-tech-2024-01-02-03-04-05-caf%C3%A9-noir-abc123.png"
        assert url.isascii()
