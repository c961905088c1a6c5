"""Tests for media key construction."""

import re

import pytest

from staffdir.media.base import SecurityException, build_media_key


def test_key_layout():
    key = build_media_key("comp3133_employees", "image", "photo.jpeg", "image/jpeg")

    assert re.fullmatch(r"image/comp3133_employees/[0-9a-f]{32}\.jpeg", key)


def test_extension_from_content_type():
    key = build_media_key("folder", "image", None, "image/webp")

    assert key.endswith(".webp")


def test_no_extension_available():
    key = build_media_key("folder", "image", "blob", "application/octet-stream")

    assert re.fullmatch(r"image/folder/[0-9a-f]{32}", key)


def test_filename_is_not_used_in_key():
    key = build_media_key("folder", "image", "../../etc/passwd.png", "image/png")

    assert "passwd" not in key
    assert ".." not in key


def test_nested_folder():
    key = build_media_key("org/employees", "image", "a.png", None)

    assert key.startswith("image/org/employees/")


@pytest.mark.parametrize("folder", ["..", "a/../..", "", "/"])
def test_invalid_folder(folder):
    with pytest.raises(SecurityException):
        build_media_key(folder, "image", "a.png", "image/png")
