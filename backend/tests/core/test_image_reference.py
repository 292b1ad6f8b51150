"""Image Reference — classification and normalization of stored image encodings.

Invariants:
    - The three encodings of the same file normalize to one identical path
    - Absent references normalize to None and never reach storage
"""

import pytest

from matsuri.core.domain_types import ImageRefKind
from matsuri.core.image_reference import (
    classify_image_reference, normalize_image_reference,
)

FOLDER = "festival-images"
LEGACY_URL = (
    "https://abc.supabase.co/storage/v1/object/public/"
    "festival-images/festival-images/festival_123.jpg"
)


@pytest.mark.parametrize("raw, kind", [
    (LEGACY_URL, ImageRefKind.FULL_URL_LEGACY),
    ("http://cdn.example.com/festival-images/a.png", ImageRefKind.FULL_URL_LEGACY),
    ("festival-images/festival_123.jpg", ImageRefKind.FOLDER_RELATIVE),
    ("festival_123.jpg", ImageRefKind.BARE_FILENAME),
    (None, ImageRefKind.ABSENT),
    ("", ImageRefKind.ABSENT),
    ("   ", ImageRefKind.ABSENT),
])
def test_classify_each_encoding(raw, kind):
    assert classify_image_reference(raw) == kind


def test_all_encodings_of_one_file_normalize_identically():
    expected = "festival-images/festival_123.jpg"
    assert normalize_image_reference(LEGACY_URL, FOLDER) == expected
    assert normalize_image_reference("festival_123.jpg", FOLDER) == expected
    assert normalize_image_reference(expected, FOLDER) == expected


def test_absent_reference_means_no_image():
    assert normalize_image_reference(None, FOLDER) is None
    assert normalize_image_reference("", FOLDER) is None


def test_legacy_url_keeps_last_two_segments_decoded():
    url = "https://host/storage/v1/object/public/festival-images/%E7%A5%AD.jpg"
    assert normalize_image_reference(url, FOLDER) == "festival-images/祭.jpg"


def test_legacy_url_with_single_segment_gets_folder_prefix():
    assert normalize_image_reference("https://host/a.jpg", FOLDER) == "festival-images/a.jpg"


def test_legacy_url_without_path_means_no_image():
    assert normalize_image_reference("https://host/", FOLDER) is None


def test_folder_relative_path_strips_surrounding_slashes():
    assert normalize_image_reference("/festival-images/a.jpg", FOLDER) == "festival-images/a.jpg"


def test_bare_filename_uses_configured_folder():
    assert normalize_image_reference("a.jpg", "other") == "other/a.jpg"


@pytest.mark.parametrize("raw", ["festival-images/", "/festival-images", "/", "//"])
def test_folder_only_reference_is_absent(raw):
    assert classify_image_reference(raw, FOLDER) == ImageRefKind.ABSENT
    assert normalize_image_reference(raw, FOLDER) is None


def test_legacy_url_ending_at_folder_is_absent():
    url = "https://host/storage/v1/object/public/festival-images/"
    assert normalize_image_reference(url, FOLDER) is None
