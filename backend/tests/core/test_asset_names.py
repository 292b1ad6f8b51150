from matsuri.core.asset_names import file_extension, unique_asset_path


def test_file_extension_lowercased():
    assert file_extension("Photo.JPG") == "jpg"
    assert file_extension("archive.tar.gz") == "gz"


def test_file_extension_missing():
    assert file_extension("README") == ""
    assert file_extension(".hidden") == ""


def test_unique_asset_path_with_prefix():
    assert unique_asset_path("festival-images", "a.PNG", "abc", prefix="festival_") == (
        "festival-images/festival_abc.png"
    )


def test_unique_asset_path_without_extension():
    assert unique_asset_path("/logos/", "logo", "abc") == "logos/abc"
