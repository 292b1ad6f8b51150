"""Asset Names — unique storage names for uploaded images and logos.

Invariants:
    - The extension of the original filename is kept (lower-cased), nothing else
    - The unique token is injected by the caller; this module never draws randomness
"""


def file_extension(filename: str) -> str:
    """Lower-cased extension without the dot, or '' if there is none."""
    base = filename.rsplit("/", 1)[-1]
    if "." not in base.strip("."):
        return ""
    return base.rsplit(".", 1)[-1].lower()


def unique_asset_path(folder: str, original_filename: str, token: str, prefix: str = "") -> str:
    """`<folder>/<prefix><token>.<ext>` — the folder-relative path to upload to."""
    ext = file_extension(original_filename)
    name = f"{prefix}{token}.{ext}" if ext else f"{prefix}{token}"
    return f"{folder.strip('/')}/{name}"
