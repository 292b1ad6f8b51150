"""Image Reference Normalization — maps any stored encoding to one storage path.

Invariants:
    - classify_image_reference is PURE and total: every input maps to one ImageRefKind
    - A full legacy URL, a bare legacy filename, and a folder-relative path that
      denote the same file normalize to the identical storage path
    - A reference that is only slashes or the folder name itself is ABSENT
    - ABSENT normalizes to None ("no image"); nothing here touches the network

Design Decisions:
    - Classification separated from rewrite so each encoding is unit-testable
    - Legacy URLs keep only their last two path segments (folder + filename)
"""

from urllib.parse import urlsplit, unquote

from matsuri.core.domain_types import ImageRefKind


DEFAULT_IMAGE_FOLDER = "festival-images"

_URL_SCHEMES = ("http", "https")


def classify_image_reference(
    raw: str | None, folder: str = DEFAULT_IMAGE_FOLDER,
) -> ImageRefKind:
    """Sniff which historical encoding a stored reference uses."""
    if raw is None or not raw.strip():
        return ImageRefKind.ABSENT
    value = raw.strip()
    if value.strip("/") in ("", folder.strip("/")):
        return ImageRefKind.ABSENT
    parts = urlsplit(value)
    if parts.scheme.lower() in _URL_SCHEMES and parts.netloc:
        return ImageRefKind.FULL_URL_LEGACY
    if "/" in value.strip("/"):
        return ImageRefKind.FOLDER_RELATIVE
    return ImageRefKind.BARE_FILENAME


def normalize_image_reference(
    raw: str | None, folder: str = DEFAULT_IMAGE_FOLDER,
) -> str | None:
    """Rewrite a stored reference into a folder-relative storage path."""
    kind = classify_image_reference(raw, folder)
    match kind:
        case ImageRefKind.ABSENT:
            return None
        case ImageRefKind.FULL_URL_LEGACY:
            return _path_from_legacy_url(raw.strip(), folder)
        case ImageRefKind.FOLDER_RELATIVE:
            return raw.strip().strip("/")
        case ImageRefKind.BARE_FILENAME:
            return f"{folder}/{raw.strip().strip('/')}"


def _path_from_legacy_url(url: str, folder: str) -> str | None:
    segments = [unquote(s) for s in urlsplit(url).path.split("/") if s]
    if not segments or segments[-1] == folder.strip("/"):
        return None
    if len(segments) == 1:
        return f"{folder}/{segments[0]}"
    return "/".join(segments[-2:])
