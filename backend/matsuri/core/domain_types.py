"""Domain Types — rich types that replace bare primitives across the codebase.

Invariants:
    - FestivalId, TierId, SponsorId wrap UUIDs — never use bare UUID in domain logic
    - All valid states encoded as Enums — no raw string matching
    - Region values are the 8 fixed Japanese regions, stored verbatim

Design Decisions:
    - NewType over dataclass wrappers: zero runtime cost, full type-checker support
    - str Enums: serialize to JSON and to DB string columns without custom encoders
"""

from enum import Enum
from typing import NewType
from uuid import UUID


# ─── Identity Types ──────────────────────────────────────────────

FestivalId = NewType("FestivalId", UUID)
TierId = NewType("TierId", UUID)
SponsorId = NewType("SponsorId", UUID)


# ─── Enums ───────────────────────────────────────────────────────

class Region(str, Enum):
    """The 8 fixed regions a festival can be listed under."""
    HOKKAIDO = "北海道"
    TOHOKU = "東北"
    KANTO = "関東"
    CHUBU = "中部"
    KANSAI = "関西"
    CHUGOKU = "中国"
    SHIKOKU = "四国"
    KYUSHU = "九州"


class FundingType(str, Enum):
    """Open festivals take sponsors any time; goal-based track a stated goal."""
    OPEN = "open"
    GOAL_BASED = "goal-based"


class TierType(str, Enum):
    """Tier discriminator — maps to the `type` column of sponsorship_tiers."""
    MONETARY = "monetary"
    IN_KIND = "in-kind"
    SERVICE = "service"


class ImageRefKind(str, Enum):
    """The historical encodings a stored festival image reference can take."""
    FULL_URL_LEGACY = "full_url_legacy"
    FOLDER_RELATIVE = "folder_relative"
    BARE_FILENAME = "bare_filename"
    ABSENT = "absent"


class CatalogState(str, Enum):
    """Mutually exclusive user-visible states of the festival grid."""
    LOADING = "loading"
    STORE_ERROR = "store_error"
    EMPTY = "empty"
    POPULATED = "populated"
