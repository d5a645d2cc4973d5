import enum

# ── Field limits ──────────────────────────────────────────────────────────────
TITLE_MAX_LENGTH: int = 150
SUBTITLE_MAX_LENGTH: int = 300

# ── Listing sizes ─────────────────────────────────────────────────────────────
POPULAR_LIMIT: int = 20
USER_POPULAR_LIMIT: int = 10
FEED_LIMIT: int = 50
ADMIN_TOP_LIKED_LIMIT: int = 5

# ── Image upload folders ──────────────────────────────────────────────────────
COVER_IMAGE_FOLDER: str = "blog_covers"

# "all" in a category query means no category filter.
ALL_CATEGORIES: str = "all"


# ── Visibility (authorship axis) ──────────────────────────────────────────────
class BlogStatus(str, enum.Enum):
    DRAFT = "Draft"          # Visible to the author (and admins) only
    PUBLISHED = "Published"  # Listed publicly


class BlogCategory(str, enum.Enum):
    DEVELOPMENT = "Development"
    AI = "AI"
    WRITING = "Writing"
    TECH = "Tech"
    OTHERS = "Others"
    FINANCE = "Finance"
    TRAVEL = "Travel"
    HEALTH = "Health"
    SOCIAL = "social"
    NEWS = "news"
