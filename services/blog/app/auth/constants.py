import enum

# ── Token lifetimes ───────────────────────────────────────────────────────────
ACCESS_TOKEN_EXPIRE_SECONDS: int = 86_400 * 7    # 7 days
PASSWORD_RESET_LINK_EXPIRE_SECONDS: int = 3_600  # 1 hour

# ── Profile defaults ──────────────────────────────────────────────────────────
DEFAULT_ABOUT: str = "Welcome to my corner of the blogosphere."
DEFAULT_PROFILE_PICTURE: str = "https://placehold.co/100x100/94A3B8/FFFFFF?text=P"
HANDLE_MIN_LENGTH: int = 3
ABOUT_MAX_LENGTH: int = 500

# ── Image upload folders ──────────────────────────────────────────────────────
PROFILE_PICTURE_FOLDER: str = "user_profiles"


# ── Account role (drives admin-only routes) ───────────────────────────────────
class UserRole(str, enum.Enum):
    USER = "user"
    ADMIN = "admin"
