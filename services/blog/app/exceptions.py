"""
Blog service: domain-specific HTTP exceptions.

All exceptions use preset status codes and detail messages so that callers
never need to specify these at the call site.  The exception handlers installed
from shared.middleware wrap them in the standard error envelope.
"""
from fastapi import HTTPException, status


# ── Authentication ────────────────────────────────────────────────────────────

class EmailAlreadyRegistered(HTTPException):
    def __init__(self) -> None:
        super().__init__(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Email already registered",
        )


class UserDoesNotExist(HTTPException):
    """Login with an email that has no account."""

    def __init__(self) -> None:
        super().__init__(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="User does not exist",
        )


class InvalidPassword(HTTPException):
    def __init__(self) -> None:
        super().__init__(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Invalid password",
        )


class InvalidGoogleToken(HTTPException):
    def __init__(self) -> None:
        super().__init__(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid Google ID token or server error.",
        )


class AccountNotFound(HTTPException):
    """Token is valid but the account behind it has been deleted."""

    def __init__(self) -> None:
        super().__init__(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Not authorized, user not found",
            headers={"WWW-Authenticate": "Bearer"},
        )


class AdminRequired(HTTPException):
    def __init__(self) -> None:
        super().__init__(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Not authorized as an administrator",
        )


# ── Profile / account ─────────────────────────────────────────────────────────

class UserNotFound(HTTPException):
    def __init__(self) -> None:
        super().__init__(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="User not found.",
        )


class HandleTaken(HTTPException):
    def __init__(self) -> None:
        super().__init__(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="That handle is already taken.",
        )


class CurrentPasswordIncorrect(HTTPException):
    def __init__(self) -> None:
        super().__init__(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Current password incorrect.",
        )


class MissingFields(HTTPException):
    def __init__(self, detail: str = "Missing fields.") -> None:
        super().__init__(status_code=status.HTTP_400_BAD_REQUEST, detail=detail)


class InvalidResetLink(HTTPException):
    def __init__(self) -> None:
        super().__init__(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Invalid or expired reset link.",
        )


# ── Social graph ──────────────────────────────────────────────────────────────

class CannotFollowSelf(HTTPException):
    def __init__(self) -> None:
        super().__init__(status_code=status.HTTP_400_BAD_REQUEST, detail="Cannot follow yourself")


# ── Blogs ─────────────────────────────────────────────────────────────────────

class BlogNotFound(HTTPException):
    def __init__(self) -> None:
        super().__init__(status_code=status.HTTP_404_NOT_FOUND, detail="Blog not found")


class CannotEditBlog(HTTPException):
    def __init__(self) -> None:
        super().__init__(status_code=status.HTTP_403_FORBIDDEN, detail="You cannot edit this blog")


class CannotDeleteBlog(HTTPException):
    def __init__(self) -> None:
        super().__init__(status_code=status.HTTP_403_FORBIDDEN, detail="You cannot delete this blog")


class CannotReportOwnBlog(HTTPException):
    def __init__(self) -> None:
        super().__init__(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="You cannot report your own post.",
        )


# ── Admin ─────────────────────────────────────────────────────────────────────

class CannotDeleteSelf(HTTPException):
    def __init__(self) -> None:
        super().__init__(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Cannot delete your own admin account.",
        )


# ── External collaborators ────────────────────────────────────────────────────

class InvalidImageData(HTTPException):
    """Payload is not decodable base64, is empty, or exceeds the size limit."""

    def __init__(self) -> None:
        super().__init__(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Invalid image data.",
        )


class ImageUploadFailed(HTTPException):
    """S3 rejected the upload or storage is not configured."""

    def __init__(self) -> None:
        super().__init__(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to upload image.",
        )


class AIGenerationFailed(HTTPException):
    def __init__(self) -> None:
        super().__init__(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to generate content from AI.",
        )


class EmailDeliveryFailed(HTTPException):
    def __init__(self) -> None:
        super().__init__(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Email could not be sent. Please try again later.",
        )
