"""Application configuration constants."""
from __future__ import annotations

USERNAME_MIN_LENGTH = 3
USERNAME_MAX_LENGTH = 30
USERNAME_PATTERN = r"^[A-Za-z0-9_]+$"

DISPLAY_NAME_MIN_LENGTH = 2
DISPLAY_NAME_MAX_LENGTH = 50
BIO_MAX_LENGTH = 500
PASSWORD_MIN_LENGTH = 6
# bcrypt only accepts secrets up to 72 bytes
SECRET_MAX_BYTES = 72

LIST_NAME_MAX_LENGTH = 100
LIST_DESCRIPTION_MAX_LENGTH = 500
LIST_SECRET_MIN_LENGTH = 4
ITEM_NOTES_MAX_LENGTH = 200
TAG_MAX_LENGTH = 20
MAX_TAGS = 20

DEFAULT_PAGE_SIZE = 20
MAX_PAGE_SIZE = 100
DEFAULT_SEARCH_LIMIT = 20

MEDIA_TYPES = ("movie", "series", "anime")

OMDB_PAGE_SIZE = 10
OMDB_MAX_PAGE = 100

AVATAR_CONTENT_TYPES = {
    "image/jpeg": ".jpg",
    "image/png": ".png",
    "image/gif": ".gif",
    "image/webp": ".webp",
}
