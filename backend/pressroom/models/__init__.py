from pressroom.models.post import Post
from pressroom.models.refresh_token import RefreshToken
from pressroom.models.user import Role, User

__all__ = [
    "Post",
    "RefreshToken",
    "Role",
    "User",
]
