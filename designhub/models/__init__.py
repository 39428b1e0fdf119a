"""
SQLAlchemy Models for DesignHub
"""

from ..database import Base
from .user import User
from .post import Post, PostCategory, PostTag
from .post_like import PostLike
from .comment import Comment, CommentLike
from .product import Product
from .review import Review, ReviewHelpfulVote

# Export all models
__all__ = [
    "Base",
    "User",
    "Post",
    "PostCategory",
    "PostTag",
    "PostLike",
    "Comment",
    "CommentLike",
    "Product",
    "Review",
    "ReviewHelpfulVote",
]
