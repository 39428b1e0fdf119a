"""Post model for community discussion."""

from enum import Enum
from sqlalchemy import Column, Integer, String, Text, TIMESTAMP, ForeignKey, Index, Boolean, JSON, Enum as SQLEnum
from sqlalchemy.ext.associationproxy import association_proxy
from sqlalchemy.ext.orderinglist import ordering_list
from sqlalchemy.sql import func
from sqlalchemy.orm import relationship, validates
from ..core.exceptions import ValidationError
from ..database import Base
from .validation import clean_text


POST_TITLE_MAX_LENGTH = 200
POST_CONTENT_MAX_LENGTH = 10000
TAG_MAX_LENGTH = 50


class PostCategory(str, Enum):
    """Community post categories."""
    DISCUSSION = "discussion"
    SHOWCASE = "showcase"
    FEEDBACK = "feedback"
    TUTORIAL = "tutorial"
    QUESTION = "question"


class PostTag(Base):
    """A single tag on a post, kept in the order it was supplied."""

    __tablename__ = "post_tags"

    id = Column(Integer, primary_key=True, index=True)
    post_id = Column(
        Integer,
        ForeignKey("posts.id", ondelete="CASCADE"),
        nullable=False,
        index=True
    )
    tag = Column(String(TAG_MAX_LENGTH), nullable=False, index=True)
    position = Column(Integer, nullable=False, default=0)

    post = relationship("Post", back_populates="tag_links")

    @validates("tag")
    def normalize_tag(self, key, value):
        # Stored lower-cased and trimmed; duplicates are left to the caller
        return clean_text("tags", value, max_length=TAG_MAX_LENGTH, label="Tag").lower()


class Post(Base):
    """Model for community posts."""

    __tablename__ = "posts"

    id = Column(Integer, primary_key=True, index=True)

    # Foreign Keys
    author_id = Column(
        Integer,
        ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False,
        index=True
    )

    # Post Content
    title = Column(String(POST_TITLE_MAX_LENGTH), nullable=False)
    content = Column(Text, nullable=False)
    images = Column(JSON, nullable=False, default=list)
    category = Column(
        SQLEnum(
            PostCategory,
            name="post_category",
            values_callable=lambda enum_cls: [member.value for member in enum_cls],
        ),
        nullable=False,
        index=True
    )

    # Counters
    views = Column(Integer, nullable=False, default=0)

    # Moderation
    is_pinned = Column(Boolean, nullable=False, default=False)

    # Soft delete
    is_active = Column(Boolean, nullable=False, default=True, index=True)

    # Timestamps
    created_at = Column(TIMESTAMP, server_default=func.now(), index=True)
    updated_at = Column(TIMESTAMP, server_default=func.now(), onupdate=func.now())

    # Constraints & Indexes
    __table_args__ = (
        Index('idx_post_author_created', 'author_id', 'created_at'),
        Index('idx_post_category_created', 'category', 'created_at'),
        Index('idx_post_pinned_created', 'is_pinned', 'created_at'),
    )

    # Relationships
    author = relationship("User", foreign_keys=[author_id])
    tag_links = relationship(
        "PostTag",
        back_populates="post",
        order_by="PostTag.position",
        collection_class=ordering_list("position"),
        cascade="all, delete-orphan",
        lazy="selectin",
    )
    tags = association_proxy("tag_links", "tag", creator=lambda tag: PostTag(tag=tag))
    likes = relationship(
        "PostLike",
        back_populates="post",
        cascade="all, delete-orphan",
        lazy="selectin",
    )
    comments = relationship(
        "Comment",
        back_populates="post",
        order_by="Comment.id",
    )

    @validates("title")
    def validate_title(self, key, value):
        return clean_text(key, value, max_length=POST_TITLE_MAX_LENGTH)

    @validates("content")
    def validate_content(self, key, value):
        return clean_text(key, value, max_length=POST_CONTENT_MAX_LENGTH)

    @validates("category")
    def validate_category(self, key, value):
        try:
            return PostCategory(value)
        except ValueError:
            allowed = ", ".join(member.value for member in PostCategory)
            raise ValidationError(key, f"Category must be one of: {allowed}")

    @property
    def like_count(self) -> int:
        return len(self.likes)

    @property
    def liked_user_ids(self) -> set:
        return {like.user_id for like in self.likes}

    @property
    def active_comments(self) -> list:
        return [comment for comment in self.comments if comment.is_active]

    @property
    def comment_count(self) -> int:
        return len(self.active_comments)
