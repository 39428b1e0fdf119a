"""Comment model for threaded post comments."""

from sqlalchemy import Column, Integer, Text, TIMESTAMP, ForeignKey, Index, Boolean
from sqlalchemy.sql import func
from sqlalchemy.orm import relationship, validates
from ..database import Base
from .validation import clean_text
from .vote import UserVote, vote_target


COMMENT_MAX_LENGTH = 2000


class Comment(Base):
    """Model for a comment on a post, optionally replying to another comment."""
    
    __tablename__ = "comments"
    
    id = Column(Integer, primary_key=True, index=True)
    
    # Foreign Keys
    post_id = Column(
        Integer, 
        ForeignKey("posts.id", ondelete="CASCADE"), 
        nullable=False, 
        index=True
    )
    author_id = Column(
        Integer, 
        ForeignKey("users.id", ondelete="CASCADE"), 
        nullable=False, 
        index=True
    )
    parent_comment_id = Column(
        Integer, 
        ForeignKey("comments.id", ondelete="CASCADE"), 
        nullable=True, 
        index=True
    )
    
    # Comment Content
    content = Column(Text, nullable=False)
    
    # Soft delete
    is_active = Column(Boolean, nullable=False, default=True, index=True)
    
    # Timestamps
    created_at = Column(TIMESTAMP, server_default=func.now(), index=True)
    updated_at = Column(TIMESTAMP, server_default=func.now(), onupdate=func.now())
    
    __table_args__ = (
        Index('idx_comment_post_created', 'post_id', 'created_at'),
        Index('idx_comment_author', 'author_id'),
    )
    
    # Relationships
    post = relationship("Post", back_populates="comments")
    author = relationship("User", foreign_keys=[author_id])
    parent_comment = relationship(
        "Comment",
        remote_side=[id],
        back_populates="replies",
    )
    replies = relationship(
        "Comment",
        back_populates="parent_comment",
        order_by="Comment.id",
    )
    likes = relationship(
        "CommentLike",
        back_populates="comment",
        cascade="all, delete-orphan",
        lazy="selectin",
    )
    
    @validates("content")
    def validate_content(self, key, value):
        return clean_text(key, value, max_length=COMMENT_MAX_LENGTH)
    
    @property
    def like_count(self) -> int:
        return len(self.likes)
    
    @property
    def liked_user_ids(self) -> set:
        return {like.user_id for like in self.likes}
    
    @property
    def active_replies(self) -> list:
        return [reply for reply in self.replies if reply.is_active]
    
    @property
    def reply_count(self) -> int:
        return len(self.active_replies)


class CommentLike(UserVote, Base):
    """A user's like on a comment."""

    __tablename__ = "comment_likes"
    __vote_column__ = "comment_id"

    comment_id = vote_target("comments")
    comment = relationship("Comment", back_populates="likes")
