"""Likes on community posts."""

from sqlalchemy.orm import relationship
from ..database import Base
from .vote import UserVote, vote_target


class PostLike(UserVote, Base):
    __tablename__ = "post_likes"
    __vote_column__ = "post_id"

    post_id = vote_target("posts")
    post = relationship("Post", back_populates="likes")
