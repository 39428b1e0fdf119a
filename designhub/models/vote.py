"""Shared shape of the per-user vote tables: post likes, comment likes, helpful votes."""

from sqlalchemy import Column, Integer, TIMESTAMP, ForeignKey, UniqueConstraint, Index
from sqlalchemy.sql import func
from sqlalchemy.orm import declared_attr, relationship


def vote_target(table_name: str) -> Column:
    """Foreign key column pointing at the voted-on row."""
    return Column(
        Integer,
        ForeignKey(f"{table_name}.id", ondelete="CASCADE"),
        nullable=False,
        index=True
    )


class UserVote:
    """A user's mark on one target row.

    Subclasses name their target column in ``__vote_column__``. A user holds
    at most one vote per target, so the votes on a target form a set of users.
    """

    __vote_column__ = None

    id = Column(Integer, primary_key=True, index=True)
    created_at = Column(TIMESTAMP, server_default=func.now())

    @declared_attr
    def user_id(cls):
        return vote_target("users")

    @declared_attr
    def user(cls):
        return relationship("User")

    @declared_attr
    def __table_args__(cls):
        return (
            UniqueConstraint(cls.__vote_column__, "user_id", name=f"uq_{cls.__tablename__}_user"),
            Index(f"idx_{cls.__tablename__}_user", "user_id", "created_at"),
        )
