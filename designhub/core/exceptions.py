"""Custom exceptions for the DesignHub application."""

from fastapi import HTTPException, status


class ValidationError(Exception):
    """
    Raised when a record violates a store-level constraint.

    Models raise it from their attribute validators (required text, maximum
    length, category enumeration, rating range), so every write path is
    checked no matter which layer assigns the value.

    Attributes:
        field: Name of the offending attribute
        message: User-facing description of the violation
    """

    def __init__(self, field: str, message: str):
        super().__init__(message)
        self.field = field
        self.message = message


class DuplicateError(Exception):
    """Raised when a unique business rule (one review per user per product) would be broken."""


class PostNotFoundException(HTTPException):
    """Exception when a post does not exist or has been deactivated."""

    def __init__(self, detail: str = "Post not found"):
        super().__init__(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=detail,
        )


class CommentNotFoundException(HTTPException):
    """Exception when a comment does not exist or has been deactivated."""

    def __init__(self, detail: str = "Comment not found"):
        super().__init__(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=detail,
        )


class ProductNotFoundException(HTTPException):
    """Exception when a product does not exist."""

    def __init__(self, detail: str = "Product not found"):
        super().__init__(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=detail,
        )


class ReviewNotFoundException(HTTPException):
    """Exception when a review does not exist."""

    def __init__(self, detail: str = "Review not found"):
        super().__init__(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=detail,
        )


class NotOwnerException(HTTPException):
    """Exception when a user modifies a resource they do not own."""

    def __init__(self, detail: str = "You can only modify your own content"):
        super().__init__(
            status_code=status.HTTP_403_FORBIDDEN,
            detail=detail,
        )


__all__ = [
    "ValidationError",
    "DuplicateError",
    "PostNotFoundException",
    "CommentNotFoundException",
    "ProductNotFoundException",
    "ReviewNotFoundException",
    "NotOwnerException",
]
