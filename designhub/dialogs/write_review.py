"""Write Review dialog controller."""

import logging
from typing import Any, Callable, Dict, Optional

from designhub.dialogs.api_client import ReviewAPI
from designhub.dialogs.base import BaseDialog
from designhub.dialogs.notifications import Toaster

logger = logging.getLogger(__name__)


REVIEW_MIN_LENGTH = 10
REVIEW_MAX_LENGTH = 500


class WriteReviewDialog(BaseDialog):
    """
    Collects a star rating and a comment for one product and submits them.

    Validation runs before any network call, rating first:
    - rating must be 1 to 5 (0 means no star selected)
    - trimmed comment must be at least 10 characters

    On success the server's review object is passed to ``on_review_submitted``,
    the form is cleared and the dialog closes. On failure the dialog stays open
    with the entered values kept.
    """

    def __init__(
        self,
        product_id: Any,
        product_name: str,
        api: ReviewAPI,
        toaster: Toaster,
        on_review_submitted: Optional[Callable[[Dict[str, Any]], None]] = None,
        on_open_change: Optional[Callable[[bool], None]] = None,
    ):
        super().__init__(toaster, on_open_change)
        self.product_id = product_id
        self.product_name = product_name
        self.api = api
        self.on_review_submitted = on_review_submitted
        self.rating = 0
        self._comment = ""

    @property
    def comment(self) -> str:
        return self._comment

    @comment.setter
    def comment(self, value: str) -> None:
        # Input is capped like a maxLength text area
        self._comment = value[:REVIEW_MAX_LENGTH]

    @property
    def rating_label(self) -> str:
        if self.rating <= 0:
            return ""
        return f"{self.rating} star{'s' if self.rating > 1 else ''}"

    def reset(self) -> None:
        self.rating = 0
        self._comment = ""

    async def submit(self) -> bool:
        """Validate and submit the review. Returns True when it was accepted."""
        if self.is_submitting:
            return False

        if not 1 <= self.rating <= 5:
            return self._reject(
                "Please select a rating",
                "You need to rate this product before submitting your review.",
            )

        comment = self.comment.strip()
        if len(comment) < REVIEW_MIN_LENGTH:
            return self._reject(
                "Review too short",
                f"Please write at least {REVIEW_MIN_LENGTH} characters for your review.",
            )

        ok, review = await self._send(
            lambda: self.api.create_review(self.product_id, self.rating, comment),
            failure_title="Failed to submit review",
        )
        if not ok:
            return False

        logger.info(f"Review submitted for product {self.product_id}")
        self.toaster.toast(
            "Review submitted!",
            "Thank you for your feedback. Your review will be published soon.",
        )
        if self.on_review_submitted:
            self.on_review_submitted(review)

        self.reset()
        self.close()
        return True
