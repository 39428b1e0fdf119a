"""Share Work dialog controller."""

import logging
from typing import Any, Callable, Dict, Iterable, List, Optional

from designhub.dialogs.api_client import CommunityAPI, ImageFile
from designhub.dialogs.base import BaseDialog
from designhub.dialogs.notifications import Toaster

logger = logging.getLogger(__name__)


TITLE_MAX_LENGTH = 100
DESCRIPTION_MAX_LENGTH = 500
TAG_MAX_LENGTH = 20
MAX_TAGS = 10
MAX_IMAGES = 5


class ShareWorkDialog(BaseDialog):
    """Publishes a piece of work to the community as a showcase post."""

    def __init__(
        self,
        api: CommunityAPI,
        toaster: Toaster,
        on_work_shared: Optional[Callable[[Dict[str, Any]], None]] = None,
        on_open_change: Optional[Callable[[bool], None]] = None,
    ):
        super().__init__(toaster, on_open_change)
        self.api = api
        self.on_work_shared = on_work_shared
        self._title = ""
        self._description = ""
        self._current_tag = ""
        self.tags: List[str] = []
        self.images: List[ImageFile] = []

    @property
    def title(self) -> str:
        return self._title

    @title.setter
    def title(self, value: str) -> None:
        self._title = value[:TITLE_MAX_LENGTH]

    @property
    def description(self) -> str:
        return self._description

    @description.setter
    def description(self, value: str) -> None:
        self._description = value[:DESCRIPTION_MAX_LENGTH]

    @property
    def current_tag(self) -> str:
        return self._current_tag

    @current_tag.setter
    def current_tag(self, value: str) -> None:
        self._current_tag = value[:TAG_MAX_LENGTH]

    def add_tag(self, tag: Optional[str] = None) -> bool:
        """Add ``tag`` (or the tag being typed) to the list.

        Blank tags, exact duplicates and tags past the tenth are ignored.
        """
        if tag is None:
            tag = self.current_tag
        tag = tag[:TAG_MAX_LENGTH].strip()

        if not tag or tag in self.tags or len(self.tags) >= MAX_TAGS:
            return False

        self.tags.append(tag)
        self._current_tag = ""
        return True

    def remove_tag(self, tag: str) -> None:
        self.tags = [existing for existing in self.tags if existing != tag]

    def add_images(self, files: Iterable[ImageFile]) -> None:
        """Accumulate a file selection; only the first five images are kept."""
        self.images = (self.images + list(files))[:MAX_IMAGES]

    def remove_image(self, index: int) -> None:
        del self.images[index]

    def reset(self) -> None:
        self._title = ""
        self._description = ""
        self._current_tag = ""
        self.tags = []
        self.images = []

    async def submit(self) -> bool:
        """Validate and share the work. Returns True when it was published."""
        if self.is_submitting:
            return False

        if not self.title.strip():
            return self._reject("Title required", "Please enter a title for your work.")

        if not self.description.strip():
            return self._reject("Description required", "Please add a description for your work.")

        if not self.images:
            return self._reject("Images required", "Please upload at least one image of your work.")

        title = self.title.strip()
        description = self.description.strip()
        tags = list(self.tags)
        images = list(self.images)

        ok, post = await self._send(
            lambda: self.api.share_work(title, description, tags, images),
            failure_title="Failed to share work",
        )
        if not ok:
            return False

        logger.info(f"Work shared: post={post.get('id')}")
        self.toaster.toast(
            "Work shared successfully!",
            "Your work has been posted to the community.",
        )
        if self.on_work_shared:
            self.on_work_shared(post)

        self.reset()
        self.close()
        return True
