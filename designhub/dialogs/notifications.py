"""Transient, auto-dismissing notifications shown by the dialogs."""

import itertools
import time
from dataclasses import dataclass, field
from typing import Callable, List, Optional

from designhub.config import settings


TOAST_VARIANTS = ("default", "destructive")


@dataclass
class Toast:
    """A single notification."""
    id: int
    title: str
    description: str = ""
    variant: str = "default"
    duration: float = 5.0
    created_at: float = 0.0

    def expired(self, now: float) -> bool:
        return now - self.created_at >= self.duration


@dataclass
class Toaster:
    """Keeps the visible toasts.

    At most ``limit`` toasts are visible, newest first. A toast disappears
    ``duration`` seconds after it was shown or when dismissed. Every toast
    ever shown stays in ``history``.
    """
    duration: float = field(default_factory=lambda: settings.TOAST_DURATION_SECONDS)
    limit: int = 1
    clock: Callable[[], float] = time.monotonic
    history: List[Toast] = field(default_factory=list)

    def __post_init__(self):
        self._ids = itertools.count(1)
        self._visible: List[Toast] = []

    def toast(
        self,
        title: str,
        description: str = "",
        variant: str = "default",
        duration: Optional[float] = None,
    ) -> Toast:
        if variant not in TOAST_VARIANTS:
            raise ValueError(f"Toast variant must be one of: {', '.join(TOAST_VARIANTS)}")

        item = Toast(
            id=next(self._ids),
            title=title,
            description=description,
            variant=variant,
            duration=self.duration if duration is None else duration,
            created_at=self.clock(),
        )
        self.history.append(item)
        self._visible = [item] + self._visible[: max(self.limit - 1, 0)]
        return item

    @property
    def active(self) -> List[Toast]:
        """Visible toasts, with expired ones dropped."""
        now = self.clock()
        self._visible = [item for item in self._visible if not item.expired(now)]
        return list(self._visible)

    def dismiss(self, toast_id: Optional[int] = None) -> None:
        """Dismiss one toast, or all of them when no id is given."""
        if toast_id is None:
            self._visible = []
        else:
            self._visible = [item for item in self._visible if item.id != toast_id]
