"""Shared submission flow for form dialogs."""

import logging
from typing import Any, Awaitable, Callable, Optional, Tuple

from designhub.dialogs.api_client import APIError
from designhub.dialogs.notifications import Toaster

logger = logging.getLogger(__name__)


GENERIC_RETRY_MESSAGE = "Please try again later."


class BaseDialog:
    """Open/close state plus a guarded remote submission.

    Only one submission runs at a time. Closing or unmounting the dialog
    abandons a submission in flight: its result never touches dialog state.
    """

    def __init__(
        self,
        toaster: Toaster,
        on_open_change: Optional[Callable[[bool], None]] = None,
    ):
        self.toaster = toaster
        self.on_open_change = on_open_change
        self.is_open = False
        self.is_mounted = True
        self.is_submitting = False
        self._generation = 0

    def open(self) -> None:
        if not self.is_mounted:
            raise RuntimeError("Dialog has been unmounted")
        self.is_open = True
        if self.on_open_change:
            self.on_open_change(True)

    def close(self) -> None:
        self._generation += 1
        self.is_submitting = False
        was_open = self.is_open
        self.is_open = False
        if was_open and self.on_open_change:
            self.on_open_change(False)

    def unmount(self) -> None:
        self._generation += 1
        self.is_submitting = False
        self.is_open = False
        self.is_mounted = False

    def reset(self) -> None:
        raise NotImplementedError

    def _reject(self, title: str, description: str) -> bool:
        self.toaster.toast(title, description, variant="destructive")
        return False

    async def _send(
        self,
        request: Callable[[], Awaitable[Any]],
        failure_title: str,
    ) -> Tuple[bool, Any]:
        """Run ``request`` unless one is already in flight.

        Returns ``(True, result)`` when the request succeeded and the dialog
        is still the one that sent it, ``(False, None)`` otherwise. Remote
        failures are logged and reported with a destructive toast.
        """
        if self.is_submitting:
            return False, None

        generation = self._generation
        self.is_submitting = True
        try:
            result = await request()
        except APIError as e:
            if generation != self._generation:
                return False, None
            self.is_submitting = False
            logger.error(
                f"{type(self).__name__} submission failed: status={e.status_code}, error={e.message}",
                exc_info=e.__cause__ is not None,
            )
            self.toaster.toast(failure_title, e.message or GENERIC_RETRY_MESSAGE, variant="destructive")
            return False, None
        except Exception:
            if generation == self._generation:
                self.is_submitting = False
            raise

        if generation != self._generation:
            logger.info(f"{type(self).__name__} closed before the response arrived, result discarded")
            return False, None

        self.is_submitting = False
        return True, result
