"""Write Review dialog: local validation, submission and failure handling."""

import asyncio
import json
import logging

import httpx
import pytest

from designhub.dialogs import GENERIC_RETRY_MESSAGE, ReviewAPI, Toaster, WriteReviewDialog


class RecordingTransport(httpx.AsyncBaseTransport):
    """Answers every request with the same response and records the calls."""

    def __init__(self, status_code=201, body=None, error=None, gate=None):
        self.status_code = status_code
        self.body = body if body is not None else {"review": {"id": "r1", "rating": 5}}
        self.error = error
        self.gate = gate
        self.requests = []

    async def handle_async_request(self, request):
        self.requests.append(request)
        if self.gate is not None:
            await self.gate.wait()
        if self.error is not None:
            raise self.error
        return httpx.Response(self.status_code, json=self.body)


def make_dialog(transport, **kwargs):
    api = ReviewAPI(base_url="http://testserver/api/v1", token="token", transport=transport)
    dialog = WriteReviewDialog(
        product_id="p1",
        product_name="Minimal Logo Pack",
        api=api,
        toaster=Toaster(limit=3),
        **kwargs,
    )
    dialog.open()
    return dialog


@pytest.mark.asyncio
@pytest.mark.parametrize("rating", [0, -1])
async def test_missing_rating_is_rejected_without_network(rating):
    transport = RecordingTransport()
    dialog = make_dialog(transport)
    dialog.rating = rating
    dialog.comment = "Great product, loved it!"

    assert await dialog.submit() is False

    assert transport.requests == []
    toast = dialog.toaster.history[-1]
    assert toast.title == "Please select a rating"
    assert toast.variant == "destructive"
    assert dialog.is_open
    assert dialog.comment == "Great product, loved it!"


@pytest.mark.asyncio
@pytest.mark.parametrize("comment", ["ok", "   short    ", ""])
async def test_short_comment_is_rejected_without_network(comment):
    transport = RecordingTransport()
    dialog = make_dialog(transport)
    dialog.rating = 4
    dialog.comment = comment

    assert await dialog.submit() is False

    assert transport.requests == []
    assert dialog.toaster.history[-1].title == "Review too short"
    assert dialog.rating == 4


@pytest.mark.asyncio
async def test_rating_is_checked_before_comment():
    dialog = make_dialog(RecordingTransport())
    dialog.comment = "ok"

    await dialog.submit()

    assert [toast.title for toast in dialog.toaster.history] == ["Please select a rating"]


def test_comment_input_is_capped():
    dialog = make_dialog(RecordingTransport())
    dialog.comment = "a" * 600

    assert len(dialog.comment) == 500


@pytest.mark.asyncio
async def test_successful_submission():
    transport = RecordingTransport(body={"review": {"id": "r1", "rating": 5, "comment": "Exceeded"}})
    submitted = []
    open_changes = []
    dialog = make_dialog(transport, on_review_submitted=submitted.append, on_open_change=open_changes.append)
    dialog.rating = 5
    dialog.comment = "  Exceeded all my expectations, would buy again.  "

    assert await dialog.submit() is True

    assert len(transport.requests) == 1
    request = transport.requests[0]
    assert request.method == "POST"
    assert request.url.path == "/api/v1/reviews/product/p1"
    assert request.headers["Authorization"] == "Bearer token"
    assert json.loads(request.content) == {
        "rating": 5,
        "comment": "Exceeded all my expectations, would buy again.",
    }

    assert submitted == [{"id": "r1", "rating": 5, "comment": "Exceeded"}]
    assert dialog.toaster.history[-1].title == "Review submitted!"
    assert dialog.rating == 0
    assert dialog.comment == ""
    assert dialog.is_open is False
    assert open_changes == [True, False]


@pytest.mark.asyncio
async def test_server_error_message_is_shown_and_input_kept(caplog):
    transport = RecordingTransport(status_code=400, body={"error": "You have already reviewed this product"})
    submitted = []
    dialog = make_dialog(transport, on_review_submitted=submitted.append)
    dialog.rating = 3
    dialog.comment = "Decent set of logos overall."

    with caplog.at_level(logging.ERROR, logger="designhub.dialogs.base"):
        assert await dialog.submit() is False

    toast = dialog.toaster.history[-1]
    assert toast.description == "You have already reviewed this product"
    assert toast.variant == "destructive"
    assert submitted == []
    assert dialog.is_open
    assert dialog.rating == 3
    assert dialog.comment == "Decent set of logos overall."
    assert dialog.is_submitting is False
    assert any("submission failed" in record.getMessage() for record in caplog.records)


@pytest.mark.asyncio
async def test_network_failure_uses_generic_message():
    transport = RecordingTransport(error=httpx.ConnectError("connection refused"))
    dialog = make_dialog(transport)
    dialog.rating = 5
    dialog.comment = "Exceeded all my expectations."

    assert await dialog.submit() is False

    assert dialog.toaster.history[-1].description == GENERIC_RETRY_MESSAGE
    assert dialog.is_open


@pytest.mark.asyncio
async def test_error_without_message_uses_generic_message():
    dialog = make_dialog(RecordingTransport(status_code=500, body={"detail": "boom"}))
    dialog.rating = 5
    dialog.comment = "Exceeded all my expectations."

    await dialog.submit()

    assert dialog.toaster.history[-1].description == "Please try again later."


@pytest.mark.asyncio
async def test_submit_is_ignored_while_in_flight():
    gate = asyncio.Event()
    transport = RecordingTransport(gate=gate)
    dialog = make_dialog(transport)
    dialog.rating = 5
    dialog.comment = "Exceeded all my expectations."

    first = asyncio.ensure_future(dialog.submit())
    await asyncio.sleep(0)
    while not transport.requests:
        await asyncio.sleep(0)

    assert dialog.is_submitting
    assert await dialog.submit() is False

    gate.set()
    assert await first is True
    assert len(transport.requests) == 1


@pytest.mark.asyncio
async def test_late_response_after_close_is_discarded():
    gate = asyncio.Event()
    transport = RecordingTransport(gate=gate)
    submitted = []
    dialog = make_dialog(transport, on_review_submitted=submitted.append)
    dialog.rating = 5
    dialog.comment = "Exceeded all my expectations."

    pending = asyncio.ensure_future(dialog.submit())
    while not transport.requests:
        await asyncio.sleep(0)

    dialog.unmount()
    gate.set()

    assert await pending is False
    assert submitted == []
    assert [toast.title for toast in dialog.toaster.history] == []
    assert dialog.rating == 5


@pytest.mark.asyncio
@pytest.mark.parametrize("body", [{"ok": True}, {"review": "r1"}, ["r1"]])
async def test_malformed_success_body_is_reported_as_failure(body):
    submitted = []
    dialog = make_dialog(RecordingTransport(body=body), on_review_submitted=submitted.append)
    dialog.rating = 4
    dialog.comment = "Clean vectors, easy to edit."

    assert await dialog.submit() is False

    toast = dialog.toaster.history[-1]
    assert toast.title == "Failed to submit review"
    assert toast.description == GENERIC_RETRY_MESSAGE
    assert submitted == []
    assert dialog.is_open
    assert dialog.is_submitting is False
    assert (dialog.rating, dialog.comment) == (4, "Clean vectors, easy to edit.")
