"""Share Work dialog: tag and image rules, validation and submission."""

import asyncio
import json

import httpx
import pytest

from designhub.dialogs import CommunityAPI, ImageFile, ShareWorkDialog, Toaster


PNG = b"\x89PNG\r\n\x1a\n" + b"\x00" * 16


def image(n):
    return ImageFile(filename=f"shot{n}.png", content=PNG)


UPLOADED = {"success": True, "images": ["http://cdn/a.png", "http://cdn/b.png"]}


def community_handler(calls, fail_post_with=None, upload_body=UPLOADED, post_body=None):
    def handler(request: httpx.Request) -> httpx.Response:
        calls.append(request)
        if request.url.path.endswith("/uploads/community-images"):
            return httpx.Response(201, json=upload_body)
        if fail_post_with is not None:
            return httpx.Response(400, json={"error": fail_post_with})
        if post_body is not None:
            return httpx.Response(201, json=post_body)
        return httpx.Response(201, json={"id": 7, **json.loads(request.content)})

    return handler


class GatedTransport(httpx.AsyncBaseTransport):
    """Holds every request until ``gate`` is set, then answers like ``community_handler``."""

    def __init__(self, calls):
        self.calls = calls
        self.gate = asyncio.Event()
        self.handler = community_handler([])

    async def handle_async_request(self, request):
        self.calls.append(request)
        await self.gate.wait()
        await request.aread()
        return self.handler(request)


def make_dialog(calls, transport=None, **kwargs):
    responses = {key: kwargs.pop(key) for key in ("fail_post_with", "upload_body", "post_body") if key in kwargs}
    api = CommunityAPI(
        base_url="http://testserver/api/v1",
        token="token",
        transport=transport or httpx.MockTransport(community_handler(calls, **responses)),
    )
    dialog = ShareWorkDialog(api=api, toaster=Toaster(limit=3), **kwargs)
    dialog.open()
    return dialog


def fill(dialog):
    dialog.title = "Poster series"
    dialog.description = "Three posters exploring Swiss grids"
    dialog.add_images([image(1), image(2)])


class TestTags:
    def test_tags_are_trimmed_and_deduplicated_exactly(self):
        dialog = make_dialog([])

        dialog.current_tag = "  print "
        assert dialog.add_tag() is True
        assert dialog.current_tag == ""
        assert dialog.add_tag("print") is False
        assert dialog.add_tag("Print") is True
        assert dialog.add_tag("   ") is False

        assert dialog.tags == ["print", "Print"]

    def test_at_most_ten_tags(self):
        dialog = make_dialog([])
        for n in range(12):
            dialog.add_tag(f"tag{n}")

        assert dialog.tags == [f"tag{n}" for n in range(10)]

    def test_tag_input_is_capped(self):
        dialog = make_dialog([])
        dialog.current_tag = "x" * 30

        assert dialog.current_tag == "x" * 20

    def test_remove_tag(self):
        dialog = make_dialog([])
        dialog.add_tag("a")
        dialog.add_tag("b")
        dialog.remove_tag("a")

        assert dialog.tags == ["b"]


class TestImages:
    def test_three_then_four_keeps_first_five(self):
        dialog = make_dialog([])
        first = [image(n) for n in range(3)]
        second = [image(n) for n in range(3, 7)]

        dialog.add_images(first)
        dialog.add_images(second)

        assert dialog.images == first + second[:2]

    def test_remove_image(self):
        dialog = make_dialog([])
        dialog.add_images([image(1), image(2)])
        dialog.remove_image(0)

        assert [img.filename for img in dialog.images] == ["shot2.png"]


def test_text_inputs_are_capped():
    dialog = make_dialog([])
    dialog.title = "t" * 150
    dialog.description = "d" * 600

    assert len(dialog.title) == 100
    assert len(dialog.description) == 500


@pytest.mark.asyncio
@pytest.mark.parametrize(
    "title, description, with_images, expected",
    [
        ("  ", "", False, "Title required"),
        ("Poster", "  ", False, "Description required"),
        ("Poster", "Swiss grids", False, "Images required"),
    ],
)
async def test_validation_order(title, description, with_images, expected):
    calls = []
    dialog = make_dialog(calls)
    dialog.title = title
    dialog.description = description
    if with_images:
        dialog.add_images([image(1)])

    assert await dialog.submit() is False

    assert calls == []
    assert dialog.toaster.history[-1].title == expected
    assert dialog.toaster.history[-1].variant == "destructive"


@pytest.mark.asyncio
async def test_successful_share_uploads_then_creates_showcase_post():
    calls = []
    shared = []
    dialog = make_dialog(calls, on_work_shared=shared.append)
    fill(dialog)
    dialog.add_tag("Print")

    assert await dialog.submit() is True

    assert [request.url.path for request in calls] == [
        "/api/v1/uploads/community-images",
        "/api/v1/community",
    ]
    assert json.loads(calls[1].content) == {
        "title": "Poster series",
        "content": "Three posters exploring Swiss grids",
        "category": "showcase",
        "tags": ["Print"],
        "images": ["http://cdn/a.png", "http://cdn/b.png"],
    }
    assert shared[0]["id"] == 7
    assert dialog.toaster.history[-1].title == "Work shared successfully!"
    assert dialog.is_open is False
    assert (dialog.title, dialog.description, dialog.tags, dialog.images) == ("", "", [], [])


@pytest.mark.asyncio
async def test_failed_share_keeps_state():
    calls = []
    dialog = make_dialog(calls, fail_post_with="Title is required")
    fill(dialog)

    assert await dialog.submit() is False

    assert dialog.toaster.history[-1].description == "Title is required"
    assert dialog.is_open
    assert dialog.title == "Poster series"
    assert len(dialog.images) == 2
    assert dialog.is_submitting is False


@pytest.mark.asyncio
@pytest.mark.parametrize(
    "responses",
    [
        {"upload_body": {"success": True}},
        {"upload_body": {"images": "http://cdn/a.png"}},
        {"post_body": ["not", "a", "post"]},
    ],
)
async def test_malformed_success_body_is_reported_as_failure(responses):
    shared = []
    dialog = make_dialog([], on_work_shared=shared.append, **responses)
    fill(dialog)

    assert await dialog.submit() is False

    toast = dialog.toaster.history[-1]
    assert toast.title == "Failed to share work"
    assert toast.description == "Please try again later."
    assert shared == []
    assert dialog.is_open
    assert dialog.is_submitting is False
    assert dialog.title == "Poster series"
    assert len(dialog.images) == 2


@pytest.mark.asyncio
async def test_submit_is_ignored_while_in_flight():
    calls = []
    transport = GatedTransport(calls)
    dialog = make_dialog(calls, transport=transport)
    fill(dialog)

    first = asyncio.ensure_future(dialog.submit())
    while not calls:
        await asyncio.sleep(0)

    assert dialog.is_submitting
    assert await dialog.submit() is False

    transport.gate.set()
    assert await first is True
    assert [request.url.path for request in calls] == [
        "/api/v1/uploads/community-images",
        "/api/v1/community",
    ]
    assert [toast.title for toast in dialog.toaster.history] == ["Work shared successfully!"]


@pytest.mark.asyncio
@pytest.mark.parametrize("leave", ["close", "unmount"])
async def test_late_response_after_leaving_is_discarded(leave):
    calls = []
    transport = GatedTransport(calls)
    shared = []
    dialog = make_dialog(calls, transport=transport, on_work_shared=shared.append)
    fill(dialog)

    pending = asyncio.ensure_future(dialog.submit())
    while not calls:
        await asyncio.sleep(0)

    getattr(dialog, leave)()
    transport.gate.set()

    assert await pending is False
    assert shared == []
    assert dialog.toaster.history == []
    assert dialog.title == "Poster series"
    assert len(dialog.images) == 2
