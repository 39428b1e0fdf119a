"""Community image uploads."""

import pytest

from designhub.config import settings
from designhub.utils.file_handler import get_file_url, sanitize_filename, validate_magic_bytes


PNG = b"\x89PNG\r\n\x1a\n" + b"\x00" * 32
JPEG = b"\xff\xd8\xff\xe0" + b"\x00" * 32


@pytest.fixture(autouse=True)
def upload_dir(tmp_path, monkeypatch):
    monkeypatch.setattr(settings, "UPLOAD_DIR", str(tmp_path))
    monkeypatch.setattr(settings, "PUBLIC_BASE_URL", "http://cdn.test")
    return tmp_path


def test_upload_images(client, headers, upload_dir):
    response = client.post(
        "/api/v1/uploads/community-images",
        files=[("files", ("a.png", PNG, "image/png")), ("files", ("b.jpg", JPEG, "image/jpeg"))],
        headers=headers,
    )

    assert response.status_code == 201
    urls = response.json()["images"]
    assert len(urls) == 2
    assert urls[0].startswith("http://cdn.test/uploads/images/community/")
    assert urls[0].endswith(".png")
    assert urls[1].endswith(".jpg")
    assert len(list((upload_dir / "images" / "community").iterdir())) == 2


def test_upload_requires_auth(client):
    response = client.post("/api/v1/uploads/community-images", files=[("files", ("a.png", PNG, "image/png"))])

    assert response.status_code == 401


def test_more_than_five_images_is_rejected(client, headers, upload_dir):
    files = [("files", (f"{n}.png", PNG, "image/png")) for n in range(6)]
    response = client.post("/api/v1/uploads/community-images", files=files, headers=headers)

    assert response.status_code == 400
    assert response.json() == {"error": "You can upload at most 5 images"}
    assert not (upload_dir / "images").exists()


def test_fake_extension_is_rejected(client, headers, upload_dir):
    response = client.post(
        "/api/v1/uploads/community-images",
        files=[("files", ("a.png", PNG, "image/png")), ("files", ("evil.png", b"<?php echo 1;", "image/png"))],
        headers=headers,
    )

    assert response.status_code == 400
    assert response.json() == {"error": "File content does not match its extension"}
    assert not (upload_dir / "images").exists()


def test_disallowed_extension(client, headers):
    response = client.post(
        "/api/v1/uploads/community-images",
        files=[("files", ("notes.pdf", b"%PDF-1.4", "application/pdf"))],
        headers=headers,
    )

    assert response.status_code == 400


def test_oversized_file(client, headers, monkeypatch):
    monkeypatch.setattr(settings, "MAX_UPLOAD_SIZE", 16)
    response = client.post(
        "/api/v1/uploads/community-images",
        files=[("files", ("a.png", PNG, "image/png"))],
        headers=headers,
    )

    assert response.status_code == 413


def test_helpers():
    assert sanitize_filename("../../etc/passwd") == "passwd"
    assert sanitize_filename(".hidden file.png") == "hidden_file.png"
    assert validate_magic_bytes(b"RIFF\x00\x00\x00\x00WEBPVP8 ", "webp")
    assert not validate_magic_bytes(b"RIFF\x00\x00\x00\x00AVI ", "webp")
    assert get_file_url("images/community/x.png") == "http://cdn.test/uploads/images/community/x.png"
