"""Community API endpoints."""

import pytest


POST_PAYLOAD = {
    "title": "Poster series",
    "content": "Three posters exploring Swiss grids",
    "category": "showcase",
    "tags": [" Print ", "GRID"],
    "images": ["http://localhost:8000/uploads/images/community/a.png"],
}


@pytest.fixture
def post(client, headers):
    response = client.post("/api/v1/community", json=POST_PAYLOAD, headers=headers)
    assert response.status_code == 201
    return response.json()


def test_create_post(post, user):
    assert post["title"] == "Poster series"
    assert post["tags"] == ["print", "grid"]
    assert post["author"]["id"] == user.id
    assert post["author"]["name"] == "Alice"
    assert post["like_count"] == 0
    assert post["comment_count"] == 0
    assert post["is_liked"] is False


def test_create_post_requires_auth(client):
    response = client.post("/api/v1/community", json=POST_PAYLOAD)

    assert response.status_code == 401
    assert "error" in response.json()


def test_create_post_with_blank_title_is_rejected(client, headers):
    payload = dict(POST_PAYLOAD, title="   ")
    response = client.post("/api/v1/community", json=payload, headers=headers)

    assert response.status_code == 400
    assert response.json()["error"] == "Title is required"


def test_create_post_with_overlong_tag_is_rejected(client, headers):
    payload = dict(POST_PAYLOAD, tags=["print", "t" * 51])
    response = client.post("/api/v1/community", json=payload, headers=headers)

    assert response.status_code == 400
    assert response.json()["error"] == "Tag cannot be more than 50 characters"
    assert client.get("/api/v1/community").json()["pagination"]["total"] == 0


def test_create_post_with_unknown_category_is_rejected(client, headers):
    payload = dict(POST_PAYLOAD, category="memes")
    response = client.post("/api/v1/community", json=payload, headers=headers)

    assert response.status_code == 400
    body = response.json()
    assert body["error"] == "Validation failed"
    assert body["details"][0]["field"] == "category"


def test_list_posts_with_pagination(client, headers, post):
    response = client.get("/api/v1/community", params={"limit": 1})

    assert response.status_code == 200
    body = response.json()
    assert [item["id"] for item in body["posts"]] == [post["id"]]
    assert body["pagination"] == {"page": 1, "limit": 1, "total": 1, "pages": 1, "has_more": False}


def test_detail_counts_views_and_returns_thread(client, headers, post):
    comment = client.post(
        f"/api/v1/community/{post['id']}/comments", json={"content": "Lovely grid"}, headers=headers
    ).json()
    client.post(
        f"/api/v1/community/{post['id']}/comments",
        json={"content": "Thanks!", "parent_comment_id": comment["id"]},
        headers=headers,
    )

    client.get(f"/api/v1/community/{post['id']}")
    response = client.get(f"/api/v1/community/{post['id']}")

    assert response.status_code == 200
    body = response.json()
    assert body["views"] == 2
    assert body["comment_count"] == 2
    assert [c["content"] for c in body["comments"]] == ["Lovely grid"]
    assert body["comments"][0]["reply_count"] == 1
    assert body["comments"][0]["replies"][0]["content"] == "Thanks!"


def test_like_toggle_and_personalised_flag(client, headers, post):
    url = f"/api/v1/community/{post['id']}/like"

    liked = client.post(url, headers=headers).json()
    assert liked["is_liked"] is True
    assert liked["like_count"] == 1

    listed = client.get("/api/v1/community", headers=headers).json()["posts"][0]
    assert listed["is_liked"] is True
    anonymous = client.get("/api/v1/community").json()["posts"][0]
    assert anonymous["is_liked"] is False

    unliked = client.post(url, headers=headers).json()
    assert unliked == {"post_id": post["id"], "is_liked": False, "like_count": 0, "message": "Post unliked"}


def test_only_author_can_update_or_delete(client, post, other_user, auth_headers):
    foreign = auth_headers(other_user)

    response = client.put(f"/api/v1/community/{post['id']}", json={"title": "Hijacked"}, headers=foreign)
    assert response.status_code == 403

    response = client.delete(f"/api/v1/community/{post['id']}", headers=foreign)
    assert response.status_code == 403


def test_deleted_post_leaves_comment_addressable(client, headers, post):
    comment = client.post(
        f"/api/v1/community/{post['id']}/comments", json={"content": "Still here"}, headers=headers
    ).json()

    response = client.delete(f"/api/v1/community/{post['id']}", headers=headers)
    assert response.json() == {"message": "Post deleted successfully"}

    assert client.get("/api/v1/community").json()["posts"] == []
    assert client.get(f"/api/v1/community/{post['id']}").status_code == 404
    assert client.get(f"/api/v1/community/{post['id']}/comments").status_code == 404

    response = client.get(f"/api/v1/community/comments/{comment['id']}")
    assert response.status_code == 200
    assert response.json()["content"] == "Still here"


def test_reply_to_comment_of_another_post_is_rejected(client, headers, post):
    other = client.post("/api/v1/community", json=dict(POST_PAYLOAD, title="Other"), headers=headers).json()
    foreign_comment = client.post(
        f"/api/v1/community/{other['id']}/comments", json={"content": "Elsewhere"}, headers=headers
    ).json()

    response = client.post(
        f"/api/v1/community/{post['id']}/comments",
        json={"content": "Cross reply", "parent_comment_id": foreign_comment["id"]},
        headers=headers,
    )

    assert response.status_code == 400
    assert response.json() == {"error": "Parent comment not found or invalid"}


def test_comment_like_and_delete(client, headers, post, other_user, auth_headers):
    comment = client.post(
        f"/api/v1/community/{post['id']}/comments", json={"content": "Like me"}, headers=headers
    ).json()

    response = client.post(f"/api/v1/community/comments/{comment['id']}/like", headers=auth_headers(other_user))
    assert response.json()["like_count"] == 1

    response = client.delete(f"/api/v1/community/comments/{comment['id']}", headers=auth_headers(other_user))
    assert response.status_code == 403

    response = client.delete(f"/api/v1/community/comments/{comment['id']}", headers=headers)
    assert response.status_code == 200
    assert client.get(f"/api/v1/community/{post['id']}/comments").json() == {"comments": [], "total": 0}


def test_pin_requires_moderator(client, headers, post, make_user, auth_headers):
    url = f"/api/v1/community/{post['id']}/pin"

    response = client.put(url, json={"is_pinned": True}, headers=headers)
    assert response.status_code == 403
    assert response.json() == {"error": "User role user is not authorized to access this route"}

    moderator = make_user(name="Mod", role="moderator")
    response = client.put(url, json={"is_pinned": True}, headers=auth_headers(moderator))
    assert response.status_code == 200
    assert response.json()["is_pinned"] is True


def test_trending_tags(client, headers, post):
    response = client.get("/api/v1/community/trending/tags")

    assert response.status_code == 200
    assert response.json() == {"tags": [{"tag": "grid", "count": 1}, {"tag": "print", "count": 1}]}


def test_unknown_post_is_404(client):
    response = client.get("/api/v1/community/999")

    assert response.status_code == 404
    assert response.json() == {"error": "Post not found"}
