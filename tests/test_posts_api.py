import pytest

from minilink_api.app.services.post_service import PostService


def _create(client, headers, content="hello"):
    res = client.post("/api/post/create", json={"content": content}, headers=headers)
    assert res.status_code == 201, res.text
    return res.json()


def test_example_flow_like_toggle(client, register):
    ann, headers = register(name="Ann", email="a@x.com", password="secret1")
    post = _create(client, headers, "hello")
    assert post["likes"] == []
    assert post["comments"] == []
    assert post["author"] == {"id": ann["id"], "name": "Ann", "email": "a@x.com"}

    res = client.put(f"/api/post/like/{post['id']}", headers=headers)
    assert res.status_code == 200
    assert res.json() == {"message": "Post liked", "liked": True, "likes": [ann["id"]]}

    res = client.put(f"/api/post/like/{post['id']}", headers=headers)
    assert res.json() == {"message": "Post unliked", "liked": False, "likes": []}


@pytest.mark.parametrize("content", ["", "   ", "x" * 1001])
def test_create_rejects_bad_content(client, register, content):
    _, headers = register()
    res = client.post("/api/post/create", json={"content": content}, headers=headers)
    assert res.status_code == 400
    assert "message" in res.json()


def test_create_rejects_missing_content(client, register):
    _, headers = register()
    res = client.post("/api/post/create", json={}, headers=headers)
    assert res.status_code == 400
    assert res.json() == {"message": "Content is required"}


@pytest.mark.parametrize("content", ["x", "x" * 1000])
def test_create_accepts_content_within_bounds(client, register, content):
    _, headers = register()
    assert _create(client, headers, content)["content"] == content


def test_create_trims_content(client, register):
    _, headers = register()
    assert _create(client, headers, "  padded  ")["content"] == "padded"


def test_feed_and_own_posts(client, register):
    ann, ann_headers = register(name="Ann", email="a@x.com")
    bob, bob_headers = register(name="Bob", email="b@x.com")
    first = _create(client, ann_headers, "ann 1")
    second = _create(client, ann_headers, "ann 2")
    bobs = _create(client, bob_headers, "bob 1")

    feed = client.get("/api/post/feed", headers=ann_headers).json()
    assert [p["id"] for p in feed] == [bobs["id"]]
    assert all(p["author"]["id"] != ann["id"] for p in feed)

    own = client.get("/api/post/loggedUser", headers=ann_headers).json()
    assert [p["id"] for p in own] == [second["id"], first["id"]]
    assert all(p["author"]["id"] == ann["id"] for p in own)

    bob_feed = client.get("/api/post/feed", headers=bob_headers).json()
    assert [p["id"] for p in bob_feed] == [second["id"], first["id"]]
    assert bob_feed[0]["author"] == {"id": ann["id"], "name": "Ann", "email": "a@x.com"}


def test_get_post_by_id(client, register):
    _, headers = register()
    post = _create(client, headers)
    res = client.get(f"/api/post/{post['id']}", headers=headers)
    assert res.status_code == 200
    assert res.json()["content"] == "hello"


def test_get_unknown_post(client, register):
    _, headers = register()
    res = client.get("/api/post/999", headers=headers)
    assert res.status_code == 404
    assert res.json() == {"message": "Post not found"}


def test_non_numeric_post_id_is_400(client, register):
    _, headers = register()
    assert client.get("/api/post/abc", headers=headers).status_code == 400


def test_update_post_by_author(client, register):
    _, headers = register()
    post = _create(client, headers)
    res = client.put(f"/api/post/{post['id']}", json={"content": "edited"}, headers=headers)
    assert res.status_code == 200
    assert res.json()["content"] == "edited"


def test_update_blank_content_keeps_text(client, register):
    _, headers = register()
    post = _create(client, headers)
    res = client.put(f"/api/post/{post['id']}", json={"content": "  "}, headers=headers)
    assert res.status_code == 200
    assert res.json()["content"] == "hello"


def test_update_too_long_content(client, register):
    _, headers = register()
    post = _create(client, headers)
    res = client.put(f"/api/post/{post['id']}", json={"content": "x" * 1001}, headers=headers)
    assert res.status_code == 400


def test_update_and_delete_by_other_user_forbidden(client, register):
    _, ann_headers = register(email="a@x.com")
    _, bob_headers = register(name="Bob", email="b@x.com")
    post = _create(client, ann_headers)

    res = client.put(f"/api/post/{post['id']}", json={"content": "hijack"}, headers=bob_headers)
    assert res.status_code == 403
    assert res.json() == {"message": "Unauthorized"}
    assert client.delete(f"/api/post/{post['id']}", headers=bob_headers).status_code == 403
    assert client.get(f"/api/post/{post['id']}", headers=ann_headers).json()["content"] == "hello"


def test_update_and_delete_unknown_post(client, register):
    _, headers = register()
    assert client.put("/api/post/42", json={"content": "x"}, headers=headers).status_code == 404
    assert client.delete("/api/post/42", headers=headers).status_code == 404


def test_delete_removes_post_from_store_and_profile(client, register):
    _, headers = register()
    keep = _create(client, headers, "keep")
    gone = _create(client, headers, "gone")
    assert client.get("/api/profile/view", headers=headers).json()["posts"] == [keep["id"], gone["id"]]

    res = client.delete(f"/api/post/{gone['id']}", headers=headers)
    assert res.status_code == 200
    assert res.json() == {"message": "Post deleted successfully"}

    assert client.get(f"/api/post/{gone['id']}", headers=headers).status_code == 404
    assert client.get("/api/profile/view", headers=headers).json()["posts"] == [keep["id"]]


def test_like_unknown_post(client, register):
    _, headers = register()
    assert client.put("/api/post/like/77", headers=headers).status_code == 404


def test_likes_from_several_users(client, register):
    ann, ann_headers = register(email="a@x.com")
    bob, bob_headers = register(name="Bob", email="b@x.com")
    post = _create(client, ann_headers)
    client.put(f"/api/post/like/{post['id']}", headers=bob_headers)
    res = client.put(f"/api/post/like/{post['id']}", headers=ann_headers)
    assert res.json()["likes"] == [bob["id"], ann["id"]]
    assert client.get(f"/api/post/{post['id']}", headers=ann_headers).json()["likes"] == [bob["id"], ann["id"]]


def test_comments(client, register):
    ann, ann_headers = register(name="Ann", email="a@x.com")
    bob, bob_headers = register(name="Bob", email="b@x.com")
    post = _create(client, ann_headers)

    res = client.post(f"/api/post/comment/{post['id']}", json={"text": "nice"}, headers=bob_headers)
    assert res.status_code == 201
    body = res.json()
    assert body["message"] == "Comment added"
    assert [(c["user"], c["text"]) for c in body["comments"]] == [({"id": bob["id"], "name": "Bob"}, "nice")]
    assert body["comments"][0]["created_at"]

    client.post(f"/api/post/comment/{post['id']}", json={"text": "thanks"}, headers=ann_headers)
    res = client.get(f"/api/post/comments/{post['id']}", headers=ann_headers)
    assert res.status_code == 200
    assert [c["text"] for c in res.json()] == ["nice", "thanks"]
    assert [c["user"]["name"] for c in res.json()] == ["Bob", "Ann"]

    feed = client.get("/api/post/feed", headers=bob_headers).json()
    assert [c["user"]["name"] for c in feed[0]["comments"]] == ["Bob", "Ann"]


@pytest.mark.parametrize("text", ["", "   ", "y" * 501])
def test_comment_rejects_bad_text(client, register, text):
    _, headers = register()
    post = _create(client, headers)
    res = client.post(f"/api/post/comment/{post['id']}", json={"text": text}, headers=headers)
    assert res.status_code == 400


def test_comment_on_unknown_post(client, register):
    _, headers = register()
    assert client.post("/api/post/comment/5", json={"text": "hi"}, headers=headers).status_code == 404
    assert client.get("/api/post/comments/5", headers=headers).status_code == 404


@pytest.mark.parametrize(
    "method, path",
    [
        ("GET", "/api/post/99999999999999999999"),
        ("PUT", "/api/post/like/99999999999999999999"),
        ("GET", "/api/post/comments/99999999999999999999"),
        ("DELETE", "/api/post/99999999999999999999"),
    ],
)
def test_out_of_range_post_id_is_404(client, register, method, path):
    _, headers = register()
    res = client.request(method, path, headers=headers)
    assert res.status_code == 404
    assert res.json() == {"message": "Post not found"}


@pytest.mark.parametrize(
    "path, body",
    [
        ("/api/post/create", b'{"content": "hi \\ud800"}'),
        ("/api/post/comment/{id}", b'{"text": "\\udfff"}'),
    ],
)
def test_lone_surrogate_in_text_is_400(client, register, path, body):
    _, headers = register()
    post = _create(client, headers)
    res = client.post(
        path.format(id=post["id"]),
        content=body,
        headers={**headers, "Content-Type": "application/json"},
    )
    assert res.status_code == 400
    assert "Invalid characters" in res.json()["message"]


def test_unexpected_error_is_generic_500(db_path, monkeypatch):
    from fastapi.testclient import TestClient
    from minilink_api.app.main import create_app

    async def boom(cls, viewer_id):
        raise RuntimeError("database exploded at /secret/path")

    with TestClient(create_app(), raise_server_exceptions=False) as c:
        res = c.post("/api/auth/signup", json={"name": "Ann", "email": "a@x.com", "password": "pw"})
        headers = {"Authorization": f"Bearer {res.json()['token']}"}
        monkeypatch.setattr(PostService, "get_feed", classmethod(boom))
        res = c.get("/api/post/feed", headers=headers)
    assert res.status_code == 500
    assert res.json() == {"message": "Server error"}
