import random
import threading

import pytest
from fastapi import HTTPException


def _create(gallery, author_id="u1"):
    return gallery.create_post("Sunset", "https://img.example/s.jpg", "Bob", author_id)


def test_create_post_prepends_and_hides_liked_by(gallery):
    first = _create(gallery)
    second = _create(gallery)

    posts = gallery.list_posts(None)
    assert [p["id"] for p in posts] == [second["id"], first["id"]]
    assert all("likedBy" not in p for p in posts)
    assert first["likes"] == 0
    assert first["likedByMe"] is False
    assert "authorAvatar" not in first


@pytest.mark.parametrize("missing", [0, 1, 2, 3])
def test_create_post_requires_fields(gallery, missing):
    args = ["Sunset", "https://img.example/s.jpg", "Bob", "u1"]
    args[missing] = ""

    with pytest.raises(HTTPException) as exc_info:
        gallery.create_post(*args)

    assert exc_info.value.status_code == 400
    assert gallery.list_posts(None) == []


def test_likes_match_liked_by_after_random_toggles(gallery):
    post = _create(gallery)
    users = ["u1", "u2", "u3", "u4"]
    rng = random.Random(42)

    for _ in range(200):
        gallery.toggle_like(post["id"], rng.choice(users))
        stored = gallery.store.read()[0]
        assert stored["likes"] == len(stored["likedBy"])
        assert stored["likes"] >= 0


def test_double_toggle_restores_state(gallery):
    post = _create(gallery)
    gallery.toggle_like(post["id"], "u2")

    gallery.toggle_like(post["id"], "u3")
    view = gallery.toggle_like(post["id"], "u3")

    assert view["likes"] == 1
    assert view["likedByMe"] is False


def test_toggle_like_floors_at_zero(gallery):
    post = _create(gallery)
    posts = gallery.store.read()
    posts[0]["likedBy"] = ["u2"]
    posts[0]["likes"] = 0
    gallery.store.write(posts)

    view = gallery.toggle_like(post["id"], "u2")

    assert view["likes"] == 0


def test_toggle_like_on_legacy_post_without_liked_by(gallery):
    gallery.store.write([{"id": 7, "title": "old", "likes": 0}])

    view = gallery.toggle_like(7, "u1")

    assert view["likes"] == 1
    assert view["likedByMe"] is True
    assert view["comments"] == []


def test_toggle_like_errors(gallery):
    with pytest.raises(HTTPException) as exc_info:
        gallery.toggle_like(1, None)
    assert exc_info.value.status_code == 400

    with pytest.raises(HTTPException) as exc_info:
        gallery.toggle_like(1, "u1")
    assert exc_info.value.status_code == 404


def test_delete_post_permissions(gallery):
    post = _create(gallery, author_id="owner")

    with pytest.raises(HTTPException) as exc_info:
        gallery.delete_post(post["id"], "intruder", False)
    assert exc_info.value.status_code == 403
    assert len(gallery.list_posts(None)) == 1

    # only a literal True counts as the admin flag
    with pytest.raises(HTTPException):
        gallery.delete_post(post["id"], "intruder", "true")

    gallery.delete_post(post["id"], "intruder", True)
    assert gallery.list_posts(None) == []


def test_delete_post_removes_comments(gallery):
    post = _create(gallery)
    gallery.add_comment(post["id"], "Nice", "Ann", "u2")

    gallery.delete_post(post["id"], "admin_master")

    with pytest.raises(HTTPException) as exc_info:
        gallery.list_comments(post["id"])
    assert exc_info.value.status_code == 404


def test_comments_are_chronological(gallery):
    post = _create(gallery)
    first = gallery.add_comment(post["id"], "first", "Ann", "u2")
    second = gallery.add_comment(post["id"], "second", "Cid", "u3", "https://img.example/cid.png")

    comments = gallery.list_comments(post["id"])

    assert [c["id"] for c in comments] == [first["id"], second["id"]]
    assert comments[0]["postId"] == post["id"]
    assert comments[1]["authorAvatar"] == "https://img.example/cid.png"
    assert gallery.list_posts(None)[0]["comments"] == comments


def test_comment_html_is_stripped(gallery):
    post = _create(gallery)

    comment = gallery.add_comment(post["id"], "<b>nice</b> shot", "Ann", "u2")

    assert comment["text"] == "nice shot"
    assert gallery.list_comments(post["id"])[0]["text"] == "nice shot"


def test_comment_plain_text_is_kept_verbatim(gallery):
    post = _create(gallery)

    comment = gallery.add_comment(post["id"], "Tom & Jerry <3", "Ann", "u2")

    assert comment["text"] == "Tom & Jerry <3"
    assert gallery.list_comments(post["id"])[0]["text"] == "Tom & Jerry <3"


def test_comment_that_is_only_markup_is_rejected(gallery):
    post = _create(gallery)

    with pytest.raises(HTTPException) as exc_info:
        gallery.add_comment(post["id"], "<img src=x>", "Ann", "u2")

    assert exc_info.value.status_code == 400
    assert gallery.list_comments(post["id"]) == []


def test_delete_comment(gallery):
    post = _create(gallery)
    comment = gallery.add_comment(post["id"], "hello", "Ann", "u2")

    with pytest.raises(HTTPException) as exc_info:
        gallery.delete_comment(post["id"], comment["id"], "u1")
    # the post author does not own the comment
    assert exc_info.value.status_code == 403

    with pytest.raises(HTTPException) as exc_info:
        gallery.delete_comment(post["id"], comment["id"] + 1, "u2")
    assert exc_info.value.status_code == 404
    assert exc_info.value.detail == "Comentário não encontrado"

    gallery.delete_comment(post["id"], comment["id"], "u2")
    assert gallery.list_comments(post["id"]) == []


def test_listing_while_posting_never_fails(gallery):
    stop = threading.Event()
    errors = []

    def poster():
        while not stop.is_set():
            _create(gallery)

    thread = threading.Thread(target=poster)
    thread.start()
    try:
        for _ in range(300):
            try:
                gallery.list_posts("u1")
            except ValueError as e:
                errors.append(e)
    finally:
        stop.set()
        thread.join()

    assert errors == []
