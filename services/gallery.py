import html
import logging
from typing import List, Dict, Any, Optional

import bleach
from fastapi import HTTPException

from services.json_store import JsonStore
from utils.ids import new_id, iso_now

logger = logging.getLogger(__name__)

ADMIN_USER_ID = "admin_master"


def _post_view(post: Dict[str, Any], viewer_id: Optional[str]) -> Dict[str, Any]:
    """Client view of a post: likedBy replaced by the per-viewer likedByMe flag"""
    view = {key: value for key, value in post.items() if key != "likedBy"}
    view["comments"] = post.get("comments") or []
    view["likedByMe"] = viewer_id in (post.get("likedBy") or [])
    return view


def _find_index(records: List[Dict[str, Any]], record_id: Optional[int]) -> int:
    for index, record in enumerate(records):
        if record.get("id") == record_id:
            return index
    return -1


def _can_delete(owner_id: Optional[str], user_id: str, is_admin: Any) -> bool:
    return owner_id == user_id or user_id == ADMIN_USER_ID or is_admin is True


def _plain_text(text: Optional[str]) -> Optional[str]:
    """Strip every HTML tag, leaving the text as typed ("Tom & Jerry <3" is kept verbatim)"""
    if not text:
        return text
    return html.unescape(bleach.clean(text, tags=set(), strip=True))


class GalleryService:
    def __init__(self, store: JsonStore):
        self.store = store

    def list_posts(self, viewer_id: Optional[str]) -> List[Dict[str, Any]]:
        """Get all posts, newest first, flagged with the viewer's like status"""
        posts = self.store.read()
        return [_post_view(post, viewer_id) for post in posts]

    def create_post(
            self,
            title: Optional[str],
            image_url: Optional[str],
            author_name: Optional[str],
            author_id: Optional[str],
            author_avatar: Optional[str] = None
    ) -> Dict[str, Any]:
        """Create a new post at the top of the gallery"""
        if not title or not image_url or not author_name or not author_id:
            raise HTTPException(status_code=400, detail="Dados incompletos")

        new_post = {
            "id": new_id(),
            "title": title,
            "imageUrl": image_url,
            "authorName": author_name,
            "authorId": author_id,
        }
        if author_avatar is not None:
            new_post["authorAvatar"] = author_avatar
        new_post.update({
            "likes": 0,
            "likedBy": [],
            "comments": [],
            "createdAt": iso_now()
        })

        with self.store.lock:
            posts = self.store.read()
            posts.insert(0, new_post)
            self.store.write(posts)

        return _post_view(new_post, None)

    def toggle_like(self, post_id: Optional[int], user_id: Optional[str]) -> Dict[str, Any]:
        """
        Toggle the user's like on a post.

        Args:
            post_id: The ID of the post
            user_id: The ID of the user liking or unliking

        Returns:
            The updated post view
        """
        if not user_id:
            raise HTTPException(status_code=400, detail="userId é obrigatório")

        with self.store.lock:
            posts = self.store.read()
            index = _find_index(posts, post_id)
            if index == -1:
                raise HTTPException(status_code=404, detail="Item não encontrado")

            post = posts[index]
            liked_by = post.setdefault("likedBy", [])
            likes = post.get("likes") or 0

            if user_id in liked_by:
                liked_by.remove(user_id)
                post["likes"] = max(0, likes - 1)
            else:
                liked_by.append(user_id)
                post["likes"] = likes + 1

            self.store.write(posts)

        return _post_view(post, user_id)

    def delete_post(self, post_id: Optional[int], user_id: Optional[str], is_admin: Any = None) -> None:
        """Delete a post together with its comments. Only the author or an admin may do it."""
        logger.info("Deleting post %s (userId=%s, isAdmin=%s)", post_id, user_id, is_admin)

        if not user_id:
            raise HTTPException(status_code=400, detail="userId é obrigatório")

        with self.store.lock:
            posts = self.store.read()
            index = _find_index(posts, post_id)
            if index == -1:
                raise HTTPException(status_code=404, detail="Item não encontrado")

            author_id = posts[index].get("authorId")
            allowed = _can_delete(author_id, user_id, is_admin)
            logger.info("Permission check for post %s: authorId=%s, userId=%s, allowed=%s",
                        post_id, author_id, user_id, allowed)
            if not allowed:
                raise HTTPException(status_code=403, detail="Não autorizado")

            del posts[index]
            self.store.write(posts)

        logger.info("Post %s deleted", post_id)

    def list_comments(self, post_id: Optional[int]) -> List[Dict[str, Any]]:
        """Get the comments of a post in chronological order"""
        posts = self.store.read()
        index = _find_index(posts, post_id)
        if index == -1:
            raise HTTPException(status_code=404, detail="Post não encontrado")
        return posts[index].get("comments") or []

    def add_comment(
            self,
            post_id: Optional[int],
            text: Optional[str],
            author_name: Optional[str],
            author_id: Optional[str],
            author_avatar: Optional[str] = None
    ) -> Dict[str, Any]:
        """Append a comment to a post. Markup is stripped from the text before it is stored."""
        text = _plain_text(text)
        if not text or not author_name or not author_id:
            logger.warning("Incomplete comment for post %s (authorName=%s, authorId=%s)",
                           post_id, author_name, author_id)
            raise HTTPException(status_code=400, detail="Dados incompletos")

        with self.store.lock:
            posts = self.store.read()
            index = _find_index(posts, post_id)
            if index == -1:
                logger.warning("Post %s not found for comment", post_id)
                raise HTTPException(status_code=404, detail="Post não encontrado")

            new_comment = {
                "id": new_id(),
                "postId": post_id,
                "text": text,
                "authorName": author_name,
                "authorId": author_id,
            }
            if author_avatar is not None:
                new_comment["authorAvatar"] = author_avatar
            new_comment["createdAt"] = iso_now()

            comments = posts[index].get("comments") or []
            comments.append(new_comment)
            posts[index]["comments"] = comments
            self.store.write(posts)

        logger.info("Comment %s added to post %s", new_comment["id"], post_id)
        return new_comment

    def delete_comment(
            self,
            post_id: Optional[int],
            comment_id: Optional[int],
            user_id: Optional[str],
            is_admin: Any = None
    ) -> None:
        """Delete a comment. Only its author or an admin may do it."""
        logger.info("Deleting comment %s on post %s (userId=%s, isAdmin=%s)",
                    comment_id, post_id, user_id, is_admin)

        if not user_id:
            raise HTTPException(status_code=400, detail="userId é obrigatório")

        with self.store.lock:
            posts = self.store.read()
            index = _find_index(posts, post_id)
            if index == -1:
                raise HTTPException(status_code=404, detail="Post não encontrado")

            comments = posts[index].get("comments") or []
            comment_index = _find_index(comments, comment_id)
            if comment_index == -1:
                raise HTTPException(status_code=404, detail="Comentário não encontrado")

            comment_author = comments[comment_index].get("authorId")
            allowed = _can_delete(comment_author, user_id, is_admin)
            logger.info("Permission check for comment %s: authorId=%s, userId=%s, allowed=%s",
                        comment_id, comment_author, user_id, allowed)
            if not allowed:
                raise HTTPException(status_code=403, detail="Não autorizado")

            del comments[comment_index]
            posts[index]["comments"] = comments
            self.store.write(posts)

        logger.info("Comment %s deleted", comment_id)
