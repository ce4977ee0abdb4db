import logging
from typing import List, Dict, Any, Optional

from fastapi import APIRouter, HTTPException

from dependencies import Gallery
from models.post import PostCreate, LikeRequest, CommentRequest, DeleteRequest
from utils.ids import parse_id

logger = logging.getLogger(__name__)

router = APIRouter()


@router.get("")
def get_gallery(gallery: Gallery, userId: Optional[str] = None) -> List[Dict[str, Any]]:
    """Get all posts with the viewer's like status"""
    try:
        return gallery.list_posts(userId)
    except Exception as e:
        logger.exception("Error fetching gallery: %s", e)
        raise HTTPException(status_code=500, detail="Erro ao buscar galeria")


@router.post("", status_code=201)
def create_post(gallery: Gallery, post_data: PostCreate) -> Dict[str, Any]:
    """Create a new post"""
    try:
        return gallery.create_post(
            post_data.title,
            post_data.imageUrl,
            post_data.authorName,
            post_data.authorId,
            post_data.authorAvatar
        )
    except HTTPException:
        raise
    except Exception as e:
        logger.exception("Error creating post: %s", e)
        raise HTTPException(status_code=500, detail="Erro ao criar postagem")


@router.post("/{post_id}/like")
def toggle_like(gallery: Gallery, post_id: str, like: Optional[LikeRequest] = None) -> Dict[str, Any]:
    """Toggle like status for a post"""
    like = like or LikeRequest()
    try:
        return gallery.toggle_like(parse_id(post_id), like.userId)
    except HTTPException:
        raise
    except Exception as e:
        logger.exception("Error toggling like: %s", e)
        raise HTTPException(status_code=500, detail="Erro ao processar like")


@router.delete("/{post_id}")
def delete_post(gallery: Gallery, post_id: str, delete_data: Optional[DeleteRequest] = None) -> Dict[str, Any]:
    """Delete a post and its comments (author or admin only)"""
    delete_data = delete_data or DeleteRequest()
    try:
        gallery.delete_post(parse_id(post_id), delete_data.userId, delete_data.isAdmin)
        return {"success": True}
    except HTTPException:
        raise
    except Exception as e:
        logger.exception("Error deleting post: %s", e)
        raise HTTPException(status_code=500, detail="Erro ao apagar postagem")


@router.get("/{post_id}/comments")
def get_comments(gallery: Gallery, post_id: str) -> List[Dict[str, Any]]:
    """Get the comments of a post"""
    try:
        return gallery.list_comments(parse_id(post_id))
    except HTTPException:
        raise
    except Exception as e:
        logger.exception("Error fetching comments: %s", e)
        raise HTTPException(status_code=500, detail="Erro ao buscar comentários")


@router.post("/{post_id}/comments", status_code=201)
def add_comment(gallery: Gallery, post_id: str, comment: CommentRequest) -> Dict[str, Any]:
    """Add a comment to a post"""
    try:
        return gallery.add_comment(
            parse_id(post_id),
            comment.text,
            comment.authorName,
            comment.authorId,
            comment.authorAvatar
        )
    except HTTPException:
        raise
    except Exception as e:
        logger.exception("Error creating comment: %s", e)
        raise HTTPException(
            status_code=500,
            detail={"error": "Erro ao criar comentário", "message": str(e)}
        )


@router.delete("/{post_id}/comments/{comment_id}")
def delete_comment(
        gallery: Gallery,
        post_id: str,
        comment_id: str,
        delete_data: Optional[DeleteRequest] = None
) -> Dict[str, Any]:
    """Delete a comment (comment author or admin only)"""
    delete_data = delete_data or DeleteRequest()
    try:
        gallery.delete_comment(parse_id(post_id), parse_id(comment_id), delete_data.userId, delete_data.isAdmin)
        return {"success": True}
    except HTTPException:
        raise
    except Exception as e:
        logger.exception("Error deleting comment: %s", e)
        raise HTTPException(status_code=500, detail="Erro ao deletar comentário")
