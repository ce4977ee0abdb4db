from typing import Any, Optional

from pydantic import BaseModel


# Presence of required fields is checked by GalleryService so that a missing
# field is reported as 400 "Dados incompletos" rather than a schema error.
# Identity fields are opaque: clients send them as strings or numbers.
class PostCreate(BaseModel):
    title: Optional[str] = None
    imageUrl: Optional[str] = None
    authorName: Optional[str] = None
    authorId: Optional[Any] = None
    authorAvatar: Optional[str] = None


class LikeRequest(BaseModel):
    userId: Optional[Any] = None


class CommentRequest(BaseModel):
    text: Optional[str] = None
    authorName: Optional[str] = None
    authorId: Optional[Any] = None
    authorAvatar: Optional[str] = None


class DeleteRequest(BaseModel):
    userId: Optional[Any] = None
    # only a literal JSON true grants admin rights
    isAdmin: Optional[Any] = None
