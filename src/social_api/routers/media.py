from typing import List, Optional

from fastapi import APIRouter, Depends, File, HTTPException, Query, UploadFile, status
from fastapi.concurrency import run_in_threadpool

from social_api.database.schemas import CommentDraft, LikeDraft
from social_api.db_layer import MediaService
from social_api.dependencies import media_service
from social_api.schemas import (
    CommentResponse,
    CommentsResponse,
    DeleteMediaRequest,
    DeleteMediaResponse,
    LikeAction,
    LikeActionResponse,
    LikeRequest,
    LikesResponse,
    MediaListResponse,
    UploadMediaResponse,
)

router = APIRouter()


@router.get("/media", response_model=MediaListResponse)
def list_media(media: MediaService = Depends(media_service)) -> MediaListResponse:
    """List every uploaded media file, most recent first."""
    return MediaListResponse(media=media.list_media())


@router.post("/media/upload", response_model=UploadMediaResponse, status_code=status.HTTP_201_CREATED)
async def upload_media(
    files: Optional[List[UploadFile]] = File(None, description="One or more images or videos"),
    media: MediaService = Depends(media_service),
) -> UploadMediaResponse:
    """Upload images and videos under unique names in `media/`."""
    if not files:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="No files provided")

    payload = [(file.filename, await file.read(), file.content_type) for file in files]
    uploaded = await run_in_threadpool(media.upload_media, payload)
    return UploadMediaResponse(success=True, files=uploaded)


@router.delete("/media", response_model=DeleteMediaResponse)
def delete_media(
    body: DeleteMediaRequest,
    media: MediaService = Depends(media_service),
) -> DeleteMediaResponse:
    """
    Delete media files by id.

    Each id is reported separately; one failure does not fail the batch.
    """
    results = media.delete_media(body.ids)
    return DeleteMediaResponse(
        success=True,
        deleted_count=sum(1 for result in results if result.success),
        blob_deletion_results=results,
    )


@router.get("/media/comments", response_model=CommentsResponse)
def get_comments(
    media_id: Optional[str] = Query(None, alias="mediaId"),
    media: MediaService = Depends(media_service),
) -> CommentsResponse:
    """Comments on a media item, oldest first."""
    if not media_id:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Media ID is required")
    return CommentsResponse(comments=media.get_comments(media_id))


@router.post("/media/comments", response_model=CommentResponse, status_code=status.HTTP_201_CREATED)
def add_comment(
    draft: CommentDraft,
    media: MediaService = Depends(media_service),
) -> CommentResponse:
    return CommentResponse(comment=media.add_comment(draft))


@router.get("/media/likes", response_model=LikesResponse)
def get_likes(
    media_id: Optional[str] = Query(None, alias="mediaId"),
    user_id: Optional[str] = Query(None, alias="userId", description="Reports whether this user liked it"),
    media: MediaService = Depends(media_service),
) -> LikesResponse:
    if not media_id:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Media ID is required")

    likes = media.get_likes(media_id)
    return LikesResponse(
        count=len(likes),
        user_liked=any(like.user_id == user_id for like in likes),
        likes=likes,
    )


@router.post("/media/likes", response_model=LikeActionResponse)
def toggle_like(
    body: LikeRequest,
    media: MediaService = Depends(media_service),
) -> LikeActionResponse:
    """Like or unlike a media item. Both actions are idempotent."""
    if body.action == LikeAction.LIKE:
        media.like(LikeDraft(media_id=body.media_id, user_id=body.user_id, user_name=body.user_name))
    else:
        media.unlike(body.media_id, body.user_id)

    likes = media.get_likes(body.media_id)
    return LikeActionResponse(
        success=True,
        count=len(likes),
        user_liked=any(like.user_id == body.user_id for like in likes),
    )
