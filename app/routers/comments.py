from typing import Annotated

from fastapi import APIRouter, Depends, Path
from sqlalchemy.ext.asyncio import AsyncSession

from app.database import get_db
from app.schemas import CommentEnvelope, VoteUpdate
from app.services import comment_service
from app.validation import MAX_INT

router = APIRouter(prefix="/api/comments", tags=["comments"])

CommentId = Annotated[int, Path(ge=-MAX_INT, le=MAX_INT)]


@router.patch("/{comment_id}", response_model=CommentEnvelope)
async def update_comment_votes(
    comment_id: CommentId, data: VoteUpdate, db: AsyncSession = Depends(get_db)
):
    comment = await comment_service.update_comment_votes(db, comment_id, data.inc_votes)
    return {"comment": comment}


@router.delete("/{comment_id}", status_code=204)
async def delete_comment(comment_id: CommentId, db: AsyncSession = Depends(get_db)):
    await comment_service.delete_comment(db, comment_id)
