from typing import Annotated

from fastapi import APIRouter, Depends, Path, Request
from sqlalchemy.ext.asyncio import AsyncSession

from app.database import get_db
from app.schemas import (
    ArticleCreate,
    ArticleEnvelope,
    ArticleList,
    CommentCreate,
    CommentEnvelope,
    CommentList,
    VoteUpdate,
)
from app.services import article_service, comment_service
from app.validation import MAX_INT

router = APIRouter(prefix="/api/articles", tags=["articles"])

ArticleId = Annotated[int, Path(ge=-MAX_INT, le=MAX_INT)]


@router.get("", response_model=ArticleList)
async def list_articles(request: Request, db: AsyncSession = Depends(get_db)):
    return await article_service.get_articles(db, dict(request.query_params))


@router.post("", response_model=ArticleEnvelope)
async def create_article(data: ArticleCreate, db: AsyncSession = Depends(get_db)):
    return {"article": await article_service.create_article(db, data)}


@router.get("/{article_id}", response_model=ArticleEnvelope)
async def get_article(article_id: ArticleId, db: AsyncSession = Depends(get_db)):
    return {"article": await article_service.get_article(db, article_id)}


@router.patch("/{article_id}", response_model=ArticleEnvelope)
async def update_article_votes(
    article_id: ArticleId, data: VoteUpdate, db: AsyncSession = Depends(get_db)
):
    article = await article_service.update_article_votes(db, article_id, data.inc_votes)
    return {"article": article}


@router.delete("/{article_id}", status_code=204)
async def delete_article(article_id: ArticleId, db: AsyncSession = Depends(get_db)):
    await article_service.delete_article(db, article_id)


@router.get("/{article_id}/comments", response_model=CommentList)
async def list_comments(
    article_id: ArticleId, request: Request, db: AsyncSession = Depends(get_db)
):
    return await comment_service.get_comments(db, article_id, dict(request.query_params))


@router.post("/{article_id}/comments", status_code=201, response_model=CommentEnvelope)
async def add_comment(
    article_id: ArticleId, data: CommentCreate, db: AsyncSession = Depends(get_db)
):
    return {"comment": await comment_service.add_comment(db, article_id, data)}
