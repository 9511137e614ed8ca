from fastapi import APIRouter

router = APIRouter(tags=["meta"])

LISTING_QUERIES = {
    "topic": "filter by topic slug (case-insensitive, must be a known topic)",
    "sort_by": "article_id | title | topic | author | body | votes | created_at (default created_at)",
    "order": "asc | desc (default desc)",
    "limit": "positive integer page size (default 10)",
    "p": "positive integer page number (default 1)",
}

ENDPOINTS = {
    "GET /api": {"description": "serves this description of every endpoint"},
    "GET /api/topics": {
        "description": "serves an array of all topics",
        "exampleResponse": {"topics": [{"slug": "football", "description": "Footie!"}]},
    },
    "POST /api/topics": {
        "description": "creates a topic",
        "requiredBody": ["slug", "description"],
    },
    "GET /api/articles": {
        "description": "serves a page of articles with the total number matching the filter",
        "queries": LISTING_QUERIES,
        "exampleResponse": {
            "articles": [
                {
                    "article_id": 1,
                    "title": "Seafood substitutions are increasing",
                    "topic": "cooking",
                    "author": "weegembump",
                    "created_at": "2018-05-30T15:59:13",
                    "votes": 0,
                    "comment_count": 6,
                }
            ],
            "total_count": 1,
        },
    },
    "POST /api/articles": {
        "description": "creates an article; author and topic must already exist",
        "requiredBody": ["username", "title", "body", "topic"],
    },
    "GET /api/articles/:article_id": {
        "description": "serves one article including its body and comment_count",
    },
    "PATCH /api/articles/:article_id": {
        "description": "adds inc_votes (signed integer) to the article's votes",
        "requiredBody": ["inc_votes"],
    },
    "DELETE /api/articles/:article_id": {
        "description": "deletes the article and its comments",
    },
    "GET /api/articles/:article_id/comments": {
        "description": "serves a page of the article's comments, newest first",
        "queries": {"limit": LISTING_QUERIES["limit"], "p": LISTING_QUERIES["p"]},
    },
    "POST /api/articles/:article_id/comments": {
        "description": "adds a comment to the article",
        "requiredBody": ["username", "body"],
    },
    "PATCH /api/comments/:comment_id": {
        "description": "adds inc_votes (signed integer) to the comment's votes",
        "requiredBody": ["inc_votes"],
    },
    "DELETE /api/comments/:comment_id": {"description": "deletes the comment"},
    "GET /api/users": {"description": "serves an array of all users"},
    "GET /api/users/:username": {"description": "serves one user"},
}


@router.get("/api")
async def describe_endpoints():
    return {"endpoints": ENDPOINTS}


@router.get("/health")
async def health():
    return {"status": "healthy"}
