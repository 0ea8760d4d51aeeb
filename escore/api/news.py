# ============================
# 📁 escore/api/news.py
# (Nachrichten + Kommentare)

from fastapi import APIRouter, Depends

from escore.api.deps import get_store
from escore.repositories import comments as comments_repo
from escore.repositories import news as news_repo
from escore.repositories.store import RecordStore
from escore.schemas import CommentIn, NewsIn

router = APIRouter(prefix="/api/news", tags=["news"])


@router.get("")
def list_news(store: RecordStore = Depends(get_store)):
    return news_repo.list_news(store)


@router.post("", status_code=201)
def create_news(payload: NewsIn, store: RecordStore = Depends(get_store)):
    return news_repo.create_news(store, payload)


@router.put("/{news_id}")
def update_news(news_id: str, payload: NewsIn, store: RecordStore = Depends(get_store)):
    news_repo.update_news(store, news_id, payload)
    return {"success": True}


@router.delete("/{news_id}")
def delete_news(news_id: str, store: RecordStore = Depends(get_store)):
    news_repo.delete_news(store, news_id)
    return {"success": True}


# -----------------------------
# Kommentare
# -----------------------------
@router.get("/{news_id}/comments")
def list_comments(news_id: str, store: RecordStore = Depends(get_store)):
    return comments_repo.list_comments(store, news_id)


@router.post("/{news_id}/comments", status_code=201)
def create_comment(news_id: str, payload: CommentIn, store: RecordStore = Depends(get_store)):
    return comments_repo.create_comment(store, news_id, payload)


@router.delete("/{news_id}/comments/{comment_id}")
def delete_comment(news_id: str, comment_id: str, store: RecordStore = Depends(get_store)):
    comments_repo.delete_comment(store, news_id, comment_id)
    return {"success": True}
