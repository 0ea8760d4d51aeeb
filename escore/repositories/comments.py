from escore.core.records import new_id, now_iso
from escore.errors import NotFound, ValidationFailed
from escore.repositories.store import RecordStore
from escore.schemas import CommentIn

COLLECTION = "comments"


def list_comments(store: RecordStore, news_id: str) -> list[dict]:
    return [c for c in store.read(COLLECTION) if c.get("newsId") == news_id]


def create_comment(store: RecordStore, news_id: str, payload: CommentIn) -> dict:
    if not payload.author or not payload.text:
        raise ValidationFailed("Author and text are required")
    record = {
        "id": new_id(),
        "newsId": news_id,
        "author": payload.author,
        "text": payload.text,
        "createdAt": now_iso(),
    }
    with store.transaction(COLLECTION) as tx:
        comments = tx.read(COLLECTION)
        comments.append(record)
        tx.write(COLLECTION, comments)
    return record


def delete_comment(store: RecordStore, news_id: str, comment_id: str) -> None:
    def matches(c: dict) -> bool:
        return c.get("id") == comment_id and c.get("newsId") == news_id

    with store.transaction(COLLECTION) as tx:
        comments = tx.read(COLLECTION)
        if not any(matches(c) for c in comments):
            raise NotFound("Comment not found")
        tx.write(COLLECTION, [c for c in comments if not matches(c)])
