from escore.core.records import new_id, now_iso
from escore.errors import NotFound, ValidationFailed
from escore.repositories.store import RecordStore
from escore.schemas import NewsIn

COLLECTION = "news"


def _truthy(value) -> bool:
    # wie im Frontend (JS): leere Listen/Objekte zählen als wahr
    if isinstance(value, (list, dict)):
        return True
    return bool(value)


def _clear_featured(news: list[dict]) -> None:
    # Nur eine Nachricht darf "Nachricht des Tages" sein
    for item in news:
        item["isFeatured"] = False


def list_news(store: RecordStore) -> list[dict]:
    return [n for n in store.read(COLLECTION) if not n.get("deleted")]


def create_news(store: RecordStore, payload: NewsIn) -> dict:
    if not payload.title or not payload.content:
        raise ValidationFailed("Title and content are required")

    record = {
        "id": new_id(),
        "title": payload.title,
        "content": payload.content,
        "image": payload.image or None,
        "status": payload.status or "Draft",
        "deleted": False,
        "publishedAt": now_iso(),
        "isFeatured": _truthy(payload.is_featured),
    }
    with store.transaction(COLLECTION) as tx:
        news = tx.read(COLLECTION)
        if record["isFeatured"]:
            _clear_featured(news)
        news.insert(0, record)  # neueste zuerst
        tx.write(COLLECTION, news)
    return record


def update_news(store: RecordStore, news_id: str, payload: NewsIn) -> dict:
    """
    Partielles Update: leere/fehlende Felder behalten ihren Wert.
    image wird nur übernommen, wenn es im Request vorkommt (auch null).
    isFeatured wird nur angefasst, wenn es im Request vorkommt.
    """
    sent = payload.model_fields_set
    with store.transaction(COLLECTION) as tx:
        news = tx.read(COLLECTION)
        current = next((n for n in news if n.get("id") == news_id), None)
        if current is None:
            raise NotFound("News not found")

        if "is_featured" in sent:
            if _truthy(payload.is_featured):
                _clear_featured(news)
            current["isFeatured"] = _truthy(payload.is_featured)

        current["title"] = payload.title or current.get("title")
        current["content"] = payload.content or current.get("content")
        current["status"] = payload.status or current.get("status")
        if "image" in sent:
            current["image"] = payload.image
        tx.write(COLLECTION, news)
    return current


def delete_news(store: RecordStore, news_id: str) -> None:
    """Soft-Delete: der Datensatz (und seine Kommentare) bleibt gespeichert."""
    with store.transaction(COLLECTION) as tx:
        news = tx.read(COLLECTION)
        current = next((n for n in news if n.get("id") == news_id), None)
        if current is None:
            raise NotFound("News not found")
        current["deleted"] = True
        tx.write(COLLECTION, news)
