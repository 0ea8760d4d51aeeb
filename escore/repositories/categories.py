from escore.core.records import new_id
from escore.errors import NotFound, ValidationFailed
from escore.repositories.store import RecordStore

COLLECTION = "categories"


def list_categories(store: RecordStore) -> list[dict]:
    return store.read(COLLECTION)


def create_category(store: RecordStore, name: str) -> dict:
    with store.transaction(COLLECTION) as tx:
        categories = tx.read(COLLECTION)
        if any(c.get("name") == name for c in categories):
            raise ValidationFailed("A category with this name already exists")
        record = {"id": new_id(), "name": name}
        categories.append(record)
        tx.write(COLLECTION, categories)
    return record


def delete_category(store: RecordStore, category_id: str) -> None:
    with store.transaction(COLLECTION) as tx:
        categories = tx.read(COLLECTION)
        kept = [c for c in categories if c.get("id") != category_id]
        if len(kept) == len(categories):
            raise NotFound("Category not found")
        tx.write(COLLECTION, kept)
