from escore.core.records import new_id, now_iso
from escore.errors import NotFound, ValidationFailed
from escore.repositories.store import RecordStore
from escore.schemas import PollIn, VoteIn

COLLECTION = "polls"


def list_polls(store: RecordStore) -> list[dict]:
    return store.read(COLLECTION)


def option_key(option) -> str:
    """JSON-Skalar als Schlüssel im votes-Objekt (1 -> "1", True -> "true")."""
    if isinstance(option, bool):
        return "true" if option else "false"
    if isinstance(option, float) and option.is_integer():
        return str(int(option))
    return str(option)


def _distinct_options(options) -> list[str]:
    seen: list[str] = []
    for opt in options or []:
        if opt is None or opt == "":
            continue
        key = option_key(opt)
        if key not in seen:
            seen.append(key)
    return seen


def validate_poll(payload: PollIn) -> list[str]:
    options = _distinct_options(payload.options)
    if not payload.question or len(options) < 2:
        raise ValidationFailed("A question and at least 2 distinct options are required")
    return options


def create_poll(store: RecordStore, payload: PollIn) -> dict:
    options = validate_poll(payload)
    record = {
        "id": new_id(),
        "question": payload.question,
        "votes": {opt: 0 for opt in options},
        "createdAt": now_iso(),
    }
    with store.transaction(COLLECTION) as tx:
        polls = tx.read(COLLECTION)
        polls.insert(0, record)
        tx.write(COLLECTION, polls)
    return record


def vote(store: RecordStore, payload: VoteIn) -> dict:
    """
    Erhöht den Zähler der Option um genau 1. Unbekannte Optionen
    bekommen einen neuen Zähler (keine Ablehnung).
    """
    with store.transaction(COLLECTION) as tx:
        polls = tx.read(COLLECTION)
        poll = next((p for p in polls if p.get("id") == payload.poll_id), None)
        if poll is None:
            raise NotFound("Poll not found")
        if payload.option is None or payload.option == "":
            raise ValidationFailed("Option is required")
        key = option_key(payload.option)
        votes = poll.setdefault("votes", {})
        votes[key] = votes.get(key, 0) + 1
        tx.write(COLLECTION, polls)
    return poll


def delete_poll(store: RecordStore, poll_id: str) -> None:
    with store.transaction(COLLECTION) as tx:
        polls = tx.read(COLLECTION)
        kept = [p for p in polls if p.get("id") != poll_id]
        if len(kept) == len(polls):
            raise NotFound("Poll not found")
        tx.write(COLLECTION, kept)
