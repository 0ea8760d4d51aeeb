from escore.core.records import new_id, now_iso
from escore.core.teams import team_entry
from escore.errors import NotFound, ValidationFailed
from escore.repositories.store import RecordStore
from escore.schemas import MatchIn

COLLECTION = "matches"


def _validate(payload: MatchIn) -> None:
    if not all((payload.home, payload.away, payload.time, payload.date, payload.league)):
        raise ValidationFailed("All fields are required")
    if payload.home == payload.away:
        raise ValidationFailed("Home and away teams must be different")


def _fixture_fields(payload: MatchIn) -> dict:
    return {
        "home": team_entry(payload.home),
        "away": team_entry(payload.away),
        "time": payload.time,
        "date": payload.date,
        "league": payload.league,
    }


def list_matches(store: RecordStore) -> list[dict]:
    return store.read(COLLECTION)


def create_match(store: RecordStore, payload: MatchIn) -> dict:
    _validate(payload)
    record = {"id": new_id(), **_fixture_fields(payload), "createdAt": now_iso()}
    with store.transaction(COLLECTION) as tx:
        matches = tx.read(COLLECTION)
        matches.append(record)
        tx.write(COLLECTION, matches)
    return record


def update_match(store: RecordStore, match_id: str, payload: MatchIn) -> dict:
    """Ersetzt alle Spielfelder (kein Merge) und setzt updatedAt."""
    _validate(payload)
    with store.transaction(COLLECTION) as tx:
        matches = tx.read(COLLECTION)
        current = next((m for m in matches if m.get("id") == match_id), None)
        if current is None:
            raise NotFound("Match not found")
        current.update(_fixture_fields(payload))
        current["updatedAt"] = now_iso()
        tx.write(COLLECTION, matches)
    return current


def delete_match(store: RecordStore, match_id: str) -> None:
    with store.transaction(COLLECTION) as tx:
        matches = tx.read(COLLECTION)
        kept = [m for m in matches if m.get("id") != match_id]
        if len(kept) == len(matches):
            raise NotFound("Match not found")
        tx.write(COLLECTION, kept)
