from typing import Any

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class _Payload(BaseModel):
    # Alle Felder optional: Pflichtfelder prüfen die Repositories selbst (-> 400)
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class NewsIn(_Payload):
    title: str | None = None
    content: str | None = None
    image: str | None = None
    status: str | None = None
    # beliebiger JSON-Wert, ausgewertet nach Wahrheitswert
    is_featured: Any = None


class CommentIn(_Payload):
    author: str | None = None
    text: str | None = None


class PollIn(_Payload):
    question: str | None = None
    options: list[str | int | float | bool] | None = None
    # wird ignoriert; die Rolle kommt aus der Session
    role: str | None = None


class VoteIn(_Payload):
    poll_id: str | None = None
    option: str | int | float | bool | None = None


class AdminIn(_Payload):
    name: str | None = None
    email: str | None = None
    role: str = "admin"
    password: str | None = None
    superadmin_token: str | None = None


class RegisterIn(_Payload):
    name: str | None = None
    email: str | None = None
    password: str | None = None


class LoginIn(_Payload):
    email: str | None = None
    password: str | None = None


class CategoryIn(_Payload):
    name: str | None = None
    superadmin_token: str | None = None


class MatchIn(_Payload):
    home: str | None = None
    away: str | None = None
    time: str | None = None
    date: str | None = None
    league: str | None = None
