"""Records, payloads and the response envelope."""

from __future__ import annotations

from dataclasses import asdict, dataclass, field
from typing import Any

_I32_MIN = -(2**31)
_I32_MAX = 2**31 - 1


class ValidationError(Exception):
    """Raised when a payload fails field validation; holds messages per field."""

    def __init__(self, errors: dict[str, list[str]]):
        super().__init__("Validation Error")
        self.errors = errors


def _serialize(value: Any) -> Any:
    if hasattr(value, "to_dict"):
        return value.to_dict()
    if isinstance(value, (list, tuple)):
        return [_serialize(item) for item in value]
    if isinstance(value, dict):
        return {key: _serialize(item) for key, item in value.items()}
    return value


@dataclass
class ApiResponse:
    """The JSON envelope returned by every endpoint."""

    status: int
    message: str
    data: Any = None

    def to_dict(self) -> dict[str, Any]:
        return {
            "status": self.status,
            "message": self.message,
            "data": _serialize(self.data),
        }


@dataclass
class Contact:
    id: int
    title: str
    body: str
    files: str | None = None

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)


@dataclass
class NewContact:
    title: str
    body: str
    files: str | None = None
    id: int | None = None


@dataclass
class Post:
    id: int
    title: str
    body: str
    published: bool

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)


def _require(payload: dict[str, Any], name: str, kind: type, label: str) -> Any:
    if name not in payload:
        raise ValueError(f"missing field `{name}`")
    value = payload[name]
    if not isinstance(value, kind) or (kind is not bool and isinstance(value, bool)):
        raise ValueError(f"invalid type for `{name}`: expected {label}")
    return value


@dataclass
class NewPost:
    title: str
    body: str
    published: bool
    id: int | None = field(default=None)

    @classmethod
    def from_json(cls, payload: Any) -> NewPost:
        """Build a NewPost from decoded JSON, raising ValueError on malformed input."""
        if not isinstance(payload, dict):
            raise ValueError("invalid type: expected a JSON object")
        title = _require(payload, "title", str, "a string")
        body = _require(payload, "body", str, "a string")
        published = _require(payload, "published", bool, "a boolean")
        post_id = payload.get("id")
        if post_id is not None:
            if isinstance(post_id, bool) or not isinstance(post_id, int):
                raise ValueError("invalid type for `id`: expected i32")
            if not _I32_MIN <= post_id <= _I32_MAX:
                raise ValueError("invalid value for `id`: expected i32")
        return cls(title=title, body=body, published=published, id=post_id)

    def validate(self) -> None:
        """Raise ValidationError if title or body is empty."""
        errors: dict[str, list[str]] = {}
        if len(self.title) < 1:
            errors["title"] = ["Title is required"]
        if len(self.body) < 1:
            errors["body"] = ["Body is required"]
        if errors:
            raise ValidationError(errors)