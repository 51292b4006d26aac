"""Post endpoints: list, read, create, update and delete."""

from __future__ import annotations

import json
import re
from http import HTTPStatus

from flask import Blueprint, Response, jsonify, request
from sqlalchemy.engine import Engine
from sqlalchemy.exc import SQLAlchemyError

from .models import ApiResponse, NewPost, ValidationError
from .repositories import PostRepository, RecordNotFound

_ID_PATTERN = re.compile(r"[+-]?\d+")
_I32_MIN = -(2**31)
_I32_MAX = 2**31 - 1


class _Rejection(Exception):
    """A request that is refused before the handler runs."""

    def __init__(self, status: int, message: str):
        super().__init__(message)
        self.status = status
        self.message = message

    def response(self) -> Response:
        return _text(self.message, self.status)


def _json(response: ApiResponse) -> Response:
    result = jsonify(response.to_dict())
    result.status_code = int(response.status)
    return result


def _text(message: str, status: int) -> Response:
    return Response(message, status=int(status), mimetype="text/plain")


def _parse_id(raw: str) -> int:
    if _ID_PATTERN.fullmatch(raw):
        value = int(raw)
        if _I32_MIN <= value <= _I32_MAX:
            return value
    raise _Rejection(
        HTTPStatus.BAD_REQUEST, f"Invalid URL: Cannot parse `{raw}` to a `i32`"
    )


def _is_json_mimetype(mimetype: str) -> bool:
    return mimetype == "application/json" or (
        mimetype.startswith("application/") and mimetype.endswith("+json")
    )


def _read_new_post() -> NewPost:
    if not _is_json_mimetype(request.mimetype):
        raise _Rejection(
            HTTPStatus.UNSUPPORTED_MEDIA_TYPE,
            "Expected request with `Content-Type: application/json`",
        )
    try:
        payload = json.loads(request.get_data())
    except ValueError as exc:
        raise _Rejection(
            HTTPStatus.BAD_REQUEST,
            f"Failed to parse the request body as JSON: {exc}",
        ) from exc
    try:
        return NewPost.from_json(payload)
    except ValueError as exc:
        raise _Rejection(
            HTTPStatus.UNPROCESSABLE_ENTITY,
            f"Failed to deserialize the JSON body into the target type: {exc}",
        ) from exc


def _validation_failure(err: ValidationError) -> Response:
    return _json(ApiResponse(int(HTTPStatus.BAD_REQUEST), "Validation Error", err.errors))


def _post_not_found() -> Response:
    return _json(ApiResponse(int(HTTPStatus.NOT_FOUND), "Post not found"))


def create_post_blueprint(engine: Engine) -> Blueprint:
    """Routes for the posts resource."""
    blueprint = Blueprint("posts", __name__)

    @blueprint.errorhandler(_Rejection)
    def rejected(err: _Rejection) -> Response:
        return err.response()

    @blueprint.get("/posts")
    def list_posts() -> Response:
        with engine.connect() as conn:
            try:
                posts = PostRepository(conn).list_all()
            except SQLAlchemyError:
                return _text("Failed to fetch posts", HTTPStatus.INTERNAL_SERVER_ERROR)
        return _json(ApiResponse(int(HTTPStatus.OK), "OK", posts))

    @blueprint.get("/posts/<raw_id>")
    def get_post(raw_id: str) -> Response:
        post_id = _parse_id(raw_id)
        with engine.connect() as conn:
            try:
                post = PostRepository(conn).find_by_id(post_id)
            except (RecordNotFound, SQLAlchemyError):
                return _text("Post not found", HTTPStatus.NOT_FOUND)
        return _json(ApiResponse(int(HTTPStatus.OK), "OK", post))

    @blueprint.post("/posts")
    def create_post() -> Response:
        payload = _read_new_post()
        try:
            payload.validate()
        except ValidationError as err:
            return _validation_failure(err)
        with engine.connect() as conn:
            try:
                post = PostRepository(conn).create(payload)
            except SQLAlchemyError:
                return _text("Failed to create post", HTTPStatus.INTERNAL_SERVER_ERROR)
        return _json(ApiResponse(int(HTTPStatus.CREATED), "Post created", post))

    @blueprint.put("/posts/<raw_id>")
    def update_post(raw_id: str) -> Response:
        post_id = _parse_id(raw_id)
        payload = _read_new_post()
        try:
            payload.validate()
        except ValidationError as err:
            return _validation_failure(err)
        with engine.connect() as conn:
            repo = PostRepository(conn)
            try:
                repo.find_by_id(post_id)
            except (RecordNotFound, SQLAlchemyError):
                return _post_not_found()
            changes = NewPost(
                title=payload.title,
                body=payload.body,
                published=payload.published,
                id=post_id,
            )
            try:
                post = repo.update(changes)
            except (RecordNotFound, SQLAlchemyError):
                return _text("Failed to update post", HTTPStatus.INTERNAL_SERVER_ERROR)
        return _json(ApiResponse(int(HTTPStatus.OK), "OK", post))

    @blueprint.delete("/posts/<raw_id>")
    def delete_post(raw_id: str) -> Response:
        post_id = _parse_id(raw_id)
        with engine.connect() as conn:
            repo = PostRepository(conn)
            try:
                repo.find_by_id(post_id)
            except (RecordNotFound, SQLAlchemyError):
                return _post_not_found()
            try:
                repo.delete(post_id)
            except SQLAlchemyError:
                return _json(
                    ApiResponse(
                        int(HTTPStatus.INTERNAL_SERVER_ERROR), "Internal Server error"
                    )
                )
        return _json(ApiResponse(int(HTTPStatus.OK), "OK"))

    return blueprint