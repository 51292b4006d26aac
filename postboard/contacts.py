"""Contact endpoints, including JPEG attachment upload."""

from __future__ import annotations

import re
import shutil
from http import HTTPStatus
from pathlib import Path
from typing import Any, Iterable

from flask import Blueprint, Response, jsonify, request
from sqlalchemy.engine import Engine
from sqlalchemy.exc import SQLAlchemyError

from .models import ApiResponse, Contact, NewContact
from .repositories import ContactRepository, RecordNotFound

DEFAULT_UPLOAD_DIR = "./uploads/"

_ALLOWED_EXTENSIONS = frozenset({"jpeg", "jpg"})
_ID_PATTERN = re.compile(r"[+-]?\d+")
_I32_MIN = -(2**31)
_I32_MAX = 2**31 - 1


class UploadError(Exception):
    """Raised when a multipart contact submission is rejected."""

    def __init__(self, status: int, message: str):
        super().__init__(message)
        self.status = status
        self.message = message


def _extension(file_name: str) -> str | None:
    name = Path(file_name).name
    head, sep, tail = name.rpartition(".")
    if not sep or not head:
        return None
    return tail


def _read_text(storage: Any) -> str:
    try:
        return storage.stream.read().decode("utf-8")
    except UnicodeDecodeError as err:
        raise UploadError(HTTPStatus.BAD_REQUEST, str(err)) from err


def _apply_text(contact: Contact, name: str, text: str) -> None:
    if name == "file":
        # A "file" part without a file name carries nothing to store.
        return
    if name == "title":
        contact.title = text
        if not contact.title:
            raise UploadError(HTTPStatus.BAD_REQUEST, "Title is required")
    elif name == "body":
        contact.body = text
        if not contact.body:
            raise UploadError(HTTPStatus.BAD_REQUEST, "Body is required")
    else:
        raise UploadError(HTTPStatus.BAD_REQUEST, f"Unknown field: {name}")


def _store_file(storage: Any, contact: Contact, upload_dir: str) -> None:
    file_name = storage.filename or ""
    if not file_name:
        return
    ext = _extension(file_name)
    if ext is None:
        raise UploadError(HTTPStatus.BAD_REQUEST, "Extension Invalid")
    if ext.lower() not in _ALLOWED_EXTENSIONS:
        raise UploadError(HTTPStatus.BAD_REQUEST, "File format is not supported")

    directory = upload_dir if upload_dir.endswith("/") else upload_dir + "/"
    target = f"{directory}{file_name}"
    contact.files = target
    try:
        Path(directory).mkdir(parents=True, exist_ok=True)
        with open(target, "wb") as handle:
            shutil.copyfileobj(storage.stream, handle)
    except OSError as err:
        raise UploadError(HTTPStatus.INTERNAL_SERVER_ERROR, str(err)) from err


def upload_file(
    form_items: Iterable[tuple[str, str]],
    file_items: Iterable[tuple[str, Any]],
    contact: Contact,
    upload_dir: str = DEFAULT_UPLOAD_DIR,
) -> Contact:
    """Fill ``contact`` from multipart fields, saving a JPEG attachment to ``upload_dir``.

    Raises UploadError with an HTTP status and message on rejected input.
    """
    for name, value in form_items:
        _apply_text(contact, name, value)
    for name, storage in file_items:
        if name == "file":
            _store_file(storage, contact, upload_dir)
        else:
            _apply_text(contact, name, _read_text(storage))
    return contact


def _json(response: ApiResponse) -> Response:
    result = jsonify(response.to_dict())
    result.status_code = int(response.status)
    return result


def _text(message: str, status: int) -> Response:
    return Response(message, status=int(status), mimetype="text/plain")


def _parse_id(raw: str) -> int | None:
    if not _ID_PATTERN.fullmatch(raw):
        return None
    value = int(raw)
    if not _I32_MIN <= value <= _I32_MAX:
        return None
    return value


def _bad_id(raw: str) -> Response:
    return _text(
        f"Invalid URL: Cannot parse `{raw}` to a `i32`", HTTPStatus.BAD_REQUEST
    )


def create_contact_blueprint(
    engine: Engine, upload_dir: str = DEFAULT_UPLOAD_DIR
) -> Blueprint:
    """Routes for creating, listing and deleting contacts."""
    blueprint = Blueprint("contacts", __name__)

    @blueprint.post("/contact")
    def create_contact() -> Response:
        if request.mimetype != "multipart/form-data":
            return _text(
                "Invalid `boundary` for `multipart/form-data` request",
                HTTPStatus.BAD_REQUEST,
            )
        contact = Contact(id=0, title="", body="", files="")
        try:
            upload_file(
                request.form.items(multi=True),
                request.files.items(multi=True),
                contact,
                upload_dir,
            )
        except UploadError as err:
            return _json(ApiResponse(int(err.status), err.message))

        new_contact = NewContact(
            title=contact.title, body=contact.body, files=contact.files
        )
        with engine.connect() as conn:
            try:
                created = ContactRepository(conn).create(new_contact)
            except SQLAlchemyError:
                return _json(
                    ApiResponse(
                        int(HTTPStatus.INTERNAL_SERVER_ERROR),
                        "Failed to create contact",
                    )
                )
        return _json(ApiResponse(int(HTTPStatus.CREATED), "Contact created", created))

    @blueprint.get("/contact")
    def list_contacts() -> Response:
        with engine.connect() as conn:
            try:
                contacts = ContactRepository(conn).list_all()
            except SQLAlchemyError:
                return _text(
                    "failed to fetch contacts", HTTPStatus.INTERNAL_SERVER_ERROR
                )
        return _json(ApiResponse(int(HTTPStatus.OK), "OK", contacts))

    @blueprint.delete("/contact/<raw_id>")
    def delete_contact(raw_id: str) -> Response:
        contact_id = _parse_id(raw_id)
        if contact_id is None:
            return _bad_id(raw_id)
        with engine.connect() as conn:
            repo = ContactRepository(conn)
            try:
                repo.find_one(contact_id)
            except (RecordNotFound, SQLAlchemyError):
                return _json(ApiResponse(int(HTTPStatus.NOT_FOUND), "Not Found"))
            try:
                repo.delete(contact_id)
            except SQLAlchemyError:
                return _json(
                    ApiResponse(
                        int(HTTPStatus.INTERNAL_SERVER_ERROR), "Internal Server error"
                    )
                )
        return _json(ApiResponse(int(HTTPStatus.OK), "OK"))

    return blueprint