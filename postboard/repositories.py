"""Data access for posts and contacts."""

from __future__ import annotations

from sqlalchemy import delete, insert, select, update
from sqlalchemy.engine import Connection

from .db import contacts, posts
from .models import Contact, NewContact, NewPost, Post


class RecordNotFound(LookupError):
    """Raised when a requested row does not exist."""


class ContactRepository:
    """Contact storage over an open connection."""

    def __init__(self, conn: Connection):
        self.conn = conn

    def create(self, new_contact: NewContact) -> Contact:
        values = {
            "title": new_contact.title,
            "body": new_contact.body,
            "files": new_contact.files,
        }
        if new_contact.id is not None:
            values["id"] = new_contact.id
        result = self.conn.execute(insert(contacts).values(**values))
        self.conn.commit()
        return self.find_one(result.inserted_primary_key[0])

    def list_all(self) -> list[Contact]:
        rows = self.conn.execute(select(contacts).order_by(contacts.c.id))
        return [Contact(**row._mapping) for row in rows]

    def delete(self, contact_id: int) -> int:
        result = self.conn.execute(delete(contacts).where(contacts.c.id == contact_id))
        self.conn.commit()
        return result.rowcount

    def find_one(self, contact_id: int) -> Contact:
        row = self.conn.execute(
            select(contacts).where(contacts.c.id == contact_id)
        ).first()
        if row is None:
            raise RecordNotFound(f"contact {contact_id} not found")
        return Contact(**row._mapping)


class PostRepository:
    """Post storage over an open connection."""

    def __init__(self, conn: Connection):
        self.conn = conn

    def list_all(self) -> list[Post]:
        rows = self.conn.execute(select(posts).order_by(posts.c.id))
        return [Post(**row._mapping) for row in rows]

    def find_by_id(self, pid: int) -> Post:
        row = self.conn.execute(select(posts).where(posts.c.id == pid)).first()
        if row is None:
            raise RecordNotFound(f"post {pid} not found")
        return Post(**row._mapping)

    def create(self, new_post: NewPost) -> Post:
        values = {
            "title": new_post.title,
            "body": new_post.body,
            "published": new_post.published,
        }
        if new_post.id is not None:
            values["id"] = new_post.id
        result = self.conn.execute(insert(posts).values(**values))
        self.conn.commit()
        return self.find_by_id(result.inserted_primary_key[0])

    def update(self, new_post: NewPost) -> Post:
        if new_post.id is None:
            raise ValueError("post id is required for update")
        result = self.conn.execute(
            update(posts)
            .where(posts.c.id == new_post.id)
            .values(
                title=new_post.title,
                body=new_post.body,
                published=new_post.published,
            )
        )
        self.conn.commit()
        if result.rowcount == 0:
            raise RecordNotFound(f"post {new_post.id} not found")
        return self.find_by_id(new_post.id)

    def delete(self, pid: int) -> int:
        result = self.conn.execute(delete(posts).where(posts.c.id == pid))
        self.conn.commit()
        return result.rowcount