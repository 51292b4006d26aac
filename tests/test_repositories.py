import pytest
from sqlalchemy import create_engine

from postboard.db import metadata
from postboard.models import NewContact, NewPost
from postboard.repositories import ContactRepository, PostRepository, RecordNotFound


@pytest.fixture
def conn():
    engine = create_engine("sqlite://")
    metadata.create_all(engine)
    with engine.connect() as connection:
        yield connection


def test_contact_create_and_find(conn):
    repo = ContactRepository(conn)
    created = repo.create(NewContact(title="hi", body="there", files="./uploads/a.jpg"))
    assert created.title == "hi"
    assert created.files == "./uploads/a.jpg"
    assert repo.find_one(created.id) == created


def test_contact_list_all(conn):
    repo = ContactRepository(conn)
    first = repo.create(NewContact(title="a", body="b"))
    second = repo.create(NewContact(title="c", body="d"))
    assert repo.list_all() == [first, second]


def test_contact_create_with_explicit_id(conn):
    repo = ContactRepository(conn)
    created = repo.create(NewContact(title="a", body="b", id=42))
    assert created.id == 42


def test_contact_delete(conn):
    repo = ContactRepository(conn)
    created = repo.create(NewContact(title="a", body="b"))
    assert repo.delete(created.id) == 1
    assert repo.delete(created.id) == 0
    with pytest.raises(RecordNotFound):
        repo.find_one(created.id)


def test_contact_missing(conn):
    with pytest.raises(RecordNotFound):
        ContactRepository(conn).find_one(999)


def test_post_create_and_find(conn):
    repo = PostRepository(conn)
    created = repo.create(NewPost(title="t", body="b", published=True))
    assert created.published is True
    assert repo.find_by_id(created.id) == created


def test_post_list_all_empty_then_filled(conn):
    repo = PostRepository(conn)
    assert repo.list_all() == []
    created = repo.create(NewPost(title="t", body="b", published=False))
    assert repo.list_all() == [created]


def test_post_update(conn):
    repo = PostRepository(conn)
    created = repo.create(NewPost(title="t", body="b", published=False))
    updated = repo.update(NewPost(id=created.id, title="new", body="text", published=True))
    assert updated.id == created.id
    assert (updated.title, updated.body, updated.published) == ("new", "text", True)
    assert repo.find_by_id(created.id) == updated


def test_post_update_missing(conn):
    with pytest.raises(RecordNotFound):
        PostRepository(conn).update(NewPost(id=5, title="t", body="b", published=True))


def test_post_update_requires_id(conn):
    with pytest.raises(ValueError):
        PostRepository(conn).update(NewPost(title="t", body="b", published=True))


def test_post_delete(conn):
    repo = PostRepository(conn)
    created = repo.create(NewPost(title="t", body="b", published=True))
    assert repo.delete(created.id) == 1
    assert repo.list_all() == []
    with pytest.raises(RecordNotFound):
        repo.find_by_id(created.id)