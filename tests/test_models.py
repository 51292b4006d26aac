import pytest

from postboard.models import (
    ApiResponse,
    Contact,
    NewContact,
    NewPost,
    Post,
    ValidationError,
)


def test_post_to_dict_round_trip():
    post = Post(id=3, title="t", body="b", published=True)
    assert Post(**post.to_dict()) == post


def test_contact_to_dict_keeps_none_files():
    contact = Contact(id=1, title="t", body="b", files=None)
    assert contact.to_dict() == {"id": 1, "title": "t", "body": "b", "files": None}


def test_new_contact_defaults():
    new = NewContact(title="t", body="b")
    assert new.id is None and new.files is None


def test_api_response_serializes_nested_records():
    post = Post(id=1, title="a", body="b", published=False)
    response = ApiResponse(status=200, message="OK", data=[post])
    assert response.to_dict() == {
        "status": 200,
        "message": "OK",
        "data": [post.to_dict()],
    }


def test_api_response_without_data():
    response = ApiResponse(status=404, message="Not Found")
    assert response.to_dict()["data"] is None


def test_from_json_round_trip():
    payload = {"title": "hello", "body": "world", "published": True}
    post = NewPost.from_json(payload)
    assert post == NewPost(title="hello", body="world", published=True, id=None)


def test_from_json_with_id():
    post = NewPost.from_json({"id": 7, "title": "x", "body": "y", "published": False})
    assert post.id == 7


@pytest.mark.parametrize(
    "payload",
    [
        {"body": "b", "published": True},
        {"title": "t", "published": True},
        {"title": "t", "body": "b"},
        {"title": 1, "body": "b", "published": True},
        {"title": "t", "body": "b", "published": "yes"},
        {"title": "t", "body": "b", "published": True, "id": "1"},
        {"title": "t", "body": "b", "published": True, "id": 2**31},
        ["not", "an", "object"],
    ],
)
def test_from_json_rejects_malformed(payload):
    with pytest.raises(ValueError):
        NewPost.from_json(payload)


def test_validate_accepts_filled_post():
    post = NewPost(title="t", body="b", published=False)
    post.validate()
    assert post.title == "t"


def test_validate_empty_title():
    with pytest.raises(ValidationError) as info:
        NewPost(title="", body="b", published=True).validate()
    assert info.value.errors == {"title": ["Title is required"]}


def test_validate_both_empty():
    with pytest.raises(ValidationError) as info:
        NewPost(title="", body="", published=True).validate()
    assert info.value.errors == {
        "title": ["Title is required"],
        "body": ["Body is required"],
    }