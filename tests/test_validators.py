import pytest

from userhub.core.errors import ValidationError
from userhub.schemas import UserCreate, UserUpdate, parse_model
from userhub.schemas.validators import validate_email, validate_photo_url


@pytest.mark.parametrize("email", [
    "john.doe@example.com",
    "a_b-c@mail.example.org",
    "x1@sub.domain.io",
])
def test_valid_emails_pass(email):
    assert validate_email(email) == email


@pytest.mark.parametrize("email", [
    "John@Example.com",      # uppercase is not accepted
    "no-at-sign.com",
    "a@b.c",                 # one-letter TLD
    "a@b.com\n",
    "a b@example.com",
    "a@١٢.com",     # non-ASCII digits in the domain
])
def test_invalid_emails_fail(email):
    with pytest.raises(ValidationError) as exc:
        validate_email(email)
    assert exc.value.field == "email"
    assert exc.value.message == "Not a valid email"


@pytest.mark.parametrize("email", [None, ""])
def test_missing_email_is_required(email):
    with pytest.raises(ValidationError) as exc:
        validate_email(email)
    assert exc.value.message == "User email required"


@pytest.mark.parametrize("url", [
    "http://example.com/img.png",
    "https://cdn.example.co.uk/photos/me.jpg",
    "example.com/photo.jpg",
    "https://example.com/",
])
def test_valid_photo_urls_pass(url):
    assert validate_photo_url(url) == url


def test_photo_is_optional():
    assert validate_photo_url(None) is None


@pytest.mark.parametrize("url", [
    "ftp://example.com/a.png",
    "not a url",
    "",
    "http://",
    "https://example.com/фото.jpg",   # non-ASCII path
])
def test_invalid_photo_urls_fail(url):
    with pytest.raises(ValidationError) as exc:
        validate_photo_url(url)
    assert exc.value.field == "photo"
    assert exc.value.message == "Not a valid image URL"


def test_parse_model_keeps_field_message():
    with pytest.raises(ValidationError) as exc:
        parse_model(UserCreate, {"username": "bob", "email": "bad"})
    assert str(exc.value) == "Not a valid email"


def test_parse_model_reports_missing_email():
    with pytest.raises(ValidationError) as exc:
        parse_model(UserCreate, {"username": "bob"})
    assert exc.value.field == "email"
    assert exc.value.message == "User email required"


def test_parse_model_reports_missing_username():
    with pytest.raises(ValidationError) as exc:
        parse_model(UserCreate, {"email": "bob@example.com"})
    assert exc.value.field == "username"
    assert exc.value.message == "Username required"


def test_parse_model_rejects_unknown_fields():
    with pytest.raises(ValidationError) as exc:
        parse_model(UserUpdate, {"favouriteColour": "green"})
    assert exc.value.field == "favouriteColour"


def test_create_schema_accepts_both_naming_styles():
    camel = parse_model(UserCreate, {
        "username": "bob", "email": "bob@example.com", "currentCompanyName": "Acme",
    })
    snake = parse_model(UserCreate, {
        "username": "bob", "email": "bob@example.com", "current_company_name": "Acme",
    })
    assert camel.current_company_name == snake.current_company_name == "Acme"


def test_skills_are_deduplicated_in_order():
    user = parse_model(UserCreate, {
        "username": "bob", "email": "bob@example.com",
        "skills": ["python", "sql", "python", "go"],
    })
    assert user.skills == ["python", "sql", "go"]


def test_update_only_dumps_sent_fields():
    patch = parse_model(UserUpdate, {"firstName": "Bob", "photo": None})
    assert patch.model_dump(by_alias=True, exclude_unset=True) == {
        "firstName": "Bob",
        "photo": None,
    }
