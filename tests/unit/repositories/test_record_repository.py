import pytest
from flask_login import login_user

from editgrid import db
from editgrid.forms.fields import (
    CheckboxField,
    DateField,
    DatetimeField,
    NumberField,
    ReadonlyField,
    SelectField,
    TextareaField,
    TextField,
)
from editgrid.models import Article, User
from editgrid.repositories.record_repository import RecordRepository, SQLAlchemyRecordRepository


@pytest.fixture
def repository() -> SQLAlchemyRecordRepository:
    return SQLAlchemyRecordRepository(Article, order_by="sort_order")


@pytest.mark.unit
def test_repository_satisfies_protocol(repository) -> None:
    assert isinstance(repository, RecordRepository)
    assert repository.data_class is Article


@pytest.mark.unit
@pytest.mark.parametrize(
    ("column", "expected_type"),
    [
        ("id", ReadonlyField),
        ("title", TextField),
        ("body", TextareaField),
        ("status", SelectField),
        ("sort_order", NumberField),
        ("is_featured", CheckboxField),
        ("published_on", DateField),
        ("updated_at", DatetimeField),
    ],
)
def test_default_field_follows_column_type(repository, column, expected_type) -> None:
    form_field = repository.default_field_for(column)

    assert type(form_field) is expected_type
    assert form_field.get_name() == column


@pytest.mark.unit
def test_default_field_marks_non_nullable_columns_required(repository) -> None:
    assert repository.default_field_for("title").required is True
    assert repository.default_field_for("body").required is False
    assert repository.default_field_for("is_featured").required is False


@pytest.mark.unit
def test_enum_column_gets_options(repository) -> None:
    status = repository.default_field_for("status")

    assert [value for value, _label in status.options] == ["draft", "published", "archived"]
    assert status.options[0][1] == "Draft"


@pytest.mark.unit
@pytest.mark.parametrize("column", ["owner.username", "missing", "owner"])
def test_unknown_columns_have_no_default_field(repository, column) -> None:
    assert repository.default_field_for(column) is None


@pytest.mark.unit
def test_summary_fields_skip_primary_and_foreign_keys(repository) -> None:
    fields = repository.summary_fields()

    assert "id" not in fields
    assert "owner_id" not in fields
    assert fields[:2] == ["title", "body"]


@pytest.mark.unit
def test_list_orders_by_configured_column(app, seeded, repository) -> None:
    with app.app_context():
        article = db.session.get(Article, seeded["articles"][0])
        article.sort_order = 99
        db.session.commit()

        titles = [record.title for record in repository.list()]

    assert titles == ["Editor post", "Another admin post", "Admin post"]


@pytest.mark.unit
def test_can_edit_requires_login(app, seeded, repository) -> None:
    with app.test_request_context("/"):
        article = repository.get(seeded["articles"][0])

        assert repository.can_edit(article) is False


@pytest.mark.unit
def test_can_edit_follows_article_ownership(app, seeded, repository) -> None:
    admin_article, editor_article, _ = seeded["articles"]

    with app.test_request_context("/"):
        login_user(db.session.get(User, seeded["editor"]))

        assert repository.can_edit(repository.get(editor_article)) is True
        assert repository.can_edit(repository.get(admin_article)) is False
        assert repository.is_editable(editor_article) is True
        assert repository.is_editable(9999999) is False


@pytest.mark.unit
def test_viewer_cannot_edit_anything(app, seeded, repository) -> None:
    with app.test_request_context("/"):
        login_user(db.session.get(User, seeded["viewer"]))

        assert all(repository.can_edit(record) is False for record in repository.list())


@pytest.mark.unit
def test_save_commits_record(app, seeded, repository) -> None:
    article_id = seeded["articles"][1]

    with app.app_context():
        article = repository.get(article_id)
        article.title = "Saved through repository"
        repository.save(article)

    with app.app_context():
        assert db.session.get(Article, article_id).title == "Saved through repository"
