import pytest

from editgrid import db
from editgrid.models import Article, User


@pytest.mark.unit
def test_article_defaults(app, seeded):
    with app.app_context():
        article = Article(title="Defaults")
        db.session.add(article)
        db.session.commit()

        assert article.status == "draft"
        assert article.sort_order == 0
        assert article.is_featured is False
        assert article.updated_at is not None


@pytest.mark.unit
def test_owner_relationship_is_loaded(app, seeded):
    with app.app_context():
        article = db.session.get(Article, seeded["articles"][1])

        assert article.owner.username == "test_editor"


@pytest.mark.unit
def test_can_edit_rules(app, seeded):
    admin_article, editor_article, _ = seeded["articles"]
    with app.app_context():
        admin = db.session.get(User, seeded["admin"])
        editor = db.session.get(User, seeded["editor"])
        viewer = db.session.get(User, seeded["viewer"])

        assert db.session.get(Article, editor_article).can_edit(admin) is True
        assert db.session.get(Article, editor_article).can_edit(editor) is True
        assert db.session.get(Article, admin_article).can_edit(editor) is False
        assert db.session.get(Article, admin_article).can_edit(viewer) is False
        assert db.session.get(Article, admin_article).can_edit(None) is False


@pytest.mark.unit
def test_inactive_user_cannot_edit(app, seeded):
    with app.app_context():
        editor = db.session.get(User, seeded["editor"])
        editor.is_active = False

        assert db.session.get(Article, seeded["articles"][1]).can_edit(editor) is False
