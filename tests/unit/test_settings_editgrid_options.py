import pytest

from editgrid.settings import Settings


@pytest.mark.unit
def test_settings_defaults_map_into_flask_config(monkeypatch) -> None:
    config = Settings.load().to_flask_config()

    assert config["EDITGRID_NAMESPACE"] == "EditableColumns"
    assert config["EDITGRID_CSS_CLASS"] == "grid-editable"
    assert config["WTF_CSRF_ENABLED"] is True
    assert config["TESTING"] is True
    assert config["SQLALCHEMY_DATABASE_URI"] == "sqlite:///:memory:"


@pytest.mark.unit
def test_settings_reads_namespace_from_environment(monkeypatch) -> None:
    monkeypatch.setenv("EDITGRID_NAMESPACE", "Inline_2")

    assert Settings.load().editable_namespace == "Inline_2"


@pytest.mark.unit
@pytest.mark.parametrize("namespace", ["Editable[Columns]", "1abc", "with space"])
def test_settings_rejects_namespace_that_breaks_field_names(monkeypatch, namespace: str) -> None:
    monkeypatch.setenv("EDITGRID_NAMESPACE", namespace)

    with pytest.raises(ValueError, match="EDITGRID_NAMESPACE"):
        Settings.load()


@pytest.mark.unit
def test_settings_rejects_unknown_log_level(monkeypatch) -> None:
    monkeypatch.setenv("LOG_LEVEL", "verbose")

    with pytest.raises(ValueError, match="LOG_LEVEL"):
        Settings.load()


@pytest.mark.unit
def test_settings_requires_secret_key_in_production(monkeypatch) -> None:
    monkeypatch.setenv("FLASK_ENV", "production")
    monkeypatch.setenv("SECRET_KEY", "")
    monkeypatch.setenv("DATABASE_URL", "sqlite:///:memory:")

    with pytest.raises(ValueError, match="SECRET_KEY"):
        Settings.load()


@pytest.mark.unit
def test_settings_falls_back_to_sqlite_outside_production(monkeypatch) -> None:
    monkeypatch.setenv("FLASK_ENV", "development")
    # 阻止 `load_dotenv()` 从本地 `.env` 注入连接串
    monkeypatch.setenv("DATABASE_URL", "")

    assert Settings.load().database_url.startswith("sqlite:///")
