import json

from extensions import db
from migrations.import_content import import_content, import_content_file, normalize_body
from models import File, MenuLink, Node, PathAlias

from conftest import SAMPLE_CONTENT


def test_normalize_body() -> None:
    assert normalize_body(None) == []
    assert normalize_body("<p>x</p>") == [{"value": "<p>x</p>", "format": "basic_html"}]
    assert normalize_body({"value": "y"}) == [{"value": "y"}]
    assert normalize_body(["a", {"value": "b"}]) == [
        {"value": "a", "format": "basic_html"},
        {"value": "b"},
    ]


def test_import_counts(app) -> None:
    with app.app_context():
        counts = import_content(SAMPLE_CONTENT)

        assert counts == {"files": 2, "nodes": 4, "aliases": 4, "menu_links": 5}
        assert db.session.get(Node, 1).news_ids == [2, 3, 99]
        assert db.session.get(Node, 2).get_banner("banner_1").uri == "public://banners/one.jpg"
        assert db.session.get(Node, 2).get_banner("banner_2") is None
        assert db.session.get(File, 1).filename == "one.jpg"


def test_import_is_idempotent(app) -> None:
    with app.app_context():
        import_content(SAMPLE_CONTENT)
        import_content(SAMPLE_CONTENT)

        assert Node.query.count() == 4
        assert PathAlias.query.count() == 4
        assert MenuLink.query.filter_by(menu_name="main").count() == 4
        assert db.session.get(Node, 1).news_ids == [2, 3, 99]


def test_reimport_replaces_news_references(app) -> None:
    with app.app_context():
        import_content(SAMPLE_CONTENT)
        import_content({"nodes": [{"id": 1, "title": "Home", "news": [3]}]})

        assert db.session.get(Node, 1).news_ids == [3]


def test_import_content_file(app, tmp_path) -> None:
    content_file = tmp_path / "content.json"
    content_file.write_text(json.dumps(SAMPLE_CONTENT), encoding="utf-8")

    with app.app_context():
        counts = import_content_file(str(content_file))

    assert counts["nodes"] == 4


def test_import_content_cli(app, tmp_path) -> None:
    content_file = tmp_path / "content.json"
    content_file.write_text(json.dumps(SAMPLE_CONTENT), encoding="utf-8")

    result = app.test_cli_runner().invoke(args=["import-content", str(content_file)])

    assert result.exit_code == 0
    assert "menu_links: 5" in result.output
    response = app.test_client().get("/api/portfolio-menu-api/footer")
    assert response.get_json() == [{"title": "Privacy", "url": "/privacy"}]
