import sys
from pathlib import Path

import pytest


PROJECT_ROOT = Path(__file__).resolve().parents[1]
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

from app import create_app  # noqa: E402
from migrations.import_content import import_content  # noqa: E402


SAMPLE_CONTENT = {
    "files": [
        {"id": 1, "uri": "public://banners/one.jpg"},
        {"id": 2, "uri": "https://cdn.example.com/two.png"},
    ],
    "nodes": [
        {"id": 1, "type": "page", "title": "Home", "news": [2, 3, 99]},
        {
            "id": 2,
            "type": "news",
            "title": "Launch",
            "body": [{"value": "<p>Launch day</p>", "format": "basic_html"},
                     {"value": "<p>ignored</p>", "format": "basic_html"}],
            "banner_1": 1,
            "banner_3": 2,
        },
        {"id": 3, "type": "news", "title": "Update"},
        {"id": 4, "type": "page", "title": "Empty", "news": []},
    ],
    "aliases": [
        {"alias": "/home", "path": "/node/1"},
        {"alias": "/empty", "path": "/node/4"},
        {"alias": "/ghost", "path": "/node/50"},
        {"alias": "/tag", "path": "/taxonomy/term/3"},
    ],
    "menus": {
        "main": [
            {"title": "Home", "url": "/"},
            {
                "title": "About",
                "url": "/about",
                "children": [
                    {"title": "Team", "url": "/about/team"},
                    {"title": "History", "url": "/about/history"},
                ],
            },
        ],
        "footer": [{"title": "Privacy", "url": "/privacy"}],
    },
}


@pytest.fixture
def app():
    app = create_app("testing")
    yield app


@pytest.fixture
def client(app):
    return app.test_client()


@pytest.fixture
def seeded_app(app):
    with app.app_context():
        import_content(SAMPLE_CONTENT)
    return app


@pytest.fixture
def seeded_client(seeded_app):
    return seeded_app.test_client()
