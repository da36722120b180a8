"""
Pytest configuration and shared fixtures.

The fixtures build a small multisite network in a SQLite file: the root site
(ID 1) with its own tables and the shared network tables, site 5 with content,
site 7 with stale content that a clone must replace, and site 9 which is
registered but has no tables. A matching upload tree is created beside it.
"""

from pathlib import Path

import pytest
from sqlalchemy import Column, Engine, Index, Integer, MetaData, String, Table, Text, create_engine, insert

from tenant_clone.core.config import PlatformConfig

ROOT_URL = "http://example.com"
SITE_URLS = {
    1: ROOT_URL,
    5: f"{ROOT_URL}/five",
    7: f"{ROOT_URL}/seven",
}
SHARED_TABLES = ["blogs", "blog_versions", "registration_log", "site", "sitemeta", "signups", "users", "usermeta"]


def site_prefix(site_id: int) -> str:
    return "wp_" if site_id == 1 else f"wp_{site_id}_"


def create_site_tables(engine: Engine, site_id: int, base_url: str, posts: list[str]) -> None:
    """Create the options and posts tables of one site and fill them."""
    prefix = site_prefix(site_id)
    metadata = MetaData()
    options = Table(
        f"{prefix}options",
        metadata,
        Column("option_id", Integer, primary_key=True),
        Column("option_name", String(191), nullable=False),
        Column("option_value", Text, nullable=False),
        Column("autoload", String(20), nullable=False, server_default="yes"),
    )
    Index(f"ix_{prefix}options_option_name", options.c.option_name, unique=True)
    posts_table = Table(
        f"{prefix}posts",
        metadata,
        Column("ID", Integer, primary_key=True),
        Column("post_title", Text),
        Column("guid", String(255)),
    )
    Index(f"ix_{prefix}posts_post_title", posts_table.c.post_title)
    metadata.create_all(engine)

    with engine.begin() as conn:
        conn.execute(
            insert(options),
            [
                {"option_name": "siteurl", "option_value": base_url},
                {"option_name": "home", "option_value": base_url},
                {"option_name": "blogname", "option_value": f"Site {site_id}"},
                {"option_name": f"{prefix}user_roles", "option_value": f"roles-of-{site_id}"},
            ],
        )
        if posts:
            conn.execute(
                insert(posts_table),
                [{"post_title": title, "guid": f"{base_url}/?p={i}"} for i, title in enumerate(posts, start=1)],
            )


def create_network_tables(engine: Engine, site_ids: list[int]) -> None:
    metadata = MetaData()
    blogs = Table(
        "wp_blogs",
        metadata,
        Column("blog_id", Integer, primary_key=True),
        Column("site_id", Integer, nullable=False),
        Column("domain", String(200), nullable=False),
        Column("path", String(100), nullable=False),
    )
    for name in SHARED_TABLES:
        if name != "blogs":
            Table(f"wp_{name}", metadata, Column("id", Integer, primary_key=True), Column("value", Text))
    metadata.create_all(engine)

    with engine.begin() as conn:
        conn.execute(
            insert(blogs),
            [
                {"blog_id": site_id, "site_id": 1, "domain": "example.com", "path": "/" if site_id == 1 else f"/site{site_id}/"}
                for site_id in site_ids
            ],
        )
        conn.execute(insert(metadata.tables["wp_users"]), [{"value": "admin"}])


@pytest.fixture
def engine(tmp_path: Path) -> Engine:
    """Engine on a populated multisite network database."""
    engine = create_engine(f"sqlite:///{tmp_path / 'network.db'}")
    create_network_tables(engine, [1, 5, 7, 9])
    create_site_tables(engine, 1, SITE_URLS[1], ["Hello world", "About"])
    create_site_tables(engine, 5, SITE_URLS[5], ["Five one", "Five two", "Five three"])
    create_site_tables(engine, 7, SITE_URLS[7], ["Stale"])
    yield engine
    engine.dispose()


@pytest.fixture
def uploads_dir(tmp_path: Path) -> Path:
    """Upload tree of the network: root files, site 5 files and stale site 7 files."""
    uploads = tmp_path / "uploads"
    (uploads / "2024" / "01").mkdir(parents=True)
    (uploads / "2024" / "01" / "logo.png").write_bytes(b"\x89PNG root logo")
    (uploads / "sites" / "5" / "2024" / "02").mkdir(parents=True)
    (uploads / "sites" / "5" / "2024" / "02" / "photo.jpg").write_bytes(b"site five photo")
    (uploads / "sites" / "5" / "notes.txt").write_text("site five notes")
    (uploads / "sites" / "7").mkdir(parents=True)
    (uploads / "sites" / "7" / "notes.txt").write_text("stale notes")
    (uploads / "sites" / "7" / "keep.txt").write_text("only in seven")
    return uploads


@pytest.fixture
def platform_config(tmp_path: Path, uploads_dir: Path) -> PlatformConfig:
    return PlatformConfig(database_url=f"sqlite:///{tmp_path / 'network.db'}", uploads_dir=uploads_dir)


class RecordingCommands:
    """Stand-in for the platform CLI that records what it was asked to do."""

    def __init__(self):
        self.calls = []

    def replace_references(self, old_url: str, new_url: str, table_prefix: str) -> None:
        self.calls.append(("search-replace", old_url, new_url, table_prefix))

    def flush_cache(self) -> None:
        self.calls.append(("cache", "flush"))


@pytest.fixture
def commands() -> RecordingCommands:
    return RecordingCommands()
