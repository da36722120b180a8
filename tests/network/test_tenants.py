"""Tests for tenant resolution against the network registry."""

from __future__ import annotations

import pytest
from pydantic import ValidationError
from sqlalchemy import create_engine, text

from tenant_clone.core.config import PlatformConfig
from tenant_clone.network.tenants import DatabaseTenantResolver, Tenant, TenantResolver


@pytest.fixture
def resolver(engine, platform_config):
    return DatabaseTenantResolver(engine, platform_config)


class TestTenant:
    def test_root(self):
        assert Tenant(tenant_id=1, prefix="wp_", base_url="http://a").is_root
        assert not Tenant(tenant_id=2, prefix="wp_2_", base_url="http://a").is_root

    def test_with_https(self):
        tenant = Tenant(tenant_id=2, prefix="wp_2_", base_url="http://a.example/http:/x")
        assert tenant.with_https().base_url == "https://a.example/http:/x"
        assert tenant.base_url == "http://a.example/http:/x"

    def test_with_https_keeps_https(self):
        tenant = Tenant(tenant_id=2, prefix="wp_2_", base_url="https://a.example")
        assert tenant.with_https().base_url == "https://a.example"

    def test_id_must_be_positive(self):
        with pytest.raises(ValidationError):
            Tenant(tenant_id=0, prefix="wp_0_", base_url="http://a")


class TestDatabaseTenantResolver:
    def test_is_a_tenant_resolver(self, resolver):
        assert isinstance(resolver, TenantResolver)

    def test_resolve_root(self, resolver):
        assert resolver.resolve(1) == Tenant(tenant_id=1, prefix="wp_", base_url="http://example.com")

    def test_resolve_site(self, resolver):
        assert resolver.resolve(5) == Tenant(tenant_id=5, prefix="wp_5_", base_url="http://example.com/five")

    def test_url_from_registry_without_options(self, resolver):
        assert resolver.resolve(9).base_url == "http://example.com/site9"

    def test_unknown_tenant(self, resolver):
        assert resolver.resolve(42) is None

    def test_detects_multisite(self, resolver):
        assert resolver.is_multitenant()

    def test_single_site_database(self, tmp_path):
        engine = create_engine(f"sqlite:///{tmp_path / 'single.db'}")
        with engine.begin() as conn:
            conn.execute(text("CREATE TABLE wp_options (option_id INTEGER PRIMARY KEY)"))
        resolver = DatabaseTenantResolver(engine, PlatformConfig(database_url="sqlite://"))

        assert not resolver.is_multitenant()
        assert resolver.resolve(1) is None

    def test_explicit_setting_wins(self, engine):
        config = PlatformConfig(database_url="sqlite://", multisite=False)
        assert not DatabaseTenantResolver(engine, config).is_multitenant()

    def test_custom_prefix(self, tmp_path):
        engine = create_engine(f"sqlite:///{tmp_path / 'custom.db'}")
        with engine.begin() as conn:
            conn.execute(text("CREATE TABLE net_blogs (blog_id INTEGER PRIMARY KEY, domain TEXT, path TEXT)"))
            conn.execute(text("CREATE TABLE net_site (id INTEGER PRIMARY KEY)"))
            conn.execute(text("INSERT INTO net_blogs VALUES (3, 'shop.example', '/')"))
        resolver = DatabaseTenantResolver(engine, PlatformConfig(database_url="sqlite://", table_prefix="net_"))

        assert resolver.is_multitenant()
        assert resolver.resolve(3) == Tenant(tenant_id=3, prefix="net_3_", base_url="http://shop.example")
