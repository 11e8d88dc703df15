"""Environment handling: database URLs, TLS options and startup checks."""

import ssl

import pytest

import config
import db_sqlalchemy
import main


class TestDatabaseUrl:

    def test_postgres_scheme_normalized(self):
        assert config.normalize_db_url("postgres://u:p@h:5432/db") == "postgresql://u:p@h:5432/db"

    def test_other_urls_untouched(self):
        url = "sqlite+aiosqlite:///./pastes/pastes.db"
        assert config.normalize_db_url(url) == url

    def test_async_driver_for_postgres(self):
        assert db_sqlalchemy.async_url("postgresql://u:p@h:5432/db") == "postgresql+asyncpg://u:p@h:5432/db"

    def test_async_driver_for_sqlite(self):
        assert db_sqlalchemy.async_url("sqlite:///x.db") == "sqlite+aiosqlite:///x.db"

    def test_explicit_driver_kept(self):
        assert db_sqlalchemy.async_url("sqlite+aiosqlite:///x.db") == "sqlite+aiosqlite:///x.db"


class TestConnectArgs:

    def test_sqlite_has_no_tls(self):
        assert db_sqlalchemy._connect_args("sqlite+aiosqlite:///x.db") == {}

    def test_local_postgres_disables_tls(self, monkeypatch):
        monkeypatch.setattr(config, "LOCAL", True)
        assert db_sqlalchemy._connect_args("postgresql+asyncpg://h/db") == {"ssl": False}

    def test_hosted_postgres_skips_verification_by_default(self, monkeypatch):
        monkeypatch.setattr(config, "LOCAL", False)
        monkeypatch.setattr(config, "DATABASE_SSL_VERIFY", False)

        ctx = db_sqlalchemy._connect_args("postgresql+asyncpg://h/db")["ssl"]

        assert ctx.verify_mode == ssl.CERT_NONE
        assert ctx.check_hostname is False

    def test_hosted_postgres_verifies_when_asked(self, monkeypatch):
        monkeypatch.setattr(config, "LOCAL", False)
        monkeypatch.setattr(config, "DATABASE_SSL_VERIFY", True)

        ctx = db_sqlalchemy._connect_args("postgresql+asyncpg://h/db")["ssl"]

        assert ctx.verify_mode == ssl.CERT_REQUIRED


class TestBuildEngine:

    def test_creates_sqlite_folder(self, tmp_path):
        target = tmp_path / "nested" / "pastes.db"

        engine = db_sqlalchemy.build_engine(f"sqlite:///{target}")

        assert target.parent.is_dir()
        assert engine.url.drivername == "sqlite+aiosqlite"


class TestRun:

    def test_refuses_to_start_without_port(self, monkeypatch):
        monkeypatch.setattr(config, "PORT", None)

        with pytest.raises(SystemExit, match="Missing PORT"):
            main.run()
