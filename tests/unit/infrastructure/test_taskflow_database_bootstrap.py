"""Unit tests for database URL handling."""

from collections.abc import Iterator

import pytest

from taskflow.bootstrap.database import (
    _mask_password,
    get_database_url,
    get_engine,
    reset_database_bootstrap,
)


@pytest.fixture(autouse=True)
def _reset() -> Iterator[None]:
    reset_database_bootstrap()
    yield
    reset_database_bootstrap()


class TestGetDatabaseUrl:
    def test_missing_url(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.delenv("DATABASE_URL", raising=False)

        with pytest.raises(ValueError, match="DATABASE_URL"):
            get_database_url()

    @pytest.mark.parametrize(
        ("raw", "expected"),
        [
            ("postgresql://u:p@db/app", "postgresql+asyncpg://u:p@db/app"),
            ("postgres://u:p@db/app", "postgresql+asyncpg://u:p@db/app"),
            ("postgresql+asyncpg://db/app", "postgresql+asyncpg://db/app"),
            ("sqlite:///tmp/x.db", "sqlite+aiosqlite:///tmp/x.db"),
            ("sqlite+aiosqlite:///tmp/x.db", "sqlite+aiosqlite:///tmp/x.db"),
        ],
    )
    def test_driver_conversion(
        self, monkeypatch: pytest.MonkeyPatch, raw: str, expected: str
    ) -> None:
        monkeypatch.setenv("DATABASE_URL", raw)

        assert get_database_url() == expected


class TestEngine:
    def test_mask_password(self) -> None:
        assert _mask_password("postgresql+asyncpg://u:secret@db/app") == (
            "postgresql+asyncpg://u:***@db/app"
        )
        assert _mask_password("sqlite+aiosqlite:///x.db") == "sqlite+aiosqlite:///x.db"

    def test_engine_is_singleton(
        self, monkeypatch: pytest.MonkeyPatch, tmp_path
    ) -> None:
        monkeypatch.setenv("DATABASE_URL", f"sqlite:///{tmp_path / 'x.db'}")

        assert get_engine() is get_engine()
