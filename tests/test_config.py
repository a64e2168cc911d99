from subscription_service.config import Settings


def test_database_url_assembled_from_parts():
    s = Settings(
        DATABASE_URL=None,
        DB_HOST="db",
        DB_PORT=6543,
        DB_USER="svc",
        DB_PASSWORD="secret",
        DB_NAME="subs",
        _env_file=None,
    )
    assert s.database_url == "postgresql+asyncpg://svc:secret@db:6543/subs"


def test_explicit_database_url_wins():
    s = Settings(DATABASE_URL="sqlite+aiosqlite:///./local.db", DB_HOST="ignored", _env_file=None)
    assert s.database_url == "sqlite+aiosqlite:///./local.db"


def test_is_development():
    assert Settings(APP_ENV="Development", _env_file=None).is_development is True
    assert Settings(APP_ENV="production", _env_file=None).is_development is False
