import asyncio
import os

from dotenv import load_dotenv
from sqlalchemy import inspect, text
from sqlalchemy.engine import make_url
from sqlalchemy.ext.asyncio import create_async_engine

from src.core.database import resolve_async_database_url

load_dotenv()

DB_LABELS = {
    "mysql": "MySQL",
    "postgresql": "PostgreSQL",
    "sqlite": "SQLite (testing)",
}

HEALTH_QUERIES = {
    "mysql": "SELECT VERSION();",
    "postgresql": "SELECT version();",
}

REQUIRED_TABLES = ("users", "appointment_types", "appointments")
ACTIVE_NURSES_QUERY = "SELECT COUNT(*) FROM users WHERE role = :role AND is_active = :active"


def _missing_tables(sync_conn) -> list[str]:
    existing = set(inspect(sync_conn).get_table_names())
    return [name for name in REQUIRED_TABLES if name not in existing]


async def verify_database() -> bool:
    print("-" * 30)
    db_url = os.getenv("DATABASE_URL")
    if not db_url:
        print("ERROR: DATABASE_URL is not set")
        return False

    try:
        async_url = resolve_async_database_url(db_url)
        url = make_url(async_url)
    except Exception as exc:  # noqa: BLE001 - surface clear setup errors
        print(f"ERROR: unsupported database configuration: {exc}")
        return False

    backend = url.get_backend_name()
    label = DB_LABELS.get(backend, backend)
    print(f"Checking {label} connection...")
    print(f"DSN: {url.render_as_string(hide_password=True)}")

    query = HEALTH_QUERIES.get(backend, "SELECT 1")

    try:
        engine = create_async_engine(async_url, echo=False)
        async with engine.connect() as conn:
            result = await conn.execute(text(query))
            print(f"OK: {label} answered {result.scalar()}")
            missing = await conn.run_sync(_missing_tables)
            nurses = None
            if not missing:
                count = await conn.execute(text(ACTIVE_NURSES_QUERY), {"role": "nurse", "active": True})
                nurses = count.scalar()
        await engine.dispose()
    except Exception as e:  # noqa: BLE001 - surface connection failure
        print(f"ERROR: {label} connection failed: {e}")
        return False

    if missing:
        print(f"WARNING: missing tables {', '.join(missing)}; run `alembic upgrade head`")
        return False
    if not nurses:
        print("WARNING: no active nurses; insert rows into `users` with role 'nurse' before booking")
    return True


async def main():
    print("Verifying environment configuration...")
    db_ok = await verify_database()
    print("-" * 30)
    if db_ok:
        print("All services are configured correctly.")
    else:
        print("Configuration problems found; check your .env file and database.")


if __name__ == "__main__":
    asyncio.run(main())
