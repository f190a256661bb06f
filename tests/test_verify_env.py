import pytest
from sqlalchemy.ext.asyncio import async_sessionmaker

from src.modules.users.models import User
from src.shared.enums import UserRole
from verify_env import verify_database


@pytest.mark.asyncio
async def test_verify_warns_when_no_nurse_is_seeded(file_engine, monkeypatch, capsys):
    monkeypatch.setenv("DATABASE_URL", file_engine.url.render_as_string(hide_password=False))

    assert await verify_database() is True
    assert "no active nurses" in capsys.readouterr().out


@pytest.mark.asyncio
async def test_verify_is_quiet_once_nurses_exist(file_engine, monkeypatch, capsys):
    SessionLocal = async_sessionmaker(file_engine, expire_on_commit=False)
    async with SessionLocal() as session:
        session.add(User(user_id="N1", name="Alice", email="alice@clinic.example.edu", role=UserRole.NURSE))
        await session.commit()
    monkeypatch.setenv("DATABASE_URL", file_engine.url.render_as_string(hide_password=False))

    assert await verify_database() is True
    assert "no active nurses" not in capsys.readouterr().out
