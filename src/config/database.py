import contextlib
import sys
from collections.abc import AsyncIterator
from pathlib import Path

from alembic import command, config
from sqlalchemy.engine import make_url
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import NullPool

from src.config.settings import settings


def ensure_sqlite_directory(url: str) -> None:
    """SQLite will not create missing parent directories for its database file."""
    database = make_url(url).database
    if database and database != ":memory:":
        Path(database).parent.mkdir(parents=True, exist_ok=True)


def create_engine(url: str, testing: bool = False):
    url = str(url)
    use_echo = settings.log_db
    connect_args = {}
    kwargs = {}
    if "sqlite" in url:
        connect_args = {"timeout": 15}
        ensure_sqlite_directory(url)
    if testing:
        # each test runs on its own event loop, pooled connections must not outlive it
        kwargs["poolclass"] = NullPool
    return create_async_engine(
        url,
        echo=use_echo,
        future=True,  # use the sqlalchemy 2.0 classes
        connect_args=connect_args,
        **kwargs,
    )


def generate_test_db_dsn(dsn: str) -> str:
    part_dsn, db_name = str(dsn).rsplit("/", 1)
    return f"{part_dsn}/test_{db_name}"


if "pytest" in sys.modules:
    engine = create_engine(generate_test_db_dsn(settings.database_url), testing=True)
else:
    engine = create_engine(settings.database_url)


def run_upgrade(connection, cfg):
    cfg.attributes["connection"] = connection
    command.upgrade(cfg, "head")


async def upgrade_database(ini_path: str = "alembic.ini"):
    async with engine.begin() as conn:
        await conn.run_sync(run_upgrade, config.Config(ini_path))


async_session_maker = async_sessionmaker(engine, expire_on_commit=False)


@contextlib.asynccontextmanager
async def async_session_manager(
    auto_commit=True, session_overwrite: AsyncSession | None = None
) -> AsyncIterator[AsyncSession]:
    if session_overwrite:
        yield session_overwrite
    else:
        async with async_session_maker() as session:
            try:
                yield session
            except Exception as e:
                await session.rollback()
                raise e
            else:
                if auto_commit:
                    await session.commit()
