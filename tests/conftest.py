from src.conftest import database  # noqa: F401
