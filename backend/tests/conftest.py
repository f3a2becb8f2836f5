from pathlib import Path
import os
import tempfile
import pytest

# Point the app at a throwaway SQLite file before any test module imports it.
_TMP_DIR = Path(tempfile.mkdtemp(prefix="school_api_tests_"))
os.environ["DATABASE_URL"] = f"sqlite:///{_TMP_DIR / 'test.db'}"
os.environ["MAX_PAGE_LIMIT"] = "0"


@pytest.fixture(autouse=True)
def reset_db():
    """Give every test an empty schema."""
    from school_api.database import create_db_and_tables, drop_db_and_tables
    drop_db_and_tables()
    create_db_and_tables()
    yield
