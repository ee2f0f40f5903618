# tests/conftest.py
import os
import sys
import pytest
from pathlib import Path
from sqlalchemy.sql import text

# Add project root to Python path
project_root = str(Path(__file__).parent.parent)
if project_root not in sys.path:
    sys.path.insert(0, project_root)

from sqlalchemy.orm import Session
from atlas.sa.database import Database
from atlas.sa.models import Base

# Child tables first so foreign keys hold while clearing
TABLES = [
    "genre_aka",
    "genre_relevance_vote",
    "genre_parent",
    "genre_derived_from",
    "genre_influence",
    "genre_history",
    "genre",
]

@pytest.fixture(scope="session")
def test_db_path(tmp_path_factory):
    """Create a temporary directory for the test database."""
    test_dir = tmp_path_factory.mktemp("test_db")
    return str(test_dir / "test_genres.db")

@pytest.fixture(scope="session")
def database_url(test_db_path):
    return f"sqlite:///{test_db_path}"

@pytest.fixture(scope="session")
def database(database_url, test_db_path):
    """Create a test database instance"""
    db = Database(database_url)

    # Drop all tables and recreate schema
    Base.metadata.drop_all(db.engine)
    Base.metadata.create_all(db.engine)

    yield db

    # Clean up the test database file after all tests
    db.engine.dispose()
    try:
        os.remove(test_db_path)
    except OSError:
        pass  # Ignore errors if file doesn't exist

@pytest.fixture(scope="function")
def db_session(database):
    """Create a new database session for a test, starting from empty tables"""
    session: Session = database._SessionFactory()
    for table in TABLES:
        session.execute(text(f"DELETE FROM {table}"))
    session.commit()
    try:
        yield session
    finally:
        session.rollback()
        session.close()
