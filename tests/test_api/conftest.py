# tests/test_api/conftest.py
import pytest
from fastapi.testclient import TestClient
from api.main import app
from atlas.sa.database import get_db

@pytest.fixture
def client(db_session):
    """Test client whose requests share the test's database session"""
    def override_get_db():
        yield db_session

    app.dependency_overrides[get_db] = override_get_db
    try:
        yield TestClient(app)
    finally:
        app.dependency_overrides.clear()

@pytest.fixture
def genres(client):
    """Create Rock -> Hard Rock -> Heavy Metal and Disco -> (derived) Disco Rock through the API"""
    def create(**payload):
        response = client.post("/genres", json=payload)
        assert response.status_code == 201, response.text
        return response.json()["id"]

    rock = create(name="Rock")
    hard_rock = create(name="Hard Rock", parents=[rock])
    heavy_metal = create(name="Heavy Metal", parents=[hard_rock], akas={"primary": ["Metal"]})
    disco = create(name="Disco")
    disco_rock = create(name="Disco Rock", parents=[rock], derived_from=[disco])

    return {
        "rock": rock,
        "hard_rock": hard_rock,
        "heavy_metal": heavy_metal,
        "disco": disco,
        "disco_rock": disco_rock,
    }
