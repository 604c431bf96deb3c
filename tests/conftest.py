"""
Configuración de pytest para tests
"""
import pytest
from fastapi.testclient import TestClient

from petstore.db import PetDatabase
from petstore.notifications import ChangeNotifier
from petstore.provider import PetProvider, get_provider

# Deshabilitar rate limiting en la app antes de importarla
@pytest.fixture(scope="session", autouse=True)
def disable_rate_limiting():
    """Deshabilita rate limiting para todos los tests"""
    from petstore.main import app
    app.state.limiter = None

@pytest.fixture
def database():
    """BD SQLite en memoria, nueva para cada test"""
    db = PetDatabase("sqlite://")
    yield db
    db.close()

@pytest.fixture
def notifier():
    return ChangeNotifier()

@pytest.fixture
def provider(database, notifier):
    return PetProvider(database, notifier)

@pytest.fixture
def changes(notifier):
    """Registra las rutas notificadas bajo /pets"""
    seen = []
    notifier.register_observer("/pets", seen.append)
    return seen

@pytest.fixture
def client(provider):
    """Fixture para cliente de test de FastAPI"""
    from petstore.main import app
    app.state.limiter = None
    app.dependency_overrides[get_provider] = lambda: provider
    yield TestClient(app)
    app.dependency_overrides.clear()

@pytest.fixture
def rex():
    """Datos de mascota de prueba"""
    return {"name": "Rex", "breed": "Labrador", "gender": 1, "weight": 30}
