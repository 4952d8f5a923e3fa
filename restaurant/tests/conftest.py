"""
测试配置文件
提供测试所需的fixtures和配置
"""

import pytest
from fastapi.testclient import TestClient

from restaurant.app import create_app
from restaurant.config.settings import settings
from restaurant.core.database import MEMORY_DB, DatabaseManager


@pytest.fixture
def test_db():
    """每个测试一个独立的内存数据库"""
    db = DatabaseManager(MEMORY_DB)
    yield db
    db.close()


@pytest.fixture
def app_instance(test_db):
    """测试应用"""
    return create_app(db=test_db)


@pytest.fixture
def client(app_instance):
    """测试客户端（进入上下文以触发启动时的初始化）"""
    with TestClient(app_instance) as test_client:
        yield test_client


@pytest.fixture
def admin_headers(client):
    """默认管理员的认证头"""
    response = client.post(
        "/api/login",
        json={
            "username": settings.default_admin_username,
            "password": settings.default_admin_password
        }
    )
    assert response.status_code == 200
    return {"Authorization": f"Bearer {response.json()['token']}"}


@pytest.fixture
def user_headers(client):
    """普通注册用户的认证头"""
    response = client.post(
        "/api/register",
        json={"username": "regular_user", "password": "secret123"}
    )
    assert response.status_code == 201
    return {"Authorization": f"Bearer {response.json()['token']}"}


@pytest.fixture
def reservation_payload():
    """合法的预订请求体"""
    return {
        "name": "María Pérez",
        "email": "maria@example.com",
        "phone": "0412-1234567",
        "date": "2030-05-01",
        "time": "19:30",
        "guests": 4,
        "message": "Mesa cerca de la ventana"
    }


@pytest.fixture
def sample_reservation(client, reservation_payload):
    response = client.post("/api/reservations", json=reservation_payload)
    assert response.status_code == 201
    return response.json()
