from ..settings import Settings


class TestingSettings(Settings):
    debug: bool = True
    database_url: str = "duckdb://:memory:"
    jwt_secret_key: str = "test-secret-key"
    default_admin_password: str = "admin-test-pass"
    api_title: str = "Restaurant API (Test)"
    api_version: str = "1.0.0-test"
