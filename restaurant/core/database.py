"""
数据库连接和管理模块
基于 DuckDB 的单连接管理器，提供统一的查询、事务和建表接口
"""

import logging
import threading
from contextlib import contextmanager
from pathlib import Path
from typing import Any, Dict, Generator, List, Optional

import duckdb
from fastapi import Request

from .exceptions import DatabaseError
from ..config.settings import settings

logger = logging.getLogger(__name__)

MEMORY_DB = ":memory:"

# 完整的表结构定义
# menu_items.category_id 不设外键：删除分类后菜品保留悬空引用
SCHEMA_SQL = r"""
CREATE SEQUENCE IF NOT EXISTS users_id_seq;
CREATE TABLE IF NOT EXISTS users (
  id INTEGER DEFAULT nextval('users_id_seq') PRIMARY KEY,
  username TEXT UNIQUE NOT NULL,
  password TEXT NOT NULL,
  is_first_login BOOLEAN NOT NULL DEFAULT TRUE,
  role TEXT NOT NULL DEFAULT 'admin'
);

CREATE SEQUENCE IF NOT EXISTS settings_id_seq;
CREATE TABLE IF NOT EXISTS settings (
  id INTEGER DEFAULT nextval('settings_id_seq') PRIMARY KEY,
  key TEXT UNIQUE NOT NULL,
  value TEXT NOT NULL
);

CREATE SEQUENCE IF NOT EXISTS categories_id_seq;
CREATE TABLE IF NOT EXISTS categories (
  id INTEGER DEFAULT nextval('categories_id_seq') PRIMARY KEY,
  name TEXT NOT NULL,
  slug TEXT UNIQUE NOT NULL
);

CREATE SEQUENCE IF NOT EXISTS menu_items_id_seq;
CREATE TABLE IF NOT EXISTS menu_items (
  id INTEGER DEFAULT nextval('menu_items_id_seq') PRIMARY KEY,
  name TEXT NOT NULL,
  description TEXT NOT NULL,
  price DOUBLE NOT NULL,
  image TEXT NOT NULL,
  ingredients TEXT NOT NULL,
  category_id INTEGER,
  is_available BOOLEAN NOT NULL DEFAULT TRUE,
  is_featured BOOLEAN NOT NULL DEFAULT FALSE,
  created_at TIMESTAMP NOT NULL DEFAULT current_timestamp
);

CREATE SEQUENCE IF NOT EXISTS staff_id_seq;
CREATE TABLE IF NOT EXISTS staff (
  id INTEGER DEFAULT nextval('staff_id_seq') PRIMARY KEY,
  name TEXT NOT NULL,
  position TEXT NOT NULL,
  bio TEXT NOT NULL,
  image TEXT NOT NULL
);

CREATE SEQUENCE IF NOT EXISTS locations_id_seq;
CREATE TABLE IF NOT EXISTS locations (
  id INTEGER DEFAULT nextval('locations_id_seq') PRIMARY KEY,
  address TEXT NOT NULL,
  phone TEXT NOT NULL,
  email TEXT NOT NULL,
  map_coordinates TEXT NOT NULL,
  hours TEXT NOT NULL
);

CREATE SEQUENCE IF NOT EXISTS social_media_id_seq;
CREATE TABLE IF NOT EXISTS social_media (
  id INTEGER DEFAULT nextval('social_media_id_seq') PRIMARY KEY,
  name TEXT NOT NULL,
  url TEXT NOT NULL,
  icon TEXT NOT NULL,
  is_active BOOLEAN NOT NULL DEFAULT TRUE
);

CREATE SEQUENCE IF NOT EXISTS reservations_id_seq;
CREATE TABLE IF NOT EXISTS reservations (
  id INTEGER DEFAULT nextval('reservations_id_seq') PRIMARY KEY,
  name TEXT NOT NULL,
  email TEXT NOT NULL,
  phone TEXT NOT NULL,
  date DATE NOT NULL,
  time TEXT NOT NULL,
  guests INTEGER NOT NULL,
  message TEXT,
  status TEXT CHECK(status IN ('pending','confirmed','in-progress','completed','cancelled')) NOT NULL DEFAULT 'pending',
  created_at TIMESTAMP DEFAULT current_timestamp
);

CREATE SEQUENCE IF NOT EXISTS logs_id_seq;
CREATE TABLE IF NOT EXISTS logs (
  log_id INTEGER DEFAULT nextval('logs_id_seq') PRIMARY KEY,
  actor_id INTEGER,
  action TEXT,
  detail_json TEXT,
  created_at TIMESTAMP DEFAULT current_timestamp
);

CREATE INDEX IF NOT EXISTS idx_logs_actor ON logs(actor_id);
CREATE INDEX IF NOT EXISTS idx_logs_action ON logs(action);
"""


def _db_path_from_url(db_url: str) -> str:
    """从 duckdb:// URL 中提取数据库路径"""
    if db_url.startswith("duckdb://"):
        return db_url[len("duckdb://"):]
    return db_url


class DatabaseManager:
    """数据库管理器，封装所有数据库操作"""

    def __init__(self, db_path: Optional[str] = None):
        self._connection: Optional[duckdb.DuckDBPyConnection] = None
        self._lock = threading.RLock()
        self.db_path = db_path or _db_path_from_url(settings.database_url)

    @property
    def connection(self) -> duckdb.DuckDBPyConnection:
        """获取数据库连接"""
        if self._connection is None:
            if self.db_path != MEMORY_DB:
                Path(self.db_path).parent.mkdir(parents=True, exist_ok=True)
            try:
                self._connection = duckdb.connect(self.db_path)
                self._connection.execute(SCHEMA_SQL)
            except duckdb.Error as e:
                raise DatabaseError(f"Failed to initialize schema: {e}")
            logger.info("Connected to database %s", self.db_path)
        return self._connection

    def init_database(self):
        """初始化数据库（建表幂等）"""
        with self._lock:
            self.connection.execute(SCHEMA_SQL)

    def close(self):
        """关闭连接"""
        with self._lock:
            if self._connection is not None:
                self._connection.close()
                self._connection = None

    @contextmanager
    def transaction(self) -> Generator[duckdb.DuckDBPyConnection, None, None]:
        """数据库事务上下文管理器"""
        with self._lock:
            conn = self.connection
            conn.execute("BEGIN")
            try:
                yield conn
            except Exception:
                conn.execute("ROLLBACK")
                raise
            conn.execute("COMMIT")

    def execute(self, query: str, params: Optional[list] = None) -> None:
        """执行写操作"""
        with self._lock:
            try:
                self.connection.execute(query, params or [])
            except duckdb.Error as e:
                raise DatabaseError(f"Query execution failed: {e}")

    def execute_query(self, query: str, params: Optional[list] = None) -> List[Dict[str, Any]]:
        """执行查询并返回字典列表"""
        with self._lock:
            try:
                cursor = self.connection.execute(query, params or [])
                rows = cursor.fetchall()
            except duckdb.Error as e:
                raise DatabaseError(f"Query execution failed: {e}")
            columns = [col[0] for col in cursor.description]
            return [dict(zip(columns, row)) for row in rows]

    def execute_one(self, query: str, params: Optional[list] = None) -> Optional[Dict[str, Any]]:
        """执行查询并返回单条结果"""
        rows = self.execute_query(query, params)
        return rows[0] if rows else None

    def scalar(self, query: str, params: Optional[list] = None) -> Any:
        """执行查询并返回第一行第一列"""
        with self._lock:
            try:
                row = self.connection.execute(query, params or []).fetchone()
            except duckdb.Error as e:
                raise DatabaseError(f"Query execution failed: {e}")
            return row[0] if row else None


# 全局数据库管理器实例
db_manager = DatabaseManager()


def get_db(request: Request) -> DatabaseManager:
    """FastAPI 依赖：返回应用绑定的数据库管理器"""
    return getattr(request.app.state, "db", db_manager)
