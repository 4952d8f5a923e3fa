"""
通用资源 CRUD 服务
菜品、分类、员工、社交媒体、预订等表共用的 列表/查询/创建/部分更新/删除 实现

约定：
- 更新是合并语义，只写入调用方提交的字段
- 删除是硬删除，不做级联也不做引用检查
- 并发写入以最后一次为准（无版本号）
"""

import json
import logging
from typing import Any, Dict, Iterable, List, Optional, Type

from ..core.database import DatabaseManager, db_manager
from ..core.exceptions import ResourceNotFoundError, ValidationError
from ..models.base import BaseEntity

logger = logging.getLogger(__name__)


def log_operation(db: DatabaseManager, actor_id: Optional[int], action: str,
                  details: Dict[str, Any]) -> None:
    """记录操作日志"""
    db.execute(
        "INSERT INTO logs (actor_id, action, detail_json) VALUES (?, ?, ?)",
        [actor_id, action, json.dumps(details, ensure_ascii=False, default=str)]
    )


class CrudService:
    """表驱动的 CRUD 服务基类"""

    table: str = ""
    model: Type[BaseEntity] = BaseEntity
    columns: Iterable[str] = ()
    nullable_columns: Iterable[str] = ()
    order_by: str = "id"
    resource_name: str = "Resource"
    not_found_error: Type[ResourceNotFoundError] = ResourceNotFoundError

    def __init__(self, db: Optional[DatabaseManager] = None):
        self.db = db or db_manager

    # 查询

    def select_sql(self) -> str:
        return f"SELECT * FROM {self.table}"

    def list_all(self) -> List[BaseEntity]:
        rows = self.db.execute_query(
            f"SELECT * FROM ({self.select_sql()}) AS r ORDER BY {self.order_by}"
        )
        return [self.model.model_validate(row) for row in rows]

    def get(self, resource_id: int) -> Optional[BaseEntity]:
        row = self.db.execute_one(
            f"SELECT * FROM ({self.select_sql()}) AS r WHERE r.id = ?",
            [resource_id]
        )
        return self.model.model_validate(row) if row else None

    def get_or_raise(self, resource_id: int) -> BaseEntity:
        entity = self.get(resource_id)
        if entity is None:
            raise self.not_found_error(f"{self.resource_name} not found")
        return entity

    # 写入

    def _writable(self, data: Dict[str, Any]) -> Dict[str, Any]:
        nullable = set(self.nullable_columns)
        return {
            key: value for key, value in data.items()
            if key in self.columns and (value is not None or key in nullable)
        }

    def create(self, data: Dict[str, Any], actor_id: Optional[int] = None) -> BaseEntity:
        values = self._writable(data)
        if not values:
            raise ValidationError(f"Invalid {self.resource_name.lower()} data")

        names = ", ".join(values)
        placeholders = ", ".join("?" for _ in values)
        with self.db.transaction():
            new_id = self.db.scalar(
                f"INSERT INTO {self.table} ({names}) VALUES ({placeholders}) RETURNING id",
                list(values.values())
            )
            log_operation(self.db, actor_id, f"{self.table}_create", {"id": new_id, **values})
        logger.info("Created %s %s", self.table, new_id)
        return self.get_or_raise(new_id)

    def update(self, resource_id: int, data: Dict[str, Any],
               actor_id: Optional[int] = None) -> BaseEntity:
        self.get_or_raise(resource_id)
        values = self._writable(data)
        if values:
            assignments = ", ".join(f"{name} = ?" for name in values)
            with self.db.transaction():
                self.db.execute(
                    f"UPDATE {self.table} SET {assignments} WHERE id = ?",
                    [*values.values(), resource_id]
                )
                log_operation(self.db, actor_id, f"{self.table}_update", {"id": resource_id, **values})
        return self.get_or_raise(resource_id)

    def delete(self, resource_id: int, actor_id: Optional[int] = None) -> None:
        self.get_or_raise(resource_id)
        with self.db.transaction():
            self.db.execute(f"DELETE FROM {self.table} WHERE id = ?", [resource_id])
            log_operation(self.db, actor_id, f"{self.table}_delete", {"id": resource_id})
        logger.info("Deleted %s %s", self.table, resource_id)
