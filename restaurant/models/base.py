"""
基础数据模型
定义通用的模型基类和常用字段
"""

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    """对外 JSON 字段使用 camelCase，Python 属性保持 snake_case"""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class BaseEntity(CamelModel):
    """基础实体模型"""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        from_attributes=True,
        use_enum_values=True,
    )

    id: int
