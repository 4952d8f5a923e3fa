from pydantic import BaseModel, Field


class MessageResponse(BaseModel):
    """仅包含提示消息的响应"""
    message: str = Field(description="提示消息")
