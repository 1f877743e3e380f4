"""
HTTP 入口的请求模型；响应直接复用 assistant / jobs 下的模型。
"""
from pydantic import BaseModel, Field


class ChatRequest(BaseModel):
    """POST /v1/chat 请求。"""
    message: str = Field(..., description="用户输入")
