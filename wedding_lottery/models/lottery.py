from datetime import datetime
from typing import List

from pydantic import BaseModel, Field


class NamePool(BaseModel):
    """
    名单读取结果
    """
    names: List[str] = Field(..., description="参与抽奖的名字，按录入顺序")
    source: str = Field(..., description="数据来源: persisted 或 default")
    message: str = Field("", description="展示给前端的说明")


class WinnerSnapshot(BaseModel):
    winners: List[str] = Field(default_factory=list, description="已中奖名单，按中奖顺序")
    source: str = Field(..., description="数据来源: persisted 或 error")
    message: str = ""


class AppendResult(BaseModel):
    winners: List[str] = Field(..., description="合并后的完整中奖名单")
    new_count: int = Field(..., description="本次新增人数")
    total_count: int = Field(..., description="合并后总人数")


class ResetResult(BaseModel):
    cleared: int = Field(0, description="被清除的中奖人数")
    message: str = ""


class DrawResult(BaseModel):
    """一次抽奖的结果：两个不同的名字 + 抽取时间"""
    names: List[str] = Field(..., min_length=2, max_length=2)
    drawn_at: datetime = Field(default_factory=datetime.now)
    remaining: int = Field(0, description="本次抽取后仍可参与抽奖的人数")


class NameEntry(BaseModel):
    index: int
    name: str
