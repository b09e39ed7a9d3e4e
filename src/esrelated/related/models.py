"""相似文档客户端数据模型定义模块."""

from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any

# more_like_this 查询只对开启 term_vector 的文本字段有效
TERM_VECTOR_TEXT_MAPPING: dict[str, str] = {
    "type": "text",
    "term_vector": "yes",
}


@dataclass
class BoostedFields:
    """加权字段组.

    用于 more_like_this_boosted，每组生成一个带权重的 more_like_this 子查询。

    Attributes:
        fields: 字段名或字段名列表
        boost: 子查询权重，默认 1

    Examples:
        >>> BoostedFields("tags", boost=3).fields
        ['tags']
    """

    fields: str | list[str]
    boost: float = 1

    def __post_init__(self) -> None:
        self.fields = [self.fields] if isinstance(self.fields, str) else list(self.fields)
        if not self.fields:
            raise ValueError("fields 不能为空")

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any]) -> "BoostedFields":
        """从 {"fields": ..., "boost": ...} 格式的字典构建."""
        if "fields" not in data:
            raise ValueError(f"字段组缺少 'fields': {data}")
        return cls(fields=data["fields"], boost=data.get("boost", 1))
