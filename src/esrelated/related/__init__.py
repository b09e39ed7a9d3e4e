"""相似文档客户端模块.

该模块提供绑定单个索引的轻量客户端，包括：
- 索引创建与删除
- 单文档索引、获取、删除
- 批量提交
- more_like_this 相似文档查询（单字段组与多字段组加权）

示例用法:
    >>> from esrelated.related import RelatedIndexClient
    >>> client = RelatedIndexClient("articles")
    >>> client.setup_index(["title", "tags"])
    >>> client.related_to("42", ["title", "tags"])
"""

from .exceptions import (
    BackendError,
    DocumentNotFoundError,
    IndexAlreadyExistsError,
    RelatedClientError,
)
from .models import TERM_VECTOR_TEXT_MAPPING, BoostedFields
from .tool import RelatedIndexClient, hits_to_scores

__all__ = [
    "RelatedIndexClient",
    "hits_to_scores",
    "BoostedFields",
    "TERM_VECTOR_TEXT_MAPPING",
    "RelatedClientError",
    "BackendError",
    "IndexAlreadyExistsError",
    "DocumentNotFoundError",
]
