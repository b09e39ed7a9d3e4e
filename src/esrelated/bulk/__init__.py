"""批量索引器模块.

该模块提供按固定批次大小累计并提交文档的批量索引器：
- 逐条收集文档，达到 chunk_size 时自动提交
- 保持提交顺序
- 每批次提交后可选地回调原始结果
- done() 提交剩余文档

示例用法:
    >>> from esrelated.bulk import BulkIndexer
    >>> bulk = BulkIndexer(client, chunk_size=100, result_callback=print)
    >>> for doc in docs:
    ...     bulk.index(doc["id"], {"title": doc["title"]})
    >>> bulk.done()
"""

from .exceptions import BulkConfigError, BulkIndexerError
from .models import BulkIndexerConfig, build_action_header
from .tool import BulkIndexer

__all__ = [
    "BulkIndexerConfig",
    "build_action_header",
    "BulkIndexer",
    "BulkIndexerError",
    "BulkConfigError",
]
