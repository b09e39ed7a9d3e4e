"""es-related - Elasticsearch 相似文档与批量索引工具包.

主要功能:
    - RelatedIndexClient: 单索引客户端，负责索引生命周期、单文档操作和相似文档查询
    - BulkIndexer: 按固定批次大小累计并提交文档的批量索引器
    - create_client: 根据配置创建 Elasticsearch 客户端

使用示例:
    from esrelated import BulkIndexer, RelatedIndexClient

    client = RelatedIndexClient("articles")
    bulk = BulkIndexer(client, chunk_size=100)
    for doc in docs:
        bulk.index(doc["id"], {"title": doc["title"], "tags": ",".join(doc["tags"])})
    bulk.done()
"""

__version__ = "0.1.0"

# 导出批量索引器
from esrelated.bulk import BulkConfigError, BulkIndexer, BulkIndexerError

# 导出连接配置
from esrelated.connection import (
    ClusterConfig,
    ConnectionConfig,
    ConnectionConfigError,
    create_client,
)

# 导出异常
from esrelated.exceptions import EsRelatedError

# 导出相似文档客户端
from esrelated.related import (
    BackendError,
    BoostedFields,
    DocumentNotFoundError,
    IndexAlreadyExistsError,
    RelatedClientError,
    RelatedIndexClient,
    hits_to_scores,
)

__all__ = [
    # 版本
    "__version__",
    # 批量索引
    "BulkIndexer",
    # 相似文档客户端
    "RelatedIndexClient",
    "BoostedFields",
    "hits_to_scores",
    # 连接
    "ClusterConfig",
    "ConnectionConfig",
    "create_client",
    # 异常
    "EsRelatedError",
    "BulkIndexerError",
    "BulkConfigError",
    "RelatedClientError",
    "BackendError",
    "IndexAlreadyExistsError",
    "DocumentNotFoundError",
    "ConnectionConfigError",
]
