"""相似文档客户端核心工具类."""

from __future__ import annotations

import logging
from collections.abc import Mapping, Sequence
from typing import Any

from elasticsearch import Elasticsearch
from elasticsearch.dsl import Q
from elasticsearch.exceptions import (
    ApiError,
    BadRequestError,
    NotFoundError,
    TransportError,
)

from ..connection import ClusterConfig, ConnectionConfig, create_client
from ..typing import (
    BulkActionItem,
    DocumentBody,
    DocumentId,
    RefreshFlag,
    ScoreMap,
)
from .exceptions import BackendError, DocumentNotFoundError, IndexAlreadyExistsError
from .models import TERM_VECTOR_TEXT_MAPPING, BoostedFields

logger = logging.getLogger(__name__)


def _ensure_dict(response: Any) -> dict[str, Any]:
    """确保响应为字典格式.

    支持 elasticsearch 客户端的 ObjectApiResponse、dsl Response 对象和原始字典.
    """
    if isinstance(response, Mapping) and not hasattr(response, "body"):
        return dict(response)
    if hasattr(response, "body"):
        return dict(response.body)
    if hasattr(response, "to_dict"):
        return response.to_dict()
    raise TypeError(f"不支持的响应类型: {type(response)}")


def hits_to_scores(response: Any) -> ScoreMap:
    """将相似文档查询结果转换为 {文档ID: 得分}.

    保持 ES 返回的排序；响应中缺少 hits 时返回空字典。

    Example:
        >>> hits_to_scores({"hits": {"hits": [{"_id": "7", "_score": 1.5}]}})
        {'7': 1.5}
    """
    hits = _ensure_dict(response).get("hits") or {}
    return {hit["_id"]: hit["_score"] for hit in hits.get("hits") or []}


class RelatedIndexClient:
    """单索引相似文档客户端.

    对一个索引提供：
    - 索引创建（带 term_vector 的文本字段映射）与删除
    - 单文档索引、获取、删除
    - 批量提交（BulkIndexer 的后端）
    - more_like_this 相似文档查询，支持多字段组加权

    Args:
        index_name: 索引名称
        es_client: 已有的 Elasticsearch 客户端；为 None 时根据 cluster 创建
        cluster: 集群配置，默认连接 http://127.0.0.1:9200
        connection_config: 连接配置

    Raises:
        ValueError: index_name 为空，或同时传入 es_client 与 cluster/connection_config 时抛出

    Example:
        >>> client = RelatedIndexClient("articles", cluster=ClusterConfig("es:9200"))
        >>> client.setup_index(["title", "tags"])
        >>> client.related_to("42", ["title", "tags"], size=5)
        {'17': 3.2, '8': 1.9}
    """

    def __init__(
        self,
        index_name: str,
        es_client: Elasticsearch | None = None,
        cluster: ClusterConfig | None = None,
        connection_config: ConnectionConfig | None = None,
    ) -> None:
        if not index_name:
            raise ValueError("index_name 不能为空")
        if es_client is not None and (cluster or connection_config):
            raise ValueError("es_client 与 cluster/connection_config 不能同时指定")
        self.index_name = index_name
        self._owns_client = es_client is None
        if es_client is None:
            es_client = create_client(cluster, connection_config)
        self.es_client = es_client
        logger.info(f"初始化相似文档客户端: index={index_name}")

    # ============================================================
    # 索引生命周期
    # ============================================================

    def index_exists(self) -> bool:
        """检查索引是否存在."""
        try:
            return bool(self.es_client.indices.exists(index=self.index_name))
        except (ApiError, TransportError) as e:
            raise BackendError(
                f"检查索引 '{self.index_name}' 是否存在失败: {str(e)}"
            ) from e

    def drop_index(self) -> bool:
        """删除索引.

        Returns:
            是否成功删除；索引不存在时返回 False
        """
        try:
            response = self.es_client.indices.delete(index=self.index_name)
        except NotFoundError:
            logger.warning(f"索引 '{self.index_name}' 不存在，无法删除")
            return False
        except (ApiError, TransportError) as e:
            raise BackendError(f"删除索引 '{self.index_name}' 失败: {str(e)}") from e

        acknowledged = bool(response.get("acknowledged", False))
        if acknowledged:
            logger.info(f"索引 '{self.index_name}' 删除成功")
        return acknowledged

    def setup_index(
        self,
        fields: str | Sequence[str],
        extra_fields_mapping: Mapping[str, Any] | None = None,
        settings: Mapping[str, Any] | None = None,
    ) -> bool:
        """创建用于相似文档查询的索引.

        fields 中的每个字段映射为带 term_vector 的 text 类型，
        extra_fields_mapping 覆盖合并到字段映射中。

        Args:
            fields: 参与相似度计算的字段名或字段列表
            extra_fields_mapping: 额外的字段映射，格式为 {字段名: 映射}
            settings: 索引设置，为空时不发送

        Returns:
            是否成功创建索引

        Raises:
            IndexAlreadyExistsError: 索引已存在时抛出
            BackendError: 其他请求失败时抛出

        Example:
            >>> client.setup_index(
            ...     ["title", "tags"],
            ...     extra_fields_mapping={"published": {"type": "date"}},
            ...     settings={"number_of_shards": 1},
            ... )
        """
        fields = [fields] if isinstance(fields, str) else list(fields)
        properties: dict[str, Any] = {
            field: dict(TERM_VECTOR_TEXT_MAPPING) for field in fields
        }
        properties.update(extra_fields_mapping or {})

        kwargs: dict[str, Any] = {"mappings": {"properties": properties}}
        if settings:
            kwargs["settings"] = dict(settings)

        try:
            response = self.es_client.indices.create(index=self.index_name, **kwargs)
        except BadRequestError as e:
            if "resource_already_exists_exception" in str(e):
                raise IndexAlreadyExistsError(
                    f"索引 '{self.index_name}' 已存在"
                ) from e
            raise BackendError(f"创建索引 '{self.index_name}' 失败: {str(e)}") from e
        except (ApiError, TransportError) as e:
            raise BackendError(f"创建索引 '{self.index_name}' 失败: {str(e)}") from e

        acknowledged = bool(response.get("acknowledged", False))
        if acknowledged:
            logger.info(
                f"索引 '{self.index_name}' 创建成功，字段: {sorted(properties)}"
            )
        return acknowledged

    # ============================================================
    # 单文档操作
    # ============================================================

    def index_document(self, doc_id: DocumentId, fields: DocumentBody) -> Any:
        """索引单个文档."""
        try:
            return self.es_client.index(
                index=self.index_name, id=doc_id, document=fields
            )
        except (ApiError, TransportError) as e:
            raise BackendError(f"索引文档 '{doc_id}' 失败: {str(e)}") from e

    def get_document(self, doc_id: DocumentId) -> Any | None:
        """按文档ID获取已索引的数据，文档不存在时返回 None."""
        try:
            return self.es_client.get(index=self.index_name, id=doc_id)
        except NotFoundError:
            return None
        except (ApiError, TransportError) as e:
            raise BackendError(f"获取文档 '{doc_id}' 失败: {str(e)}") from e

    def delete_document(self, doc_id: DocumentId) -> Any:
        """从索引中删除文档.

        Raises:
            DocumentNotFoundError: 文档不存在时抛出
        """
        try:
            return self.es_client.delete(index=self.index_name, id=doc_id)
        except NotFoundError as e:
            raise DocumentNotFoundError(
                f"文档 '{doc_id}' 在索引 '{self.index_name}' 中不存在"
            ) from e
        except (ApiError, TransportError) as e:
            raise BackendError(f"删除文档 '{doc_id}' 失败: {str(e)}") from e

    def bulk(
        self,
        operations: list[BulkActionItem],
        refresh: RefreshFlag | None = None,
    ) -> Any:
        """批量提交操作.

        Args:
            operations: 操作头与文档体交替排列的列表
            refresh: 刷新可见性参数，None 时不发送

        Returns:
            ES 返回的原始结果
        """
        kwargs: dict[str, Any] = {}
        if refresh is not None:
            kwargs["refresh"] = refresh
        try:
            return self.es_client.bulk(
                index=self.index_name, operations=operations, **kwargs
            )
        except (ApiError, TransportError) as e:
            raise BackendError(
                f"批量提交到索引 '{self.index_name}' 失败: {str(e)}"
            ) from e

    # ============================================================
    # 相似文档查询
    # ============================================================

    def _mlt_query(self, doc_id: DocumentId, fields: str | Sequence[str], **params):
        fields = [fields] if isinstance(fields, str) else list(fields)
        return Q(
            "more_like_this",
            fields=fields,
            like={"_index": self.index_name, "_id": doc_id},
            min_term_freq=1,
            min_doc_freq=1,
            **params,
        )

    def _search(self, query, size: int) -> Any:
        try:
            return self.es_client.search(
                index=self.index_name,
                query=query.to_dict(),
                size=size,
                source=False,
            )
        except (ApiError, TransportError) as e:
            raise BackendError(
                f"相似文档查询失败 (索引: '{self.index_name}'): {str(e)}"
            ) from e

    def more_like_this(
        self,
        doc_id: DocumentId,
        fields: str | Sequence[str],
        size: int = 10,
    ) -> Any:
        """按字段内容查找与指定文档相似的文档.

        Args:
            doc_id: 参照文档ID
            fields: 字段名或字段名列表
            size: 返回结果数量

        Returns:
            ES 返回的原始结果（不含 _source）
        """
        return self._search(self._mlt_query(doc_id, fields), size)

    def more_like_this_boosted(
        self,
        doc_id: DocumentId,
        field_groups: Sequence[BoostedFields | Mapping[str, Any]],
        size: int = 10,
        tie_breaker: float = 0,
    ) -> Any:
        """按多组加权字段查找相似文档.

        每个字段组生成一个带 boost 的 more_like_this 子查询，
        以 dis_max 组合。tie_breaker 大于 0 时，匹配更多字段组的文档得分更高。

        Args:
            doc_id: 参照文档ID
            field_groups: 字段组列表，元素为 BoostedFields 或 {"fields": ..., "boost": ...}
            size: 返回结果数量
            tie_breaker: dis_max 的 tie_breaker

        Returns:
            ES 返回的原始结果（不含 _source）

        Example:
            >>> client.more_like_this_boosted(
            ...     "42",
            ...     [BoostedFields("title", boost=2), {"fields": ["tags"]}],
            ...     tie_breaker=0.3,
            ... )
        """
        if not field_groups:
            raise ValueError("field_groups 不能为空")

        queries = []
        for group in field_groups:
            if not isinstance(group, BoostedFields):
                group = BoostedFields.from_mapping(group)
            queries.append(self._mlt_query(doc_id, group.fields, boost=group.boost))

        query = Q("dis_max", queries=queries, tie_breaker=tie_breaker)
        return self._search(query, size)

    def related_to(
        self,
        doc_id: DocumentId,
        fields: str | Sequence[str],
        size: int = 10,
    ) -> ScoreMap:
        """more_like_this 的 {文档ID: 得分} 形式."""
        return hits_to_scores(self.more_like_this(doc_id, fields, size))

    def boosted_related_to(
        self,
        doc_id: DocumentId,
        field_groups: Sequence[BoostedFields | Mapping[str, Any]],
        size: int = 10,
        tie_breaker: float = 0,
    ) -> ScoreMap:
        """more_like_this_boosted 的 {文档ID: 得分} 形式."""
        return hits_to_scores(
            self.more_like_this_boosted(doc_id, field_groups, size, tie_breaker)
        )

    # ============================================================
    # 生命周期管理
    # ============================================================

    def close(self) -> None:
        """关闭自行创建的客户端连接；外部传入的客户端由调用方负责关闭."""
        if self._owns_client:
            self.es_client.close()

    def __enter__(self) -> RelatedIndexClient:
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        self.close()
