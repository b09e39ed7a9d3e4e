"""批量索引器核心工具类."""

import logging
from typing import Any

from ..typing import (
    BulkActionItem,
    BulkBackend,
    DocumentBody,
    DocumentId,
    RefreshFlag,
    ResultCallback,
)
from .exceptions import BulkConfigError
from .models import BulkIndexerConfig, build_action_header

logger = logging.getLogger(__name__)


class BulkIndexer:
    """批量索引器.

    逐条收集文档索引操作，累计到 chunk_size 条时自动以一次 bulk 请求提交，
    以减少单文档请求的往返开销。提交顺序与 index() 的调用顺序一致。

    调用方必须在结束时调用 done()，否则未提交的文档会被丢弃。
    也可以作为上下文管理器使用，正常退出时自动调用 done()。

    该类不是线程安全的，多个生产者需要在外部加锁。

    Args:
        backend: 提供 bulk(operations, refresh=...) 能力的后端，通常为 RelatedIndexClient
        chunk_size: 每批次文档数量，必须 >= 1
        result_callback: 每次非空提交后同步调用，参数为后端返回的原始结果
        refresh: 刷新可见性参数，原样透传给后端；None 表示不传该参数

    Raises:
        BulkConfigError: 当 chunk_size 不合法或 result_callback 不可调用时抛出

    Example:
        >>> client = RelatedIndexClient("articles")
        >>> with BulkIndexer(client, chunk_size=100) as bulk:
        ...     for doc in docs:
        ...         bulk.index(doc["id"], {"title": doc["title"]})
    """

    def __init__(
        self,
        backend: BulkBackend,
        chunk_size: int,
        result_callback: ResultCallback | None = None,
        refresh: RefreshFlag | None = None,
    ) -> None:
        if result_callback is not None and not callable(result_callback):
            raise BulkConfigError(
                f"result_callback 必须可调用，当前类型: {type(result_callback).__name__}"
            )
        self._config = BulkIndexerConfig(chunk_size=chunk_size, refresh=refresh)
        self._backend = backend
        self._result_callback = result_callback
        self._operations: list[BulkActionItem] = []
        self._pending = 0
        self.flushed_batches = 0
        self.indexed_total = 0
        logger.info(
            f"初始化批量索引器: chunk_size={chunk_size}, refresh={refresh}, "
            f"callback={'yes' if result_callback else 'no'}"
        )

    @property
    def config(self) -> BulkIndexerConfig:
        return self._config

    @property
    def chunk_size(self) -> int:
        return self._config.chunk_size

    @property
    def refresh(self) -> RefreshFlag | None:
        return self._config.refresh

    @property
    def pending_count(self) -> int:
        """自上次提交以来累计的文档数."""
        return self._pending

    @property
    def pending_operations(self) -> list[BulkActionItem]:
        """待提交的操作列表副本（操作头与文档体交替排列）."""
        return list(self._operations)

    def index(self, doc_id: DocumentId, fields: DocumentBody) -> None:
        """索引单个文档.

        文档内容不做校验，原样提交。累计数量达到 chunk_size 时，
        在返回前同步提交当前批次。

        Args:
            doc_id: 文档ID
            fields: 文档字段，格式为 {字段名: 字段值}
        """
        self._operations.append(build_action_header(doc_id))
        self._operations.append(fields)
        self._pending += 1

        if self._pending >= self._config.chunk_size:
            self.flush()

    def flush(self) -> Any:
        """提交当前批次.

        没有待提交文档时不做任何事。提交前先取出并清空待提交列表，
        因此即使后端或回调抛出异常，同一批次也不会被再次提交。

        Returns:
            后端返回的原始结果；没有待提交文档时返回 None
        """
        if not self._operations:
            return None

        operations = self._operations
        count = self._pending
        self.reset()

        logger.debug(f"提交批次: {count} 个文档")
        if self._config.refresh is None:
            result = self._backend.bulk(operations)
        else:
            result = self._backend.bulk(operations, refresh=self._config.refresh)

        self.flushed_batches += 1
        self.indexed_total += count

        if self._result_callback is not None:
            self._result_callback(result)

        return result

    def done(self) -> Any:
        """结束本次索引会话，提交剩余文档.

        没有待提交文档时为空操作，可重复调用。
        """
        return self.flush()

    def reset(self) -> None:
        """丢弃所有未提交的文档."""
        self._operations = []
        self._pending = 0

    def __enter__(self) -> "BulkIndexer":
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        if exc_type is None:
            self.done()
            return
        if self._pending:
            logger.warning(f"索引过程中发生异常，丢弃 {self._pending} 个未提交文档")
        self.reset()
