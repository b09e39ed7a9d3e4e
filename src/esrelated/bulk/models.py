"""批量索引器数据模型定义模块."""

from dataclasses import dataclass

from ..typing import DocumentId, RefreshFlag
from .exceptions import BulkConfigError


@dataclass(frozen=True)
class BulkIndexerConfig:
    """批量索引器配置.

    构造后不可修改。

    Attributes:
        chunk_size: 每批次文档数量，必须 >= 1
        refresh: 刷新可见性参数，原样透传给后端；None 表示不传该参数

    Raises:
        BulkConfigError: 当 chunk_size 不合法时抛出

    Examples:
        >>> config = BulkIndexerConfig(chunk_size=100, refresh="wait_for")
    """

    chunk_size: int
    refresh: RefreshFlag | None = None

    def __post_init__(self) -> None:
        """校验配置参数合法性."""
        # bool 是 int 的子类，需要单独排除
        if isinstance(self.chunk_size, bool) or not isinstance(self.chunk_size, int):
            raise BulkConfigError(
                f"chunk_size 必须为整数，当前类型: {type(self.chunk_size).__name__}"
            )
        if self.chunk_size < 1:
            raise BulkConfigError(f"chunk_size 必须 >= 1，当前值: {self.chunk_size}")


def build_action_header(doc_id: DocumentId) -> dict[str, dict[str, DocumentId]]:
    """构建批量请求中的 index 操作头.

    目标索引由后端在请求级别指定，操作头只携带文档ID。

    Example:
        >>> build_action_header("42")
        {'index': {'_id': '42'}}
    """
    return {"index": {"_id": doc_id}}
