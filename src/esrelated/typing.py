"""es-related 类型定义模块."""

from collections.abc import Callable, Mapping
from typing import Any, Protocol

# 文档ID类型（由 ES 保证唯一性）
DocumentId = str | int

# 文档内容类型
# 格式: {字段名: 字段值}
DocumentBody = Mapping[str, Any]

# 批量操作项类型（操作头或文档体）
BulkActionItem = Mapping[str, Any]

# 刷新可见性参数类型: True / False / "wait_for" 等
RefreshFlag = bool | str

# 批次结果回调类型，参数为后端返回的原始结果
ResultCallback = Callable[[Any], Any]

# 相似文档结果类型
# 格式: {文档ID: 得分}
ScoreMap = dict[str, float]


class BulkBackend(Protocol):
    """批量提交后端协议.

    BulkIndexer 只依赖该能力，RelatedIndexClient 是其生产实现。
    """

    def bulk(
        self,
        operations: list[BulkActionItem],
        refresh: RefreshFlag | None = None,
    ) -> Any: ...
