"""批量索引器异常定义模块."""

from ..exceptions import EsRelatedError


class BulkIndexerError(EsRelatedError):
    """批量索引器基础异常类."""

    pass


class BulkConfigError(BulkIndexerError):
    """批量索引器配置异常.

    当 chunk_size 不是正整数、或 result_callback 不可调用时抛出。
    """

    pass
