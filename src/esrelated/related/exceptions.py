"""相似文档客户端异常定义模块."""

from ..exceptions import EsRelatedError


class RelatedClientError(EsRelatedError):
    """相似文档客户端基础异常类."""

    pass


class BackendError(RelatedClientError):
    """ES 请求失败异常（网络、认证、请求格式等）."""

    pass


class IndexAlreadyExistsError(RelatedClientError):
    """索引已存在异常."""

    pass


class DocumentNotFoundError(RelatedClientError):
    """文档不存在异常."""

    pass
