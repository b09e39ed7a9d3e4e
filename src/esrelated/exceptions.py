"""es-related 异常定义模块."""


class EsRelatedError(Exception):
    """es-related 基础异常类."""

    pass
