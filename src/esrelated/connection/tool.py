"""ES 客户端创建工具模块."""

from __future__ import annotations

import logging

from elasticsearch import Elasticsearch

from .models import ClusterConfig, ConnectionConfig

logger = logging.getLogger(__name__)


def create_client(
    cluster: ClusterConfig | None = None,
    connection_config: ConnectionConfig | None = None,
) -> Elasticsearch:
    """根据集群配置创建 Elasticsearch 客户端实例.

    根据认证方式（Basic Auth / API Key / Bearer Token / 无认证）
    和 SSL 配置构建客户端。

    Args:
        cluster: 集群配置，默认连接 http://127.0.0.1:9200
        connection_config: 连接配置，默认使用 ConnectionConfig 的默认值

    Returns:
        Elasticsearch 客户端实例
    """
    cluster = cluster or ClusterConfig()
    connection_config = connection_config or ConnectionConfig()

    kwargs: dict = {
        "hosts": cluster.hosts,
        "max_retries": connection_config.max_retries,
        "retry_on_timeout": connection_config.retry_on_timeout,
        "request_timeout": connection_config.request_timeout,
        "http_compress": connection_config.http_compress,
    }

    # Basic Auth 认证
    if cluster.username and cluster.password:
        kwargs["basic_auth"] = (cluster.username, cluster.password)

    # API Key 认证
    if cluster.api_key:
        kwargs["api_key"] = cluster.api_key

    # Bearer Token 认证
    if cluster.bearer_token:
        kwargs["bearer_auth"] = cluster.bearer_token

    # SSL/TLS 配置
    if cluster.ca_certs:
        kwargs["ca_certs"] = cluster.ca_certs
    kwargs["verify_certs"] = cluster.verify_certs

    logger.info(f"创建 ES 客户端: hosts={cluster.hosts}")
    return Elasticsearch(**kwargs)
