"""ES 连接模块 - 根据配置创建 Elasticsearch 客户端.

主要组件:
    - create_client: 客户端创建函数
    - ClusterConfig: 集群地址与认证配置
    - ConnectionConfig: 超时与重试配置

使用示例:
    from esrelated.connection import ClusterConfig, create_client

    client = create_client(ClusterConfig(hosts="127.0.0.1:9200"))
"""

from .exceptions import ConnectionConfigError
from .models import ClusterConfig, ConnectionConfig
from .tool import create_client

__all__ = [
    "create_client",
    "ClusterConfig",
    "ConnectionConfig",
    "ConnectionConfigError",
]
