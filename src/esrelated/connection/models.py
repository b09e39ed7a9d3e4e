"""ES 连接数据模型定义模块.

提供客户端创建所需的数据模型，包括：
- ClusterConfig: 集群地址与认证配置
- ConnectionConfig: 超时与重试配置
"""

from dataclasses import dataclass, field

from .exceptions import ConnectionConfigError

DEFAULT_HOST = "http://127.0.0.1:9200"


def _normalize_host(host: str) -> str:
    """为缺少协议的节点地址补全 http://."""
    host = host.strip()
    if "://" not in host:
        return f"http://{host}"
    return host


@dataclass
class ClusterConfig:
    """集群配置模型.

    定义 ES 集群的连接信息，包括地址和认证方式。

    Attributes:
        hosts: ES 节点地址，可为单个字符串或列表；缺少协议时补全为 http://
        username: Basic Auth 用户名
        password: Basic Auth 密码
        api_key: API Key 认证（字符串或元组）
        bearer_token: Bearer Token 认证
        ca_certs: CA 证书文件路径
        verify_certs: 是否验证 SSL 证书，默认 True

    Raises:
        ConnectionConfigError: 当 hosts 为空时抛出

    Examples:
        >>> config = ClusterConfig(hosts="127.0.0.1:9200")
        >>> config.hosts
        ['http://127.0.0.1:9200']
    """

    hosts: str | list[str] = field(default_factory=lambda: [DEFAULT_HOST])
    username: str | None = None
    password: str | None = None
    api_key: str | tuple[str, str] | None = None
    bearer_token: str | None = None
    ca_certs: str | None = None
    verify_certs: bool = True

    def __post_init__(self) -> None:
        """校验并规范化集群配置."""
        hosts = [self.hosts] if isinstance(self.hosts, str) else list(self.hosts)
        hosts = [_normalize_host(h) for h in hosts if h and h.strip()]
        if not hosts:
            raise ConnectionConfigError("hosts 不能为空，请提供至少一个 ES 节点地址")
        self.hosts = hosts


@dataclass
class ConnectionConfig:
    """连接配置模型.

    Attributes:
        max_retries: 最大重试次数，默认 3，必须 >= 0
        retry_on_timeout: 超时是否重试，默认 True
        request_timeout: 请求超时时间（秒），默认 30，必须 >= 0
        http_compress: 是否启用 HTTP 压缩，默认 True

    Raises:
        ConnectionConfigError: 当参数不合法时抛出
    """

    max_retries: int = 3
    retry_on_timeout: bool = True
    request_timeout: float = 30
    http_compress: bool = True

    def __post_init__(self) -> None:
        """校验连接配置参数合法性."""
        if self.max_retries < 0:
            raise ConnectionConfigError(
                f"max_retries 必须 >= 0，当前值: {self.max_retries}"
            )
        if self.request_timeout < 0:
            raise ConnectionConfigError(
                f"request_timeout 必须 >= 0，当前值: {self.request_timeout}"
            )
