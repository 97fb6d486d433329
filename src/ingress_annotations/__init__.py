"""Ingress 注解读取包。

将 Ingress 资源上的字符串注解解析为带默认值的类型化配置，
并提供清单加载、集群读取与命令行查看等外围工具。
"""

from .annotations import (
    INSECURE_NODE_PORT_ANNOTATION,
    LB_MODE_ANNOTATION,
    SECURE_NODE_PORT_ANNOTATION,
    SERVICE_TYPE_ANNOTATION,
    TCP_KEEP_ALIVE_ENABLED_ANNOTATION,
    TCP_KEEP_ALIVE_IDLE_ANNOTATION,
    TCP_KEEP_ALIVE_PROBE_INTERVAL_ANNOTATION,
    TCP_KEEP_ALIVE_PROBE_MAX_FAILURES_ANNOTATION,
    WEBSOCKET_ENABLED_ANNOTATION,
    ParseError,
    get_insecure_node_port,
    get_loadbalancer_mode,
    get_secure_node_port,
    get_service_type,
    get_tcp_keep_alive_enabled,
    get_tcp_keep_alive_idle,
    get_tcp_keep_alive_probe_interval,
    get_tcp_keep_alive_probe_max_failures,
    get_websocket_enabled,
)
from .source import AnnotationSource, MappingSource, as_source

__all__ = [
    "__version__",
    "get_version",
    "AnnotationSource",
    "MappingSource",
    "as_source",
    "ParseError",
    "LB_MODE_ANNOTATION",
    "SERVICE_TYPE_ANNOTATION",
    "INSECURE_NODE_PORT_ANNOTATION",
    "SECURE_NODE_PORT_ANNOTATION",
    "TCP_KEEP_ALIVE_ENABLED_ANNOTATION",
    "TCP_KEEP_ALIVE_IDLE_ANNOTATION",
    "TCP_KEEP_ALIVE_PROBE_INTERVAL_ANNOTATION",
    "TCP_KEEP_ALIVE_PROBE_MAX_FAILURES_ANNOTATION",
    "WEBSOCKET_ENABLED_ANNOTATION",
    "get_loadbalancer_mode",
    "get_service_type",
    "get_insecure_node_port",
    "get_secure_node_port",
    "get_tcp_keep_alive_enabled",
    "get_tcp_keep_alive_idle",
    "get_tcp_keep_alive_probe_interval",
    "get_tcp_keep_alive_probe_max_failures",
    "get_websocket_enabled",
]

__version__ = "0.1.0"


def get_version() -> str:
    """返回当前包版本号。

    返回值:
        str: 版本号字符串，例如 "0.1.0"。
    副作用:
        无副作用，仅读取内置常量。
    """

    return __version__
