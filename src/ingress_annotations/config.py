"""聚合配置与运行期开关。

提供 :class:`IngressConfig` 以及一次性解析全部注解的
:func:`read_ingress_config`，并从环境变量读取 CLI/集群访问的默认开关。

参数:
    无显式入参，模块函数各自接收 Ingress 对象。

返回值:
    见各函数中文 Docstring 说明。

副作用:
    仅读取环境变量，无外部系统交互。
"""

from __future__ import annotations

import logging
import os
from dataclasses import asdict, dataclass, field
from typing import Any, Callable, Dict, Optional

from .annotations import (
    INSECURE_NODE_PORT_ANNOTATION,
    SECURE_NODE_PORT_ANNOTATION,
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
from .source import as_source

STRICT_ENV = "INGRESS_ANNOTATIONS_STRICT"
INCLUSTER_ENV = "INGRESS_ANNOTATIONS_INCLUSTER"
LOG_LEVEL_ENV = "INGRESS_ANNOTATIONS_LOG_LEVEL"

_TRUTHY = {"1", "true", "yes"}


@dataclass
class IngressConfig:
    """某个 Ingress 解析后的全部配置。

    属性:
        loadbalancer_mode: 负载均衡模式（默认空串）。
        service_type: Service 类型（默认 ``LoadBalancer``）。
        insecure_node_port: HTTP NodePort，可为 None。
        secure_node_port: HTTPS NodePort，可为 None。
        tcp_keep_alive_enabled: keep-alive 开关（1/0）。
        tcp_keep_alive_idle: 空闲秒数。
        tcp_keep_alive_probe_interval: 探测间隔秒数。
        tcp_keep_alive_probe_max_failures: 最大探测失败次数。
        websocket_enabled: websocket 开关（1/0）。
        errors: 非严格模式下收集的 NodePort 解析错误（注解键 -> 错误信息）。
    """

    loadbalancer_mode: str
    service_type: str
    insecure_node_port: Optional[int]
    secure_node_port: Optional[int]
    tcp_keep_alive_enabled: int
    tcp_keep_alive_idle: int
    tcp_keep_alive_probe_interval: int
    tcp_keep_alive_probe_max_failures: int
    websocket_enabled: int
    errors: Dict[str, str] = field(default_factory=dict)

    @property
    def ok(self) -> bool:
        """是否不存在 NodePort 解析错误。"""

        return not self.errors

    def to_dict(self) -> Dict[str, Any]:
        """转为可 JSON 序列化的字典。"""

        return asdict(self)


def read_ingress_config(ingress: Any, strict: bool = False) -> IngressConfig:
    """一次性解析 Ingress 上全部已知注解。

    参数:
        ingress: 任意可被 :func:`as_source` 适配的对象。
        strict: 为 True 时 NodePort 解析错误直接抛出；否则记录到 ``errors``
            并将对应端口置为 None。

    返回值:
        IngressConfig: 解析结果。

    副作用:
        无。

    异常:
        ParseError: 仅在 ``strict=True`` 且 NodePort 注解非法时抛出。
    """

    source = as_source(ingress)
    errors: Dict[str, str] = {}

    def _port(key: str, getter: Callable[[Any], Optional[int]]) -> Optional[int]:
        try:
            return getter(source)
        except ParseError as exc:
            if strict:
                raise
            errors[key] = str(exc)
            return None

    insecure = _port(INSECURE_NODE_PORT_ANNOTATION, get_insecure_node_port)
    secure = _port(SECURE_NODE_PORT_ANNOTATION, get_secure_node_port)
    return IngressConfig(
        loadbalancer_mode=get_loadbalancer_mode(source),
        service_type=get_service_type(source),
        insecure_node_port=insecure,
        secure_node_port=secure,
        tcp_keep_alive_enabled=get_tcp_keep_alive_enabled(source),
        tcp_keep_alive_idle=get_tcp_keep_alive_idle(source),
        tcp_keep_alive_probe_interval=get_tcp_keep_alive_probe_interval(source),
        tcp_keep_alive_probe_max_failures=get_tcp_keep_alive_probe_max_failures(
            source
        ),
        websocket_enabled=get_websocket_enabled(source),
        errors=errors,
    )


def _env_flag(name: str) -> bool:
    return str(os.environ.get(name, "")).lower() in _TRUTHY


def strict_from_env() -> bool:
    """读取 ``INGRESS_ANNOTATIONS_STRICT``，取值 1/true/yes 视为开启。"""

    return _env_flag(STRICT_ENV)


def incluster_from_env() -> bool:
    """读取 ``INGRESS_ANNOTATIONS_INCLUSTER``，取值 1/true/yes 视为开启。"""

    return _env_flag(INCLUSTER_ENV)


def log_level_from_env(default: str = "WARNING") -> str:
    """读取 ``INGRESS_ANNOTATIONS_LOG_LEVEL``（大写返回），缺省或无法识别时为 default。"""

    level = str(os.environ.get(LOG_LEVEL_ENV) or default).upper()
    # 未知名称时 getLevelName 返回 "Level XXX" 字符串
    if not isinstance(logging.getLevelName(level), int):
        return default
    return level
