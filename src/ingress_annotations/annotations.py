"""Ingress 注解读取器。

把固定集合的注解键解析为带默认值的类型化配置：
- 负载均衡模式 / Service 类型：原样透传字符串；
- 两个 NodePort：可选 uint32，格式错误时抛出 :class:`ParseError`；
- TCP keep-alive 参数：int64，格式错误时静默回退默认值；
- keep-alive / websocket 开关：仅字面量 ``"enabled"`` 视为 1，其余为 0。

所有函数均为纯函数，不做日志、IO 或缓存，可在多线程中并发调用。
"""

from __future__ import annotations

import re
from typing import Any, Optional

from .source import as_source

ANNOTATION_PREFIX = "io.cilium"
INGRESS_ANNOTATION_PREFIX = ANNOTATION_PREFIX + ".ingress"

LB_MODE_ANNOTATION = INGRESS_ANNOTATION_PREFIX + "/loadbalancer-mode"
SERVICE_TYPE_ANNOTATION = INGRESS_ANNOTATION_PREFIX + "/service-type"
INSECURE_NODE_PORT_ANNOTATION = INGRESS_ANNOTATION_PREFIX + "/insecure-node-port"
SECURE_NODE_PORT_ANNOTATION = INGRESS_ANNOTATION_PREFIX + "/secure-node-port"

TCP_KEEP_ALIVE_ENABLED_ANNOTATION = ANNOTATION_PREFIX + "/tcp-keep-alive"
TCP_KEEP_ALIVE_IDLE_ANNOTATION = ANNOTATION_PREFIX + "/tcp-keep-alive-idle"
TCP_KEEP_ALIVE_PROBE_INTERVAL_ANNOTATION = (
    ANNOTATION_PREFIX + "/tcp-keep-alive-probe-interval"
)
TCP_KEEP_ALIVE_PROBE_MAX_FAILURES_ANNOTATION = (
    ANNOTATION_PREFIX + "/tcp-keep-alive-probe-max-failures"
)
WEBSOCKET_ENABLED_ANNOTATION = ANNOTATION_PREFIX + "/websocket"

ENABLED = "enabled"
SERVICE_TYPE_LOAD_BALANCER = "LoadBalancer"

DEFAULT_TCP_KEEP_ALIVE_ENABLED = 1  # 1 - 启用, 0 - 禁用
DEFAULT_TCP_KEEP_ALIVE_INITIAL_IDLE = 10  # 秒
DEFAULT_TCP_KEEP_ALIVE_PROBE_INTERVAL = 5  # 秒
DEFAULT_TCP_KEEP_ALIVE_MAX_PROBE_COUNT = 10
DEFAULT_WEBSOCKET_ENABLED = 0  # 1 - 启用, 0 - 禁用

_DECIMAL_RE = re.compile(r"[+-]?[0-9]+")


class ParseError(ValueError):
    """注解值无法解析为整数。

    属性:
        key: 注解键。
        value: 原始注解值。
        reason: 失败原因（``invalid syntax`` 或 ``value out of range``）。
    """

    def __init__(self, key: str, value: str, reason: str) -> None:
        super().__init__(f"annotation {key}: parsing {value!r}: {reason}")
        self.key = key
        self.value = value
        self.reason = reason


def _parse_int(val: str, bits: int) -> int:
    """按十进制解析有符号整数并校验位宽。

    参数:
        val: 原始字符串；仅接受可选正负号加 ASCII 数字，不允许空白、下划线与进制前缀。
        bits: 有符号位宽（32 或 64）。

    返回值:
        int: 解析后的整数。

    副作用:
        无。

    异常:
        ValueError: 语法非法或超出位宽范围。
    """

    if not _DECIMAL_RE.fullmatch(val):
        raise ValueError("invalid syntax")
    num = int(val, 10)
    limit = 1 << (bits - 1)
    if not -limit <= num < limit:
        raise ValueError("value out of range")
    return num


def _node_port(ingress: Any, key: str) -> Optional[int]:
    val = as_source(ingress).lookup(key)
    if val is None:
        return None
    try:
        num = _parse_int(val, 32)
    except ValueError as exc:
        raise ParseError(key, val, str(exc)) from exc
    # 与 int32 -> uint32 转换保持一致，负数按补码回绕
    return num & 0xFFFFFFFF


def _int64_or_default(ingress: Any, key: str, default: int) -> int:
    val = as_source(ingress).lookup(key)
    if val is None:
        return default
    try:
        return _parse_int(val, 64)
    except ValueError:
        return default


def _flag(ingress: Any, key: str, default: int) -> int:
    val = as_source(ingress).lookup(key)
    if val is None:
        return default
    return 1 if val == ENABLED else 0


def get_loadbalancer_mode(ingress: Any) -> str:
    """返回 Ingress 的负载均衡模式；未设置时为空字符串。"""

    val = as_source(ingress).lookup(LB_MODE_ANNOTATION)
    return "" if val is None else val


def get_service_type(ingress: Any) -> str:
    """返回 Ingress 的 Service 类型，未设置时默认为 ``LoadBalancer``。

    参数:
        ingress: 任意可被 :func:`as_source` 适配的对象。

    返回值:
        str: 注解原值（存在但为空时返回空串）或 ``"LoadBalancer"``。
    """

    val = as_source(ingress).lookup(SERVICE_TYPE_ANNOTATION)
    if val is None:
        return SERVICE_TYPE_LOAD_BALANCER
    return val


def get_secure_node_port(ingress: Any) -> Optional[int]:
    """返回 HTTPS NodePort。

    参数:
        ingress: 任意可被 :func:`as_source` 适配的对象。

    返回值:
        Optional[int]: 未设置时为 None（不是错误）；否则为 uint32 端口号。

    副作用:
        无。

    异常:
        ParseError: 注解存在但不是合法的 32 位十进制整数。
    """

    return _node_port(ingress, SECURE_NODE_PORT_ANNOTATION)


def get_insecure_node_port(ingress: Any) -> Optional[int]:
    """返回 HTTP NodePort；语义同 :func:`get_secure_node_port`。"""

    return _node_port(ingress, INSECURE_NODE_PORT_ANNOTATION)


def get_tcp_keep_alive_enabled(ingress: Any) -> int:
    """启用返回 1（默认），禁用返回 0。

    仅字面量 ``"enabled"`` 表示启用；``"true"``、``"Enabled"``、``"1"``
    以及空串等任何其它取值均视为禁用。
    """

    return _flag(
        ingress, TCP_KEEP_ALIVE_ENABLED_ANNOTATION, DEFAULT_TCP_KEEP_ALIVE_ENABLED
    )


def get_tcp_keep_alive_idle(ingress: Any) -> int:
    """返回连接空闲多少秒后开始发送 keep-alive 探测，默认 10 秒。

    参考: https://man7.org/linux/man-pages/man7/tcp.7.html
    """

    return _int64_or_default(
        ingress, TCP_KEEP_ALIVE_IDLE_ANNOTATION, DEFAULT_TCP_KEEP_ALIVE_INITIAL_IDLE
    )


def get_tcp_keep_alive_probe_interval(ingress: Any) -> int:
    """返回相邻 keep-alive 探测之间的间隔秒数，默认 5 秒。

    参考: https://man7.org/linux/man-pages/man7/tcp.7.html
    """

    return _int64_or_default(
        ingress,
        TCP_KEEP_ALIVE_PROBE_INTERVAL_ANNOTATION,
        DEFAULT_TCP_KEEP_ALIVE_PROBE_INTERVAL,
    )


def get_tcp_keep_alive_probe_max_failures(ingress: Any) -> int:
    """返回断开连接前最多发送的 keep-alive 探测次数，默认 10。

    参考: https://man7.org/linux/man-pages/man7/tcp.7.html
    """

    return _int64_or_default(
        ingress,
        TCP_KEEP_ALIVE_PROBE_MAX_FAILURES_ANNOTATION,
        DEFAULT_TCP_KEEP_ALIVE_MAX_PROBE_COUNT,
    )


def get_websocket_enabled(ingress: Any) -> int:
    """启用返回 1，禁用返回 0（默认）；判定规则同 keep-alive 开关。"""

    return _flag(ingress, WEBSOCKET_ENABLED_ANNOTATION, DEFAULT_WEBSOCKET_ENABLED)
