"""聚合配置与环境变量开关的单元测试。"""

from __future__ import annotations

import json

import pytest

from ingress_annotations import ParseError
from ingress_annotations import annotations as ann
from ingress_annotations.config import (
    IngressConfig,
    incluster_from_env,
    log_level_from_env,
    read_ingress_config,
    strict_from_env,
)


def test_defaults_from_empty_mapping():
    cfg = read_ingress_config({})
    assert isinstance(cfg, IngressConfig)
    assert cfg.ok
    assert cfg.to_dict() == {
        "loadbalancer_mode": "",
        "service_type": "LoadBalancer",
        "insecure_node_port": None,
        "secure_node_port": None,
        "tcp_keep_alive_enabled": 1,
        "tcp_keep_alive_idle": 10,
        "tcp_keep_alive_probe_interval": 5,
        "tcp_keep_alive_probe_max_failures": 10,
        "websocket_enabled": 0,
        "errors": {},
    }


def test_full_annotations(make_v1_ingress):
    ing = make_v1_ingress(
        {
            ann.LB_MODE_ANNOTATION: "dedicated",
            ann.SERVICE_TYPE_ANNOTATION: "NodePort",
            ann.INSECURE_NODE_PORT_ANNOTATION: "30080",
            ann.SECURE_NODE_PORT_ANNOTATION: "30443",
            ann.TCP_KEEP_ALIVE_ENABLED_ANNOTATION: "disabled",
            ann.TCP_KEEP_ALIVE_PROBE_INTERVAL_ANNOTATION: "15",
            ann.WEBSOCKET_ENABLED_ANNOTATION: "enabled",
        }
    )
    cfg = read_ingress_config(ing)
    assert cfg.loadbalancer_mode == "dedicated"
    assert cfg.service_type == "NodePort"
    assert (cfg.insecure_node_port, cfg.secure_node_port) == (30080, 30443)
    assert cfg.tcp_keep_alive_enabled == 0
    assert cfg.tcp_keep_alive_probe_interval == 15
    assert cfg.websocket_enabled == 1
    json.dumps(cfg.to_dict())


def test_non_strict_collects_node_port_errors():
    cfg = read_ingress_config(
        {
            ann.SECURE_NODE_PORT_ANNOTATION: "abc",
            ann.INSECURE_NODE_PORT_ANNOTATION: "30080",
        }
    )
    assert not cfg.ok
    assert cfg.secure_node_port is None
    assert cfg.insecure_node_port == 30080
    assert set(cfg.errors) == {ann.SECURE_NODE_PORT_ANNOTATION}
    assert "abc" in cfg.errors[ann.SECURE_NODE_PORT_ANNOTATION]


def test_strict_raises_parse_error():
    with pytest.raises(ParseError):
        read_ingress_config({ann.INSECURE_NODE_PORT_ANNOTATION: "x"}, strict=True)


def test_malformed_keep_alive_is_not_an_error():
    cfg = read_ingress_config({ann.TCP_KEEP_ALIVE_IDLE_ANNOTATION: "soon"}, strict=True)
    assert cfg.ok and cfg.tcp_keep_alive_idle == 10


@pytest.mark.parametrize(
    "value,expected", [("1", True), ("true", True), ("YES", True), ("0", False), ("", False)]
)
def test_env_flags(monkeypatch: pytest.MonkeyPatch, value, expected):
    monkeypatch.setenv("INGRESS_ANNOTATIONS_STRICT", value)
    monkeypatch.setenv("INGRESS_ANNOTATIONS_INCLUSTER", value)
    assert strict_from_env() is expected
    assert incluster_from_env() is expected


def test_env_flags_unset(monkeypatch: pytest.MonkeyPatch):
    monkeypatch.delenv("INGRESS_ANNOTATIONS_STRICT", raising=False)
    monkeypatch.delenv("INGRESS_ANNOTATIONS_LOG_LEVEL", raising=False)
    assert strict_from_env() is False
    assert log_level_from_env() == "WARNING"
    monkeypatch.setenv("INGRESS_ANNOTATIONS_LOG_LEVEL", "debug")
    assert log_level_from_env() == "DEBUG"


@pytest.mark.parametrize("value", ["verbose", "Level 5", "trace"])
def test_unknown_log_level_falls_back(monkeypatch: pytest.MonkeyPatch, value):
    """无法识别的日志级别回退为 WARNING，避免 basicConfig 启动报错。"""

    monkeypatch.setenv("INGRESS_ANNOTATIONS_LOG_LEVEL", value)
    assert log_level_from_env() == "WARNING"
    monkeypatch.setenv("INGRESS_ANNOTATIONS_LOG_LEVEL", "info")
    assert log_level_from_env() == "INFO"
