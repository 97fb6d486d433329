"""命令行入口。

提供三个子命令：
- ``show``：读取本地 Ingress 清单文件，打印解析后的配置；
- ``inspect``：从集群读取 Ingress，打印解析后的配置；
- ``keys``：打印全部已知注解键、类型与默认值。

示例:
    ingress-annotations show --file deploy/ingress.yaml --strict
    ingress-annotations inspect --namespace default --name web
"""

from __future__ import annotations

import json as _json
import logging
from pathlib import Path
from typing import Any, Dict, List, Optional

import typer
import yaml as _yaml
from pydantic import ValidationError

from . import annotations as ann
from .config import (
    incluster_from_env,
    log_level_from_env,
    read_ingress_config,
    strict_from_env,
)
from .config_loader import load_ingress_manifests
from .k8s import ingress_ref
from .k8s import kubernetes_client as kc

logger = logging.getLogger(__name__)

app = typer.Typer(help="Ingress 注解解析 / 查看 CLI")

KEY_TABLE: List[Dict[str, Any]] = [
    {"key": ann.LB_MODE_ANNOTATION, "type": "string", "default": ""},
    {
        "key": ann.SERVICE_TYPE_ANNOTATION,
        "type": "string",
        "default": ann.SERVICE_TYPE_LOAD_BALANCER,
    },
    {"key": ann.INSECURE_NODE_PORT_ANNOTATION, "type": "uint32", "default": None},
    {"key": ann.SECURE_NODE_PORT_ANNOTATION, "type": "uint32", "default": None},
    {
        "key": ann.TCP_KEEP_ALIVE_ENABLED_ANNOTATION,
        "type": "flag",
        "default": ann.DEFAULT_TCP_KEEP_ALIVE_ENABLED,
    },
    {
        "key": ann.TCP_KEEP_ALIVE_IDLE_ANNOTATION,
        "type": "int64",
        "default": ann.DEFAULT_TCP_KEEP_ALIVE_INITIAL_IDLE,
    },
    {
        "key": ann.TCP_KEEP_ALIVE_PROBE_INTERVAL_ANNOTATION,
        "type": "int64",
        "default": ann.DEFAULT_TCP_KEEP_ALIVE_PROBE_INTERVAL,
    },
    {
        "key": ann.TCP_KEEP_ALIVE_PROBE_MAX_FAILURES_ANNOTATION,
        "type": "int64",
        "default": ann.DEFAULT_TCP_KEEP_ALIVE_MAX_PROBE_COUNT,
    },
    {
        "key": ann.WEBSOCKET_ENABLED_ANNOTATION,
        "type": "flag",
        "default": ann.DEFAULT_WEBSOCKET_ENABLED,
    },
]


def _report(entries: List[Dict[str, Any]], strict: bool) -> None:
    """打印结果 JSON；严格模式下存在 NodePort 错误时以退出码 1 结束。

    参数:
        entries: 形如 ``{"ingress": "<ns>/<name>", "config": {...}}`` 的列表。
        strict: 是否把 NodePort 解析错误视为失败。

    返回值:
        无。

    副作用:
        写标准输出；记录告警日志；可能抛出 ``typer.Exit``。
    """

    failed = False
    for entry in entries:
        for key, msg in entry["config"]["errors"].items():
            failed = True
            logger.warning("ingress %s: invalid %s: %s", entry["ingress"], key, msg)
    typer.echo(_json.dumps(entries, ensure_ascii=False))
    if strict and failed:
        raise typer.Exit(code=1)


@app.command()
def show(
    file: Path = typer.Option(..., "--file", "-f", help="Ingress 清单 YAML 文件"),
    strict: Optional[bool] = typer.Option(
        None, "--strict/--no-strict", help="NodePort 解析错误时返回非零退出码"
    ),
) -> None:
    """解析本地清单文件中的全部 Ingress 并以 JSON 打印。

    参数:
        file: 清单路径，可包含多文档或 ``kind: List``。
        strict: 是否严格；缺省读取 ``INGRESS_ANNOTATIONS_STRICT``。

    返回值:
        无返回；以 JSON 数组打印到标准输出。

    副作用:
        读取文件系统。
    """

    try:
        manifests = load_ingress_manifests(file)
    except FileNotFoundError:
        raise typer.BadParameter(f"文件不存在: {file}")
    except (_yaml.YAMLError, ValidationError) as exc:
        raise typer.BadParameter(f"无法解析清单 {file}: {exc}")

    entries = [
        {"ingress": m.ref, "config": read_ingress_config(m).to_dict()}
        for m in manifests
    ]
    _report(entries, strict_from_env() if strict is None else strict)


@app.command()
def inspect(
    namespace: Optional[str] = typer.Option(
        None, "--namespace", "-n", help="命名空间（缺省为全部命名空间）"
    ),
    name: Optional[str] = typer.Option(
        None, "--name", help="Ingress 名称（需同时提供 --namespace）"
    ),
    incluster: Optional[bool] = typer.Option(
        None, "--incluster/--kubeconfig", help="使用集群内服务帐号配置"
    ),
    strict: Optional[bool] = typer.Option(
        None, "--strict/--no-strict", help="NodePort 解析错误时返回非零退出码"
    ),
) -> None:
    """从集群读取 Ingress 并以 JSON 打印解析后的配置。

    参数:
        namespace: 命名空间。
        name: Ingress 名称；缺省时列出命名空间内全部 Ingress。
        incluster: 缺省读取 ``INGRESS_ANNOTATIONS_INCLUSTER``。
        strict: 缺省读取 ``INGRESS_ANNOTATIONS_STRICT``。

    返回值:
        无返回；以 JSON 数组打印到标准输出。

    副作用:
        调用 K8s API。
    """

    if name and not namespace:
        raise typer.BadParameter("使用 --name 时必须提供 --namespace")
    use_incluster = incluster_from_env() if incluster is None else incluster
    try:
        if name:
            items = [kc.read_ingress(namespace or "", name, incluster=use_incluster)]
        else:
            items = kc.list_ingresses(namespace, incluster=use_incluster)
    except RuntimeError as exc:
        typer.echo(str(exc), err=True)
        raise typer.Exit(code=2)

    entries = []
    for item in items:
        ns, nm = ingress_ref(item)
        entries.append(
            {"ingress": f"{ns}/{nm}", "config": read_ingress_config(item).to_dict()}
        )
    _report(entries, strict_from_env() if strict is None else strict)


@app.command()
def keys() -> None:
    """打印全部已知注解键、值类型与默认值。"""

    typer.echo(_json.dumps(KEY_TABLE, ensure_ascii=False))


def main() -> None:
    """CLI 入口包装。

    参数:
        无。

    返回值:
        无。

    副作用:
        按 ``INGRESS_ANNOTATIONS_LOG_LEVEL`` 配置日志后调用 Typer 应用。
    """

    logging.basicConfig(
        level=log_level_from_env(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    app()


if __name__ == "__main__":
    main()
