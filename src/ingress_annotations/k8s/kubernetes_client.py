"""Kubernetes Ingress 读取工具。

提供：
- 读取 kube 配置并创建 NetworkingV1Api 客户端
- 按命名空间/名称读取单个 Ingress
- 列出命名空间（或全部命名空间）下的 Ingress
"""

from __future__ import annotations

import logging
from typing import Any, List, Optional

logger = logging.getLogger(__name__)


def create_networking_v1_api(incluster: bool = False) -> Any:
    """创建 `NetworkingV1Api` 客户端。

    参数:
        incluster: 是否使用 in-cluster 配置；为 False 时使用本地 kubeconfig。

    返回值:
        kubernetes.client.NetworkingV1Api 实例。

    副作用:
        读取 kube 配置文件或集群内服务帐号配置。
    """

    # 延迟导入以便测试时可 monkeypatch
    from kubernetes import client, config  # type: ignore[import-untyped]

    if incluster:
        config.load_incluster_config()
    else:
        config.load_kube_config()
    return client.NetworkingV1Api()


def read_ingress(namespace: str, name: str, incluster: bool = False) -> Any:
    """读取单个 Ingress。

    参数:
        namespace: 命名空间。
        name: Ingress 名称。
        incluster: 是否使用容器内配置。

    返回值:
        kubernetes.client.V1Ingress: Ingress 对象。

    副作用:
        调用 K8s API `read_namespaced_ingress`。
    """

    api = create_networking_v1_api(incluster=incluster)
    logger.debug("reading ingress %s/%s", namespace, name)
    try:
        return api.read_namespaced_ingress(name=name, namespace=namespace)
    except Exception as exc:
        raise RuntimeError(f"Ingress not found: {namespace}/{name}") from exc


def list_ingresses(
    namespace: Optional[str] = None, incluster: bool = False
) -> List[Any]:
    """列出 Ingress。

    参数:
        namespace: 命名空间；为 None 时列出全部命名空间。
        incluster: 是否使用容器内配置。

    返回值:
        List[V1Ingress]: Ingress 对象列表。

    副作用:
        调用 K8s API `list_namespaced_ingress` 或 `list_ingress_for_all_namespaces`。
    """

    api = create_networking_v1_api(incluster=incluster)
    try:
        if namespace:
            resp = api.list_namespaced_ingress(namespace=namespace)
        else:
            resp = api.list_ingress_for_all_namespaces()
    except Exception as exc:
        scope = namespace or "<all namespaces>"
        raise RuntimeError(f"failed to list ingresses in {scope}") from exc
    items = list(getattr(resp, "items", None) or [])
    logger.info("listed %d ingress(es) in %s", len(items), namespace or "all namespaces")
    return items
