"""Kubernetes 集群访问适配层。"""

from __future__ import annotations

from typing import Any, Tuple


def ingress_ref(ingress: Any) -> Tuple[str, str]:
    """从 ``V1Ingress`` 对象提取 ``(namespace, name)``。

    参数:
        ingress: kubernetes 客户端返回的 Ingress 对象。

    返回值:
        Tuple[str, str]: 命名空间与名称；缺失时分别为 ``default`` 与空串。

    副作用:
        无。
    """

    meta = getattr(ingress, "metadata", None)
    namespace = getattr(meta, "namespace", None) or "default"
    name = getattr(meta, "name", None) or ""
    return str(namespace), str(name)
