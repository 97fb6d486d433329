"""注解来源适配层。

读取器只依赖单方法接口 ``lookup(key) -> Optional[str]``，
本模块负责把普通映射、Ingress 清单字典、pydantic 清单模型以及
kubernetes 客户端返回的 ``V1Ingress`` 对象统一适配为该接口。
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Mapping, Optional, Protocol, runtime_checkable


@runtime_checkable
class AnnotationSource(Protocol):
    """只读注解来源。"""

    def lookup(self, key: str) -> Optional[str]:
        """按键读取注解值；键不存在时返回 None（与空字符串区分）。"""


@dataclass(frozen=True)
class MappingSource:
    """基于普通映射的注解来源。

    属性:
        mapping: 注解键到值的映射；为 None 表示资源上没有任何注解。
    """

    mapping: Optional[Mapping[str, str]] = None

    def lookup(self, key: str) -> Optional[str]:
        """读取注解值。

        参数:
            key: 注解完整键名。

        返回值:
            Optional[str]: 键存在时返回原始字符串（可能为空串），否则 None。

        副作用:
            无；不会修改底层映射。
        """

        if not self.mapping:
            return None
        val = self.mapping.get(key)
        if val is None:
            return None
        return str(val)


def _annotations_of(meta: Any) -> Optional[Mapping[str, str]]:
    """从 metadata（字典或对象）中取出 annotations。"""

    if meta is None:
        return None
    if isinstance(meta, Mapping):
        return meta.get("annotations")
    return getattr(meta, "annotations", None)


def _wrap(annotations: Any) -> MappingSource:
    if annotations is not None and not isinstance(annotations, Mapping):
        raise TypeError(
            f"unsupported annotation source: annotations is {type(annotations).__name__}"
        )
    return MappingSource(annotations)


def as_source(ingress: Any) -> AnnotationSource:
    """把调用方传入的资源对象适配为 :class:`AnnotationSource`。

    参数:
        ingress: 支持以下形态：
            - 已实现 ``lookup`` 的对象（原样返回）；
            - 注解映射本身（如 ``{"io.cilium/websocket": "enabled"}``）；
            - Ingress 清单字典（含 ``metadata`` 映射）；
            - 具有 ``metadata`` 属性的对象（``V1Ingress``/清单模型）；
            - None（视为无注解）。

    返回值:
        AnnotationSource: 可供读取器使用的注解来源。

    副作用:
        无。

    异常:
        TypeError: 无法识别的对象类型，或 annotations 不是映射。
    """

    if ingress is None:
        return MappingSource()
    if isinstance(ingress, AnnotationSource):
        return ingress
    if isinstance(ingress, Mapping):
        # 注解值均为字符串，含 metadata 映射者只能是清单
        meta = ingress.get("metadata")
        if isinstance(meta, Mapping):
            return _wrap(_annotations_of(meta))
        return MappingSource(ingress)
    if hasattr(ingress, "metadata"):
        return _wrap(_annotations_of(ingress.metadata))
    raise TypeError(f"unsupported annotation source: {type(ingress).__name__}")
