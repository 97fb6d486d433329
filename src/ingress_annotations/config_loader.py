"""Ingress 清单 Schema 与加载器。

使用 Pydantic 定义 Ingress 清单的最小 Schema（只关心 metadata 与注解），
从 YAML 文件（支持多文档与 ``kind: List``）中挑出 Ingress 并校验。
注解值必须是字符串，与 API Server 的行为一致；未加引号的数字会被拒绝。
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any, Dict, Iterable, List, Mapping, Optional

import yaml
from pydantic import BaseModel, ConfigDict, Field, field_validator

logger = logging.getLogger(__name__)

INGRESS_KIND = "Ingress"


class ObjectMetaSchema(BaseModel):
    """清单 metadata（允许 labels 等额外字段）。

    参数:
        name: 资源名。
        namespace: 命名空间（可缺省）。
        annotations: 注解映射，值必须为字符串。
    """

    model_config = ConfigDict(extra="allow")

    name: Optional[str] = None
    namespace: Optional[str] = None
    annotations: Dict[str, str] = Field(default_factory=dict)

    @field_validator("annotations", mode="before")
    @classmethod
    def _none_is_empty(cls, v: Any) -> Any:
        # YAML 中 `annotations:` 留空会得到 None
        return {} if v is None else v


class IngressManifestSchema(BaseModel):
    """Ingress 清单 Schema（spec/status 等字段原样保留）。"""

    model_config = ConfigDict(extra="allow", populate_by_name=True)

    api_version: str = Field(alias="apiVersion")
    kind: str
    metadata: ObjectMetaSchema = Field(default_factory=ObjectMetaSchema)

    @field_validator("kind")
    @classmethod
    def _must_be_ingress(cls, v: str) -> str:
        if v != INGRESS_KIND:
            raise ValueError(f"kind must be {INGRESS_KIND!r}, got {v!r}")
        return v

    @property
    def ref(self) -> str:
        """``<namespace>/<name>`` 形式的资源引用，namespace 缺省为 default。"""

        return f"{self.metadata.namespace or 'default'}/{self.metadata.name or ''}"


def _iter_objects(docs: Iterable[Any]) -> Iterable[Mapping[str, Any]]:
    """展开 YAML 文档流，``kind: List`` 的 items 逐个产出。"""

    for doc in docs:
        if not isinstance(doc, Mapping):
            continue
        if doc.get("kind") == "List":
            for item in doc.get("items") or []:
                if isinstance(item, Mapping):
                    yield item
            continue
        yield doc


def parse_ingress_manifests(text: str) -> List[IngressManifestSchema]:
    """从 YAML 文本中解析全部 Ingress 清单。

    参数:
        text: YAML 文本，可包含多个文档。

    返回值:
        List[IngressManifestSchema]: 通过校验的 Ingress 列表；非 Ingress 对象被跳过。

    副作用:
        无。

    异常:
        yaml.YAMLError: YAML 语法错误。
        pydantic.ValidationError: Ingress 清单不符合 Schema。
    """

    out: List[IngressManifestSchema] = []
    for obj in _iter_objects(yaml.safe_load_all(text)):
        if obj.get("kind") != INGRESS_KIND:
            logger.debug("skip non-Ingress object kind=%s", obj.get("kind"))
            continue
        out.append(IngressManifestSchema.model_validate(obj))
    return out


def load_ingress_manifests(path: Path) -> List[IngressManifestSchema]:
    """读取 YAML 文件并解析其中的 Ingress 清单。

    参数:
        path: 清单文件路径。

    返回值:
        List[IngressManifestSchema]: 文件中的 Ingress 列表（可能为空）。

    副作用:
        文件 IO；文件不存在时抛出 FileNotFoundError。
    """

    items = parse_ingress_manifests(path.read_text(encoding="utf-8"))
    logger.info("loaded %d ingress manifest(s) from %s", len(items), path)
    return items
