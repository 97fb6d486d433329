"""测试全局配置。

将 `src` 目录加入 `sys.path`，以便在未打包安装时可直接导入包；
同时提供构造 Ingress 对象的夹具。
"""

from __future__ import annotations

import sys
from pathlib import Path
from types import SimpleNamespace as NS
from typing import Callable, Dict, Optional

import pytest

SRC_DIR = Path(__file__).resolve().parents[1] / "src"
if str(SRC_DIR) not in sys.path:
    sys.path.insert(0, str(SRC_DIR))

FIXTURES_DIR = Path(__file__).resolve().parent / "fixtures"


@pytest.fixture
def fixtures_dir() -> Path:
    """返回测试清单目录。"""

    return FIXTURES_DIR


@pytest.fixture
def make_v1_ingress() -> Callable[..., NS]:
    """构造形似 kubernetes ``V1Ingress`` 的对象。

    返回值:
        Callable: ``(annotations, namespace, name) -> NS``。
    """

    def _make(
        annotations: Optional[Dict[str, str]] = None,
        namespace: str = "default",
        name: str = "web",
    ) -> NS:
        meta = NS(name=name, namespace=namespace, annotations=annotations)
        return NS(metadata=meta, spec=NS(rules=[]))

    return _make
