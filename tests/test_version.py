"""基础版本测试。

确保包结构与最小功能可用。
"""

from ingress_annotations import get_version


def test_get_version_non_empty():
    """校验 `get_version` 返回非空字符串。"""

    v = get_version()
    assert isinstance(v, str) and len(v) > 0
