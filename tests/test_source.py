"""注解来源适配的单元测试。"""

from __future__ import annotations

from types import SimpleNamespace as NS

import pytest

from ingress_annotations.source import AnnotationSource, MappingSource, as_source


def test_mapping_source_distinguishes_absent_and_empty():
    src = MappingSource({"a": ""})
    assert src.lookup("a") == ""
    assert src.lookup("b") is None


def test_custom_lookup_object_used_as_is():
    class Env:
        def lookup(self, key):
            return "x" if key == "k" else None

    env = Env()
    assert isinstance(env, AnnotationSource)
    assert as_source(env) is env


def test_manifest_dict_reads_metadata_annotations():
    manifest = {
        "apiVersion": "networking.k8s.io/v1",
        "kind": "Ingress",
        "metadata": {"name": "web", "annotations": {"k": "v"}},
    }
    assert as_source(manifest).lookup("k") == "v"
    assert as_source({"metadata": {"name": "web"}}).lookup("k") is None


def test_plain_annotation_mapping():
    assert as_source({"k": "v"}).lookup("k") == "v"


def test_object_with_metadata(make_v1_ingress):
    assert as_source(make_v1_ingress({"k": "v"})).lookup("k") == "v"
    assert as_source(NS(metadata=None)).lookup("k") is None


def test_unsupported_type():
    with pytest.raises(TypeError, match="unsupported annotation source"):
        as_source(42)


@pytest.mark.parametrize("annotations", [["a"], "io.cilium/websocket=enabled", 3])
def test_non_mapping_annotations_rejected(annotations, make_v1_ingress):
    """metadata.annotations 不是映射时抛出 TypeError。"""

    with pytest.raises(TypeError, match="unsupported annotation source"):
        as_source({"metadata": {"annotations": annotations}})
    with pytest.raises(TypeError, match="unsupported annotation source"):
        as_source(make_v1_ingress(annotations))
