from __future__ import annotations

from kube_slice.core.sorting import INSTALL_ORDER, kind_sort_key, sort_by_kind
from kube_slice.models import NamedDocument, ResourceIdentity


def _doc(kind: str, name: str = "x") -> NamedDocument:
    return NamedDocument(
        filename=f"{kind.lower()}-{name}.yaml",
        identity=ResourceIdentity(api_version="v1", kind=kind, name=name),
        data=b"",
    )


def _kinds(documents: list[NamedDocument]) -> list[str]:
    return [doc.identity.kind for doc in documents]


class TestSortByKind:
    """Test Helm install ordering."""

    def test_known_kinds(self) -> None:
        docs = [_doc("Deployment"), _doc("Namespace"), _doc("Service")]
        assert _kinds(sort_by_kind(docs)) == ["Namespace", "Service", "Deployment"]

    def test_unknown_kinds_go_last_alphabetically(self) -> None:
        docs = [_doc("Widget"), _doc("Ingress"), _doc("Certificate"), _doc("Namespace")]
        assert _kinds(sort_by_kind(docs)) == ["Namespace", "Ingress", "Certificate", "Widget"]

    def test_documents_without_kind_are_unknown(self) -> None:
        docs = [_doc(""), _doc("Pod")]
        assert _kinds(sort_by_kind(docs)) == ["Pod", ""]

    def test_stable_for_equal_kinds(self) -> None:
        docs = [_doc("Service", "b"), _doc("Namespace"), _doc("Service", "a")]
        assert [doc.identity.name for doc in sort_by_kind(docs)] == ["x", "b", "a"]

    def test_does_not_mutate_input(self) -> None:
        docs = [_doc("Service"), _doc("Namespace")]
        sort_by_kind(docs)
        assert _kinds(docs) == ["Service", "Namespace"]


class TestKindSortKey:
    def test_install_order_is_respected(self) -> None:
        keys = [kind_sort_key(kind) for kind in INSTALL_ORDER]
        assert keys == sorted(keys)

    def test_kind_match_is_case_sensitive(self) -> None:
        assert kind_sort_key("pod") > kind_sort_key("APIService")
