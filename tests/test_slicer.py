from __future__ import annotations

import io

import pytest

from kube_slice.core.errors import FilterSkip, MissingFieldError, ParseError, RenderError, StrictSkip
from kube_slice.core.slicer import SliceOptions, Slicer, slice_manifests
from kube_slice.models import RawDocument
from kube_slice.models.filters import FilterSpec

POD = b"apiVersion: v1\nkind: Pod\nmetadata:\n  name: nginx-ingress"
NAMESPACE = b"apiVersion: v1\nkind: Namespace\nmetadata:\n  name: prod"
SERVICE = b"apiVersion: v1\nkind: Service\nmetadata:\n  name: web"
DEPLOYMENT = b"apiVersion: apps/v1\nkind: Deployment\nmetadata:\n  name: web"


def _stream(*docs: bytes) -> bytes:
    return b"\n---\n".join(docs) + b"\n"


class TestScenarios:
    """End-to-end slicing of in-memory streams."""

    def test_single_pod(self) -> None:
        output = slice_manifests(POD)
        assert output.filenames == ["pod-nginx-ingress.yaml"]
        assert output.documents[0].data == POD

    def test_strict_skips_non_kubernetes_document(self) -> None:
        slicer = Slicer(SliceOptions(filters=FilterSpec(strict=True)))
        with pytest.raises(StrictSkip) as exc_info:
            slicer.process_document(RawDocument(ordinal=1, data=b"kind: foo\nname: bar"))
        assert exc_info.value.field_name == "apiVersion"
        assert len(slicer.process(io.BytesIO(b"kind: foo\nname: bar\n"))) == 0

    def test_same_file_name_is_merged(self) -> None:
        first = b"kind: ConfigMap\nmetadata:\n  name: one"
        second = b"kind: Secret\nmetadata:\n  name: two"
        output = slice_manifests(_stream(first, second), SliceOptions(template="example.yaml"))

        assert output.filenames == ["example.yaml"]
        doc = output.get("example.yaml")
        assert doc is not None
        assert doc.data == first + b"\n---\n" + second
        assert doc.identity.kind == "ConfigMap"

    def test_included_kinds_skip_other_kinds(self) -> None:
        slicer = Slicer(SliceOptions(filters=FilterSpec(included_kinds=["Pod"])))
        with pytest.raises(FilterSkip) as exc_info:
            slicer.process_document(RawDocument(ordinal=1, data=NAMESPACE))
        assert exc_info.value.kind == "Namespace"
        assert "does not match any included" in str(exc_info.value)

        output = slicer.process(io.BytesIO(_stream(NAMESPACE, POD)))
        assert output.filenames == ["pod-nginx-ingress.yaml"]

    def test_sort_by_kind(self) -> None:
        output = slice_manifests(
            _stream(DEPLOYMENT, NAMESPACE, SERVICE), SliceOptions(sort_by_kind=True)
        )
        assert [doc.identity.kind for doc in output] == ["Namespace", "Service", "Deployment"]

    def test_unsorted_keeps_input_order(self) -> None:
        output = slice_manifests(_stream(DEPLOYMENT, NAMESPACE, SERVICE))
        assert output.filenames == ["deployment-web.yaml", "namespace-prod.yaml", "service-web.yaml"]


class TestProcess:
    """Test the driving loop."""

    def test_empty_documents_are_skipped(self) -> None:
        output = slice_manifests(b"---\n" + POD + b"\n---\n---\n\n---\n" + SERVICE + b"\n---\n")
        assert output.filenames == ["pod-nginx-ingress.yaml", "service-web.yaml"]

    def test_comment_only_document_is_named_from_missing_fields(self) -> None:
        output = slice_manifests(b"# just a comment\n")
        assert output.filenames == ["-.yaml"]

    def test_parse_error_reports_ordinal_after_leading_separator(self) -> None:
        with pytest.raises(ParseError) as exc_info:
            slice_manifests(b"---\nkey: [unclosed\n")
        assert exc_info.value.ordinal == 2
        assert "file number 2" in str(exc_info.value)

    def test_top_level_list_is_rejected(self) -> None:
        with pytest.raises(ParseError, match="expected a mapping"):
            slice_manifests(b"- a\n- b\n")

    def test_filtering_non_kubernetes_document_fails(self) -> None:
        options = SliceOptions(filters=FilterSpec(included_kinds=["Pod"]))
        with pytest.raises(MissingFieldError) as exc_info:
            slice_manifests(_stream(POD, b"foo: bar"), options)
        assert exc_info.value.ordinal == 2
        assert "--skip-non-k8s" in str(exc_info.value)

    def test_strict_mode_wins_over_filters(self) -> None:
        options = SliceOptions(filters=FilterSpec(included_kinds=["Pod"], strict=True))
        output = slice_manifests(_stream(b"foo: bar", POD), options)
        assert output.filenames == ["pod-nginx-ingress.yaml"]

    def test_bad_template_fails_before_reading(self) -> None:
        with pytest.raises(RenderError):
            Slicer(SliceOptions(template="{{ kind "))

    def test_accepts_text_input(self) -> None:
        assert slice_manifests(POD.decode()).filenames == ["pod-nginx-ingress.yaml"]

    def test_output_is_deterministic(self) -> None:
        data = _stream(DEPLOYMENT, NAMESPACE, SERVICE, POD)
        first = [(doc.filename, doc.data) for doc in slice_manifests(data)]
        second = [(doc.filename, doc.data) for doc in slice_manifests(data)]
        assert first == second

    def test_documents_are_kept_byte_for_byte(self) -> None:
        doc = b"# leading comment\napiVersion: v1\nkind: Pod\nmetadata:\n  name: web  # trailing\n"
        output = slice_manifests(doc)
        assert output.documents[0].data == doc.strip()
