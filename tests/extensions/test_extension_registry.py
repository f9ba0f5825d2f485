"""Tests for extension registration and orchestration."""

import pytest
from fixtures.variants import make_variant

from vcf_extensions.extensions import EXTENSIONS, extend_variant, get_extension
from vcf_extensions.extensions.ensembl_vep import EnsemblVepExtension
from vcf_extensions.models import (
    DecodeIssue,
    ExtensionData,
    ExtensionFailure,
    ExtensionSuccess,
)


class RecordingExtension:
    """Extension returning a fixed result and recording calls."""

    def __init__(self, result):
        self.result = result
        self.calls = 0

    def __call__(self, variant, header):
        self.calls += 1
        return self.result


class TestRegistry:
    """Test named extension lookup."""

    def test_ensembl_vep_registered(self):
        assert "ensembl_vep" in EXTENSIONS

    def test_get_extension_with_options(self):
        extension = get_extension("ensembl_vep", info_key="ANN_VEP")

        assert isinstance(extension, EnsemblVepExtension)
        assert extension.info_key == "ANN_VEP"

    def test_unknown_extension(self):
        with pytest.raises(KeyError, match="Unknown extension"):
            get_extension("snpeff")


class TestExtendVariant:
    """Test trying extensions in order."""

    def test_default_extensions(self, annotated_variant, vep_header):
        result = extend_variant(annotated_variant, vep_header)

        assert result.success
        assert result.extension == "ensembl_vep"

    def test_first_success_wins(self, vep_header):
        absent = RecordingExtension(
            ExtensionFailure("first", DecodeIssue.ANNOTATION_ABSENT)
        )
        winner = RecordingExtension(
            ExtensionSuccess("second", ExtensionData(annotations=[{}], frequencies=[{}]))
        )
        unused = RecordingExtension(
            ExtensionSuccess("third", ExtensionData(annotations=[], frequencies=[]))
        )

        result = extend_variant(make_variant(), vep_header, [absent, winner, unused])

        assert result.extension == "second"
        assert absent.calls == 1
        assert unused.calls == 0

    def test_last_failure_returned(self, vep_header):
        first = RecordingExtension(ExtensionFailure("first", DecodeIssue.SCHEMA_NOT_FOUND))
        second = RecordingExtension(ExtensionFailure("second", DecodeIssue.ANNOTATION_ABSENT))

        result = extend_variant(make_variant(), vep_header, [first, second])

        assert not result.success
        assert result.extension == "second"

    def test_no_extensions(self, vep_header):
        result = extend_variant(make_variant(), vep_header, [])

        assert not result.success
        assert result.reason is DecodeIssue.ANNOTATION_ABSENT

    def test_unannotated_variant(self, unannotated_variant, vep_header):
        result = extend_variant(unannotated_variant, vep_header)
        assert result.reason is DecodeIssue.ANNOTATION_ABSENT
