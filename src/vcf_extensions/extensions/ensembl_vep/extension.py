"""Ensembl VEP CSQ decoder."""

import logging
from typing import Any

from ...models import (
    DecodeIssue,
    ExtensionData,
    ExtensionFailure,
    ExtensionResult,
    ExtensionSuccess,
)
from ...vcf_parser import VCFHeader
from .builder import build_record
from .fields import COERCION_TABLE, canonical_name
from .schema import EXTENSION_NAME, Schema, resolve_schema
from .splitter import split_instances

logger = logging.getLogger(__name__)


def _info_value(variant: Any, key: str) -> Any:
    """Read an INFO value from a cyvcf2 Variant or a record with an ``info`` dict."""
    info = getattr(variant, "INFO", None)
    if info is None:
        info = getattr(variant, "info", None) or {}
    return info.get(key)


class EnsemblVepExtension:
    """Decode the VEP ``CSQ`` INFO field into annotations and frequencies."""

    name = EXTENSION_NAME

    def __init__(self, info_key: str = "CSQ"):
        self.info_key = info_key

    def __call__(self, variant: Any, header: VCFHeader) -> ExtensionResult:
        return self.decode(variant, header)

    def resolve(self, header: VCFHeader) -> Schema | ExtensionFailure:
        return header.schema_for(self.info_key, self._resolve, owner=self.name)

    def _resolve(self, description: str | None, info_key: str) -> Schema | ExtensionFailure:
        schema = resolve_schema(description, info_key)
        if isinstance(schema, Schema):
            unknown = [
                name for name in schema.fields if canonical_name(name) not in COERCION_TABLE
            ]
            if unknown:
                logger.debug("Ignoring unrecognised %s columns: %s", info_key, ", ".join(unknown))
        return schema

    def decode(self, variant: Any, header: VCFHeader) -> ExtensionResult:
        payload = _info_value(variant, self.info_key)
        if not payload:
            logger.debug("Variant has no %s annotation", self.info_key)
            return ExtensionFailure(
                self.name,
                DecodeIssue.ANNOTATION_ABSENT,
                f"INFO/{self.info_key} not present",
            )

        schema = self.resolve(header)
        if isinstance(schema, ExtensionFailure):
            return schema

        split = split_instances(payload, schema)
        if not split.rows:
            logger.debug("Variant %s annotation has only blank instances", self.info_key)
            return ExtensionFailure(
                self.name,
                DecodeIssue.ANNOTATION_ABSENT,
                f"INFO/{self.info_key} holds no instances",
            )

        annotations = []
        frequencies = []
        for row in split.rows:
            record = build_record(row, schema)
            annotations.append(record.annotation)
            frequencies.append(record.frequency)

        warnings = [DecodeIssue.INSTANCE_OVERFLOW] if split.overflowed else []

        return ExtensionSuccess(
            self.name,
            ExtensionData(annotations=annotations, frequencies=frequencies, warnings=warnings),
        )
