"""Ensembl VEP CSQ annotation decoder."""

from .builder import BuiltRecord, build_record
from .extension import EnsemblVepExtension
from .fields import COERCION_TABLE, ColumnLayout, ColumnRule, FieldKind, FieldRule, coerce
from .schema import EXTENSION_NAME, Schema, resolve_schema
from .splitter import SplitResult, split_instances

__all__ = [
    "COERCION_TABLE",
    "EXTENSION_NAME",
    "BuiltRecord",
    "ColumnLayout",
    "ColumnRule",
    "EnsemblVepExtension",
    "FieldKind",
    "FieldRule",
    "Schema",
    "SplitResult",
    "build_record",
    "coerce",
    "resolve_schema",
    "split_instances",
]
