"""Resolve the CSQ column layout from its INFO header description."""

import re
from collections.abc import Mapping
from dataclasses import dataclass, field
from types import MappingProxyType

from ...models import DecodeIssue, ExtensionFailure
from .fields import canonical_name

EXTENSION_NAME = "ensembl_vep"

FORMAT_MARKER = re.compile(r"Format:\s*(.*)$", re.IGNORECASE | re.DOTALL)


@dataclass(frozen=True)
class Schema:
    """Ordered CSQ column names declared by a VCF header."""

    info_key: str
    fields: tuple[str, ...]
    columns: Mapping[str, int] = field(init=False, repr=False, compare=False)

    def __post_init__(self) -> None:
        columns: dict[str, int] = {}
        for index, name in enumerate(self.fields):
            columns.setdefault(canonical_name(name), index)
        object.__setattr__(self, "columns", MappingProxyType(columns))

    def __len__(self) -> int:
        return len(self.fields)


def resolve_schema(description: str | None, info_key: str = "CSQ") -> Schema | ExtensionFailure:
    """Extract the pipe-delimited column list following ``Format:``.

    Args:
        description: INFO header Description text, quoted or not
        info_key: INFO ID the description belongs to

    Returns:
        Schema, or ExtensionFailure with SCHEMA_NOT_FOUND / SCHEMA_EMPTY
    """
    if not description:
        return ExtensionFailure(
            EXTENSION_NAME,
            DecodeIssue.SCHEMA_NOT_FOUND,
            f"No INFO header description for {info_key}",
        )

    match = FORMAT_MARKER.search(description)
    if not match:
        return ExtensionFailure(
            EXTENSION_NAME,
            DecodeIssue.SCHEMA_NOT_FOUND,
            f"INFO/{info_key} description does not declare a Format",
        )

    format_string = match.group(1).strip().strip("\"'").strip()
    names = tuple(name.strip() for name in format_string.split("|") if name.strip())

    if not names:
        return ExtensionFailure(
            EXTENSION_NAME,
            DecodeIssue.SCHEMA_EMPTY,
            f"INFO/{info_key} Format declares no fields",
        )

    return Schema(info_key=info_key, fields=names)
