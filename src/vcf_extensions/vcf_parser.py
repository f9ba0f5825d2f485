"""VCF header access for annotation extensions."""

import re
from collections.abc import Callable, Iterator
from pathlib import Path
from typing import Any

from cyvcf2 import VCF


class VCFHeaderParser:
    """Parser for VCF INFO header definitions."""

    def parse_info_fields(self, header_lines: list[str]) -> dict[str, dict[str, str]]:
        """Parse INFO field definitions from header lines."""
        info_fields = {}
        info_pattern = re.compile(r'##INFO=<(.+)>')

        for line in header_lines:
            match = info_pattern.match(line.strip())
            if match:
                field_def = self._parse_field_definition(match.group(1))
                if field_def:
                    info_fields[field_def['ID']] = {
                        k: v for k, v in field_def.items() if k != 'ID'
                    }

        return info_fields

    def _parse_field_definition(self, field_string: str) -> dict[str, str] | None:
        """Parse a field definition string like 'ID=AC,Number=A,Type=Integer,Description="..."'"""
        field_def = {}

        # Descriptions may contain commas and '=' inside quotes
        parts = []
        current_part = ""
        in_quotes = False

        for char in field_string:
            if char == '"':
                in_quotes = not in_quotes
                current_part += char
            elif char == ',' and not in_quotes:
                parts.append(current_part)
                current_part = ""
            else:
                current_part += char

        if current_part:
            parts.append(current_part)

        for part in parts:
            if '=' in part:
                key, value = part.split('=', 1)
                if key == 'Description' and value.startswith('"') and value.endswith('"'):
                    value = value[1:-1]
                field_def[key] = value

        return field_def if 'ID' in field_def else None


class VCFHeader:
    """Read-only view of a VCF header shared by all decode calls.

    Resolved annotation schemas are cached per decoder and INFO key for
    the lifetime of the header.
    """

    def __init__(self, header_lines: list[str]):
        self.info_fields = VCFHeaderParser().parse_info_fields(header_lines)
        self._schemas: dict[tuple[str, str], Any] = {}

    @classmethod
    def from_string(cls, header: str) -> "VCFHeader":
        return cls(header.splitlines())

    @classmethod
    def from_vcf(cls, vcf: VCF) -> "VCFHeader":
        """Build from an open cyvcf2 reader."""
        return cls.from_string(vcf.raw_header)

    def description(self, info_id: str) -> str | None:
        field_def = self.info_fields.get(info_id)
        if field_def is None:
            return None
        return field_def.get('Description')

    def schema_for(
        self,
        info_id: str,
        resolver: Callable[[str | None, str], Any],
        owner: str = "",
    ) -> Any:
        """Return the schema ``owner`` resolved for ``info_id``, resolving it on first use.

        Decoders reading the same INFO key keep separate entries.
        """
        key = (owner, info_id)
        if key not in self._schemas:
            self._schemas[key] = resolver(self.description(info_id), info_id)
        return self._schemas[key]


def iter_variants(vcf_path: Path) -> tuple[VCFHeader, Iterator]:
    """Open ``vcf_path`` with cyvcf2 and return its header and variant iterator."""
    vcf = VCF(str(vcf_path))
    header = VCFHeader.from_vcf(vcf)

    def _variants():
        try:
            yield from vcf
        finally:
            vcf.close()

    return header, _variants()


def read_header(vcf_path: Path) -> VCFHeader:
    """Read only the header of ``vcf_path``."""
    vcf = VCF(str(vcf_path))
    try:
        return VCFHeader.from_vcf(vcf)
    finally:
        vcf.close()
