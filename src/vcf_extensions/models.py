"""Data models for decoded variant annotations."""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Literal, TypedDict


class DecodeIssue(Enum):
    """Reasons a decoder reports instead of raising."""

    SCHEMA_NOT_FOUND = "schema_not_found"
    SCHEMA_EMPTY = "schema_empty"
    ANNOTATION_ABSENT = "annotation_absent"
    INSTANCE_OVERFLOW = "instance_overflow"


class _Absent:
    """Marker for a value that was not present in the raw record."""

    _instance = None

    def __new__(cls):
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __repr__(self) -> str:
        return "ABSENT"

    def __bool__(self) -> bool:
        return False


ABSENT: Any = _Absent()


class Annotation(TypedDict, total=False):
    """One transcript/feature level annotation.

    Keys that were empty in the raw record are omitted, except list fields
    which default to an empty list.
    """

    amino_acids_reference: str
    amino_acids_variant: str
    biotype: str
    canonical: bool
    ccds: str
    cdna_position: int | str
    cdna_length: int | str
    cds_position: int | str
    cds_length: int | str
    clin_sig: str
    codons_reference: str
    codons_variant: str
    consequence: list[str]
    cosmic: list[str]
    dbsnp: list[str]
    exon_rank: int | str
    exon_total: int | str
    feature_type: str
    feature_strand: str
    gene_pheno: int | str
    gene_symbol: str
    hgvsc: str
    hgvsp: str
    high_inf_pos: str
    intron_rank: int | str
    intron_total: int | str
    mane_plus_clinical: str
    mane_select: str
    motif_name: str
    motif_pos: int | str
    motif_score_change: float | str
    polyphen_impact: str
    polyphen_score: float | str
    protein_position: int | str
    protein_length: int | str
    pubmed: list[str]
    sift_impact: str
    sift_score: float | str
    transcription_factors: list[str]
    uniparc: str
    uniprotkb_swissprot: str
    uniprotkb_trembl: str
    vep_impact: str


# source (e.g. "gnomad_exomes") -> sub-population (e.g. "afr_af") -> value
Frequency = dict[str, dict[str, str]]


@dataclass(frozen=True)
class ExtensionData:
    """Decoded records for one variant.

    ``annotations[i]`` and ``frequencies[i]`` describe the same instance.
    """

    annotations: list[Annotation]
    frequencies: list[Frequency]
    warnings: list[DecodeIssue] = field(default_factory=list)


@dataclass(frozen=True)
class ExtensionSuccess:
    """Successful decode of a variant by one extension."""

    extension: str
    data: ExtensionData
    success: Literal[True] = True

    def to_dict(self) -> dict[str, Any]:
        return {
            "extension": self.extension,
            "annotations": self.data.annotations,
            "frequencies": self.data.frequencies,
            "warnings": [w.value for w in self.data.warnings],
        }


@dataclass(frozen=True)
class ExtensionFailure:
    """A decode that produced no records."""

    extension: str
    reason: DecodeIssue
    message: str = ""
    success: Literal[False] = False


ExtensionResult = ExtensionSuccess | ExtensionFailure
