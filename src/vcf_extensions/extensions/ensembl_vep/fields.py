"""Coercion table for Ensembl VEP CSQ columns.

Each VEP column (keyed by its lower-cased header name) maps to a
:class:`ColumnRule`. Simple columns carry a single :class:`FieldRule`;
compound columns such as ``cDNA_position`` (``"361/1696"``) or ``SIFT``
(``"tolerated(0.3)"``) are split by their layout first and each part is
coerced by its own rule.

Frequency columns are grouped by reference panel:

| Source         | VEP columns                         |
|----------------|-------------------------------------|
| 1000_genomes   | AF, AFR_AF, AMR_AF, ...             |
| esp            | AA_AF, EA_AF                        |
| gnomad_exomes  | gnomAD_*_AF, gnomADe_*_AF           |
| gnomad_genomes | gnomADg_*_AF                        |
"""

import re
from dataclasses import dataclass
from enum import Enum
from typing import Any
from urllib.parse import unquote

from ...models import ABSENT


class FieldKind(Enum):
    """How a raw token is turned into a typed value."""

    STRING = "string"
    INTEGER = "integer"
    FLOAT = "float"
    FLAG = "flag"
    ENUMERATED = "enumerated"
    STRING_LIST = "string_list"
    FREQUENCY = "frequency"
    SKIP = "skip"


class ColumnLayout(Enum):
    """How a compound column is split before coercion."""

    SINGLE = "single"
    SLASH = "slash"
    PREDICTION = "prediction"
    PREFIX = "prefix"


@dataclass(frozen=True)
class FieldRule:
    """Coercion rule for one output value."""

    kind: FieldKind
    target: str = ""
    separator: str | None = None
    join_with: str = ","
    multi_valued: bool = False
    frequency_group: str | None = None
    flag_value: str = "YES"
    prefixes: tuple[str, ...] = ()


@dataclass(frozen=True)
class ColumnRule:
    """Table entry for one VEP column."""

    rules: tuple[FieldRule, ...]
    layout: ColumnLayout = ColumnLayout.SINGLE

    @property
    def skipped(self) -> bool:
        return all(rule.kind is FieldKind.SKIP for rule in self.rules)

    def split(self, token: str) -> list[tuple[FieldRule, str]]:
        """Pair each rule with the part of ``token`` it should coerce."""
        if self.layout is ColumnLayout.SLASH:
            parts = token.split("/", len(self.rules) - 1) if token else []
            return [
                (rule, parts[i] if i < len(parts) else "")
                for i, rule in enumerate(self.rules)
            ]

        if self.layout is ColumnLayout.PREDICTION:
            label_rule, score_rule = self.rules
            match = _PREDICTION_PATTERN.match(token)
            if match:
                return [(label_rule, match.group(1)), (score_rule, match.group(2))]
            if _is_float(token):
                return [(label_rule, ""), (score_rule, token)]
            return [(label_rule, token), (score_rule, "")]

        if self.layout is ColumnLayout.PREFIX:
            routed: dict[FieldRule, list[str]] = {rule: [] for rule in self.rules}
            for item in token.split("&") if token else []:
                for rule in self.rules:
                    if item.startswith(rule.prefixes):
                        routed[rule].append(item)
                        break
            return [(rule, rule.separator.join(items)) for rule, items in routed.items()]

        return [(self.rules[0], token)]


_PREDICTION_PATTERN = re.compile(r"^(.*?)\(([^()]*)\)$")


def _is_float(token: str) -> bool:
    try:
        float(token)
    except ValueError:
        return False
    return True


def _decode(token: str) -> str:
    """Undo VCF 4.3 percent-encoding (``%2C`` for ``,`` and so on)."""
    if "%" not in token:
        return token
    return unquote(token)


def coerce(token: str, rule: FieldRule) -> Any:
    """Coerce one raw token, returning ``ABSENT`` when there is no value.

    Numeric columns that do not parse keep their original string, since
    some annotation sources write sentinels into numeric columns.
    """
    kind = rule.kind

    if kind is FieldKind.SKIP:
        return ABSENT

    if kind is FieldKind.STRING_LIST:
        if not token:
            return []
        items = (item.strip() for item in token.split(rule.separator or ","))
        return [_decode(item) for item in items if item]

    if not token:
        return ABSENT

    if kind is FieldKind.STRING or kind is FieldKind.FREQUENCY:
        return _decode(token)

    if kind is FieldKind.INTEGER:
        try:
            return int(token)
        except ValueError:
            return token

    if kind is FieldKind.FLOAT:
        try:
            return float(token)
        except ValueError:
            return token

    if kind is FieldKind.FLAG:
        return True if token == rule.flag_value else ABSENT

    if kind is FieldKind.ENUMERATED:
        parts = token.split(rule.separator) if rule.separator else [token]
        values = [_decode(part) for part in parts]
        if rule.multi_valued:
            return values
        return rule.join_with.join(values)

    return ABSENT


def _single(kind: FieldKind, target: str = "", **options) -> ColumnRule:
    return ColumnRule(rules=(FieldRule(kind=kind, target=target, **options),))


def _slash(kind: FieldKind, first: str, second: str) -> ColumnRule:
    return ColumnRule(
        rules=(FieldRule(kind=kind, target=first), FieldRule(kind=kind, target=second)),
        layout=ColumnLayout.SLASH,
    )


def _prediction(prefix: str) -> ColumnRule:
    return ColumnRule(
        rules=(
            FieldRule(kind=FieldKind.STRING, target=f"{prefix}_impact"),
            FieldRule(kind=FieldKind.FLOAT, target=f"{prefix}_score"),
        ),
        layout=ColumnLayout.PREDICTION,
    )


def _frequencies(
    source: str, column_prefix: str, populations: list[str]
) -> dict[str, ColumnRule]:
    """Rules for ``<prefix>AF`` and ``<prefix><POP>_AF`` style columns."""
    columns = {f"{column_prefix}af": "af"}
    for pop in populations:
        columns[f"{column_prefix}{pop}_af"] = f"{pop}_af"
    return {
        column: _single(FieldKind.FREQUENCY, target, frequency_group=source)
        for column, target in columns.items()
    }


THOUSAND_GENOMES_POPULATIONS = ["afr", "amr", "eas", "eur", "sas"]

GNOMAD_EXOME_POPULATIONS = [
    "afr", "amr", "asj", "eas", "fin", "mid", "nfe", "oth", "remaining", "sas",
]

GNOMAD_GENOME_POPULATIONS = [
    "afr", "ami", "amr", "asj", "eas", "fin", "mid", "nfe", "oth", "remaining", "sas",
]

# Columns VEP emits that have no place in an Annotation record.
SKIPPED_COLUMNS = [
    "allele",
    "gene",
    "feature",
    "distance",
    "flags",
    "variant_class",
    "symbol_source",
    "hgnc_id",
    "tsl",
    "appris",
    "ensp",
    "uniprot_isoform",
    "source",
    "domains",
    "mirna",
    "hgvs_offset",
    "max_af",
    "max_af_pops",
    "somatic",
    "pheno",
]

COERCION_TABLE: dict[str, ColumnRule] = {
    "consequence": _single(
        FieldKind.ENUMERATED, "consequence", separator="&", multi_valued=True
    ),
    "impact": _single(FieldKind.ENUMERATED, "vep_impact", separator="&"),
    "symbol": _single(FieldKind.STRING, "gene_symbol"),
    "feature_type": _single(FieldKind.STRING, "feature_type"),
    "biotype": _single(FieldKind.ENUMERATED, "biotype", separator="&"),
    "exon": _slash(FieldKind.INTEGER, "exon_rank", "exon_total"),
    "intron": _slash(FieldKind.INTEGER, "intron_rank", "intron_total"),
    "hgvsc": _single(FieldKind.STRING, "hgvsc"),
    "hgvsp": _single(FieldKind.STRING, "hgvsp"),
    "cdna_position": _slash(FieldKind.INTEGER, "cdna_position", "cdna_length"),
    "cds_position": _slash(FieldKind.INTEGER, "cds_position", "cds_length"),
    "protein_position": _slash(FieldKind.INTEGER, "protein_position", "protein_length"),
    "amino_acids": _slash(FieldKind.STRING, "amino_acids_reference", "amino_acids_variant"),
    "codons": _slash(FieldKind.STRING, "codons_reference", "codons_variant"),
    "existing_variation": ColumnRule(
        rules=(
            FieldRule(FieldKind.STRING_LIST, "dbsnp", separator="&", prefixes=("rs",)),
            FieldRule(FieldKind.STRING_LIST, "cosmic", separator="&", prefixes=("COS",)),
        ),
        layout=ColumnLayout.PREFIX,
    ),
    "strand": _single(FieldKind.STRING, "feature_strand"),
    "canonical": _single(FieldKind.FLAG, "canonical"),
    "mane_select": _single(FieldKind.STRING, "mane_select"),
    "mane": _single(FieldKind.STRING, "mane_select"),
    "mane_plus_clinical": _single(FieldKind.STRING, "mane_plus_clinical"),
    "ccds": _single(FieldKind.STRING, "ccds"),
    "swissprot": _single(FieldKind.STRING, "uniprotkb_swissprot"),
    "trembl": _single(FieldKind.STRING, "uniprotkb_trembl"),
    "uniparc": _single(FieldKind.STRING, "uniparc"),
    "gene_pheno": _single(FieldKind.INTEGER, "gene_pheno"),
    "sift": _prediction("sift"),
    "polyphen": _prediction("polyphen"),
    "clin_sig": _single(FieldKind.ENUMERATED, "clin_sig", separator="&"),
    "pubmed": _single(FieldKind.STRING_LIST, "pubmed", separator="&"),
    "motif_name": _single(FieldKind.STRING, "motif_name"),
    "motif_pos": _single(FieldKind.INTEGER, "motif_pos"),
    "high_inf_pos": _single(FieldKind.STRING, "high_inf_pos"),
    "motif_score_change": _single(FieldKind.FLOAT, "motif_score_change"),
    "transcription_factors": _single(
        FieldKind.STRING_LIST, "transcription_factors", separator="&"
    ),
    **_frequencies("1000_genomes", "", THOUSAND_GENOMES_POPULATIONS),
    "aa_af": _single(FieldKind.FREQUENCY, "aa_af", frequency_group="esp"),
    "ea_af": _single(FieldKind.FREQUENCY, "ea_af", frequency_group="esp"),
    **_frequencies("gnomad_exomes", "gnomad_", GNOMAD_EXOME_POPULATIONS),
    **_frequencies("gnomad_exomes", "gnomade_", GNOMAD_EXOME_POPULATIONS),
    **_frequencies("gnomad_genomes", "gnomadg_", GNOMAD_GENOME_POPULATIONS),
    **{column: _single(FieldKind.SKIP) for column in SKIPPED_COLUMNS},
}


def canonical_name(column: str) -> str:
    """Normalize a header column name for table lookup."""
    return column.strip().lower()


def lookup(column: str) -> ColumnRule | None:
    return COERCION_TABLE.get(canonical_name(column))
