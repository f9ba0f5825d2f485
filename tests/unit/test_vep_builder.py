"""Unit tests for building annotation and frequency records."""

from fixtures.vep_data import (
    EXPECTED_FULL_ANNOTATION,
    EXPECTED_FULL_FREQUENCY,
    FULL_INSTANCE,
    VEP_CSQ_FIELDS,
    encode_instance,
)

from vcf_extensions.extensions.ensembl_vep.builder import build_record
from vcf_extensions.extensions.ensembl_vep.fields import (
    COERCION_TABLE,
    ColumnRule,
    FieldKind,
    FieldRule,
)
from vcf_extensions.extensions.ensembl_vep.schema import Schema

VEP_SCHEMA = Schema(info_key="CSQ", fields=tuple(VEP_CSQ_FIELDS))


class TestBuildRecord:
    """Test row to record conversion."""

    def test_full_row(self):
        row = encode_instance(FULL_INSTANCE).split("|")

        record = build_record(row, VEP_SCHEMA)

        assert record.annotation == EXPECTED_FULL_ANNOTATION
        assert record.frequency == EXPECTED_FULL_FREQUENCY

    def test_short_row_defaults_lists(self):
        """Missing trailing tokens behave like empty ones."""
        record = build_record(["C", "intron_variant", "MODIFIER"], VEP_SCHEMA)

        assert record.annotation == {
            "consequence": ["intron_variant"],
            "vep_impact": "MODIFIER",
            "dbsnp": [],
            "cosmic": [],
            "pubmed": [],
            "transcription_factors": [],
        }
        assert record.frequency == {}

    def test_numeric_sentinel_does_not_fail_row(self):
        values = dict(FULL_INSTANCE, MOTIF_POS="?", cDNA_position="?-361/1696")
        record = build_record(encode_instance(values).split("|"), VEP_SCHEMA)

        assert record.annotation["motif_pos"] == "?"
        assert record.annotation["cdna_position"] == "?-361"
        assert record.annotation["cdna_length"] == 1696
        assert record.annotation["gene_symbol"] == "gene_symbol"

    def test_frequency_source_only_when_populated(self):
        values = {"Allele": "C", "EA_AF": "0.01", "gnomAD_FIN_AF": ""}
        record = build_record(encode_instance(values).split("|"), VEP_SCHEMA)

        assert record.frequency == {"esp": {"ea_af": "0.01"}}

    def test_gnomad_genome_columns(self):
        schema = Schema(info_key="CSQ", fields=("Allele", "gnomADg_AF", "gnomADg_AMI_AF"))
        record = build_record(["T", "0.5", "0.25"], schema)

        assert record.frequency == {"gnomad_genomes": {"af": "0.5", "ami_af": "0.25"}}

    def test_unknown_columns_ignored(self):
        schema = Schema(info_key="CSQ", fields=("Allele", "LoF", "SYMBOL", "CADD_PHRED"))
        record = build_record(["T", "HC", "BRCA1", "32"], schema)

        assert record.annotation == {"gene_symbol": "BRCA1"}

    def test_custom_table(self):
        table = dict(COERCION_TABLE)
        table["cadd_phred"] = ColumnRule(rules=(FieldRule(FieldKind.FLOAT, "cadd_phred"),))
        schema = Schema(info_key="CSQ", fields=("Allele", "CADD_PHRED"))

        record = build_record(["T", "32.5"], schema, table)

        assert record.annotation == {"cadd_phred": 32.5}
