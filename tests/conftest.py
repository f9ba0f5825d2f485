"""Pytest configuration and fixtures for vcf-extensions tests."""

import sys
from pathlib import Path

import pytest

sys.path.insert(0, str(Path(__file__).parent))

from fixtures.vcf_generator import (  # noqa: E402
    make_vcf_without_csq_header_file,
    make_vep_csq_vcf_file,
)
from fixtures.variants import make_variant  # noqa: E402
from fixtures.vep_data import ANNOTATED_CSQ, VEP_CSQ_HEADER_LINE  # noqa: E402

from vcf_extensions.vcf_parser import VCFHeader  # noqa: E402


@pytest.fixture
def vep_header() -> VCFHeader:
    """Header declaring the full VEP CSQ layout."""
    return VCFHeader(
        [
            "##fileformat=VCFv4.3",
            '##INFO=<ID=DP,Number=1,Type=Integer,Description="Total Depth">',
            VEP_CSQ_HEADER_LINE,
            "#CHROM\tPOS\tID\tREF\tALT\tQUAL\tFILTER\tINFO",
        ]
    )


@pytest.fixture
def annotated_variant():
    """Variant carrying two CSQ instances."""
    return make_variant(DP=42, CSQ=ANNOTATED_CSQ)


@pytest.fixture
def unannotated_variant():
    return make_variant(DP=17)


@pytest.fixture
def vep_csq_vcf_file():
    """Generate a VCF file with VEP CSQ annotations."""
    path = make_vep_csq_vcf_file()
    yield path
    if path.exists():
        path.unlink()


@pytest.fixture
def no_csq_vcf_file():
    """Generate a VCF file whose header lacks CSQ."""
    path = make_vcf_without_csq_header_file()
    yield path
    if path.exists():
        path.unlink()
