"""vcf-extensions: typed decoding of VCF annotation INFO fields."""

__version__ = "0.1.0"

from .extensions import EXTENSIONS, extend_variant, get_extension  # noqa: E402
from .models import (  # noqa: E402
    ABSENT,
    Annotation,
    DecodeIssue,
    ExtensionData,
    ExtensionFailure,
    ExtensionResult,
    ExtensionSuccess,
    Frequency,
)
from .vcf_parser import VCFHeader  # noqa: E402

__all__ = [
    "ABSENT",
    "EXTENSIONS",
    "Annotation",
    "DecodeIssue",
    "ExtensionData",
    "ExtensionFailure",
    "ExtensionResult",
    "ExtensionSuccess",
    "Frequency",
    "VCFHeader",
    "__version__",
    "extend_variant",
    "get_extension",
]
