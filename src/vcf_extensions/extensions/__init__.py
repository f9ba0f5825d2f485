"""Pluggable annotation decoders.

Every extension is a callable ``(variant, header) -> ExtensionResult``.
``extend_variant`` tries them in registration order and keeps the first
success.
"""

import logging
from collections.abc import Callable, Sequence
from typing import Any

from ..models import DecodeIssue, ExtensionFailure, ExtensionResult
from ..vcf_parser import VCFHeader
from .ensembl_vep import EnsemblVepExtension

logger = logging.getLogger(__name__)

Extension = Callable[[Any, VCFHeader], ExtensionResult]

EXTENSIONS: dict[str, Callable[..., Extension]] = {
    "ensembl_vep": EnsemblVepExtension,
}


def get_extension(name: str, **options: Any) -> Extension:
    """Instantiate a registered extension by name.

    Raises:
        KeyError: If no extension is registered under ``name``
    """
    if name not in EXTENSIONS:
        raise KeyError(f"Unknown extension '{name}'. Available: {', '.join(EXTENSIONS)}")
    return EXTENSIONS[name](**options)


def extend_variant(
    variant: Any,
    header: VCFHeader,
    extensions: Sequence[Extension] | None = None,
) -> ExtensionResult:
    """Decode ``variant`` with the first extension that succeeds.

    Returns the last failure when no extension succeeds.
    """
    if extensions is None:
        extensions = [factory() for factory in EXTENSIONS.values()]

    result: ExtensionResult = ExtensionFailure(
        "none", DecodeIssue.ANNOTATION_ABSENT, "No extensions configured"
    )
    for extension in extensions:
        result = extension(variant, header)
        if result.success:
            return result
        if result.reason is not DecodeIssue.ANNOTATION_ABSENT:
            logger.info("%s could not decode variant: %s", result.extension, result.message)

    return result


__all__ = [
    "EXTENSIONS",
    "EnsemblVepExtension",
    "Extension",
    "extend_variant",
    "get_extension",
]
