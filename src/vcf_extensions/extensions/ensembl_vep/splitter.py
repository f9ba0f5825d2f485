"""Split a CSQ payload into per-transcript rows of raw tokens."""

import logging
from collections.abc import Sequence
from dataclasses import dataclass, field

from .schema import Schema

logger = logging.getLogger(__name__)

INSTANCE_SEPARATOR = ","
FIELD_SEPARATOR = "|"


@dataclass
class SplitResult:
    rows: list[list[str]] = field(default_factory=list)
    overflowed: int = 0


def split_instances(payload: str | Sequence[str], schema: Schema) -> SplitResult:
    """Split ``payload`` into rows aligned to ``schema``.

    Blank instances left by stray commas are skipped. Rows shorter than
    the schema are kept as is. Rows longer than the schema are truncated,
    since the extra tokens cannot be attributed to any column.
    """
    if isinstance(payload, str):
        payload = payload.split(INSTANCE_SEPARATOR)
    instances = [instance for instance in payload if instance and instance.strip()]

    result = SplitResult()
    width = len(schema)

    for instance in instances:
        tokens = instance.split(FIELD_SEPARATOR)
        if len(tokens) > width:
            logger.warning(
                "%s instance has %d fields but header declares %d; extra fields dropped",
                schema.info_key,
                len(tokens),
                width,
            )
            tokens = tokens[:width]
            result.overflowed += 1
        result.rows.append(tokens)

    return result
