"""Build typed Annotation and Frequency records from raw CSQ rows."""

from dataclasses import dataclass, field

from ...models import ABSENT, Annotation, Frequency
from .fields import COERCION_TABLE, ColumnRule, coerce
from .schema import Schema


@dataclass
class BuiltRecord:
    annotation: Annotation = field(default_factory=dict)
    frequency: Frequency = field(default_factory=dict)


def build_record(
    row: list[str],
    schema: Schema,
    table: dict[str, ColumnRule] = COERCION_TABLE,
) -> BuiltRecord:
    """Coerce one row of tokens into an annotation and its frequencies.

    Columns missing from the table are ignored, so headers may declare
    plugin columns this decoder does not model.
    """
    record = BuiltRecord()

    for name, index in schema.columns.items():
        column = table.get(name)
        if column is None:
            continue

        token = row[index] if index < len(row) else ""

        for rule, part in column.split(token):
            value = coerce(part, rule)
            if value is ABSENT:
                continue
            if rule.frequency_group:
                record.frequency.setdefault(rule.frequency_group, {})[rule.target] = value
            else:
                record.annotation[rule.target] = value

    return record
