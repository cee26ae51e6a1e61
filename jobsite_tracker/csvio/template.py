from __future__ import annotations

from .parser import REQUIRED_COLUMNS

"""Sample CSV shown to users as the expected import shape."""

__all__ = [
    "TEMPLATE_HEADERS",
    "TEMPLATE_SAMPLE_ROW",
    "generate_csv_template",
    "quote_field",
]

TEMPLATE_HEADERS: tuple[str, ...] = (
    *REQUIRED_COLUMNS[:5],
    "stage1",
    "stage2",
    "stage3",
    "stage4",
    "stage5",
    "dueDate",
    "notes",
)

TEMPLATE_SAMPLE_ROW: tuple[str, ...] = (
    "Downtown Office Complex",
    "Commercial",
    "123 Main St, Downtown",
    "Sarah Johnson",
    "BuildRight Construction",
    "true",
    "true",
    "false",
    "false",
    "false",
    "2024-12-31",
    "Sample project notes",
)


def quote_field(value: str) -> str:
    """Quote a field when it contains a comma or a double quote."""
    if "," in value or '"' in value:
        return '"' + value.replace('"', '""') + '"'
    return value


def generate_csv_template() -> str:
    """Header line + one example row, joined with ``\\n``."""
    header = ",".join(TEMPLATE_HEADERS)
    sample = ",".join(quote_field(v) for v in TEMPLATE_SAMPLE_ROW)
    return f"{header}\n{sample}"
