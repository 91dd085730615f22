from .addressing import column_name, row_label, reference_of, parse_reference, column_labels, row_labels

__all__ = [
    "column_name",
    "row_label",
    "reference_of",
    "parse_reference",
    "column_labels",
    "row_labels"
]
