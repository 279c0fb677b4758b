"""Adapter for posted selection form values."""

from __future__ import annotations

from .schema import SelectedItemValues, SelectionFormValues
from .translator import InvalidSubmissionError, parse_submission, translate_form_values

__all__ = [
    "InvalidSubmissionError",
    "SelectedItemValues",
    "SelectionFormValues",
    "parse_submission",
    "translate_form_values",
]
