"""
Tests for boundary validation of task fields and listing filters.
"""

from datetime import date

import pytest

from database.models import Priority, TaskStatus
from utils.errors import ValidationError
from utils.validators import (
    coerce_enum,
    parse_due_date,
    validate_filter,
    validate_task_fields,
)


class TestCoerceEnum:
    def test_matches_wire_value(self):
        assert coerce_enum(TaskStatus, "In Progress", "status") is TaskStatus.IN_PROGRESS

    def test_is_case_sensitive(self):
        with pytest.raises(ValidationError, match="expected one of: Low, Medium, High"):
            coerce_enum(Priority, "high", "priority")


class TestParseDueDate:
    @pytest.mark.parametrize("value", [None, ""])
    def test_blank_is_none(self, value):
        assert parse_due_date(value) is None

    def test_iso_date(self):
        assert parse_due_date("2026-10-19") == date(2026, 10, 19)

    def test_iso_datetime_is_truncated(self):
        assert parse_due_date("2026-10-19T00:00:00.000Z") == date(2026, 10, 19)

    @pytest.mark.parametrize("value", ["19/10/2026", 20261019, "2026-13-01", "2026-10-19garbage"])
    def test_rejects_other_shapes(self, value):
        with pytest.raises(ValidationError):
            parse_due_date(value)


class TestValidateTaskFields:
    def test_create_keeps_only_supplied_fields(self):
        cleaned = validate_task_fields({"title": " Buy milk "}, creating=True)
        assert cleaned == {"title": "Buy milk"}

    def test_update_without_title_is_fine(self):
        cleaned = validate_task_fields({"status": "Completed"}, creating=False)
        assert cleaned == {"status": TaskStatus.COMPLETED}

    def test_null_priority_rejected(self):
        with pytest.raises(ValidationError):
            validate_task_fields({"priority": None}, creating=False)

    def test_non_text_description_rejected(self):
        with pytest.raises(ValidationError):
            validate_task_fields({"title": "t", "description": 5}, creating=True)


class TestValidateFilter:
    def test_no_values_no_constraints(self):
        assert validate_filter(None, "") == {}

    def test_both_values(self):
        assert validate_filter("Completed", "Low") == {
            "status": TaskStatus.COMPLETED,
            "priority": Priority.LOW,
        }

    def test_unknown_value_rejected(self):
        with pytest.raises(ValidationError, match="Urgent"):
            validate_filter(None, "Urgent")
