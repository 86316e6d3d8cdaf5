"""Tests for views, search helps and lock objects."""

import pytest

from ddic_svc.conceptual.types import TableDefinition
from ddic_svc.errors import InvalidArgumentError
from ddic_svc.external.types import LockMode, LockObject, SearchHelp, ViewDefinition, ViewType


class TestViewDefinition:

    def test_base_tables_and_fields_keep_order(self, customer_table):
        other = TableDefinition("ZORDERS")
        view = ViewDefinition("ZCUST_V", ViewType.DATABASE, description="Join")
        view.add_base_table(customer_table)
        view.add_base_table(other)
        view.add_selected_field("NAME")
        view.add_selected_field("MANDT")

        assert [t.table_name for t in view.base_tables] == ["ZCUSTOMER", "ZORDERS"]
        assert view.selected_fields == ("NAME", "MANDT")
        assert view.view_type is ViewType.DATABASE

    def test_view_type_by_name(self):
        assert ViewDefinition("ZV", "projection").view_type is ViewType.PROJECTION

    def test_missing_view_type_rejected(self):
        with pytest.raises(InvalidArgumentError):
            ViewDefinition("ZV", None)

    def test_none_base_table_rejected(self):
        with pytest.raises(InvalidArgumentError, match="Base table must not be null"):
            ViewDefinition("ZV", ViewType.DATABASE).add_base_table(None)

    def test_blank_selected_field_rejected(self):
        with pytest.raises(InvalidArgumentError):
            ViewDefinition("ZV", ViewType.DATABASE).add_selected_field(" ")

    def test_blank_name_rejected(self):
        with pytest.raises(InvalidArgumentError, match="View name must not be blank"):
            ViewDefinition("", ViewType.DATABASE)


class TestSearchHelp:

    def test_fields(self, customer_table):
        search_help = SearchHelp("ZSH_CUST", customer_table)
        search_help.add_display_field("NAME")
        search_help.add_display_field("CITY")
        search_help.add_export_field("MANDT")

        assert search_help.selection_method is customer_table
        assert search_help.display_fields == ("NAME", "CITY")
        assert search_help.export_fields == ("MANDT",)

    def test_selection_method_optional(self):
        assert SearchHelp("ZSH_FREE").selection_method is None

    def test_blank_display_field_rejected(self):
        with pytest.raises(InvalidArgumentError):
            SearchHelp("ZSH").add_display_field("")

    def test_blank_export_field_rejected(self):
        with pytest.raises(InvalidArgumentError):
            SearchHelp("ZSH").add_export_field(None)


class TestLockObject:

    def test_defaults_to_exclusive(self, customer_table):
        lock = LockObject("EZCUSTOMER", customer_table)

        assert lock.lock_mode is LockMode.EXCLUSIVE
        assert lock.primary_table is customer_table
        assert lock.secondary_tables == ()

    def test_references_primary_and_secondary_tables(self, customer_table):
        lock = LockObject("EZCUSTOMER", customer_table, LockMode.SHARED)
        lock.add_secondary_table(TableDefinition("ZADDR"))

        assert lock.references_table("ZCUSTOMER") is True
        assert lock.references_table("ZADDR") is True
        assert lock.references_table("ZOTHER") is False

    def test_missing_primary_table_rejected(self):
        with pytest.raises(InvalidArgumentError, match="Primary table must not be null"):
            LockObject("EZ", None)

    def test_unknown_lock_mode_rejected(self, customer_table):
        with pytest.raises(InvalidArgumentError, match="Unknown lock mode"):
            LockObject("EZ", customer_table, "OPTIMISTIC")

    def test_lock_mode_assignment_is_checked(self, customer_table):
        lock = LockObject("EZ", customer_table)
        lock.lock_mode = "shared"

        assert lock.lock_mode is LockMode.SHARED
        with pytest.raises(InvalidArgumentError, match="Unknown lock mode"):
            lock.lock_mode = "OPTIMISTIC"
        assert lock.lock_mode is LockMode.SHARED
