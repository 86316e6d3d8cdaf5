"""Tests for the consistency validator."""

import pytest

from ddic_svc.conceptual.types import FieldDefinition, Structure, TableDefinition
from ddic_svc.errors import InvalidArgumentError
from ddic_svc.external.types import SearchHelp, ViewDefinition, ViewType
from ddic_svc.internal.types import DataElement, DataType, Domain
from ddic_svc.registry.validator import ConsistencyValidator, Severity, ValidationResult, validate


class TestValidationResult:

    def test_empty_result(self):
        result = ValidationResult()

        assert result.is_valid() is True
        assert result.has_errors() is False
        assert result.has_warnings() is False
        assert result.summary() == "no findings"

    def test_warning_only_is_not_valid(self):
        result = ValidationResult()
        result.add_warning("careful")

        assert result.is_valid() is False
        assert result.has_errors() is False
        assert result.has_warnings() is True

    def test_findings_keep_order(self):
        result = ValidationResult()
        result.add_error("e1")
        result.add_warning("w1")
        result.add_error("e2")

        assert [f.message for f in result.findings] == ["e1", "w1", "e2"]
        assert [f.message for f in result.errors] == ["e1", "e2"]
        assert result.summary() == "2 errors, 1 warnings"

    def test_to_dict(self):
        result = ValidationResult()
        result.add_error("broken")

        data = result.to_dict()

        assert data["valid"] is False
        assert data["errors"] == ["broken"]
        assert data["warnings"] == []
        assert data["findings"] == [{"severity": "ERROR", "message": "broken"}]


class TestValidatorBasics:

    def test_empty_dictionary_has_no_findings(self, dictionary):
        result = validate(dictionary)

        assert result.findings == ()
        assert result.is_valid() is True

    def test_table_without_fields_is_one_warning(self, dictionary):
        dictionary.register_table(TableDefinition("ZEMPTY"))

        result = validate(dictionary)

        assert len(result.findings) == 1
        assert result.findings[0].severity is Severity.WARNING
        assert "no fields" in result.findings[0].message
        assert result.has_errors() is False

    def test_consistent_dictionaries_have_no_findings(self, customer_dictionary, patient_dictionary):
        assert validate(customer_dictionary).is_valid() is True
        assert validate(patient_dictionary).is_valid() is True

    def test_missing_dictionary_rejected(self):
        with pytest.raises(InvalidArgumentError):
            ConsistencyValidator(None)


class TestDomainReferences:

    def test_unregistered_domain(self, dictionary, char10):
        dictionary.register_data_element(DataElement("ZNAME", char10))

        result = validate(dictionary)

        assert [f.message for f in result.errors] == [
            "DataElement 'ZNAME' references Domain 'ZCHAR10' which is not registered in the dictionary"
        ]

    def test_domain_identity_mismatch(self, dictionary, char10):
        """A different object under the same name is reported once per element."""
        impostor = Domain("ZCHAR10", DataType.CHAR, 10)
        dictionary.register_domain(impostor)
        dictionary.register_data_element(DataElement("ZNAME", char10))
        dictionary.register_data_element(DataElement("ZTITLE", char10))

        result = validate(dictionary)

        assert len(result.errors) == 2
        assert all("differs from the registered Domain" in f.message for f in result.errors)
        assert "DataElement 'ZNAME'" in result.errors[0].message

    def test_registered_domain_identity_ok(self, dictionary, char10):
        dictionary.register_domain(char10)
        dictionary.register_data_element(DataElement("ZNAME", char10))

        assert validate(dictionary).is_valid() is True


class TestFieldReferences:

    def test_table_field_with_unregistered_element(self, dictionary, char10):
        dictionary.register_domain(char10)
        table = TableDefinition("ZT")
        table.add_field(FieldDefinition("NAME", DataElement("ZNAME", char10)))
        dictionary.register_table(table)

        result = validate(dictionary)

        assert [f.message for f in result.errors] == [
            "Table 'ZT', field 'NAME' references DataElement 'ZNAME' which is not registered in the dictionary"
        ]

    def test_structure_field_with_different_element_instance(self, dictionary, char10):
        dictionary.register_domain(char10)
        dictionary.register_data_element(DataElement("ZNAME", char10))
        structure = Structure("ZS")
        structure.add_field(FieldDefinition("NAME", DataElement("ZNAME", char10)))
        dictionary.register_structure(structure)

        result = validate(dictionary)

        assert len(result.errors) == 1
        assert result.errors[0].message.startswith("Structure 'ZS', field 'NAME' references a DataElement instance")


class TestViews:

    def test_unregistered_base_table(self, customer_dictionary):
        stray = TableDefinition("ZSTRAY")
        view = ViewDefinition("ZV", ViewType.DATABASE)
        view.add_base_table(stray)
        customer_dictionary.register_view(view)

        result = validate(customer_dictionary)

        messages = [f.message for f in result.errors]
        assert "View 'ZV' references base table 'ZSTRAY' which is not registered in the dictionary" in messages

    def test_unknown_selected_field(self, customer_dictionary):
        view = ViewDefinition("ZV", ViewType.PROJECTION)
        view.add_base_table(customer_dictionary.get_table("ZCUSTOMER"))
        view.add_selected_field("NAME")
        view.add_selected_field("GHOST")
        customer_dictionary.register_view(view)

        result = validate(customer_dictionary)

        assert [f.message for f in result.errors] == [
            "View 'ZV' selects field 'GHOST' which does not exist in any of its base tables"
        ]

    def test_selected_field_from_any_base_table(self, customer_dictionary, char10):
        element = customer_dictionary.get_data_element("ZNAME")
        orders = TableDefinition("ZORDERS")
        orders.add_field(FieldDefinition("ORDER_NO", element, key_field=True))
        customer_dictionary.register_table(orders)

        view = ViewDefinition("ZJOIN", ViewType.DATABASE)
        view.add_base_table(customer_dictionary.get_table("ZCUSTOMER"))
        view.add_base_table(orders)
        view.add_selected_field("NAME")
        view.add_selected_field("ORDER_NO")
        customer_dictionary.register_view(view)

        assert validate(customer_dictionary).is_valid() is True

    def test_view_without_base_tables_warns(self, dictionary):
        dictionary.register_view(ViewDefinition("ZV", ViewType.DATABASE))

        result = validate(dictionary)

        assert [f.message for f in result.warnings] == ["View 'ZV' has no base tables defined"]
        assert result.has_errors() is False

    def test_view_without_selected_fields_warns(self, customer_dictionary):
        view = ViewDefinition("ZALL", ViewType.DATABASE)
        view.add_base_table(customer_dictionary.get_table("ZCUSTOMER"))
        customer_dictionary.register_view(view)

        result = validate(customer_dictionary)

        assert [f.message for f in result.warnings] == ["View 'ZALL' has base tables but selects no fields"]


class TestSearchHelps:

    def test_unknown_display_and_export_fields(self, customer_dictionary):
        search_help = SearchHelp("ZSH2", customer_dictionary.get_table("ZCUSTOMER"))
        search_help.add_display_field("GHOST")
        search_help.add_export_field("PHANTOM")
        customer_dictionary.register_search_help(search_help)

        messages = [f.message for f in validate(customer_dictionary).errors]

        assert messages == [
            "SearchHelp 'ZSH2' display field 'GHOST' does not exist in selection-method table 'ZCUSTOMER'",
            "SearchHelp 'ZSH2' export field 'PHANTOM' does not exist in selection-method table 'ZCUSTOMER'",
        ]

    def test_unregistered_selection_table(self, dictionary):
        dictionary.register_search_help(SearchHelp("ZSH", TableDefinition("ZSTRAY")))

        messages = [f.message for f in validate(dictionary).errors]

        assert messages == [
            "SearchHelp 'ZSH' references selection-method table 'ZSTRAY' which is not registered in the dictionary"
        ]

    def test_no_selection_method_is_skipped(self, dictionary):
        search_help = SearchHelp("ZSH")
        search_help.add_display_field("ANY")
        dictionary.register_search_help(search_help)

        assert validate(dictionary).is_valid() is True


class TestCollectsEverything:

    def test_multiple_problems_reported_together(self, dictionary, char10):
        dictionary.register_data_element(DataElement("ZNAME", char10))
        dictionary.register_table(TableDefinition("ZEMPTY"))
        dictionary.register_view(ViewDefinition("ZV", ViewType.DATABASE))

        result = validate(dictionary)

        assert len(result.errors) == 1
        assert len(result.warnings) == 2
