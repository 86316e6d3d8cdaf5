"""Tests for where-used analysis."""

from ddic_svc.conceptual.types import FieldDefinition, Structure, TableDefinition
from ddic_svc.external.types import LockObject, ViewDefinition, ViewType
from ddic_svc.internal.types import DataElement
from ddic_svc.registry.where_used import WhereUsedAnalyzer


class TestDataElementsUsingDomain:

    def test_finds_elements(self, customer_dictionary):
        analyzer = WhereUsedAnalyzer(customer_dictionary)

        assert analyzer.data_elements_using_domain("ZCHAR10") == ["ZNAME"]

    def test_unknown_domain(self, customer_dictionary):
        assert WhereUsedAnalyzer(customer_dictionary).data_elements_using_domain("NOPE") == []


class TestUsagesOfDataElement:

    def test_table_listed_once_for_several_fields(self, customer_dictionary):
        """ZCUSTOMER uses ZNAME for both ID and NAME."""
        usages = WhereUsedAnalyzer(customer_dictionary).usages_of_data_element("ZNAME")

        assert usages == {"tables": ["ZCUSTOMER"]}

    def test_structures_included(self, customer_dictionary):
        structure = Structure("ZNAME_S")
        structure.add_field(FieldDefinition("NAME", customer_dictionary.get_data_element("ZNAME")))
        customer_dictionary.register_structure(structure)

        usages = WhereUsedAnalyzer(customer_dictionary).usages_of_data_element("ZNAME")

        assert usages == {"tables": ["ZCUSTOMER"], "structures": ["ZNAME_S"]}

    def test_unused_element_gives_empty_result(self, customer_dictionary, char10):
        customer_dictionary.register_data_element(DataElement("ZUNUSED", char10))

        assert WhereUsedAnalyzer(customer_dictionary).usages_of_data_element("ZUNUSED") == {}


class TestUsagesOfTable:

    def test_views_search_helps_and_lock_objects(self, customer_dictionary):
        usages = WhereUsedAnalyzer(customer_dictionary).usages_of_table("ZCUSTOMER")

        assert usages == {
            "views": ["ZCUST_V"],
            "searchHelps": ["ZSH_CUST"],
            "lockObjects": ["EZCUSTOMER"],
        }

    def test_view_matches_on_any_base_table(self, customer_dictionary):
        orders = TableDefinition("ZORDERS")
        customer_dictionary.register_table(orders)
        view = ViewDefinition("ZJOIN", ViewType.DATABASE)
        view.add_base_table(customer_dictionary.get_table("ZCUSTOMER"))
        view.add_base_table(orders)
        customer_dictionary.register_view(view)

        usages = WhereUsedAnalyzer(customer_dictionary).usages_of_table("ZORDERS")

        assert usages == {"views": ["ZJOIN"]}

    def test_lock_object_matches_secondary_table(self, customer_dictionary):
        items = TableDefinition("ZITEMS")
        customer_dictionary.register_table(items)
        lock = LockObject("EZORDER", TableDefinition("ZORDERS"))
        lock.add_secondary_table(items)
        customer_dictionary.register_lock_object(lock)

        usages = WhereUsedAnalyzer(customer_dictionary).usages_of_table("ZITEMS")

        assert usages == {"lockObjects": ["EZORDER"]}

    def test_unknown_table(self, customer_dictionary):
        assert WhereUsedAnalyzer(customer_dictionary).usages_of_table("NOPE") == {}


class TestAllUsagesOfDomain:

    def test_stops_at_table_level(self, customer_dictionary):
        """Views and search helps on the table are not followed."""
        usages = WhereUsedAnalyzer(customer_dictionary).all_usages_of_domain("ZCHAR10")

        assert usages == {"dataElements": ["ZNAME"], "tables": ["ZCUSTOMER"]}
        flattened = [name for names in usages.values() for name in names]
        assert "ZCUST_V" not in flattened
        assert "ZSH_CUST" not in flattened

    def test_tables_deduplicated_across_elements(self, patient_dictionary):
        """DE_FIRST_NAME and DE_LAST_NAME share ZNAME_40 and table ZPATIENT."""
        usages = WhereUsedAnalyzer(patient_dictionary).all_usages_of_domain("ZNAME_40")

        assert usages == {
            "dataElements": ["DE_FIRST_NAME", "DE_LAST_NAME"],
            "tables": ["ZPATIENT"],
        }

    def test_domain_without_elements(self, customer_dictionary):
        assert WhereUsedAnalyzer(customer_dictionary).all_usages_of_domain("NOPE") == {}

    def test_domain_with_unused_elements(self, customer_dictionary, char40):
        customer_dictionary.register_domain(char40)
        customer_dictionary.register_data_element(DataElement("ZLONG", char40))

        usages = WhereUsedAnalyzer(customer_dictionary).all_usages_of_domain("ZCHAR40")

        assert usages == {"dataElements": ["ZLONG"]}
