"""Tests for fields, tables and structures."""

import pytest

from ddic_svc.conceptual.types import DeliveryClass, FieldDefinition, Structure, TableDefinition
from ddic_svc.errors import InvalidArgumentError
from ddic_svc.internal.types import DataElement


@pytest.fixture
def name_element(char40) -> DataElement:
    return DataElement("ZNAME40", char40)


class TestFieldDefinition:

    def test_defaults(self, name_element):
        field = FieldDefinition("NAME", name_element)

        assert field.key_field is False
        assert field.nullable is False

    def test_blank_name_rejected(self, name_element):
        with pytest.raises(InvalidArgumentError, match="Field name must not be blank"):
            FieldDefinition("", name_element)

    def test_missing_data_element_rejected(self):
        with pytest.raises(InvalidArgumentError, match="Data element must not be null"):
            FieldDefinition("NAME", None)


class TestTableDefinition:
    """Table field handling and metadata."""

    def test_defaults(self):
        table = TableDefinition("ZEMPTY")

        assert table.table_name == "ZEMPTY"
        assert table.name == "ZEMPTY"
        assert table.delivery_class is DeliveryClass.A
        assert table.buffered is False
        assert table.fields == ()

    def test_delivery_class_by_name(self):
        assert TableDefinition("ZCUST", delivery_class="c").delivery_class is DeliveryClass.C

    def test_unknown_delivery_class_rejected(self):
        with pytest.raises(InvalidArgumentError, match="Unknown delivery class"):
            TableDefinition("ZCUST", delivery_class="Q")

    def test_delivery_class_assignment_is_checked(self):
        table = TableDefinition("ZCUST")
        table.delivery_class = "s"

        assert table.delivery_class is DeliveryClass.S
        with pytest.raises(InvalidArgumentError, match="Unknown delivery class"):
            table.delivery_class = "Z"
        assert table.delivery_class is DeliveryClass.S

    def test_blank_name_rejected(self):
        with pytest.raises(InvalidArgumentError, match="Table name must not be blank"):
            TableDefinition("  ")

    def test_fields_keep_declaration_order(self, customer_table):
        assert customer_table.field_names == ("MANDT", "NAME", "CITY")

    def test_key_fields(self, customer_table):
        assert [f.field_name for f in customer_table.key_fields] == ["MANDT"]

    def test_composite_key_order(self, name_element):
        table = TableDefinition("ZORDER")
        table.add_field(FieldDefinition("B", name_element, key_field=True))
        table.add_field(FieldDefinition("X", name_element))
        table.add_field(FieldDefinition("A", name_element, key_field=True))

        assert [f.field_name for f in table.key_fields] == ["B", "A"]

    def test_duplicate_field_rejected(self, customer_table, name_element):
        with pytest.raises(InvalidArgumentError, match="Duplicate field: NAME"):
            customer_table.add_field(FieldDefinition("NAME", name_element))

        assert len(customer_table.fields) == 3

    def test_none_field_rejected(self, customer_table):
        with pytest.raises(InvalidArgumentError):
            customer_table.add_field(None)

    def test_get_field(self, customer_table):
        assert customer_table.get_field("CITY").nullable is True
        assert customer_table.get_field("MISSING") is None
        assert customer_table.has_field("MANDT") is True

    def test_fields_tuple_is_a_copy(self, customer_table):
        fields = customer_table.fields
        assert isinstance(fields, tuple)
        assert len(fields) == 3


class TestStructure:

    def test_fields(self, name_element):
        structure = Structure("ZADDRESS_S", description="Address block")
        structure.add_field(FieldDefinition("STREET", name_element))
        structure.add_field(FieldDefinition("CITY", name_element, nullable=True))

        assert structure.name == "ZADDRESS_S"
        assert structure.field_names == ("STREET", "CITY")

    def test_duplicate_field_rejected(self, name_element):
        structure = Structure("ZADDRESS_S")
        structure.add_field(FieldDefinition("CITY", name_element))

        with pytest.raises(InvalidArgumentError):
            structure.add_field(FieldDefinition("CITY", name_element))

    def test_blank_name_rejected(self):
        with pytest.raises(InvalidArgumentError, match="Structure name must not be blank"):
            Structure("")
