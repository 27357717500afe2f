# tests/test_schema_models.py
"""Tests for property kinds, structure models and type-name tables."""

import pytest
from pydantic import TypeAdapter, ValidationError


class TestPropertyKinds:

    def test_discriminated_union(self):
        from noesisgen.schema.models import CollectionKind, PropertyKind
        adapter = TypeAdapter(PropertyKind)
        kind = adapter.validate_python({"kind": "Collection", "sub_type": "Card"})
        assert isinstance(kind, CollectionKind)
        assert kind.sub_type == "Card"

    def test_unknown_kind_rejected(self):
        from noesisgen.schema.models import PropertyKind
        with pytest.raises(ValidationError):
            TypeAdapter(PropertyKind).validate_python({"kind": "Vector"})

    def test_kinds_are_frozen(self):
        from noesisgen.schema.models import ObjectKind
        kind = ObjectKind(sub_type="Stats")
        with pytest.raises(ValidationError):
            kind.sub_type = "Other"

    def test_property_kinds_lists_every_member(self):
        from noesisgen.schema.models import PROPERTY_KINDS
        assert {k.__name__ for k in PROPERTY_KINDS} == {
            "BooleanKind", "CommandKind", "BrushKind", "FontKind", "StringKind",
            "NumberKind", "ObjectKind", "ImageKind", "EnumKind", "CollectionKind",
        }


class TestRequireAllKinds:

    def test_complete_table_passes(self):
        from noesisgen.schema.models import PROPERTY_KINDS, require_all_kinds
        require_all_kinds({k: str for k in PROPERTY_KINDS}, "table")

    def test_missing_kind_raises(self):
        from noesisgen.schema.models import PROPERTY_KINDS, CommandKind, require_all_kinds
        handlers = {k: str for k in PROPERTY_KINDS if k is not CommandKind}
        with pytest.raises(TypeError, match="table does not handle property kinds: CommandKind"):
            require_all_kinds(handlers, "table")


class TestStructureModels:

    def test_class_keeps_property_order(self):
        from noesisgen.schema.models import ClassDef, NumberKind, StringKind
        card = ClassDef(name="Card", properties={"b": StringKind(), "a": NumberKind()})
        assert list(card.properties) == ["b", "a"]
        assert card.kind == "Class"

    def test_class_properties_validated_from_dicts(self):
        from noesisgen.schema.models import ClassDef, EnumKind
        card = ClassDef(name="Card", properties={"r": {"kind": "Enum", "sub_type": "Rarity"}})
        assert card.properties["r"] == EnumKind(sub_type="Rarity")

    def test_class_properties_read_only(self):
        from noesisgen.schema.models import ClassDef, NumberKind, StringKind
        source = {"Title": StringKind()}
        card = ClassDef(name="Card", properties=source)
        with pytest.raises(TypeError):
            card.properties["Power"] = NumberKind()
        source["Power"] = NumberKind()
        assert list(card.properties) == ["Title"]

    def test_enum_items_read_only(self):
        from noesisgen.schema.models import EnumDef
        rarity = EnumDef(name="Rarity", items={"Common": 0})
        with pytest.raises(TypeError):
            rarity.items["Mythic"] = 9
        assert rarity.items == {"Common": 0}


class TestTypeNameTables:

    def test_final_segment(self):
        from noesisgen.schema.models import final_segment
        assert final_segment("Game.Ui.Stats") == "Stats"
        assert final_segment("Stats") == "Stats"

    def test_data_tag_for(self):
        from noesisgen.schema.models import data_tag_for
        assert data_tag_for("Brush") == "SolidColorBrush"
        assert data_tag_for("ImageSource") == "BitmapImage"
        assert data_tag_for("Bool") == "Boolean"
        assert data_tag_for("BaseCommand") == "MessageCommand"
        assert data_tag_for("Card") == "Card"

    def test_ts_type_for(self):
        from noesisgen.schema.models import ts_type_for
        assert ts_type_for("Single") == "number"
        assert ts_type_for("Color") == "string"
        assert ts_type_for("SolidColorBrush") == "string | Brush"
        assert ts_type_for("BaseCommand") == "(parameter?: unknown) => unknown"
        assert ts_type_for("Card") == "Card"
