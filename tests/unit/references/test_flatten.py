"""Unit tests for flattening stored reference data."""

from src.references.flatten import flatten_stored_references, iter_reference_records
from src.references.keys import ReferenceKeyFormatter


class TestFlattenStoredReferences:
    """Tests for flatten_stored_references."""

    def test_absent_data_is_empty(self, formatter: ReferenceKeyFormatter) -> None:
        assert flatten_stored_references(None, formatter) == {}

    def test_empty_refs_is_empty(self, formatter: ReferenceKeyFormatter) -> None:
        assert flatten_stored_references({"refs": {}, "version": 1}, formatter) == {}

    def test_page_seven_scenario(
        self, formatter: ReferenceKeyFormatter, page_seven_references: dict
    ) -> None:
        flattened = flatten_stored_references(page_seven_references, formatter)

        assert list(flattened) == ["cite_note-1", "cite_note-note-2"]
        unnamed = flattened["cite_note-1"]
        named = flattened["cite_note-note-2"]
        assert unnamed["key"] == 1
        assert named["key"] == 2
        assert named["name"] == "note"
        for record in (unnamed, named):
            assert record["group"] == ""
            assert record["reflist"] == 0

    def test_stored_content_is_kept(
        self, formatter: ReferenceKeyFormatter, page_seven_references: dict
    ) -> None:
        flattened = flatten_stored_references(page_seven_references, formatter)

        assert flattened["cite_note-note-2"]["text"] == "A named note"
        assert flattened["cite_note-note-2"]["number"] == 2

    def test_stored_data_is_not_mutated(
        self, formatter: ReferenceKeyFormatter, page_seven_references: dict
    ) -> None:
        flatten_stored_references(page_seven_references, formatter)

        assert "group" not in page_seven_references["refs"]["0"][""]["note"]

    def test_lists_groups_and_order(
        self, formatter: ReferenceKeyFormatter, multi_list_references: dict
    ) -> None:
        flattened = flatten_stored_references(multi_list_references, formatter)

        assert list(flattened) == [
            "cite_note-1",
            "cite_note-2",
            "cite_note-smith-3",
            "cite_note-jones-4",
            "cite_note-5",
        ]
        assert flattened["cite_note-smith-3"]["group"] == "notes"
        assert flattened["cite_note-jones-4"]["reflist"] == 1
        assert flattened["cite_note-1"]["reflist"] == 0

    def test_positional_names_are_integers(
        self, formatter: ReferenceKeyFormatter, multi_list_references: dict
    ) -> None:
        flattened = flatten_stored_references(multi_list_references, formatter)

        assert flattened["cite_note-1"]["name"] == 0
        assert flattened["cite_note-2"]["name"] == 1
        assert flattened["cite_note-5"]["name"] == 5

    def test_ids_unique_within_page(
        self, formatter: ReferenceKeyFormatter, multi_list_references: dict
    ) -> None:
        records = list(iter_reference_records(multi_list_references, formatter))
        ids = [record.id for record in records]

        assert len(ids) == len(set(ids))

    def test_duplicate_id_keeps_later_record(self, formatter: ReferenceKeyFormatter) -> None:
        stored = {
            "refs": {
                "0": {"": {"a": {"key": 1, "text": "first"}}},
                "1": {"": {"a": {"key": 1, "text": "second"}}},
            }
        }

        flattened = flatten_stored_references(stored, formatter)

        assert list(flattened) == ["cite_note-a-1"]
        assert flattened["cite_note-a-1"]["text"] == "second"
        assert flattened["cite_note-a-1"]["reflist"] == 1
