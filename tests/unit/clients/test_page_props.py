"""Unit tests for the page-property reference store."""

from __future__ import annotations

import base64
import gzip
import json
from pathlib import Path

import pytest

from src.clients.page_props import (
    InMemoryPageProps,
    PagePropsReferenceStore,
    encode_references_data,
    property_name,
)
from src.clients.protocols import PagePropsSourceProtocol, ReferenceStoreProtocol
from src.references.lookup import ReferenceLookupEndpoint
from src.references.models import Page
from tests.fakes.fake_clients import FakeConfig


@pytest.fixture
def props() -> InMemoryPageProps:
    return InMemoryPageProps()


@pytest.fixture
def store(props: InMemoryPageProps) -> PagePropsReferenceStore:
    return PagePropsReferenceStore(props)


class TestEncodeReferencesData:
    """Tests for encode_references_data."""

    def test_single_property_when_small(self, page_seven_references: dict) -> None:
        values = encode_references_data(page_seven_references["refs"])

        assert list(values) == ["references-1"]
        decoded = json.loads(gzip.decompress(values["references-1"]))
        assert decoded == {"refs": page_seven_references["refs"], "version": 1}

    def test_splits_into_chunks(self, page_seven_references: dict) -> None:
        values = encode_references_data(page_seven_references["refs"], chunk_size=16)

        assert len(values) > 1
        assert list(values) == [property_name(i) for i in range(1, len(values) + 1)]
        assert all(len(chunk) <= 16 for chunk in values.values())


class TestInMemoryPageProps:
    """Tests for InMemoryPageProps."""

    def test_implements_protocol(self, props: InMemoryPageProps) -> None:
        assert isinstance(props, PagePropsSourceProtocol)

    @pytest.mark.asyncio
    async def test_get_unset_property(self, props: InMemoryPageProps) -> None:
        assert await props.get_property(1, "references-1") is None

    @pytest.mark.asyncio
    async def test_from_file(self, tmp_path: Path, page_seven_references: dict) -> None:
        values = encode_references_data(page_seven_references["refs"])
        data = {
            "pages": [{
                "pageid": 7,
                "title": "Seven",
                "props": {name: base64.b64encode(v).decode("ascii") for name, v in values.items()},
            }]
        }
        path = tmp_path / "props.json"
        path.write_text(json.dumps(data), encoding="utf-8")

        source = InMemoryPageProps.from_file(path)

        assert await source.get_property(7, "references-1") == values["references-1"]


class TestPagePropsReferenceStore:
    """Tests for PagePropsReferenceStore."""

    def test_implements_protocol(self, store: PagePropsReferenceStore) -> None:
        assert isinstance(store, ReferenceStoreProtocol)

    @pytest.mark.asyncio
    async def test_nothing_stored(self, store: PagePropsReferenceStore) -> None:
        assert await store.get_stored_references(Page(7)) is None

    @pytest.mark.asyncio
    async def test_single_part(
        self,
        props: InMemoryPageProps,
        store: PagePropsReferenceStore,
        page_seven_references: dict,
    ) -> None:
        props.set_properties(7, encode_references_data(page_seven_references["refs"]))

        stored = await store.get_stored_references(Page(7))

        assert stored == {"refs": page_seven_references["refs"], "version": 1}

    @pytest.mark.asyncio
    async def test_multiple_parts(
        self,
        props: InMemoryPageProps,
        store: PagePropsReferenceStore,
        multi_list_references: dict,
    ) -> None:
        props.set_properties(
            7, encode_references_data(multi_list_references["refs"], chunk_size=20)
        )

        stored = await store.get_stored_references(Page(7))

        assert stored["refs"] == multi_list_references["refs"]

    @pytest.mark.asyncio
    async def test_truncated_parts(
        self,
        props: InMemoryPageProps,
        store: PagePropsReferenceStore,
        multi_list_references: dict,
    ) -> None:
        values = encode_references_data(multi_list_references["refs"], chunk_size=20)
        del values[property_name(len(values))]
        props.set_properties(7, values)

        assert await store.get_stored_references(Page(7)) is None

    @pytest.mark.asyncio
    async def test_corrupted_json(
        self, props: InMemoryPageProps, store: PagePropsReferenceStore
    ) -> None:
        props.set_property(7, "references-1", gzip.compress(b"{not json"))

        assert await store.get_stored_references(Page(7)) is None

    @pytest.mark.asyncio
    async def test_invalid_utf8(
        self, props: InMemoryPageProps, store: PagePropsReferenceStore
    ) -> None:
        props.set_property(7, "references-1", gzip.compress(b'{"refs": "\xff\xfe"}'))

        assert await store.get_stored_references(Page(7)) is None

    @pytest.mark.asyncio
    @pytest.mark.parametrize("payload", [b"[1, 2]", b'"x"', b"null", b"3"])
    async def test_non_object_json(
        self, props: InMemoryPageProps, store: PagePropsReferenceStore, payload: bytes
    ) -> None:
        props.set_property(7, "references-1", gzip.compress(payload))

        assert await store.get_stored_references(Page(7)) is None

    @pytest.mark.asyncio
    async def test_lookup_over_corrupted_page_is_empty(
        self, props: InMemoryPageProps, store: PagePropsReferenceStore
    ) -> None:
        props.set_property(7, "references-1", gzip.compress(b"[1, 2]"))
        endpoint = ReferenceLookupEndpoint(FakeConfig(reference_storage_enabled=True), store)

        result = await endpoint.lookup([Page(7)])

        assert result.pages == {7: {}}
        assert result.complete

    @pytest.mark.asyncio
    async def test_pages_are_independent(
        self,
        props: InMemoryPageProps,
        store: PagePropsReferenceStore,
        page_seven_references: dict,
    ) -> None:
        props.set_properties(7, encode_references_data(page_seven_references["refs"]))

        assert await store.get_stored_references(Page(8)) is None
