import pytest

from hateoas_registry.cache.decoder import DecodingError, ResponseDecoder
from hateoas_registry.cache.object_cache import ObjectCache
from hateoas_registry.shared.hal import HALLink, PaginatedList

API = "https://api.example.org/server/api"


@pytest.fixture
def decoder(registry, models):
    return ResponseDecoder(registry, ObjectCache(registry))


def test_decode_picks_class_by_type(decoder, models, make_item_payload):
    item = decoder.decode(make_item_payload(handle="123/9"))
    assert isinstance(item, models.Item)
    assert item.handle == "123/9"
    assert item.type.value == "item"
    assert item._links["owningCollection"] == HALLink(f"{API}/core/items/item-1/owningCollection")
    assert item.bundles is None


def test_decoded_objects_are_cached(decoder, make_item_payload):
    item = decoder.decode(make_item_payload())
    assert decoder.cache.has(item.self_link)


def test_embedded_page_and_object(decoder, models, make_item_payload):
    payload = make_item_payload(_embedded={
        "bundles": {
            "_embedded": {"bundles": [
                {"type": "bundle", "name": "ORIGINAL", "_links": {"self": {"href": f"{API}/core/bundles/1"}}},
                {"type": "bundle", "name": "THUMBNAIL", "_links": {"self": {"href": f"{API}/core/bundles/2"}}},
            ]},
            "page": {"size": 20, "totalElements": 2, "totalPages": 1, "number": 0},
            "_links": {"self": {"href": f"{API}/core/items/item-1/bundles"}},
        },
        "owningCollection": {"type": "collection", "name": "Theses",
                             "_links": {"self": {"href": f"{API}/core/collections/7"}}},
    })
    item = decoder.decode(payload)

    assert isinstance(item.bundles, PaginatedList)
    assert [b.name for b in item.bundles] == ["ORIGINAL", "THUMBNAIL"]
    assert item.bundles.total_elements == 2
    assert item.bundles.self_link == f"{API}/core/items/item-1/bundles"
    assert isinstance(item.owningCollection, models.Collection)
    assert decoder.cache.has(f"{API}/core/bundles/2")


def test_decode_list(decoder, models, make_item_payload):
    page = decoder.decode_list({
        "_embedded": {"items": [make_item_payload("a"), make_item_payload("b")]},
        "page": {"size": 2, "totalElements": 5, "totalPages": 3, "number": 1},
    })
    assert [i.id for i in page] == ["a", "b"]
    assert len(page) == 2
    assert page.total_pages == 3
    assert page.current_page == 1


def test_list_valued_links(decoder, make_item_payload):
    payload = make_item_payload()
    payload["_links"]["mappedCollections"] = [{"href": f"{API}/c/1"}, {"href": f"{API}/c/2", "name": "second"}]
    item = decoder.decode(payload)
    assert item._links["mappedCollections"][1] == HALLink(f"{API}/c/2", name="second")


@pytest.mark.parametrize("payload, message", [
    ({"id": 1}, "no 'type'"),
    ({"type": "eperson"}, "No class registered"),
    (["not", "an", "object"], "Expected a JSON object"),
])
def test_undecodable_payloads(decoder, payload, message):
    with pytest.raises(DecodingError, match=message):
        decoder.decode(payload)
