from types import SimpleNamespace
from unittest.mock import MagicMock

import pytest

from hateoas_registry.data.data_service import DataService
from hateoas_registry.data.service_locator import ServiceLocator
from hateoas_registry.registry import MetadataRegistry, data_service, link, maps_to, relationship, resolved_link
from hateoas_registry.rest.client import HALRestClient, RestResponse
from hateoas_registry.shared.hal import HALResource, NormalizedObject
from hateoas_registry.shared.resource_type import ResourceType

API = "https://api.example.org/server/api"


@pytest.fixture
def registry():
    """A fresh registry per test so the process-wide default stays untouched."""
    return MetadataRegistry()


@pytest.fixture
def models(registry):
    """A small DSpace-like model: items with bundles, an owning collection and a thumbnail."""

    class Bundle(HALResource):
        type = ResourceType("bundle")

    class Collection(HALResource):
        type = ResourceType("collection")

    class Bitstream(HALResource):
        type = ResourceType("bitstream")

    class Relationship(HALResource):
        type = ResourceType("relationship")

    @data_service(Bitstream, registry=registry)
    class BitstreamDataService(DataService):
        def find_thumbnail(self, item_id):
            return self.find_by_href(f"core/items/{item_id}/thumbnail")

    class Item(HALResource):
        type = ResourceType("item")
        bundles = link(Bundle, is_list=True, registry=registry)
        collection = link(Collection, link_name="owningCollection", registry=registry)
        thumbnail = resolved_link(BitstreamDataService, "find_thumbnail", "item-1", registry=registry)

    @maps_to(Item, registry=registry)
    class NormalizedItem(NormalizedObject):
        relationships = relationship(Relationship, is_list=True, registry=registry)
        template = relationship(Item, should_auto_resolve=False, registry=registry)

    for cls in (Bundle, Collection, Bitstream, Relationship):
        registry.register_type(cls.type, cls)

    @data_service(Item, registry=registry)
    class ItemDataService(DataService):
        pass

    @data_service(Bundle, registry=registry)
    class BundleDataService(DataService):
        pass

    @data_service(Collection, registry=registry)
    class CollectionDataService(DataService):
        pass

    @data_service(Relationship, registry=registry)
    class RelationshipDataService(DataService):
        pass

    return SimpleNamespace(
        Bundle=Bundle,
        Collection=Collection,
        Bitstream=Bitstream,
        Relationship=Relationship,
        Item=Item,
        NormalizedItem=NormalizedItem,
        BitstreamDataService=BitstreamDataService,
        ItemDataService=ItemDataService,
        BundleDataService=BundleDataService,
        CollectionDataService=CollectionDataService,
    )


def absolute(href: str) -> str:
    return href if href.startswith("http") else f"{API}/{href.lstrip('/')}"


def item_payload(uuid: str = "item-1", **extra):
    base = f"{API}/core/items/{uuid}"
    payload = {
        "id": uuid,
        "uuid": uuid,
        "type": "item",
        "handle": "123456789/1",
        "_links": {
            "self": {"href": base},
            "bundles": {"href": f"{base}/bundles"},
            "owningCollection": {"href": f"{base}/owningCollection"},
        },
    }
    payload.update(extra)
    return payload


@pytest.fixture
def payloads():
    """Responses served by the fake client, keyed by absolute URL."""
    return {}


@pytest.fixture
def client(payloads):
    client = MagicMock(spec=HALRestClient)
    client.absolute_url.side_effect = absolute

    def get(href, params=None):
        return RestResponse(payload=payloads[absolute(href)], status_code=200)

    client.get.side_effect = get
    return client


@pytest.fixture
def locator(client, registry, models):
    return ServiceLocator(client, registry=registry)


@pytest.fixture
def make_item_payload():
    return item_payload
