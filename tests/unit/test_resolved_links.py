import pytest

from hateoas_registry.registry import ConfigurationError, InvalidResolvedLinkError, resolved_link
from hateoas_registry.registry.resolved_links import ResolvedLinkRegistry
from hateoas_registry.shared.hal import HALResource
from hateoas_registry.shared.resource_type import ResourceType


class Item(HALResource):
    type = ResourceType("item")
    id = "item-1"


class BitstreamDataService:
    def find_thumbnail(self, item_id):
        pass

    def find_all(self, *hrefs, page=0):
        pass

    @staticmethod
    def default_format(name):
        pass

    @classmethod
    def find_by_format(cls, mimetype):
        pass


def test_descriptor_keeps_service_method_and_params_verbatim():
    resolved = ResolvedLinkRegistry()
    resolved.register_resolved_link(Item, "thumbnail", BitstreamDataService, "find_thumbnail", Item.id)

    descriptor = resolved.resolved_link_descriptor(Item, "thumbnail")
    assert descriptor.service_class is BitstreamDataService
    assert descriptor.method_name == "find_thumbnail"
    assert descriptor.params == ("item-1",)
    assert resolved.resolved_link_properties(Item) == ["thumbnail"]


def test_method_name_is_optional():
    resolved = ResolvedLinkRegistry()
    resolved.register_resolved_link(Item, "thumbnail", BitstreamDataService)
    descriptor = resolved.resolved_link_descriptor(Item, "thumbnail")
    assert descriptor.method_name is None
    assert descriptor.params == ()


def test_repeated_registration_lists_property_once():
    resolved = ResolvedLinkRegistry()
    resolved.register_resolved_link(Item, "thumbnail", BitstreamDataService, "find_thumbnail", "a")
    resolved.register_resolved_link(Item, "thumbnail", BitstreamDataService, "find_thumbnail", "a")
    assert resolved.resolved_link_properties(Item) == ["thumbnail"]


def test_misses_are_absent():
    resolved = ResolvedLinkRegistry()
    assert resolved.resolved_link_properties(Item) is None
    assert resolved.resolved_link_descriptor(Item, "thumbnail") is None


def test_unknown_method_is_rejected():
    resolved = ResolvedLinkRegistry()
    with pytest.raises(InvalidResolvedLinkError, match="find_logo"):
        resolved.register_resolved_link(Item, "logo", BitstreamDataService, "find_logo")
    assert resolved.resolved_link_properties(Item) is None


def test_params_must_fit_signature():
    resolved = ResolvedLinkRegistry()
    with pytest.raises(InvalidResolvedLinkError):
        resolved.register_resolved_link(Item, "thumbnail", BitstreamDataService, "find_thumbnail", "a", "b")
    with pytest.raises(InvalidResolvedLinkError):
        resolved.register_resolved_link(Item, "thumbnail", BitstreamDataService, "find_thumbnail")


def test_varargs_and_static_methods_accepted():
    resolved = ResolvedLinkRegistry()
    resolved.register_resolved_link(Item, "files", BitstreamDataService, "find_all", "a", "b", "c")
    resolved.register_resolved_link(Item, "format", BitstreamDataService, "default_format", "png")
    assert resolved.resolved_link_properties(Item) == ["files", "format"]


def test_declared_on_class_body(registry):
    class DeclaredItem(HALResource):
        thumbnail = resolved_link(BitstreamDataService, "find_thumbnail", "item-1", registry=registry)

    descriptor = registry.resolved_link_descriptor(DeclaredItem, "thumbnail")
    assert descriptor.params == ("item-1",)


def test_bad_declaration_fails_class_creation(registry):
    # Python < 3.12 wraps __set_name__ errors in a plain RuntimeError
    with pytest.raises(RuntimeError):
        class BrokenItem(HALResource):
            thumbnail = resolved_link(BitstreamDataService, "find_logo", registry=registry)
    assert issubclass(InvalidResolvedLinkError, ConfigurationError)


def test_classmethod_params_bind_without_cls():
    resolved = ResolvedLinkRegistry()
    resolved.register_resolved_link(Item, "pdfs", BitstreamDataService, "find_by_format", "application/pdf")
    assert resolved.resolved_link_descriptor(Item, "pdfs").params == ("application/pdf",)

    with pytest.raises(InvalidResolvedLinkError):
        resolved.register_resolved_link(Item, "images", BitstreamDataService, "find_by_format")
    with pytest.raises(InvalidResolvedLinkError):
        resolved.register_resolved_link(Item, "images", BitstreamDataService, "find_by_format", "image/png", "x")
    assert resolved.resolved_link_properties(Item) == ["pdfs"]
