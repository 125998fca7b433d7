import unittest
from unittest.mock import Mock

import pytest

from namebind import Container, IdentifyingResolver, Registry, Resolver


class Foo:
    @staticmethod
    def create(injections):
        return {"foo": "bar"}


class TestResolverLookup(unittest.TestCase):
    registry: Registry

    def setUp(self):
        self.registry = Registry()

    def test_identify_is_not_called_without_referrer(self):
        resolver = Mock(spec=["identify", "retrieve"])
        resolver.retrieve.return_value = Foo
        c = Container(self.registry, resolver)

        assert c.factory_for("foo:bar") is Foo
        assert c.lookup("foo:bar") == {"foo": "bar"}
        resolver.identify.assert_not_called()
        resolver.retrieve.assert_called_with("foo:bar")

    def test_referrer_is_normalized_through_identify(self):
        resolver = Mock(spec=["identify", "retrieve"])
        resolver.identify.return_value = "component:admin/user-list"
        resolver.retrieve.return_value = Foo
        c = Container(self.registry, resolver)

        assert c.lookup("component:user-list", referrer="template:admin/index") == {"foo": "bar"}
        resolver.identify.assert_called_once_with("component:user-list", "template:admin/index")
        resolver.retrieve.assert_called_once_with("component:admin/user-list")
        assert c.is_cached("component:admin/user-list")

    def test_identify_without_resolver_support_returns_name(self):
        resolver = Mock(spec=["retrieve"])
        resolver.retrieve.return_value = None
        self.registry.register("foo:bar", Foo)
        c = Container(self.registry, resolver)

        assert c.identify("foo:bar", "route:index") == "foo:bar"
        assert c.lookup("foo:bar", referrer="route:index") == {"foo": "bar"}

    def test_resolver_factory_is_created_once(self):
        resolver = Mock(spec=["retrieve"])
        resolver.retrieve.return_value = Foo
        c = Container(self.registry, resolver)

        first = c.lookup("foo:bar")
        assert c.lookup("foo:bar") is first
        resolver.retrieve.assert_called_once_with("foo:bar")

    def test_resolver_shadows_registry_on_lookup(self):
        class Local:
            @staticmethod
            def create(injections):
                return "local"

        resolver = Mock(spec=["retrieve"])
        resolver.retrieve.side_effect = lambda specifier: Foo if specifier == "foo:bar" else None
        self.registry.register("foo:bar", Local)
        self.registry.register("foo:baz", Local)
        c = Container(self.registry, resolver)

        assert c.lookup("foo:bar") == {"foo": "bar"}
        assert c.lookup("foo:baz") == "local"


def test_protocols_are_runtime_checkable():
    class Retrieving:
        def retrieve(self, specifier):
            return None

    class Identifying(Retrieving):
        def identify(self, full_name, referrer):
            return full_name

    assert isinstance(Retrieving(), Resolver)
    assert not isinstance(Retrieving(), IdentifyingResolver)
    assert isinstance(Identifying(), IdentifyingResolver)


def test_container_rejects_resolver_without_retrieve():
    class NotAResolver:
        def lookup(self, specifier):
            return None

    with pytest.raises(TypeError, match="retrieve"):
        Container(Registry(), NotAResolver())


def test_container_rejects_retrieve_with_wrong_arity():
    class BadResolver:
        def retrieve(self):
            return None

    with pytest.raises(TypeError, match="signature mismatches"):
        Container(Registry(), BadResolver())
