"""
Tests for context lookups and value classification.
"""

from collections import OrderedDict

import pytest

from tpl.expr.context import bind, resolve, resolve_value
from tpl.expr.errors import InvalidVariableAccessError, NotAnObjectError, VariableNotFoundError
from tpl.expr.model import ValueType, type_of


class TestTypeOf:

    def test_scalars(self):
        assert type_of("s") is ValueType.STRING
        assert type_of(1) is ValueType.INTEGER
        assert type_of(1.0) is ValueType.FLOAT

    def test_bool_is_not_integer(self):
        assert type_of(True) is ValueType.BOOLEAN
        assert type_of(False) is ValueType.BOOLEAN

    def test_containers(self):
        assert type_of({"a": 1}) is ValueType.OBJECT
        assert type_of(OrderedDict()) is ValueType.OBJECT
        assert type_of([1]) is ValueType.LIST
        assert type_of((1, 2)) is ValueType.LIST

    def test_unsupported(self):
        assert type_of(None) is None
        assert type_of({1, 2}) is None


class TestResolve:

    def setup_method(self):
        self.context = {
            "site": {"title": "Home", "meta": {"lang": "en"}},
            "pages": [{"name": "a"}],
            "title": "Top",
        }

    def test_top_level(self):
        assert resolve("title", self.context) == "Top"

    def test_nested(self):
        assert resolve("site.meta.lang", self.context) == "en"

    def test_containers_returned_as_is(self):
        assert resolve("pages", self.context) == [{"name": "a"}]
        assert resolve("site.meta", self.context) == {"lang": "en"}

    def test_missing_head(self):
        with pytest.raises(VariableNotFoundError, match="missing key 'nope'"):
            resolve("nope.x", self.context)

    def test_missing_key(self):
        with pytest.raises(VariableNotFoundError):
            resolve("site.footer", self.context)

    def test_empty_component(self):
        with pytest.raises(VariableNotFoundError):
            resolve("site..title", self.context)

    def test_lists_are_not_indexable(self):
        with pytest.raises(NotAnObjectError) as exc:
            resolve("pages.0", self.context)
        assert exc.value.path == "pages"
        assert exc.value.component == "0"

    def test_resolve_value_rejects_containers(self):
        assert resolve_value("site.title", self.context) == "Home"
        with pytest.raises(InvalidVariableAccessError, match="object"):
            resolve_value("site", self.context)
        with pytest.raises(InvalidVariableAccessError, match="list"):
            resolve_value("pages", self.context)


class TestBind:

    def test_shadows_without_mutating(self):
        parent = {"name": "outer", "other": 1}
        child = bind(parent, "name", "inner")
        assert child == {"name": "inner", "other": 1}
        assert parent["name"] == "outer"
