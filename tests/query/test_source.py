"""Unit tests for the data source configuration provider and resolver."""

# pylint: disable=missing-class-docstring,missing-function-docstring

from inline_table.query.source import deep_merge, resolve_configuration, source_configuration


class TestSourceConfiguration:

    def test_pagination_disabled(self):
        pagination = source_configuration()["meta"]["pagination"]
        assert pagination["showPageSizeDropdown"] is False
        assert pagination["showEntryRange"] is False
        assert pagination["showNextPrevious"] is False
        assert pagination["showFirstLast"] is False
        assert pagination["pageSizes"] == [1000000]
        assert pagination["maxShownPages"] == 1

    def test_id_property(self):
        assert source_configuration()["meta"]["entryDescriptor"] == {"idProperty": "_inline_id"}


class TestDeepMerge:

    def test_nested_keys_are_merged(self):
        merged = deep_merge({"a": {"x": 1, "y": 2}}, {"a": {"y": 3}})
        assert merged == {"a": {"x": 1, "y": 3}}

    def test_inputs_not_modified(self):
        base = {"a": {"x": 1}}
        deep_merge(base, {"a": {"x": 2}})
        assert base == {"a": {"x": 1}}


class TestResolveConfiguration:

    def test_keeps_frontend_settings(self):
        resolved = resolve_configuration({"query": {"limit": 5}, "meta": {"defaultDisplayer": "html"}})
        assert resolved["query"] == {"limit": 5}
        assert resolved["meta"]["defaultDisplayer"] == "html"
        assert resolved["meta"]["entryDescriptor"]["idProperty"] == "_inline_id"

    def test_source_pagination_wins(self):
        resolved = resolve_configuration({"meta": {"pagination": {"showEntryRange": True, "maxShownPages": 9}}})
        assert resolved["meta"]["pagination"]["showEntryRange"] is False
        assert resolved["meta"]["pagination"]["maxShownPages"] == 1

    def test_empty_input(self):
        assert resolve_configuration() == source_configuration()
