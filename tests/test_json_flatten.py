from __future__ import annotations

import random

import pytest

from bytefreq.parse.json_flatten import JsonNormalizer, flatten, json_literal, parse_line
from bytefreq.profile.aggregator import FrequencyAggregator
from bytefreq.profile.registry import ColumnRegistry


def _normalizer(grain: str = "LU", max_depth: int = 2, remove_array_numbers: bool = False) -> JsonNormalizer:
    return JsonNormalizer(
        ColumnRegistry(),
        FrequencyAggregator(random.Random(3)),
        grain,
        max_depth=max_depth,
        remove_array_numbers=remove_array_numbers,
    )


def _column(norm: JsonNormalizer, name: str) -> int:
    idx = norm.registry.index_of(name)
    assert idx is not None, f"missing column {name}: {norm.registry.names()}"
    return idx


def test_nested_object_path_and_quoted_literal() -> None:
    norm = _normalizer()
    norm.process_line('{"foo":{"bar":"baz"}}')
    idx = _column(norm, "foo.bar")
    assert norm.aggregator.examples(idx) == {'"a"': '"baz"'}


def test_array_numbers_removed_share_one_column() -> None:
    norm = _normalizer(remove_array_numbers=True)
    norm.process_line('{"hello":["world","x"]}')
    assert norm.registry.names() == ["hello[]"]
    idx = _column(norm, "hello[]")
    assert norm.aggregator.total(idx) == 2
    assert norm.aggregator.counts(idx) == {'"a"': 2}


def test_array_numbers_kept_by_default() -> None:
    norm = _normalizer()
    norm.process_line('{"hello":["world","x"]}')
    assert norm.registry.names() == ["hello[0]", "hello[1]"]


def test_mixed_document_with_high_depth() -> None:
    norm = _normalizer(grain="U", max_depth=10, remove_array_numbers=True)
    norm.process_value({"foo": {"bar": "baz", "qux": [1, 2, 3]}, "hello": ["world", "foo", "bar"], "value": 42})
    assert len(norm.registry) == 4
    foo = _column(norm, "foo.bar")
    assert norm.aggregator.counts(foo) == {'"aaa"': 1}
    assert norm.aggregator.examples(foo) == {'"aaa"': '"baz"'}
    assert norm.aggregator.counts(_column(norm, "foo.qux[]")) == {"9": 3}
    assert norm.aggregator.counts(_column(norm, "hello[]")) == {'"aaaaa"': 1, '"aaa"': 2}
    value = _column(norm, "value")
    assert norm.aggregator.counts(value) == {"99": 1}
    assert norm.aggregator.examples(value) == {"99": "42"}


def test_depth_three_document() -> None:
    norm = _normalizer(grain="XXXX", max_depth=3, remove_array_numbers=True)
    norm.process_line('{"foo": {"bar": [1,2,3], "baz": {"qux": "hello"}}}')
    assert norm.registry.names() == ["foo.bar[]", "foo.baz.qux"]
    assert norm.aggregator.counts(0) == {"9": 3}
    assert norm.aggregator.counts(1) == {'"aaaaa"': 1}


def test_objects_beyond_depth_are_dropped() -> None:
    norm = _normalizer(max_depth=2)
    norm.process_line('{"a":{"b":{"c":1}},"d":{"e":2}}')
    assert norm.registry.names() == ["d.e"]
    assert flatten({"a": {"b": 1}}, max_depth=0) == []
    assert flatten({"a": {"b": 1}}, max_depth=1) == []


def test_arrays_do_not_consume_depth() -> None:
    leaves = flatten({"a": [[[{"b": 1}]]]}, max_depth=2)
    assert leaves == [("a[0][0][0].b", "1")]


def test_leaves_in_document_order() -> None:
    leaves = flatten({"b": 1, "a": {"c": 2, "d": [3, 4]}, "e": None}, max_depth=5)
    assert [path for path, _ in leaves] == ["b", "a.c", "a.d[0]", "a.d[1]", "e"]


def test_top_level_scalars_and_arrays() -> None:
    assert flatten([1, "x"]) == [("[0]", "1"), ("[1]", '"x"')]
    assert flatten(7) == [("", "7")]


def test_scalar_literals() -> None:
    assert json_literal(True) == "true"
    assert json_literal(None) == "null"
    assert json_literal(1.5) == "1.5"
    assert json_literal("é") == '"é"'
    assert json_literal('a"b') == '"a\\"b"'


def test_malformed_line_is_skipped() -> None:
    norm = _normalizer()
    norm.process_line('{"a": ')
    norm.process_line("not json")
    assert len(norm.registry) == 0
    norm.process_line('{"a": 1}')
    assert norm.registry.names() == ["a"]


def test_deep_arrays_do_not_hit_recursion_limit() -> None:
    doc = {"a": 1}
    value: object = doc
    for _ in range(5000):
        value = [value]
    leaves = flatten(value, max_depth=2)
    assert len(leaves) == 1
    assert leaves[0][0].endswith("[0].a")


def test_oversized_integer_line_is_skipped() -> None:
    norm = _normalizer()
    for line in ['{"a": 1}', '{"a": ' + "1" * 5000 + "}", '{"a": 2}']:
        norm.process_line(line)
    assert norm.registry.names() == ["a"]
    assert norm.aggregator.total(0) == 2


def test_lone_surrogate_line_is_skipped() -> None:
    norm = _normalizer()
    norm.process_line('{"a": "\\ud800"}')
    norm.process_line('{"\\udfff": 1}')
    assert len(norm.registry) == 0
    norm.process_line('{"a": "ok", "b": "\\ud83d\\ude00"}')
    assert norm.registry.names() == ["a", "b"]
    assert norm.aggregator.examples(1) == {'"_"': '"\U0001f600"'}


@pytest.mark.parametrize("line", ['{"a": NaN}', '{"a": Infinity}', '{"a": [-Infinity]}'])
def test_non_standard_constants_are_skipped(line: str) -> None:
    norm = _normalizer()
    norm.process_line(line)
    assert len(norm.registry) == 0


def test_parse_line_is_strict() -> None:
    assert parse_line('{"a": [1.5, null]}') == {"a": [1.5, None]}
    with pytest.raises(ValueError):
        parse_line("NaN")
    with pytest.raises(ValueError):
        parse_line('"\\ud800"')
