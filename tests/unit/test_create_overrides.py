"""
Tests for composer overrides applied to create request bodies

Validates:
1. Raw overrides are trimmed, seed keeps digits only
2. Root and nested (double-encoded) body both receive overrides
3. Invalid or untouched bodies come back unchanged (fail closed)
"""

import json

import pytest

from uvdrafts.composer.overrides import (
    NestedEnvelope,
    apply_create_body_overrides,
    apply_overrides_to_object,
    normalize_create_overrides,
)
from uvdrafts.observability.telemetry import get_counter
from uvdrafts.types import CreateOverrides


def _encode(value):
    return json.dumps(value, separators=(",", ":"))


class TestNormalizeCreateOverrides:
    def test_trims_text_fields(self):
        result = normalize_create_overrides({"prompt": "  a cat  ", "model": "sora2", "style": ""})
        assert result == CreateOverrides(prompt="a cat", model="sora2")

    def test_seed_keeps_digits(self):
        assert normalize_create_overrides({"seed": "12a34"}).seed == "1234"
        assert normalize_create_overrides({"seed": "123456789012345"}).seed == "1234567890"

    @pytest.mark.parametrize(
        "raw",
        [
            None,
            "prompt",
            {},
            {"prompt": "   "},
            {"seed": "abc"},
            {"seed": 42},
            {"model": 3, "unknown": "x"},
        ],
    )
    def test_nothing_usable(self, raw):
        assert normalize_create_overrides(raw) is None


class TestApplyOverridesToObject:
    def test_field_placement(self):
        payload = {}
        overrides = CreateOverrides(
            prompt="p", model="m", orientation="o", resolution="r", style="s", mode="remix", seed="7"
        )

        assert apply_overrides_to_object(payload, overrides) is True
        assert payload == {
            "creation_config": {
                "prompt": "p",
                "model": "m",
                "orientation": "o",
                "resolution": "r",
                "style": "s",
                "seed": "7",
            },
            "prompt": "p",
            "model": "m",
            "resolution": "r",
            "mode": "remix",
        }

    def test_no_change_when_values_match(self):
        payload = {"prompt": "p", "creation_config": {"prompt": "p"}}
        assert apply_overrides_to_object(payload, CreateOverrides(prompt="p")) is False

    def test_replaces_non_object_creation_config(self):
        payload = {"creation_config": "broken"}
        assert apply_overrides_to_object(payload, CreateOverrides(style="s")) is True
        assert payload["creation_config"] == {"style": "s"}


class TestApplyCreateBodyOverrides:
    def test_root_and_nested_body(self):
        inner = _encode({"prompt": "old", "creation_config": {}})
        body = _encode(
            {
                "prompt": "old",
                "creation_config": {"prompt": "old", "orientation": "portrait", "n_frames": 300},
                "body": inner,
                "untouched": [1, 2],
            }
        )

        result = apply_create_body_overrides(
            body, {"prompt": "new", "orientation": "landscape", "seed": "12a34", "mode": "remix"}
        )

        outer = json.loads(result)
        nested = json.loads(outer["body"])
        assert outer["prompt"] == "new"
        assert outer["mode"] == "remix"
        assert outer["untouched"] == [1, 2]
        assert outer["creation_config"] == {
            "prompt": "new",
            "orientation": "landscape",
            "n_frames": 300,
            "seed": "1234",
        }
        assert nested == {
            "prompt": "new",
            "creation_config": {"prompt": "new", "orientation": "landscape", "seed": "1234"},
            "mode": "remix",
        }

    def test_output_is_compact_and_keeps_unicode(self):
        result = apply_create_body_overrides('{"prompt": "old"}', {"prompt": "café"})
        assert result == '{"prompt":"café","creation_config":{"prompt":"café"}}'

    def test_invalid_json_returned_unchanged(self):
        assert apply_create_body_overrides("not-json", {"prompt": "x"}) == "not-json"
        assert get_counter("composer.fail_closed") == 1

    def test_non_object_json_returned_unchanged(self):
        assert apply_create_body_overrides("[1,2]", {"prompt": "x"}) == "[1,2]"
        assert get_counter("composer.fail_closed") == 1

    def test_unchanged_body_is_the_same_string(self):
        body = _encode({"model": "sora2", "creation_config": {"model": "sora2"}})
        assert apply_create_body_overrides(body, {"model": "sora2"}) is body

    def test_no_usable_overrides(self):
        body = '{"prompt": "old"}'
        assert apply_create_body_overrides(body, {"prompt": " "}) is body
        assert apply_create_body_overrides(body, None) is body
        assert get_counter("composer.fail_closed") == 0

    def test_non_string_body_passes_through(self):
        payload = {"prompt": "old"}
        assert apply_create_body_overrides(payload, {"prompt": "x"}) is payload
        assert apply_create_body_overrides(None, {"prompt": "x"}) is None

    def test_invalid_inner_body_left_verbatim(self):
        body = _encode({"body": "{not json", "creation_config": {}})

        outer = json.loads(apply_create_body_overrides(body, {"style": "noir"}))

        assert outer["body"] == "{not json"
        assert outer["creation_config"] == {"style": "noir"}

    def test_only_inner_changes(self):
        inner = _encode({"creation_config": {}})
        body = _encode({"style": "x", "creation_config": {"style": "noir"}, "body": inner})

        outer = json.loads(apply_create_body_overrides(body, {"style": "noir"}))

        assert json.loads(outer["body"]) == {"creation_config": {"style": "noir"}}


class TestNestedEnvelope:
    def test_decode(self):
        envelope = NestedEnvelope.decode(_encode({"body": _encode({"a": 1})}))
        assert envelope.inner == {"a": 1}

    def test_decode_without_nested_body(self):
        envelope = NestedEnvelope.decode('{"body": 5}')
        assert envelope.outer == {"body": 5}
        assert envelope.inner is None

    def test_decode_rejects_non_objects(self):
        assert NestedEnvelope.decode('"text"') is None
        assert NestedEnvelope.decode("") is None


class TestStrictJson:
    """Bodies must round-trip the way the browser's JSON.parse/JSON.stringify do"""

    @pytest.mark.parametrize(
        "body",
        [
            '{"prompt":"old","seed":NaN}',
            '{"prompt":"old","creation_config":{"scale":Infinity}}',
            '{"prompt":"old","creation_config":{"scale":-Infinity}}',
        ],
    )
    def test_non_json_constants_fail_closed(self, body):
        assert apply_create_body_overrides(body, {"prompt": "new"}) is body
        assert get_counter("composer.fail_closed") == 1

    def test_overflowing_number_fails_closed(self):
        body = '{"creation_config":{"scale":1e400}}'

        assert apply_create_body_overrides(body, {"prompt": "new"}) is body
        assert get_counter("composer.fail_closed") == 1

    def test_non_json_constant_in_inner_body_left_verbatim(self):
        body = _encode({"body": '{"seed":NaN}', "creation_config": {}})

        outer = json.loads(apply_create_body_overrides(body, {"style": "noir"}))

        assert outer["body"] == '{"seed":NaN}'
        assert outer["creation_config"] == {"style": "noir"}

    def test_integral_floats_lose_fraction(self):
        body = '{"creation_config":{"fps":30.0,"ratio":1.5,"zero":-0.0}}'

        result = apply_create_body_overrides(body, {"prompt": "new"})

        assert result == (
            '{"creation_config":{"fps":30,"ratio":1.5,"zero":0,"prompt":"new"},"prompt":"new"}'
        )

    def test_large_integral_float_keeps_exponent(self):
        result = apply_create_body_overrides('{"n":1e21}', {"prompt": "new"})
        assert json.loads(result)["n"] == 1e21
        assert '"n":1e+21' in result
