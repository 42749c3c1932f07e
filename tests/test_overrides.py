from typing import Any

import pytest

from valtemplate.context import apply_override
from valtemplate.context.overrides import typed_value
from valtemplate.core.errors import OverrideSyntaxError


def parse(spec: str, **kwargs: Any) -> dict[str, Any]:
    return apply_override({}, spec, **kwargs)


class TestAssignments:
    def test_single_assignment(self) -> None:
        assert parse("a=1") == {"a": 1}

    def test_comma_separated_assignments(self) -> None:
        assert parse("a=1,b=two") == {"a": 1, "b": "two"}

    def test_trailing_comma_is_allowed(self) -> None:
        assert parse("a=1,") == {"a": 1}

    def test_empty_value_sets_empty_string(self) -> None:
        assert parse("a=") == {"a": ""}
        assert parse("a=,b=1") == {"a": "", "b": 1}

    def test_later_assignment_wins(self) -> None:
        assert parse("a=1,a=2") == {"a": 2}

    def test_modifies_and_returns_given_mapping(self) -> None:
        mapping: dict[str, Any] = {"keep": True}
        result = apply_override(mapping, "a=1")

        assert result is mapping
        assert mapping == {"keep": True, "a": 1}


class TestNestedKeys:
    def test_dotted_path_creates_mappings(self) -> None:
        assert parse("a.b.c=x") == {"a": {"b": {"c": "x"}}}

    def test_dotted_path_extends_existing_mapping(self) -> None:
        mapping: dict[str, Any] = {"a": {"x": 1}}
        apply_override(mapping, "a.y=2")
        assert mapping == {"a": {"x": 1, "y": 2}}

    def test_scalar_assignment_replaces_mapping(self) -> None:
        mapping: dict[str, Any] = {"a": {"x": 1}}
        apply_override(mapping, "a=1")
        assert mapping == {"a": 1}

    def test_dotted_path_through_scalar_replaces_it(self) -> None:
        mapping: dict[str, Any] = {"a": "scalar"}
        apply_override(mapping, "a.b=1")
        assert mapping == {"a": {"b": 1}}

    def test_nesting_limit(self) -> None:
        allowed = ".".join(["k"] * 31) + "=1"
        too_deep = ".".join(["k"] * 32) + "=1"

        parse(allowed)
        with pytest.raises(OverrideSyntaxError, match="nested level"):
            parse(too_deep)


class TestLists:
    def test_index_assignment_pads_with_none(self) -> None:
        assert parse("l[0]=a,l[2]=c") == {"l": ["a", None, "c"]}

    def test_index_updates_existing_list(self) -> None:
        mapping: dict[str, Any] = {"l": ["p", "q"]}
        apply_override(mapping, "l[1]=x")
        assert mapping == {"l": ["p", "x"]}

    def test_index_with_nested_key(self) -> None:
        result = parse("servers[0].port=80,servers[0].host=h")
        assert result == {"servers": [{"port": 80, "host": "h"}]}

    def test_nested_index(self) -> None:
        assert parse("m[0][1]=x") == {"m": [[None, "x"]]}

    def test_brace_list(self) -> None:
        assert parse("names={a,b,c}") == {"names": ["a", "b", "c"]}

    def test_brace_list_followed_by_assignment(self) -> None:
        assert parse("nums={1,2},x=y") == {"nums": [1, 2], "x": "y"}

    def test_empty_brace_list(self) -> None:
        assert parse("empty={}") == {"empty": []}


class TestEscapes:
    def test_escaped_dot_in_key(self) -> None:
        assert parse(r"a\.b=c") == {"a.b": "c"}

    def test_escaped_comma_in_value(self) -> None:
        assert parse(r"a=x\,y") == {"a": "x,y"}


class TestTypedValues:
    def test_types(self) -> None:
        result = parse("t=true,f=FALSE,n=null,z=0,i=42,neg=-7,lead=007,s=hello,fl=1.5")
        assert result == {
            "t": True,
            "f": False,
            "n": None,
            "z": 0,
            "i": 42,
            "neg": -7,
            "lead": "007",
            "s": "hello",
            "fl": "1.5",
        }

    def test_string_values_disable_typing(self) -> None:
        assert parse("i=42,t=true,n=null", string_values=True) == {
            "i": "42",
            "t": "true",
            "n": "null",
        }

    def test_out_of_range_integer_stays_string(self) -> None:
        assert typed_value("99999999999999999999") == "99999999999999999999"


class TestSyntaxErrors:
    @pytest.mark.parametrize(
        ("spec", "message"),
        [
            ("a", "has no value"),
            ("a,b=1", r"cannot end with ,"),
            ("a.b", "has no value"),
            ("=1", "empty key"),
            ("l[x]=1", "invalid index"),
            ("l[-1]=1", "negative -1 index not allowed"),
            ("l[1", "unterminated index"),
            ("l[70000]=1", "greater than maximum"),
            ("l[0]x=1", "unexpected data at end of array index"),
            ("l[0]", "has no value"),
            ("a={x,y", "list must terminate"),
            ("a={x}y", "after list"),
        ],
    )
    def test_rejects_malformed_spec(self, spec: str, message: str) -> None:
        with pytest.raises(OverrideSyntaxError, match=message):
            parse(spec)

    def test_error_carries_spec(self) -> None:
        with pytest.raises(OverrideSyntaxError) as exc_info:
            parse("broken")

        assert exc_info.value.spec == "broken"
        assert "broken" in str(exc_info.value)
        assert isinstance(exc_info.value, ValueError)
