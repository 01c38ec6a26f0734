"""Tests for the filter query string codec."""

from cloudinv.api.query import build_query_string, parse_query_string
from cloudinv.models.vsphere import FolderType, PowerState


class TestBuildQueryString:
    """Tests for build_query_string."""

    def test_empty_mapping(self) -> None:
        assert build_query_string({}) == ""

    def test_none_values_skipped(self) -> None:
        assert build_query_string({"names": None, "vms": ["vm-1"]}) == "vms=vm-1"

    def test_sequence_joined_with_literal_comma(self) -> None:
        query = build_query_string({"clusters": ["cluster-1", "cluster-2"], "vms": ["vm-100"]})
        assert query == "clusters=cluster-1,cluster-2&vms=vm-100"

    def test_reserved_characters_escaped_per_member(self) -> None:
        query = build_query_string({"names": ["a,b", "c&d", "e=f", "g h"]})
        assert query == "names=a%2Cb,c%26d,e%3Df,g%20h"

    def test_unreserved_marks_left_alone(self) -> None:
        assert build_query_string({"names": ["it's-(ok)_~*!."]}) == "names=it's-(ok)_~*!."

    def test_enum_and_bool_scalars(self) -> None:
        query = build_query_string(
            {"type": FolderType.HOST, "power_states": [PowerState.POWERED_ON], "standalone": True}
        )
        assert query == "type=HOST&power_states=POWERED_ON&standalone=true"

    def test_empty_sequence_skipped(self) -> None:
        assert build_query_string({"names": [], "vms": ["vm-1"]}) == "vms=vm-1"
        assert build_query_string({"names": []}) == ""

    def test_unicode_is_utf8_encoded(self) -> None:
        assert build_query_string({"names": ["é"]}) == "names=%C3%A9"


class TestParseQueryString:
    """Tests for parse_query_string."""

    def test_empty(self) -> None:
        assert parse_query_string("") == {}
        assert parse_query_string("?") == {}

    def test_leading_question_mark(self) -> None:
        assert parse_query_string("?vms=vm-1,vm-2") == {"vms": ["vm-1", "vm-2"]}

    def test_recovers_built_mapping(self) -> None:
        params = {
            "names": ["web,01", "db&02", "x=y", "with space", "ünï"],
            "clusters": ["domain-c8"],
        }
        assert parse_query_string(build_query_string(params)) == params

    def test_empty_sequence_does_not_become_empty_value(self) -> None:
        parsed = parse_query_string(build_query_string({"names": [], "vms": ["vm-1"]}))
        assert parsed == {"vms": ["vm-1"]}
