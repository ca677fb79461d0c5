"""
Unit tests for the JRD models in net.webfinger.model.jrd

Tests cover decoding of the RFC 6415 example document, property lookup semantics for
absent and null values, first-match link lookup, and serialization.
"""

import json
from datetime import datetime, timezone

import pytest

from net.webfinger.errors import DecodeError
from net.webfinger.model.jrd import JRD, Link, parse_jrd

# Example JRD from RFC 6415 appendix A
EXAMPLE_JRD = b"""
{
  "subject":"http://blog.example.com/article/id/314",
  "expires":"2010-01-30T09:30:00Z",

  "aliases":[
    "http://blog.example.com/cool_new_thing",
    "http://blog.example.com/steve/article/7"],

  "properties":{
    "http://blgx.example.net/ns/version":"1.3",
    "http://blgx.example.net/ns/ext":null
  },

  "links":[
    {
      "rel":"author",
      "type":"text/html",
      "href":"http://blog.example.com/author/steve",
      "titles":{
        "default":"About the Author",
        "en-us":"Author Information"
      },
      "properties":{
        "http://example.com/role":"editor"
      }
    },
    {
      "rel":"author",
      "href":"http://example.com/author/john",
      "titles":{
        "default":"The other author"
      }
    },
    {
      "rel":"copyright",
      "template":"http://example.com/copyright?id={uri}"
    }
  ]
}
"""


@pytest.fixture
def example_jrd() -> JRD:
    return parse_jrd(EXAMPLE_JRD)


class TestParseJrd:
    """Test suite for parse_jrd function."""

    def test_subject(self, example_jrd):
        assert example_jrd.subject == "http://blog.example.com/article/id/314"

    def test_expires(self, example_jrd):
        """Test expires is decoded as an aware timestamp."""
        assert example_jrd.expires == datetime(2010, 1, 30, 9, 30, tzinfo=timezone.utc)

    def test_aliases_keep_order(self, example_jrd):
        assert example_jrd.aliases == [
            "http://blog.example.com/cool_new_thing",
            "http://blog.example.com/steve/article/7",
        ]

    def test_links_keep_order(self, example_jrd):
        assert [link.href for link in example_jrd.links] == [
            "http://blog.example.com/author/steve",
            "http://example.com/author/john",
            "",
        ]

    def test_null_property_is_preserved(self, example_jrd):
        """Test a null property stays present and distinct from an absent one."""
        assert "http://blgx.example.net/ns/ext" in example_jrd.properties
        assert example_jrd.properties["http://blgx.example.net/ns/ext"] is None
        assert "does-not-exist" not in example_jrd.properties

    def test_subject_only(self):
        """Test a minimal document leaves every other field empty."""
        jrd = parse_jrd(b'{"subject":"bob@example.com"}')
        assert jrd == JRD(subject="bob@example.com")
        assert jrd.expires is None
        assert jrd.aliases == []
        assert jrd.properties == {}
        assert jrd.links == []

    def test_accepts_str(self):
        assert parse_jrd('{"aliases":["a"]}').aliases == ["a"]

    def test_ignores_unknown_members(self):
        jrd = parse_jrd(b'{"subject":"acct:bob@example.com","extension":{"a":1}}')
        assert jrd.subject == "acct:bob@example.com"

    def test_null_members_decode_as_empty(self):
        """Test members sent as null read as their empty value."""
        jrd = parse_jrd(
            b'{"subject":null,"aliases":null,"properties":null,"links":null}'
        )
        assert jrd == JRD()

    def test_null_link_members_decode_as_empty(self):
        jrd = parse_jrd(
            b'{"links":[{"rel":"self","type":null,"href":null,'
            b'"template":null,"titles":null,"properties":null}]}'
        )
        assert jrd.links == [Link(rel="self")]
        assert json.loads(jrd.to_json()) == {"links": [{"rel": "self"}]}

    def test_null_aliases(self):
        jrd = parse_jrd(b'{"subject":"acct:bob@example.com","aliases":null}')
        assert jrd.aliases == []

    def test_link_null_property_is_preserved(self):
        jrd = parse_jrd(b'{"links":[{"rel":"self","properties":{"p":null}}]}')
        assert jrd.links[0].properties == {"p": None}
        assert jrd.links[0].get_property("p") == ""


class TestParseJrdErrors:
    """Test suite for documents parse_jrd must reject."""

    @pytest.mark.parametrize(
        "blob",
        [
            b"`",
            b"",
            b"[]",
            b'{"aliases":"not-a-list"}',
            b'{"links":[{"href":"http://example.com/"}]}',
            b'{"expires":"yesterday"}',
            b'{"properties":{"p":5}}',
        ],
    )
    def test_parse_jrd_rejects(self, blob):
        with pytest.raises(DecodeError):
            parse_jrd(blob)

    def test_decode_error_chains_cause(self):
        with pytest.raises(DecodeError) as exc_info:
            parse_jrd(b"`")
        assert exc_info.value.__cause__ is not None


class TestGetProperty:
    """Test suite for JRD.get_property and Link.get_property."""

    def test_present_value(self, example_jrd):
        assert example_jrd.get_property("http://blgx.example.net/ns/version") == "1.3"

    def test_null_value(self, example_jrd):
        assert example_jrd.get_property("http://blgx.example.net/ns/ext") == ""

    def test_absent_value(self, example_jrd):
        assert example_jrd.get_property("does-not-exist") == ""

    def test_link_property(self, example_jrd):
        link = example_jrd.get_link_by_rel("author")
        assert link.get_property("http://example.com/role") == "editor"
        assert link.get_property("does-not-exist") == ""


class TestGetLinkByRel:
    """Test suite for JRD.get_link_by_rel."""

    def test_first_match_wins(self, example_jrd):
        """Test the first of several links sharing a rel is returned."""
        link = example_jrd.get_link_by_rel("author")
        assert link.href == "http://blog.example.com/author/steve"
        assert link.titles["default"] == "About the Author"

    def test_template_link(self, example_jrd):
        link = example_jrd.get_link_by_rel("copyright")
        assert link is not None
        assert link.template == "http://example.com/copyright?id={uri}"

    def test_missing_rel(self, example_jrd):
        assert example_jrd.get_link_by_rel("does-not-exist") is None

    def test_no_links(self):
        assert JRD().get_link_by_rel("self") is None


class TestToJson:
    """Test suite for JRD.to_json."""

    def test_omits_unset_fields(self):
        jrd = JRD(subject="bob@example.com")
        assert json.loads(jrd.to_json()) == {"subject": "bob@example.com"}

    def test_keeps_null_properties(self):
        jrd = JRD(properties={"http://example.com/p": None})
        assert json.loads(jrd.to_json()) == {"properties": {"http://example.com/p": None}}

    def test_link_fields(self):
        jrd = JRD(links=[Link(rel="self", type="application/activity+json")])
        assert json.loads(jrd.to_json()) == {
            "links": [{"rel": "self", "type": "application/activity+json"}]
        }

    def test_expires_format(self, example_jrd):
        assert json.loads(example_jrd.to_json())["expires"] == "2010-01-30T09:30:00Z"

    def test_decodes_back(self, example_jrd):
        assert parse_jrd(example_jrd.to_json()) == example_jrd

    def test_indent(self):
        assert JRD(subject="a").to_json(indent=2) == '{\n  "subject": "a"\n}'
