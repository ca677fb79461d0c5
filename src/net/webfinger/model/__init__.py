"""
JRD Models

This package defines the JSON Resource Descriptor (JRD) returned by WebFinger servers,
using Pydantic for decoding and validation.

Key Models:
- jrd.py: The JRD document and its Link entries

Lookup semantics:
- Properties may be absent, present with a null value, or present with a string. Decoding
  preserves all three states; the get_property accessors read both absent and null as "".
- Links keep document order, and get_link_by_rel returns the first link with a matching rel.
"""
