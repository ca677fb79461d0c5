"""JSON Resource Descriptor models.

Implements the JRD document format from RFC 7033 section 4.4.
"""

from datetime import datetime
from typing import Any, Dict, List, Optional, Union

from pydantic import BaseModel, Field, ValidationError, field_validator

from net.webfinger.errors import DecodeError

JRD_MEDIA_TYPE = "application/jrd+json"


class Link(BaseModel):
    """A link relation of a JRD.

    Either href or template identifies the link target; titles map language tags
    (or "und") to human readable titles.
    """

    rel: str
    type: str = ""
    href: str = ""
    titles: Dict[str, str] = Field(default_factory=dict)
    properties: Dict[str, Optional[str]] = Field(default_factory=dict)
    template: str = ""

    @field_validator("type", "href", "template", mode="before")
    @classmethod
    def decode_null_string(cls, v: Any) -> Any:
        return "" if v is None else v

    @field_validator("titles", "properties", mode="before")
    @classmethod
    def decode_null_map(cls, v: Any) -> Any:
        return {} if v is None else v

    def get_property(self, uri: str) -> str:
        """Return the value of a link property, or "" if it is absent or null."""
        return self.properties.get(uri) or ""


class JRD(BaseModel):
    """A JSON Resource Descriptor describing a subject and its relations.

    Property values are Optional so that a property explicitly set to null stays
    distinguishable from one that is missing from the document.
    Other members sent as null decode as their empty value.
    """

    subject: str = ""
    expires: Optional[datetime] = None
    aliases: List[str] = Field(default_factory=list)
    properties: Dict[str, Optional[str]] = Field(default_factory=dict)
    links: List[Link] = Field(default_factory=list)

    @field_validator("subject", mode="before")
    @classmethod
    def decode_null_subject(cls, v: Any) -> Any:
        return "" if v is None else v

    @field_validator("aliases", "links", mode="before")
    @classmethod
    def decode_null_list(cls, v: Any) -> Any:
        return [] if v is None else v

    @field_validator("properties", mode="before")
    @classmethod
    def decode_null_map(cls, v: Any) -> Any:
        return {} if v is None else v

    def get_property(self, uri: str) -> str:
        """Return the value of a document property, or "" if it is absent or null."""
        return self.properties.get(uri) or ""

    def get_link_by_rel(self, rel: str) -> Optional[Link]:
        """Return the first link in document order whose rel matches, if any."""
        return next((link for link in self.links if link.rel == rel), None)

    def to_json(self, indent: Optional[int] = 2) -> str:
        """Serialize the document, leaving out fields that were not set.

        Null property values are kept.
        """
        return self.model_dump_json(indent=indent, exclude_defaults=True)


def parse_jrd(blob: Union[bytes, str]) -> JRD:
    """Decode a JRD document.

    Args:
        blob: JSON document text

    Returns:
        The decoded JRD

    Raises:
        DecodeError: If the text is not JSON or does not have the shape of a JRD
    """
    try:
        return JRD.model_validate_json(blob)
    except ValidationError as e:
        raise DecodeError.invalid_document(e) from e
