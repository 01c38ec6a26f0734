"""Base classes shared by filter and record models."""

from typing import Any

from pydantic import BaseModel, ConfigDict


class ListFilter(BaseModel):
    """Optional constraints narrowing a single list call."""

    model_config = ConfigDict(extra="forbid")

    def to_params(self) -> dict[str, Any]:
        """Return the filter as a flat mapping for query string encoding.

        Unset fields are dropped; enum members become their upstream literal.

        Returns:
            Mapping of field name to scalar or list value, in declaration order
        """
        return self.model_dump(mode="json", exclude_none=True)


class Record(BaseModel):
    """Upstream resource record.

    All fields are optional and unknown fields are kept, so a record carries
    the upstream payload through unchanged.
    """

    model_config = ConfigDict(extra="allow", populate_by_name=True)

    def to_dict(self) -> dict[str, Any]:
        """Return the record in its upstream (wire) shape."""
        return self.model_dump(mode="json", by_alias=True, exclude_unset=True)
