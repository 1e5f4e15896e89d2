"""Document record models sent to the Indx ingestion endpoint."""

from typing import Any, Dict

from pydantic import BaseModel, ConfigDict, Field


class DocumentRecord(BaseModel):
    """
    One indexable unit of text.

    Records produced from the same source line share ``document_key`` and are
    ordered by ``segment_number``. Serialised with the wire field names
    (``documentKey``, ``documentTextToBeIndexed`` ...).
    """

    model_config = ConfigDict(populate_by_name=True, frozen=True)

    deleted: bool = Field(default=False, description="Tombstone flag; never set by this pipeline")
    client_information: str = Field(
        default="",
        alias="documentClientInformation",
        description="Free-form passthrough field, always empty here",
    )
    document_key: int = Field(
        ..., alias="documentKey", ge=0, description="Zero-based source line index"
    )
    text: str = Field(..., alias="documentTextToBeIndexed", description="Trimmed segment text")
    segment_number: int = Field(
        default=0, alias="segmentNumber", ge=0, description="Zero-based segment index within the line"
    )

    def to_wire(self) -> Dict[str, Any]:
        """Return the JSON payload shape expected by the Indx API."""
        return self.model_dump(by_alias=True)
