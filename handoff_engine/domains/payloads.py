"""
Workflow payloads passed along with a handoff.

The engine never looks inside a payload beyond its ``kind`` and field
names; agent-specific shapes are carried as typed variants or as an
opaque blob.
"""
import logging
from typing import Any, Dict, List, Literal, Optional, Union

from pydantic import BaseModel, Field, TypeAdapter, ValidationError
from typing_extensions import Annotated


class BasePayload(BaseModel):
    """Shared behaviour for payload variants."""

    def field_names(self) -> List[str]:
        """Names of populated fields, excluding the discriminator."""
        data = self.model_dump(exclude_none=True, exclude={"kind"})
        return sorted(data.keys())


class ContentDraftPayload(BasePayload):
    """Draft content produced by a content agent."""
    kind: Literal["content_draft"] = "content_draft"
    title: str = Field(..., description="Working title")
    body: str = Field("", description="Draft body")
    keywords: List[str] = Field(default_factory=list)


class CampaignPayload(BasePayload):
    """Marketing campaign brief."""
    kind: Literal["campaign"] = "campaign"
    campaign_id: Optional[str] = None
    channels: List[str] = Field(default_factory=list)
    objectives: List[str] = Field(default_factory=list)


class BrandAssetsPayload(BasePayload):
    """Brand identity assets (logos, palettes, voice guides)."""
    kind: Literal["brand_assets"] = "brand_assets"
    brand_name: str = Field(..., description="Brand the assets belong to")
    assets: Dict[str, str] = Field(
        default_factory=dict, description="Asset name to URL or value")


class AnalyticsReportPayload(BasePayload):
    """Metrics gathered by an analytics agent."""
    kind: Literal["analytics_report"] = "analytics_report"
    period: Optional[str] = None
    metrics: Dict[str, float] = Field(default_factory=dict)


class OpaquePayload(BasePayload):
    """Any payload the engine has no typed variant for."""
    kind: Literal["opaque"] = "opaque"
    data: Dict[str, Any] = Field(default_factory=dict)

    def field_names(self) -> List[str]:
        return sorted(self.data.keys())


WorkflowPayload = Annotated[
    Union[
        ContentDraftPayload,
        CampaignPayload,
        BrandAssetsPayload,
        AnalyticsReportPayload,
        OpaquePayload,
    ],
    Field(discriminator="kind"),
]

logger = logging.getLogger(__name__)

_payload_adapter = TypeAdapter(WorkflowPayload)
_KNOWN_KINDS = {"content_draft", "campaign", "brand_assets", "analytics_report", "opaque"}


def coerce_payload(value: Any) -> Optional[BasePayload]:
    """Convert caller-supplied workflow data into a payload variant.

    Dicts with a known ``kind`` are validated against that variant; anything
    else (including a dict whose typed validation fails) is wrapped as an
    OpaquePayload.
    """
    if value is None:
        return None
    if isinstance(value, BasePayload):
        return value
    if isinstance(value, BaseModel):
        return OpaquePayload(data=value.model_dump())
    if isinstance(value, dict):
        if value.get("kind") in _KNOWN_KINDS:
            try:
                return _payload_adapter.validate_python(value)
            except ValidationError as e:
                logger.debug(f"Payload did not match kind '{value['kind']}', keeping it opaque: {e}")
        data = {k: v for k, v in value.items() if k != "kind"}
        return OpaquePayload(data=data)
    return OpaquePayload(data={"value": value})
