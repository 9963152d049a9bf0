"""Site settings payload."""
import re
from typing import Annotated, List, Literal, Optional

from pydantic import EmailStr, Field, HttpUrl, TypeAdapter, ValidationError, field_validator

from sitebuilder.application.cms.schemas import RequestModel
from sitebuilder.domain.layout.fields import new_id

SocialPlatform = Literal[
    "instagram", "whatsapp", "facebook", "linkedin", "youtube", "tiktok",
    "x", "site", "email", "telefone", "custom",
]

_http_url = TypeAdapter(HttpUrl)
_CONTACT_SCHEME_RE = re.compile(r"^(mailto|tel):", re.IGNORECASE)


class SocialLink(RequestModel):
    id: str = Field(default_factory=new_id)
    platform: SocialPlatform
    label: Optional[str] = None
    url: Annotated[str, Field(min_length=3)]
    order: Optional[int] = None
    is_visible: bool = True

    @field_validator("url")
    @classmethod
    def _link(cls, value):
        value = value.strip()
        if _CONTACT_SCHEME_RE.match(value):
            return value
        try:
            _http_url.validate_python(value)
        except ValidationError as exc:
            raise ValueError("must be an http(s), mailto: or tel: link") from exc
        return value


class SiteSettingsInput(RequestModel):
    site_name: Annotated[str, Field(min_length=2)]
    brand_tagline: Optional[Annotated[str, Field(max_length=80)]] = None
    cnpj: Optional[str] = None
    crp: Optional[Annotated[str, Field(max_length=32)]] = None
    contact_email: Optional[EmailStr] = None
    logo_url: Optional[HttpUrl] = None
    socials: List[SocialLink] = Field(default_factory=list)
    whatsapp_enabled: bool = False
    whatsapp_link: Optional[Annotated[str, Field(min_length=3)]] = None
    whatsapp_message: Optional[str] = None
    whatsapp_position: Literal["right", "left"] = "right"
    hide_schedule_cta: bool = False

    @field_validator("cnpj")
    @classmethod
    def _cnpj_digits(cls, value):
        digits = re.sub(r"\D", "", value or "")
        if digits and len(digits) != 14:
            raise ValueError("CNPJ must have 14 digits")
        return digits or None

    @field_validator("crp", "brand_tagline")
    @classmethod
    def _blank_is_none(cls, value):
        return (value or "").strip() or None
