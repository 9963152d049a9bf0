"""
Input schema for layout documents written by the page-builder editor.

Two generations are accepted:

- V1: `{version: 1, columns, cols: [{id?, blocks}]}` (flat columns)
- V2: `{version: 2, sections: [{id, columns, cols, settings}]}`

Blocks are a tagged union on `type`. The hero block carries either the
legacy flat V1 data or the V2 composite data with nested `left` / `right`
blocks, so the union is recursive.

Unknown keys are dropped, except on section settings which pass through.
"""
from typing import Annotated, List, Literal, Optional, Union

from pydantic import (
    BaseModel,
    ConfigDict,
    Discriminator,
    Field,
    Tag,
    TypeAdapter,
    ValidationError,
    field_validator,
)
from pydantic.alias_generators import to_camel

from sitebuilder.domain.invariants.exceptions import LayoutValidationError
from .fields import is_iso_date


class LayoutModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


NonEmptyStr = Annotated[str, Field(min_length=1)]
NullableStr = Optional[str]
Number = Union[int, float]
LinkMode = Literal["page", "manual"]
SizePreset = Literal[25, 50, 75, 100]
Align = Literal["left", "center", "right"]
ButtonVariant = Literal["primary", "secondary", "ghost"]


# -------------------------------------------------
# Block base
# -------------------------------------------------
class BaseBlock(LayoutModel):
    id: Optional[Annotated[str, Field(min_length=6)]] = None
    created_at: NullableStr = None
    updated_at: NullableStr = None
    is_locked: Optional[bool] = None
    visible: Optional[bool] = None
    col_span: Optional[Annotated[int, Field(ge=1, le=999)]] = None
    row_index: Optional[Annotated[int, Field(ge=0)]] = None

    @field_validator("created_at", "updated_at")
    @classmethod
    def _iso_datetime(cls, value):
        if value is not None and not is_iso_date(value):
            raise ValueError("must be an ISO 8601 datetime")
        return value


# -------------------------------------------------
# Block payloads
# -------------------------------------------------
class TextData(LayoutModel):
    content_html: str = ""
    width: Optional[Literal["normal", "wide"]] = None
    background: Optional[Literal["none", "soft"]] = None


class ImageData(LayoutModel):
    media_id: NullableStr = None
    src: NonEmptyStr
    alt: NullableStr = None
    title: NullableStr = None
    caption: NullableStr = None
    size: Optional[SizePreset] = None
    align: Optional[Align] = None
    crop_ratio: Optional[Literal["16:9", "9:16", "1:1", "4:3", "free"]] = None
    natural_width: Optional[Number] = None
    natural_height: Optional[Number] = None
    crop_x: Optional[Number] = None
    crop_y: Optional[Number] = None
    crop_width: Optional[Number] = None
    crop_height: Optional[Number] = None
    height_pct: Optional[Annotated[Number, Field(ge=0, le=100)]] = None


class ButtonData(LayoutModel):
    label: NonEmptyStr
    href: NonEmptyStr
    link_mode: Optional[LinkMode] = None
    page_key: NullableStr = None
    page_id: NullableStr = None
    slug: NullableStr = None
    new_tab: Optional[bool] = None
    variant: Optional[ButtonVariant] = None
    icon: NullableStr = None


class CardItem(LayoutModel):
    id: NonEmptyStr
    icon: NullableStr = None
    icon_type: Optional[Literal["emoji", "image"]] = None
    icon_image_url: NullableStr = None
    icon_image_id: NullableStr = None
    icon_alt: NullableStr = None
    title: NonEmptyStr
    text: NonEmptyStr
    cta_label: NullableStr = None
    cta_href: NullableStr = None


class CardsData(LayoutModel):
    title: NullableStr = None
    subtitle: NullableStr = None
    items: Annotated[List[CardItem], Field(min_length=1, max_length=12)]
    layout: Literal["auto", "2", "3", "4"] = "auto"
    variant: Literal["feature", "simple", "borderless", "earthy"] = "feature"


class FormField(LayoutModel):
    id: NonEmptyStr
    type: Literal["text", "email", "tel", "textarea", "select"]
    label: NonEmptyStr
    placeholder: NullableStr = None
    required: bool
    options: Optional[List[str]] = None


class FormData(LayoutModel):
    title: NullableStr = None
    description: NullableStr = None
    fields: Annotated[List[FormField], Field(min_length=1, max_length=20)]
    submit_label: Optional[str] = None
    success_message: Optional[str] = None
    store_summary_keys: Optional[List[str]] = None


class ButtonGroupButton(LayoutModel):
    id: Optional[NonEmptyStr] = None
    label: NonEmptyStr
    href: NonEmptyStr
    link_mode: Optional[LinkMode] = None
    page_key: NullableStr = None
    page_id: NullableStr = None
    slug: NullableStr = None
    new_tab: Optional[bool] = None
    variant: Optional[ButtonVariant] = None
    icon: NullableStr = None


class ButtonGroupData(LayoutModel):
    buttons: Annotated[List[ButtonGroupButton], Field(max_length=5)]
    alignment: Optional[Align] = None
    align: Optional[Literal["start", "center", "end"]] = None
    stack_on_mobile: Optional[bool] = None


class PillItem(LayoutModel):
    text: str
    href: NullableStr = None
    link_mode: Optional[Literal["manual", "article"]] = None
    article_slug: NullableStr = None


class PillsData(LayoutModel):
    pills: Annotated[List[Union[str, PillItem]], Field(max_length=10)] = Field(default_factory=list)
    items: Optional[Annotated[List[str], Field(max_length=10)]] = None  # legacy
    size: Optional[Literal["xs", "sm", "md"]] = None
    variant: Optional[Literal["neutral", "primary", "accent"]] = None


class SpanData(LayoutModel):
    kind: Optional[Literal["accent-bar", "divider", "spacer"]] = None


class RecentPostsData(LayoutModel):
    title: Optional[str] = None
    subtitle: Optional[str] = None
    cta_label: Optional[str] = None
    cta_href: Optional[str] = None
    cta_link_mode: Optional[LinkMode] = None
    cta_page_key: NullableStr = None
    cta_page_id: NullableStr = None
    cta_slug: NullableStr = None
    posts_limit: Optional[Annotated[int, Field(ge=1, le=12)]] = None


class SocialLinksData(LayoutModel):
    title: NullableStr = None
    variant: Optional[Literal["list", "chips", "buttons"]] = None
    show_icons: Optional[bool] = None
    columns: Optional[Literal[1, 2, 3]] = None
    align: Optional[Align] = None


class WhatsAppCtaData(LayoutModel):
    label: Optional[str] = None
    style: Optional[Literal["primary", "secondary"]] = None
    open_in_new_tab: Optional[bool] = None
    hide_when_disabled: Optional[bool] = None


class ContactInfoData(LayoutModel):
    title_html: str
    description_html: Optional[str] = None
    whatsapp_label: str
    whatsapp_variant: Literal["primary", "secondary", "tertiary"]
    social_links_title: str
    social_links_variant: Literal["list", "icons"]


class ServicesItem(LayoutModel):
    id: NonEmptyStr
    title: NonEmptyStr
    description: Optional[Annotated[str, Field(max_length=160)]] = None
    href: NonEmptyStr


class ServicesData(LayoutModel):
    section_title: NonEmptyStr
    items: Annotated[List[ServicesItem], Field(min_length=1, max_length=8)]
    button_label: Optional[str] = None


class CtaData(LayoutModel):
    title: NullableStr = None
    text: NullableStr = None
    cta_label: NullableStr = None
    cta_href: NullableStr = None
    cta_link_mode: Optional[LinkMode] = None
    cta_page_key: NullableStr = None
    cta_page_id: NullableStr = None
    cta_slug: NullableStr = None
    image_id: NullableStr = None
    image_url: NullableStr = None
    image_alt: NullableStr = None


class MediaTextData(LayoutModel):
    content_html: str = ""
    image_id: NullableStr = None
    image_url: NullableStr = None
    image_alt: NullableStr = None
    image_side: Optional[Literal["left", "right"]] = None
    image_width: Optional[SizePreset] = None
    image_height: Optional[SizePreset] = None
    image_width_pct: Optional[Number] = None  # legacy


# -------------------------------------------------
# Hero payloads
# -------------------------------------------------
class HeroCard(LayoutModel):
    title: NullableStr = None
    text: NullableStr = None
    icon: NullableStr = None
    image_id: NullableStr = None
    url: NullableStr = None
    alt: NullableStr = None


class HeroFocal(LayoutModel):
    x: Number
    y: Number
    zoom: Number


class HeroImage(LayoutModel):
    image_id: NullableStr = None
    url: NullableStr = None
    alt: NullableStr = None
    focal: Optional[HeroFocal] = None


class HeroSingleCard(LayoutModel):
    quote: NullableStr = None
    author: NullableStr = None


class HeroFourCards(LayoutModel):
    medium: HeroCard
    small: Optional[Annotated[List[HeroCard], Field(min_length=3, max_length=3)]] = None


class HeroDataV1(LayoutModel):
    version: Optional[Literal[1]] = None
    heading: NullableStr = None
    subheading: NullableStr = None
    cta_label: NullableStr = None
    cta_href: NullableStr = None
    cta_link_mode: Optional[LinkMode] = None
    cta_page_key: NullableStr = None
    cta_page_id: NullableStr = None
    cta_slug: NullableStr = None
    secondary_cta: NullableStr = None
    secondary_href: NullableStr = None
    secondary_link_mode: Optional[LinkMode] = None
    secondary_page_key: NullableStr = None
    secondary_page_id: NullableStr = None
    secondary_slug: NullableStr = None
    badges: Optional[List[str]] = None
    media_mode: Optional[Literal["single_image", "cards_only", "four_cards", "single_card"]] = None
    single_image: Optional[HeroImage] = None
    single_card: Optional[HeroSingleCard] = None
    four_cards: Optional[HeroFourCards] = None


class HeroDataV2(LayoutModel):
    version: Literal[2]
    layout: Literal["two-col"]
    layout_variant: Optional[Literal["split", "stacked"]] = None
    image_height: Optional[
        Union[Literal["sm", "md", "lg", "xl"], Annotated[int, Field(ge=120, le=2000)]]
    ] = None
    left: List["PageBlock"]
    right: List["PageBlock"]
    right_variant: Literal["image-only", "cards-only", "cards-with-image"]


def _hero_data_tag(value) -> str:
    version = value.get("version") if isinstance(value, dict) else getattr(value, "version", None)
    return "v2" if version == 2 else "v1"


HeroData = Annotated[
    Union[Annotated[HeroDataV1, Tag("v1")], Annotated[HeroDataV2, Tag("v2")]],
    Discriminator(_hero_data_tag),
]


# -------------------------------------------------
# Blocks
# -------------------------------------------------
class TextBlock(BaseBlock):
    type: Literal["text"]
    data: TextData


class ImageBlock(BaseBlock):
    type: Literal["image"]
    data: ImageData


class ButtonBlock(BaseBlock):
    type: Literal["button"]
    data: ButtonData


class ButtonGroupBlock(BaseBlock):
    type: Literal["buttonGroup"]
    data: ButtonGroupData


class PillsBlock(BaseBlock):
    type: Literal["pills"]
    data: PillsData


class SpanBlock(BaseBlock):
    type: Literal["span"]
    data: SpanData


class RecentPostsBlock(BaseBlock):
    type: Literal["recent-posts"]
    data: RecentPostsData


class SocialLinksBlock(BaseBlock):
    type: Literal["social-links"]
    data: SocialLinksData


class WhatsAppCtaBlock(BaseBlock):
    type: Literal["whatsapp-cta"]
    data: WhatsAppCtaData


class ContactInfoBlock(BaseBlock):
    type: Literal["contact-info"]
    data: ContactInfoData


class ServicesBlock(BaseBlock):
    type: Literal["services"]
    data: ServicesData


class CtaBlock(BaseBlock):
    type: Literal["cta"]
    data: CtaData


class MediaTextBlock(BaseBlock):
    type: Literal["media-text"]
    data: MediaTextData


class CardsBlock(BaseBlock):
    type: Literal["cards"]
    data: CardsData


class FormBlock(BaseBlock):
    type: Literal["form"]
    data: FormData


class HeroBlock(BaseBlock):
    type: Literal["hero"]
    data: HeroData


PageBlock = Annotated[
    Union[
        TextBlock,
        ImageBlock,
        ButtonBlock,
        ButtonGroupBlock,
        PillsBlock,
        SpanBlock,
        RecentPostsBlock,
        SocialLinksBlock,
        WhatsAppCtaBlock,
        ContactInfoBlock,
        ServicesBlock,
        CtaBlock,
        MediaTextBlock,
        CardsBlock,
        FormBlock,
        HeroBlock,
    ],
    Field(discriminator="type"),
]

HeroDataV2.model_rebuild()
HeroBlock.model_rebuild()


# -------------------------------------------------
# Layouts
# -------------------------------------------------
class SectionSettings(LayoutModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, extra="allow")

    background: Optional[Literal["none", "soft", "dark", "earthy"]] = None
    background_style: Optional[Literal["none", "soft", "dark", "earthy"]] = None
    padding: Optional[Literal["normal", "compact", "large"]] = None
    density: Optional[Literal["compact", "normal", "large"]] = None
    height: Optional[Literal["normal", "tall"]] = None
    max_width: Optional[Literal["normal", "wide"]] = None
    width: Optional[Literal["normal", "wide"]] = None
    columns_layout: Optional[Literal[2, 3]] = None


class SectionColumn(LayoutModel):
    id: NonEmptyStr
    blocks: List[PageBlock] = Field(default_factory=list)


class Section(LayoutModel):
    id: NonEmptyStr
    kind: Optional[Literal["hero", "normal"]] = None
    columns: Annotated[int, Field(ge=1, le=3)]
    columns_layout: Optional[Literal[2, 3]] = None
    cols: Annotated[List[SectionColumn], Field(min_length=1, max_length=3)]
    settings: Optional[SectionSettings] = None


class LegacyColumn(LayoutModel):
    id: Optional[NonEmptyStr] = None
    blocks: List[PageBlock] = Field(default_factory=list)


class LayoutV1(LayoutModel):
    version: Literal[1]
    columns: Annotated[int, Field(ge=1, le=3)] = 1
    cols: List[LegacyColumn] = Field(default_factory=list)


class LayoutV2(LayoutModel):
    version: Literal[2]
    sections: List[Section] = Field(default_factory=list)


PageLayout = Annotated[Union[LayoutV1, LayoutV2], Field(discriminator="version")]

_layout_adapter = TypeAdapter(PageLayout)
_block_adapter = TypeAdapter(PageBlock)


def flatten_issues(exc: ValidationError) -> list:
    return [
        {
            "path": ".".join(str(part) for part in err["loc"]),
            "message": err["msg"],
        }
        for err in exc.errors()
    ]


def parse_layout(raw) -> Union[LayoutV1, LayoutV2]:
    try:
        return _layout_adapter.validate_python(raw)
    except ValidationError as exc:
        raise LayoutValidationError("Layout validation failed", issues=flatten_issues(exc)) from exc


def parse_block(raw):
    """Validate one raw block. Raises pydantic.ValidationError."""
    return _block_adapter.validate_python(raw)
