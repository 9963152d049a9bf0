from sitebuilder.extensions import db
from .base import BaseModel

SITE_SETTINGS_ID = "default"


class SiteSettings(BaseModel):
    """Single row (id `default`) holding site-wide identity and contact data."""

    __tablename__ = 'site_settings'

    site_name = db.Column(db.String(200), nullable=False, default="Meu Site")
    brand_tagline = db.Column(db.String(80), nullable=True)
    cnpj = db.Column(db.String(14), nullable=True)
    crp = db.Column(db.String(32), nullable=True)
    contact_email = db.Column(db.String(254), nullable=True)
    logo_url = db.Column(db.String(500), nullable=True)

    # [{id, platform, label, url, order, is_visible}]
    socials = db.Column(db.JSON, nullable=False, default=list)

    whatsapp_enabled = db.Column(db.Boolean, nullable=False, default=False)
    whatsapp_link = db.Column(db.String(500), nullable=True)
    whatsapp_message = db.Column(db.Text, nullable=True)
    whatsapp_position = db.Column(db.String(10), nullable=False, default="right")
    hide_schedule_cta = db.Column(db.Boolean, nullable=False, default=False)
