from sitebuilder.extensions import db
from .base import BaseModel

HOME_SLUG = "home"
HOME_PAGE_KEY = "home"


class Page(BaseModel):
    __tablename__ = 'pages'

    title = db.Column(db.String(200), nullable=False)
    slug = db.Column(db.String(200), nullable=False, unique=True, index=True)
    page_key = db.Column(db.String(100), nullable=True, unique=True)
    description = db.Column(db.Text, nullable=True)
    status = db.Column(db.String(50), default='draft', nullable=False, index=True)
    published_at = db.Column(db.DateTime(timezone=True), nullable=True)

    # Canonical V2 layout document
    layout = db.Column(db.JSON, nullable=False, default=lambda: {"version": 2, "sections": []})

    submissions = db.relationship(
        "FormSubmission",
        back_populates="page",
        cascade="all, delete-orphan",
    )

    @property
    def is_home(self) -> bool:
        return self.slug == HOME_SLUG or self.page_key == HOME_PAGE_KEY
