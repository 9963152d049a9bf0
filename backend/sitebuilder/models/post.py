from sitebuilder.extensions import db
from .base import BaseModel


class Post(BaseModel):
    __tablename__ = 'posts'

    title = db.Column(db.String(200), nullable=False)
    slug = db.Column(db.String(200), nullable=False, unique=True, index=True)
    excerpt = db.Column(db.Text, nullable=False)
    # Sanitized HTML
    content = db.Column(db.Text, nullable=False)
    cover_image_url = db.Column(db.String(500), nullable=True)
    cover_image_alt = db.Column(db.String(200), nullable=True)
    tags = db.Column(db.JSON, nullable=False, default=list)

    status = db.Column(db.String(50), default='draft', nullable=False, index=True)
    published_at = db.Column(db.DateTime(timezone=True), nullable=True, index=True)
    is_featured = db.Column(db.Boolean, default=False, nullable=False)
    views = db.Column(db.Integer, default=0, nullable=False)
