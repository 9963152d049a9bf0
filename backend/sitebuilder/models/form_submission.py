from sitebuilder.extensions import db
from .base import BaseModel


class FormSubmission(BaseModel):
    __tablename__ = "form_submissions"

    __table_args__ = (
        db.Index("ix_form_submission_page_block", "page_id", "form_block_id"),
    )

    page_id = db.Column(
        db.String(36),
        db.ForeignKey("pages.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    form_block_id = db.Column(db.String(100), nullable=False)

    data = db.Column(db.JSON, nullable=False, default=dict)
    summary = db.Column(db.JSON, nullable=True)

    user_agent = db.Column(db.String(512), nullable=True)
    ip = db.Column(db.String(64), nullable=True)

    page = db.relationship("Page", back_populates="submissions")
