from datetime import date
from typing import Annotated, Any, Dict, Optional

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

NonEmpty = Annotated[str, Field(min_length=1)]


class RequestModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, extra="ignore")


class FormSubmissionInput(RequestModel):
    page_slug: NonEmpty
    form_block_id: NonEmpty
    form_data: Dict[str, Any]
    honeypot: Optional[str] = None


class SubmissionFilters(RequestModel):
    page_id: Optional[str] = None
    form_block_id: Optional[str] = None
    search: Optional[str] = None
    start_date: Optional[date] = None
    end_date: Optional[date] = None
    limit: Annotated[int, Field(ge=1, le=200)] = 50
    offset: Annotated[int, Field(ge=0)] = 0
