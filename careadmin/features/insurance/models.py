"""
Insurance Provider Models

Pydantic models for the insurance providers shown in the site carousel.
"""

from pydantic import Field
from typing import Annotated, Optional

from careadmin.shared.models import CamelModel, Document, NonNull


class InsuranceProviderCreate(CamelModel):
    """
    Payload for creating a provider.

    Attributes:
        name (str): Provider name (required)
        description (Optional[str]): Short description
        logo_url (Optional[str]): Public URL of the uploaded logo
        website_url (Optional[str]): Provider website
        sort_order (int): Carousel position
        is_active (bool): Shown on the public site
    """
    name: str = Field(..., min_length=1)
    description: Optional[str] = None
    logo_url: Optional[str] = None
    website_url: Optional[str] = None
    sort_order: int = 0
    is_active: bool = True


class InsuranceProviderUpdate(CamelModel):
    name: Annotated[Optional[str], NonNull] = Field(None, min_length=1)
    description: Optional[str] = None
    logo_url: Optional[str] = None
    website_url: Optional[str] = None
    sort_order: Annotated[Optional[int], NonNull] = None
    is_active: Annotated[Optional[bool], NonNull] = None


class InsuranceProvider(Document):
    name: str
    description: Optional[str] = None
    logo_url: Optional[str] = None
    website_url: Optional[str] = None
    sort_order: int = 0
    is_active: bool = True
