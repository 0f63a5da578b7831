"""
Center Management Models

Pydantic models for locations, staff, treatment programs, testimonials and
site content blocks.

Data Model:
----------
- Create models: required fields plus defaults, used by POST
- Update models: every field optional, applied with exclude_unset;
  fields stored as non-null reject an explicit null
- Response models: Document subclasses carrying the string id
- Detail models: responses embedding related records

References between records (staff.locationId, testimonial.treatmentId,
link rows) hold the referenced document's id string.

Author: Care Admin Development Team
"""

from datetime import datetime
from pydantic import Field
from typing import Annotated, List, Literal, Optional

from careadmin.shared.models import CamelModel, Document, NonNull

DEFAULT_TAGLINE = "Leading Eating Disorder Treatment"
VideoPlatform = Literal["youtube", "vimeo"]


# Locations

class LocationCreate(CamelModel):
    """
    Payload for creating a location.

    Attributes:
        name, address, city, state, zip_code, phone: Required contact details
        featured_on_homepage (bool): Shown in the homepage strip
        sort_order (int): Listing position
        tagline (str): Headline shown on the location page
    """
    name: str = Field(..., min_length=1)
    address: str = Field(..., min_length=1)
    city: str = Field(..., min_length=1)
    state: str = Field(..., min_length=1)
    zip_code: str = Field(..., min_length=1)
    phone: str = Field(..., min_length=1)
    email: Optional[str] = None
    description: Optional[str] = None
    opening_hours: Optional[str] = None
    image_url: Optional[str] = None
    featured_on_homepage: bool = False
    sort_order: int = 0
    tagline: str = DEFAULT_TAGLINE


class LocationUpdate(CamelModel):
    """Partial location update. Required fields may be omitted but not nulled."""
    name: Annotated[Optional[str], NonNull] = Field(None, min_length=1)
    address: Annotated[Optional[str], NonNull] = Field(None, min_length=1)
    city: Annotated[Optional[str], NonNull] = Field(None, min_length=1)
    state: Annotated[Optional[str], NonNull] = Field(None, min_length=1)
    zip_code: Annotated[Optional[str], NonNull] = Field(None, min_length=1)
    phone: Annotated[Optional[str], NonNull] = Field(None, min_length=1)
    email: Optional[str] = None
    description: Optional[str] = None
    opening_hours: Optional[str] = None
    image_url: Optional[str] = None
    featured_on_homepage: Annotated[Optional[bool], NonNull] = None
    sort_order: Annotated[Optional[int], NonNull] = None
    tagline: Annotated[Optional[str], NonNull] = None


class Location(Document):
    name: str
    address: str
    city: str
    state: str
    zip_code: str
    phone: str
    email: Optional[str] = None
    description: Optional[str] = None
    opening_hours: Optional[str] = None
    image_url: Optional[str] = None
    featured_on_homepage: bool = False
    sort_order: int = 0
    tagline: str = DEFAULT_TAGLINE


# Staff

class StaffCreate(CamelModel):
    name: str = Field(..., min_length=1)
    title: str = Field(..., min_length=1)
    bio: Optional[str] = None
    image_url: Optional[str] = None
    email: Optional[str] = None
    phone: Optional[str] = None
    location_id: Optional[str] = None
    specialty: Optional[str] = None
    is_leadership: bool = False
    sort_order: int = 0


class StaffUpdate(CamelModel):
    name: Annotated[Optional[str], NonNull] = Field(None, min_length=1)
    title: Annotated[Optional[str], NonNull] = Field(None, min_length=1)
    bio: Optional[str] = None
    image_url: Optional[str] = None
    email: Optional[str] = None
    phone: Optional[str] = None
    location_id: Optional[str] = None
    specialty: Optional[str] = None
    is_leadership: Annotated[Optional[bool], NonNull] = None
    sort_order: Annotated[Optional[int], NonNull] = None


class StaffMember(Document):
    name: str
    title: str
    bio: Optional[str] = None
    image_url: Optional[str] = None
    email: Optional[str] = None
    phone: Optional[str] = None
    location_id: Optional[str] = None
    specialty: Optional[str] = None
    is_leadership: bool = False
    sort_order: int = 0


# Treatments

class TreatmentCreate(CamelModel):
    name: str = Field(..., min_length=1)
    description: Optional[str] = None
    image_url: Optional[str] = None


class TreatmentUpdate(CamelModel):
    name: Annotated[Optional[str], NonNull] = Field(None, min_length=1)
    description: Optional[str] = None
    image_url: Optional[str] = None


class Treatment(Document):
    name: str
    description: Optional[str] = None
    image_url: Optional[str] = None


class LocationTreatment(Document):
    location_id: str
    treatment_id: str


# Testimonials

class TestimonialCreate(CamelModel):
    quote: str = Field(..., min_length=1)
    author: str = Field(..., min_length=1)
    location_id: Optional[str] = None
    treatment_id: Optional[str] = None
    is_approved: bool = True


class TestimonialUpdate(CamelModel):
    quote: Annotated[Optional[str], NonNull] = Field(None, min_length=1)
    author: Annotated[Optional[str], NonNull] = Field(None, min_length=1)
    location_id: Optional[str] = None
    treatment_id: Optional[str] = None
    is_approved: Annotated[Optional[bool], NonNull] = None


class Testimonial(Document):
    quote: str
    author: str
    location_id: Optional[str] = None
    treatment_id: Optional[str] = None
    is_approved: bool = True


# Site content

class SiteContentCreate(CamelModel):
    """
    Payload for creating a content block.

    Attributes:
        key (str): Unique lookup key used by the public pages
        section (str): Page section grouping blocks
        video_url (Optional[str]): Uploaded video path
        embedded_video_id (Optional[str]): Id on the video platform
        video_platform (str): youtube or vimeo
    """
    key: str = Field(..., min_length=1)
    title: str
    content: str
    section: str = Field(..., min_length=1)
    video_url: Optional[str] = None
    embedded_video_id: Optional[str] = None
    video_platform: VideoPlatform = "youtube"


class SiteContentUpdate(CamelModel):
    key: Annotated[Optional[str], NonNull] = Field(None, min_length=1)
    title: Annotated[Optional[str], NonNull] = None
    content: Annotated[Optional[str], NonNull] = None
    section: Annotated[Optional[str], NonNull] = Field(None, min_length=1)
    video_url: Optional[str] = None
    embedded_video_id: Optional[str] = None
    video_platform: Annotated[Optional[VideoPlatform], NonNull] = None


class SiteContent(Document):
    key: str
    title: str = ""
    content: str = ""
    section: str
    video_url: Optional[str] = None
    embedded_video_id: Optional[str] = None
    video_platform: VideoPlatform = "youtube"
    updated_at: Optional[datetime] = None


class EmbeddedVideoUpdate(CamelModel):
    section: str
    key: str
    embedded_video_id: str
    video_platform: VideoPlatform


# Detail views

class LocationDetail(Location):
    staff: List[StaffMember] = []
    treatments: List[Treatment] = []
    testimonials: List[Testimonial] = []


class StaffDetail(StaffMember):
    location: Optional[Location] = None


class TreatmentDetail(Treatment):
    locations: List[Location] = []
    testimonials: List[Testimonial] = []


class TestimonialDetail(Testimonial):
    location: Optional[Location] = None
    treatment: Optional[Treatment] = None
