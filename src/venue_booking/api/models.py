"""Pydantic models for API request payloads."""

from pydantic import BaseModel


class VenuePayload(BaseModel):
    """Venue display fields sent by an owner.

    Fields default to empty strings so missing values reach the venue
    service and are reported as invalid input.
    """

    name: str = ""
    location: str = ""
    description: str = ""
    image_url: str = ""


class BookingPayload(BaseModel):
    """Booking request for a single calendar date."""

    date: str = ""
