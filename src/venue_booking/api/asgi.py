"""ASGI entrypoint for the venue booking API."""

from venue_booking.api.app import create_app
from venue_booking.containers import build_container

app = create_app(build_container())
