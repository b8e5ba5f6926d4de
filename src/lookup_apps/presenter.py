"""Pure formatting of API payloads into display-ready view models."""

import math
from datetime import datetime
from decimal import ROUND_HALF_UP, Decimal
from typing import Optional

from pydantic import BaseModel

from .models import Coordinates, UserProfile, WeatherReading


MONTH_NAMES = (
    "January", "February", "March", "April", "May", "June",
    "July", "August", "September", "October", "November", "December",
)

NO_BIO = "No bio available"


class DetailRow(BaseModel):
    """An optional detail row; ``href`` is set when the row is a link."""

    text: str
    href: Optional[str] = None


class ProfileView(BaseModel):
    """Display slots for a GitHub profile."""

    name: str
    login: str
    bio: str
    avatar_url: str
    avatar_alt: str
    profile_url: str
    repos: str
    followers: str
    following: str
    joined: Optional[str] = None
    location: Optional[DetailRow] = None
    website: Optional[DetailRow] = None
    twitter: Optional[DetailRow] = None
    company: Optional[DetailRow] = None


class WeatherView(BaseModel):
    """Display slots for current weather."""

    location_name: str
    location_details: str
    temperature: str
    condition: str
    feels_like: str
    humidity: str
    wind_speed: str
    visibility: str
    coordinates: str


def _scaled(num: int, divisor: int) -> str:
    value = (Decimal(num) / Decimal(divisor)).quantize(Decimal("0.1"), rounding=ROUND_HALF_UP)
    return str(value)


def format_number(num: int) -> str:
    """Abbreviate large counts: 1500 -> '1.5K', 2500000 -> '2.5M'."""
    if num >= 1_000_000:
        return _scaled(num, 1_000_000) + "M"
    if num >= 1_000:
        return _scaled(num, 1_000) + "K"
    return str(num)


def format_date(value: datetime) -> str:
    """Long English date, e.g. 'January 25, 2008', independent of locale."""
    return f"{MONTH_NAMES[value.month - 1]} {value.day}, {value.year}"


def round_half_up(value: float) -> int:
    """Round to the nearest integer, halves towards positive infinity."""
    return math.floor(value + 0.5)


def format_decimal(value: float) -> str:
    """Render a float without a trailing '.0' for whole values."""
    if float(value).is_integer():
        return str(int(value))
    return str(value)


def detail_row(value: Optional[str], href: Optional[str] = None, text: Optional[str] = None) -> Optional[DetailRow]:
    """Build a detail row, or None when the source value is absent or empty."""
    if not value:
        return None
    return DetailRow(text=text or value, href=href)


def present_profile(user: UserProfile) -> ProfileView:
    """Map a user profile onto its display slots."""
    twitter = user.twitter_username
    return ProfileView(
        name=user.display_name,
        login=f"@{user.login}",
        bio=user.bio or NO_BIO,
        avatar_url=user.avatar_url,
        avatar_alt=f"{user.login}'s avatar",
        profile_url=user.html_url,
        repos=format_number(user.public_repos),
        followers=format_number(user.followers),
        following=format_number(user.following),
        joined=format_date(user.created_at) if user.created_at else None,
        location=detail_row(user.location),
        website=detail_row(user.blog, href=user.blog),
        twitter=detail_row(
            twitter,
            href=f"https://twitter.com/{twitter}" if twitter else None,
            text=f"@{twitter}" if twitter else None,
        ),
        company=detail_row(user.company),
    )


def present_weather(reading: WeatherReading, coordinates: Coordinates) -> WeatherView:
    """Map a weather reading and the queried coordinates onto display slots."""
    location = reading.location
    current = reading.current
    return WeatherView(
        location_name=location.name,
        location_details=f"{location.country}, {location.region}",
        temperature=str(round_half_up(current.temp_c)),
        condition=current.condition.text,
        feels_like=f"{round_half_up(current.feelslike_c)}°C",
        humidity=f"{current.humidity}%",
        wind_speed=f"{format_decimal(current.wind_kph)} km/h",
        visibility=f"{format_decimal(current.vis_km)} km",
        coordinates=f"{coordinates.latitude:.4f}, {coordinates.longitude:.4f}",
    )
