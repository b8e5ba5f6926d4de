"""Data models using Pydantic."""

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, Field


class UserProfile(BaseModel):
    """GitHub user profile as returned by the Users API."""

    login: str
    name: Optional[str] = None
    bio: Optional[str] = None
    location: Optional[str] = None
    company: Optional[str] = None
    blog: Optional[str] = None
    twitter_username: Optional[str] = None
    avatar_url: str = ""
    html_url: str = ""
    public_repos: int = Field(default=0, ge=0)
    followers: int = Field(default=0, ge=0)
    following: int = Field(default=0, ge=0)
    created_at: Optional[datetime] = None

    @property
    def display_name(self) -> str:
        """Name to show, falling back to the login."""
        return self.name or self.login


class Coordinates(BaseModel):
    """A latitude/longitude pair in decimal degrees."""

    latitude: float = Field(ge=-90, le=90)
    longitude: float = Field(ge=-180, le=180)

    @property
    def query(self) -> str:
        """Coordinates in the ``lat,lon`` form used by weather queries."""
        return f"{self.latitude},{self.longitude}"


class Position(BaseModel):
    """An acquired position of the host."""

    coords: Coordinates
    accuracy: Optional[float] = None
    timestamp: datetime = Field(default_factory=datetime.now)


class Location(BaseModel):
    name: str
    country: str = ""
    region: str = ""


class Condition(BaseModel):
    text: str = ""


class CurrentConditions(BaseModel):
    temp_c: float
    feelslike_c: float
    condition: Condition = Field(default_factory=Condition)
    humidity: int = Field(default=0, ge=0, le=100)
    wind_kph: float = 0.0
    vis_km: float = 0.0


class WeatherReading(BaseModel):
    """Current weather for a location, as returned by WeatherAPI."""

    location: Location
    current: CurrentConditions
