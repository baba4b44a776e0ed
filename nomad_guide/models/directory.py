from pydantic import BaseModel


class UiStrings(BaseModel):
    error_title: str = "Sorry, Something Went Wrong"
    loading: str = "Loading Data..."
    no_countries: str = "No country found matching the criteria."
    not_available: str = "N/A"


class DirectoryConfig(BaseModel):
    """Data the page hands to the client before it fetches anything."""

    ajax_url: str = ""
    nonce: str = ""
    can_manage: bool = False
    timeout_seconds: float | None = 30.0
    strings: UiStrings = UiStrings()
