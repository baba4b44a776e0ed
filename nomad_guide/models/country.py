from pydantic import BaseModel, ConfigDict, Field, field_validator


class CountryEntry(BaseModel):
    """One row of the server-side dataset, serialized as-is to the client."""

    name: str
    flag: str = ""
    income: str = ""
    cost_of_living: str = ""
    family: str = ""
    tax: str = ""
    link: str = ""
    guide: str = ""


class CountryRecord(BaseModel):
    model_config = ConfigDict(frozen=True, populate_by_name=True, extra="ignore")

    name: str | None = None
    flag: str | None = None
    income: str | None = None
    tax: str | None = None
    cost_of_living: str | None = None
    family_policy: str | None = Field(default=None, alias="family")
    guide: str | None = None
    apply_link: str | None = Field(default=None, alias="link")
    slug: str = ""

    @field_validator(
        "name", "flag", "income", "tax", "cost_of_living",
        "family_policy", "guide", "apply_link",
        mode="before",
    )
    @classmethod
    def drop_non_text(cls, v):
        # Anything that is not text renders as the placeholder
        return v if isinstance(v, str) else None

    @property
    def display_fields(self) -> dict[str, str | None]:
        return {
            "income": self.income,
            "tax": self.tax,
            "cost_of_living": self.cost_of_living,
            "family": self.family_policy,
            "guide": self.guide,
        }
