"""Selection policy knobs layered on top of the canonical mutation rules."""

from pydantic import BaseModel, Field, model_validator


class SelectionPolicy(BaseModel):
    """
    Optional behaviour for a SelectionStore.

    The defaults give the canonical, DAG-safe policy: no identity is ever
    selected implicitly and nothing is limited.
    """

    auto_select_identity: bool = Field(
        default=False,
        description="Selecting a category/subcategory/sub-subcategory also selects its owning identity. "
        "Only unambiguous when each node has a single owner.",
    )
    max_identities: int | None = Field(
        default=None,
        description="Reject selecting another identity once this many are selected.",
    )
    max_categories: int | None = Field(
        default=None,
        description="Reject selections that would add a category once this many are selected.",
    )

    @model_validator(mode="after")
    def _validate(self) -> "SelectionPolicy":
        for name in ("max_identities", "max_categories"):
            value = getattr(self, name)
            if value is not None and value < 1:
                raise ValueError(f"{name} must be >= 1 (or null for no limit), got {value}")
        return self
