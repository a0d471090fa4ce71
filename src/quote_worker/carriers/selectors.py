"""Per-carrier field selectors — the extension point for real carrier portals.

The defaults are generic placeholders: every field carries several candidate
CSS locators and the first one present on the page wins. Operators replace
them with carrier-exact selectors through settings (see ``config/``) without
touching the quote flow in :mod:`quote_worker.automation.driver`.
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field

# Contact/address fields in the order they are filled and reported.
FORM_FIELDS: tuple[str, ...] = (
    "first_name",
    "last_name",
    "email",
    "phone",
    "street1",
    "city",
    "state",
    "zip",
)


def _candidates(*selectors: str):
    return Field(default_factory=lambda: list(selectors), min_length=1)


class CarrierSelectors(BaseModel):
    """Centralized locators for one carrier's login and quote pages.

    Field selectors are ordered candidate lists rendered as a single
    comma-joined CSS selector. ``login_submit`` and ``quote_submit`` are
    *alternative actions*: each entry is clicked on its own, in order,
    until one succeeds.
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    # Login page
    username: list[str] = _candidates('input[type="text"]', 'input[name="username"]', "#username")
    password: list[str] = _candidates('input[type="password"]', "#password")
    login_submit: list[str] = _candidates('button[type="submit"]')

    # Quote form
    first_name: list[str] = _candidates('input[name="firstName"]', "#firstName")
    last_name: list[str] = _candidates('input[name="lastName"]', "#lastName")
    email: list[str] = _candidates('input[type="email"]', "#email")
    phone: list[str] = _candidates('input[name="phone"]', "#phone")
    street1: list[str] = _candidates("#addr1", 'input[name="street1"]')
    city: list[str] = _candidates("#city", 'input[name="city"]')
    state: list[str] = _candidates("#state", 'select[name="state"]')
    zip: list[str] = _candidates("#zip", 'input[name="zip"]')
    quote_submit: list[str] = _candidates(
        'button[type="submit"]',
        'button:has-text("Rate")',
        'button:has-text("Next")',
    )

    # Result page
    premium: list[str] = _candidates(".total-premium", '[data-test="total-premium"]')

    def css(self, field: str) -> str:
        """Return the comma-joined CSS selector for *field* (first match wins)."""
        return ", ".join(getattr(self, field))

    def example_map(self) -> dict[str, str]:
        """Return ``{camelCaseField: selector}`` for the contact/address fields."""
        return {_camel(name): self.css(name) for name in FORM_FIELDS}


def _camel(name: str) -> str:
    head, *rest = name.split("_")
    return head + "".join(part.title() for part in rest)
