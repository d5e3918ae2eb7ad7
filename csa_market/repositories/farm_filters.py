"""Filter predicates for farm listings.

Each listing dimension is an optional, typed value on :class:`FarmFilters`.
Every dimension has its own function that turns that value into a SQLAlchemy
boolean clause, or ``None`` when the dimension is unconstrained.
:func:`build_farm_predicate` ANDs whatever is left.
"""

from __future__ import annotations

from dataclasses import dataclass

from sqlalchemy import ColumnElement, and_, func, or_, true

from csa_market.models.contracts import PriceTier, SortKey
from csa_market.models.schema import Farm, FarmCategory, FarmDeliveryOption
from csa_market.utils.states import normalize_state, state_name

# Farms without a rating are treated as top rated
DEFAULT_RATING = 5.0

_UNCONSTRAINED = {"", "all"}


def effective_rating():
    """Rating expression with the default applied to unrated farms."""
    return func.coalesce(Farm.rating, DEFAULT_RATING)


def _normalize_label(value: str | None) -> str | None:
    if value is None:
        return None
    label = value.strip().lower()
    return None if label in _UNCONSTRAINED else label


@dataclass(frozen=True)
class FarmFilters:
    """Normalized listing parameters. ``None`` means no constraint."""

    search: str | None = None
    category: str | None = None
    price_tier: PriceTier | None = None
    delivery: str | None = None
    min_rating: float | None = None
    sort: SortKey = SortKey.DISTANCE

    @classmethod
    def from_params(
        cls,
        *,
        search: str | None = None,
        category: str | None = None,
        price: PriceTier | str | None = None,
        delivery: str | None = None,
        rating: float | str | None = None,
        sort: SortKey | str | None = None,
    ) -> FarmFilters:
        """Build filters from raw query values.

        ``"all"`` and blank strings count as absent.

        Raises:
            ValueError: If price, rating or sort hold an unknown value
        """
        search_text = search.strip() if search else ""

        price_tier = None
        if isinstance(price, PriceTier):
            price_tier = price
        elif price is not None and price.strip().lower() not in _UNCONSTRAINED:
            price_tier = PriceTier(price.strip().lower())

        min_rating = None
        if isinstance(rating, str):
            if rating.strip().lower() not in _UNCONSTRAINED:
                min_rating = float(rating)
        elif rating is not None:
            min_rating = float(rating)

        return cls(
            search=search_text or None,
            category=_normalize_label(category),
            price_tier=price_tier,
            delivery=_normalize_label(delivery),
            min_rating=min_rating,
            sort=SortKey(sort) if sort else SortKey.DISTANCE,
        )

    @property
    def is_unconstrained(self) -> bool:
        return all(
            value is None
            for value in (
                self.search,
                self.category,
                self.price_tier,
                self.delivery,
                self.min_rating,
            )
        )


def search_condition(search: str | None) -> ColumnElement[bool] | None:
    """Case-insensitive "contains" match on name, city, state and description.

    A state abbreviation ("CA") or full state name ("california") matches the
    state column exactly, in either spelling, instead of by substring.
    """
    if not search or not search.strip():
        return None
    term = search.strip()

    clauses = [
        Farm.name.icontains(term, autoescape=True),
        Farm.city.icontains(term, autoescape=True),
        Farm.description.icontains(term, autoescape=True),
    ]

    abbreviation = normalize_state(term)
    if abbreviation:
        spellings = [abbreviation, state_name(abbreviation).upper()]
        clauses.append(func.upper(func.trim(Farm.state)).in_(spellings))
    else:
        clauses.append(Farm.state.icontains(term, autoescape=True))

    return or_(*clauses)


def category_condition(category: str | None) -> ColumnElement[bool] | None:
    category = _normalize_label(category)
    if category is None:
        return None
    return Farm.category_rows.any(FarmCategory.name == category)


def price_tier_condition(tier: PriceTier | None) -> ColumnElement[bool] | None:
    """Bounds on the weekly price; farms without a price never match a tier."""
    if tier is None:
        return None
    if tier is PriceTier.UNDER_30:
        return Farm.price_per_week < 30
    if tier is PriceTier.FROM_30_TO_40:
        return Farm.price_per_week.between(30, 40)
    return Farm.price_per_week > 40


def delivery_condition(delivery: str | None) -> ColumnElement[bool] | None:
    delivery = _normalize_label(delivery)
    if delivery is None:
        return None
    return Farm.delivery_option_rows.any(FarmDeliveryOption.name == delivery)


def min_rating_condition(min_rating: float | None) -> ColumnElement[bool] | None:
    if min_rating is None:
        return None
    return effective_rating() >= min_rating


def build_farm_predicate(filters: FarmFilters) -> ColumnElement[bool]:
    """AND together every active filter; ``true()`` when none are active."""
    conditions = [
        condition
        for condition in (
            search_condition(filters.search),
            category_condition(filters.category),
            price_tier_condition(filters.price_tier),
            delivery_condition(filters.delivery),
            min_rating_condition(filters.min_rating),
        )
        if condition is not None
    ]
    if not conditions:
        return true()
    return and_(*conditions)
