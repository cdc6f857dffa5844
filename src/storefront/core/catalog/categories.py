"""Category table and resolver.

Every entry point (API routes, page data, the storefront selector) goes
through :func:`resolve_category`, so slugs, display labels and raw form
input all land on the same canonical key.
"""

from __future__ import annotations

import re
import unicodedata
from dataclasses import dataclass
from urllib.parse import unquote

_WHITESPACE = re.compile(r"\s+")


@dataclass(frozen=True)
class Category:
    """One row of the category table."""

    key: str
    slug: str
    label: str
    wildcard: bool = False


WILDCARD = Category(key="TOUS", slug="tous", label="Tous", wildcard=True)

CATEGORIES: tuple[Category, ...] = (
    WILDCARD,
    Category(key="SALLE A MANGER", slug="salle-a-manger", label="Salle à Manger"),
    Category(key="SEJOUR", slug="sejour", label="Séjour"),
    Category(key="CHAMBRE A COUCHER", slug="chambre-a-coucher", label="Chambre à coucher"),
    Category(key="ENSEMBLES DE JARDIN", slug="ensembles-de-jardin", label="Ensembles de Jardin"),
)

# Extra spellings of the wildcard, compared after normalization.
WILDCARD_ALIASES = frozenset({"TOUS", "ALL", "TOUS LES PRODUITS"})


@dataclass(frozen=True)
class Resolution:
    """Outcome of resolving a raw category token."""

    ok: bool
    category: Category | None = None

    @property
    def is_wildcard(self) -> bool:
        return self.ok and self.category is not None and self.category.wildcard


def normalize_token(raw: str) -> str:
    """Normalize a category token for comparison.

    Percent-decodes, turns ``-`` separators into spaces, upper-cases,
    strips accents (NFD, combining marks removed) and collapses whitespace.
    ``"s%C3%A9jour"``, ``"Séjour"`` and ``"SEJOUR"`` all give ``"SEJOUR"``.
    """
    text = unquote(raw).replace("-", " ").upper()
    decomposed = unicodedata.normalize("NFD", text)
    stripped = "".join(ch for ch in decomposed if not unicodedata.combining(ch))
    return _WHITESPACE.sub(" ", stripped).strip()


def slug_for(name: str) -> str:
    """Build the URL slug of a display label or canonical key."""
    return normalize_token(name).lower().replace(" ", "-")


def _build_index(categories: tuple[Category, ...]) -> dict[str, Category]:
    keys = [c.key for c in categories]
    slugs = [c.slug for c in categories]
    labels = [c.label for c in categories]
    for name, values in (("key", keys), ("slug", slugs), ("label", labels)):
        if len(set(values)) != len(values):
            raise ValueError(f"Duplicate category {name} in category table")

    index: dict[str, Category] = {}
    for category in categories:
        if slug_for(category.label) != category.slug:
            raise ValueError(f"Slug {category.slug!r} does not match label {category.label!r}")
        for form in (category.key, category.slug, category.label):
            normalized = normalize_token(form)
            owner = index.setdefault(normalized, category)
            if owner is not category:
                raise ValueError(f"Category token {normalized!r} is ambiguous")
    return index


_INDEX = _build_index(CATEGORIES)
_BY_KEY = {c.key: c for c in CATEGORIES}
_BY_SLUG = {c.slug: c for c in CATEGORIES}


def resolve_category(raw: str | None) -> Resolution:
    """Resolve a raw token to a category, the wildcard, or a rejection.

    Missing, blank and wildcard tokens select every active product. Any
    other token outside the table is rejected, never guessed.
    """
    if raw is None:
        return Resolution(ok=True, category=WILDCARD)

    normalized = normalize_token(raw)
    if not normalized or normalized in WILDCARD_ALIASES:
        return Resolution(ok=True, category=WILDCARD)

    category = _INDEX.get(normalized)
    if category is None:
        return Resolution(ok=False)
    return Resolution(ok=True, category=category)


def canonical_key(raw: str | None) -> str | None:
    """Key of the concrete category ``raw`` names; None for the wildcard or unknown tokens."""
    resolution = resolve_category(raw)
    if not resolution.ok or resolution.is_wildcard:
        return None
    return resolution.category.key


def category_from_key(key: str) -> Category | None:
    return _BY_KEY.get(key)


def category_from_slug(slug: str) -> Category | None:
    return _BY_SLUG.get(slug)


def list_categories() -> tuple[Category, ...]:
    """Categories in storefront selector order."""
    return CATEGORIES
