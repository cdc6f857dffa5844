"""Category resolver tests."""

import pytest

from src.storefront.core.catalog import (
    CATEGORIES,
    WILDCARD,
    canonical_key,
    list_categories,
    normalize_token,
    resolve_category,
    slug_for,
)
from src.storefront.core.catalog.categories import (
    Category,
    _build_index,
    category_from_key,
    category_from_slug,
)

NAMED = [c for c in CATEGORIES if not c.wildcard]


class TestNormalizeToken:
    @pytest.mark.parametrize(
        "raw, expected",
        [
            ("sejour", "SEJOUR"),
            ("Séjour", "SEJOUR"),
            ("SÉJOUR", "SEJOUR"),
            ("s%C3%A9jour", "SEJOUR"),
            ("salle-a-manger", "SALLE A MANGER"),
            ("Salle à Manger", "SALLE A MANGER"),
            ("  chambre--a   coucher ", "CHAMBRE A COUCHER"),
            ("ensembles%20de%20jardin", "ENSEMBLES DE JARDIN"),
            ("", ""),
        ],
    )
    def test_normalize(self, raw, expected):
        assert normalize_token(raw) == expected


class TestCategoryTable:
    def test_five_categories_with_one_wildcard(self):
        assert len(CATEGORIES) == 5
        assert [c for c in CATEGORIES if c.wildcard] == [WILDCARD]

    def test_keys_slugs_and_labels_are_unique(self):
        for attribute in ("key", "slug", "label"):
            values = [getattr(c, attribute) for c in CATEGORIES]
            assert len(set(values)) == len(values)

    def test_selector_order_starts_with_wildcard(self):
        assert list_categories()[0] is WILDCARD
        assert list_categories() == CATEGORIES

    def test_slugs_are_ascii_lowercase_hyphenated(self):
        for category in CATEGORIES:
            assert category.slug.isascii()
            assert category.slug == category.slug.lower()
            assert " " not in category.slug

    def test_strict_lookups(self):
        assert category_from_key("SEJOUR").slug == "sejour"
        assert category_from_slug("chambre-a-coucher").key == "CHAMBRE A COUCHER"
        assert category_from_key("Séjour") is None
        assert category_from_slug("SEJOUR") is None

    def test_duplicate_slug_is_rejected(self):
        broken = (
            Category(key="A", slug="a", label="A"),
            Category(key="B", slug="a", label="B"),
        )
        with pytest.raises(ValueError):
            _build_index(broken)

    def test_slug_not_matching_label_is_rejected(self):
        with pytest.raises(ValueError):
            _build_index((Category(key="SEJOUR", slug="living", label="Séjour"),))


class TestResolveCategory:
    @pytest.mark.parametrize("category", NAMED, ids=lambda c: c.slug)
    def test_slug_round_trip(self, category):
        assert resolve_category(category.slug).category == category

    @pytest.mark.parametrize("category", NAMED, ids=lambda c: c.slug)
    def test_label_round_trip(self, category):
        assert resolve_category(category.label).category == category
        assert resolve_category(normalize_token(category.label)).category == category

    @pytest.mark.parametrize("category", NAMED, ids=lambda c: c.slug)
    def test_key_resolves_to_itself(self, category):
        assert resolve_category(category.key).category.key == category.key

    @pytest.mark.parametrize("token", [None, "", "   ", "tous", "TOUS", "Tous", "all", "ALL"])
    def test_wildcard_tokens(self, token):
        resolution = resolve_category(token)
        assert resolution.ok
        assert resolution.is_wildcard
        assert resolution.category is WILDCARD

    def test_accent_and_case_invariance(self):
        expected = resolve_category("sejour")
        assert expected.ok
        assert resolve_category("séjour") == expected
        assert resolve_category("SÉJOUR") == expected
        assert resolve_category("S%C3%A9JOUR") == expected

    def test_slug_built_from_accented_or_plain_label_resolves_the_same(self):
        accented = slug_for("Chambre à coucher")
        plain = slug_for("Chambre a coucher")
        assert accented == plain == "chambre-a-coucher"
        assert resolve_category(accented) == resolve_category(plain)
        assert resolve_category(accented).category.key == "CHAMBRE A COUCHER"

    @pytest.mark.parametrize("token", ["unknown-thing", "sejours", "salle", "cuisine", "%"])
    def test_unknown_tokens_are_rejected(self, token):
        resolution = resolve_category(token)
        assert not resolution.ok
        assert resolution.category is None
        assert not resolution.is_wildcard

    def test_named_category_is_not_wildcard(self):
        assert not resolve_category("sejour").is_wildcard


class TestCanonicalKey:
    @pytest.mark.parametrize(
        "raw,expected",
        [
            ("Séjour", "SEJOUR"),
            ("chambre-a-coucher", "CHAMBRE A COUCHER"),
            ("Salle à Manger", "SALLE A MANGER"),
            ("ENSEMBLES DE JARDIN", "ENSEMBLES DE JARDIN"),
        ],
    )
    def test_known_spellings(self, raw, expected):
        assert canonical_key(raw) == expected

    @pytest.mark.parametrize("raw", [None, "", "tous", "ALL", "cuisine"])
    def test_wildcard_and_unknown_have_no_key(self, raw):
        assert canonical_key(raw) is None
