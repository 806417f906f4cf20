from pawmarket.utils.path_helpers import path_has_prefix, path_matches
from pawmarket.utils.slugs import short_token, slugify


def test_slugify_normalises_text():
    assert slugify("Happy Paws Kennel") == "happy-paws-kennel"
    assert slugify("  Café   Pugs & Co.  ") == "cafe-pugs-co"
    assert slugify("!!!", fallback="breeder") == "breeder"


def test_short_token_is_hex():
    token = short_token(8)
    assert len(token) == 8
    int(token, 16)


def test_path_matches_ignores_trailing_slash():
    assert path_matches("/health/", {"/health"})
    assert path_matches("/docs", {"/docs"})
    assert not path_matches("/api/v1/health", {"/health"})


def test_path_has_prefix():
    assert path_has_prefix("/api/v1/auth/logout", ["/api/v1/auth/logout"])
    assert path_has_prefix("/api/v1/auth/logout/all", ["/api/v1/auth/logout/"])
    assert not path_has_prefix("/api/v1/auth/logouts", ["/api/v1/auth/logout"])
