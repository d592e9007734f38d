"""
Name: Sharing Helper Tests

Responsibilities:
  - Share URL construction (secret only when asked)
  - Indexing decision and robots.txt rendering
  - Privacy settings validation messages
"""

import pytest

from cvshare.application.sharing import (
    ROBOTS_DISALLOW_ALL,
    build_cv_url,
    describe_privacy_level,
    render_robots_txt,
    should_index,
    validate_privacy_settings,
)
from cvshare.domain.entities import PrivacyConfiguration, PrivacyLevel

BASE = "https://cv.example.com"


@pytest.mark.unit
class TestBuildCvUrl:
    def test_public_url(self):
        url = build_cv_url(BASE, "jane-doe", PrivacyConfiguration())

        assert url == "https://cv.example.com/cv/jane-doe"

    def test_trailing_slash_in_base(self):
        url = build_cv_url(BASE + "/", "jane-doe", PrivacyConfiguration())

        assert url == "https://cv.example.com/cv/jane-doe"

    def test_secret_appended_only_when_requested(self):
        config = PrivacyConfiguration(
            level=PrivacyLevel.SECRET_LINK, secret_token="abc123"
        )

        assert build_cv_url(BASE, "jane", config).endswith("/cv/jane")
        assert (
            build_cv_url(BASE, "jane", config, include_secret=True)
            == "https://cv.example.com/cv/jane?token=abc123"
        )

    def test_secret_not_appended_for_other_levels(self):
        config = PrivacyConfiguration(level=PrivacyLevel.PRIVATE, secret_token="abc")

        url = build_cv_url(BASE, "jane", config, include_secret=True)

        assert "token" not in url


@pytest.mark.unit
class TestIndexing:
    def test_public_with_search_engines_is_indexable(self):
        config = PrivacyConfiguration(
            level=PrivacyLevel.PUBLIC, allow_search_engines=True
        )

        assert should_index(config) is True
        assert render_robots_txt(config) == "User-agent: *\nAllow: /\n"

    def test_sitemap_line(self):
        config = PrivacyConfiguration(
            level=PrivacyLevel.PUBLIC, allow_search_engines=True
        )

        body = render_robots_txt(config, sitemap_url=f"{BASE}/sitemap.xml")

        assert body.endswith(f"Sitemap: {BASE}/sitemap.xml\n")

    @pytest.mark.parametrize(
        "config",
        [
            PrivacyConfiguration(level=PrivacyLevel.PUBLIC, allow_search_engines=False),
            PrivacyConfiguration(
                level=PrivacyLevel.SECRET_LINK, allow_search_engines=True
            ),
            PrivacyConfiguration(level=PrivacyLevel.PRIVATE, allow_search_engines=True),
            None,
        ],
        ids=["public-noindex", "secret", "private", "unknown-workspace"],
    )
    def test_everything_else_disallows(self, config):
        assert render_robots_txt(config) == ROBOTS_DISALLOW_ALL


@pytest.mark.unit
class TestValidation:
    def test_coherent_configuration(self):
        assert validate_privacy_settings(PrivacyConfiguration()) == []

    def test_secret_link_without_token(self):
        errors = validate_privacy_settings(
            PrivacyConfiguration(level=PrivacyLevel.SECRET_LINK)
        )

        assert errors == ["Secret token is required for secret link privacy"]

    def test_password_without_hash(self):
        errors = validate_privacy_settings(
            PrivacyConfiguration(level=PrivacyLevel.PASSWORD)
        )

        assert errors == ["Password is required for password privacy"]

    def test_missing_and_unknown_level(self):
        assert validate_privacy_settings(PrivacyConfiguration(level="")) == [
            "Privacy level is required"
        ]
        assert validate_privacy_settings(PrivacyConfiguration(level="x")) == [
            "Invalid privacy level"
        ]


@pytest.mark.unit
def test_describe_privacy_level():
    assert describe_privacy_level("unknown") == "Unknown privacy level"
    for level in PrivacyLevel:
        assert describe_privacy_level(level)
