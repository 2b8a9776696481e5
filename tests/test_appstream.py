"""
Tests for AppStream snippet building and Flathub id resolution.
"""

import pytest

from branding_picker.services.appstream import (
    appstream_api_url, build_branding_snippet, extract_app_id
)


class TestBrandingSnippet:
    """Test XML snippet output"""

    def test_snippet_layout(self):
        snippet = build_branding_snippet("#ff7070", "#7a0000")
        assert snippet == (
            "<branding>\n"
            "  <color type=\"primary\" scheme_preference=\"light\">#ff7070</color>\n"
            "  <color type=\"primary\" scheme_preference=\"dark\">#7a0000</color>\n"
            "</branding>"
        )


class TestExtractAppId:
    """Test Flathub URL parsing"""

    @pytest.mark.parametrize("text,expected", [
        ("https://flathub.org/en/apps/org.gnome.Glade", "org.gnome.Glade"),
        ("https://flathub.org/en/apps/org.gnome.Glade/", "org.gnome.Glade"),
        ("https://flathub.org/apps/com.usebottles.bottles", "com.usebottles.bottles"),
        ("HTTPS://www.Flathub.org/de/apps/org.inkscape.Inkscape", "org.inkscape.Inkscape"),
        ("flathub.org/en/apps/com.usebottles.bottles", "com.usebottles.bottles"),
        ("  org.gnome.Glade  ", "org.gnome.Glade"),
    ])
    def test_resolves(self, text, expected):
        assert extract_app_id(text) == expected

    @pytest.mark.parametrize("text", [None, "", "   "])
    def test_empty_input(self, text):
        assert extract_app_id(text) is None


class TestAppstreamUrl:
    """Test API URL construction"""

    def test_plain_id(self):
        assert appstream_api_url("org.gnome.Glade") == \
            "https://flathub.org/api/v2/appstream/org.gnome.Glade"

    def test_id_is_escaped(self):
        assert appstream_api_url("a b/c") == "https://flathub.org/api/v2/appstream/a%20b%2Fc"
