"""Unit tests for terminal themes."""

import pytest
from rich.style import Style

from mdpeek.exceptions import InvalidThemeError, ValidationError
from mdpeek.themes import THEME_NAMES, THEMES, Theme, get_theme


@pytest.mark.unit
class TestGetTheme:
    """Test theme lookup."""

    def test_all_presets_available(self):
        """Test that every documented preset is registered."""
        assert set(THEME_NAMES) == {"glow", "mono", "catppuccin", "dracula", "solarized", "nord", "ayu"}

    def test_default_theme(self):
        """Test that no name selects the glow preset."""
        assert get_theme().name == "glow"
        assert get_theme(None).name == "glow"

    def test_case_insensitive(self):
        """Test that lookup ignores case and surrounding whitespace."""
        assert get_theme("Nord") is THEMES["nord"]
        assert get_theme(" DRACULA ") is THEMES["dracula"]

    def test_unknown_theme(self):
        """Test that an unknown name raises with the known presets listed."""
        with pytest.raises(InvalidThemeError) as exc_info:
            get_theme("neon")
        assert exc_info.value.theme_name == "neon"
        assert "glow" in str(exc_info.value)
        assert isinstance(exc_info.value, ValidationError)

    def test_registry_is_read_only(self):
        """Test that presets cannot be replaced through the registry."""
        with pytest.raises(TypeError):
            THEMES["glow"] = THEMES["mono"]  # type: ignore[index]


@pytest.mark.unit
class TestTheme:
    """Test theme styles and derived styles."""

    def test_mono_is_monochrome(self):
        """Test that the mono preset uses null styles only."""
        mono = get_theme("mono")
        assert mono.is_monochrome
        assert not mono.banner
        assert not mono.link_destination

    @pytest.mark.parametrize("name", ["glow", "catppuccin", "dracula", "solarized", "nord", "ayu"])
    def test_color_presets_are_not_monochrome(self, name):
        """Test that the color presets style their roles."""
        assert not get_theme(name).is_monochrome

    def test_derive_keeps_null_style(self):
        """Test that modifiers are not added to a null style."""
        assert Theme.derive(Style.null(), bold=True) == Style.null()

    def test_derive_adds_modifiers(self):
        """Test that modifiers are combined with the base style."""
        derived = Theme.derive(Style(color="red"), underline=True)
        assert derived.underline
        assert derived.color is not None and derived.color.name == "red"

    def test_banner_is_reversed(self):
        """Test that the level 1 banner uses reverse video."""
        banner = get_theme("glow").banner
        assert banner.reverse
        assert banner.bold

    def test_themes_are_frozen(self):
        """Test that theme fields cannot be reassigned."""
        with pytest.raises(AttributeError):
            get_theme("glow").name = "other"  # type: ignore[misc]
