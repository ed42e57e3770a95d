"""
Unit tests for Settings.

Tests cover:
- Environment variable mapping (including NEXT_PUBLIC_APP_URL)
- Derived database URL and tracked symbols
- Masked view never exposing secrets
"""

from cryptodash.config.settings import Settings, get_settings, set_settings, reset_settings


class TestSettings:
    """Tests for configuration loading."""

    def test_public_app_url_from_next_public_env(self, monkeypatch):
        monkeypatch.setenv("NEXT_PUBLIC_APP_URL", "https://dash.example.com")

        assert Settings().public_app_url == "https://dash.example.com"

    def test_api_key_from_env(self, monkeypatch):
        monkeypatch.setenv("CRYPTO_API_KEY", "secret-key")

        assert Settings().crypto_api_key == "secret-key"

    def test_database_url_derived_from_data_dir(self, tmp_path):
        settings = Settings(data_dir=tmp_path, database_url=None)

        assert settings.get_database_url() == f"sqlite:///{tmp_path / 'cryptodash.db'}"

    def test_explicit_database_url_wins(self):
        assert Settings(database_url="sqlite:///:memory:").get_database_url() == "sqlite:///:memory:"

    def test_tracked_symbols_normalized(self):
        settings = Settings(tracked_symbols=" btc,ETH,, eth ,sol")

        assert settings.get_tracked_symbols() == ["BTC", "ETH", "SOL"]

    def test_masked_hides_secrets(self):
        """
        GIVEN settings with both API keys set
        WHEN the masked view is built
        THEN neither key value appears, only configured flags
        """
        settings = Settings(crypto_api_key="cg-secret", openai_api_key="sk-secret")

        masked = settings.masked()

        assert masked["crypto_api_key_configured"] is True
        assert masked["openai_api_key_configured"] is True
        assert "cg-secret" not in str(masked)
        assert "sk-secret" not in str(masked)

    def test_set_and_reset_global(self):
        custom = Settings(app_name="Custom")
        set_settings(custom)
        assert get_settings() is custom

        reset_settings()
        assert get_settings() is not custom
        reset_settings()
