from kanban.config import Config


class TestConfig:
    def test_reads_prefixed_environment(self, monkeypatch, tmp_path):
        monkeypatch.chdir(tmp_path)
        monkeypatch.setenv("KANBAN_DATABASE_URL", "mongodb://localhost:27017/kanban")
        monkeypatch.setenv("KANBAN_HOST", "0.0.0.0")
        monkeypatch.setenv("KANBAN_PORT", "3001")
        monkeypatch.setenv("KANBAN_DEBUG", "false")
        monkeypatch.setenv("KANBAN_API_TOKEN", "abc")

        config = Config()

        assert config.port == 3001
        assert config.api_token == "abc"
        assert config.webhook_url is None
        assert config.upload_max_bytes == 5 * 1024 * 1024
        assert config.secure_cookies is True

    def test_debug_disables_secure_cookies(self, make_config):
        assert make_config(debug=True).secure_cookies is False
