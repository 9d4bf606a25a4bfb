"""
集成测试 - config file -> sitemap.xml through the CLI
"""
import sys
from pathlib import Path

import pytest
import yaml

project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root / "src"))

from sitemap_maker.cli import main
from sitemap_maker.config import (
    AppConfig,
    OutputConfig,
    SitemapSettings,
    UrlConfig,
    build_sitemap,
    load_config,
)


CONFIG_TEXT = """
sitemap:
  timezone: "Africa/Maputo"
urls:
  - loc: "https://example.com/"
    lastmod: "2024-01-15 10:30:00"
    changefreq: "daily"
    priority: 1.0
  - "https://example.com/about"
  - loc: "https://example.com/docs"
    priority: 0.5
output:
  path: "out.xml"
"""


@pytest.fixture
def config_path(tmp_path):
    path = tmp_path / "sitemap.config.yml"
    path.write_text(CONFIG_TEXT, encoding="utf-8")
    return path


class TestConfig:
    def test_load_config(self, config_path):
        config = load_config(config_path)
        assert config.sitemap.timezone == "Africa/Maputo"
        assert config.sitemap.strict is False
        assert [u.loc for u in config.urls] == [
            "https://example.com/",
            "https://example.com/about",
            "https://example.com/docs",
        ]
        assert config.urls[0].priority == "1.0"
        assert config.urls[2].priority == "0.5"
        assert config.urls[1].lastmod is None
        assert config.output.path == "out.xml"

    def test_unquoted_yaml_timestamp(self, tmp_path):
        path = tmp_path / "c.yml"
        path.write_text(
            "urls:\n  - loc: https://example.com/\n    lastmod: 2024-01-15 10:30:00\n",
            encoding="utf-8",
        )
        config = load_config(path)
        xml = build_sitemap(config).get()
        assert "<lastmod>2024-01-15T10:30:00+02:00</lastmod>" in xml

    def test_defaults(self, tmp_path):
        path = tmp_path / "c.yml"
        path.write_text("urls:\n  - https://example.com/\n", encoding="utf-8")
        config = load_config(path)
        assert config.sitemap.timezone == "Africa/Maputo"
        assert config.output.path == "sitemap.xml"

    def test_invalid_config_raises_value_error(self, tmp_path):
        path = tmp_path / "c.yml"
        path.write_text("urls:\n  - loc: example.com\n", encoding="utf-8")
        with pytest.raises(ValueError):
            load_config(path)

    def test_non_mapping_root_raises(self, tmp_path):
        path = tmp_path / "c.yml"
        path.write_text("- https://example.com/\n", encoding="utf-8")
        with pytest.raises(ValueError):
            load_config(path)

    def test_quoted_strict_value_is_rejected(self, tmp_path):
        path = tmp_path / "c.yml"
        path.write_text(
            "sitemap:\n  strict: \"false\"\n"
            "urls:\n  - loc: https://example.com/\n    changefreq: sometimes\n",
            encoding="utf-8",
        )
        with pytest.raises(ValueError) as excinfo:
            load_config(path)
        assert "sitemap.strict" in str(excinfo.value)

    def test_quoted_strict_value_without_validation_stays_off(self, tmp_path):
        path = tmp_path / "c.yml"
        path.write_text(
            "sitemap:\n  strict: \"false\"\n"
            "urls:\n  - loc: https://example.com/\n    changefreq: sometimes\n",
            encoding="utf-8",
        )
        config = load_config(path, validate=False)
        assert config.sitemap.strict is False
        assert "<changefreq>sometimes</changefreq>" in build_sitemap(config).get()

    def test_yaml_true_enables_strict(self, tmp_path):
        path = tmp_path / "c.yml"
        path.write_text(
            "sitemap:\n  strict: true\nurls:\n  - https://example.com/\n",
            encoding="utf-8",
        )
        assert load_config(path).sitemap.strict is True

    def test_build_sitemap_keeps_order_and_fields(self):
        config = AppConfig(
            sitemap=SitemapSettings(timezone="UTC"),
            urls=[
                UrlConfig(loc="https://example.com/b", changefreq="weekly"),
                UrlConfig(loc="https://example.com/a", lastmod="2024-01-15"),
            ],
            output=OutputConfig(),
        )
        sitemap = build_sitemap(config)
        assert [u.location for u in sitemap] == ["https://example.com/b", "https://example.com/a"]
        assert sitemap.timezone == "UTC"
        assert "<lastmod>2024-01-15T00:00:00+00:00</lastmod>" in sitemap.get()


class TestCli:
    def test_init_creates_loadable_config(self, tmp_path):
        target = tmp_path / "sitemap.config.yml"
        assert main(["init", "-p", str(target)]) == 0
        data = yaml.safe_load(target.read_text(encoding="utf-8"))
        assert data["urls"][0]["loc"] == "https://example.com/"
        assert len(load_config(target).urls) == 2

    def test_init_refuses_to_overwrite(self, tmp_path):
        target = tmp_path / "sitemap.config.yml"
        target.write_text("keep me", encoding="utf-8")
        assert main(["init", "-p", str(target)]) == 1
        assert target.read_text(encoding="utf-8") == "keep me"
        assert main(["init", "-p", str(target), "-f"]) == 0

    def test_build_writes_file(self, config_path, tmp_path):
        output = tmp_path / "sitemap.xml"
        assert main(["build", "-c", str(config_path), "-o", str(output)]) == 0
        expected = build_sitemap(load_config(config_path)).get()
        assert output.read_text(encoding="utf-8") == expected

    def test_build_stdout(self, config_path, capsys):
        assert main(["build", "-c", str(config_path), "--stdout"]) == 0
        out = capsys.readouterr().out
        assert out.startswith('<?xml version="1.0" encoding="UTF-8"?>')
        assert "<loc>https://example.com/about</loc>" in out

    def test_build_missing_config(self, tmp_path, capsys):
        assert main(["build", "-c", str(tmp_path / "nope.yml")]) == 1
        assert "[ERROR]" in capsys.readouterr().err

    def test_build_invalid_config(self, tmp_path, capsys):
        path = tmp_path / "c.yml"
        path.write_text("urls:\n  - loc: example.com\n", encoding="utf-8")
        assert main(["build", "-c", str(path), "--stdout"]) == 1
        assert "urls[0].loc" in capsys.readouterr().err

    def test_build_no_validate_still_rejects_bad_location(self, tmp_path, capsys):
        path = tmp_path / "c.yml"
        path.write_text("urls:\n  - loc: example.com\n", encoding="utf-8")
        assert main(["build", "-c", str(path), "--stdout", "--no-validate"]) == 1
        assert "Invalid sitemap entry" in capsys.readouterr().err

    def test_build_bad_lastmod(self, tmp_path, capsys):
        path = tmp_path / "c.yml"
        path.write_text(
            "urls:\n  - loc: https://example.com/\n    lastmod: not a date\n",
            encoding="utf-8",
        )
        assert main(["build", "-c", str(path), "--stdout"]) == 1
        assert "[ERROR]" in capsys.readouterr().err

    def test_build_unwritable_output(self, config_path, tmp_path, capsys):
        output = tmp_path / "missing" / "sitemap.xml"
        assert main(["build", "-c", str(config_path), "-o", str(output)]) == 1
        assert "Failed to write sitemap" in capsys.readouterr().err
