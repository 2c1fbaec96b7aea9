"""
Tests for the command-line interface.
"""

import functools
import json
from pathlib import Path
from unittest.mock import patch

import httpx
import pytest

from psl_parser.cli import create_parser, main
from psl_parser.config import create_default_config, load_config_from_file, save_config_to_file
from psl_parser.rule_updater import RuleUpdater


RULES_TEXT = "// test rules\ncom\nuk.com\nuk\nco.uk\n*.ck\n!www.ck\n"


@pytest.fixture
def rules_file(tmp_path: Path) -> Path:
    path = tmp_path / "rules.dat"
    path.write_text(RULES_TEXT, encoding="utf-8")
    return path


@pytest.fixture
def config_file(tmp_path: Path) -> Path:
    path = tmp_path / "config.json"
    config = create_default_config()
    config.rules.url = "https://publicsuffix.example/list.dat"
    config.rules.snapshot_path = tmp_path / "snapshot.dat"
    save_config_to_file(config, path)
    return path


class TestParser:
    def test_commands_registered(self) -> None:
        parser = create_parser()
        args = parser.parse_args(["parse", "a.com", "b.com"])
        assert args.domains == ["a.com", "b.com"]

        args = parser.parse_args(["get", "a.com", "--rules", "x.dat", "-l", "de"])
        assert args.domain == "a.com"
        assert args.rules == "x.dat"
        assert args.language == "de"

    def test_no_command_prints_help(self, capsys) -> None:
        assert main([]) == 0
        assert "usage" in capsys.readouterr().out


class TestParseCommand:
    def test_single_domain(self, capsys, rules_file: Path, config_file: Path) -> None:
        code = main(["parse", "www.example.co.uk", "-r", str(rules_file), "-c", str(config_file)])

        assert code == 0
        output = json.loads(capsys.readouterr().out)
        assert output["status"] == "success"
        assert output["outcome"] == "listed"
        assert output["error"] is None
        assert output["parsed"] == {
            "input": "www.example.co.uk",
            "tld": "co.uk",
            "sld": "example",
            "domain": "example.co.uk",
            "subdomain": "www",
            "listed": True,
        }

    def test_multiple_domains_with_error(self, capsys, rules_file: Path, config_file: Path) -> None:
        code = main(["parse", "a.com", "bad-.com", "-r", str(rules_file), "-c", str(config_file)])

        assert code == 1
        output = json.loads(capsys.readouterr().out)
        assert [item["status"] for item in output] == ["success", "error"]
        assert output[1]["error"] == {
            "input": "bad-.com",
            "code": "LABEL_ENDS_WITH_DASH",
            "message": "Domain name label can not end with a dash.",
        }

    def test_missing_rules_file(self, capsys, tmp_path: Path, config_file: Path) -> None:
        code = main(["parse", "a.com", "-r", str(tmp_path / "missing.dat"), "-c", str(config_file)])

        assert code == 1
        assert "Could not load rules" in capsys.readouterr().err

    def test_bad_config_file(self, capsys, tmp_path: Path) -> None:
        path = tmp_path / "broken.json"
        path.write_text("{", encoding="utf-8")

        assert main(["parse", "a.com", "-c", str(path)]) == 1
        assert "Could not load config" in capsys.readouterr().err


class TestGetAndIsValid:
    def test_get(self, capsys, rules_file: Path, config_file: Path) -> None:
        assert main(["get", "A.B.TEST.CK", "-r", str(rules_file), "-c", str(config_file)]) == 0
        assert capsys.readouterr().out.strip() == "b.test.ck"

    def test_get_no_domain(self, capsys, rules_file: Path, config_file: Path) -> None:
        assert main(["get", "co.uk", "-r", str(rules_file), "-c", str(config_file)]) == 1
        assert "No registrable domain" in capsys.readouterr().err

    def test_get_invalid_german(self, capsys, rules_file: Path, config_file: Path) -> None:
        code = main(["get", "", "-r", str(rules_file), "-c", str(config_file), "-l", "de"])
        assert code == 1
        assert "Domainname zu kurz." in capsys.readouterr().err

    def test_is_valid(self, capsys, rules_file: Path, config_file: Path) -> None:
        assert main(["is-valid", "www.ck", "-r", str(rules_file), "-c", str(config_file)]) == 0
        assert main(["is-valid", "x.yz", "-r", str(rules_file), "-c", str(config_file)]) == 1
        out = capsys.readouterr().out
        assert "'www.ck' is a registrable domain" in out
        assert "'x.yz' is not a registrable domain" in out


class TestUpdateRulesCommand:
    def test_update_writes_snapshot(self, capsys, tmp_path: Path, config_file: Path) -> None:
        def handler(request: httpx.Request) -> httpx.Response:
            return httpx.Response(200, text=RULES_TEXT)

        factory = functools.partial(RuleUpdater, transport=httpx.MockTransport(handler))
        output = tmp_path / "out" / "rules.dat"

        with patch("psl_parser.cli.RuleUpdater", factory):
            code = main(["update-rules", "-c", str(config_file), "-o", str(output)])

        assert code == 0
        assert output.read_text(encoding="utf-8") == "com\nuk.com\nuk\nco.uk\n*.ck\n!www.ck\n"
        assert "Wrote 6 rules" in capsys.readouterr().out

    def test_update_failure(self, capsys, tmp_path: Path, config_file: Path) -> None:
        def handler(request: httpx.Request) -> httpx.Response:
            return httpx.Response(503, text="unavailable")

        factory = functools.partial(RuleUpdater, transport=httpx.MockTransport(handler))

        with patch("psl_parser.cli.RuleUpdater", factory):
            code = main(["update-rules", "-c", str(config_file), "-o", str(tmp_path / "rules.dat")])

        assert code == 1
        assert "Rule update failed" in capsys.readouterr().err
        assert not (tmp_path / "rules.dat").exists()

    def test_non_https_url(self, capsys, tmp_path: Path, config_file: Path) -> None:
        code = main([
            "update-rules",
            "-c", str(config_file),
            "--url", "http://publicsuffix.example/list.dat",
            "-o", str(tmp_path / "rules.dat"),
        ])
        assert code == 1
        assert "must use HTTPS" in capsys.readouterr().err


class TestConfigCommand:
    def test_init_and_show(self, capsys, tmp_path: Path) -> None:
        path = tmp_path / "config.json"

        assert main(["config", "init", "-p", str(path), "-l", "de"]) == 0
        assert load_config_from_file(path).language == "de"

        assert main(["config", "init", "-p", str(path)]) == 1
        assert main(["config", "init", "-p", str(path), "--force"]) == 0

        assert main(["config", "show", "-p", str(path)]) == 0
        out = capsys.readouterr().out
        assert "Rules URL: https://publicsuffix.org/list/effective_tld_names.dat" in out

    def test_show_missing(self, capsys, tmp_path: Path) -> None:
        assert main(["config", "show", "-p", str(tmp_path / "none.json")]) == 1
        assert "No configuration found" in capsys.readouterr().out
