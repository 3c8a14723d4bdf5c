import json

import pytest

from wordcrawler import cli


@pytest.fixture
def fake_fetcher(monkeypatch, make_fetcher, three_page_site):
    site, fetcher = make_fetcher(three_page_site)
    monkeypatch.setattr(cli, "build_fetcher", lambda config: fetcher)
    return site


def test_prints_json_to_stdout(fake_fetcher, capsys):
    assert cli.main(["http://example.com", "--top", "1"]) == 0
    out = capsys.readouterr().out
    assert json.loads(out) == [{"word": "testing", "frequency": 10}]


def test_writes_output_file(fake_fetcher, tmp_path, capsys):
    out_path = tmp_path / "nested" / "words.json"
    assert cli.main(["http://example.com", "--out", str(out_path), "--pretty", "--verbose"]) == 0

    assert json.loads(out_path.read_text(encoding="utf-8")) == [{"word": "testing", "frequency": 10}]
    err = capsys.readouterr().err
    assert "CRAWL SUMMARY" in err
    assert "HTML pages crawled:     3" in err


def test_limit_flag(fake_fetcher, capsys):
    assert cli.main(["http://example.com", "--limit", "1"]) == 0
    assert json.loads(capsys.readouterr().out) == [{"word": "testing", "frequency": 2}]
    assert fake_fetcher.gets() == ["http://example.com/"]


def test_invalid_url_exits_with_error(fake_fetcher, capsys):
    assert cli.main(["example.com"]) == 1
    assert "Please provide a url with a protocol and host" in capsys.readouterr().err
    assert fake_fetcher.calls == []


def test_fetch_failure_exits_with_error(monkeypatch, make_fetcher, capsys):
    _, fetcher = make_fetcher({})
    monkeypatch.setattr(cli, "build_fetcher", lambda config: fetcher)

    assert cli.main(["http://example.com"]) == 1
    assert "Maximum number of retries reached" in capsys.readouterr().err


def test_options_reach_config(monkeypatch, make_fetcher, three_page_site):
    seen = {}
    _, fetcher = make_fetcher(three_page_site)

    def build(config):
        seen["config"] = config
        return fetcher

    monkeypatch.setattr(cli, "build_fetcher", build)
    cli.main([
        "http://example.com",
        "--min-word-length", "2",
        "--max-attempts", "4",
        "--timeout", "1.5",
        "--backoff", "0.25",
        "--user-agent", "Tester/0.1",
    ])

    config = seen["config"]
    assert config.min_word_length == 2
    assert config.max_attempts == 4
    assert config.timeout_s == 1.5
    assert config.backoff_base_s == 0.25
    assert config.user_agent == "Tester/0.1"
