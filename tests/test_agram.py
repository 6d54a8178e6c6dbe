import json
from pathlib import Path

import pytest

import utils
from agram import main


@pytest.fixture(autouse=True)
def app_dir(tmp_path, monkeypatch) -> Path:
    home = tmp_path / "app"
    home.mkdir()
    monkeypatch.setattr(utils, "APP_DIR", home)
    monkeypatch.setattr(utils, "CONFIG_PATH", home / "config.json")
    monkeypatch.setattr(utils, "LOG_PATH", home / "agram.log")
    return home


def sample_wordlist_path() -> str:
    return str(Path(__file__).resolve().parent.parent / "sample_data" / "wordlist_small.txt")


def test_search_prints_status_and_results(capsys) -> None:
    assert main(["-s", "scare", "zzzz", "-d", sample_wordlist_path()]) == 0

    lines = capsys.readouterr().out.splitlines()
    assert lines == [
        "Now searching for scare -- 1 word left",
        "Now searching for zzzz -- 0 words left",
        "Done",
        "scare 5: carse caser ceras scare scrae",
        "zzzz 0:",
    ]


def test_quiet_combined_short_flags(capsys) -> None:
    assert main(["-s", "pear", "-obq", "-d", sample_wordlist_path()]) == 0
    assert capsys.readouterr().out == "pear 1: pear\n"


def test_compare_prints_yes_or_no(capsys) -> None:
    assert main(["-c", "pear", "pare"]) == 0
    assert main(["-c", "pear", "parrepeer"]) == 0
    assert main(["-c", "pear", "parrepeer", "-b"]) == 0
    assert capsys.readouterr().out.splitlines() == ["yes", "no", "yes"]


def test_compare_takes_precedence_over_search(tmp_path, capsys) -> None:
    assert main(["-s", "scare", "-c", "pear", "reap", "-d", str(tmp_path / "missing.txt")]) == 0
    assert capsys.readouterr().out == "yes\n"


def test_no_words_prints_usage(capsys) -> None:
    assert main([]) == 2
    assert "usage: agram" in capsys.readouterr().out


def test_single_letter_words_fail(capsys) -> None:
    assert main(["-s", "a", "b", "-d", sample_wordlist_path()]) == 1
    captured = capsys.readouterr()
    assert captured.out == ""
    assert "single-letter" in captured.err


def test_missing_dictionary_fails(tmp_path, capsys) -> None:
    missing = tmp_path / "missing.txt"
    assert main(["-s", "scare", "-d", str(missing)]) == 1
    assert str(missing) in capsys.readouterr().err


def test_configured_dictionary_and_last_path(app_dir, capsys) -> None:
    (app_dir / "config.json").write_text(json.dumps({"dictionary": sample_wordlist_path()}), encoding="utf-8")

    assert main(["-q", "-s", "reap"]) == 0
    assert capsys.readouterr().out == "reap 3: pear reap pare\n"
    config = json.loads((app_dir / "config.json").read_text(encoding="utf-8"))
    assert config["last_dictionary_path"] == str(Path(sample_wordlist_path()).resolve())


def test_export_writes_json_and_csv(tmp_path) -> None:
    json_path = tmp_path / "results.json"
    assert main(["-q", "-s", "scare", "-d", sample_wordlist_path(), "-e", str(json_path)]) == 0

    payload = json.loads(json_path.read_text(encoding="utf-8"))
    assert payload["results"][0]["count"] == 5
    assert (tmp_path / "results.csv").read_text(encoding="utf-8").splitlines()[1].startswith("scare,found,5,")


def test_export_rejects_csv_name(tmp_path, capsys) -> None:
    csv_name = tmp_path / "results.csv"
    with pytest.raises(SystemExit) as excinfo:
        main(["-q", "-s", "scare", "-d", sample_wordlist_path(), "-e", str(csv_name)])

    assert excinfo.value.code == 2
    assert "--export" in capsys.readouterr().err
    assert not csv_name.exists()
