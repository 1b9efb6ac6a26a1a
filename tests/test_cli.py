import io
import json

import pytest

from poemcheck import cli


@pytest.fixture
def lexicon_file(tmp_path):
    path = tmp_path / "lexicon.json"
    path.write_text(
        json.dumps(
            {
                "spring": 1,
                "rain": 1,
                "falls": 1,
                "softly": 2,
                "pink": 1,
                "blossoms": 2,
                "drift": 1,
                "on": 1,
                "the": 1,
                "breeze": 1,
                "new": 1,
                "life": 1,
                "begins": 2,
                "here": 1,
            }
        )
    )
    return str(path)


@pytest.fixture
def poem_file(tmp_path):
    path = tmp_path / "poem.txt"
    path.write_text(
        "Spring rain falls softly\nPink blossoms drift on the breeze\nNew life begins here.\n"
    )
    return str(path)


def test_validate_valid_poem(lexicon_file, poem_file, capsys):
    code = cli.main(["validate", poem_file, "--lexicon", lexicon_file, "--degraded"])

    out = capsys.readouterr().out
    assert code == cli.EXIT_VALID
    assert "Perfect haiku!" in out
    assert "[5, 7, 5]" in out


def test_validate_json_output(lexicon_file, poem_file, capsys):
    code = cli.main(
        ["validate", poem_file, "--lexicon", lexicon_file, "--degraded", "--json", "-t", "tanka"]
    )

    result = json.loads(capsys.readouterr().out)
    assert code == cli.EXIT_INVALID
    assert result["pattern_key"] == "tanka"
    assert result["feedback"] == "Great start! Finish all 5 lines."


def test_validate_unknown_type(lexicon_file, poem_file, capsys):
    code = cli.main(["validate", poem_file, "--lexicon", lexicon_file, "--degraded", "-t", "sonnet"])

    assert code == cli.EXIT_ERROR
    assert "Unknown poem type" in capsys.readouterr().out


def test_validate_reads_stdin(lexicon_file, monkeypatch, capsys):
    poem = "Spring rain falls softly\nPink blossoms drift on the breeze\nNew life begins here.\n"
    monkeypatch.setattr("sys.stdin", io.StringIO(poem))

    code = cli.main(["validate", "--lexicon", lexicon_file, "--degraded"])

    assert code == cli.EXIT_VALID
    assert "Perfect haiku!" in capsys.readouterr().out


def test_validate_missing_file(tmp_path, lexicon_file, capsys):
    missing = tmp_path / "missing.txt"

    code = cli.main(["validate", str(missing), "--lexicon", lexicon_file, "--degraded"])

    assert code == cli.EXIT_ERROR
    assert "Poem file not found" in capsys.readouterr().out


def test_count_malformed_lexicon(tmp_path, poem_file, capsys):
    bad_lexicon = tmp_path / "bad.json"
    bad_lexicon.write_text("{not json")

    code = cli.main(["count", poem_file, "--lexicon", str(bad_lexicon), "--degraded"])

    assert code == cli.EXIT_ERROR
    assert "Could not load lexicon" in capsys.readouterr().out


def test_validate_lexicon_not_an_object(tmp_path, poem_file, capsys):
    bad_lexicon = tmp_path / "list.json"
    bad_lexicon.write_text("[1, 2]")

    code = cli.main(["validate", poem_file, "--lexicon", str(bad_lexicon), "--degraded"])

    assert code == cli.EXIT_ERROR
    assert "must contain a JSON object" in capsys.readouterr().out


def test_validate_without_model_is_unverified(tmp_path, lexicon_file, capsys):
    poem = tmp_path / "poem.txt"
    poem.write_text("zephyr")

    code = cli.main(
        [
            "validate",
            str(poem),
            "--lexicon",
            lexicon_file,
            "--model",
            str(tmp_path / "missing.onnx"),
            "--metadata",
            str(tmp_path / "missing.json"),
        ]
    )

    assert code == cli.EXIT_UNVERIFIED
    assert "Unable to check" in capsys.readouterr().out


def test_count(lexicon_file, tmp_path, capsys):
    poem = tmp_path / "line.txt"
    poem.write_text("Spring rain blossoms")

    code = cli.main(["count", str(poem), "--lexicon", lexicon_file, "--degraded"])

    out = capsys.readouterr().out
    assert code == cli.EXIT_VALID
    assert "blossoms: 2 (partial)" in out
    assert "Total: 4" in out


def test_patterns(capsys):
    assert cli.main(["patterns"]) == cli.EXIT_VALID

    out = capsys.readouterr().out
    assert "haiku" in out
    assert "5-7-5" in out
