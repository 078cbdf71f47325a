"""Tests for the struct2nest command line."""

import json

import pytest

from struct2nest.cli import main

from .conftest import ORDER_SOURCE, USER_SOURCE


def test_missing_input_dir(capsys):
    assert main([]) == 1
    assert "Please provide an input directory path!" in capsys.readouterr().out


def test_nonexistent_input_dir(tmp_path, capsys):
    assert main([str(tmp_path / "missing")]) == 1
    assert "Input directory not found" in capsys.readouterr().out


def test_convert(source_dir, tmp_path):
    input_dir = source_dir({"user.go": USER_SOURCE})
    output_dir = tmp_path / "out"

    assert main([str(input_dir), "-o", str(output_dir)]) == 0

    content = (output_dir / "user.schemas.ts").read_text(encoding="utf-8")
    assert "class User {" in content


def test_failure_exit_code(source_dir, tmp_path):
    input_dir = source_dir({"user.go": USER_SOURCE})
    (input_dir / "broken.go").write_bytes(b"\xff\xfe")
    output_dir = tmp_path / "out"

    assert main([str(input_dir), "-o", str(output_dir)]) == 1
    assert (output_dir / "user.schemas.ts").is_file()


def test_all_structs_and_flags(source_dir, tmp_path):
    input_dir = source_dir({"order.go": ORDER_SOURCE})
    output_dir = tmp_path / "out"

    code = main(
        [
            str(input_dir),
            "-o",
            str(output_dir),
            "--all-structs",
            "--no-timestamps",
            "--no-virtuals",
        ]
    )

    assert code == 0
    content = (output_dir / "orderline.schemas.ts").read_text(encoding="utf-8")
    assert "  timestamps: false," in content
    assert "    virtuals: false," in content


def test_dry_run_show_code(source_dir, tmp_path, capsys):
    input_dir = source_dir({"user.go": USER_SOURCE})
    output_dir = tmp_path / "out"

    assert main([str(input_dir), "-o", str(output_dir), "--dry-run", "--show-code"]) == 0

    assert not output_dir.exists()
    assert "SchemaFactory" in capsys.readouterr().out


def test_config_file(source_dir, tmp_path):
    input_dir = source_dir({"user.go": USER_SOURCE})
    output_dir = tmp_path / "configured"
    config_path = tmp_path / "config.json"
    config_path.write_text(
        json.dumps({"output_dir": str(output_dir), "file_suffix": ".schema.ts"}),
        encoding="utf-8",
    )

    assert main([str(input_dir), "--config", str(config_path)]) == 0
    assert (output_dir / "user.schema.ts").is_file()


def test_bad_config_file(source_dir, tmp_path, capsys):
    input_dir = source_dir({"user.go": USER_SOURCE})
    assert main([str(input_dir), "--config", str(tmp_path / "nope.json")]) == 1
    assert "Configuration file not found" in capsys.readouterr().out


def test_alias_target(source_dir, tmp_path):
    input_dir = source_dir({"user.go": USER_SOURCE})
    output_dir = tmp_path / "out"
    assert main([str(input_dir), "-o", str(output_dir), "--target", "mongoose"]) == 0
    assert (output_dir / "user.schemas.ts").is_file()


def test_unsupported_target(source_dir, capsys):
    input_dir = source_dir({"user.go": USER_SOURCE})
    assert main([str(input_dir), "--target", "typeorm"]) == 1
    assert "Unsupported target" in capsys.readouterr().out


def test_list_targets(capsys):
    assert main(["--list-targets"]) == 0
    out = capsys.readouterr().out
    assert "nestjs" in out
    assert "NestJSGenerator" in out


def test_output_path_is_a_file(source_dir, tmp_path, capsys):
    input_dir = source_dir({"user.go": USER_SOURCE})
    target = tmp_path / "taken"
    target.write_text("x", encoding="utf-8")

    assert main([str(input_dir), "-o", str(target)]) == 1
    assert "Cannot create output directory" in capsys.readouterr().out
    assert target.read_text(encoding="utf-8") == "x"


@pytest.mark.parametrize(
    "settings, message",
    [
        ({"indent_size": "4"}, "indent_size must be an integer"),
        ({"timestamps": 1}, "timestamps should be true or false"),
        ({"virtuals": "no"}, "virtuals should be true or false"),
    ],
)
def test_config_value_of_wrong_type(source_dir, tmp_path, capsys, settings, message):
    input_dir = source_dir({"user.go": USER_SOURCE})
    output_dir = tmp_path / "out"
    config_path = tmp_path / "config.json"
    config_path.write_text(json.dumps(settings), encoding="utf-8")

    code = main([str(input_dir), "-o", str(output_dir), "--config", str(config_path)])

    assert code == 1
    assert message in capsys.readouterr().out
    assert not output_dir.exists()
