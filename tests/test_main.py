import json

import pytest

import main


@pytest.fixture
def store_dir(tmp_path):
    return str(tmp_path / "store")


@pytest.fixture
def source_file(tmp_path):
    path = tmp_path / "card.html"
    path.write_text("<style>.card{}</style>\n<div class=\"card\"></div>\nconst n = 1;\n", encoding="utf-8")
    return str(path)


def _run(capsys, *argv):
    code = main.main(list(argv))
    out, err = capsys.readouterr()
    return code, out, err


def test_separate_prints_triple(capsys, source_file, store_dir):
    code, out, _ = _run(capsys, "--store", store_dir, "separate", source_file)

    assert code == 0
    assert json.loads(out) == {
        "html": "<div class=\"card\"></div>\nconst n = 1;",
        "css": ".card{}",
        "js": "const n = 1;",
    }


def test_save_then_list(capsys, source_file, store_dir):
    code, _, _ = _run(capsys, "--store", store_dir, "save", source_file, "--title", "Card")
    assert code == 0

    code, out, _ = _run(capsys, "--store", store_dir, "list")
    listed = json.loads(out)

    assert code == 0
    assert [item["title"] for item in listed] == ["Card"]
    assert listed[0]["folder"] == "default"


def test_save_into_unknown_folder_fails(capsys, source_file, store_dir):
    code, _, err = _run(capsys, "--store", store_dir, "save", source_file, "--folder", "nope")

    assert code == 1
    assert "Unknown folder" in err


def test_save_blank_file_reports_error(capsys, tmp_path, store_dir):
    blank = tmp_path / "blank.html"
    blank.write_text("  \n", encoding="utf-8")

    code, out, _ = _run(capsys, "--store", store_dir, "save", str(blank))

    assert code == 1
    assert "no code found" in out


def test_folder_commands(capsys, store_dir):
    code, out, _ = _run(capsys, "--store", store_dir, "mkdir", "Work")
    folder = json.loads(out)
    assert code == 0
    assert folder["name"] == "Work"

    code, _, err = _run(capsys, "--store", store_dir, "rmdir", "default")
    assert code == 1
    assert "default folder" in err

    code, _, _ = _run(capsys, "--store", store_dir, "rmdir", folder["id"])
    assert code == 0

    code, out, _ = _run(capsys, "--store", store_dir, "folders")
    assert [f["id"] for f in json.loads(out)] == ["default"]


def test_preview_writes_document(capsys, tmp_path, source_file, store_dir):
    output = tmp_path / "preview.html"

    code, _, _ = _run(capsys, "--store", store_dir, "preview", source_file, "-o", str(output))

    assert code == 0
    document = output.read_text(encoding="utf-8")
    assert ".card{}" in document
    assert "<div class=\"card\"></div>" in document


def test_missing_file_is_reported(capsys, tmp_path, store_dir):
    code, _, err = _run(capsys, "--store", store_dir, "separate", str(tmp_path / "missing.html"))

    assert code == 1
    assert "Error:" in err


def test_non_utf8_file_is_reported_and_batch_continues(capsys, tmp_path, source_file, store_dir):
    latin1 = tmp_path / "latin1.html"
    latin1.write_bytes(b"<p>caf\xe9</p>")

    code, out, _ = _run(capsys, "--store", store_dir, "save", str(latin1), source_file)

    assert code == 0
    assert "latin1.html" in out
    assert "Error Summary" in out

    code, out, _ = _run(capsys, "--store", store_dir, "list")
    assert [item["title"] for item in json.loads(out)] == ["card.html"]


def test_non_utf8_file_alone_fails_cleanly(capsys, tmp_path, store_dir):
    latin1 = tmp_path / "latin1.html"
    latin1.write_bytes(b"<p>caf\xe9</p>")

    code, _, _ = _run(capsys, "--store", store_dir, "save", str(latin1))
    assert code == 1

    code, _, err = _run(capsys, "--store", store_dir, "separate", str(latin1))
    assert code == 1
    assert "Error:" in err

    code, _, err = _run(capsys, "--store", store_dir, "preview", str(latin1))
    assert code == 1
    assert "Error:" in err


def test_directory_source_is_reported(capsys, tmp_path, store_dir):
    code, _, err = _run(capsys, "--store", store_dir, "separate", str(tmp_path))

    assert code == 1
    assert "Error:" in err


def test_delete_commands_report_storage_failure(capsys, tmp_path):
    blocker = tmp_path / "not-a-dir"
    blocker.write_text("x", encoding="utf-8")

    code, _, err = _run(capsys, "--store", str(blocker), "delete", "some-id")
    assert code == 1
    assert "Failed to delete snippet some-id" in err

    code, _, err = _run(capsys, "--store", str(blocker), "rmdir", "work")
    assert code == 1
    assert "Failed to delete folder work" in err
