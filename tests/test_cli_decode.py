from __future__ import annotations

from pathlib import Path

from rcsdk.cli import app

ENVELOPE = 'Content-Type: application/json\n\n{"response":[{"status":200},{"status":404}]}'


def test_decode_batch_file(cli_runner, tmp_path: Path, batch_body, batch_content_type) -> None:
    body = batch_body(
        ENVELOPE,
        'Content-Type: application/json\n\n{"id": 1}',
        'Content-Type: application/json\n\n{"message": "Extension not found"}',
        newline="\r\n",
    )
    path = tmp_path / "batch.txt"
    path.write_bytes(body.encode("utf-8"))

    result = cli_runner.invoke(
        app, ["decode", str(path), "--content-type", batch_content_type, "--status", "207", "--errors"]
    )

    assert result.exit_code == 0, result.stdout
    assert "#1 200 application/json" in result.stdout
    assert "#2 404 application/json" in result.stdout
    assert '"id": 1' in result.stdout
    assert "error: Extension not found" in result.stdout


def test_decode_plain_json(cli_runner, tmp_path: Path) -> None:
    path = tmp_path / "body.json"
    path.write_text('{"uri": "https://platform.example/restapi/v1.0"}', encoding="utf-8")

    result = cli_runner.invoke(app, ["decode", str(path), "-t", "application/json"])

    assert result.exit_code == 0, result.stdout
    assert "#1 200 application/json" in result.stdout
    assert '"uri": "https://platform.example/restapi/v1.0"' in result.stdout


def test_decode_non_textual_body(cli_runner, tmp_path: Path) -> None:
    path = tmp_path / "fax.pdf"
    path.write_bytes(b"%PDF-1.4")

    result = cli_runner.invoke(app, ["decode", str(path), "-t", "application/pdf"])

    assert result.exit_code == 0, result.stdout
    assert "<binary>" in result.stdout


def test_decode_reports_missing_boundary(cli_runner, tmp_path: Path, batch_body) -> None:
    path = tmp_path / "batch.txt"
    path.write_text(batch_body(ENVELOPE), encoding="utf-8")

    result = cli_runner.invoke(app, ["decode", str(path), "-t", "multipart/mixed"])

    assert result.exit_code == 1
    assert "Unable to decode response: Cannot find boundary" in result.stdout


def test_decode_reports_status_mismatch(cli_runner, tmp_path: Path, batch_body, batch_content_type) -> None:
    envelope = 'Content-Type: application/json\n\n{"response":[]}'
    path = tmp_path / "batch.txt"
    path.write_text(batch_body(envelope, 'Content-Type: application/json\n\n{}'), encoding="utf-8")

    result = cli_runner.invoke(app, ["decode", str(path), "-t", batch_content_type])

    assert result.exit_code == 1
    assert "Envelope lists 0 status(es) but the body has 1 part(s)" in result.stdout
