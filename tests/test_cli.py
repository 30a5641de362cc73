"""Tests for the claim intake CLI."""

import csv
import json
from pathlib import Path

import pytest

from fra_claims.cli import (
    _find_documents,
    _guess_mime_type,
    _print_summary,
    main,
    process_folder,
    recognize_single,
    summarize_claims,
)
from fra_claims.utils.config import load_config


def _write_scan(path: Path, size: int = 4096) -> Path:
    path.write_bytes(b"\x00" * size)
    return path


class TestFindDocuments:
    """Tests for document discovery."""

    def test_find_supported_files(self, tmp_path: Path) -> None:
        (tmp_path / "a.png").touch()
        (tmp_path / "b.pdf").touch()
        (tmp_path / "c.jpg").touch()
        (tmp_path / "readme.txt").touch()
        files = _find_documents(tmp_path)
        assert [f.name for f in files] == ["a.png", "b.pdf", "c.jpg"]

    def test_find_uppercase_extensions(self, tmp_path: Path) -> None:
        (tmp_path / "SCAN.PDF").touch()
        assert len(_find_documents(tmp_path)) == 1

    def test_find_no_documents(self, tmp_path: Path) -> None:
        (tmp_path / "notes.txt").touch()
        assert _find_documents(tmp_path) == []


class TestGuessMimeType:
    """Tests for extension-based media types."""

    def test_known_extensions(self) -> None:
        assert _guess_mime_type(Path("claim.pdf")) == "application/pdf"
        assert _guess_mime_type(Path("claim.png")) == "image/png"

    def test_unknown_extension(self) -> None:
        assert _guess_mime_type(Path("claim.zzz")) == "application/octet-stream"


class TestRecognizeSingle:
    """Tests for single-file recognition."""

    def test_returns_fields(self, tmp_path: Path, fast_config_file: Path) -> None:
        scan = _write_scan(tmp_path / "claim.pdf")
        result = recognize_single(scan, load_config(fast_config_file))
        assert result["claim_id"].startswith("FRA-2024-")
        assert 15 <= result["confidence"] <= 98
        assert len(result["family_members"]) == 3

    def test_seeded_runs_match(self, tmp_path: Path, fast_config_file: Path) -> None:
        scan = _write_scan(tmp_path / "claim.png")
        config = load_config(fast_config_file)
        first = recognize_single(scan, config, clock=lambda: 1_700_000_001.25)
        second = recognize_single(scan, config, clock=lambda: 1_700_000_001.25)
        assert first == second
        assert first["claim_id"] == "FRA-2024-1250"
        assert "Claim ID: FRA-2024-1250" in first["raw_text"]


class TestProcessFolder:
    """Tests for batch intake."""

    def test_batch_exports_csv(
        self,
        tmp_path: Path,
        fast_config_file: Path,
        capsys: pytest.CaptureFixture[str],
    ) -> None:
        scans = tmp_path / "scans"
        scans.mkdir()
        _write_scan(scans / "one.pdf")
        _write_scan(scans / "two.png")
        output = tmp_path / "out" / "claims.csv"

        summary = process_folder(
            scans, output, load_config(fast_config_file), with_boundary=True
        )
        assert summary == {"total": 2, "successful": 2, "failed": 0}

        with open(output) as f:
            rows = list(csv.DictReader(f))
        assert len(rows) == 2
        assert all(r["status"] == "pending" for r in rows)
        assert "Batch Intake Complete" in capsys.readouterr().out

    def test_batch_empty_folder(self, tmp_path: Path, fast_config_file: Path) -> None:
        summary = process_folder(
            tmp_path, tmp_path / "claims.csv", load_config(fast_config_file)
        )
        assert summary == {"total": 0, "successful": 0, "failed": 0}
        assert not (tmp_path / "claims.csv").exists()


class TestSummarizeClaims:
    """Tests for dashboard summaries over an exported CSV."""

    def test_summary_after_batch(
        self, tmp_path: Path, fast_config_file: Path
    ) -> None:
        scans = tmp_path / "scans"
        scans.mkdir()
        for name in ("one.pdf", "two.pdf", "three.png"):
            _write_scan(scans / name)
        output = tmp_path / "claims.csv"
        process_folder(scans, output, load_config(fast_config_file))

        summary = summarize_claims(output)
        dashboard = summary["dashboard"]
        assert dashboard["total_claims"] == 3
        assert dashboard["pending"] == 3
        assert dashboard["processed"] == 0
        assert dashboard["total_area"] > 0
        assert summary["statuses"] == {"pending": 3}
        assert sum(v["count"] for v in summary["villages"]) == 3
        assert sum(d["count"] for d in summary["trend"]) == 3

    def test_top_villages_limit(self, tmp_path: Path) -> None:
        output = tmp_path / "claims.csv"
        output.write_text(
            "claim_id,claimant_name,village,district,state,area,status,"
            "ocr_confidence,created_at\n"
            "A,Ram,Mendha,,,1.00,approved,90,2024-03-01T10:00:00+00:00\n"
            "B,Sita,Mendha,,,2.00,pending,,2024-03-02T10:00:00+00:00\n"
            "C,Ravi,Bamni,,,0.50,rejected,70,\n"
        )
        summary = summarize_claims(output, top_villages=1)
        assert summary["villages"] == [{"village": "Mendha", "count": 2}]
        assert summary["dashboard"] == {
            "total_claims": 3,
            "processed": 2,
            "total_area": 3.5,
            "pending": 1,
        }
        assert summary["trend"] == [
            {"date": "2024-03-01", "count": 1},
            {"date": "2024-03-02", "count": 1},
        ]


class TestPrintSummary:
    """Tests for summary printing."""

    def test_print_summary(self, capsys: pytest.CaptureFixture[str]) -> None:
        _print_summary(
            {"total": 3, "successful": 2, "failed": 1}, Path("claims.csv"), 4.5
        )
        out = capsys.readouterr().out
        assert "Total:      3" in out
        assert "Failed:     1" in out
        assert "Area (ha):  4.50" in out


class TestMain:
    """Tests for argument parsing and dispatch."""

    def test_recognize_prints_json(
        self,
        tmp_path: Path,
        fast_config_file: Path,
        capsys: pytest.CaptureFixture[str],
    ) -> None:
        scan = _write_scan(tmp_path / "claim.pdf")
        main(["--config", str(fast_config_file), "recognize", str(scan)])
        data = json.loads(capsys.readouterr().out)
        assert data["village"]

    def test_recognize_to_output_file(
        self, tmp_path: Path, fast_config_file: Path
    ) -> None:
        scan = _write_scan(tmp_path / "claim.pdf")
        output = tmp_path / "result.json"
        main(
            [
                "--config",
                str(fast_config_file),
                "recognize",
                str(scan),
                "--mime",
                "image/jpeg",
                "-o",
                str(output),
            ]
        )
        assert json.loads(output.read_text())["claimant_name"]

    def test_recognize_missing_file_exits(
        self, tmp_path: Path, fast_config_file: Path
    ) -> None:
        with pytest.raises(SystemExit) as exc_info:
            main(
                [
                    "--config",
                    str(fast_config_file),
                    "recognize",
                    str(tmp_path / "x.pdf"),
                ]
            )
        assert exc_info.value.code == 1

    def test_batch_not_a_directory(
        self, tmp_path: Path, fast_config_file: Path
    ) -> None:
        with pytest.raises(SystemExit) as exc_info:
            main(["--config", str(fast_config_file), "batch", str(tmp_path / "nope")])
        assert exc_info.value.code == 1

    def test_entities(
        self,
        tmp_path: Path,
        fast_config_file: Path,
        capsys: pytest.CaptureFixture[str],
    ) -> None:
        text_file = tmp_path / "claim.txt"
        text_file.write_text("Village: Mendha\nClaim ID: FRA-2024-9981\nArea: 2.5")
        main(["--config", str(fast_config_file), "entities", str(text_file)])
        data = json.loads(capsys.readouterr().out)
        assert data["villages"] == ["Mendha"]
        assert data["ids"] == ["FRA-2024-9981"]

    def test_boundary(
        self, fast_config_file: Path, capsys: pytest.CaptureFixture[str]
    ) -> None:
        config = str(fast_config_file)
        main(["--config", config, "--seed", "3", "boundary", "Mendha", "2.5"])
        data = json.loads(capsys.readouterr().out)
        assert data["type"] == "Polygon"
        ring = data["coordinates"][0]
        assert ring[0] == ring[-1]

    def test_boundary_invalid_area(self, fast_config_file: Path) -> None:
        with pytest.raises(SystemExit) as exc_info:
            main(["--config", str(fast_config_file), "boundary", "Mendha", "-1"])
        assert exc_info.value.code == 1

    def test_villages(
        self, fast_config_file: Path, capsys: pytest.CaptureFixture[str]
    ) -> None:
        main(["--config", str(fast_config_file), "villages"])
        data = json.loads(capsys.readouterr().out)
        assert len(data) == 10

    def test_stats(
        self,
        tmp_path: Path,
        fast_config_file: Path,
        capsys: pytest.CaptureFixture[str],
    ) -> None:
        scans = tmp_path / "scans"
        scans.mkdir()
        _write_scan(scans / "one.pdf")
        output = tmp_path / "claims.csv"
        config = str(fast_config_file)
        main(["--config", config, "batch", str(scans), "-o", str(output)])
        capsys.readouterr()

        main(["--config", config, "stats", str(output)])
        data = json.loads(capsys.readouterr().out)
        assert data["dashboard"]["total_claims"] == 1
        assert data["statuses"] == {"pending": 1}

    def test_stats_missing_file(self, tmp_path: Path, fast_config_file: Path) -> None:
        with pytest.raises(SystemExit) as exc_info:
            main(["--config", str(fast_config_file), "stats", str(tmp_path / "x.csv")])
        assert exc_info.value.code == 1

    def test_no_command_prints_help(self, fast_config_file: Path) -> None:
        with pytest.raises(SystemExit) as exc_info:
            main(["--config", str(fast_config_file)])
        assert exc_info.value.code == 0
