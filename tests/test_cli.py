import json
import sys
from pathlib import Path

import pytest

# Add the src directory to sys.path so that track_renamer can be imported
SRC_DIR = Path(__file__).resolve().parents[1] / "src"
sys.path.insert(0, str(SRC_DIR))

from track_renamer import cli, console


def create_music_folder(root: Path) -> Path:
    folder = root / "music"
    folder.mkdir()
    (folder / "some_artist-some_track.mp3").write_bytes(b"track")
    (folder / "Other - Song.wav").write_bytes(b"song")
    return folder


def test_report_only_by_default(tmp_path: Path, capsys):
    folder = create_music_folder(tmp_path)
    assert cli.main([str(folder), "--no-color"]) == 0

    out = capsys.readouterr().out
    assert "RENAME :     some_artist-some_track.mp3 -> Some Artist - Some Track.mp3" in out
    assert "CORRECT:     Other - Song.wav" in out
    assert (folder / "some_artist-some_track.mp3").exists()


def test_change_flag_applies_renames(tmp_path: Path, capsys):
    folder = create_music_folder(tmp_path)
    assert cli.main([str(folder), "--change", "--no-color"]) == 0

    out = capsys.readouterr().out
    assert "Renamed: some_artist-some_track.mp3 -> Some Artist - Some Track.mp3" in out
    assert (folder / "Some Artist - Some Track.mp3").exists()
    assert not (folder / "some_artist-some_track.mp3").exists()


def test_default_folder_is_music_in_cwd(tmp_path: Path, monkeypatch, capsys):
    create_music_folder(tmp_path)
    monkeypatch.chdir(tmp_path)
    assert cli.main(["--no-color"]) == 0
    assert "Some Artist - Some Track.mp3" in capsys.readouterr().out


@pytest.mark.parametrize("make_target", ["missing", "file"])
def test_invalid_folder_reported_without_crash(tmp_path: Path, capsys, make_target: str):
    target = tmp_path / "not_a_folder"
    if make_target == "file":
        target.write_text("x", encoding="utf-8")
    assert cli.main([str(target)]) == 0

    out = capsys.readouterr().out
    assert cli.INVALID_FOLDER_MESSAGE in out
    assert console.LEVEL_COLORS[console.INFO] in out


def test_json_report(tmp_path: Path, capsys):
    folder = create_music_folder(tmp_path)
    cli.main([str(folder), "--json", "--no-color"])

    out = capsys.readouterr().out
    report = json.loads(out[out.index("{"):])
    assert report["mode"] == "dry-run"
    assert report["folder"] == str(folder.resolve())
    assert report["rename_proposed"] == 1
    assert report["files_correct"] == 1
    assert report["proposed_changes"] == [["some_artist-some_track.mp3", "Some Artist - Some Track.mp3"]]


def test_verbose_reports_unmatched(tmp_path: Path, capsys):
    folder = create_music_folder(tmp_path)
    (folder / "track01.flac").write_bytes(b"x")
    cli.main([str(folder), "--verbose", "--no-color"])

    out = capsys.readouterr().out
    assert "UNMATCHED:   track01.flac" in out
    assert "mode=dry-run" in out
