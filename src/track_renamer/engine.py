"""Core engine for Track Renamer.

The :class:`RenameEngine` scans a folder for audio files, derives a
canonical ``Artist - Title (Mix).ext`` name for each of them, renames
files whose name differs and removes duplicates (same canonical name
and same byte size).  Every run returns a report dict.

Design notes / safety defaults:
- Only the top level of the folder is scanned; sub-folders are ignored.
- Files are processed in sorted order, one at a time.
- Dry-run (the default) never touches the filesystem.
- If the rename target is already taken by another file, the file is
  skipped rather than overwritten.
- Of two duplicates, a correctly named file is always kept; otherwise the
  file seen first is kept and the later one is reported (or deleted in
  change mode).  Duplicates are never renamed.
- Filesystem errors are reported per file; the run continues.
"""

from __future__ import annotations

import datetime
import os
import uuid
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Callable, Dict, List, Optional, Tuple, TypedDict

from . import console
from .normalizer import is_audio_file, match_file_name


class FileEntry(TypedDict, total=False):
    source: str
    target: str
    action: str
    reason: str
    size: int


LogCallback = Callable[[str, str], None]

DuplicateKey = Tuple[str, int]


def get_music_files(folder: Path) -> List[str]:
    """Return names of the audio files directly inside ``folder``, sorted."""
    names: List[str] = []
    for entry in Path(folder).iterdir():
        if entry.is_file() and is_audio_file(entry.name):
            names.append(entry.name)
    return sorted(names)


def _same_file(a: Path, b: Path) -> bool:
    try:
        return os.path.samefile(a, b)
    except OSError:
        return False


@dataclass
class RenameEngine:
    """Track Renamer engine responsible for renames and duplicate removal."""

    folder: Path
    apply_changes: bool = False
    verbose: bool = False
    color: bool = True

    current_mode: str = field(init=False, default="dry-run")

    def __post_init__(self) -> None:
        self.folder = Path(self.folder)
        self.current_mode = "change" if self.apply_changes else "dry-run"

    # ------------------------------------------------------------------
    # Discovery
    def scan(self) -> List[str]:
        """List the audio files in the target folder."""
        if not self.folder.is_dir():
            raise NotADirectoryError(f"Not a folder: {self.folder}")
        return get_music_files(self.folder)

    # ------------------------------------------------------------------
    # Filesystem operations
    def _rename(self, src: Path, dst: Path) -> None:
        os.rename(src, dst)

    def _delete(self, path: Path) -> None:
        path.unlink()

    def _file_size(self, path: Path) -> int:
        return path.stat().st_size

    def _canonical_keys(self, files: List[str]) -> Dict[DuplicateKey, str]:
        """Map duplicate keys of already correctly named files to their names.

        These files are the keepers of their key, so a misnamed copy that
        sorts before them is the one treated as the duplicate.
        """
        keys: Dict[DuplicateKey, str] = {}
        for name in files:
            if match_file_name(name).normalized != name:
                continue
            try:
                size = self._file_size(self.folder / name)
            except OSError:
                # Reported by the main pass.
                continue
            keys[(name, size)] = name
        return keys

    def run(
        self,
        log_callback: Optional[LogCallback] = None,
        log_to_console: bool = True,
    ) -> Dict[str, Any]:
        """Execute a run.

        Hard rules (tests):
        - dry-run: MUST NOT rename or delete anything
        - change: renames and deletes, never overwrites another file

        Returns a report dict each run.
        """
        mode = self.current_mode
        apply = mode == "change"

        def _emit_log(msg: str, level: str = console.INFO) -> None:
            if log_to_console:
                console.emit(msg, level, color=self.color)
            if log_callback is not None:
                try:
                    log_callback(msg, level)
                except Exception:
                    pass

        files = self.scan()

        run_id = datetime.datetime.now().strftime("%Y%m%d_%H%M%S_") + uuid.uuid4().hex[:8]
        report: Dict[str, Any] = {
            "run_id": run_id,
            "mode": mode,
            "timestamp": datetime.datetime.now().isoformat(),
            "folder": str(self.folder.resolve()),
            "files_processed": 0,
            "files_correct": 0,
            "rename_proposed": 0,
            "files_renamed": 0,
            "duplicates_found": 0,
            "duplicates_deleted": 0,
            "skipped_unmatched": 0,
            "skipped_existing": 0,
            "failed": 0,
            "proposed_changes": [],
            "files": [],
        }
        proposed_changes: List[Tuple[str, str]] = []
        seen_keys = self._canonical_keys(files)

        if self.verbose:
            _emit_log(f"Track Renamer run_id={run_id} mode={mode}")
            _emit_log(f"Folder: {self.folder} files={len(files)}")

        for name in files:
            entry = self._process_file(name, apply, seen_keys, proposed_changes, report, _emit_log)
            report["files"].append(entry)
            report["files_processed"] += 1

        report["proposed_changes"] = [list(change) for change in proposed_changes]

        if not apply and not proposed_changes and report["duplicates_found"] == 0:
            _emit_log("No proposed changes.")

        _emit_log(
            f"Done. processed={report['files_processed']} "
            f"correct={report['files_correct']} "
            f"renamed={report['files_renamed']}/{report['rename_proposed']} "
            f"duplicates={report['duplicates_found']} deleted={report['duplicates_deleted']} "
            f"unmatched={report['skipped_unmatched']} skipped={report['skipped_existing']} "
            f"failed={report['failed']}"
        )
        return report

    def _process_file(
        self,
        name: str,
        apply: bool,
        seen_keys: Dict[DuplicateKey, str],
        proposed_changes: List[Tuple[str, str]],
        report: Dict[str, Any],
        emit: Callable[..., None],
    ) -> FileEntry:
        src = self.folder / name
        entry: FileEntry = {"source": name, "target": "", "action": "NONE", "reason": ""}

        match = match_file_name(name)
        if not match.usable:
            entry["action"] = "UNMATCHED"
            entry["reason"] = f"only matched rule {match.rule}" if match.matched else "no rule matched"
            report["skipped_unmatched"] += 1
            if self.verbose:
                emit(f"UNMATCHED:   {name} ({entry['reason']})")
            return entry

        new_name = match.normalized
        entry["target"] = new_name

        try:
            size = self._file_size(src)
        except OSError as e:
            entry["action"] = "FAILED"
            entry["reason"] = f"stat failed: {e}"
            report["failed"] += 1
            emit(f"Failed to read size: {name}: {e}", console.ERROR)
            return entry
        entry["size"] = size

        key: DuplicateKey = (new_name, size)
        keeper = seen_keys.get(key)
        if keeper is not None and keeper != name:
            report["duplicates_found"] += 1
            entry["reason"] = f"same name and size as {keeper} ({size} bytes)"
            if not apply:
                entry["action"] = "DUPLICATE"
                emit(f"Proposed duplicate for deletion: {name}", console.ERROR)
                return entry
            try:
                self._delete(src)
            except OSError as e:
                entry["action"] = "FAILED"
                entry["reason"] += f"; delete failed: {e}"
                report["failed"] += 1
                emit(f"Failed to delete duplicate: {name}: {e}", console.ERROR)
                return entry
            entry["action"] = "DELETED"
            report["duplicates_deleted"] += 1
            emit(f"Deleted duplicate: {name}", console.ERROR)
            return entry
        seen_keys.setdefault(key, name)

        if new_name == name:
            entry["action"] = "CORRECT"
            report["files_correct"] += 1
            emit(f"CORRECT:     {name}", console.SUCCESS)
            return entry

        proposed_changes.append((name, new_name))
        report["rename_proposed"] += 1
        if not apply:
            entry["action"] = "RENAME"
            emit(f"RENAME :     {name} -> {new_name}", console.WARN)
            return entry

        dst = self.folder / new_name
        if dst.exists() and not _same_file(src, dst):
            entry["action"] = "SKIPPED"
            entry["reason"] = "destination exists"
            report["skipped_existing"] += 1
            emit(f"Skipped (destination exists): {name} -> {new_name}", console.ERROR)
            return entry
        try:
            self._rename(src, dst)
        except OSError as e:
            entry["action"] = "FAILED"
            entry["reason"] = f"rename failed: {e}"
            report["failed"] += 1
            emit(f"Failed to rename: {name} -> {new_name}: {e}", console.ERROR)
            return entry
        entry["action"] = "RENAMED"
        report["files_renamed"] += 1
        emit(f"Renamed: {name} -> {new_name}", console.WARN)
        return entry
