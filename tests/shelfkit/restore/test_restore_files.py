import logging
import os
import pathlib

import pytest

from shelfkit.restore.core import RestoreStatus, restore_files
from shelfkit.restore.policy import CallbackPolicy, ResolutionCancelled, StaticPolicy
from shelfkit.restore.snapshot import DirectorySnapshot


def read(path):
    with open(path, "rb") as f:
        return f.read()


def test_identical_file_is_not_rewritten(roots, put):
    workspace, shelf = roots
    target = put(workspace, "a.txt", "same\n")
    put(shelf, "a.txt", "same\n")
    before = os.stat(target).st_mtime_ns
    policy = StaticPolicy("apply")

    summary = restore_files("X", str(shelf), str(workspace), ["a.txt"], policy=policy)

    assert summary.as_counts() == {
        "restored": 0, "identical": 1, "skipped": 0, "conflict_marked": 0, "conflicts": 0, "errors": 0,
    }
    assert os.stat(target).st_mtime_ns == before
    assert policy.calls == []


def test_force_override_overwrites_and_counts_conflict(roots, put):
    workspace, shelf = roots
    target = put(workspace, "a.txt", "old\n")
    put(shelf, "a.txt", "new\n")

    summary = restore_files("X", str(shelf), str(workspace), ["a.txt"], force_override=True)

    assert read(target) == b"new\n"
    assert summary.restored == 1
    assert summary.conflicts == 1
    assert summary.results[0].had_conflict is True


def test_missing_destination_is_written_verbatim(roots, put):
    workspace, shelf = roots
    payload = b"\x00\xffbinary\r\n"
    put(shelf, "deep/nested/dir/blob.bin", payload)

    summary = restore_files("X", str(shelf), str(workspace), ["deep/nested/dir/blob.bin"], policy=StaticPolicy("keep"))

    assert read(workspace / "deep" / "nested" / "dir" / "blob.bin") == payload
    assert summary.restored == 1
    assert summary.conflicts == 0


def test_missing_snapshot_is_an_error_and_batch_continues(roots, put):
    workspace, shelf = roots
    put(shelf, "b.txt", "B")

    summary = restore_files("X", str(shelf), str(workspace), ["missing.txt", "b.txt"], policy=StaticPolicy("keep"))

    assert summary.errors == 1
    assert summary.restored == 1
    assert "missing.txt" in summary.failures
    assert "Shelf file not found" in summary.failures["missing.txt"]
    assert [r.path for r in summary.results] == ["missing.txt", "b.txt"]
    assert [r.status for r in summary.results] == [RestoreStatus.ERROR, RestoreStatus.RESTORED]


def test_apply_overwrites(roots, put):
    workspace, shelf = roots
    target = put(workspace, "a.txt", "mine\n")
    put(shelf, "a.txt", "theirs\n")

    summary = restore_files("X", str(shelf), str(workspace), ["a.txt"], policy=StaticPolicy("apply"))

    assert read(target) == b"theirs\n"
    assert (summary.restored, summary.conflicts) == (1, 1)


def test_keep_leaves_file_alone(roots, put):
    workspace, shelf = roots
    target = put(workspace, "a.txt", "mine\n")
    put(shelf, "a.txt", "theirs\n")

    summary = restore_files("X", str(shelf), str(workspace), ["a.txt"], policy=StaticPolicy("keep"))

    assert read(target) == b"mine\n"
    assert (summary.skipped, summary.conflicts) == (1, 1)


def test_mark_writes_line_conflict_markers(roots, put):
    workspace, shelf = roots
    target = put(workspace, "notes.txt", "a\nb\n")
    put(shelf, "notes.txt", "a\nc\n")

    summary = restore_files("X", str(shelf), str(workspace), ["notes.txt"], policy=StaticPolicy("mark"))

    text = read(target).decode("utf-8")
    assert text.startswith("a\n")
    assert "<<<<<<< Current Workspace\nb\n=======\nc\n>>>>>>> Shelf: X\n" in text
    assert (summary.conflict_marked, summary.conflicts) == (1, 1)


def test_mark_writes_json_conflict_markers(roots, put):
    workspace, shelf = roots
    target = put(workspace, "settings.json", '{"x":1}')
    put(shelf, "settings.json", '{"x":2}')

    summary = restore_files("X", str(shelf), str(workspace), ["settings.json"], policy=StaticPolicy("mark"))

    text = read(target).decode("utf-8")
    assert text.startswith("{\n") and text.endswith("}")
    assert text.count("<<<<<<< Current Workspace") == 1
    assert '"x": <<<<<<< Current Workspace\n    1\n  =======\n    2\n' in text
    assert summary.conflict_marked == 1


def test_policy_receives_both_file_locations(roots, put):
    workspace, shelf = roots
    put(workspace, "src/a.py", "1\n")
    put(shelf, "src/a.py", "2\n")
    policy = StaticPolicy("keep")

    restore_files("Label", str(shelf), str(workspace), ["src/a.py"], policy=policy)

    assert len(policy.calls) == 1
    label, rel, current_path, shelf_path = policy.calls[0]
    assert (label, rel) == ("Label", "src/a.py")
    assert read(current_path) == b"1\n"
    assert read(shelf_path) == b"2\n"


@pytest.mark.parametrize("answer", [None, "", "whatever"])
def test_unusable_answers_mean_keep(roots, put, answer):
    workspace, shelf = roots
    put(workspace, "a.txt", "mine")
    put(shelf, "a.txt", "theirs")

    summary = restore_files("X", str(shelf), str(workspace), ["a.txt"], policy=CallbackPolicy(lambda *a: answer))

    assert summary.skipped == 1
    assert summary.errors == 0


def test_cancelled_prompt_is_a_skip_not_an_error(roots, put):
    workspace, shelf = roots
    put(workspace, "a.txt", "mine")
    put(shelf, "a.txt", "theirs")

    def dismiss(*_args):
        raise ResolutionCancelled("a.txt")

    summary = restore_files("X", str(shelf), str(workspace), ["a.txt"], policy=CallbackPolicy(dismiss))

    assert (summary.skipped, summary.errors, summary.conflicts) == (1, 0, 1)


def test_policy_failure_is_contained_per_file(roots, put):
    workspace, shelf = roots
    put(workspace, "a.txt", "mine")
    put(shelf, "a.txt", "theirs")
    put(shelf, "b.txt", "fresh")

    def broken(*_args):
        raise RuntimeError("viewer crashed")

    summary = restore_files("X", str(shelf), str(workspace), ["a.txt", "b.txt"], policy=CallbackPolicy(broken))

    assert summary.errors == 1
    assert summary.failures["a.txt"] == "viewer crashed"
    assert summary.conflicts == 1
    assert summary.restored == 1


def test_policy_required_without_force_override(roots):
    workspace, shelf = roots
    with pytest.raises(ValueError):
        restore_files("X", str(shelf), str(workspace), ["a.txt"])


def test_path_escaping_workspace_is_rejected(roots, put, tmp_path):
    workspace, shelf = roots
    put(tmp_path, "evil.txt", "payload")

    summary = restore_files("X", str(shelf), str(workspace), ["../evil.txt"], force_override=True)

    assert summary.errors == 1
    assert "traversal" in summary.failures["../evil.txt"]


def test_mark_refuses_non_utf8_content(roots, put):
    workspace, shelf = roots
    target = put(workspace, "img.dat", b"\xff\xfe\x00")
    put(shelf, "img.dat", b"\xff\x00\x00")

    summary = restore_files("X", str(shelf), str(workspace), ["img.dat"], policy=StaticPolicy("mark"))

    assert summary.errors == 1
    assert summary.conflicts == 1
    assert summary.results[0].had_conflict is True
    assert read(target) == b"\xff\xfe\x00"


def test_accepts_snapshot_object_and_windows_separators(roots, put):
    workspace, shelf = roots
    put(shelf, "dir/a.txt", "A")

    summary = restore_files("X", DirectorySnapshot(str(shelf)), str(workspace), ["dir\\a.txt"], force_override=True)

    assert summary.restored == 1
    assert read(workspace / "dir" / "a.txt") == b"A"


def test_failures_are_logged_when_enabled(roots, caplog):
    workspace, shelf = roots
    with caplog.at_level(logging.WARNING):
        restore_files("X", str(shelf), str(workspace), ["nope.txt"], force_override=True, log=True)
    assert any("nope.txt" in rec.getMessage() for rec in caplog.records)


def test_silent_by_default(roots, caplog):
    workspace, shelf = roots
    with caplog.at_level(logging.DEBUG):
        restore_files("X", str(shelf), str(workspace), ["nope.txt"], force_override=True)
    assert not any("nope.txt" in rec.getMessage() for rec in caplog.records)


def test_failed_write_after_difference_still_counts_conflict(roots, put, monkeypatch):
    workspace, shelf = roots
    target = put(workspace, "a.txt", "mine\n")
    put(shelf, "a.txt", "theirs\n")

    def no_space(*_args):
        raise OSError("disk full")

    monkeypatch.setattr("shelfkit.restore.core.write_bytes_atomic", no_space)
    summary = restore_files("X", str(shelf), str(workspace), ["a.txt"], force_override=True)

    assert (summary.errors, summary.conflicts, summary.forced) == (1, 1, 1)
    assert summary.failures["a.txt"] == "disk full"
    assert read(target) == b"mine\n"


def test_missing_snapshot_is_not_a_conflict(roots):
    workspace, shelf = roots

    summary = restore_files("X", str(shelf), str(workspace), ["gone.txt"], policy=StaticPolicy("apply"))

    assert (summary.errors, summary.conflicts) == (1, 0)


def test_bad_path_entries_do_not_abort_the_batch(roots, put):
    workspace, shelf = roots
    put(shelf, "dir/a.txt", "A")
    put(shelf, "b.txt", "B")

    summary = restore_files(
        "X", str(shelf), str(workspace), [123, pathlib.PurePosixPath("dir/a.txt"), "b.txt"], force_override=True
    )

    assert [r.status for r in summary.results] == [RestoreStatus.ERROR, RestoreStatus.RESTORED, RestoreStatus.RESTORED]
    assert "123" in summary.failures
    assert read(workspace / "dir" / "a.txt") == b"A"
