"""Tests for the bindery command line."""

import os

import pytest

from bindery.cli.app import app
from bindery.project.store import DescriptorStore


def _ids(root):
    return DescriptorStore().load(root).ids()


class TestInitAndStatus:
    """Tests for init and status."""

    def test_init_creates_binder(self, cli_runner, tmp_path):
        result = cli_runner.invoke(app, ["init", str(tmp_path), "--mode", "markdown"])
        assert result.exit_code == 0
        assert (tmp_path / ".binder.yaml").exists()
        assert DescriptorStore().descriptor(tmp_path).default_mode == "markdown"

    def test_init_twice_fails(self, cli_runner, binder_root):
        result = cli_runner.invoke(app, ["init", str(binder_root)])
        assert result.exit_code == 12

    def test_status(self, cli_runner, binder_root):
        result = cli_runner.invoke(app, ["status", "--dir", str(binder_root)])
        assert result.exit_code == 0
        assert "Total: 3" in result.output

    def test_no_binder(self, cli_runner, tmp_path):
        result = cli_runner.invoke(app, ["status", "--dir", str(tmp_path)])
        assert result.exit_code == 11
        assert "No binder found" in result.output


class TestSidebarCommand:
    """Tests for the sidebar listing."""

    def test_plain_listing_with_mark(self, cli_runner, binder_root):
        result = cli_runner.invoke(app, ["sidebar", "--dir", str(binder_root), "--plain", "-m", "2"])
        assert result.exit_code == 0
        assert result.output.splitlines() == ["   a.txt", ">  b.txt", "   c.txt"]

    def test_table_listing(self, cli_runner, binder_root):
        result = cli_runner.invoke(app, ["sidebar", "--dir", str(binder_root)])
        assert result.exit_code == 0
        assert "c.txt" in result.output


class TestItemCommands:
    """Tests for add, remove, rename, relocate, tag and untag."""

    def test_add_to_existing_binder(self, cli_runner, binder_root):
        (binder_root / "d.txt").write_text("Dee")
        result = cli_runner.invoke(app, ["add", "--dir", str(binder_root), str(binder_root / "d.txt")])
        assert result.exit_code == 0
        assert _ids(binder_root) == ["a.txt", "b.txt", "c.txt", "d.txt"]

    def test_add_at_position_with_id(self, cli_runner, binder_root):
        result = cli_runner.invoke(
            app,
            ["add", "--dir", str(binder_root), "--at", "1", "--id", "prologue", str(binder_root / "p.txt")],
        )
        assert result.exit_code == 0
        assert _ids(binder_root)[0] == "prologue"

    def test_add_creates_binder_after_confirmation(self, cli_runner, tmp_path):
        (tmp_path / "one.txt").write_text("1")
        result = cli_runner.invoke(
            app, ["add", "--dir", str(tmp_path), str(tmp_path / "one.txt")], input="y\n"
        )
        assert result.exit_code == 0
        assert _ids(tmp_path) == ["one.txt"]

    def test_add_declined_creates_nothing(self, cli_runner, tmp_path):
        result = cli_runner.invoke(
            app, ["add", "--dir", str(tmp_path), str(tmp_path / "one.txt")], input="n\n"
        )
        assert result.exit_code == 0
        assert not (tmp_path / ".binder.yaml").exists()

    def test_add_duplicate_fails(self, cli_runner, binder_root):
        result = cli_runner.invoke(app, ["add", "--dir", str(binder_root), str(binder_root / "a.txt")])
        assert result.exit_code == 22

    def test_add_duplicate_among_several_adds_nothing(self, cli_runner, binder_root):
        """A clash anywhere in the batch is reported before any insert."""
        before = (binder_root / ".binder.yaml").read_text()
        result = cli_runner.invoke(
            app,
            ["add", "--dir", str(binder_root), str(binder_root / "new.txt"), str(binder_root / "a.txt")],
        )
        assert result.exit_code == 22
        assert "Added" not in result.output
        assert (binder_root / ".binder.yaml").read_text() == before

    def test_add_at_zero_rejected(self, cli_runner, binder_root):
        result = cli_runner.invoke(
            app, ["add", "--dir", str(binder_root), "--at", "0", str(binder_root / "new.txt")]
        )
        assert result.exit_code == 2
        assert _ids(binder_root) == ["a.txt", "b.txt", "c.txt"]

    def test_remove(self, cli_runner, binder_root):
        result = cli_runner.invoke(app, ["remove", "--dir", str(binder_root), "b.txt"])
        assert result.exit_code == 0
        assert _ids(binder_root) == ["a.txt", "c.txt"]
        assert (binder_root / "b.txt").exists()

    def test_remove_unknown(self, cli_runner, binder_root):
        result = cli_runner.invoke(app, ["remove", "--dir", str(binder_root), "nope"])
        assert result.exit_code == 21

    def test_rename(self, cli_runner, binder_root):
        result = cli_runner.invoke(app, ["rename", "--dir", str(binder_root), "a.txt", "opening"])
        assert result.exit_code == 0
        assert _ids(binder_root) == ["opening", "b.txt", "c.txt"]

    def test_relocate(self, cli_runner, binder_root):
        (binder_root / "sub").mkdir()
        result = cli_runner.invoke(
            app, ["relocate", "--dir", str(binder_root), "a.txt", str(binder_root / "sub" / "a.txt")]
        )
        assert result.exit_code == 0
        assert DescriptorStore().load(binder_root).get_item("a.txt").filename == "sub/a.txt"

    def test_tag_and_untag(self, cli_runner, binder_root):
        cli_runner.invoke(app, ["tag", "--dir", str(binder_root), "a.txt", "draft", "act-1"])
        assert DescriptorStore().load(binder_root).get_item("a.txt").tags == {"draft", "act-1"}

        result = cli_runner.invoke(app, ["untag", "--dir", str(binder_root), "a.txt", "draft"])
        assert result.exit_code == 0
        assert DescriptorStore().load(binder_root).get_item("a.txt").tags == {"act-1"}


class TestOrderCommands:
    """Tests for move, up, down and next."""

    def test_up(self, cli_runner, binder_root):
        result = cli_runner.invoke(app, ["up", "--dir", str(binder_root), "b.txt"])
        assert result.exit_code == 0
        assert _ids(binder_root) == ["b.txt", "a.txt", "c.txt"]

    def test_down(self, cli_runner, binder_root):
        result = cli_runner.invoke(app, ["down", "--dir", str(binder_root), "a.txt"])
        assert result.exit_code == 0
        assert _ids(binder_root) == ["b.txt", "a.txt", "c.txt"]

    def test_move_with_negative_delta(self, cli_runner, binder_root):
        result = cli_runner.invoke(app, ["move", "--dir", str(binder_root), "c.txt", "--", "-2"])
        assert result.exit_code == 0
        assert _ids(binder_root) == ["c.txt", "b.txt", "a.txt"]

    def test_boundary_is_informational(self, cli_runner, binder_root):
        """Moving past the top reports it, exits 0 and writes nothing."""
        before = (binder_root / ".binder.yaml").read_text()
        result = cli_runner.invoke(app, ["up", "--dir", str(binder_root), "a.txt"])
        assert result.exit_code == 0
        assert "Cannot move" in result.output
        assert (binder_root / ".binder.yaml").read_text() == before

    def test_next(self, cli_runner, binder_root):
        result = cli_runner.invoke(app, ["next", "--dir", str(binder_root), "a.txt"])
        assert result.exit_code == 0
        assert result.output == "b.txt\tb.txt\n"

    def test_next_at_end(self, cli_runner, binder_root):
        result = cli_runner.invoke(app, ["next", "--dir", str(binder_root), "c.txt"])
        assert result.exit_code == 0
        assert "end of the binder" in result.output

    def test_next_wraps(self, cli_runner, binder_root):
        result = cli_runner.invoke(app, ["next", "--dir", str(binder_root), "--wrap", "c.txt"])
        assert result.exit_code == 0
        assert result.output.startswith("a.txt")


class TestContentCommands:
    """Tests for notes and multiview."""

    def test_notes_set_and_show(self, cli_runner, binder_root):
        result = cli_runner.invoke(app, ["notes", "--dir", str(binder_root), "b.txt", "--set", "Cut this"])
        assert result.exit_code == 0
        assert "Saved notes for b.txt" in result.output
        assert DescriptorStore().load(binder_root).get_property("b.txt", "notes") == "Cut this"

        shown = cli_runner.invoke(app, ["notes", "--dir", str(binder_root), "b.txt"])
        assert "Cut this" in shown.output

    def test_notes_unchanged(self, cli_runner, binder_root):
        result = cli_runner.invoke(app, ["notes", "--dir", str(binder_root), "a.txt", "--set", ""])
        assert result.exit_code == 0
        assert "No changes" in result.output

    def test_notes_unknown_item(self, cli_runner, binder_root):
        result = cli_runner.invoke(app, ["notes", "--dir", str(binder_root), "nope"])
        assert result.exit_code == 21

    def test_multiview_to_stdout(self, cli_runner, binder_root):
        result = cli_runner.invoke(app, ["multiview", "--dir", str(binder_root), "a.txt", "c.txt"])
        assert result.exit_code == 0
        assert result.output == "Hello\n\nWorld\n\n"

    def test_multiview_by_tag_to_file(self, cli_runner, binder_root, tmp_path):
        cli_runner.invoke(app, ["tag", "--dir", str(binder_root), "c.txt", "draft"])
        cli_runner.invoke(app, ["tag", "--dir", str(binder_root), "a.txt", "draft"])
        out = tmp_path / "draft.txt"

        result = cli_runner.invoke(
            app,
            ["multiview", "--dir", str(binder_root), "--tag", "draft", "--separator", "\\n", "-o", str(out)],
        )
        assert result.exit_code == 0
        assert out.read_text() == "Hello\nWorld\n"

    def test_multiview_missing_file(self, cli_runner, binder_root):
        (binder_root / "b.txt").unlink()
        result = cli_runner.invoke(app, ["multiview", "--dir", str(binder_root)])
        assert result.exit_code == 30


def _set_notes(root, item_id, notes):
    store = DescriptorStore()
    structure = store.load(root)
    structure.set_property(item_id, "notes", notes)
    store.save(structure)


class TestNotesEditor:
    """Tests for editing notes through $EDITOR."""

    def test_unchanged_notes_with_final_newline(self, cli_runner, binder_root, monkeypatch):
        """Saving the editor without edits commits nothing, even for notes ending in a newline."""
        _set_notes(binder_root, "b.txt", "Keep this\n")
        monkeypatch.setattr("bindery.cli.notes_cmd.click.edit", lambda text, **kwargs: text)

        result = cli_runner.invoke(app, ["notes", "--dir", str(binder_root), "b.txt", "--edit"])

        assert result.exit_code == 0
        assert "No changes" in result.output
        assert DescriptorStore().load(binder_root).get_property("b.txt", "notes") == "Keep this\n"

    def test_edited_notes_are_saved(self, cli_runner, binder_root, monkeypatch):
        """The newline the editor appends is dropped; the rest is kept as typed."""
        monkeypatch.setattr(
            "bindery.cli.notes_cmd.click.edit", lambda text, **kwargs: "Open with the storm\n"
        )

        result = cli_runner.invoke(app, ["notes", "--dir", str(binder_root), "a.txt", "--edit"])

        assert result.exit_code == 0
        assert "Saved notes for a.txt" in result.output
        assert DescriptorStore().load(binder_root).get_property("a.txt", "notes") == "Open with the storm"

    def test_editor_closed_without_saving(self, cli_runner, binder_root, monkeypatch):
        monkeypatch.setattr("bindery.cli.notes_cmd.click.edit", lambda text, **kwargs: None)

        result = cli_runner.invoke(app, ["notes", "--dir", str(binder_root), "a.txt", "--edit"])

        assert result.exit_code == 0
        assert "No changes" in result.output

    @pytest.mark.skipif(os.name == "nt", reason="needs the POSIX 'true' command")
    def test_real_editor_command(self, cli_runner, binder_root, monkeypatch):
        """An editor that leaves the file untouched reports no changes."""
        monkeypatch.delenv("VISUAL", raising=False)
        monkeypatch.setenv("EDITOR", "true")

        result = cli_runner.invoke(app, ["notes", "--dir", str(binder_root), "b.txt", "--edit"])

        assert result.exit_code == 0
        assert "No changes" in result.output
