"""CLI tests for nvkeydoc."""

import json

from typer.testing import CliRunner

from nvkeydoc import __version__
from nvkeydoc.commands.keybindings import format_keybinding
from nvkeydoc.keybindings import Keybinding, KeybindingDoc
from nvkeydoc.main import app


runner = CliRunner()


def invoke_list(initvim_file, definitions_dir, *args):
    return runner.invoke(
        app, ["list", "--initvim", str(initvim_file), "--definitions", str(definitions_dir), *args]
    )


class TestCLIBasics:
    """Test basic CLI functionality."""

    def test_cli_help(self):
        result = runner.invoke(app, ["--help"])

        assert result.exit_code == 0
        assert "list" in result.output

    def test_version(self):
        result = runner.invoke(app, ["version"])

        assert result.exit_code == 0
        assert __version__ in result.output

    def test_verbose_and_quiet_are_exclusive(self, initvim_file, definitions_dir):
        result = runner.invoke(
            app, ["--verbose", "--quiet", "list", "--initvim", str(initvim_file)]
        )

        assert result.exit_code == 1


class TestListCommand:
    """Test the list command end to end."""

    def test_lists_documented_bindings(self, initvim_file, definitions_dir):
        result = invoke_list(initvim_file, definitions_dir)

        assert result.exit_code == 0
        output_lines = result.stdout.splitlines()
        assert output_lines == [
            f"{'gj':<15} Jump to the next match and center it",
            f"{'<C-n>':<15} (telescope) Move to the next result",
            f"{'<C-c>':<15} (telescope) Close telescope",
            f"{'<C-t>':<15} Toggle the file tree",
        ]

    def test_all_includes_undocumented(self, initvim_file, definitions_dir):
        result = invoke_list(initvim_file, definitions_dir, "--all")

        assert result.exit_code == 0
        assert f"{'x':<15} y" in result.stdout.splitlines()
        assert f"{'<leader>w':<15} :w<CR>" in result.stdout.splitlines()

    def test_filter_by_root(self, initvim_file, definitions_dir):
        result = invoke_list(initvim_file, definitions_dir, "--root", "telescope")

        assert result.exit_code == 0
        assert len(result.stdout.splitlines()) == 2
        assert all("(telescope)" in line for line in result.stdout.splitlines())

    def test_filter_plain_vim_bindings(self, initvim_file, definitions_dir):
        result = invoke_list(initvim_file, definitions_dir, "--root", "vim")

        assert result.exit_code == 0
        assert "(telescope)" not in result.stdout
        assert "gj" in result.stdout

    def test_examples(self, initvim_file, definitions_dir):
        result = invoke_list(initvim_file, definitions_dir, "--examples", "--root", "telescope")

        assert result.exit_code == 0
        assert "    <Down>" in result.stdout.splitlines()

    def test_json_output(self, initvim_file, definitions_dir):
        result = invoke_list(initvim_file, definitions_dir, "--json", "--all")

        assert result.exit_code == 0
        data = json.loads(result.stdout)
        assert len(data) == 6
        assert data[3] == {
            "root": "telescope",
            "keymap": "<C-n>",
            "command": "defaults.mappings.i.actions_move_selection_next",
            "doc": {"description": "Move to the next result", "examples": ["<C-n>", "<Down>"]},
        }

    def test_settings_from_environment(self, initvim_file, definitions_dir, monkeypatch):
        monkeypatch.setenv("NVKEYDOC_INITVIM", str(initvim_file))
        monkeypatch.setenv("NVKEYDOC_DEFINITIONS", str(definitions_dir))

        result = runner.invoke(app, ["list", "--json"])

        assert result.exit_code == 0
        assert len(json.loads(result.stdout)) == 4

    def test_missing_definitions_only_degrades(self, initvim_file, tmp_path):
        result = invoke_list(initvim_file, tmp_path / "nowhere")

        assert result.exit_code == 0
        assert "Jump to the next match" in result.stdout
        assert "(telescope)" not in result.stdout

    def test_broken_definition_file(self, initvim_file, definitions_dir):
        (definitions_dir / "telescope.json").write_text("{ broken")

        result = invoke_list(initvim_file, definitions_dir)

        assert result.exit_code == 0
        assert "(telescope)" not in result.stdout


class TestListErrors:
    """Test fatal errors."""

    def test_structural_error_exits(self, tmp_path, definitions_dir):
        initvim = tmp_path / "bad.vim"
        initvim.write_text("nnoremap a b\nEOF\n")

        result = invoke_list(initvim, definitions_dir)

        assert result.exit_code == 1
        assert "line 2" in result.output

    def test_missing_initvim_exits(self, tmp_path, definitions_dir):
        result = invoke_list(tmp_path / "missing.vim", definitions_dir)

        assert result.exit_code == 1
        assert "missing.vim" in result.output


class TestFormatting:
    """Test single listing lines."""

    def test_plain_binding(self):
        keybinding = Keybinding("", "gj", ":Next<CR>", KeybindingDoc("Next match"))

        assert format_keybinding(keybinding).plain == f"{'gj':<15} Next match"

    def test_plugin_binding(self):
        keybinding = Keybinding("telescope", "<C-c>", "a.b", KeybindingDoc("Close"))

        assert format_keybinding(keybinding).plain == f"{'<C-c>':<15} (telescope) Close"

    def test_long_keymap_is_not_truncated(self):
        keybinding = Keybinding("", "<leader><leader>ff", "x", KeybindingDoc("Find"))

        assert format_keybinding(keybinding).plain == "<leader><leader>ff Find"

    def test_markup_in_keymap_is_literal(self):
        keybinding = Keybinding("", "[c", "x", KeybindingDoc("[bold]Prev[/bold]"))

        assert format_keybinding(keybinding).plain.endswith("[bold]Prev[/bold]")

    def test_undocumented_binding_shows_dimmed_command(self):
        keybinding = Keybinding("", "x", "y")

        line = format_keybinding(keybinding)

        assert line.plain == f"{'x':<15} y"
        assert [span.style for span in line.spans] == ["dim"]
