# ABOUTME: Tests for CLI commands run in-process through main()
# ABOUTME: Covers dispatch, exit codes, config handling, and init-config
import pytest

from sitehooks.cli import EXIT_CONFIG_ERROR, EXIT_FATAL, EXIT_SUCCESS, main
from sitehooks.config import CONFIG_FILENAME, HooksConfig, load_config


class TestRunCommand:
    """Tests for the run command."""

    def test_post_install_scaffolds(self, project_root, web_root, assets_dir, capsys):
        (assets_dir / "settings.php").write_text("<?php\n")

        code = main(["-C", str(project_root), "run", "post-install-cmd"])

        out = capsys.readouterr().out
        assert code == EXIT_SUCCESS
        assert (web_root / "sites" / "default" / "settings.php").exists()
        assert "Create default greencko settings.php file" in out
        assert "create_required_files:" in out

    def test_unknown_event(self, project_root, capsys):
        code = main(["-C", str(project_root), "run", "post-nothing"])

        assert code == EXIT_CONFIG_ERROR
        assert "Unknown event 'post-nothing'" in capsys.readouterr().out

    def test_pre_install_too_old_exits(self, project_root, capsys):
        with pytest.raises(SystemExit) as exc_info:
            main(["-C", str(project_root), "run", "pre-install-cmd", "--tool-version", "0.9.0"])

        assert exc_info.value.code == 1
        assert "requires Composer version 1.0.0" in capsys.readouterr().err

    def test_uses_project_config(self, project_root, capsys):
        (project_root / CONFIG_FILENAME).write_text('web_root = "docroot"\n')

        code = main(["-C", str(project_root), "run", "post-install-cmd"])

        assert code == EXIT_SUCCESS
        assert (project_root / "docroot" / "modules" / ".gitkeep").exists()

    def test_bad_config(self, project_root, capsys):
        (project_root / CONFIG_FILENAME).write_text('webroot = "docroot"\n')

        code = main(["-C", str(project_root), "run", "clean"])

        assert code == EXIT_CONFIG_ERROR
        assert "Unknown config key" in capsys.readouterr().out

    def test_missing_explicit_config(self, project_root, capsys):
        code = main(["-C", str(project_root), "--config", str(project_root / "nope.toml"), "run", "clean"])

        assert code == EXIT_CONFIG_ERROR
        assert "Config file not found" in capsys.readouterr().out

    def test_missing_file_inside_hook_is_fatal(self, tmp_path, project_root, web_root, assets_dir, capsys):
        """Test that a hook failing on a missing path is fatal, not a config error."""
        (assets_dir / "settings.php").write_text("<?php\n")
        sites_default = web_root / "sites" / "default"
        sites_default.mkdir(parents=True)
        (sites_default / "settings.php").symlink_to(tmp_path / "gone" / "settings.php")

        code = main(["-C", str(project_root), "scaffold"])

        assert code == EXIT_FATAL
        assert "Fatal error" in capsys.readouterr().out


class TestHookCommands:
    """Tests for the single-hook commands."""

    def test_check_version_passes(self, project_root, capsys):
        code = main(["-C", str(project_root), "check-version", "--tool-version", "2.7.1"])

        captured = capsys.readouterr()
        assert code == EXIT_SUCCESS
        assert captured.err == ""

    def test_check_version_env(self, project_root, monkeypatch, capsys):
        """Test that $COMPOSER_VERSION is used when no flag is given."""
        monkeypatch.setenv("COMPOSER_VERSION", "0.5.0")

        with pytest.raises(SystemExit):
            main(["-C", str(project_root), "check-version"])

    def test_check_version_branch_alias_env(self, project_root, monkeypatch, capsys):
        monkeypatch.setenv("COMPOSER_VERSION", "e" * 40)
        monkeypatch.setenv("COMPOSER_BRANCH_ALIAS_VERSION", "2.1.x-dev")

        assert main(["-C", str(project_root), "check-version"]) == EXIT_SUCCESS
        assert capsys.readouterr().err == ""

    def test_clean_dry_run(self, project_root, web_root, capsys):
        (web_root / "mod" / ".git").mkdir(parents=True)

        code = main(["-C", str(project_root), "clean", "--dry-run"])

        assert code == EXIT_SUCCESS
        assert (web_root / "mod" / ".git").exists()
        assert "Would remove" in capsys.readouterr().out

    def test_clean(self, project_root, web_root, capsys):
        (web_root / "mod" / ".git").mkdir(parents=True)

        assert main(["-C", str(project_root), "clean"]) == EXIT_SUCCESS
        assert not (web_root / "mod" / ".git").exists()

    def test_sub_profile(self, project_root, web_root, capsys):
        manifest = web_root / "profiles" / "varbase" / "varbase.info.yml"
        manifest.parent.mkdir(parents=True)
        manifest.write_text("name: Varbase\ndistribution:\n  name: Varbase\n")

        assert main(["-C", str(project_root), "sub-profile"]) == EXIT_SUCCESS
        assert manifest.read_text() == "name: Varbase\n"

    def test_malformed_manifest_is_fatal(self, project_root, web_root, capsys):
        manifest = web_root / "profiles" / "varbase" / "varbase.info.yml"
        manifest.parent.mkdir(parents=True)
        manifest.write_text("name: [unclosed\n")

        assert main(["-C", str(project_root), "sub-profile"]) == EXIT_FATAL
        assert "Fatal error" in capsys.readouterr().out


class TestMiscCommands:
    """Tests for events, init-config and the no-command case."""

    def test_events_lists_registry(self, capsys):
        assert main(["events"]) == EXIT_SUCCESS

        out = capsys.readouterr().out
        assert "post-drupal-scaffold-cmd" in out
        assert "remove_vcs_directories" in out

    def test_init_config_writes_defaults(self, project_root, capsys):
        assert main(["-C", str(project_root), "init-config"]) == EXIT_SUCCESS

        assert load_config(project_root / CONFIG_FILENAME) == HooksConfig()

    def test_init_config_refuses_overwrite(self, project_root, capsys):
        (project_root / CONFIG_FILENAME).write_text('web_root = "docroot"\n')

        assert main(["-C", str(project_root), "init-config"]) == EXIT_CONFIG_ERROR
        assert main(["-C", str(project_root), "init-config", "--force"]) == EXIT_SUCCESS
        assert load_config(project_root / CONFIG_FILENAME).web_root == "web"

    def test_no_command_prints_help(self, capsys):
        assert main([]) == EXIT_SUCCESS
        assert "usage" in capsys.readouterr().out.lower()
