"""
CLI tests for stackrepo using a temporary --home.

Tests focus on observable behavior (command output, exit codes, file
effects). Index URLs are file:// URLs so nothing touches the network.
"""

import json
import shutil
import tempfile
import unittest
from pathlib import Path

from click.testing import CliRunner

from stackrepo.cli import cli
from stackrepo.exit_codes import CONFIG_ERROR, NETWORK_ERROR, USAGE_ERROR
from stackrepo.infra import RepositoryFileStore


class CLITestBase(unittest.TestCase):
    """Base class for CLI tests with common setup/teardown."""

    def setUp(self):
        self.temp_dir = Path(tempfile.mkdtemp())
        self.home = self.temp_dir / "home"
        self.runner = CliRunner()

    def tearDown(self):
        shutil.rmtree(self.temp_dir, ignore_errors=True)

    def invoke(self, *args):
        return self.runner.invoke(cli, ["--home", str(self.home), *args])

    def write_index(self, filename: str, content: str) -> str:
        path = self.temp_dir / filename
        path.write_text(content)
        return path.resolve().as_uri()

    def repo_names(self):
        store = RepositoryFileStore(self.home / "repository" / "repository.yaml")
        return [entry.name for entry in store.load().repositories]

    def init_with_local_hub(self):
        """Initialise home, then point it at a local index instead of the public hub."""
        result = self.invoke("init")
        self.assertEqual(result.exit_code, 0, result.output)
        url = self.write_index("hub.yaml", 'projects:\n  bee:\n  - version: "0.1"\n    description: x\n')
        self.assertEqual(self.invoke("repo", "remove", "appsodyhub").exit_code, 0)
        result = self.invoke("repo", "add", "appsodyhub", url)
        self.assertEqual(result.exit_code, 0, result.output)
        return url


class TestInit(CLITestBase):

    def test_init_creates_home(self):
        result = self.invoke("init")
        self.assertEqual(result.exit_code, 0, result.output)
        self.assertTrue((self.home / "repository" / "repository.yaml").is_file())
        self.assertEqual(self.repo_names(), ["appsodyhub"])

    def test_init_twice(self):
        self.invoke("init")
        result = self.invoke("init")
        self.assertEqual(result.exit_code, 0)
        self.assertIn("Nothing to do", result.output)

    def test_dry_run_init(self):
        result = self.runner.invoke(cli, ["--home", str(self.home), "--dry-run", "init"])
        self.assertEqual(result.exit_code, 0)
        self.assertFalse(self.home.exists())

    def test_init_with_empty_config_sections(self):
        self.home.mkdir(parents=True)
        (self.home / "config.yaml").write_text("logging:\ndefault_repository:\n")

        result = self.invoke("init")

        self.assertEqual(result.exit_code, 0, result.output)
        self.assertEqual(self.repo_names(), ["appsodyhub"])


class TestRepoCommands(CLITestBase):

    def test_repo_list_without_init(self):
        result = self.invoke("repo", "list")
        self.assertEqual(result.exit_code, CONFIG_ERROR)
        self.assertIn("Error:", result.output)
        self.assertIn("stackrepo init", result.output)

    def test_repo_list(self):
        self.invoke("init")
        result = self.invoke("repo", "list")
        self.assertEqual(result.exit_code, 0)
        self.assertIn("NAME", result.output)
        self.assertIn("appsodyhub", result.output)

    def test_repo_list_json(self):
        self.invoke("init")
        result = self.invoke("repo", "list", "--json")
        self.assertEqual(result.exit_code, 0)
        rows = [json.loads(line) for line in result.output.splitlines()]
        self.assertEqual(rows[0]["name"], "appsodyhub")

    def test_repo_add_verifies_index(self):
        self.invoke("init")
        url = self.write_index("extra.yaml", 'projects:\n  nodejs:\n  - version: "0.2.5"\n')

        result = self.invoke("repo", "add", "extra", url)

        self.assertEqual(result.exit_code, 0, result.output)
        self.assertEqual(self.repo_names(), ["appsodyhub", "extra"])

    def test_repo_add_unreachable_index(self):
        self.invoke("init")
        missing = (self.temp_dir / "missing.yaml").resolve().as_uri()

        result = self.invoke("repo", "add", "broken", missing)

        self.assertEqual(result.exit_code, NETWORK_ERROR)
        self.assertEqual(self.repo_names(), ["appsodyhub"])

    def test_repo_add_no_verify(self):
        self.invoke("init")
        result = self.invoke("repo", "add", "later", "https://example.invalid/index.yaml", "--no-verify")
        self.assertEqual(result.exit_code, 0, result.output)
        self.assertIn("later", self.repo_names())

    def test_repo_add_duplicate_name(self):
        self.invoke("init")
        result = self.invoke("repo", "add", "appsodyhub", "https://other/index.yaml", "--no-verify")
        self.assertEqual(result.exit_code, USAGE_ERROR)

    def test_repo_add_duplicate_url(self):
        url = self.init_with_local_hub()
        result = self.invoke("repo", "add", "copy", url)
        self.assertEqual(result.exit_code, USAGE_ERROR)
        self.assertEqual(self.repo_names(), ["appsodyhub"])

    def test_repo_add_dry_run(self):
        self.invoke("init")
        result = self.runner.invoke(cli, ["--home", str(self.home), "--dry-run",
                                          "repo", "add", "x", "https://x/index.yaml", "--no-verify"])
        self.assertEqual(result.exit_code, 0)
        self.assertEqual(self.repo_names(), ["appsodyhub"])

    def test_repo_remove(self):
        self.invoke("init")
        self.invoke("repo", "add", "a", "https://a/index.yaml", "--no-verify")
        self.invoke("repo", "add", "b", "https://b/index.yaml", "--no-verify")

        result = self.invoke("repo", "remove", "a")

        self.assertEqual(result.exit_code, 0)
        self.assertEqual(self.repo_names(), ["appsodyhub", "b"])

    def test_repo_remove_unknown(self):
        self.invoke("init")
        result = self.invoke("repo", "remove", "nope")
        self.assertEqual(result.exit_code, USAGE_ERROR)
        self.assertIn("Repository nope is not in the configured list", result.output)
        self.assertEqual(self.repo_names(), ["appsodyhub"])


class TestListCommand(CLITestBase):

    def test_list_stacks(self):
        self.init_with_local_hub()

        result = self.invoke("list")

        self.assertEqual(result.exit_code, 0, result.output)
        rows = [line.split() for line in result.output.splitlines()]
        self.assertEqual(rows[0], ["ID", "VERSION", "DESCRIPTION"])
        self.assertIn(["bee", "0.1", "x"], rows)

    def test_list_json(self):
        self.init_with_local_hub()
        result = self.invoke("list", "--json")
        self.assertEqual(result.exit_code, 0, result.output)
        row = json.loads(result.output.splitlines()[0])
        self.assertEqual(row["id"], "bee")
        self.assertEqual(row["versions"][0]["version"], "0.1")

    def test_list_fails_when_any_repository_fails(self):
        self.init_with_local_hub()
        missing = (self.temp_dir / "missing.yaml").resolve().as_uri()
        self.invoke("repo", "add", "gone", missing, "--no-verify")

        result = self.invoke("list")

        self.assertEqual(result.exit_code, NETWORK_ERROR)
        self.assertNotIn("bee", result.output)


class TestConfigCommand(CLITestBase):

    def test_show(self):
        result = self.invoke("config", "show")
        self.assertEqual(result.exit_code, 0)
        config = json.loads(result.output)
        self.assertEqual(config["home"], str(self.home))

    def test_show_path(self):
        result = self.invoke("config", "show", "--path")
        self.assertEqual(json.loads(result.output)["config_path"], str(self.home / "config.yaml"))


if __name__ == '__main__':
    unittest.main()
