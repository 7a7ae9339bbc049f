"""Tests for CommandRunner and the AWS / NuGet / desktop adapters."""

import os
import stat
import sys
import tempfile
import unittest
from pathlib import Path

sys.path.insert(0, str(Path(__file__).resolve().parent.parent))

from artifact_token.config import load_settings
from artifact_token.errors import ToolNotFoundError
from artifact_token.tools import (
    AwsIdentityClient,
    CodeArtifactTokenIssuer,
    CommandRunner,
    DesktopNotifier,
    NugetSourceStore,
)
from artifact_token.tools.desktop import ACCEPT_BUTTON, DECLINE_BUTTON
from artifact_token.tools.runner import NOT_FOUND_RETURNCODE
from artifact_token import prompt
from artifact_token.models import RefreshStatus
from artifact_token.refresh import RefreshOrchestrator
from tests.fakes import FakeIdentity, FakeRunner, FakeStore, RecordingNotifier, failed, ok


def _settings(**overrides):
    base = dict(
        profile="dev-profile",
        domain="dom",
        owner="123456789012",
        region="eu-west-2",
        source_name="dom/repo",
        extra_tool_dirs=(),
    )
    base.update(overrides)
    return load_settings(**base)


class TestCommandRunner(unittest.TestCase):
    def setUp(self):
        self.runner = CommandRunner(_settings())

    def test_captures_streams_separately(self):
        result = self.runner.run(
            [sys.executable, "-c", "import sys; print('out'); print('err', file=sys.stderr)"]
        )
        self.assertTrue(result.ok)
        self.assertEqual(result.output, "out")
        self.assertEqual(result.error, "err")

    def test_nonzero_exit(self):
        result = self.runner.run([sys.executable, "-c", "print('denied'); raise SystemExit(4)"])
        self.assertFalse(result.ok)
        self.assertEqual(result.returncode, 4)
        self.assertEqual(result.output, "denied")

    def test_missing_executable(self):
        result = self.runner.run(["definitely-not-a-real-tool-xyz", "--version"])
        self.assertEqual(result.returncode, NOT_FOUND_RETURNCODE)
        self.assertIn("definitely-not-a-real-tool-xyz", result.error)
        with self.assertRaises(ToolNotFoundError):
            self.runner.resolve("definitely-not-a-real-tool-xyz")

    def test_timeout(self):
        result = self.runner.run([sys.executable, "-c", "import time; time.sleep(10)"], timeout=0.5)
        self.assertTrue(result.timed_out)
        self.assertFalse(result.ok)

    def test_extra_env(self):
        result = self.runner.run(
            [sys.executable, "-c", "import os; print(os.environ['AWS_PROFILE'])"],
            extra_env={"AWS_PROFILE": "dev-profile"},
        )
        self.assertEqual(result.output, "dev-profile")

    def test_tool_dirs_prepended(self):
        runner = CommandRunner(_settings(extra_tool_dirs=(Path("/opt/tools"),)), env={"PATH": "/usr/bin"})
        self.assertTrue(runner.env["PATH"].startswith("/opt/tools"))
        self.assertTrue(runner.env["PATH"].endswith("/usr/bin"))


class TestAwsAdapters(unittest.TestCase):
    def test_probe_uses_profile(self):
        runner = FakeRunner()
        AwsIdentityClient(_settings(), runner).probe()
        call = runner.calls[0]
        self.assertEqual(call["args"], ["aws", "sts", "get-caller-identity"])
        self.assertEqual(call["extra_env"], {"AWS_PROFILE": "dev-profile"})

    def test_silent_login_skips_prompt(self):
        runner = FakeRunner()
        AwsIdentityClient(_settings(), runner).login(interactive=False)
        call = runner.calls[0]
        self.assertEqual(call["args"], ["saml2aws", "login", "-a", "dev-profile", "--skip-prompt"])
        self.assertFalse(call["interactive"])
        self.assertIsNotNone(call["timeout"])

    def test_interactive_login_has_no_timeout(self):
        runner = FakeRunner()
        AwsIdentityClient(_settings(), runner).login(interactive=True)
        call = runner.calls[0]
        self.assertNotIn("--skip-prompt", call["args"])
        self.assertTrue(call["interactive"])
        self.assertIsNone(call["timeout"])

    def test_fetch_token_arguments(self):
        runner = FakeRunner({"aws": ok("tok")})
        result = CodeArtifactTokenIssuer(_settings(), runner).fetch_token()
        self.assertEqual(result.output, "tok")
        args = runner.calls[0]["args"]
        self.assertEqual(args[:3], ["aws", "codeartifact", "get-authorization-token"])
        self.assertEqual(args[args.index("--domain") + 1], "dom")
        self.assertEqual(args[args.index("--domain-owner") + 1], "123456789012")
        self.assertEqual(args[args.index("--region") + 1], "eu-west-2")
        self.assertEqual(args[-4:], ["--query", "authorizationToken", "--output", "text"])


class TestNugetSourceStore(unittest.TestCase):
    def test_update_arguments_and_redaction(self):
        runner = FakeRunner()
        result = NugetSourceStore(_settings(), runner).update("s3cret")
        args = runner.calls[0]["args"]
        self.assertEqual(args[:5], ["dotnet", "nuget", "update", "source", "dom/repo"])
        self.assertEqual(args[args.index("--password") + 1], "s3cret")
        self.assertIn("--store-password-in-clear-text", args)
        self.assertNotIn("s3cret", result.args)

    def test_failure_passes_through(self):
        runner = FakeRunner({"dotnet": failed("error: source not found")})
        result = NugetSourceStore(_settings(), runner).update("tok")
        self.assertFalse(result.ok)
        self.assertEqual(result.detail, "error: source not found")


class TestDesktopNotifier(unittest.TestCase):
    def test_macos_notification(self):
        runner = FakeRunner()
        DesktopNotifier(runner, platform="darwin").notify("Refresh Failed", 'Say "hi"')
        args = runner.calls[0]["args"]
        self.assertEqual(args[:2], ["osascript", "-e"])
        self.assertIn('subtitle "Refresh Failed"', args[2])
        self.assertIn('\\"hi\\"', args[2])

    def test_linux_notification(self):
        runner = FakeRunner()
        DesktopNotifier(runner, platform="linux").notify("Refresh Successful", "done")
        self.assertEqual(runner.calls[0]["args"][0], "notify-send")

    def test_notification_failure_is_ignored(self):
        runner = FakeRunner({"notify-send": failed("no display")})
        DesktopNotifier(runner, platform="linux").notify("x", "y")

    def test_macos_dialog_accepted_opens_terminal(self):
        runner = FakeRunner({"osascript": ok(ACCEPT_BUTTON)})
        accepted = DesktopNotifier(runner, platform="darwin").ask_and_launch(["artifact-token", "login"])
        self.assertTrue(accepted)
        self.assertEqual(len(runner.calls), 2)
        self.assertIn('tell application "Terminal"', runner.calls[1]["args"][2])
        self.assertIn("artifact-token login", runner.calls[1]["args"][2])

    def test_macos_dialog_declined(self):
        runner = FakeRunner({"osascript": ok(DECLINE_BUTTON)})
        self.assertFalse(DesktopNotifier(runner, platform="darwin").ask_and_launch(["artifact-token", "login"]))
        self.assertEqual(len(runner.calls), 1)

    def test_linux_dialog_accepted(self):
        runner = FakeRunner()
        self.assertTrue(DesktopNotifier(runner, platform="linux").ask_and_launch(["artifact-token", "login"]))
        self.assertEqual(runner.calls[0]["args"][:2], ["zenity", "--question"])
        self.assertEqual(runner.calls[1]["args"], ["x-terminal-emulator", "-e", "artifact-token", "login"])

    def test_linux_dialog_without_display(self):
        runner = FakeRunner({"zenity": failed("cannot open display", 127)})
        self.assertFalse(DesktopNotifier(runner, platform="linux").ask_and_launch(["artifact-token", "login"]))


def write_stub(directory: Path, name: str, body: str) -> Path:
    """Executable shell script standing in for an external tool."""
    path = directory / name
    path.write_text("#!/bin/sh\n" + body + "\n", encoding="utf-8")
    path.chmod(path.stat().st_mode | stat.S_IXUSR | stat.S_IXGRP | stat.S_IXOTH)
    return path


@unittest.skipUnless(os.name == "posix", "shell stubs need POSIX")
class TestStubbedAwsCli(unittest.TestCase):
    """Real CommandRunner against a stub `aws` that writes to both streams."""

    def setUp(self):
        self._tmp = tempfile.TemporaryDirectory()
        self.addCleanup(self._tmp.cleanup)
        self.bin_dir = Path(self._tmp.name)
        self.settings = _settings(extra_tool_dirs=(self.bin_dir,))

    def _refresh(self, aws_body: str):
        write_stub(self.bin_dir, "aws", aws_body)
        runner = CommandRunner(self.settings)
        store = FakeStore()
        orchestrator = RefreshOrchestrator(
            FakeIdentity(), CodeArtifactTokenIssuer(self.settings, runner), store, RecordingNotifier()
        )
        return orchestrator.refresh(), store

    def test_stderr_warning_is_not_stored_as_token(self):
        result, store = self._refresh('echo "WARNING: deprecated python" >&2\necho TOKEN123')
        self.assertTrue(result.ok)
        self.assertEqual(store.tokens, ["TOKEN123"])

    def test_failure_detail_comes_from_stderr(self):
        result, store = self._refresh('echo "An error occurred (AccessDenied)" >&2\nexit 254')
        self.assertEqual(result.status, RefreshStatus.TOKEN_FETCH_FAILED)
        self.assertEqual(result.detail, "An error occurred (AccessDenied)")
        self.assertEqual(store.tokens, [])

    def test_stderr_only_success_is_empty_token(self):
        result, store = self._refresh('echo "WARNING: nothing on stdout" >&2')
        self.assertEqual(result.status, RefreshStatus.TOKEN_FETCH_FAILED)
        self.assertEqual(store.tokens, [])


class TestSpawnDetached(unittest.TestCase):
    def test_returns_without_waiting(self):
        runner = CommandRunner(_settings())
        self.assertTrue(runner.spawn_detached([sys.executable, "-c", "import time; time.sleep(5)"]))

    def test_missing_executable(self):
        runner = CommandRunner(_settings())
        self.assertFalse(runner.spawn_detached(["/nonexistent/dialog-binary"]))


class TestPromptLogin(unittest.TestCase):
    def test_dialog_runs_in_detached_process(self):
        runner = FakeRunner()
        started = DesktopNotifier(runner, platform="linux").prompt_login(["artifact-token", "login"])
        self.assertTrue(started)
        self.assertEqual(runner.calls, [])
        self.assertEqual(
            runner.spawned,
            [[sys.executable, "-m", "artifact_token.prompt", "linux", "artifact-token", "login"]],
        )

    def test_prompt_entry_needs_platform_and_command(self):
        self.assertEqual(prompt.main(["linux"]), 2)


if __name__ == "__main__":
    unittest.main()
