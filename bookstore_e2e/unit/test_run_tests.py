import subprocess

import run_tests
from run_tests import TestRunner, build_parser


def test_unit_suite_command_skips_browser_options():
    runner = TestRunner(suite="unit", tags=["P0", "smoke"], parallel=4)

    cmd = runner._build_pytest_command()

    assert cmd[1:4] == ["-m", "pytest", "bookstore_e2e/unit"]
    assert cmd[cmd.index("-m", 3) + 1] == "P0 or smoke"
    assert cmd[cmd.index("-n") + 1] == "4"
    assert "--run-ui" not in cmd


def test_ui_suite_command_passes_browser_options():
    runner = TestRunner(suite="ui", browser="firefox", headless=False, allure_report=False)

    cmd = runner._build_pytest_command()

    assert "--run-ui" in cmd
    assert "--ui-browser=firefox" in cmd
    assert "--ui-headed" in cmd
    assert "--alluredir" not in cmd


def test_allure_report_overwrites_fixed_directory(monkeypatch, tmp_path):
    calls = []
    monkeypatch.setattr(run_tests.subprocess, "run", lambda cmd, check: calls.append(cmd))
    runner = TestRunner(suite="unit")
    runner.reports_dir = tmp_path
    runner.allure_results = tmp_path / "allure-results"
    runner.allure_report_dir = tmp_path / "allure-report"

    runner._generate_allure_report()

    assert calls == [[
        "allure", "generate", str(tmp_path / "allure-results"),
        "-o", str(tmp_path / "allure-report"), "--clean",
    ]]
    assert list(tmp_path.iterdir()) == []


def test_allure_report_tolerates_missing_cli(monkeypatch, tmp_path):
    def missing_cli(cmd, check):
        raise FileNotFoundError("allure")

    monkeypatch.setattr(run_tests.subprocess, "run", missing_cli)
    runner = TestRunner(suite="unit")
    runner.allure_report_dir = tmp_path / "allure-report"

    runner._generate_allure_report()

    assert not runner.allure_report_dir.exists()


def test_allure_report_logs_cli_failure(monkeypatch, tmp_path):
    def failing_cli(cmd, check):
        raise subprocess.CalledProcessError(1, cmd)

    monkeypatch.setattr(run_tests.subprocess, "run", failing_cli)
    runner = TestRunner(suite="unit")
    runner.allure_report_dir = tmp_path / "allure-report"

    runner._generate_allure_report()


def test_parser_defaults():
    args = build_parser().parse_args([])

    assert args.suite == "all"
    assert args.parallel == 1
    assert args.browser == "chromium"
    assert not args.no_headless
