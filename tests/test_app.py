from __future__ import annotations

import logging
from pathlib import Path

import mdeditor.app as app_mod
import mdeditor.main as main_mod


class FakeQApplication:
    org_name: str | None = None
    app_name: str | None = None

    def __init__(self, argv: list[str]) -> None:
        self.argv = list(argv)
        self.exec_called = 0

    @classmethod
    def setOrganizationName(cls, name: str) -> None:
        cls.org_name = name

    @classmethod
    def setApplicationName(cls, name: str) -> None:
        cls.app_name = name

    def exec(self) -> int:
        self.exec_called += 1
        return 0


class FakeWindow:
    def __init__(self) -> None:
        self.shown = False

    def show(self) -> None:
        self.shown = True


class FakeContainer:
    def __init__(self) -> None:
        self.window = FakeWindow()
        self.build_args = None

    def build_main_window(self, *, start_path=None, app_title: str = "Markdown Editor"):
        self.build_args = {"start_path": start_path, "app_title": app_title}
        return self.window


def _patch(monkeypatch) -> FakeContainer:
    monkeypatch.setattr(app_mod, "QApplication", FakeQApplication)
    container = FakeContainer()
    monkeypatch.setattr(app_mod.Container, "default", staticmethod(lambda: container))
    return container


def test_run_app_opens_start_path(monkeypatch, tmp_path: Path) -> None:
    container = _patch(monkeypatch)
    doc = tmp_path / "doc.md"

    rc = app_mod.run_app(["mdeditor", str(doc)])

    assert rc == 0
    assert container.window.shown is True
    assert container.build_args == {"start_path": doc, "app_title": app_mod.APP_NAME}
    assert FakeQApplication.org_name == app_mod.APP_ORG
    assert FakeQApplication.app_name == app_mod.APP_NAME


def test_run_app_without_arguments(monkeypatch) -> None:
    container = _patch(monkeypatch)
    assert app_mod.run_app(["mdeditor"]) == 0
    assert container.build_args["start_path"] is None


def test_main_passes_sys_argv(monkeypatch) -> None:
    seen = {}

    def fake_run_app(argv):
        seen["argv"] = list(argv)
        return 3

    monkeypatch.setattr(main_mod, "run_app", fake_run_app)
    monkeypatch.setattr(main_mod.sys, "argv", ["mdeditor", "x.md"])
    assert main_mod.main() == 3
    assert seen["argv"] == ["mdeditor", "x.md"]


def test_debug_env_enables_debug_logging(monkeypatch) -> None:
    captured = {}
    monkeypatch.setattr(logging, "basicConfig", lambda **kw: captured.update(kw))

    monkeypatch.setenv("MDEDITOR_DEBUG", "1")
    app_mod.configure_logging()
    assert captured["level"] == logging.DEBUG

    monkeypatch.delenv("MDEDITOR_DEBUG")
    app_mod.configure_logging()
    assert captured["level"] == logging.INFO
