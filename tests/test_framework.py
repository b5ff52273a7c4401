"""End-to-end tests for componentry.framework.initialize against the reference host."""

from __future__ import annotations

import logging
from pathlib import Path

import pytest

from componentry import ComponentNotFoundError, initialize
from componentry.framework import INITIALIZER_NAME
from componentry.host import Application
from componentry.lifecycle import LifecycleState
from componentry.models import ComponentrySettings
from componentry.output import OutputManager


class TestDiscovery:
    def test_components(self, application: Application) -> None:
        framework = initialize(application)
        names = [c.name for c in framework.components()]
        assert names == ["Clients", "Clients::Billing", "Reports"]

    def test_component_modules(self, application: Application) -> None:
        framework = initialize(application)
        modules = framework.component_modules()
        assert [m.name for m in modules] == ["Clients", "Clients::Billing", "Reports"]
        assert modules[1].parent is modules[0]

    def test_component_module_by_name_unknown(self, application: Application) -> None:
        framework = initialize(application)
        with pytest.raises(ComponentNotFoundError):
            framework.component_module_by_name("Accounting")

    def test_reset_rescans(self, application: Application, make_component) -> None:
        framework = initialize(application)
        framework.components()
        make_component(application.root / "components", "accounting")

        assert "Accounting" not in [c.name for c in framework.components()]
        framework.reset()
        assert "Accounting" in [c.name for c in framework.components()]


class TestHostConfiguration:
    def test_autoloader_patterns(self, application: Application) -> None:
        initialize(application)

        assert application.autoloader.collapsed == ["components/*/_components"]
        assert application.autoloader.ignored == ["components/**/routes.py"]
        assert application.autoloader.is_collapsed("components/clients/_components")
        assert application.autoloader.is_ignored(
            application.root / "components" / "clients" / "routes.py"
        )

    def test_base_dir_in_autoload_and_eager_load(self, application: Application) -> None:
        initialize(application)
        base = str(application.root / "components")

        assert application.config.autoload_paths[0] == base
        assert application.config.eager_load_paths[0] == base

    def test_registers_lifecycle_callbacks(self, application: Application) -> None:
        initialize(application)

        assert application.initializer_names() == [INITIALIZER_NAME]
        assert application.config.paths["db/migrate"].entries

    def test_custom_base_dir(self, tmp_path: Path, make_component) -> None:
        make_component(tmp_path / "app" / "parts", "billing", record="Billing")
        application = Application(tmp_path)

        framework = initialize(application, settings=ComponentrySettings(base_dir="app/parts"))
        application.boot()

        assert [c.name for c in framework.components()] == ["Billing"]
        assert application.autoloader.collapsed == ["app/parts/*/_components"]
        assert application.config.x["ready_calls"] == ["Billing"]


class TestLifecycle:
    def test_nothing_runs_before_boot(self, application: Application) -> None:
        initialize(application)
        assert application.config.x == {}

    def test_boot_runs_init_then_ready(self, application: Application) -> None:
        framework = initialize(application)

        application.run_initializers()
        assert sorted(application.config.x["init_calls"]) == ["Clients", "Clients::Billing"]
        assert "ready_calls" not in application.config.x

        application.run_after_initialize()
        assert sorted(application.config.x["ready_calls"]) == ["Clients", "Clients::Billing"]
        assert set(framework.dispatcher.states().values()) == {LifecycleState.READY}

    def test_production_has_no_reload_hooks(self, application: Application) -> None:
        framework = initialize(application)
        assert framework.reload_coordinator is None

    def test_development_reload_cycle(self, app_root: Path) -> None:
        application = Application(app_root, env="development")
        framework = initialize(application)
        application.boot()

        application.reloader.reload()

        assert framework.reload_coordinator is not None
        assert framework.reload_coordinator.cycles == 1
        assert application.config.x["init_calls"] == [
            "Clients",
            "Clients::Billing",
            "Clients",
            "Clients::Billing",
        ]


class TestVerboseLogging:
    def test_quiet_by_default(
        self, application: Application, capsys: pytest.CaptureFixture[str]
    ) -> None:
        initialize(application)
        application.boot()
        assert "[CF init]" not in capsys.readouterr().err

    def test_uses_host_logger(self, app_root: Path, caplog: pytest.LogCaptureFixture) -> None:
        application = Application(app_root, logger=logging.getLogger("tests.app"))

        with caplog.at_level(logging.INFO, logger="tests.app"):
            initialize(application, verbose=True)
            application.boot()

        assert caplog.messages[0] == "[CF init] Components Initialization Started"
        assert "[CF init] Discovered Components: Clients, Clients::Billing, Reports" in caplog.messages
        assert caplog.messages[-1] == "[CF init] Components Initialization Done"

    def test_console_fallback(
        self,
        application: Application,
        plain_output: OutputManager,
        capsys: pytest.CaptureFixture[str],
    ) -> None:
        initialize(application, verbose=True)
        application.boot()

        err = capsys.readouterr().err
        assert "[CF init] Components Initialization Started" in err
        assert "[CF init] Initialize Components" in err
        assert "[CF init] Post-Initialize Components" in err
