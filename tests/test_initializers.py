"""Tests for componentry.initializers -- loading and capability probing."""

from __future__ import annotations

import sys
import types
from pathlib import Path

import pytest

from componentry.exceptions import MalformedInitializerError
from componentry.initializers import (
    MODULE_PREFIX,
    initializer_module_name,
    load_initializer,
    resolve_handle,
    unload_initializers,
)
from componentry.models import ComponentDescriptor, ComponentrySettings
from componentry.scanner import scan_components


@pytest.fixture
def settings() -> ComponentrySettings:
    return ComponentrySettings()


def _descriptor(path: Path, name: str, relative: str | None = None) -> ComponentDescriptor:
    return ComponentDescriptor(
        name=name,
        path=path,
        relative_path=relative or path.name,
        sub_component="::" in name,
    )


class TestModuleName:
    def test_nested_name(self, tmp_path: Path) -> None:
        descriptor = _descriptor(tmp_path, "Clients::Billing", "clients/_components/billing")
        assert (
            initializer_module_name(descriptor)
            == f"{MODULE_PREFIX}.clients._components.billing.initialize"
        )

    def test_distinct_directories_get_distinct_modules(self, tmp_path: Path) -> None:
        (tmp_path / "api_v2").mkdir()
        (tmp_path / "apiv2").mkdir()

        descriptors = scan_components(tmp_path)

        assert [d.name for d in descriptors] == ["ApiV2", "Apiv2"]
        assert [initializer_module_name(d) for d in descriptors] == [
            f"{MODULE_PREFIX}.api_v2.initialize",
            f"{MODULE_PREFIX}.apiv2.initialize",
        ]

    def test_both_initializers_stay_loaded(
        self, tmp_path: Path, settings: ComponentrySettings, make_component
    ) -> None:
        make_component(tmp_path, "api_v2", record="ApiV2")
        make_component(tmp_path, "apiv2", record="Apiv2")

        handles = [load_initializer(d, settings) for d in scan_components(tmp_path)]

        assert [sys.modules[h.module_name].Initialize for h in handles] == [
            h.target for h in handles
        ]


class TestResolveHandle:
    def test_probes_capabilities(self) -> None:
        module = types.ModuleType("fake")

        class Initialize:
            @staticmethod
            def init(app):
                pass

        module.Initialize = Initialize
        handle = resolve_handle("Fake", module, "Initialize")

        assert handle.target is Initialize
        assert handle.has_init is True
        assert handle.has_ready is False

    def test_non_callable_hook_is_not_a_capability(self) -> None:
        module = types.ModuleType("fake")
        module.Initialize = types.SimpleNamespace(init="not callable")

        handle = resolve_handle("Fake", module, "Initialize")
        assert handle.has_init is False

    def test_missing_handle_names_the_expected_attribute(self) -> None:
        module = types.ModuleType("fake")
        with pytest.raises(MalformedInitializerError, match="'Initialize'"):
            resolve_handle("Fake", module, "Initialize")

    def test_handle_skips_missing_hook(self) -> None:
        module = types.ModuleType("fake")
        module.Initialize = types.SimpleNamespace()
        handle = resolve_handle("Fake", module, "Initialize")

        # No capability, nothing to call.
        handle.init(object())
        handle.ready(object())


class TestLoadInitializer:
    def test_no_initializer_file(self, tmp_path: Path, settings: ComponentrySettings) -> None:
        assert load_initializer(_descriptor(tmp_path, "Reports"), settings) is None

    def test_loads_and_registers_module(
        self, tmp_path: Path, settings: ComponentrySettings, make_component
    ) -> None:
        path = make_component(tmp_path, "clients", record="Clients")
        handle = load_initializer(_descriptor(path, "Clients"), settings)

        assert handle is not None
        assert handle.component == "Clients"
        assert handle.has_init and handle.has_ready
        assert handle.module_name in sys.modules

    def test_hooks_receive_the_app(
        self, tmp_path: Path, settings: ComponentrySettings, make_component, application
    ) -> None:
        path = make_component(tmp_path, "clients", record="Clients")
        handle = load_initializer(_descriptor(path, "Clients"), settings)

        handle.init(application)
        assert application.config.x["init_calls"] == ["Clients"]

    def test_file_without_handle(
        self, tmp_path: Path, settings: ComponentrySettings, make_component
    ) -> None:
        path = make_component(tmp_path, "broken", source="VALUE = 1\n")

        with pytest.raises(MalformedInitializerError, match="Initialize"):
            load_initializer(_descriptor(path, "Broken"), settings)

    def test_custom_handle_name(self, tmp_path: Path, make_component) -> None:
        settings = ComponentrySettings(initializer_handle="Setup")
        path = make_component(
            tmp_path, "clients", source="class Setup:\n    ready = staticmethod(lambda app: None)\n"
        )

        handle = load_initializer(_descriptor(path, "Clients"), settings)
        assert handle.has_ready and not handle.has_init

    def test_syntax_error_propagates_and_leaves_no_module(
        self, tmp_path: Path, settings: ComponentrySettings, make_component
    ) -> None:
        path = make_component(tmp_path, "broken", source="def oops(:\n")
        descriptor = _descriptor(path, "Broken")

        with pytest.raises(SyntaxError):
            load_initializer(descriptor, settings)
        assert initializer_module_name(descriptor) not in sys.modules

    def test_import_error_propagates(
        self, tmp_path: Path, settings: ComponentrySettings, make_component
    ) -> None:
        path = make_component(tmp_path, "broken", source="import does_not_exist_anywhere\n")

        with pytest.raises(ImportError):
            load_initializer(_descriptor(path, "Broken"), settings)


class TestUnloadInitializers:
    def test_removes_only_initializer_modules(
        self, tmp_path: Path, settings: ComponentrySettings, make_component
    ) -> None:
        path = make_component(tmp_path, "clients", record="Clients")
        handle = load_initializer(_descriptor(path, "Clients"), settings)

        removed = unload_initializers()

        assert removed == [handle.module_name]
        assert handle.module_name not in sys.modules
        assert "componentry" in sys.modules
