"""Unit tests for the built-in runtime layers.

Tests for runtime_shape and runtime_layer.
"""

import pytest
from shipgui.models.platform import Platform
from shipgui.prune.runtime import RUNTIME_SHAPES, runtime_layer, runtime_shape

MINIQT = "node_modules/@nodegui/nodegui/miniqt/6.4.1"


class TestRuntimeShapes:
    """Tests for the per-platform runtime shapes."""

    def test_every_platform_has_a_shape(self) -> None:
        """All platforms are covered."""
        assert set(RUNTIME_SHAPES) == set(Platform)

    @pytest.mark.parametrize("platform", list(Platform))
    def test_shape_lookup(self, platform: Platform) -> None:
        """runtime_shape returns the table entry."""
        assert runtime_shape(platform) is RUNTIME_SHAPES[platform]

    @pytest.mark.parametrize("platform", list(Platform))
    def test_common_javascript_kept(self, platform: Platform) -> None:
        """The JavaScript runtime is kept on every platform."""
        layer = runtime_layer(platform)
        assert layer.keeps("node_modules/@nodegui/nodegui/dist/index.js")
        assert layer.keeps("node_modules/@nodegui/nodegui/build/Release/nodegui_core.node")

    @pytest.mark.parametrize("platform", list(Platform))
    def test_demo_files_rejected(self, platform: Platform) -> None:
        """Bundled demos are rejected even inside the kept dist tree."""
        layer = runtime_layer(platform)
        assert not layer.keeps("node_modules/@nodegui/nodegui/dist/demo.js")
        assert not layer.keeps("node_modules/@nodegui/nodegui/dist/examples/a/b.js")

    def test_linux_libraries(self) -> None:
        """Qt shared objects are kept on Linux only."""
        path = f"{MINIQT}/gcc_64/lib/libQt6Core.so.6"
        assert runtime_layer(Platform.LINUX).keeps(path)
        assert not runtime_layer(Platform.WINDOWS).keeps(path)

    def test_windows_libraries(self) -> None:
        """Qt DLLs and the qode executable are kept on Windows."""
        layer = runtime_layer(Platform.WINDOWS)
        assert layer.keeps(f"{MINIQT}/msvc2019_64/bin/Qt6Core.dll")
        assert layer.keeps("node_modules/@nodegui/qode/binaries/qode.exe")
        assert not layer.keeps("node_modules/@nodegui/qode/binaries/qode")

    def test_macos_frameworks_without_headers(self) -> None:
        """Framework binaries are kept, their headers are not."""
        layer = runtime_layer(Platform.MACOS)
        framework = f"{MINIQT}/macos/lib/QtCore.framework"
        assert layer.keeps(f"{framework}/Versions/A/QtCore")
        assert not layer.keeps(f"{framework}/Versions/A/Headers/qglobal.h")
        assert not layer.keeps(f"{framework}/Headers")

    def test_unrelated_files_not_kept(self) -> None:
        """Application files are left to user rules."""
        for platform in Platform:
            assert not runtime_layer(platform).keeps("src/index.js")

    def test_layer_name(self) -> None:
        """Runtime layers are labelled with their platform."""
        assert runtime_layer(Platform.LINUX).name == "runtime:linux"
