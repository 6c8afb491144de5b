"""Built-in runtime shape of the bundled NodeGui/Qt GUI runtime.

The files the runtime needs are fixed by its per-OS packaging layout,
not by user policy. Each platform maps to one accept list and one reject
list; the prune engine always appends the matching layer after the user
rules.
"""

from dataclasses import dataclass

from shipgui.models.platform import Platform
from shipgui.prune.classifier import PatternLayer

_QODE = "node_modules/@nodegui/qode"
_NODEGUI = "node_modules/@nodegui/nodegui"
_MINIQT = f"{_NODEGUI}/miniqt/**"
_CORE_ADDON = f"{_NODEGUI}/build/Release/nodegui_core.node"


@dataclass(frozen=True, slots=True)
class RuntimeShape:
    """Accept and reject globs describing one platform's runtime files.

    Attributes:
        accept: Globs of files the runtime requires.
        reject: Globs excluded even inside accepted directories.
    """

    accept: tuple[str, ...]
    reject: tuple[str, ...]


# JavaScript side of the runtime, identical on every platform
COMMON_ACCEPT: tuple[str, ...] = (
    f"{_QODE}/package.json",
    f"{_NODEGUI}/package.json",
    f"{_NODEGUI}/dist/**/*.js",
    "node_modules/postcss/**/*",
    "node_modules/picocolors/picocolors.js",
    "node_modules/picocolors/README.md",
    "node_modules/picocolors/LICENSE",
    "node_modules/picocolors/package.json",
    "node_modules/source-map/**/*",
    "node_modules/postcss-nodegui-autoprefixer/**/*",
    "node_modules/cuid/index.js",
    "node_modules/cuid/lib/*.js",
    "node_modules/cuid/LICENSE",
    "node_modules/cuid/package.json",
    "node_modules/memoize-one/README.md",
    "node_modules/memoize-one/LICENSE",
    "node_modules/memoize-one/package.json",
    "node_modules/memoize-one/dist/memoize-one.cjs.js",
)

COMMON_REJECT: tuple[str, ...] = (
    f"{_NODEGUI}/dist/demo.js",
    f"{_NODEGUI}/dist/demo.d.ts",
    f"{_NODEGUI}/dist/examples/**/*",
    "node_modules/postcss-nodegui-autoprefixer/CHANGELOG.md",
    "node_modules/postcss-nodegui-autoprefixer/dist/index.d.ts",
    "node_modules/postcss-nodegui-autoprefixer/dist/__tests__/*",
)

LINUX_LIBRARIES: tuple[str, ...] = (
    "libQt6Core.so*",
    "libQt6DBus.so*",
    "libQt6EglFSDeviceIntegration.so*",
    "libQt6EglFsKmsSupport.so*",
    "libQt6Gui.so*",
    "libQt6Network.so*",
    "libQt6PrintSupport.so*",
    "libQt6OpenGL.so*",
    "libQt6OpenGLWidgets.so*",
    "libQt6Sql.so*",
    "libQt6Svg.so*",
    "libQt6SvgWidgets.so*",
    "libQt6Widgets.so*",
    "libQt6XcbQpa.so*",
    "libicudata.so*",
    "libicui18n.so*",
    "libicule.so*",
    "libicutu.so*",
    "libicuuc.so*",
    "libicuio.so*",
    "libiculx.so*",
    # Plugins
    "libqconnmanbearer.so",
    "libqgenericbearer.so",
    "libqnmbearer.so",
    "libqsvgicon.so",
    "libqgif.so",
    "libqico.so",
    "libqjpeg.so",
    "libqsvg.so",
    "libcomposeplatforminputcontextplugin.so",
    "libibusplatforminputcontextplugin.so",
    "libqxcb.so",
    "libcupsprintersupport.so",
    "libqgtk3.so",
    "libqxdgdesktopportal.so",
    "libqxcb-egl-integration.so",
    "libqxcb-glx-integration.so",
)

WINDOWS_LIBRARIES: tuple[str, ...] = (
    "D3Dcompiler_47.dll",
    "libEGL.dll",
    "libGLESv2.dll",
    "Qt6Core.dll",
    "Qt6Gui.dll",
    "Qt6OpenGL.dll",
    "Qt6OpenGLWidgets.dll",
    "Qt6Svg.dll",
    "Qt6SvgWidgets.dll",
    "Qt6Widgets.dll",
    # Plugins
    "qsvgicon.dll",
    "qwindows.dll",
    "qwindowsvistastyle.dll",
    "qgif.dll",
    "qico.dll",
    "qjpeg.dll",
    "qsvg.dll",
)

MACOS_FRAMEWORKS: tuple[str, ...] = (
    "QtConcurrent",
    "QtCore",
    "QtDBus",
    "QtGui",
    "QtOpenGL",
    "QtOpenGLWidgets",
    "QtPrintSupport",
    "QtSvg",
    "QtSvgWidgets",
    "QtWidgets",
)

MACOS_PLUGINS: tuple[str, ...] = (
    "plugins/iconengines/libqsvgicon.dylib",
    "plugins/imageformats/*.dylib",
    "plugins/platforms/*.dylib",
    "plugins/platformthemes/libqxdgdesktopportal.dylib",
    "plugins/printsupport/libcocoaprintersupport.dylib",
    "plugins/styles/libqmacstyle.dylib",
)

RUNTIME_SHAPES: dict[Platform, RuntimeShape] = {
    Platform.LINUX: RuntimeShape(
        accept=(
            *COMMON_ACCEPT,
            f"{_QODE}/binaries/*",
            _CORE_ADDON,
            *(f"{_MINIQT}/{lib}" for lib in LINUX_LIBRARIES),
        ),
        reject=COMMON_REJECT,
    ),
    Platform.WINDOWS: RuntimeShape(
        accept=(
            *COMMON_ACCEPT,
            f"{_QODE}/binaries/*.exe",
            _CORE_ADDON,
            *(f"{_MINIQT}/{lib}" for lib in WINDOWS_LIBRARIES),
        ),
        reject=COMMON_REJECT,
    ),
    Platform.MACOS: RuntimeShape(
        accept=(
            *COMMON_ACCEPT,
            f"{_QODE}/binaries/*",
            _CORE_ADDON,
            *(f"{_MINIQT}/{fw}.framework/**/*" for fw in MACOS_FRAMEWORKS),
            *(f"{_MINIQT}/{plugin}" for plugin in MACOS_PLUGINS),
        ),
        reject=(
            *COMMON_REJECT,
            # Development headers inside otherwise kept framework bundles
            *(f"{_MINIQT}/{fw}.framework/Headers" for fw in MACOS_FRAMEWORKS),
            *(f"{_MINIQT}/{fw}.framework/**/Headers/**/*" for fw in MACOS_FRAMEWORKS),
        ),
    ),
}


def runtime_shape(platform: Platform) -> RuntimeShape:
    """Look up the runtime shape of a platform."""
    return RUNTIME_SHAPES[platform]


def runtime_layer(platform: Platform) -> PatternLayer:
    """Build the built-in pattern layer for a platform.

    Args:
        platform: Target platform of the run.

    Returns:
        PatternLayer holding the platform's runtime accept/reject globs.
    """
    shape = runtime_shape(platform)
    return PatternLayer.from_globs(shape.accept, shape.reject, name=f"runtime:{platform.value}")
